import pytest
from pydantic import ValidationError as PydanticValidationError

from portfolio_api.api.schemas import (
    AnalyticsEventPayload,
    BlogPostPayload,
    ContactPayload,
    ProfilePayload,
    ProjectPayload,
    RetainerPayload,
    SocialsPayload,
)
from portfolio_api.core.text import parse_integer, parse_string_array, sanitize_string, to_slug
from portfolio_api.db.mappers import map_profile, parse_json_array, parse_json_object
from portfolio_api.db.models import SiteProfileRow
from portfolio_api.db.seed_data import SEED_PROFILE
from portfolio_api.errors import ValidationError


def test_sanitizers():
    assert sanitize_string("  hello  ", 3) == "hel"
    assert sanitize_string(42, 10) == ""
    assert parse_string_array("React, , Vite ,") == ["React", "Vite"]
    assert parse_string_array(["a", 1, " ", "b"], max_items=1) == ["a"]
    assert parse_string_array(None) == []
    assert to_slug("  Hello, World!  ") == "hello-world"
    assert parse_integer("7.9") == 7
    assert parse_integer("x", 3) == 3
    assert parse_integer(True, 3) == 3


def test_json_helpers_degrade_gracefully():
    assert parse_json_array('["a", " b ", 3, ""]') == ["a", "b"]
    assert parse_json_array("[oops") == []
    assert parse_json_array(None) == []
    assert parse_json_object('{"k": 1}') == {"k": 1}
    assert parse_json_object("[1, 2]") == {}
    assert parse_json_object("nope") == {}


def test_project_payload_derives_slug_and_splits_arrays():
    payload = ProjectPayload.model_validate(
        {
            "name": "  My New App ",
            "description": "desc",
            "url": "https://app.example.com",
            "frontend": "React, TypeScript",
            "backend": ["Go"],
            "featured": "true",
        }
    )
    assert payload.id == "my-new-app"
    assert payload.frontend == ["React", "TypeScript"]
    assert payload.featured is True


def test_project_payload_rejects_non_http_url():
    with pytest.raises(PydanticValidationError):
        ProjectPayload.model_validate(
            {"name": "A", "description": "d", "url": "ftp://x.example.com", "frontend": "a", "backend": "b"}
        )


def test_project_payload_requires_stacks():
    with pytest.raises(PydanticValidationError):
        ProjectPayload.model_validate({"name": "A", "description": "d", "url": "https://a.example.com"})


def test_retainer_hours_clamped_to_one():
    payload = RetainerPayload.model_validate(
        {"name": "Core", "hoursPerMonth": "-4", "price": "EUR 1", "supportSla": "1 day", "includes": "a,b"}
    )
    assert payload.hours_per_month == 1
    assert payload.hosting_included is True
    assert payload.id == "core"


def test_blog_post_slug_from_title():
    payload = BlogPostPayload.model_validate(
        {"title": "Why Speed Matters", "excerpt": "e", "body": "b", "category": "c", "readTime": "2 min"}
    )
    assert payload.slug == "why-speed-matters"
    assert payload.published_at == ""


def test_contact_payload_lowercases_and_validates_email():
    payload = ContactPayload.model_validate(
        {"name": "Ann", "email": "Ann@Example.COM", "subject": "Hi", "message": "Hello", "budgetRange": "5k"}
    )
    assert payload.email == "ann@example.com"
    assert payload.budget_range == "5k"

    with pytest.raises(PydanticValidationError):
        ContactPayload.model_validate({"name": "Ann", "email": "ann@", "subject": "Hi", "message": "Hello"})


def test_socials_payload_drops_invalid_entries():
    payload = SocialsPayload.model_validate(
        {
            "items": [
                {"platform": "GitHub", "url": "https://github.com/me", "icon": "github"},
                "not-an-object",
                {"platform": "X", "url": "javascript:alert(1)", "icon": "x"},
                {"platform": "LinkedIn", "url": "https://linkedin.com/in/me", "icon": "linkedin", "sortOrder": 9},
            ]
        }
    )
    assert [(i.platform, i.sort_order) for i in payload.items] == [("GitHub", 1), ("LinkedIn", 9)]

    with pytest.raises(PydanticValidationError):
        SocialsPayload.model_validate({"items": []})


def test_analytics_metadata_must_be_object():
    payload = AnalyticsEventPayload.model_validate({"eventName": "click", "path": "/", "metadata": ["x"]})
    assert payload.metadata == {}


def test_profile_payload_falls_back_to_current_values():
    current = map_profile(SiteProfileRow(id=1, **SEED_PROFILE))

    merged = ProfilePayload.model_validate({"name": "New", "email": "  "}).merged_with(current)
    assert merged["name"] == "New"
    assert merged["email"] == SEED_PROFILE["email"]

    with pytest.raises(ValidationError):
        ProfilePayload.model_validate({"bookingUrl": "not a url"}).merged_with(current)


def test_describe_validation_issue_formats():
    from portfolio_api.api.errors import describe_validation_issue

    assert describe_validation_issue(
        {"type": "value_error", "loc": ("body", "url"), "msg": "Value error, must be an http(s) URL"}
    ) == "url: must be an http(s) URL"
    assert describe_validation_issue({"type": "missing", "loc": ("body",), "msg": "Field required"}) == (
        "Invalid request payload"
    )
    assert describe_validation_issue({"type": "json_invalid", "loc": ("body", 1), "msg": "JSON decode error"}) == (
        "Invalid request payload"
    )
