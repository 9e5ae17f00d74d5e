"""Request payload models.

Each model sanitizes the raw JSON body before field validation: strings are
trimmed and truncated, arrays accept lists or comma-separated strings and ids
are derived as slugs. Field constraints then reject what is left empty.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Mapping

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from portfolio_api.core.text import (
    is_valid_email,
    is_valid_http_url,
    parse_boolean,
    parse_integer,
    parse_string_array,
    sanitize_string,
    to_slug,
)
from portfolio_api.entities import SiteProfile
from portfolio_api.errors import ValidationError


def _body(data: Any) -> Mapping[str, Any]:
    return data if isinstance(data, Mapping) else {}


def _check_url(value: str) -> str:
    if not is_valid_http_url(value):
        raise ValueError("must be an http(s) URL")
    return value


def _check_email(value: str) -> str:
    if not is_valid_email(value):
        raise ValueError("must be a valid email address")
    return value


HttpUrl = Annotated[str, Field(min_length=1), AfterValidator(_check_url)]
Email = Annotated[str, Field(min_length=1), AfterValidator(_check_email)]


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------
# Auth
# -----------------


class LoginRequest(Payload):
    email: str = ""
    password: str = ""

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        password = body.get("password")
        return {
            "email": sanitize_string(body.get("email"), 254).lower(),
            "password": password if isinstance(password, str) else "",
        }


class StagingUnlockRequest(Payload):
    password: str = ""

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        password = _body(data).get("password")
        return {"password": password if isinstance(password, str) else ""}


# -----------------
# Content
# -----------------


class ProjectPayload(Payload):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    url: HttpUrl
    frontend: List[str] = Field(min_length=1)
    backend: List[str] = Field(min_length=1)
    featured: bool = False

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        name = sanitize_string(body.get("name"), 120)
        return {
            "id": to_slug(sanitize_string(body.get("id"), 120) or name, 60),
            "name": name,
            "description": sanitize_string(body.get("description"), 2000),
            "url": sanitize_string(body.get("url"), 512),
            "frontend": parse_string_array(body.get("frontend"), 30),
            "backend": parse_string_array(body.get("backend"), 30),
            "featured": parse_boolean(body.get("featured"), False),
        }


class OfferPayload(Payload):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price_from: str = Field(min_length=1)
    timeline: str = Field(min_length=1)
    revisions: str = Field(min_length=1)
    hosting: str = Field(min_length=1)
    includes: List[str] = Field(min_length=1)
    featured: bool = False
    sort_order: int = 0

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        name = sanitize_string(body.get("name"), 120)
        return {
            "id": to_slug(sanitize_string(body.get("id"), 120) or name, 60),
            "name": name,
            "description": sanitize_string(body.get("description"), 1200),
            "price_from": sanitize_string(body.get("priceFrom"), 120),
            "timeline": sanitize_string(body.get("timeline"), 120),
            "revisions": sanitize_string(body.get("revisions"), 120),
            "hosting": sanitize_string(body.get("hosting"), 220),
            "includes": parse_string_array(body.get("includes"), 40),
            "featured": parse_boolean(body.get("featured"), False),
            "sort_order": parse_integer(body.get("sortOrder"), 0),
        }


class RetainerPayload(Payload):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    hours_per_month: int = Field(ge=1)
    price: str = Field(min_length=1)
    hosting_included: bool = True
    support_sla: str = Field(min_length=1)
    includes: List[str] = Field(min_length=1)
    sort_order: int = 0

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        name = sanitize_string(body.get("name"), 120)
        return {
            "id": to_slug(sanitize_string(body.get("id"), 120) or name, 60),
            "name": name,
            "hours_per_month": max(1, parse_integer(body.get("hoursPerMonth"), 0)),
            "price": sanitize_string(body.get("price"), 120),
            "hosting_included": parse_boolean(body.get("hostingIncluded"), True),
            "support_sla": sanitize_string(body.get("supportSla"), 160),
            "includes": parse_string_array(body.get("includes"), 40),
            "sort_order": parse_integer(body.get("sortOrder"), 0),
        }


class CaseStudyPayload(Payload):
    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    client_name: str = Field(min_length=1)
    industry: str = Field(min_length=1)
    challenge: str = Field(min_length=1)
    solution: str = Field(min_length=1)
    outcome: str = Field(min_length=1)
    testimonial_quote: str = Field(min_length=1)
    testimonial_author: str = Field(min_length=1)
    project_url: HttpUrl
    featured: bool = False

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        return {
            "id": to_slug(sanitize_string(body.get("id"), 120) or sanitize_string(body.get("title"), 120), 60),
            "title": sanitize_string(body.get("title"), 180),
            "client_name": sanitize_string(body.get("clientName"), 180),
            "industry": sanitize_string(body.get("industry"), 120),
            "challenge": sanitize_string(body.get("challenge"), 2400),
            "solution": sanitize_string(body.get("solution"), 2400),
            "outcome": sanitize_string(body.get("outcome"), 1200),
            "testimonial_quote": sanitize_string(body.get("testimonialQuote"), 1200),
            "testimonial_author": sanitize_string(body.get("testimonialAuthor"), 180),
            "project_url": sanitize_string(body.get("projectUrl"), 512),
            "featured": parse_boolean(body.get("featured"), False),
        }


class ServicePagePayload(Payload):
    id: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    title: str = Field(min_length=1)
    audience: str = Field(min_length=1)
    city: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    offer: str = Field(min_length=1)
    seo_description: str = Field(min_length=1)
    cta_label: str = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        return {
            "id": to_slug(sanitize_string(body.get("id"), 120) or sanitize_string(body.get("title"), 120), 60),
            "slug": to_slug(sanitize_string(body.get("slug"), 140) or sanitize_string(body.get("title"), 140), 120),
            "title": sanitize_string(body.get("title"), 180),
            "audience": sanitize_string(body.get("audience"), 120),
            "city": sanitize_string(body.get("city"), 120),
            "summary": sanitize_string(body.get("summary"), 1200),
            "offer": sanitize_string(body.get("offer"), 1200),
            "seo_description": sanitize_string(body.get("seoDescription"), 280),
            "cta_label": sanitize_string(body.get("ctaLabel"), 80),
        }


class BlogPostPayload(Payload):
    id: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    title: str = Field(min_length=1)
    excerpt: str = Field(min_length=1)
    body: str = Field(min_length=1)
    category: str = Field(min_length=1)
    read_time: str = Field(min_length=1)
    # Empty means "now"; filled in by the route.
    published_at: str = ""

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        return {
            "id": to_slug(sanitize_string(body.get("id"), 120) or sanitize_string(body.get("title"), 120), 60),
            "slug": to_slug(sanitize_string(body.get("slug"), 140) or sanitize_string(body.get("title"), 140), 120),
            "title": sanitize_string(body.get("title"), 180),
            "excerpt": sanitize_string(body.get("excerpt"), 320),
            "body": sanitize_string(body.get("body"), 12000),
            "category": sanitize_string(body.get("category"), 80),
            "read_time": sanitize_string(body.get("readTime"), 80),
            "published_at": sanitize_string(body.get("publishedAt"), 80),
        }


class ProfilePayload(Payload):
    """Every field is optional; blanks fall back to the stored profile."""

    name: str = ""
    gamertag: str = ""
    title: str = ""
    bio: str = ""
    location: str = ""
    email: str = ""
    niche_offer: str = ""
    response_sla: str = ""
    availability: str = ""
    booking_url: str = ""
    hourly_rate_from: str = ""
    monthly_hosting_from: str = ""

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        return {
            "name": sanitize_string(body.get("name"), 120),
            "gamertag": sanitize_string(body.get("gamertag"), 120),
            "title": sanitize_string(body.get("title"), 180),
            "bio": sanitize_string(body.get("bio"), 3000),
            "location": sanitize_string(body.get("location"), 120),
            "email": sanitize_string(body.get("email"), 254).lower(),
            "niche_offer": sanitize_string(body.get("nicheOffer"), 500),
            "response_sla": sanitize_string(body.get("responseSla"), 180),
            "availability": sanitize_string(body.get("availability"), 220),
            "booking_url": sanitize_string(body.get("bookingUrl"), 512),
            "hourly_rate_from": sanitize_string(body.get("hourlyRateFrom"), 120),
            "monthly_hosting_from": sanitize_string(body.get("monthlyHostingFrom"), 120),
        }

    def merged_with(self, current: SiteProfile) -> Dict[str, str]:
        merged = {key: value or getattr(current, key) for key, value in self.model_dump().items()}
        if not is_valid_email(merged["email"]) or not is_valid_http_url(merged["booking_url"]):
            raise ValidationError("Invalid profile payload")
        return merged


class SocialItemPayload(Payload):
    platform: str = Field(min_length=1)
    url: HttpUrl
    icon: str = Field(min_length=1)
    sort_order: int


class SocialsPayload(Payload):
    items: List[SocialItemPayload] = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        raw = _body(data).get("items")
        items: List[Dict[str, Any]] = []
        for index, entry in enumerate(raw if isinstance(raw, list) else []):
            if not isinstance(entry, Mapping):
                continue
            item = {
                "platform": sanitize_string(entry.get("platform"), 120),
                "url": sanitize_string(entry.get("url"), 512),
                "icon": sanitize_string(entry.get("icon"), 60),
                "sort_order": parse_integer(entry.get("sortOrder"), index + 1),
            }
            # Incomplete entries are dropped rather than failing the whole list.
            if item["platform"] and item["icon"] and is_valid_http_url(item["url"]):
                items.append(item)
        return {"items": items}


class ContactStatusPayload(Payload):
    status: str = ""

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        return {"status": sanitize_string(_body(data).get("status"), 40).lower()}


# -----------------
# Public intake
# -----------------


class ContactPayload(Payload):
    name: str = Field(min_length=1)
    email: Email
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)
    budget_range: str = ""
    timeline: str = ""
    project_type: str = ""
    source: str = ""

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        return {
            "name": sanitize_string(body.get("name"), 120),
            "email": sanitize_string(body.get("email"), 254).lower(),
            "subject": sanitize_string(body.get("subject"), 180),
            "message": sanitize_string(body.get("message"), 5000),
            "budget_range": sanitize_string(body.get("budgetRange"), 120),
            "timeline": sanitize_string(body.get("timeline"), 120),
            "project_type": sanitize_string(body.get("projectType"), 120),
            "source": sanitize_string(body.get("source"), 120),
        }


class LeadPayload(Payload):
    email: Email
    name: str = ""
    company: str = ""
    website: str = ""
    use_case: str = ""

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        return {
            "email": sanitize_string(body.get("email"), 254).lower(),
            "name": sanitize_string(body.get("name"), 120),
            "company": sanitize_string(body.get("company"), 120),
            "website": sanitize_string(body.get("website"), 255),
            "use_case": sanitize_string(body.get("useCase"), 500),
        }


class AnalyticsEventPayload(Payload):
    event_name: str = Field(min_length=1)
    path: str = Field(min_length=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Dict[str, Any]:
        body = _body(data)
        metadata = body.get("metadata")
        return {
            "event_name": sanitize_string(body.get("eventName"), 120),
            "path": sanitize_string(body.get("path"), 512),
            "metadata": dict(metadata) if isinstance(metadata, Mapping) else {},
        }
