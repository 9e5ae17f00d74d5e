import pytest
from sqlalchemy.exc import IntegrityError

from portfolio_api.db.migrations import seed_if_empty
from portfolio_api.db.models import ContactRequestRow, ProjectRow
from portfolio_api.errors import ConflictError, RepositoryError, ValidationError
from portfolio_api.services.repository import Repository


@pytest.fixture()
def repo(runtime, clock) -> Repository:
    return Repository(runtime, clock=clock)


def _project(**overrides):
    data = {
        "id": "x",
        "name": "X",
        "description": "Project X",
        "url": "https://x.example.com",
        "frontend": ["React"],
        "backend": ["Go"],
        "featured": True,
    }
    data.update(overrides)
    return data


def test_project_roundtrip_preserves_arrays_and_flags(repo: Repository):
    created = repo.projects.create(_project(frontend=["React", "Vite"], backend=["Go", "SQLite"]))
    assert created.frontend == ["React", "Vite"]
    assert created.backend == ["Go", "SQLite"]
    assert created.featured is True

    fetched = repo.projects.get("x")
    assert fetched == created
    assert fetched.model_dump(by_alias=True)["createdAt"] == "2026-03-01T12:00:00.000Z"


def test_create_ignores_caller_timestamps(repo: Repository):
    created = repo.projects.create(_project(created_at="1999-01-01", updated_at="1999-01-01"))
    assert created.created_at == "2026-03-01T12:00:00.000Z"
    assert created.updated_at == created.created_at


def test_duplicate_id_is_a_conflict(repo: Repository):
    repo.projects.create(_project())
    with pytest.raises(ConflictError) as exc:
        repo.projects.create(_project(name="Other"))
    assert exc.value.message == "Project id already exists"


def test_missing_required_field_is_not_a_conflict(repo: Repository):
    with pytest.raises(IntegrityError):
        repo.projects.create({"id": "y"})
    assert repo.projects.get("y") is None


def _post(**overrides):
    data = {
        "id": "post-a",
        "slug": "post-a",
        "title": "Post A",
        "excerpt": "Short",
        "body": "Body",
        "category": "News",
        "read_time": "2 min",
        "published_at": "2026-03-01T00:00:00.000Z",
    }
    data.update(overrides)
    return data


def test_duplicate_slug_is_a_conflict(repo: Repository):
    repo.blog_posts.create(_post())
    repo.blog_posts.create(_post(id="post-b", slug="post-b"))

    with pytest.raises(ConflictError) as exc:
        repo.blog_posts.create(_post(id="post-c", slug="post-a"))
    assert exc.value.message == "Blog post id already exists"

    with pytest.raises(ConflictError):
        repo.blog_posts.update("post-b", {"slug": "post-a"})
    assert repo.blog_posts.get("post-b").slug == "post-b"

    assert repo.blog_posts.update("post-b", {"slug": "post-b", "title": "Same slug"}).title == "Same slug"


def test_create_without_id_is_rejected(repo: Repository):
    with pytest.raises(ValidationError):
        repo.projects.create(_project(id=""))


def test_update_and_delete_missing_id(repo: Repository):
    assert repo.projects.update("missing", {"name": "Nope"}) is None
    assert repo.projects.delete("missing") is False


def test_partial_update_keeps_created_at(repo: Repository, clock):
    repo.projects.create(_project())
    clock.advance(hours=1)

    updated = repo.projects.update("x", {"name": "Renamed", "frontend": ["Svelte"]})

    assert updated.name == "Renamed"
    assert updated.frontend == ["Svelte"]
    assert updated.backend == ["Go"]
    assert updated.created_at == "2026-03-01T12:00:00.000Z"
    assert updated.updated_at == "2026-03-01T13:00:00.000Z"
    assert repo.projects.delete("x") is True
    assert repo.projects.get("x") is None


def test_projects_ordered_by_most_recent_update(repo: Repository, clock):
    repo.projects.create(_project(id="a"))
    clock.advance(minutes=1)
    repo.projects.create(_project(id="b"))
    clock.advance(minutes=1)
    repo.projects.update("a", {"name": "touched"})

    assert [p.id for p in repo.projects.list()] == ["a", "b"]


def test_offers_ordered_by_sort_order_then_recency(repo: Repository, clock):
    base = {
        "name": "Offer",
        "description": "d",
        "price_from": "EUR 1",
        "timeline": "1 week",
        "revisions": "1",
        "hosting": "none",
        "includes": ["a"],
    }
    repo.offers.create(dict(base, id="late", sort_order=2))
    repo.offers.create(dict(base, id="first", sort_order=1))
    clock.advance(minutes=1)
    repo.offers.create(dict(base, id="newer-late", sort_order=2))

    assert [o.id for o in repo.offers.list()] == ["first", "newer-late", "late"]


def test_blog_posts_ordered_by_published_at(repo: Repository, runtime):
    seed_if_empty(runtime)
    assert [p.id for p in repo.blog_posts.list()] == [
        "speed-matters-leads",
        "retainer-vs-one-off",
        "website-cost-2026",
    ]


def test_malformed_json_array_degrades_to_empty(repo: Repository, runtime):
    repo.projects.create(_project())
    with runtime.SessionLocal.begin() as db:
        row = db.get(ProjectRow, "x")
        row.frontend = "not json"
        row.backend = '{"a": 1}'

    project = repo.projects.get("x")
    assert project.frontend == []
    assert project.backend == []


def test_profile_requires_seed(repo: Repository, runtime):
    with pytest.raises(RepositoryError):
        repo.get_profile()

    seed_if_empty(runtime)
    updated = repo.update_profile({"name": "New Name", "id": 5})
    assert updated.name == "New Name"
    assert updated.gamertag == "Safasfly"


def test_replace_socials_defaults_sort_order_to_position(repo: Repository):
    socials = repo.replace_socials(
        [
            {"platform": "GitHub", "url": "https://github.com/me", "icon": "github"},
            {"platform": "X", "url": "https://x.com/me", "icon": "x", "sort_order": 0},
        ]
    )
    assert [(s.platform, s.sort_order) for s in socials] == [("GitHub", 1), ("X", 2)]


def test_replace_socials_failure_keeps_previous_set(repo: Repository):
    repo.replace_socials([{"platform": "GitHub", "url": "https://github.com/me", "icon": "github"}])

    with pytest.raises(IntegrityError):
        repo.replace_socials(
            [
                {"platform": "LinkedIn", "url": "https://linkedin.com/in/me", "icon": "linkedin"},
                {"platform": None, "url": "https://broken.example.com", "icon": "x"},
            ]
        )

    assert [s.platform for s in repo.list_socials()] == ["GitHub"]


def test_contact_status_update(repo: Repository, runtime):
    contact = repo.create_contact_request(
        {"name": "Ann", "email": "ann@example.com", "subject": "Hi", "message": "Hello", "source": "google"}
    )
    assert contact.status == "new"
    assert contact.budget_range == ""

    updated = repo.update_contact_status(contact.id, "quoted")
    assert updated.status == "quoted"

    assert repo.update_contact_status(999, "closed") is None
    with runtime.SessionLocal() as db:
        assert [r.status for r in db.query(ContactRequestRow).all()] == ["quoted"]

    with pytest.raises(ValidationError):
        repo.update_contact_status(contact.id, "deleted")


def test_leads_listed_newest_first(repo: Repository, clock):
    repo.create_lead_capture({"email": "a@example.com"})
    clock.advance(seconds=5)
    repo.create_lead_capture({"email": "b@example.com", "use_case": "shop"})

    leads = repo.list_lead_captures()
    assert [lead.email for lead in leads] == ["b@example.com", "a@example.com"]
    assert leads[0].use_case == "shop"
    assert leads[1].company == ""


def test_analytics_events_and_summary(repo: Repository, clock):
    for name, path in [("page_view", "/"), ("page_view", "/"), ("cta_click", "/pricing"), ("page_view", "/pricing")]:
        repo.create_analytics_event(name, path, {"ref": "test"})
        clock.advance(seconds=1)

    events = repo.list_analytics_events(2)
    assert [e.path for e in events] == ["/pricing", "/pricing"]
    assert events[0].metadata == {"ref": "test"}
    assert len(repo.list_analytics_events(0)) == 1

    summary = repo.get_analytics_summary().model_dump(by_alias=True)
    assert summary["totalEvents"] == 4
    assert summary["byEvent"] == [{"eventName": "page_view", "count": 3}, {"eventName": "cta_click", "count": 1}]
    assert summary["topPaths"] == [{"path": "/", "count": 2}, {"path": "/pricing", "count": 2}]


def test_dashboard_counts_open_contacts(repo: Repository, runtime):
    seed_if_empty(runtime)
    first = repo.create_contact_request({"name": "A", "email": "a@example.com", "subject": "s", "message": "m"})
    repo.create_contact_request({"name": "B", "email": "b@example.com", "subject": "s", "message": "m"})
    repo.update_contact_status(first.id, "archived")
    repo.create_lead_capture({"email": "l@example.com"})

    dashboard = repo.get_admin_dashboard()
    assert dashboard.total_projects == 3
    assert dashboard.total_offers == 3
    assert dashboard.total_retainers == 3
    assert dashboard.total_case_studies == 2
    assert dashboard.open_contacts == 1
    assert dashboard.total_leads == 1


def test_site_bundle_contains_every_collection(repo: Repository, runtime):
    seed_if_empty(runtime)
    bundle = repo.get_site_bundle().model_dump(by_alias=True)
    assert set(bundle) == {
        "profile",
        "socials",
        "projects",
        "offers",
        "retainers",
        "caseStudies",
        "servicePages",
        "blogPosts",
    }
    assert bundle["profile"]["gamertag"] == "Safasfly"
    assert [s["platform"] for s in bundle["socials"]] == ["GitHub", "LinkedIn", "X"]
