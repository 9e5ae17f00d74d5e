import dataclasses

from sqlalchemy import inspect, text

from portfolio_api.db.migrations import (
    contact_request_columns,
    ensure_columns,
    run_migrations,
    seed_if_empty,
    upsert_seed_admin,
)
from portfolio_api.db.models import (
    AdminRow,
    BlogPostRow,
    CaseStudyRow,
    OfferRow,
    ProjectRow,
    RetainerPlanRow,
    ServicePageRow,
    SiteProfileRow,
    SocialLinkRow,
)
from portfolio_api.db.session import create_engine_and_sessionmaker

EXPECTED_SEED_COUNTS = {
    SiteProfileRow: 1,
    SocialLinkRow: 3,
    ProjectRow: 3,
    OfferRow: 3,
    RetainerPlanRow: 3,
    CaseStudyRow: 2,
    ServicePageRow: 3,
    BlogPostRow: 3,
}


def _counts(runtime):
    with runtime.SessionLocal() as db:
        return {model: db.query(model).count() for model in EXPECTED_SEED_COUNTS}


def test_running_twice_seeds_each_collection_once(runtime, settings, hasher):
    run_migrations(runtime, settings, hasher)
    run_migrations(runtime, settings, hasher)

    assert _counts(runtime) == EXPECTED_SEED_COUNTS
    with runtime.SessionLocal() as db:
        assert db.query(AdminRow).count() == 1


def test_seed_skips_non_empty_tables(runtime):
    with runtime.SessionLocal.begin() as db:
        db.add(SocialLinkRow(platform="Mastodon", url="https://example.social/@me", icon="mastodon", sort_order=1))

    seeded = seed_if_empty(runtime)

    assert "social_links" not in seeded
    assert seeded["projects"] == 3
    with runtime.SessionLocal() as db:
        assert [s.platform for s in db.query(SocialLinkRow).all()] == ["Mastodon"]


def test_seeded_arrays_are_json_encoded(runtime):
    seed_if_empty(runtime)
    with runtime.SessionLocal() as db:
        row = db.get(ProjectRow, "chat-app")
        assert row.frontend == '["React", "TypeScript", "Tailwind CSS"]'


def test_legacy_contact_table_gains_missing_columns(tmp_path, settings, hasher):
    rt = create_engine_and_sessionmaker(f"sqlite:///{tmp_path / 'legacy.db'}")
    try:
        with rt.engine.begin() as conn:
            conn.execute(
                text(
                    "CREATE TABLE contact_requests ("
                    "id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, email TEXT NOT NULL, "
                    "subject TEXT NOT NULL, message TEXT NOT NULL, created_at TEXT NOT NULL)"
                )
            )
            conn.execute(
                text(
                    "INSERT INTO contact_requests (name, email, subject, message, created_at) "
                    "VALUES ('Ann', 'ann@example.com', 'Hi', 'Hello there', '2025-01-01 10:00:00.000000')"
                )
            )

        run_migrations(rt, settings, hasher)

        inspector = inspect(rt.engine)
        columns = {c["name"] for c in inspector.get_columns("contact_requests")}
        assert {"budget_range", "timeline", "project_type", "source", "status"} <= columns
        indexes = {i["name"] for i in inspector.get_indexes("contact_requests")}
        assert "idx_contact_requests_status" in indexes

        with rt.engine.connect() as conn:
            row = conn.execute(
                text("SELECT name, message, budget_range, source, status FROM contact_requests")
            ).one()
        assert tuple(row) == ("Ann", "Hello there", "", "", "new")
    finally:
        rt.dispose()


def test_ensure_columns_is_noop_when_present(runtime):
    assert ensure_columns(runtime.engine, "contact_requests", contact_request_columns()) == []
    assert ensure_columns(runtime.engine, "missing_table", contact_request_columns()) == []


def test_seed_admin_password_is_rotated_on_restart(runtime, settings, hasher):
    run_migrations(runtime, settings, hasher)
    rotated = dataclasses.replace(settings, seed_admin_password="rotated-pass")
    run_migrations(runtime, rotated, hasher)

    with runtime.SessionLocal() as db:
        admins = db.query(AdminRow).all()
    assert len(admins) == 1
    assert admins[0].email == settings.seed_admin_email
    assert hasher.verify("rotated-pass", admins[0].password_hash)
    assert not hasher.verify(settings.seed_admin_password, admins[0].password_hash)


def test_seed_admin_requires_email_and_password(runtime, hasher):
    assert upsert_seed_admin(runtime, email="", password="secret123", hasher=hasher) is None
    assert upsert_seed_admin(runtime, email="a@example.com", password="", hasher=hasher) is None
    assert upsert_seed_admin(runtime, email=" A@Example.com ", password="secret123", hasher=hasher) == "created"
    with runtime.SessionLocal() as db:
        assert [a.email for a in db.query(AdminRow).all()] == ["a@example.com"]
