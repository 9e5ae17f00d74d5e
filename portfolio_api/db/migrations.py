"""Startup schema migration and seeding.

Every step is idempotent; running the whole sequence against an already
migrated database changes nothing. Failures propagate to the caller.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Optional, Sequence

from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import Column, String, inspect
from sqlalchemy.engine import Engine

from portfolio_api.core.settings import Settings
from portfolio_api.db.base import Base
from portfolio_api.db.mappers import dump_json_array
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
    utcnow,
)
from portfolio_api.db.seed_data import (
    SEED_BLOG_POSTS,
    SEED_CASE_STUDIES,
    SEED_OFFERS,
    SEED_PROFILE,
    SEED_PROJECTS,
    SEED_RETAINERS,
    SEED_SERVICE_PAGES,
    SEED_SOCIALS,
)
from portfolio_api.db.session import DBRuntime
from portfolio_api.services.auth_service import normalize_email
from portfolio_api.services.passwords import PasswordHasher

logger = logging.getLogger(__name__)

_SEEDS = (
    (SiteProfileRow, [dict(SEED_PROFILE, id=1)]),
    (SocialLinkRow, SEED_SOCIALS),
    (ProjectRow, SEED_PROJECTS),
    (OfferRow, SEED_OFFERS),
    (RetainerPlanRow, SEED_RETAINERS),
    (CaseStudyRow, SEED_CASE_STUDIES),
    (ServicePageRow, SEED_SERVICE_PAGES),
    (BlogPostRow, SEED_BLOG_POSTS),
)


def contact_request_columns() -> List[Column]:
    """Columns added to contact_requests after its first release.

    Built fresh on every call: a Column can only be attached to one table.
    """
    return [
        Column("budget_range", String(120), nullable=False, server_default=""),
        Column("timeline", String(120), nullable=False, server_default=""),
        Column("project_type", String(120), nullable=False, server_default=""),
        Column("source", String(120), nullable=False, server_default=""),
        Column("status", String(40), nullable=False, server_default="new"),
    ]


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine, checkfirst=True)


def ensure_columns(engine: Engine, table: str, columns: Sequence[Column]) -> List[str]:
    """Add each column missing from ``table``. Never drops or renames anything.

    Returns the names of the columns that were added.
    """
    inspector = inspect(engine)
    if table not in set(inspector.get_table_names()):
        return []

    existing = {c.get("name") for c in inspector.get_columns(table)}
    missing = [c for c in columns if c.name not in existing]
    if not missing:
        return []

    with engine.begin() as conn:
        op = Operations(MigrationContext.configure(conn))
        for column in missing:
            logger.warning("Adding missing column %s.%s", table, column.name)
            op.add_column(table, column)
    return [c.name for c in missing]


def ensure_indexes(engine: Engine) -> None:
    for table in Base.metadata.sorted_tables:
        for index in table.indexes:
            index.create(bind=engine, checkfirst=True)


def _row_values(model: type, data: Dict[str, Any], now: dt.datetime) -> Dict[str, Any]:
    values = {k: dump_json_array(v) if isinstance(v, list) else v for k, v in data.items()}
    if hasattr(model, "created_at"):
        values["created_at"] = now
    if hasattr(model, "updated_at"):
        values["updated_at"] = now
    return values


def seed_if_empty(runtime: DBRuntime, *, now: Optional[dt.datetime] = None) -> Dict[str, int]:
    """Insert the default dataset into every content table that has no rows.

    Returns ``{table_name: rows_inserted}`` for the tables that were seeded.
    """
    now = now or utcnow()
    seeded: Dict[str, int] = {}
    with runtime.SessionLocal.begin() as db:
        for model, rows in _SEEDS:
            if db.query(model).count() > 0:
                continue
            for data in rows:
                db.add(model(**_row_values(model, data, now)))
            seeded[model.__tablename__] = len(rows)
    for table, count in seeded.items():
        logger.info("Seeded %s with %d rows", table, count)
    return seeded


def upsert_seed_admin(runtime: DBRuntime, *, email: str, password: str, hasher: PasswordHasher) -> Optional[str]:
    """Create the configured admin, or overwrite its password hash when it already exists.

    Returns "created", "updated", or None when seeding is not configured.
    """
    email = normalize_email(email)
    if not email or not password:
        logger.info("Seed admin not configured; skipping admin upsert")
        return None

    password_hash = hasher.hash(password)
    with runtime.SessionLocal.begin() as db:
        admin = db.query(AdminRow).filter(AdminRow.email == email).one_or_none()
        if admin is not None:
            admin.password_hash = password_hash
            outcome = "updated"
        else:
            db.add(AdminRow(email=email, password_hash=password_hash, created_at=utcnow()))
            outcome = "created"
    logger.info("Seed admin %s (%s)", outcome, email)
    return outcome


def run_migrations(runtime: DBRuntime, settings: Settings, hasher: Optional[PasswordHasher] = None) -> None:
    hasher = hasher or PasswordHasher()
    engine = runtime.engine

    logger.info("Running schema migrations")
    create_schema(engine)
    ensure_columns(engine, "contact_requests", contact_request_columns())
    ensure_indexes(engine)
    seed_if_empty(runtime)
    upsert_seed_admin(
        runtime,
        email=settings.seed_admin_email,
        password=settings.seed_admin_password,
        hasher=hasher,
    )
    logger.info("Schema migrations complete")
