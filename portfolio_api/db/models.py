from __future__ import annotations

import datetime as dt
from typing import List

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_api.db.base import Base


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


# -----------------
# Site content
# -----------------


class SiteProfileRow(Base):
    __tablename__ = "site_profile"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    name: Mapped[str] = mapped_column(String(120))
    gamertag: Mapped[str] = mapped_column(String(120))
    title: Mapped[str] = mapped_column(String(180))
    bio: Mapped[str] = mapped_column(Text)
    location: Mapped[str] = mapped_column(String(120))
    email: Mapped[str] = mapped_column(String(254))
    niche_offer: Mapped[str] = mapped_column(String(500))
    response_sla: Mapped[str] = mapped_column(String(180))
    availability: Mapped[str] = mapped_column(String(220))
    booking_url: Mapped[str] = mapped_column(String(512))
    hourly_rate_from: Mapped[str] = mapped_column(String(120))
    monthly_hosting_from: Mapped[str] = mapped_column(String(120))
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (CheckConstraint("id = 1", name="ck_site_profile_singleton"),)


class SocialLinkRow(Base):
    __tablename__ = "social_links"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    platform: Mapped[str] = mapped_column(String(120))
    url: Mapped[str] = mapped_column(String(512))
    icon: Mapped[str] = mapped_column(String(60))
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")


class ProjectRow(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(60), primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    description: Mapped[str] = mapped_column(Text)
    url: Mapped[str] = mapped_column(String(512))
    # JSON-encoded string arrays; decoded by the mappers.
    frontend: Mapped[str] = mapped_column(Text, default="[]")
    backend: Mapped[str] = mapped_column(Text, default="[]")
    featured: Mapped[bool] = mapped_column(Boolean, default=False, server_default="0")
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class OfferRow(Base):
    __tablename__ = "offers"

    id: Mapped[str] = mapped_column(String(60), primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    description: Mapped[str] = mapped_column(Text)
    price_from: Mapped[str] = mapped_column(String(120))
    timeline: Mapped[str] = mapped_column(String(120))
    revisions: Mapped[str] = mapped_column(String(120))
    hosting: Mapped[str] = mapped_column(String(220))
    includes: Mapped[str] = mapped_column(Text, default="[]")
    featured: Mapped[bool] = mapped_column(Boolean, default=False, server_default="0")
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class RetainerPlanRow(Base):
    __tablename__ = "retainer_plans"

    id: Mapped[str] = mapped_column(String(60), primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    hours_per_month: Mapped[int] = mapped_column(Integer)
    price: Mapped[str] = mapped_column(String(120))
    hosting_included: Mapped[bool] = mapped_column(Boolean, default=True, server_default="1")
    support_sla: Mapped[str] = mapped_column(String(160))
    includes: Mapped[str] = mapped_column(Text, default="[]")
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class CaseStudyRow(Base):
    __tablename__ = "case_studies"

    id: Mapped[str] = mapped_column(String(60), primary_key=True)
    title: Mapped[str] = mapped_column(String(180))
    client_name: Mapped[str] = mapped_column(String(180))
    industry: Mapped[str] = mapped_column(String(120))
    challenge: Mapped[str] = mapped_column(Text)
    solution: Mapped[str] = mapped_column(Text)
    outcome: Mapped[str] = mapped_column(Text)
    testimonial_quote: Mapped[str] = mapped_column(Text)
    testimonial_author: Mapped[str] = mapped_column(String(180))
    project_url: Mapped[str] = mapped_column(String(512))
    featured: Mapped[bool] = mapped_column(Boolean, default=False, server_default="0")
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class ServicePageRow(Base):
    __tablename__ = "service_pages"

    id: Mapped[str] = mapped_column(String(60), primary_key=True)
    slug: Mapped[str] = mapped_column(String(120), unique=True)
    title: Mapped[str] = mapped_column(String(180))
    audience: Mapped[str] = mapped_column(String(120))
    city: Mapped[str] = mapped_column(String(120))
    summary: Mapped[str] = mapped_column(Text)
    offer: Mapped[str] = mapped_column(Text)
    seo_description: Mapped[str] = mapped_column(String(280))
    cta_label: Mapped[str] = mapped_column(String(80))
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class BlogPostRow(Base):
    __tablename__ = "blog_posts"

    id: Mapped[str] = mapped_column(String(60), primary_key=True)
    slug: Mapped[str] = mapped_column(String(120), unique=True)
    title: Mapped[str] = mapped_column(String(180))
    excerpt: Mapped[str] = mapped_column(String(320))
    body: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(80))
    read_time: Mapped[str] = mapped_column(String(80))
    # Editor-supplied ISO-8601 string, kept verbatim.
    published_at: Mapped[str] = mapped_column(String(80))
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


# -----------------
# Intake
# -----------------


class ContactRequestRow(Base):
    __tablename__ = "contact_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120))
    email: Mapped[str] = mapped_column(String(254))
    subject: Mapped[str] = mapped_column(String(180))
    message: Mapped[str] = mapped_column(Text)
    budget_range: Mapped[str] = mapped_column(String(120), default="", server_default="")
    timeline: Mapped[str] = mapped_column(String(120), default="", server_default="")
    project_type: Mapped[str] = mapped_column(String(120), default="", server_default="")
    source: Mapped[str] = mapped_column(String(120), default="", server_default="")
    status: Mapped[str] = mapped_column(String(40), default="new", server_default="new")
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        Index("idx_contact_requests_created_at", "created_at"),
        Index("idx_contact_requests_status", "status"),
    )


class LeadCaptureRow(Base):
    __tablename__ = "lead_captures"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(254))
    name: Mapped[str] = mapped_column(String(120), default="", server_default="")
    company: Mapped[str] = mapped_column(String(120), default="", server_default="")
    website: Mapped[str] = mapped_column(String(255), default="", server_default="")
    use_case: Mapped[str] = mapped_column(String(500), default="", server_default="")
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (Index("idx_lead_captures_created_at", "created_at"),)


class AnalyticsEventRow(Base):
    __tablename__ = "analytics_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_name: Mapped[str] = mapped_column(String(120))
    path: Mapped[str] = mapped_column(String(512))
    # NOTE: "metadata" is reserved on declarative classes; the column keeps the name.
    meta: Mapped[str] = mapped_column("metadata", Text, default="{}")
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        Index("idx_analytics_events_created_at", "created_at"),
        Index("idx_analytics_events_name", "event_name"),
    )


# -----------------
# Admin auth
# -----------------


class AdminRow(Base):
    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(254), unique=True)
    password_hash: Mapped[str] = mapped_column(String(500))
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    sessions: Mapped[List["AdminSessionRow"]] = relationship(
        "AdminSessionRow",
        back_populates="admin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class AdminSessionRow(Base):
    __tablename__ = "admin_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    admin_id: Mapped[int] = mapped_column(ForeignKey("admins.id", ondelete="CASCADE"))
    token: Mapped[str] = mapped_column(String(64), unique=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    expires_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True))

    admin: Mapped[AdminRow] = relationship("AdminRow", back_populates="sessions", lazy="joined")

    __table_args__ = (
        Index("idx_admin_sessions_token", "token"),
        Index("idx_admin_sessions_expires_at", "expires_at"),
    )
