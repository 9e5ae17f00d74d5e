"""Row -> entity mapping.

One total, side-effect-free function per entity. JSON-encoded columns are
decoded here; malformed content degrades to an empty value instead of raising.
"""

from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, Iterable, List, Optional

from portfolio_api.db.models import (
    AdminRow,
    AnalyticsEventRow,
    BlogPostRow,
    CaseStudyRow,
    ContactRequestRow,
    LeadCaptureRow,
    OfferRow,
    ProjectRow,
    RetainerPlanRow,
    ServicePageRow,
    SiteProfileRow,
    SocialLinkRow,
)
from portfolio_api.entities import (
    AdminUser,
    AnalyticsEvent,
    BlogPost,
    CaseStudy,
    ContactRequest,
    LeadCapture,
    OfferPackage,
    Project,
    RetainerPlan,
    ServiceLandingPage,
    SiteProfile,
    SocialLink,
)


def iso_utc(value: Optional[dt.datetime]) -> str:
    """Render a stored timestamp as ISO-8601 UTC with millisecond precision and a Z suffix."""
    if value is None:
        return ""
    # SQLite hands back naive datetimes; everything is written in UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    value = value.astimezone(dt.timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_json_array(value: Any) -> List[str]:
    if not isinstance(value, str) or not value:
        return []
    try:
        parsed = json.loads(value)
    except ValueError:
        return []
    if not isinstance(parsed, list):
        return []
    return [item.strip() for item in parsed if isinstance(item, str) and item.strip()]


def dump_json_array(items: Optional[Iterable[str]]) -> str:
    return json.dumps([str(item) for item in (items or [])])


def parse_json_object(value: Any) -> Dict[str, Any]:
    if not isinstance(value, str) or not value:
        return {}
    try:
        parsed = json.loads(value)
    except ValueError:
        return {}
    return parsed if isinstance(parsed, dict) else {}


def safe_json(value: Any) -> str:
    try:
        return json.dumps(value if value is not None else {}, default=str)
    except (TypeError, ValueError):
        return "{}"


def map_profile(row: SiteProfileRow) -> SiteProfile:
    return SiteProfile(
        name=row.name,
        gamertag=row.gamertag,
        title=row.title,
        bio=row.bio,
        location=row.location,
        email=row.email,
        niche_offer=row.niche_offer,
        response_sla=row.response_sla,
        availability=row.availability,
        booking_url=row.booking_url,
        hourly_rate_from=row.hourly_rate_from,
        monthly_hosting_from=row.monthly_hosting_from,
        updated_at=iso_utc(row.updated_at),
    )


def map_social(row: SocialLinkRow) -> SocialLink:
    return SocialLink(
        id=int(row.id),
        platform=row.platform,
        url=row.url,
        icon=row.icon,
        sort_order=int(row.sort_order or 0),
    )


def map_project(row: ProjectRow) -> Project:
    return Project(
        id=row.id,
        name=row.name,
        description=row.description,
        url=row.url,
        frontend=parse_json_array(row.frontend),
        backend=parse_json_array(row.backend),
        featured=bool(row.featured),
        created_at=iso_utc(row.created_at),
        updated_at=iso_utc(row.updated_at),
    )


def map_offer(row: OfferRow) -> OfferPackage:
    return OfferPackage(
        id=row.id,
        name=row.name,
        description=row.description,
        price_from=row.price_from,
        timeline=row.timeline,
        revisions=row.revisions,
        hosting=row.hosting,
        includes=parse_json_array(row.includes),
        featured=bool(row.featured),
        sort_order=int(row.sort_order or 0),
        updated_at=iso_utc(row.updated_at),
    )


def map_retainer(row: RetainerPlanRow) -> RetainerPlan:
    return RetainerPlan(
        id=row.id,
        name=row.name,
        hours_per_month=int(row.hours_per_month or 0),
        price=row.price,
        hosting_included=bool(row.hosting_included),
        support_sla=row.support_sla,
        includes=parse_json_array(row.includes),
        sort_order=int(row.sort_order or 0),
        updated_at=iso_utc(row.updated_at),
    )


def map_case_study(row: CaseStudyRow) -> CaseStudy:
    return CaseStudy(
        id=row.id,
        title=row.title,
        client_name=row.client_name,
        industry=row.industry,
        challenge=row.challenge,
        solution=row.solution,
        outcome=row.outcome,
        testimonial_quote=row.testimonial_quote,
        testimonial_author=row.testimonial_author,
        project_url=row.project_url,
        featured=bool(row.featured),
        updated_at=iso_utc(row.updated_at),
    )


def map_service_page(row: ServicePageRow) -> ServiceLandingPage:
    return ServiceLandingPage(
        id=row.id,
        slug=row.slug,
        title=row.title,
        audience=row.audience,
        city=row.city,
        summary=row.summary,
        offer=row.offer,
        seo_description=row.seo_description,
        cta_label=row.cta_label,
        updated_at=iso_utc(row.updated_at),
    )


def map_blog_post(row: BlogPostRow) -> BlogPost:
    return BlogPost(
        id=row.id,
        slug=row.slug,
        title=row.title,
        excerpt=row.excerpt,
        body=row.body,
        category=row.category,
        read_time=row.read_time,
        published_at=row.published_at or "",
        updated_at=iso_utc(row.updated_at),
    )


def map_contact(row: ContactRequestRow) -> ContactRequest:
    return ContactRequest(
        id=int(row.id),
        name=row.name,
        email=row.email,
        subject=row.subject,
        message=row.message,
        budget_range=row.budget_range or "",
        timeline=row.timeline or "",
        project_type=row.project_type or "",
        source=row.source or "",
        status=row.status or "new",
        created_at=iso_utc(row.created_at),
    )


def map_lead(row: LeadCaptureRow) -> LeadCapture:
    return LeadCapture(
        id=int(row.id),
        email=row.email,
        name=row.name or "",
        company=row.company or "",
        website=row.website or "",
        use_case=row.use_case or "",
        created_at=iso_utc(row.created_at),
    )


def map_analytics(row: AnalyticsEventRow) -> AnalyticsEvent:
    return AnalyticsEvent(
        id=int(row.id),
        event_name=row.event_name,
        path=row.path,
        metadata=parse_json_object(row.meta),
        created_at=iso_utc(row.created_at),
    )


def map_admin(row: AdminRow) -> AdminUser:
    return AdminUser(id=int(row.id), email=row.email)
