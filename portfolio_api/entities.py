"""Domain entities returned by the repository.

Every entity serializes with camelCase keys, which is the JSON shape the
frontend consumes.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CONTACT_STATUSES = ("new", "in_review", "quoted", "closed", "archived")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SiteProfile(CamelModel):
    name: str
    gamertag: str
    title: str
    bio: str
    location: str
    email: str
    niche_offer: str
    response_sla: str
    availability: str
    booking_url: str
    hourly_rate_from: str
    monthly_hosting_from: str
    updated_at: str


class SocialLink(CamelModel):
    id: int
    platform: str
    url: str
    icon: str
    sort_order: int


class Project(CamelModel):
    id: str
    name: str
    description: str
    url: str
    frontend: List[str] = Field(default_factory=list)
    backend: List[str] = Field(default_factory=list)
    featured: bool
    created_at: str
    updated_at: str


class OfferPackage(CamelModel):
    id: str
    name: str
    description: str
    price_from: str
    timeline: str
    revisions: str
    hosting: str
    includes: List[str] = Field(default_factory=list)
    featured: bool
    sort_order: int
    updated_at: str


class RetainerPlan(CamelModel):
    id: str
    name: str
    hours_per_month: int
    price: str
    hosting_included: bool
    support_sla: str
    includes: List[str] = Field(default_factory=list)
    sort_order: int
    updated_at: str


class CaseStudy(CamelModel):
    id: str
    title: str
    client_name: str
    industry: str
    challenge: str
    solution: str
    outcome: str
    testimonial_quote: str
    testimonial_author: str
    project_url: str
    featured: bool
    updated_at: str


class ServiceLandingPage(CamelModel):
    id: str
    slug: str
    title: str
    audience: str
    city: str
    summary: str
    offer: str
    seo_description: str
    cta_label: str
    updated_at: str


class BlogPost(CamelModel):
    id: str
    slug: str
    title: str
    excerpt: str
    body: str
    category: str
    read_time: str
    published_at: str
    updated_at: str


class ContactRequest(CamelModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    budget_range: str
    timeline: str
    project_type: str
    source: str
    status: str
    created_at: str


class LeadCapture(CamelModel):
    id: int
    email: str
    name: str
    company: str
    website: str
    use_case: str
    created_at: str


class AnalyticsEvent(CamelModel):
    id: int
    event_name: str
    path: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: str


class EventCount(CamelModel):
    event_name: str
    count: int


class PathCount(CamelModel):
    path: str
    count: int


class AnalyticsSummary(CamelModel):
    total_events: int
    by_event: List[EventCount]
    top_paths: List[PathCount]


class AdminUser(CamelModel):
    id: int
    email: str


class AdminSession(CamelModel):
    token: str
    user: AdminUser
    expires_at: str


class AdminDashboard(CamelModel):
    total_projects: int
    total_offers: int
    total_retainers: int
    total_case_studies: int
    open_contacts: int
    total_leads: int


class SiteBundle(CamelModel):
    profile: SiteProfile
    socials: List[SocialLink]
    projects: List[Project]
    offers: List[OfferPackage]
    retainers: List[RetainerPlan]
    case_studies: List[CaseStudy]
    service_pages: List[ServiceLandingPage]
    blog_posts: List[BlogPost]
