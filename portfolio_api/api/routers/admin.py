import logging
from typing import Any, Callable, Dict, List, Type

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from portfolio_api.api.deps import get_current_admin, get_repository
from portfolio_api.api.schemas import (
    BlogPostPayload,
    CaseStudyPayload,
    ContactStatusPayload,
    OfferPayload,
    ProfilePayload,
    ProjectPayload,
    RetainerPayload,
    ServicePagePayload,
    SocialsPayload,
)
from portfolio_api.db.mappers import iso_utc
from portfolio_api.db.models import utcnow
from portfolio_api.entities import (
    CONTACT_STATUSES,
    AdminDashboard,
    AnalyticsEvent,
    AnalyticsSummary,
    ContactRequest,
    LeadCapture,
    SiteProfile,
    SocialLink,
)
from portfolio_api.errors import NotFoundError, ValidationError
from portfolio_api.services.repository import ContentCollection, Repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(get_current_admin)])


@router.get("/dashboard", response_model=AdminDashboard)
def dashboard(repo: Repository = Depends(get_repository)):
    return repo.get_admin_dashboard()


# -----------------
# Profile / socials
# -----------------


@router.get("/profile", response_model=SiteProfile)
def get_profile(repo: Repository = Depends(get_repository)):
    return repo.get_profile()


@router.put("/profile", response_model=SiteProfile)
def update_profile(req: ProfilePayload, repo: Repository = Depends(get_repository)):
    return repo.update_profile(req.merged_with(repo.get_profile()))


@router.get("/socials", response_model=List[SocialLink])
def list_socials(repo: Repository = Depends(get_repository)):
    return repo.list_socials()


@router.put("/socials", response_model=List[SocialLink])
def replace_socials(req: SocialsPayload, repo: Repository = Depends(get_repository)):
    return repo.replace_socials([item.model_dump() for item in req.items])


# -----------------
# Content collections
# -----------------


def _fill_published_at(data: Dict[str, Any]) -> Dict[str, Any]:
    if "published_at" in data and not data["published_at"]:
        data["published_at"] = iso_utc(utcnow())
    return data


def _register_collection(
    path: str,
    label: str,
    payload_model: Type[BaseModel],
    collection: Callable[[Repository], ContentCollection],
) -> None:
    """Mount list/get/create/update/delete routes for one content collection."""
    not_found = f"{label} not found"
    tag = path.strip("/")

    def list_items(repo: Repository = Depends(get_repository)):
        return collection(repo).list()

    def get_item(item_id: str, repo: Repository = Depends(get_repository)):
        item = collection(repo).get(item_id)
        if item is None:
            raise NotFoundError(not_found)
        return item

    def create_item(req: payload_model, repo: Repository = Depends(get_repository)):
        created = collection(repo).create(_fill_published_at(req.model_dump()))
        logger.info("Created %s %s", tag, created.id)
        return created

    def update_item(item_id: str, req: payload_model, repo: Repository = Depends(get_repository)):
        data = _fill_published_at(req.model_dump(exclude={"id"}))
        updated = collection(repo).update(item_id, data)
        if updated is None:
            raise NotFoundError(not_found)
        return updated

    def delete_item(item_id: str, repo: Repository = Depends(get_repository)):
        if not collection(repo).delete(item_id):
            raise NotFoundError(not_found)
        logger.info("Deleted %s %s", tag, item_id)
        return {"success": True}

    router.add_api_route(path, list_items, methods=["GET"], name=f"list_{tag}")
    router.add_api_route(f"{path}/{{item_id}}", get_item, methods=["GET"], name=f"get_{tag}")
    router.add_api_route(path, create_item, methods=["POST"], status_code=201, name=f"create_{tag}")
    router.add_api_route(f"{path}/{{item_id}}", update_item, methods=["PUT"], name=f"update_{tag}")
    router.add_api_route(f"{path}/{{item_id}}", delete_item, methods=["DELETE"], name=f"delete_{tag}")


_register_collection("/projects", "Project", ProjectPayload, lambda repo: repo.projects)
_register_collection("/offers", "Offer", OfferPayload, lambda repo: repo.offers)
_register_collection("/retainers", "Retainer", RetainerPayload, lambda repo: repo.retainers)
_register_collection("/case-studies", "Case study", CaseStudyPayload, lambda repo: repo.case_studies)
_register_collection("/service-pages", "Service page", ServicePagePayload, lambda repo: repo.service_pages)
_register_collection("/blog-posts", "Blog post", BlogPostPayload, lambda repo: repo.blog_posts)


# -----------------
# Intake / analytics
# -----------------


@router.get("/contacts", response_model=List[ContactRequest])
def list_contacts(repo: Repository = Depends(get_repository)):
    return repo.list_contact_requests()


@router.put("/contacts/{contact_id}/status", response_model=ContactRequest)
def update_contact_status(contact_id: str, req: ContactStatusPayload, repo: Repository = Depends(get_repository)):
    try:
        numeric_id = int(contact_id)
    except ValueError:
        numeric_id = 0
    if numeric_id <= 0:
        raise ValidationError("Invalid contact id")
    if req.status not in CONTACT_STATUSES:
        raise ValidationError("Invalid contact status")

    updated = repo.update_contact_status(numeric_id, req.status)
    if updated is None:
        raise NotFoundError("Contact not found")
    return updated


@router.get("/leads", response_model=List[LeadCapture])
def list_leads(repo: Repository = Depends(get_repository)):
    return repo.list_lead_captures()


@router.get("/analytics/events", response_model=List[AnalyticsEvent])
def list_analytics_events(limit: int = Query(default=200), repo: Repository = Depends(get_repository)):
    return repo.list_analytics_events(limit)


@router.get("/analytics/summary", response_model=AnalyticsSummary)
def analytics_summary(repo: Repository = Depends(get_repository)):
    return repo.get_analytics_summary()
