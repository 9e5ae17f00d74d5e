from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from portfolio_api.api.deps import get_notifier, get_repository
from portfolio_api.api.schemas import AnalyticsEventPayload, ContactPayload, LeadPayload
from portfolio_api.entities import (
    BlogPost,
    CaseStudy,
    OfferPackage,
    Project,
    RetainerPlan,
    ServiceLandingPage,
    SiteBundle,
    SocialLink,
)
from portfolio_api.errors import NotFoundError
from portfolio_api.services.mailer import ContactNotifier
from portfolio_api.services.repository import Repository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["public"])


@router.get("/site", response_model=SiteBundle)
def site(repo: Repository = Depends(get_repository)):
    return repo.get_site_bundle()


@router.get("/about")
def about(repo: Repository = Depends(get_repository)):
    return repo.get_profile().model_dump(by_alias=True, exclude={"updated_at"})


@router.get("/socials", response_model=List[SocialLink])
def socials(repo: Repository = Depends(get_repository)):
    return repo.list_socials()


@router.get("/projects", response_model=List[Project])
def projects(repo: Repository = Depends(get_repository)):
    return repo.projects.list()


@router.get("/projects/{project_id}", response_model=Project)
def project(project_id: str, repo: Repository = Depends(get_repository)):
    item = repo.projects.get(project_id)
    if item is None:
        raise NotFoundError("Project not found")
    return item


@router.get("/offers", response_model=List[OfferPackage])
def offers(repo: Repository = Depends(get_repository)):
    return repo.offers.list()


@router.get("/retainers", response_model=List[RetainerPlan])
def retainers(repo: Repository = Depends(get_repository)):
    return repo.retainers.list()


@router.get("/case-studies", response_model=List[CaseStudy])
def case_studies(repo: Repository = Depends(get_repository)):
    return repo.case_studies.list()


@router.get("/service-pages", response_model=List[ServiceLandingPage])
def service_pages(repo: Repository = Depends(get_repository)):
    return repo.service_pages.list()


@router.get("/blog-posts", response_model=List[BlogPost])
def blog_posts(repo: Repository = Depends(get_repository)):
    return repo.blog_posts.list()


@router.post("/contact")
def contact(
    req: ContactPayload,
    repo: Repository = Depends(get_repository),
    notifier: ContactNotifier = Depends(get_notifier),
):
    saved = repo.create_contact_request(req.model_dump())
    email_sent = notifier.notify_contact_request(saved)
    logger.info("Contact request %s stored (notified=%s)", saved.id, email_sent)
    return {
        "success": True,
        "requestId": saved.id,
        "message": "Message sent successfully" if email_sent else "Message received successfully",
    }


@router.post("/leads")
def leads(req: LeadPayload, repo: Repository = Depends(get_repository)):
    lead = repo.create_lead_capture(req.model_dump())
    return {"success": True, "leadId": lead.id}


@router.post("/analytics/event")
def analytics_event(req: AnalyticsEventPayload, repo: Repository = Depends(get_repository)):
    repo.create_analytics_event(req.event_name, req.path, req.metadata)
    return {"success": True}
