"""Single data-access surface over the content, intake and analytics tables.

Every operation opens its own short session from the shared ``DBRuntime``.
Not-found is reported as ``None`` / ``False``; storage faults propagate.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import func, inspect, or_

from portfolio_api.db.mappers import (
    dump_json_array,
    map_analytics,
    map_blog_post,
    map_case_study,
    map_contact,
    map_lead,
    map_offer,
    map_profile,
    map_project,
    map_retainer,
    map_service_page,
    map_social,
    safe_json,
)
from portfolio_api.db.models import (
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
    utcnow,
)
from portfolio_api.db.session import DBRuntime
from portfolio_api.entities import (
    CONTACT_STATUSES,
    AdminDashboard,
    AnalyticsEvent,
    AnalyticsSummary,
    ContactRequest,
    EventCount,
    LeadCapture,
    PathCount,
    SiteBundle,
    SiteProfile,
    SocialLink,
)
from portfolio_api.errors import ConflictError, RepositoryError, ValidationError

logger = logging.getLogger(__name__)

E = TypeVar("E")
Clock = Callable[[], dt.datetime]

_TIMESTAMPS = ("created_at", "updated_at")


class ContentCollection(Generic[E]):
    """CRUD over one content table keyed by a string id."""

    def __init__(
        self,
        runtime: DBRuntime,
        clock: Clock,
        *,
        model: type,
        mapper: Callable[[Any], E],
        order_by: Sequence[Any],
        label: str,
        json_fields: Iterable[str] = (),
    ) -> None:
        self._rt = runtime
        self._clock = clock
        self._model = model
        self._mapper = mapper
        self._order_by = tuple(order_by) + (model.id.asc(),)
        self._label = label
        self._json_fields = frozenset(json_fields)
        self._columns = frozenset(attr.key for attr in inspect(model).column_attrs)
        self._has_created_at = "created_at" in self._columns
        self._unique = tuple(
            attr.key for attr in inspect(model).column_attrs if any(col.unique for col in attr.columns)
        )

    def _values(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in self._columns or key in _TIMESTAMPS:
                continue
            values[key] = dump_json_array(value) if key in self._json_fields else value
        return values

    def _clashes(self, db, values: Mapping[str, Any], exclude_id: Optional[str] = None) -> bool:
        """True when another row already holds this id or one of the unique values."""
        model = self._model
        checks = [model.id == values["id"]] if exclude_id is None else []
        checks += [getattr(model, key) == values[key] for key in self._unique if key in values]
        if not checks:
            return False
        query = db.query(model.id).filter(or_(*checks))
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        return query.first() is not None

    def list(self) -> List[E]:
        with self._rt.SessionLocal() as db:
            rows = db.query(self._model).order_by(*self._order_by).all()
            return [self._mapper(r) for r in rows]

    def get(self, item_id: str) -> Optional[E]:
        with self._rt.SessionLocal() as db:
            row = db.get(self._model, item_id)
            return self._mapper(row) if row is not None else None

    def count(self) -> int:
        with self._rt.SessionLocal() as db:
            return int(db.query(func.count(self._model.id)).scalar() or 0)

    def create(self, data: Mapping[str, Any]) -> E:
        values = self._values(data)
        item_id = values.get("id")
        if not item_id:
            raise ValidationError(f"{self._label} id is required")

        now = self._clock()
        values["updated_at"] = now
        if self._has_created_at:
            values["created_at"] = now

        with self._rt.SessionLocal.begin() as db:
            if self._clashes(db, values):
                raise ConflictError(f"{self._label} id already exists")
            db.add(self._model(**values))

        created = self.get(item_id)
        if created is None:
            raise RepositoryError(f"{self._label} was not created")
        return created

    def update(self, item_id: str, data: Mapping[str, Any]) -> Optional[E]:
        values = self._values(data)
        values.pop("id", None)

        with self._rt.SessionLocal.begin() as db:
            row = db.get(self._model, item_id)
            if row is None:
                return None
            if self._clashes(db, values, exclude_id=item_id):
                raise ConflictError(f"{self._label} conflicts with an existing entry")
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = self._clock()

        return self.get(item_id)

    def delete(self, item_id: str) -> bool:
        with self._rt.SessionLocal.begin() as db:
            deleted = db.query(self._model).filter(self._model.id == item_id).delete(synchronize_session=False)
        return bool(deleted)


class Repository:
    def __init__(self, runtime: DBRuntime, *, clock: Optional[Clock] = None) -> None:
        self._rt = runtime
        self._clock = clock or utcnow

        def collection(model, mapper, order_by, label, json_fields=()):
            return ContentCollection(
                runtime,
                self._clock,
                model=model,
                mapper=mapper,
                order_by=order_by,
                label=label,
                json_fields=json_fields,
            )

        self.projects = collection(
            ProjectRow,
            map_project,
            (ProjectRow.updated_at.desc(), ProjectRow.created_at.desc()),
            "Project",
            ("frontend", "backend"),
        )
        self.offers = collection(
            OfferRow,
            map_offer,
            (OfferRow.sort_order.asc(), OfferRow.updated_at.desc()),
            "Offer",
            ("includes",),
        )
        self.retainers = collection(
            RetainerPlanRow,
            map_retainer,
            (RetainerPlanRow.sort_order.asc(), RetainerPlanRow.updated_at.desc()),
            "Retainer",
            ("includes",),
        )
        self.case_studies = collection(
            CaseStudyRow,
            map_case_study,
            (CaseStudyRow.featured.desc(), CaseStudyRow.updated_at.desc()),
            "Case study",
        )
        self.service_pages = collection(
            ServicePageRow,
            map_service_page,
            (ServicePageRow.updated_at.desc(),),
            "Service page",
        )
        self.blog_posts = collection(
            BlogPostRow,
            map_blog_post,
            (BlogPostRow.published_at.desc(), BlogPostRow.updated_at.desc()),
            "Blog post",
        )

    # -----------------
    # Profile / socials
    # -----------------

    def get_profile(self) -> SiteProfile:
        with self._rt.SessionLocal() as db:
            row = db.get(SiteProfileRow, 1)
            if row is None:
                raise RepositoryError("Site profile not found")
            return map_profile(row)

    def update_profile(self, data: Mapping[str, Any]) -> SiteProfile:
        columns = {attr.key for attr in inspect(SiteProfileRow).column_attrs} - {"id", "updated_at"}
        with self._rt.SessionLocal.begin() as db:
            row = db.get(SiteProfileRow, 1)
            if row is None:
                raise RepositoryError("Site profile not found")
            for key, value in data.items():
                if key in columns:
                    setattr(row, key, value)
            row.updated_at = self._clock()
        return self.get_profile()

    def list_socials(self) -> List[SocialLink]:
        with self._rt.SessionLocal() as db:
            rows = db.query(SocialLinkRow).order_by(SocialLinkRow.sort_order.asc(), SocialLinkRow.id.asc()).all()
            return [map_social(r) for r in rows]

    def replace_socials(self, items: Sequence[Mapping[str, Any]]) -> List[SocialLink]:
        """Replace every social link atomically; any failure leaves the old set in place."""
        with self._rt.SessionLocal.begin() as db:
            db.query(SocialLinkRow).delete(synchronize_session=False)
            for index, item in enumerate(items):
                db.add(
                    SocialLinkRow(
                        platform=item.get("platform"),
                        url=item.get("url"),
                        icon=item.get("icon"),
                        sort_order=item.get("sort_order") or index + 1,
                    )
                )
            db.flush()
        return self.list_socials()

    # -----------------
    # Contact requests / leads
    # -----------------

    def create_contact_request(self, data: Mapping[str, Any]) -> ContactRequest:
        with self._rt.SessionLocal.begin() as db:
            row = ContactRequestRow(
                name=data.get("name", ""),
                email=data.get("email", ""),
                subject=data.get("subject", ""),
                message=data.get("message", ""),
                budget_range=data.get("budget_range") or "",
                timeline=data.get("timeline") or "",
                project_type=data.get("project_type") or "",
                source=data.get("source") or "",
                status="new",
                created_at=self._clock(),
            )
            db.add(row)
            db.flush()
            new_id = row.id

        with self._rt.SessionLocal() as db:
            created = db.get(ContactRequestRow, new_id)
            if created is None:
                raise RepositoryError("Contact request was not created")
            return map_contact(created)

    def list_contact_requests(self) -> List[ContactRequest]:
        with self._rt.SessionLocal() as db:
            rows = (
                db.query(ContactRequestRow)
                .order_by(ContactRequestRow.created_at.desc(), ContactRequestRow.id.desc())
                .all()
            )
            return [map_contact(r) for r in rows]

    def update_contact_status(self, contact_id: int, status: str) -> Optional[ContactRequest]:
        if status not in CONTACT_STATUSES:
            raise ValidationError("Invalid contact status")
        with self._rt.SessionLocal.begin() as db:
            row = db.get(ContactRequestRow, contact_id)
            if row is None:
                return None
            row.status = status
            db.flush()
            return map_contact(row)

    def create_lead_capture(self, data: Mapping[str, Any]) -> LeadCapture:
        with self._rt.SessionLocal.begin() as db:
            row = LeadCaptureRow(
                email=data.get("email", ""),
                name=data.get("name") or "",
                company=data.get("company") or "",
                website=data.get("website") or "",
                use_case=data.get("use_case") or "",
                created_at=self._clock(),
            )
            db.add(row)
            db.flush()
            new_id = row.id

        with self._rt.SessionLocal() as db:
            created = db.get(LeadCaptureRow, new_id)
            if created is None:
                raise RepositoryError("Lead capture was not created")
            return map_lead(created)

    def list_lead_captures(self) -> List[LeadCapture]:
        with self._rt.SessionLocal() as db:
            rows = (
                db.query(LeadCaptureRow)
                .order_by(LeadCaptureRow.created_at.desc(), LeadCaptureRow.id.desc())
                .all()
            )
            return [map_lead(r) for r in rows]

    # -----------------
    # Analytics
    # -----------------

    def create_analytics_event(self, event_name: str, path: str, metadata: Optional[Mapping[str, Any]] = None) -> None:
        with self._rt.SessionLocal.begin() as db:
            db.add(
                AnalyticsEventRow(
                    event_name=event_name,
                    path=path,
                    meta=safe_json(dict(metadata or {})),
                    created_at=self._clock(),
                )
            )

    def list_analytics_events(self, limit: int = 200) -> List[AnalyticsEvent]:
        limit = max(1, min(1000, int(limit)))
        with self._rt.SessionLocal() as db:
            rows = (
                db.query(AnalyticsEventRow)
                .order_by(AnalyticsEventRow.created_at.desc(), AnalyticsEventRow.id.desc())
                .limit(limit)
                .all()
            )
            return [map_analytics(r) for r in rows]

    def get_analytics_summary(self) -> AnalyticsSummary:
        with self._rt.SessionLocal() as db:
            total = db.query(func.count(AnalyticsEventRow.id)).scalar() or 0

            event_count = func.count(AnalyticsEventRow.id)
            by_event = (
                db.query(AnalyticsEventRow.event_name, event_count)
                .group_by(AnalyticsEventRow.event_name)
                .order_by(event_count.desc(), AnalyticsEventRow.event_name.asc())
                .limit(10)
                .all()
            )
            top_paths = (
                db.query(AnalyticsEventRow.path, event_count)
                .group_by(AnalyticsEventRow.path)
                .order_by(event_count.desc(), AnalyticsEventRow.path.asc())
                .limit(10)
                .all()
            )

        return AnalyticsSummary(
            total_events=int(total),
            by_event=[EventCount(event_name=name, count=int(n)) for name, n in by_event],
            top_paths=[PathCount(path=path, count=int(n)) for path, n in top_paths],
        )

    # -----------------
    # Aggregates
    # -----------------

    def get_site_bundle(self) -> SiteBundle:
        return SiteBundle(
            profile=self.get_profile(),
            socials=self.list_socials(),
            projects=self.projects.list(),
            offers=self.offers.list(),
            retainers=self.retainers.list(),
            case_studies=self.case_studies.list(),
            service_pages=self.service_pages.list(),
            blog_posts=self.blog_posts.list(),
        )

    def get_admin_dashboard(self) -> AdminDashboard:
        with self._rt.SessionLocal() as db:
            open_contacts = (
                db.query(func.count(ContactRequestRow.id))
                .filter(ContactRequestRow.status != "archived")
                .scalar()
                or 0
            )
            total_leads = db.query(func.count(LeadCaptureRow.id)).scalar() or 0

        return AdminDashboard(
            total_projects=self.projects.count(),
            total_offers=self.offers.count(),
            total_retainers=self.retainers.count(),
            total_case_studies=self.case_studies.count(),
            open_contacts=int(open_contacts),
            total_leads=int(total_leads),
        )
