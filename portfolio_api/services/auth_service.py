from __future__ import annotations

import datetime as dt
import logging
import secrets
from typing import Callable, Optional

from portfolio_api.db.mappers import iso_utc, map_admin
from portfolio_api.db.models import AdminRow, AdminSessionRow, utcnow
from portfolio_api.db.session import DBRuntime
from portfolio_api.entities import AdminSession, AdminUser
from portfolio_api.services.passwords import PasswordHasher

logger = logging.getLogger(__name__)

Clock = Callable[[], dt.datetime]


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Admin login and opaque bearer sessions.

    Sessions go Active -> Expired (once ``now >= expires_at``) -> Deleted (swept
    or revoked). Expired rows are swept lazily on login and resolve; resolve
    never returns an expired session even when the sweep has not removed it.
    """

    def __init__(
        self,
        runtime: DBRuntime,
        *,
        hasher: Optional[PasswordHasher] = None,
        session_ttl_days: int = 30,
        clock: Optional[Clock] = None,
    ) -> None:
        self._rt = runtime
        self._hasher = hasher or PasswordHasher()
        self._ttl = dt.timedelta(days=max(1, int(session_ttl_days)))
        self._clock = clock or utcnow

    def login(self, email: Optional[str], password: Optional[str]) -> Optional[AdminSession]:
        email = normalize_email(email)
        if not email or not password:
            return None

        with self._rt.SessionLocal() as db:
            admin = db.query(AdminRow).filter(AdminRow.email == email).one_or_none()
            if admin is None or not self._hasher.verify(password, admin.password_hash):
                # Intentionally ambiguous (don't reveal existence)
                logger.info("Admin login failed for %s", email)
                return None
            user = map_admin(admin)

        self.sweep_expired()

        now = self._clock()
        expires_at = now + self._ttl
        token = secrets.token_hex(32)
        with self._rt.SessionLocal.begin() as db:
            db.add(AdminSessionRow(admin_id=user.id, token=token, created_at=now, expires_at=expires_at))

        logger.info("Admin %s logged in", email)
        return AdminSession(token=token, user=user, expires_at=iso_utc(expires_at))

    def resolve(self, token: Optional[str]) -> Optional[AdminUser]:
        if not token:
            return None

        self.sweep_expired()

        now = self._clock()
        with self._rt.SessionLocal() as db:
            row = (
                db.query(AdminSessionRow)
                .filter(AdminSessionRow.token == token, AdminSessionRow.expires_at > now)
                .one_or_none()
            )
            if row is None or row.admin is None:
                return None
            return map_admin(row.admin)

    def revoke(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._rt.SessionLocal.begin() as db:
            db.query(AdminSessionRow).filter(AdminSessionRow.token == token).delete(synchronize_session=False)

    def sweep_expired(self) -> int:
        now = self._clock()
        with self._rt.SessionLocal.begin() as db:
            deleted = (
                db.query(AdminSessionRow)
                .filter(AdminSessionRow.expires_at <= now)
                .delete(synchronize_session=False)
            )
        if deleted:
            logger.debug("Swept %d expired admin sessions", deleted)
        return int(deleted or 0)

    def verify_any_admin_password(self, password: Optional[str]) -> bool:
        """True when ``password`` matches any admin's credential (staging unlock)."""
        if not password:
            return False
        with self._rt.SessionLocal() as db:
            hashes = [h for (h,) in db.query(AdminRow.password_hash).all()]
        return any(self._hasher.verify(password, h) for h in hashes)
