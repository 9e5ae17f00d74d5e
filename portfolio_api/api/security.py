from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from portfolio_api.entities import AdminUser


@dataclass(slots=True)
class Principal:
    """Authenticated admin for a request, plus the session token that proved it."""

    admin: AdminUser
    token: str


def extract_session_token(authorization: Optional[str], x_session_token: Optional[str]) -> str:
    """Pick the session token from the request headers.

    A non-blank X-Session-Token wins. Otherwise the Authorization value is used,
    with a case-insensitive "Bearer " prefix stripped when present.
    """
    if x_session_token and x_session_token.strip():
        return x_session_token.strip()

    if not authorization:
        return ""

    if authorization.lower().startswith("bearer "):
        return authorization[7:].strip()

    return authorization.strip()
