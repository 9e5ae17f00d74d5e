from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Request

from portfolio_api.api.security import Principal, extract_session_token
from portfolio_api.core.settings import Settings
from portfolio_api.errors import AuthError
from portfolio_api.services.auth_service import AuthService
from portfolio_api.services.mailer import ContactNotifier
from portfolio_api.services.repository import Repository


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_repository(request: Request) -> Repository:
    return request.app.state.repository


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_notifier(request: Request) -> ContactNotifier:
    return request.app.state.notifier


# -----------------
# Auth
# -----------------


def get_session_token(
    authorization: Optional[str] = Header(default=None),
    x_session_token: Optional[str] = Header(default=None),
) -> str:
    return extract_session_token(authorization, x_session_token)


def get_current_admin(
    token: str = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> Principal:
    admin = auth.resolve(token)
    if admin is None:
        raise AuthError("Unauthorized")
    return Principal(admin=admin, token=token)
