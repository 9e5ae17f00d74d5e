from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from portfolio_api.api.deps import get_auth_service, get_current_admin
from portfolio_api.api.schemas import LoginRequest, StagingUnlockRequest
from portfolio_api.api.security import Principal
from portfolio_api.core.text import is_valid_email
from portfolio_api.entities import AdminSession
from portfolio_api.errors import AuthError, ValidationError
from portfolio_api.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

MAX_PASSWORD_LENGTH = 255


@router.post("/login", response_model=AdminSession)
def login(req: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    if not req.email or not req.password or not is_valid_email(req.email):
        raise ValidationError("Invalid email or password")

    session = auth.login(req.email, req.password)
    if session is None:
        raise AuthError("Invalid credentials")
    return session


@router.post("/logout")
def logout(principal: Principal = Depends(get_current_admin), auth: AuthService = Depends(get_auth_service)):
    auth.revoke(principal.token)
    logger.info("Admin %s logged out", principal.admin.email)
    return {"success": True}


@router.get("/me")
def me(principal: Principal = Depends(get_current_admin)):
    return {"user": principal.admin}


@router.post("/staging-unlock")
def staging_unlock(req: StagingUnlockRequest, auth: AuthService = Depends(get_auth_service)):
    if not req.password or len(req.password) > MAX_PASSWORD_LENGTH:
        raise ValidationError("Invalid password")

    if not auth.verify_any_admin_password(req.password):
        raise AuthError("Invalid password")
    return {"success": True}
