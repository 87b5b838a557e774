"""Auth API: login, logout, current user."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from servis.config import get_settings
from servis.db import crud
from servis.db.engine import get_db
from servis.dependencies import require_auth
from servis.schemas import APIResponse, LoginRequest, UserRead
from servis.services.auth import (
    AuthContext, SESSION_COOKIE_NAME,
    build_context, create_session, extract_token, remove_session, verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _user_read(auth: AuthContext) -> UserRead:
    return UserRead(
        id=auth.user_id,
        email=auth.email,
        display_name=auth.display_name,
        role=auth.role,
        technician_id=auth.technician_id,
    )


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    user = await crud.get_user_by_email(db, body.email.strip().lower())
    if not user or not user.is_active or not verify_password(body.password, user.password_hash):
        logger.warning("Failed login for %s", body.email)
        raise HTTPException(401, "Invalid email or password")

    ip = request.client.host if request.client else ""
    token = await create_session(user, db, ip_address=ip)
    auth = await build_context(user, db)

    response = APIResponse(success=True, data={"token": token, "user": _user_read(auth)})
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        httponly=True,
        samesite="lax",
        max_age=get_settings().session_max_age_days * 86400,
    )
    return response


@router.post("/logout")
async def logout(
    request: Request,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    token = extract_token(request)
    if token:
        await remove_session(token, db)
    response = APIResponse(success=True, message="Logged out")
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response


@router.get("/me")
async def me(auth: AuthContext = Depends(require_auth)):
    return APIResponse(success=True, data=_user_read(auth))
