"""Authentication service: DB-backed sessions, bcrypt passwords."""

from __future__ import annotations

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta

import bcrypt
from fastapi import Request, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from servis.config import get_settings
from servis.db import crud
from servis.models.user import User, UserSession

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session_token"


@dataclass
class AuthContext:
    user_id: str
    role: str  # 'customer' | 'technician' | 'admin'
    email: str
    display_name: str
    technician_id: str | None = None

    def is_customer(self) -> bool:
        return self.role == "customer"

    def is_technician(self) -> bool:
        return self.role == "technician"

    def is_admin(self) -> bool:
        return self.role == "admin"


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def _hash_token(token: str) -> str:
    """SHA-256 hash of a session token for DB storage."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


async def create_session(user: User, db: AsyncSession, ip_address: str = "") -> str:
    """Create a DB-backed session. Returns the raw token (not the hash)."""
    token = secrets.token_urlsafe(48)
    expires_at = datetime.now(timezone.utc) + timedelta(days=get_settings().session_max_age_days)

    session = UserSession(
        user_id=user.id,
        token_hash=_hash_token(token),
        expires_at=expires_at,
        ip_address=ip_address,
    )
    db.add(session)
    await db.commit()
    return token


async def validate_session(token: str, db: AsyncSession) -> User | None:
    """Look up session by token hash, return User if valid."""
    result = await db.execute(
        select(UserSession).where(
            UserSession.token_hash == _hash_token(token),
            UserSession.expires_at > datetime.now(timezone.utc),
        )
    )
    session = result.scalars().first()
    if not session:
        return None

    user = await db.get(User, session.user_id)
    if not user or not user.is_active:
        return None
    return user


async def remove_session(token: str, db: AsyncSession) -> None:
    result = await db.execute(
        select(UserSession).where(UserSession.token_hash == _hash_token(token))
    )
    session = result.scalars().first()
    if session:
        await db.delete(session)
        await db.commit()


def extract_token(request: Request) -> str | None:
    """Bearer header wins over the session cookie."""
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header.split(" ", 1)[1].strip() or None
    return request.cookies.get(SESSION_COOKIE_NAME)


async def build_context(user: User, db: AsyncSession) -> AuthContext:
    technician_id = None
    if user.is_technician():
        tech = await crud.get_technician_for_user(db, user.id)
        technician_id = tech.id if tech else None
    return AuthContext(
        user_id=user.id,
        role=user.role,
        email=user.email,
        display_name=user.display_name,
        technician_id=technician_id,
    )


async def get_current_user(request: Request, db: AsyncSession) -> AuthContext:
    """Resolve the request's session token, return AuthContext or raise 401."""
    token = extract_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = await validate_session(token, db)
    if not user:
        logger.info("Rejected expired or unknown session token")
        raise HTTPException(status_code=401, detail="Session expired")

    return await build_context(user, db)
