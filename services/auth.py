"""
Operator authentication against the `users` table plus opaque bearer sessions.
"""
from __future__ import annotations

import asyncio
import hashlib
import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import AuthSession, User
from services.errors import InvalidCredentialsError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, stored_hash: Optional[str]) -> bool:
    if not password or not stored_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def _token_hash(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


async def authenticate(session: AsyncSession, email: str, password: str) -> User:
    """
    Return the single user with this email whose password matches.
    No match, several matches and a wrong password all raise InvalidCredentialsError.
    """
    result = await session.execute(select(User).where(User.email == email).limit(2))
    users = result.scalars().all()
    if len(users) != 1:
        logger.info("Login rejected for %s: %d matching user(s)", email, len(users))
        raise InvalidCredentialsError()
    user = users[0]
    # bcrypt is deliberately slow; keep it off the event loop.
    if not await asyncio.to_thread(verify_password, password, user.password_hash):
        logger.info("Login rejected for %s: password mismatch", email)
        raise InvalidCredentialsError()
    return user


async def issue_session_token(session: AsyncSession, user: User, duration_hours: int) -> str:
    token = secrets.token_urlsafe(32)
    session.add(
        AuthSession(
            id=str(uuid.uuid4()),
            user_id=user.id,
            token_hash=_token_hash(token),
            expires_at=datetime.now(timezone.utc) + timedelta(hours=duration_hours),
        )
    )
    await session.flush()
    return token


async def resolve_session_user(session: AsyncSession, token: Optional[str]) -> Optional[User]:
    if not token:
        return None
    result = await session.execute(
        select(User)
        .join(AuthSession, AuthSession.user_id == User.id)
        .where(
            AuthSession.token_hash == _token_hash(token),
            AuthSession.expires_at > datetime.now(timezone.utc),
        )
    )
    return result.scalars().first()
