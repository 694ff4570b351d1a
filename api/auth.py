import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database import get_db
from models import User
from schemas.auth import LoginRequest, LoginResponse, UserSchema
from services.auth import authenticate, issue_session_token, resolve_session_user
from services.errors import InvalidCredentialsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

MSG_INVALID_CREDENTIALS = "Credenciales inválidas"


def _user_to_response(user: User) -> UserSchema:
    return UserSchema(id=user.id, name=user.name, email=user.email)


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    email = (body.email or "").strip()
    logger.info("Login attempt for %s", email or "<missing>")
    if not email or not body.password:
        raise HTTPException(status_code=400, detail="Faltan credenciales (correo y contraseña).")
    try:
        user = await authenticate(db, email, body.password)
        token = await issue_session_token(db, user, settings.session_duration_hours)
    except InvalidCredentialsError:
        raise HTTPException(status_code=401, detail=MSG_INVALID_CREDENTIALS)
    except SQLAlchemyError:
        logger.exception("Login query failed for %s", email)
        raise HTTPException(
            status_code=500,
            detail="Error interno del servidor al intentar iniciar sesión",
        )
    logger.info("User %s authenticated", user.id)
    return LoginResponse(
        message="Autenticación exitosa",
        token=token,
        user=_user_to_response(user),
    )


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@router.get("/me", response_model=UserSchema)
async def me(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    user = await resolve_session_user(db, _bearer_token(authorization))
    if not user:
        raise HTTPException(status_code=401, detail="Authentication required")
    return _user_to_response(user)
