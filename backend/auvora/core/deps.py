from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from auvora.core.config import settings
from auvora.core.security import decode_token
from auvora.db.session import get_session
from auvora.importer.store import RecordStore, SqlAlchemyRecordStore
from auvora.schemas.auth import Principal

# The identity provider owns the login flow; this URL is only advertised in
# the OpenAPI docs.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


async def get_current_principal(
    token: Annotated[str, Depends(oauth2_scheme)],
) -> Principal:
    """Validate the bearer JWT and return the caller's identity claims."""
    credentials_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(token)
        if payload.get("type") != "access":
            raise credentials_exc
        subject: str | None = payload.get("sub")
        if not subject:
            raise credentials_exc
    except JWTError:
        raise credentials_exc

    return Principal(
        id=subject,
        role=payload.get("role") or "",
        email=payload.get("email"),
        tenant_id=payload.get("tenant_id"),
    )


async def require_platform_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Raises 403 unless the caller is a platform (console) admin."""
    if principal.role != settings.PLATFORM_ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role '{principal.role}' is not permitted for this action.",
        )
    return principal


async def get_record_store(
    db: Annotated[AsyncSession, Depends(get_session)],
) -> RecordStore:
    """Request-scoped record store over the current DB session."""
    return SqlAlchemyRecordStore(db)
