"""Platform-admin tenant provisioning endpoints."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from auvora.core.deps import require_platform_admin
from auvora.db.session import get_session
from auvora.models.member import Member
from auvora.models.tenant import (
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    DEFAULT_TIMEZONE,
    Tenant,
)
from auvora.schemas.tenant import (
    TenantCreate,
    TenantDetail,
    TenantListResponse,
    TenantOut,
    TenantUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_platform_admin)])

# Columns a PATCH may set but never to null.
REQUIRED_FIELDS = frozenset({
    "name", "subdomain", "primary_color", "secondary_color",
    "timezone", "onboarding_status", "subscription_status",
})


async def _get_tenant_or_404(db: AsyncSession, tenant_id: uuid.UUID) -> Tenant:
    result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
    tenant = result.scalar_one_or_none()
    if tenant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")
    return tenant


async def _ensure_subdomain_free(
    db: AsyncSession, subdomain: str, exclude_id: uuid.UUID | None = None
) -> None:
    stmt = select(Tenant).where(Tenant.subdomain == subdomain)
    if exclude_id is not None:
        stmt = stmt.where(Tenant.id != exclude_id)
    existing = await db.execute(stmt)
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Subdomain '{subdomain}' is already taken",
        )


# ─── GET /admin/tenants ───

@router.get("", response_model=TenantListResponse, summary="List tenants, newest first")
async def list_tenants(db: Annotated[AsyncSession, Depends(get_session)]):
    total = (await db.execute(select(func.count()).select_from(Tenant))).scalar_one()
    result = await db.execute(select(Tenant).order_by(Tenant.created_at.desc()))
    tenants = result.scalars().all()
    return TenantListResponse(items=[TenantOut.model_validate(t) for t in tenants], total=total)


# ─── POST /admin/tenants ───

@router.post(
    "",
    response_model=TenantOut,
    status_code=status.HTTP_201_CREATED,
    summary="Provision a new tenant",
)
async def create_tenant(
    body: TenantCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    """Create a tenant in ``provisioned`` / ``trial`` state.

    The owner's login is provisioned by the identity provider; only the
    owner's name and email are recorded here.
    """
    await _ensure_subdomain_free(db, body.subdomain)

    tenant = Tenant(
        name=body.name,
        subdomain=body.subdomain,
        custom_domain=body.custom_domain,
        logo_url=body.logo_url,
        primary_color=body.primary_color or DEFAULT_PRIMARY_COLOR,
        secondary_color=body.secondary_color or DEFAULT_SECONDARY_COLOR,
        owner_name=body.owner_name,
        owner_email=str(body.owner_email),
        business_address=body.business_address,
        business_phone=body.business_phone,
        timezone=body.timezone or DEFAULT_TIMEZONE,
        onboarding_status="provisioned",
        subscription_status="trial",
        is_demo=False,
    )
    db.add(tenant)
    await db.commit()
    await db.refresh(tenant)
    logger.info("Tenant provisioned: %s (%s)", tenant.subdomain, tenant.id)
    return TenantOut.model_validate(tenant)


# ─── GET /admin/tenants/{tenant_id} ───

@router.get("/{tenant_id}", response_model=TenantDetail, summary="Get a tenant with its member count")
async def get_tenant(
    tenant_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    tenant = await _get_tenant_or_404(db, tenant_id)
    member_count = (
        await db.execute(select(func.count()).select_from(Member).where(Member.tenant_id == tenant_id))
    ).scalar_one()
    return TenantDetail.model_validate(
        {**TenantOut.model_validate(tenant).model_dump(), "member_count": member_count}
    )


# ─── PATCH /admin/tenants/{tenant_id} ───

@router.patch("/{tenant_id}", response_model=TenantOut, summary="Update tenant settings")
async def update_tenant(
    tenant_id: uuid.UUID,
    body: TenantUpdate,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    """Apply the allow-listed fields present in the body; others are ignored."""
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No valid fields to update")
    nulled = sorted(field for field in REQUIRED_FIELDS & updates.keys() if updates[field] is None)
    if nulled:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Fields cannot be null: {', '.join(nulled)}",
        )

    tenant = await _get_tenant_or_404(db, tenant_id)
    if "subdomain" in updates and updates["subdomain"] != tenant.subdomain:
        await _ensure_subdomain_free(db, updates["subdomain"], exclude_id=tenant_id)

    for field, value in updates.items():
        setattr(tenant, field, value)
    await db.commit()
    await db.refresh(tenant)
    logger.info("Tenant %s updated: %s", tenant_id, sorted(updates))
    return TenantOut.model_validate(tenant)


# ─── DELETE /admin/tenants/{tenant_id} ───

@router.delete("/{tenant_id}", summary="Delete a tenant and all of its records")
async def delete_tenant(
    tenant_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    # Members, leads, staff, classes and import jobs go with it (ON DELETE CASCADE).
    tenant = await _get_tenant_or_404(db, tenant_id)
    await db.delete(tenant)
    await db.commit()
    logger.info("Tenant deleted: %s (%s)", tenant.subdomain, tenant_id)
    return {"message": "Tenant deleted successfully"}
