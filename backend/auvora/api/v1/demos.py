"""Demo tenant endpoints: create a seeded showcase tenant, or reset one."""
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from auvora.core.deps import get_record_store, require_platform_admin
from auvora.db.session import get_session
from auvora.importer.store import RecordStore
from auvora.models.tenant import DEFAULT_SECONDARY_COLOR, DEFAULT_TIMEZONE, Tenant
from auvora.schemas.tenant import (
    DemoCreate,
    DemoCreateResponse,
    DemoResetResponse,
    TenantListResponse,
    TenantOut,
)
from auvora.services.demo_seed import industry_color, reset_demo_data, seed_demo_data

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_platform_admin)])


def demo_tenant_values(name: str, industry: str) -> dict:
    slug = industry.lower()
    return {
        "name": name,
        "subdomain": f"demo-{slug}-{int(time.time() * 1000)}",
        "is_demo": True,
        "demo_industry": industry,
        "primary_color": industry_color(industry),
        "secondary_color": DEFAULT_SECONDARY_COLOR,
        "owner_name": "Demo User",
        "owner_email": f"demo-{slug}@auvora.demo",
        "timezone": DEFAULT_TIMEZONE,
        "onboarding_status": "active",
        "subscription_status": "demo",
    }


# ─── GET /admin/demos ───

@router.get("", response_model=TenantListResponse, summary="List demo tenants, newest first")
async def list_demos(db: Annotated[AsyncSession, Depends(get_session)]):
    result = await db.execute(
        select(Tenant).where(Tenant.is_demo.is_(True)).order_by(Tenant.created_at.desc())
    )
    demos = result.scalars().all()
    return TenantListResponse(items=[TenantOut.model_validate(t) for t in demos], total=len(demos))


# ─── POST /admin/demos ───

@router.post(
    "",
    response_model=DemoCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a demo tenant seeded with synthetic data",
)
async def create_demo(
    body: DemoCreate,
    store: Annotated[RecordStore, Depends(get_record_store)],
):
    tenant = await store.insert("tenants", demo_tenant_values(body.name, body.industry))
    report = await seed_demo_data(store, tenant["id"], body.industry)
    logger.info("Demo tenant %s created for industry %s", tenant["id"], body.industry)
    return DemoCreateResponse(
        demo=TenantOut.model_validate(tenant),
        seeded=report.summary(),
        message="Demo tenant created successfully",
    )


# ─── POST /admin/demos/{tenant_id}/reset ───

@router.post("/{tenant_id}/reset", response_model=DemoResetResponse, summary="Wipe and reseed a demo tenant")
async def reset_demo(
    tenant_id: uuid.UUID,
    store: Annotated[RecordStore, Depends(get_record_store)],
):
    tenant = await store.get("tenants", tenant_id)
    if tenant is None or not tenant.get("is_demo"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Demo tenant not found")

    report = await reset_demo_data(store, tenant_id, tenant.get("demo_industry"))
    await store.update("tenants", tenant_id, {"updated_at": datetime.now(timezone.utc)})
    return DemoResetResponse(
        success=True,
        seeded=report.summary(),
        message="Demo data reset successfully",
    )
