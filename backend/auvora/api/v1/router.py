from fastapi import APIRouter

from auvora.api.v1 import demos, import_routes, tenants

api_router = APIRouter()

api_router.include_router(tenants.router, prefix="/admin/tenants", tags=["tenants"])
api_router.include_router(demos.router, prefix="/admin/demos", tags=["demos"])
api_router.include_router(import_routes.router, prefix="/admin/import", tags=["import"])
