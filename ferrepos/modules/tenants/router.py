from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from uuid import UUID
from typing import Optional

from ferrepos.core.config import settings
from ferrepos.dependencies.dbDependecies import get_db
from ferrepos.dependencies.tenantDependencies import AdminContext
from ferrepos.modules.tenants.service import TenantService
from ferrepos.modules.tenants.schemas import (
    TenantOut, TenantUpdate, TenantStatusUpdate, TenantList, TenantStats
)

tenants_router = APIRouter(prefix="/admin/tenants", tags=["Admin - Tenants"])


@tenants_router.get("/", response_model=TenantList)
def list_tenants(
    auth_context: AdminContext,
    is_active: Optional[bool] = Query(None, description="Filtrar por estado"),
    search: Optional[str] = Query(None, description="Buscar por nombre o email"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    return TenantService(db).get_tenants(is_active, search, limit, offset)


@tenants_router.get("/stats", response_model=TenantStats)
def get_stats(
    auth_context: AdminContext,
    db: Session = Depends(get_db)
):
    """Totales de ferreterías y recurrencia mensual (MRR)"""
    return TenantService(db).get_stats()


@tenants_router.get("/{tenant_id}", response_model=TenantOut)
def get_tenant(
    tenant_id: UUID,
    auth_context: AdminContext,
    db: Session = Depends(get_db)
):
    return TenantService(db).get_tenant_by_id(tenant_id)


@tenants_router.patch("/{tenant_id}", response_model=TenantOut)
def update_tenant(
    tenant_id: UUID,
    data: TenantUpdate,
    auth_context: AdminContext,
    db: Session = Depends(get_db)
):
    return TenantService(db).update_tenant(tenant_id, data)


@tenants_router.patch("/{tenant_id}/status", response_model=TenantOut)
def set_tenant_status(
    tenant_id: UUID,
    data: TenantStatusUpdate,
    auth_context: AdminContext,
    db: Session = Depends(get_db)
):
    return TenantService(db).set_status(tenant_id, data.is_active)


@tenants_router.delete("/{tenant_id}")
def delete_tenant(
    tenant_id: UUID,
    auth_context: AdminContext,
    db: Session = Depends(get_db)
):
    return TenantService(db).deactivate_tenant(tenant_id)
