"""
API Router for subscription management.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from uuid import UUID

from ferrepos.core.config import settings
from ferrepos.dependencies.dbDependecies import get_db
from ferrepos.dependencies.tenantDependencies import TenantContext, AdminContext
from ferrepos.modules.tenants.models import Tenant
from ferrepos.modules.products.service import ProductService

from . import crud, schemas
from .models import PlanCode, InvoiceStatus

router = APIRouter(
    prefix="/subscriptions",
    tags=["Subscriptions"],
    responses={404: {"description": "Not found"}}
)

admin_invoices_router = APIRouter(
    prefix="/admin/invoices",
    tags=["Admin - Invoices"],
    responses={404: {"description": "Not found"}}
)


# ===== PLAN ENDPOINTS =====

@router.get("/plans", response_model=List[schemas.PlanOut])
def get_plans(db: Session = Depends(get_db)):
    """
    Obtener lista de planes disponibles.

    Este endpoint es público y no requiere autenticación.
    """
    return crud.get_plans(db)


@router.get("/plans/{code}", response_model=schemas.PlanOut)
def get_plan(code: PlanCode, db: Session = Depends(get_db)):
    plan = crud.get_plan_by_code(db, code)
    if not plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Plan no encontrado"
        )
    return plan


@router.get("/current", response_model=schemas.SubscriptionCurrent)
def get_current_subscription(
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    """Plan vigente de la ferretería y uso de su límite de productos."""
    tenant = db.query(Tenant).filter(Tenant.id == auth_context.tenant_id).first()
    plan = crud.get_plan_by_code(db, tenant.plan_code)
    if not plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Plan {tenant.plan_code} no encontrado"
        )

    used = ProductService(db).count_products(tenant.id)
    remaining = max(plan.max_products - used, 0) if plan.max_products is not None else None

    return schemas.SubscriptionCurrent(
        tenant_id=tenant.id,
        tenant_name=tenant.name,
        plan=schemas.PlanOut.model_validate(plan),
        products_used=used,
        products_remaining=remaining,
        can_add_products=remaining is None or remaining > 0
    )


# ===== ADMIN: TENANT INVOICES =====

@admin_invoices_router.post("/", response_model=schemas.TenantInvoiceOut, status_code=status.HTTP_201_CREATED)
def create_invoice(
    data: schemas.TenantInvoiceCreate,
    auth_context: AdminContext,
    db: Session = Depends(get_db)
):
    """Emitir factura al tenant por el precio de su plan actual."""
    tenant = db.query(Tenant).filter(Tenant.id == data.tenant_id).first()
    if not tenant:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ferretería no encontrada"
        )
    plan = crud.get_plan_by_code(db, tenant.plan_code)
    if not plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Plan {tenant.plan_code} no encontrado"
        )
    return crud.create_invoice_for_tenant(db, tenant, plan)


@admin_invoices_router.get("/", response_model=schemas.TenantInvoiceList)
def list_invoices(
    auth_context: AdminContext,
    status_filter: Optional[InvoiceStatus] = Query(None, alias="status", description="Filtrar por estado"),
    tenant_id: Optional[UUID] = Query(None),
    skip: int = Query(0, ge=0, description="Número de registros a omitir"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Número máximo de registros"),
    db: Session = Depends(get_db)
):
    invoices, total = crud.get_invoices(db, status=status_filter, tenant_id=tenant_id, skip=skip, limit=limit)
    return {"invoices": invoices, "total": total, "limit": limit, "offset": skip}


@admin_invoices_router.get("/summary", response_model=schemas.InvoiceSummary)
def get_invoice_summary(
    auth_context: AdminContext,
    db: Session = Depends(get_db)
):
    return crud.get_invoice_summary(db)


@admin_invoices_router.post("/refresh-overdue")
def refresh_overdue(
    auth_context: AdminContext,
    db: Session = Depends(get_db)
):
    """Marcar como vencidas las facturas pendientes fuera de plazo."""
    return {"updated": crud.mark_overdue_invoices(db)}


def _get_invoice_or_404(db: Session, invoice_id: UUID):
    invoice = crud.get_invoice(db, invoice_id)
    if not invoice:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Factura no encontrada"
        )
    return invoice


@admin_invoices_router.patch("/{invoice_id}", response_model=schemas.TenantInvoiceOut)
def update_invoice(
    invoice_id: UUID,
    data: schemas.TenantInvoiceUpdate,
    auth_context: AdminContext,
    db: Session = Depends(get_db)
):
    invoice = _get_invoice_or_404(db, invoice_id)
    return crud.update_invoice(db, invoice, data)


@admin_invoices_router.post("/{invoice_id}/pay", response_model=schemas.TenantInvoiceOut)
def pay_invoice(
    invoice_id: UUID,
    auth_context: AdminContext,
    db: Session = Depends(get_db)
):
    invoice = _get_invoice_or_404(db, invoice_id)
    return crud.mark_invoice_paid(db, invoice)
