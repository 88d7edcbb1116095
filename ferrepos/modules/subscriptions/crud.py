"""
CRUD operations for subscription management.
"""
from typing import List, Optional, Tuple
from uuid import UUID
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
import logging

from sqlalchemy.orm import Session
from sqlalchemy import and_, asc, desc, func

from ferrepos.core.config import settings
from ferrepos.modules.tenants.models import Tenant
from .models import Plan, PlanCode, TenantInvoice, InvoiceStatus
from .schemas import TenantInvoiceUpdate

logger = logging.getLogger(__name__)


# ===== PLAN CRUD =====

def get_plan_by_code(db: Session, code: str) -> Optional[Plan]:
    """Obtener un plan por código."""
    if isinstance(code, PlanCode):
        code = code.value
    return db.query(Plan).filter(
        and_(
            Plan.code == code,
            Plan.is_active == True
        )
    ).first()


def get_plans(db: Session, active_only: bool = True) -> List[Plan]:
    """Obtener lista de planes ordenada."""
    query = db.query(Plan)
    if active_only:
        query = query.filter(Plan.is_active == True)
    return query.order_by(asc(Plan.sort_order), asc(Plan.price)).all()


# ===== TENANT INVOICE CRUD =====

def get_invoice(db: Session, invoice_id: UUID) -> Optional[TenantInvoice]:
    """Obtener factura por ID."""
    return db.query(TenantInvoice).filter(TenantInvoice.id == invoice_id).first()


def get_invoices(
    db: Session,
    status: Optional[InvoiceStatus] = None,
    tenant_id: Optional[UUID] = None,
    skip: int = 0,
    limit: int = 50
) -> Tuple[List[TenantInvoice], int]:
    """Listar facturas, las más recientes primero."""
    query = db.query(TenantInvoice)

    if status:
        query = query.filter(TenantInvoice.status == status.value)
    if tenant_id:
        query = query.filter(TenantInvoice.tenant_id == tenant_id)

    total = query.count()
    invoices = query.order_by(
        desc(TenantInvoice.issue_date), desc(TenantInvoice.created_at)
    ).offset(skip).limit(limit).all()

    return invoices, total


def create_invoice_for_tenant(db: Session, tenant: Tenant, plan: Plan) -> TenantInvoice:
    """
    Emitir factura al tenant por el precio de su plan.
    Vence a los INVOICE_DUE_DAYS días de la emisión.
    """
    issue_date = date.today()
    invoice = TenantInvoice(
        tenant_id=tenant.id,
        tenant_name=tenant.name,
        plan_name=plan.name,
        amount=plan.price,
        issue_date=issue_date,
        due_date=issue_date + timedelta(days=settings.INVOICE_DUE_DAYS),
        status=InvoiceStatus.PENDING.value
    )
    db.add(invoice)
    db.commit()
    db.refresh(invoice)

    logger.info(f"Invoice {invoice.id} issued to tenant {tenant.id} for {invoice.amount}")
    return invoice


def update_invoice(db: Session, invoice: TenantInvoice, data: TenantInvoiceUpdate) -> TenantInvoice:
    """Actualizar monto, vencimiento o estado."""
    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None:
            continue
        if field == "status":
            value = value.value
        setattr(invoice, field, value)

    if invoice.status == InvoiceStatus.PAID.value and invoice.paid_at is None:
        invoice.paid_at = datetime.now(timezone.utc)
    elif invoice.status != InvoiceStatus.PAID.value:
        invoice.paid_at = None

    db.commit()
    db.refresh(invoice)
    return invoice


def mark_invoice_paid(db: Session, invoice: TenantInvoice) -> TenantInvoice:
    """Marcar factura como pagada."""
    invoice.status = InvoiceStatus.PAID.value
    invoice.paid_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(invoice)
    return invoice


def mark_overdue_invoices(db: Session, today: Optional[date] = None) -> int:
    """Pasar a OVERDUE las facturas pendientes vencidas. Retorna cuántas cambiaron."""
    today = today or date.today()
    overdue = db.query(TenantInvoice).filter(
        TenantInvoice.status == InvoiceStatus.PENDING.value,
        TenantInvoice.due_date < today
    ).all()

    for invoice in overdue:
        invoice.status = InvoiceStatus.OVERDUE.value

    db.commit()
    if overdue:
        logger.info(f"Marked {len(overdue)} invoices as overdue")
    return len(overdue)


def get_invoice_summary(db: Session) -> dict:
    """Totales por estado para el panel de facturación."""
    rows = db.query(
        TenantInvoice.status,
        func.count(TenantInvoice.id),
        func.coalesce(func.sum(TenantInvoice.amount), 0)
    ).group_by(TenantInvoice.status).all()

    by_status = {status: (count, Decimal(str(amount))) for status, count, amount in rows}
    zero = (0, Decimal("0"))

    return {
        "pending_amount": by_status.get(InvoiceStatus.PENDING.value, zero)[1],
        "paid_amount": by_status.get(InvoiceStatus.PAID.value, zero)[1],
        "overdue_count": by_status.get(InvoiceStatus.OVERDUE.value, zero)[0],
        "overdue_amount": by_status.get(InvoiceStatus.OVERDUE.value, zero)[1],
    }
