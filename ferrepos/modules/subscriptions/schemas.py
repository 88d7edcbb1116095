"""
Schemas for subscription management.
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from uuid import UUID
from datetime import date, datetime
from decimal import Decimal

from .models import PlanCode, InvoiceStatus


# ===== PLAN SCHEMAS =====

class PlanOut(BaseModel):
    """Schema para respuesta de plan."""
    id: UUID
    code: PlanCode
    name: str
    price: Decimal
    max_products: Optional[int] = None
    support_level: Optional[str] = None
    features: List[str] = []
    is_popular: bool = False

    class Config:
        from_attributes = True


class SubscriptionCurrent(BaseModel):
    """Plan vigente del tenant y uso de sus límites."""
    tenant_id: UUID
    tenant_name: str
    plan: PlanOut
    products_used: int
    products_remaining: Optional[int] = None  # None = ilimitado
    can_add_products: bool


# ===== TENANT INVOICE SCHEMAS =====

class TenantInvoiceCreate(BaseModel):
    """Generar factura para un tenant con el precio de su plan."""
    tenant_id: UUID


class TenantInvoiceUpdate(BaseModel):
    """Edición manual de factura desde el panel de administración."""
    amount: Optional[Decimal] = Field(None, ge=0)
    due_date: Optional[date] = None
    status: Optional[InvoiceStatus] = None


class TenantInvoiceOut(BaseModel):
    id: UUID
    tenant_id: UUID
    tenant_name: str
    plan_name: str
    amount: Decimal
    issue_date: date
    due_date: date
    status: InvoiceStatus
    paid_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TenantInvoiceList(BaseModel):
    invoices: List[TenantInvoiceOut]
    total: int
    limit: int
    offset: int


class InvoiceSummary(BaseModel):
    """Totales de facturación del SaaS."""
    pending_amount: Decimal
    paid_amount: Decimal
    overdue_count: int
    overdue_amount: Decimal
