"""
Models for subscription management.

- Plan: planes del SaaS (FREE, PRO, ENTERPRISE)
- TenantInvoice: facturas que el SaaS emite a cada ferretería por su plan
"""
from sqlalchemy import Column, String, Boolean, DateTime, Date, Integer, DECIMAL, JSON, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ferrepos.database.database import Base
import uuid
from datetime import date
from enum import Enum


class PlanCode(str, Enum):
    """Códigos de plan."""
    FREE = "FREE"
    PRO = "PRO"
    ENTERPRISE = "ENTERPRISE"


class InvoiceStatus(str, Enum):
    """Estados de factura de suscripción."""
    PAID = "PAID"
    PENDING = "PENDING"
    OVERDUE = "OVERDUE"


class Plan(Base):
    """
    Modelo para planes de suscripción.
    Planes predefinidos del sistema.
    """
    __tablename__ = "plans"

    id = Column(Uuid, primary_key=True, index=True, default=uuid.uuid4)
    code = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    price = Column(DECIMAL(12, 2), nullable=False, default=0)  # Precio mensual en guaraníes
    max_products = Column(Integer, nullable=True)  # null = ilimitado
    support_level = Column(String(100), nullable=True)
    features = Column(JSON, nullable=False, default=list)

    is_active = Column(Boolean, default=True)
    is_popular = Column(Boolean, default=False)
    sort_order = Column(Integer, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __str__(self):
        return f"{self.name} ({self.code})"


class TenantInvoice(Base):
    """
    Factura del SaaS a una ferretería.
    Se genera con el precio del plan vigente del tenant.
    """
    __tablename__ = "tenant_invoices"

    id = Column(Uuid, primary_key=True, index=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey("tenants.id"), nullable=False, index=True)
    tenant_name = Column(String(150), nullable=False)  # Copia al momento de emitir
    plan_name = Column(String(100), nullable=False)
    amount = Column(DECIMAL(12, 2), nullable=False, default=0)
    issue_date = Column(Date, nullable=False, default=date.today)
    due_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default=InvoiceStatus.PENDING.value, index=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    tenant = relationship("Tenant")

    @property
    def is_overdue(self) -> bool:
        """Pendiente y con vencimiento ya pasado."""
        return self.status == InvoiceStatus.PENDING.value and self.due_date < date.today()
