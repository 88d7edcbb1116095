from pydantic import BaseModel, EmailStr, Field
from uuid import UUID
from typing import Optional, List, Dict
from datetime import datetime
from decimal import Decimal

from ferrepos.modules.subscriptions.models import PlanCode


class TenantOut(BaseModel):
    id: UUID
    name: str
    email: EmailStr
    plan_code: PlanCode
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TenantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=150)
    plan_code: Optional[PlanCode] = None


class TenantStatusUpdate(BaseModel):
    is_active: bool


class TenantList(BaseModel):
    tenants: List[TenantOut]
    total: int
    limit: int
    offset: int


class TenantStats(BaseModel):
    """Resumen del directorio de tenants para el panel de administración"""
    total_tenants: int
    active_tenants: int
    inactive_tenants: int
    tenants_by_plan: Dict[str, int]
    monthly_recurring_revenue: Decimal
