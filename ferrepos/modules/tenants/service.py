import logging
from sqlalchemy.orm import Session
from sqlalchemy import func, or_
from fastapi import HTTPException, status
from uuid import UUID
from typing import Dict, Any, Optional
from decimal import Decimal

from ferrepos.modules.tenants.models import Tenant
from ferrepos.modules.tenants.schemas import TenantUpdate
from ferrepos.modules.subscriptions.models import Plan, PlanCode

logger = logging.getLogger(__name__)


class TenantService:
    """Administración de las ferreterías suscriptas (solo super admin)"""

    def __init__(self, db: Session):
        self.db = db

    def get_tenants(
        self,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Dict[str, Any]:
        query = self.db.query(Tenant)

        if is_active is not None:
            query = query.filter(Tenant.is_active == is_active)
        if search:
            term = f"%{search.strip().lower()}%"
            query = query.filter(or_(
                func.lower(Tenant.name).like(term),
                func.lower(Tenant.email).like(term)
            ))

        total = query.count()
        tenants = query.order_by(Tenant.created_at.desc(), Tenant.name).offset(offset).limit(limit).all()
        return {
            "tenants": tenants,
            "total": total,
            "limit": limit,
            "offset": offset
        }

    def get_tenant_by_id(self, tenant_id: UUID) -> Tenant:
        tenant = self.db.query(Tenant).filter(Tenant.id == tenant_id).first()
        if not tenant:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Ferretería no encontrada"
            )
        return tenant

    def update_tenant(self, tenant_id: UUID, data: TenantUpdate) -> Tenant:
        tenant = self.get_tenant_by_id(tenant_id)
        update_dict = data.model_dump(exclude_unset=True)

        if update_dict.get("name"):
            tenant.name = update_dict["name"].strip()
        if update_dict.get("plan_code"):
            new_plan = update_dict["plan_code"].value
            if new_plan != tenant.plan_code:
                logger.info(f"Tenant {tenant.id} plan changed {tenant.plan_code} -> {new_plan}")
            tenant.plan_code = new_plan

        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def set_status(self, tenant_id: UUID, is_active: bool) -> Tenant:
        """Suspender o reactivar el acceso de una ferretería"""
        tenant = self.get_tenant_by_id(tenant_id)
        tenant.is_active = is_active
        self.db.commit()
        self.db.refresh(tenant)
        logger.info(f"Tenant {tenant.id} {'activated' if is_active else 'suspended'}")
        return tenant

    def deactivate_tenant(self, tenant_id: UUID) -> Dict[str, str]:
        """Baja lógica: los datos se conservan, el acceso queda bloqueado"""
        self.set_status(tenant_id, False)
        return {"message": "Ferretería desactivada exitosamente"}

    def get_stats(self) -> Dict[str, Any]:
        total = self.db.query(func.count(Tenant.id)).scalar() or 0
        active = self.db.query(func.count(Tenant.id)).filter(Tenant.is_active == True).scalar() or 0

        by_plan = {code.value: 0 for code in PlanCode}
        rows = self.db.query(Tenant.plan_code, func.count(Tenant.id)).group_by(Tenant.plan_code).all()
        for plan_code, count in rows:
            by_plan[plan_code] = count

        # MRR: precio del plan de cada ferretería activa
        mrr = self.db.query(func.coalesce(func.sum(Plan.price), 0)).select_from(Tenant).join(
            Plan, Plan.code == Tenant.plan_code
        ).filter(Tenant.is_active == True).scalar()

        return {
            "total_tenants": total,
            "active_tenants": active,
            "inactive_tenants": total - active,
            "tenants_by_plan": by_plan,
            "monthly_recurring_revenue": Decimal(str(mrr or 0)),
        }
