from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ferrepos.dependencies.dbDependecies import get_db
from ferrepos.dependencies.tenantDependencies import TenantContext
from ferrepos.modules.ai import GeminiService, get_ai_service
from ferrepos.modules.dashboard.service import DashboardService
from ferrepos.modules.dashboard.schemas import DashboardSummary, InsightsOut

dashboard_router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@dashboard_router.get("/summary", response_model=DashboardSummary)
def get_summary(
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return DashboardService(db).get_summary(auth_context.tenant_id)


@dashboard_router.get("/insights", response_model=InsightsOut)
def get_insights(
    auth_context: TenantContext,
    db: Session = Depends(get_db),
    ai: GeminiService = Depends(get_ai_service)
):
    """Análisis de ventas generado con IA"""
    return DashboardService(db).get_insights(auth_context.tenant_id, ai)
