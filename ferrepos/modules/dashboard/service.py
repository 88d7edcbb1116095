"""
Indicadores del panel principal de la ferretería
"""
import logging
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict, Any, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from ferrepos.modules.ai import GeminiService
from ferrepos.modules.products.models import Product
from ferrepos.modules.sales.models import Sale

logger = logging.getLogger(__name__)

DAYS_IN_CHART = 7
NO_SALES_MESSAGE = "Aún no hay ventas registradas para analizar."


def _as_utc_date(value: datetime) -> date:
    # SQLite devuelve fechas sin zona; se guardan siempre en UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).date()


class DashboardService:

    def __init__(self, db: Session):
        self.db = db

    def get_summary(self, tenant_id: UUID, today: Optional[date] = None) -> Dict[str, Any]:
        """
        KPIs del tenant: recaudación total, cantidad de ventas, productos con
        stock bajo y ventas diarias de los últimos 7 días (de la más antigua
        a la más reciente, etiquetadas MM-DD).
        """
        today = today or datetime.now(timezone.utc).date()

        revenue, count = self.db.query(
            func.coalesce(func.sum(Sale.total), 0),
            func.count(Sale.id)
        ).filter(Sale.tenant_id == tenant_id).one()

        low_stock = self.db.query(func.count(Product.id)).filter(
            Product.tenant_id == tenant_id,
            Product.stock <= Product.min_stock
        ).scalar() or 0

        days: List[date] = [today - timedelta(days=i) for i in range(DAYS_IN_CHART - 1, -1, -1)]
        start = datetime.combine(days[0], datetime.min.time(), tzinfo=timezone.utc)
        recent = self.db.query(Sale.date, Sale.total).filter(
            Sale.tenant_id == tenant_id,
            Sale.date >= start
        ).all()

        per_day: Dict[date, Decimal] = {d: Decimal("0") for d in days}
        for sale_date, total in recent:
            day = _as_utc_date(sale_date)
            if day in per_day:
                per_day[day] += Decimal(str(total))

        return {
            "total_revenue": Decimal(str(revenue)),
            "sales_count": count,
            "low_stock_count": low_stock,
            "daily_sales": [
                {"date": d.strftime("%m-%d"), "total": per_day[d]} for d in days
            ],
        }

    def get_insights(self, tenant_id: UUID, ai: GeminiService) -> Dict[str, Any]:
        """Consejos de la IA a partir del resumen; sin ventas no se consulta"""
        summary = self.get_summary(tenant_id)
        if summary["sales_count"] == 0:
            return {"analysis": NO_SALES_MESSAGE, "generated": False}

        text = (
            f"Total ventas: Gs. {summary['total_revenue']}. "
            f"Productos bajo stock: {summary['low_stock_count']}. "
            f"Ventas totales conteo: {summary['sales_count']}."
        )
        logger.debug(f"Requesting sales insights for tenant {tenant_id}")
        return {"analysis": ai.analyze_sales_trends(text), "generated": True}
