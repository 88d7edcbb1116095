"""
Seed subscription plans for FerrePOS.

Creates the default plans if they do not exist; safe to run on every startup.
"""
import logging
from decimal import Decimal
from sqlalchemy.orm import Session

from ferrepos.modules.subscriptions.models import Plan, PlanCode

logger = logging.getLogger(__name__)


PLANS_DATA = [
    {
        "code": PlanCode.FREE.value,
        "name": "Plan Inicial",
        "price": Decimal("0"),
        "max_products": 50,
        "support_level": "Comunidad",
        "features": ["Punto de Venta Básico", "Control de Stock Limitado", "1 Usuario"],
        "is_popular": False,
        "sort_order": 1
    },
    {
        "code": PlanCode.PRO.value,
        "name": "Plan Profesional",
        "price": Decimal("150000"),
        "max_products": 1000,
        "support_level": "Email Prioritario",
        "features": [
            "Punto de Venta Avanzado",
            "Facturación Electrónica",
            "Reportes con IA",
            "Multi-usuario (hasta 3)"
        ],
        "is_popular": True,
        "sort_order": 2
    },
    {
        "code": PlanCode.ENTERPRISE.value,
        "name": "Plan Empresarial",
        "price": Decimal("450000"),
        "max_products": 10000,
        "support_level": "24/7 Dedicado",
        "features": [
            "Todo ilimitado",
            "API Access",
            "Soporte Multi-sucursal",
            "Personalización de Marca"
        ],
        "is_popular": False,
        "sort_order": 3
    },
]


def seed_plans(db: Session) -> int:
    """Seed default subscription plans. Returns how many were created."""
    created = 0
    for plan_data in PLANS_DATA:
        existing = db.query(Plan).filter(Plan.code == plan_data["code"]).first()
        if existing:
            logger.debug(f"Plan {plan_data['code']} already exists, skipping")
            continue

        db.add(Plan(**plan_data))
        created += 1
        logger.info(f"Created plan: {plan_data['name']}")

    db.commit()
    return created
