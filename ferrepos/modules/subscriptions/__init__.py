"""
Subscription management module.

Planes del SaaS y facturación mensual a cada ferretería.
"""

from .models import Plan, PlanCode, TenantInvoice, InvoiceStatus

__all__ = [
    "Plan",
    "PlanCode",
    "TenantInvoice",
    "InvoiceStatus",
]
