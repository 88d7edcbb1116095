from pydantic import BaseModel
from decimal import Decimal
from typing import List


class DailySales(BaseModel):
    date: str   # MM-DD
    total: Decimal


class DashboardSummary(BaseModel):
    total_revenue: Decimal
    sales_count: int
    low_stock_count: int
    daily_sales: List[DailySales]


class InsightsOut(BaseModel):
    analysis: str
    generated: bool  # False si no hubo datos para analizar
