from pydantic import BaseModel, Field
from uuid import UUID
from typing import Optional, List
from decimal import Decimal
from datetime import datetime


class SaleItemIn(BaseModel):
    product_id: UUID
    quantity: int = Field(..., ge=1, description="Cantidad a vender")


class QuoteRequest(BaseModel):
    items: List[SaleItemIn] = Field(default_factory=list)


class CheckoutRequest(BaseModel):
    customer_id: Optional[UUID] = Field(None, description="Por defecto, Cliente General")
    items: List[SaleItemIn] = Field(default_factory=list)


class SaleItemOut(BaseModel):
    id: UUID
    product_id: Optional[UUID] = None
    name: str
    sku: str
    unit_price: Decimal
    quantity: int
    vat_rate: int
    line_total: Decimal

    class Config:
        from_attributes = True


class SaleOut(BaseModel):
    id: UUID
    date: datetime
    customer_id: Optional[UUID] = None
    customer_name: str
    subtotal: Decimal
    vat10: Decimal
    vat5: Decimal
    total: Decimal
    items: List[SaleItemOut] = []

    class Config:
        from_attributes = True


class SaleList(BaseModel):
    sales: List[SaleOut]
    total: int
    limit: int
    offset: int
