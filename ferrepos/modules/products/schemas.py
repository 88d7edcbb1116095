from pydantic import BaseModel, Field, field_validator
from uuid import UUID
from typing import Optional, List
from decimal import Decimal
from datetime import datetime

from ferrepos.core.config import settings
from ferrepos.modules.taxes.schemas import MAX_AMOUNT, VatRate


def _check_vat_rate(v):
    if v is None:
        return v
    if v not in (VatRate.FIVE, VatRate.TEN):
        raise ValueError('La tasa de IVA debe ser 5 o 10')
    return int(v)


class ProductCreate(BaseModel):
    sku: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = Field(None, max_length=500)
    price: Decimal = Field(..., ge=0, le=MAX_AMOUNT, decimal_places=2, description="Precio de venta con IVA incluido")
    cost: Decimal = Field(Decimal("0"), ge=0, le=MAX_AMOUNT, decimal_places=2)
    stock: int = Field(0, ge=0)
    min_stock: int = Field(settings.LOW_STOCK_DEFAULT, ge=0)
    tax_rate: int = Field(10, description="IVA 10 o 5")
    category_id: Optional[UUID] = None

    @field_validator('sku')
    @classmethod
    def normalize_sku(cls, v):
        return v.strip().upper()

    @field_validator('tax_rate')
    @classmethod
    def validate_tax_rate(cls, v):
        return _check_vat_rate(v)


class ProductUpdate(BaseModel):
    sku: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = Field(None, max_length=500)
    price: Optional[Decimal] = Field(None, ge=0, le=MAX_AMOUNT, decimal_places=2)
    cost: Optional[Decimal] = Field(None, ge=0, le=MAX_AMOUNT, decimal_places=2)
    min_stock: Optional[int] = Field(None, ge=0)
    tax_rate: Optional[int] = None
    category_id: Optional[UUID] = None

    @field_validator('sku')
    @classmethod
    def normalize_sku(cls, v):
        return v.strip().upper() if v else v

    @field_validator('tax_rate')
    @classmethod
    def validate_tax_rate(cls, v):
        return _check_vat_rate(v)


class ProductOut(BaseModel):
    id: UUID
    sku: str
    name: str
    description: Optional[str] = None
    price: Decimal
    cost: Decimal
    stock: int
    min_stock: int
    tax_rate: int
    category_id: Optional[UUID] = None
    category_name: Optional[str] = None
    is_low_stock: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductList(BaseModel):
    products: List[ProductOut]
    total: int
    limit: int
    offset: int


class LowStockResponse(BaseModel):
    products: List[ProductOut]
    total_count: int


class StockAdjustment(BaseModel):
    quantity: int = Field(..., description="Cantidad a sumar (positiva) o restar (negativa)")
    notes: Optional[str] = Field(None, max_length=255)

    @field_validator('quantity')
    @classmethod
    def validate_quantity(cls, v):
        if v == 0:
            raise ValueError('La cantidad del ajuste no puede ser 0')
        return v


class InventoryMovementOut(BaseModel):
    id: UUID
    product_id: Optional[UUID] = None
    product_sku: Optional[str] = None
    product_name: Optional[str] = None
    quantity: int
    movement_type: str
    reference: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DescriptionRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    category: Optional[str] = Field(None, max_length=100)


class DescriptionResponse(BaseModel):
    description: str
