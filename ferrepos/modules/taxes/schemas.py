from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from typing import List
from enum import IntEnum


# Mayor monto que entra en una columna Numeric(15, 2)
MAX_AMOUNT = Decimal("9999999999999.99")


class VatRate(IntEnum):
    """Tasas de IVA vigentes en Paraguay (porcentaje)"""
    FIVE = 5    # Canasta básica, productos agrícolas
    TEN = 10    # Tasa general


class CartLine(BaseModel):
    """
    Línea de carrito para el cálculo de totales.
    El precio unitario ya incluye IVA.
    """
    model_config = ConfigDict(frozen=True)

    unit_price: Decimal
    quantity: int
    vat_rate: int


class SaleTotals(BaseModel):
    """Totales de una venta con la liquidación de IVA por tasa"""
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal = Decimal("0.00")  # Gravada (base imponible)
    vat10: Decimal = Decimal("0.00")     # Liquidación IVA 10%
    vat5: Decimal = Decimal("0.00")      # Liquidación IVA 5%
    total: Decimal = Decimal("0.00")

    @property
    def total_vat(self) -> Decimal:
        return self.vat10 + self.vat5


class CartLineIn(BaseModel):
    """Línea de entrada para el endpoint de cálculo libre"""
    unit_price: Decimal = Field(..., le=MAX_AMOUNT, description="Precio unitario con IVA incluido")
    quantity: int = Field(..., description="Cantidad")
    vat_rate: int = Field(VatRate.TEN, description="Tasa de IVA: 5 o 10")


class TotalsRequest(BaseModel):
    lines: List[CartLineIn] = Field(default_factory=list)


class TotalsResponse(BaseModel):
    subtotal: Decimal
    vat10: Decimal
    vat5: Decimal
    total_vat: Decimal
    total: Decimal


class VatRateOut(BaseModel):
    rate: int
    name: str
    divisor: int
    description: str
