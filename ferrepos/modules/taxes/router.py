from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from ferrepos.dependencies.tenantDependencies import TenantContext
from ferrepos.modules.taxes.calculator import (
    compute_totals, get_paraguay_vat_rates, TotalsError
)
from ferrepos.modules.taxes.schemas import (
    CartLine, TotalsRequest, TotalsResponse, VatRateOut
)

taxes_router = APIRouter(prefix="/taxes", tags=["Taxes"])


@taxes_router.get("/iva/rates", response_model=List[VatRateOut])
def list_vat_rates():
    """
    Listar las tasas de IVA vigentes (5% y 10%).

    Endpoint público, útil para los formularios de producto.
    """
    return get_paraguay_vat_rates()


@taxes_router.post("/iva/totals", response_model=TotalsResponse)
def calculate_totals(data: TotalsRequest, auth_context: TenantContext):
    """
    Calcular totales y liquidación de IVA para líneas arbitrarias.

    Los precios se consideran con IVA incluido:
    - IVA 10% = monto / 11
    - IVA 5% = monto / 21
    """
    lines = [
        CartLine(unit_price=line.unit_price, quantity=line.quantity, vat_rate=line.vat_rate)
        for line in data.lines
    ]
    try:
        totals = compute_totals(lines)
    except TotalsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return TotalsResponse(
        subtotal=totals.subtotal,
        vat10=totals.vat10,
        vat5=totals.vat5,
        total_vat=totals.total_vat,
        total=totals.total
    )
