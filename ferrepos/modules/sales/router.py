from fastapi import APIRouter, status, Depends, Query
from sqlalchemy.orm import Session
from uuid import UUID

from ferrepos.core.config import settings
from ferrepos.dependencies.dbDependecies import get_db
from ferrepos.dependencies.tenantDependencies import TenantContext
from ferrepos.modules.sales import service
from ferrepos.modules.sales.schemas import QuoteRequest, CheckoutRequest, SaleOut, SaleList
from ferrepos.modules.taxes.schemas import TotalsResponse

sales_router = APIRouter(prefix="/sales", tags=["Sales"])


@sales_router.post("/quote", response_model=TotalsResponse)
def quote_cart(
    data: QuoteRequest,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    """Totales del carrito con IVA discriminado, sin registrar la venta"""
    totals = service.SalesService(db).quote(data.items, auth_context.tenant_id)
    return TotalsResponse(
        subtotal=totals.subtotal,
        vat10=totals.vat10,
        vat5=totals.vat5,
        total_vat=totals.total_vat,
        total=totals.total,
    )


@sales_router.post("/checkout", response_model=SaleOut, status_code=status.HTTP_201_CREATED)
def checkout(
    data: CheckoutRequest,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.SalesService(db).checkout(data, auth_context.tenant_id)


@sales_router.get("/", response_model=SaleList)
def list_sales(
    auth_context: TenantContext,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    return service.SalesService(db).get_sales(auth_context.tenant_id, limit, offset)


@sales_router.get("/{sale_id}", response_model=SaleOut)
def get_sale(
    sale_id: UUID,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.SalesService(db).get_sale_by_id(sale_id, auth_context.tenant_id)
