from fastapi import APIRouter, status, Depends, Query
from sqlalchemy.orm import Session
from uuid import UUID
from typing import Optional

from ferrepos.core.config import settings
from ferrepos.dependencies.dbDependecies import get_db
from ferrepos.dependencies.tenantDependencies import TenantContext
from ferrepos.modules.customers import service
from ferrepos.modules.customers.schemas import (
    CustomerCreate, CustomerUpdate, CustomerOut, CustomerList, CheckDigitOut
)

customers_router = APIRouter(prefix="/customers", tags=["Customers"])


@customers_router.get("/ruc/check-digit", response_model=CheckDigitOut)
def ruc_check_digit(
    auth_context: TenantContext,
    base: str = Query(..., description="Número base del RUC, sin DV")
):
    """Calcular el DV de un RUC mientras se escribe"""
    return service.check_digit_preview(base)


@customers_router.post("/", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(
    data: CustomerCreate,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.CustomerService(db).create_customer(data, auth_context.tenant_id)


@customers_router.get("/", response_model=CustomerList)
def list_customers(
    auth_context: TenantContext,
    search: Optional[str] = Query(None, description="Buscar por nombre o documento"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    return service.CustomerService(db).get_customers(auth_context.tenant_id, search, limit, offset)


@customers_router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(
    customer_id: UUID,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.CustomerService(db).get_customer_by_id(customer_id, auth_context.tenant_id)


@customers_router.patch("/{customer_id}", response_model=CustomerOut)
def update_customer(
    customer_id: UUID,
    data: CustomerUpdate,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.CustomerService(db).update_customer(customer_id, data, auth_context.tenant_id)


@customers_router.delete("/{customer_id}")
def delete_customer(
    customer_id: UUID,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.CustomerService(db).delete_customer(customer_id, auth_context.tenant_id)
