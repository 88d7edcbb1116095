from fastapi import APIRouter, status, Depends, Query
from uuid import UUID
from typing import List, Optional
from sqlalchemy.orm import Session

from ferrepos.core.config import settings
from ferrepos.dependencies.dbDependecies import get_db
from ferrepos.dependencies.tenantDependencies import TenantContext
from ferrepos.modules.ai import GeminiService, get_ai_service
from ferrepos.modules.products import service
from ferrepos.modules.products.schemas import (
    ProductCreate,
    ProductUpdate,
    ProductOut,
    ProductList,
    LowStockResponse,
    StockAdjustment,
    InventoryMovementOut,
    DescriptionRequest,
    DescriptionResponse,
)

product_router = APIRouter(prefix="/products", tags=["Products"])


@product_router.post("/", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductCreate,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    """Crear producto. Respeta el límite de productos del plan."""
    product_service = service.ProductService(db)
    return product_service.create_product(data, auth_context.tenant_id)


@product_router.get("/", response_model=ProductList)
def list_products(
    auth_context: TenantContext,
    search: Optional[str] = Query(None, description="Buscar por nombre o SKU"),
    category_id: Optional[UUID] = Query(None),
    in_stock_only: bool = Query(False, description="Solo productos con stock"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    product_service = service.ProductService(db)
    return product_service.get_products(
        auth_context.tenant_id,
        search=search,
        category_id=category_id,
        in_stock_only=in_stock_only,
        limit=limit,
        offset=offset
    )


@product_router.get("/low-stock", response_model=LowStockResponse)
def get_low_stock_products(
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    """Productos cuyo stock está en o por debajo del mínimo"""
    products = service.ProductService(db).get_low_stock_products(auth_context.tenant_id)
    return {"products": products, "total_count": len(products)}


@product_router.get("/sku/{sku}", response_model=ProductOut)
def get_product_by_sku(
    sku: str,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.ProductService(db).get_product_by_sku(sku, auth_context.tenant_id)


@product_router.post("/describe", response_model=DescriptionResponse)
def describe_product(
    data: DescriptionRequest,
    auth_context: TenantContext,
    ai: GeminiService = Depends(get_ai_service)
):
    """Generar una descripción comercial breve con IA"""
    return {"description": ai.generate_product_description(data.name, data.category)}


@product_router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: UUID,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.ProductService(db).get_product_by_id(product_id, auth_context.tenant_id)


@product_router.patch("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: UUID,
    data: ProductUpdate,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.ProductService(db).update_product(product_id, data, auth_context.tenant_id)


@product_router.delete("/{product_id}")
def delete_product(
    product_id: UUID,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.ProductService(db).delete_product(product_id, auth_context.tenant_id)


@product_router.post("/{product_id}/stock", response_model=ProductOut)
def adjust_stock(
    product_id: UUID,
    data: StockAdjustment,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    """Ajuste manual de stock (positivo o negativo)"""
    return service.ProductService(db).adjust_stock(product_id, data, auth_context.tenant_id)


@product_router.get("/{product_id}/movements", response_model=List[InventoryMovementOut])
def list_movements(
    product_id: UUID,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    return service.ProductService(db).get_movements(product_id, auth_context.tenant_id)
