from fastapi import APIRouter, status, Depends, Query
from sqlalchemy.orm import Session
from uuid import UUID

from ferrepos.core.config import settings
from ferrepos.database.database import get_db
from ferrepos.dependencies.tenantDependencies import TenantContext
from ferrepos.modules.categories import service
from ferrepos.modules.categories.schemas import (
    CategoryCreate, CategoryUpdate, CategoryOut, CategoryList
)

categories_router = APIRouter(tags=["Categories"])

@categories_router.post("/", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryCreate,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    category_service = service.CategoryService(db)
    return category_service.create_category(data, auth_context.tenant_id)

@categories_router.get("/", response_model=CategoryList)
def list_categories(
    auth_context: TenantContext,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    category_service = service.CategoryService(db)
    return category_service.get_all_categories(auth_context.tenant_id, limit, offset)

@categories_router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: UUID,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    category_service = service.CategoryService(db)
    return category_service.get_category_by_id(category_id, auth_context.tenant_id)

@categories_router.patch("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    category_service = service.CategoryService(db)
    return category_service.update_category(category_id, data, auth_context.tenant_id)

@categories_router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: UUID,
    auth_context: TenantContext,
    db: Session = Depends(get_db)
):
    category_service = service.CategoryService(db)
    category_service.delete_category(category_id, auth_context.tenant_id)
