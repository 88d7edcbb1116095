import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func, or_
from fastapi import HTTPException, status
from uuid import UUID
from typing import Dict, Any, List, Optional

from ferrepos.modules.products.models import Product, InventoryMovement, MovementType
from ferrepos.modules.products.schemas import ProductCreate, ProductUpdate, StockAdjustment
from ferrepos.modules.categories.models import Category
from ferrepos.modules.tenants.models import Tenant
from ferrepos.modules.subscriptions import crud as subscriptions_crud

logger = logging.getLogger(__name__)


class ProductService:
    """Servicio para gestión de productos e inventario"""

    def __init__(self, db: Session):
        self.db = db

    # ===== VALIDACIONES =====

    def _validate_category(self, category_id: Optional[UUID], tenant_id: UUID) -> None:
        if category_id is None:
            return
        exists = self.db.query(Category).filter(
            Category.id == category_id,
            Category.tenant_id == tenant_id
        ).first()
        if not exists:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Categoría no encontrada"
            )

    def _validate_sku_unique(self, sku: str, tenant_id: UUID, exclude_id: Optional[UUID] = None) -> None:
        query = self.db.query(Product).filter(
            Product.tenant_id == tenant_id,
            Product.sku == sku
        )
        if exclude_id:
            query = query.filter(Product.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Ya existe un producto con el SKU '{sku}'"
            )

    def count_products(self, tenant_id: UUID) -> int:
        return self.db.query(func.count(Product.id)).filter(Product.tenant_id == tenant_id).scalar() or 0

    def _validate_plan_limit(self, tenant_id: UUID) -> None:
        """El plan del tenant limita la cantidad de productos"""
        tenant = self.db.query(Tenant).filter(Tenant.id == tenant_id).first()
        plan = subscriptions_crud.get_plan_by_code(self.db, tenant.plan_code) if tenant else None
        if plan is None or plan.max_products is None:
            return

        if self.count_products(tenant_id) >= plan.max_products:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Límite de productos del {plan.name} alcanzado ({plan.max_products}). "
                       f"Actualice su plan para agregar más productos."
            )

    # ===== CRUD =====

    def create_product(self, data: ProductCreate, tenant_id: UUID) -> Product:
        """Crear producto validando SKU, categoría y límite del plan"""
        self._validate_plan_limit(tenant_id)
        self._validate_sku_unique(data.sku, tenant_id)
        self._validate_category(data.category_id, tenant_id)

        try:
            product = Product(tenant_id=tenant_id, **data.model_dump())
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
            logger.info(f"Product {product.sku} created for tenant {tenant_id}")
            return product
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Error de integridad al crear el producto"
            )

    def get_products(
        self,
        tenant_id: UUID,
        search: Optional[str] = None,
        category_id: Optional[UUID] = None,
        in_stock_only: bool = False,
        limit: int = 100,
        offset: int = 0
    ) -> Dict[str, Any]:
        """Listar productos con búsqueda por nombre o SKU"""
        query = self.db.query(Product).filter(Product.tenant_id == tenant_id)

        if search:
            term = f"%{search.strip().lower()}%"
            query = query.filter(or_(
                func.lower(Product.name).like(term),
                func.lower(Product.sku).like(term)
            ))
        if category_id:
            query = query.filter(Product.category_id == category_id)
        if in_stock_only:
            query = query.filter(Product.stock > 0)

        total = query.count()
        products = query.order_by(Product.name).offset(offset).limit(limit).all()

        return {
            "products": products,
            "total": total,
            "limit": limit,
            "offset": offset
        }

    def get_low_stock_products(self, tenant_id: UUID) -> List[Product]:
        """Productos con stock en o por debajo del mínimo"""
        return self.db.query(Product).filter(
            Product.tenant_id == tenant_id,
            Product.stock <= Product.min_stock
        ).order_by(Product.stock).all()

    def get_product_by_id(self, product_id: UUID, tenant_id: UUID) -> Product:
        product = self.db.query(Product).filter(
            Product.id == product_id,
            Product.tenant_id == tenant_id
        ).first()

        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Producto no encontrado"
            )
        return product

    def get_product_by_sku(self, sku: str, tenant_id: UUID) -> Product:
        """Búsqueda exacta por SKU (lector de código de barras)"""
        product = self.db.query(Product).filter(
            Product.tenant_id == tenant_id,
            Product.sku == sku.strip().upper()
        ).first()

        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No existe un producto con el SKU '{sku}'"
            )
        return product

    def update_product(self, product_id: UUID, data: ProductUpdate, tenant_id: UUID) -> Product:
        product = self.get_product_by_id(product_id, tenant_id)

        update_dict = data.model_dump(exclude_unset=True)
        if update_dict.get("sku") and update_dict["sku"] != product.sku:
            self._validate_sku_unique(update_dict["sku"], tenant_id, exclude_id=product_id)
        if "category_id" in update_dict:
            self._validate_category(update_dict["category_id"], tenant_id)

        try:
            for field, value in update_dict.items():
                if value is None and field != "category_id":
                    continue
                setattr(product, field, value)

            self.db.commit()
            self.db.refresh(product)
            return product
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Error de integridad al actualizar el producto"
            )

    def delete_product(self, product_id: UUID, tenant_id: UUID) -> Dict[str, str]:
        product = self.get_product_by_id(product_id, tenant_id)
        try:
            self.db.delete(product)
            self.db.commit()
            return {"message": "Producto eliminado exitosamente"}
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando producto: {str(e)}"
            )

    # ===== INVENTARIO =====

    def adjust_stock(self, product_id: UUID, data: StockAdjustment, tenant_id: UUID) -> Product:
        """Ajuste manual de stock; nunca deja el stock por debajo de cero"""
        product = self.get_product_by_id(product_id, tenant_id)

        new_stock = product.stock + data.quantity
        if new_stock < 0:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Stock insuficiente para el ajuste. Disponible: {product.stock}, "
                       f"Ajuste: {data.quantity}"
            )

        product.stock = new_stock
        self.db.add(InventoryMovement(
            tenant_id=tenant_id,
            product_id=product.id,
            product_sku=product.sku,
            product_name=product.name,
            quantity=data.quantity,
            movement_type=MovementType.ADJ.value,
            reference="AJUSTE",
            notes=data.notes
        ))
        self.db.commit()
        self.db.refresh(product)
        return product

    def get_movements(self, product_id: UUID, tenant_id: UUID) -> List[InventoryMovement]:
        self.get_product_by_id(product_id, tenant_id)
        return self.db.query(InventoryMovement).filter(
            InventoryMovement.product_id == product_id,
            InventoryMovement.tenant_id == tenant_id
        ).order_by(InventoryMovement.created_at.desc()).all()
