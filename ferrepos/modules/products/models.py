from ferrepos.database.database import Base
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint, Numeric, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from uuid import uuid4
from ferrepos.common.mixins import TenantMixin, TimestampMixin
import enum


class MovementType(enum.Enum):
    OUT = "OUT"  # Salida por venta
    ADJ = "ADJ"  # Ajuste manual (puede ser + o -)


class Product(Base, TenantMixin, TimestampMixin):
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid4)
    sku = Column(String(50), nullable=False)
    name = Column(String(150), nullable=False)
    description = Column(String(500), nullable=True)
    price = Column(Numeric(15, 2), nullable=False, default=0)  # Precio de venta, IVA incluido
    cost = Column(Numeric(15, 2), nullable=False, default=0)   # Costo de compra
    stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=0)     # Umbral de alerta de reposición
    tax_rate = Column(Integer, nullable=False, default=10)     # IVA 10 o 5

    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=True)

    # Relationships
    category = relationship("Category", back_populates="products", lazy="joined")
    # Al borrar el producto los movimientos quedan con product_id NULL
    movements = relationship("InventoryMovement", back_populates="product")

    __table_args__ = (
        UniqueConstraint("tenant_id", "sku", name="uq_product_tenant_sku"),
        CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),
        CheckConstraint("tax_rate IN (5, 10)", name="ck_product_tax_rate"),
    )

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock

    @property
    def category_name(self):
        return self.category.name if self.category else None


class InventoryMovement(Base, TenantMixin, TimestampMixin):
    __tablename__ = "inventory_movements"

    id = Column(Uuid, primary_key=True, default=uuid4)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)
    product_sku = Column(String(50), nullable=True)
    product_name = Column(String(150), nullable=True)

    quantity = Column(Integer, nullable=False)  # Positivo entra, negativo sale
    movement_type = Column(String(10), nullable=False)  # OUT, ADJ
    reference = Column(String(100), nullable=True)  # Venta, ajuste, etc.
    notes = Column(String(255), nullable=True)

    # Relationships
    product = relationship("Product", back_populates="movements")
