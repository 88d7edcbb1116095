"""
Modelos de ventas (punto de venta)

Cada venta guarda copia del nombre del cliente y de los datos de cada
producto vendido, para que el comprobante no cambie si luego se edita o
elimina el producto.
"""
from ferrepos.database.database import Base
from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from uuid import uuid4
from ferrepos.common.mixins import TenantMixin, TimestampMixin


def _utcnow():
    return datetime.now(timezone.utc)


class Sale(Base, TenantMixin, TimestampMixin):
    __tablename__ = "sales"

    id = Column(Uuid, primary_key=True, default=uuid4)
    date = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    customer_name = Column(String(200), nullable=False)

    # Totales (Gs., IVA incluido en total)
    subtotal = Column(Numeric(15, 2), nullable=False, default=0)
    vat10 = Column(Numeric(15, 2), nullable=False, default=0)
    vat5 = Column(Numeric(15, 2), nullable=False, default=0)
    total = Column(Numeric(15, 2), nullable=False, default=0)

    items = relationship("SaleItem", back_populates="sale", cascade="all, delete-orphan", lazy="selectin")


class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(Uuid, primary_key=True, default=uuid4)
    sale_id = Column(Uuid, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)

    name = Column(String(150), nullable=False)
    sku = Column(String(50), nullable=False)
    unit_price = Column(Numeric(15, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    vat_rate = Column(Integer, nullable=False)
    line_total = Column(Numeric(15, 2), nullable=False)

    sale = relationship("Sale", back_populates="items")
