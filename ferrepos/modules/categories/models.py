from sqlalchemy import Column, String, UniqueConstraint, Boolean, Uuid
from sqlalchemy.orm import relationship
from uuid import uuid4

from ferrepos.database.database import Base
from ferrepos.common.mixins import TenantMixin, TimestampMixin

class Category(Base, TenantMixin, TimestampMixin):
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(100), nullable=False)
    description = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True)

    # Relationships
    products = relationship("Product", back_populates="category")

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_category_tenant_name"),
    )
