from ferrepos.database.database import Base
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.sql import func
import uuid


class Tenant(Base):
    """
    Ferretería cliente del SaaS.

    Cada tenant es a la vez la cuenta de acceso (email + contraseña) y la
    partición de datos: productos, clientes y ventas llevan su tenant_id.
    """
    __tablename__ = "tenants"

    id = Column(Uuid, primary_key=True, index=True, default=uuid.uuid4)
    name = Column(String(150), nullable=False, index=True)  # Nombre de la ferretería
    email = Column(String(150), unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)  # Hash bcrypt
    plan_code = Column(String(20), nullable=False, default="FREE")  # FREE, PRO, ENTERPRISE
    is_active = Column(Boolean, default=True, nullable=False)  # Control de acceso
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __str__(self):
        return f"{self.name} <{self.email}>"
