"""
Modelos SQLAlchemy para clientes de la ferretería

Tipos de documento en Paraguay:
- CI: Cédula de Identidad, se guarda tal cual
- RUC: Registro Único del Contribuyente, se guarda como "base-DV"
- PAS: Pasaporte, se guarda tal cual
- EXT: Documento extranjero, se guarda tal cual
"""
from ferrepos.database.database import Base
from sqlalchemy import Column, String, Uuid
from uuid import uuid4
from ferrepos.common.mixins import TenantMixin, TimestampMixin
import enum


class DocType(str, enum.Enum):
    CI = "CI"
    RUC = "RUC"
    PAS = "PAS"
    EXT = "EXT"


class Customer(Base, TenantMixin, TimestampMixin):
    __tablename__ = "customers"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(200), nullable=False, index=True)
    email = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(255), nullable=True)
    doc_type = Column(String(5), nullable=False, default=DocType.CI.value)
    tax_id = Column(String(30), nullable=True, index=True)  # RUC con DV, resto tal cual
