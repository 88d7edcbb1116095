from pydantic import BaseModel, Field, field_validator
from uuid import UUID
from typing import Optional, List
from datetime import datetime

from ferrepos.common.validators import validate_paraguay_phone, format_paraguay_phone
from ferrepos.modules.customers.models import DocType


def _normalize_phone(v):
    if v is None or v.strip() == "":
        return v
    if not validate_paraguay_phone(v):
        # Se aceptan internos o números cortos tal cual (ej. "000-0000")
        return v.strip()
    return format_paraguay_phone(v)


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=255)
    doc_type: DocType = Field(DocType.CI, description="CI, RUC, PAS (pasaporte) o EXT (documento extranjero)")
    doc_number: Optional[str] = Field(None, max_length=30, description="Número de documento; para RUC la base sin DV")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if v and v.strip():
            import re
            pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
            if not re.match(pattern, v):
                raise ValueError('Email debe tener formato válido')
        return v

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        return _normalize_phone(v)


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=255)
    doc_type: Optional[DocType] = None
    doc_number: Optional[str] = Field(None, max_length=30)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        return _normalize_phone(v)


class CustomerOut(BaseModel):
    id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    doc_type: str
    tax_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CustomerList(BaseModel):
    customers: List[CustomerOut]
    total: int
    limit: int
    offset: int


class CheckDigitOut(BaseModel):
    """Vista previa del DV mientras se carga el RUC"""
    base: str
    check_digit: Optional[int] = None
    ruc: Optional[str] = None
