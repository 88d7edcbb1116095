from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from uuid import UUID


class TenantRegister(BaseModel):
    """Alta de una nueva ferretería (plan FREE)."""
    name: str = Field(..., min_length=2, max_length=150, description="Nombre de la ferretería")
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if len(v) < 2:
            raise ValueError('El nombre debe tener al menos 2 caracteres')
        return v

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if len(v) < 6:
            raise ValueError('La contraseña debe tener al menos 6 caracteres')
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    tenant_id: Optional[UUID] = None
    tenant_name: str
    plan_code: Optional[str] = None
    is_admin: bool = False


# Auth context schemas
class AuthContext(BaseModel):
    tenant_id: Optional[UUID] = None
    email: str
    is_admin: bool = False
