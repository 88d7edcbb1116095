import logging
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from ferrepos.modules.auth.schemas import TenantRegister, TokenResponse
from ferrepos.modules.auth.utils import hash_password, verify_password, create_access_token
from ferrepos.modules.tenants.models import Tenant
from ferrepos.modules.subscriptions.models import PlanCode
from ferrepos.modules.categories.service import CategoryService
from ferrepos.modules.customers.service import CustomerService
from ferrepos.core.config import settings

logger = logging.getLogger(__name__)


class AuthService:
    """
    Servicio de autenticación multi-tenant.

    Dos tipos de sesión:
    - Super administrador: credencial única configurada en settings
    - Ferretería (tenant): email y contraseña guardados en la tabla tenants
    """

    def __init__(self, db: Session):
        self.db = db

    def register_tenant(self, data: TenantRegister) -> TokenResponse:
        """
        Registrar una nueva ferretería en el plan FREE.
        Crea además las categorías por defecto y el "Cliente General".
        """
        email = data.email.lower()

        if email == settings.SUPERADMIN_EMAIL.lower():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="El email ya está registrado"
            )

        existing = self.db.query(Tenant).filter(Tenant.email == email).first()
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="El email ya está registrado"
            )

        try:
            tenant = Tenant(
                name=data.name,
                email=email,
                password=hash_password(data.password),
                plan_code=PlanCode.FREE.value,
                is_active=True
            )
            self.db.add(tenant)
            self.db.flush()

            CategoryService(self.db).seed_default_categories(tenant.id)
            CustomerService(self.db).seed_default_customer(tenant.id)

            self.db.commit()
            self.db.refresh(tenant)
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="El email ya está registrado"
            )

        logger.info(f"Tenant registered: {tenant.id} ({tenant.email})")
        return self._tenant_token(tenant)

    def login(self, email: str, password: str) -> TokenResponse:
        """
        Login del super administrador o de una ferretería.
        """
        email = email.lower()

        if email == settings.SUPERADMIN_EMAIL.lower() and password == settings.SUPERADMIN_PASSWORD:
            logger.info("Super admin login")
            token = create_access_token({
                "sub": "admin",
                "email": settings.SUPERADMIN_EMAIL,
                "is_admin": True
            })
            return TokenResponse(
                access_token=token,
                expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
                tenant_id=None,
                tenant_name="Super Administrator",
                plan_code=PlanCode.ENTERPRISE.value,
                is_admin=True
            )

        tenant = self.db.query(Tenant).filter(Tenant.email == email).first()

        if not tenant or not verify_password(password, tenant.password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Credenciales incorrectas"
            )

        if not tenant.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Cuenta suspendida. Contacte al administrador."
            )

        return self._tenant_token(tenant)

    def _tenant_token(self, tenant: Tenant) -> TokenResponse:
        token = create_access_token({
            "sub": str(tenant.id),
            "email": tenant.email,
            "tenant_id": str(tenant.id),
            "is_admin": False
        })
        return TokenResponse(
            access_token=token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            tenant_id=tenant.id,
            tenant_name=tenant.name,
            plan_code=tenant.plan_code,
            is_admin=False
        )
