"""
Dependencias de autenticación para FastAPI.
"""
from uuid import UUID
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import jwt

from ferrepos.database.database import get_db
from ferrepos.modules.auth.schemas import AuthContext
from ferrepos.modules.tenants.models import Tenant
from ferrepos.core.config import settings

# Security scheme
security = HTTPBearer(auto_error=False)


class AuthDependencies:
    """Dependencias de autenticación reutilizables."""

    @staticmethod
    def get_auth_context(
        credentials: HTTPAuthorizationCredentials = Depends(security),
        db: Session = Depends(get_db)
    ) -> AuthContext:
        """
        Obtener contexto de autenticación desde el token JWT.
        El super administrador no tiene tenant; las ferreterías sí.
        """
        credentials_exception = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No se pudieron validar las credenciales",
            headers={"WWW-Authenticate": "Bearer"},
        )

        if credentials is None:
            raise credentials_exception

        try:
            payload = jwt.decode(
                credentials.credentials,
                settings.APP_SECRET_STRING,
                algorithms=[settings.ALGORITHM]
            )
            email: str = payload.get("email")
            is_admin: bool = bool(payload.get("is_admin", False))
            tenant_id_str = payload.get("tenant_id")
            if email is None:
                raise credentials_exception
        except jwt.PyJWTError:
            raise credentials_exception

        if is_admin:
            return AuthContext(tenant_id=None, email=email, is_admin=True)

        if not tenant_id_str:
            raise credentials_exception

        try:
            tenant_id = UUID(tenant_id_str)
        except ValueError:
            raise credentials_exception

        tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
        if tenant is None:
            raise credentials_exception

        if not tenant.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Cuenta suspendida. Contacte al administrador."
            )

        return AuthContext(tenant_id=tenant.id, email=tenant.email, is_admin=False)

    @staticmethod
    def require_tenant():
        """Dependencia que requiere el token de una ferretería activa."""
        def tenant_checker(auth_context: AuthContext = Depends(AuthDependencies.get_auth_context)):
            if not auth_context.tenant_id:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Se requiere una sesión de ferretería"
                )
            return auth_context
        return tenant_checker

    @staticmethod
    def require_admin():
        """Dependencia que requiere el token del super administrador."""
        def admin_checker(auth_context: AuthContext = Depends(AuthDependencies.get_auth_context)):
            if not auth_context.is_admin:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Se requieren permisos de administrador"
                )
            return auth_context
        return admin_checker


# Instancias de dependencias
get_auth_context = AuthDependencies.get_auth_context
require_tenant = AuthDependencies.require_tenant
require_admin = AuthDependencies.require_admin
