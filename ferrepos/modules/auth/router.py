from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ferrepos.dependencies.dbDependecies import get_db
from ferrepos.modules.auth.service import AuthService
from ferrepos.modules.auth.dependencies import get_auth_context
from ferrepos.modules.auth.schemas import TenantRegister, UserLogin, TokenResponse, AuthContext

auth_router = APIRouter()

@auth_router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(data: TenantRegister, db: Session = Depends(get_db)):
    """
    Registrar nueva ferretería.

    La cuenta queda activa en el plan FREE, con las categorías por defecto
    y el cliente "Cliente General" ya creados.
    """
    auth_service = AuthService(db)
    return auth_service.register_tenant(data)

@auth_router.post("/login", response_model=TokenResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """
    Iniciar sesión como ferretería o como super administrador.
    """
    auth_service = AuthService(db)
    return auth_service.login(credentials.email, credentials.password)

@auth_router.get("/me", response_model=AuthContext)
def me(auth_context: AuthContext = Depends(get_auth_context)):
    """Contexto de la sesión actual."""
    return auth_context
