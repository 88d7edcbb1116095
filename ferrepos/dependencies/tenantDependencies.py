from typing import Annotated
from fastapi import Depends
from ferrepos.modules.auth.dependencies import AuthDependencies
from ferrepos.modules.auth.schemas import AuthContext

# Sesión de una ferretería activa (tenant_id siempre presente)
TenantContext = Annotated[AuthContext, Depends(AuthDependencies.require_tenant())]

# Sesión del super administrador del SaaS
AdminContext = Annotated[AuthContext, Depends(AuthDependencies.require_admin())]
