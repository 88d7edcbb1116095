"""
Tests de autenticación: registro de ferreterías, login y super admin
"""

import jwt
from datetime import timedelta

from conftest import register_tenant
from ferrepos.core.config import settings
from ferrepos.modules.auth.utils import hash_password, verify_password, create_access_token
from ferrepos.modules.categories.service import DEFAULT_CATEGORIES
from ferrepos.modules.tenants.models import Tenant


class TestPasswordUtils:

    def test_hash_is_not_plain_text(self):
        hashed = hash_password("secreto123")
        assert hashed != "secreto123"
        assert verify_password("secreto123", hashed)
        assert not verify_password("otra", hashed)

    def test_empty_hash_never_verifies(self):
        assert not verify_password("x", "")

    def test_token_carries_claims(self):
        token = create_access_token({"email": "a@example.com"}, expires_delta=timedelta(minutes=5))
        payload = jwt.decode(token, settings.APP_SECRET_STRING, algorithms=[settings.ALGORITHM])
        assert payload["email"] == "a@example.com"
        assert payload["type"] == "access"


class TestRegister:

    def test_register_creates_free_tenant(self, client, db_session):
        data = register_tenant(client, email="Nueva@Example.com")

        assert data["plan_code"] == "FREE"
        assert data["is_admin"] is False
        assert data["access_token"]

        tenant = db_session.query(Tenant).filter(Tenant.email == "nueva@example.com").first()
        assert tenant is not None
        assert tenant.is_active
        assert tenant.password != "secreto123"

    def test_register_seeds_defaults(self, client, auth_headers):
        categories = client.get("/categories/", headers=auth_headers).json()
        assert categories["total"] == len(DEFAULT_CATEGORIES)

        customers = client.get("/customers/", headers=auth_headers).json()
        assert customers["total"] == 1
        assert customers["customers"][0]["name"] == "Cliente General"
        assert customers["customers"][0]["tax_id"] == "44444401-7"

    def test_duplicate_email(self, client, tenant):
        response = client.post("/auth/register", json={
            "name": "Otra", "email": "central@example.com", "password": "secreto123"
        })
        assert response.status_code == 409
        assert response.json()["detail"] == "El email ya está registrado"

    def test_admin_email_is_reserved(self, client):
        response = client.post("/auth/register", json={
            "name": "Intruso", "email": settings.SUPERADMIN_EMAIL, "password": "secreto123"
        })
        assert response.status_code == 409

    def test_short_password(self, client):
        response = client.post("/auth/register", json={
            "name": "Ferre", "email": "corta@example.com", "password": "123"
        })
        assert response.status_code == 422


class TestLogin:

    def test_tenant_login(self, client, tenant):
        response = client.post("/auth/login", json={"email": "central@example.com", "password": "secreto123"})
        assert response.status_code == 200
        assert response.json()["tenant_id"] == tenant["tenant_id"]

    def test_wrong_password(self, client, tenant):
        response = client.post("/auth/login", json={"email": "central@example.com", "password": "mala"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Credenciales incorrectas"

    def test_unknown_email(self, client):
        response = client.post("/auth/login", json={"email": "nadie@example.com", "password": "x"})
        assert response.status_code == 401

    def test_suspended_tenant_cannot_login(self, client, tenant, db_session):
        db_session.query(Tenant).update({Tenant.is_active: False})
        db_session.commit()

        response = client.post("/auth/login", json={"email": "central@example.com", "password": "secreto123"})
        assert response.status_code == 403

    def test_suspended_tenant_token_rejected(self, client, auth_headers, db_session):
        db_session.query(Tenant).update({Tenant.is_active: False})
        db_session.commit()

        response = client.get("/products/", headers=auth_headers)
        assert response.status_code == 403

    def test_super_admin_login(self, client):
        response = client.post("/auth/login", json={
            "email": settings.SUPERADMIN_EMAIL, "password": settings.SUPERADMIN_PASSWORD
        })
        assert response.status_code == 200
        data = response.json()
        assert data["is_admin"] is True
        assert data["tenant_id"] is None


class TestContext:

    def test_me_for_tenant(self, client, tenant, auth_headers):
        response = client.get("/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["tenant_id"] == tenant["tenant_id"]
        assert response.json()["is_admin"] is False

    def test_me_for_admin(self, client, admin_headers):
        response = client.get("/auth/me", headers=admin_headers)
        assert response.json()["is_admin"] is True

    def test_missing_token(self, client):
        assert client.get("/auth/me").status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer no-es-un-jwt"})
        assert response.status_code == 401

    def test_admin_cannot_use_tenant_endpoints(self, client, admin_headers):
        assert client.get("/products/", headers=admin_headers).status_code == 403

    def test_tenant_cannot_use_admin_endpoints(self, client, auth_headers):
        assert client.get("/admin/tenants/", headers=auth_headers).status_code == 403
