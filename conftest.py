"""
Fixtures compartidas para los tests de cada módulo.

La app corre contra SQLite en memoria (StaticPool: una sola conexión
compartida) y la dependencia get_db se reemplaza por una sesión de esa base.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ferrepos.main import app
from ferrepos.database.database import Base, get_db
from ferrepos.modules.ai import GeminiService, get_ai_service
from ferrepos.modules.subscriptions.seed_plans import seed_plans
from ferrepos.core.config import settings

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeGeminiService(GeminiService):
    """Gemini sin red: registra los prompts y responde un texto fijo"""

    def __init__(self, reply="Texto generado"):
        super().__init__(api_key="test-key")
        self.reply = reply
        self.prompts = []

    def generate_text(self, prompt):
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    seed_plans(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_ai():
    return FakeGeminiService()


@pytest.fixture
def client(db_session, fake_ai):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_service] = lambda: fake_ai
    yield TestClient(app)
    app.dependency_overrides.clear()


def register_tenant(client, name="Ferretería Central", email="central@example.com", password="secreto123"):
    response = client.post("/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def tenant(client):
    """Ferretería registrada; devuelve la respuesta de /auth/register"""
    return register_tenant(client)


@pytest.fixture
def auth_headers(tenant):
    return {"Authorization": f"Bearer {tenant['access_token']}"}


@pytest.fixture
def admin_headers(client):
    response = client.post("/auth/login", json={
        "email": settings.SUPERADMIN_EMAIL,
        "password": settings.SUPERADMIN_PASSWORD,
    })
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def make_product(client, auth_headers):
    """Crear productos vía API con valores por defecto razonables"""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        payload = {
            "sku": f"SKU-{counter['n']:03d}",
            "name": f"Producto {counter['n']}",
            "price": "10000",
            "cost": "6000",
            "stock": 10,
            "min_stock": 2,
            "tax_rate": 10,
        }
        payload.update(overrides)
        response = client.post("/products/", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
