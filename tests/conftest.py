"""
Shared fixtures: in-memory SQLite, tables created and dropped around each test.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DB_CONNECT_ATTEMPTS"] = "1"

from datetime import date

import pytest
from fastapi.testclient import TestClient

from storefront.data import models  # noqa: F401
from storefront.data.database import Base, SessionLocal, engine
from storefront.domain.schemas import ProductIn
from storefront.main import app
from storefront.services.auth_service import AuthService
from storefront.services.catalog_service import CatalogService


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def make_product_payload(**overrides) -> dict:
    payload = {
        "productName": "Desk Lamp",
        "image": "https://cdn.example.com/lamp.png",
        "price": 24.5,
        "title": "Warm white desk lamp",
        "category": "home",
        "description": "LED lamp with adjustable arm",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_product(db):
    def _make(**overrides):
        return CatalogService(db).add_product(ProductIn(**make_product_payload(**overrides)))

    return _make


@pytest.fixture
def make_user(db):
    def _make(handle="alice", mobile_number="5551234567", password="pw"):
        return AuthService(db).signup(
            fullname=handle.title(),
            handle=handle,
            password=password,
            mobile_number=mobile_number,
            date_of_birth=date(2000, 1, 1),
        )

    return _make


@pytest.fixture
def auth_headers(client):
    def _login(handle="alice", password="pw", mobile_number="5551234567"):
        client.post(
            "/api/auth/signup",
            json={
                "fullname": handle.title(),
                "handle": handle,
                "password": password,
                "mobileNumber": mobile_number,
                "dateOfBirth": "2000-01-01",
            },
        )
        response = client.post("/api/auth/login", json={"handle": handle, "password": password})
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
