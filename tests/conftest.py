"""Shared test fixtures"""
import os

os.environ.setdefault("OTEL_ENABLED", "false")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from decimal import Decimal
from typing import Dict, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from insurance_api.core.errors import ConflictError
from insurance_api.dependencies.product import get_product_repository
from insurance_api.models.product import Product, normalize_price
from insurance_api.repositories.product import DUPLICATE_PRODUCT_MESSAGE
from insurance_api.services.product import ProductService
from insurance_api.services.token import TokenService, get_token_service

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


class FakeProductRepository:
    """In-memory stand-in for ProductRepository with a unique (code, location) rule"""

    def __init__(self):
        self.rows: Dict[str, Product] = {}

    @staticmethod
    def _matches(product: Product, product_code: Optional[int], location: Optional[str]) -> bool:
        if product_code is not None and product.product_code != product_code:
            return False
        if location is not None and product.location.value != location:
            return False
        return True

    async def ensure_indexes(self) -> None:
        return None

    async def find_one(self, product_code=None, location=None) -> Optional[Product]:
        for product in self.rows.values():
            if self._matches(product, product_code, location):
                return product.model_copy()
        return None

    async def create(self, product_code, location, price, product_desc=None) -> Product:
        if any(p.identity == (product_code, location) for p in self.rows.values()):
            raise ConflictError(DUPLICATE_PRODUCT_MESSAGE)
        product = Product(
            id=str(ObjectId()),
            product_code=product_code,
            product_desc=product_desc,
            location=location,
            price=normalize_price(price),
        )
        self.rows[product.id] = product
        return product.model_copy()

    async def save(self, product: Product) -> Optional[Product]:
        if product.id not in self.rows:
            return None
        if any(p.identity == product.identity and pid != product.id for pid, p in self.rows.items()):
            raise ConflictError(DUPLICATE_PRODUCT_MESSAGE)
        self.rows[product.id] = product.model_copy()
        return product.model_copy()

    async def delete(self, product_code, location=None) -> int:
        doomed = [pid for pid, p in self.rows.items() if self._matches(p, product_code, location)]
        for pid in doomed:
            del self.rows[pid]
        return len(doomed)


@pytest.fixture
def fake_repository():
    """Empty in-memory product repository"""
    return FakeProductRepository()


@pytest.fixture
def product_service(fake_repository):
    """ProductService backed by the in-memory repository"""
    return ProductService(fake_repository)


@pytest.fixture
def token_service():
    """Token service signing with the test secret"""
    return TokenService(secret=TEST_SECRET, algorithm="HS256", expires_in=86400)


@pytest.fixture
def admin_token(token_service):
    return token_service.issue(username="admin", role="admin", sub="12345")


@pytest.fixture
def user_token(token_service):
    return token_service.issue(username="jane", role="user", sub="67890")


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def app(fake_repository, token_service):
    """Application with the store and token verifier overridden"""
    from main import app as fastapi_app

    async def _repository():
        return fake_repository

    fastapi_app.dependency_overrides[get_product_repository] = _repository
    fastapi_app.dependency_overrides[get_token_service] = lambda: token_service
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Test client, lifespan (MongoDB connection) is not started"""
    return TestClient(app)


@pytest.fixture
def sample_product():
    """Sample persisted product"""
    return Product(
        id="507f1f77bcf86cd799439011",
        product_code=1000,
        product_desc="Sedan",
        location="West Malaysia",
        price=Decimal("300.00"),
    )
