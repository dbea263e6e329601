from typing import Generator

import pytest
from fastapi.testclient import TestClient

from boutique.app_setup.factory import create_app
from boutique.config import Settings
from tests.fakes import FakeGateway, FakeOrderRepository, FakeProductRepository, make_product

ADMIN_PASSWORD = "test-admin-pass"


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid or nodeid.startswith("tests/unit/"):
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid or nodeid.startswith("tests/integration/"):
            item.add_marker(pytest.mark.integration)
        elif "/tests/functional/" in nodeid or nodeid.startswith("tests/functional/"):
            item.add_marker(pytest.mark.functional)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        admin_password=ADMIN_PASSWORD,
        stripe_secret_key="sk_test_123",
        stripe_publishable_key="pk_test_123",
        public_base_url="http://shop.test",
        upload_dir=tmp_path / "uploads",
    )


@pytest.fixture
def products() -> FakeProductRepository:
    return FakeProductRepository([
        make_product("A", "Ambre Nuit", 49.90, "Homme"),
        make_product("B", "Bois de Santal", 39.00, "Unisexe"),
        make_product("C", "Citron Vert", 25.50, "Femme"),
    ])


@pytest.fixture
def orders() -> FakeOrderRepository:
    return FakeOrderRepository()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def app(settings, gateway, products, orders):
    return create_app(settings, gateway=gateway, products=products, orders=orders)


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_auth():
    return ("admin", ADMIN_PASSWORD)
