import pytest
from typing import Generator
from fastapi.testclient import TestClient

from backend.app import create_app
from backend.config import Settings, PUBLIC_DIR
from backend.payments.errors import ProcessorError
from backend.utils.dependencies import get_payment_processor
from tests.fakes import FakeProcessor

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "tests/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        application_id="sandbox-sq0idb-test",
        location_id="L-TEST",
        access_token="EAAA-test-token",
        environment="sandbox",
        currency="USD",
        cors_origins=("*",),
        public_dir=PUBLIC_DIR,
    )


@pytest.fixture
def processor() -> FakeProcessor:
    return FakeProcessor()


@pytest.fixture
def declining_processor() -> FakeProcessor:
    return FakeProcessor(error=ProcessorError(
        "Square API error (HTTP 402)",
        errors=[{"category": "PAYMENT_METHOD_ERROR", "code": "CARD_DECLINED", "detail": "Card declined"}],
        http_status=402,
    ))


@pytest.fixture
def app(settings, processor):
    fastapi_app = create_app(settings)
    # Aucun appel réseau vers Square pendant les tests
    fastapi_app.dependency_overrides[get_payment_processor] = lambda: processor
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
