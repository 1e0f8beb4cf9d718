"""Shared test fixtures for the consent connector tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from bson import ObjectId
from fastapi import FastAPI
from fastapi.testclient import TestClient

from connector.dependencies import (
    require_auth,
    get_consent_service,
    get_data_request_service,
    get_decryptor,
    get_settings,
)
from connector.config import Settings
from connector.routers import (
    auth_router,
    private_consent_router,
    public_consent_router,
    template_router,
)


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def sample_user(sample_user_id):
    user = MagicMock()
    user.internal_id = sample_user_id
    user.user_identifier = "cm-user-42"
    user.email = "anna@example.com"
    user.consent_id = None
    user.save = AsyncMock()
    return user


@pytest.fixture
def user_model(sample_user):
    """Patch the User document used by the consent pipelines."""
    with patch("connector.pipelines.consent.User") as model:
        model.find_one = AsyncMock(return_value=sample_user)
        yield model


@pytest.fixture
def mock_consent_service():
    return AsyncMock()


@pytest.fixture
def mock_data_request_service():
    return AsyncMock()


@pytest.fixture
def mock_decryptor():
    decryptor = MagicMock()
    decryptor.decrypt = MagicMock(return_value={"_id": "consent-1"})
    return decryptor


@pytest.fixture
def test_settings():
    return Settings(
        CONNECTOR_ENDPOINT="https://connector.example.com",
        CONSENT_MANAGER_URI="https://consent.example.com/v1",
        SERVICE_KEY="service-key",
        SECRET_KEY="secret-key",
        JWT_SECRET="test-jwt-secret",
    )


@pytest.fixture
def app(mock_consent_service, mock_data_request_service, mock_decryptor, test_settings):
    """App with every router and mocked services; private auth bypassed."""
    application = FastAPI()
    application.include_router(auth_router)
    application.include_router(template_router)
    application.include_router(public_consent_router)
    application.include_router(private_consent_router)

    application.dependency_overrides[get_consent_service] = lambda: mock_consent_service
    application.dependency_overrides[get_data_request_service] = lambda: mock_data_request_service
    application.dependency_overrides[get_decryptor] = lambda: mock_decryptor
    application.dependency_overrides[get_settings] = lambda: test_settings
    application.dependency_overrides[require_auth] = lambda: "service-key"
    return application


@pytest.fixture
def client(app):
    return TestClient(app)
