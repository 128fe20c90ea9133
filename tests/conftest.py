# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app

API_KEY = "test-api-key"


def _settings(**overrides) -> Settings:
    values = {"api_key": API_KEY, "app_env": "test", "cors_origins": ["*"]}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def make_settings():
    return _settings


@pytest.fixture
def app():
    return create_app(_settings())


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def store(app):
    return app.state.store


@pytest.fixture
def api_key():
    return API_KEY


@pytest.fixture
def auth(api_key):
    return {"x-api-key": api_key}


@pytest.fixture
def new_product():
    return {
        "name": "Desk Lamp",
        "description": "LED lamp with adjustable arm",
        "price": 39.99,
        "category": "home",
    }
