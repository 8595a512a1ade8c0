import asyncio
import os

import pytest

# Settings are read at import time, so the environment must be in place first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./product-api-test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")

from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from app.core.config import settings
from app.core.database import create_db_and_tables, get_async_session
from app.main import app


def make_token(user_id: str, **claims) -> str:
    payload = {settings.jwt_identity_claim: user_id, **claims}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
def test_engine(tmp_path):
    # NullPool keeps no connection bound to an event loop between requests
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'products.db'}", poolclass=NullPool
    )
    asyncio.run(create_db_and_tables(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_maker(test_engine):
    return sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def client(session_maker):
    async def override_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_product(client):
    """Create a product through the API as the given user."""
    def _create(user_id: str, **fields):
        body = {
            "title": "Desk Lamp",
            "description": "Adjustable LED lamp",
            "imageUrl": "https://cdn.example.com/lamp.png",
        }
        body.update(fields)
        response = client.post("/api/products", json=body, headers=auth_headers(user_id))
        assert response.status_code == 201, response.text
        return response.json()

    return _create
