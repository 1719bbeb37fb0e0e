"""
Shared fixtures: an app wired to a throwaway SQLite database and an
httpx client talking to it in-process.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from catalog_api.config import Settings
from catalog_api.main import create_app
from catalog_api.utils.database import init_models


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture
async def app(settings):
    # ASGITransport does not run the lifespan hook, so create tables here
    app = create_app(settings)
    await init_models(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def session(app):
    async with app.state.sessionmaker() as s:
        yield s


@pytest_asyncio.fixture
async def auth_headers(client):
    await client.post("/register", json={"username": "alice", "password": "s3cret"})
    resp = await client.post("/login", json={"username": "alice", "password": "s3cret"})
    return {"auth": resp.json()["token"]}


@pytest.fixture
def product_payload():
    return {
        "name": "Shirt",
        "price": 20,
        "category": "Clothing",
        "description": "Plain cotton shirt",
        "stock": "12",
        "size": "M",
        "composition": "100% cotton",
        "color": "white",
        "weight": "200g",
        "images": "shirt.png",
        "campaign": {"name": "Sale", "amount": 5, "percentage": "10"},
    }
