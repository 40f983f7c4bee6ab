import os
import secrets
import sys
import tempfile
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

ADMIN_EMAIL = "editor@gpl.gy"
SUPER_ADMIN_EMAIL = "webmaster@gpl.gy"

# gpl_site.config reads the environment on first import, which may happen
# while test modules are collected
TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="gpl-site-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["APP_DEBUG"] = "true"
os.environ["ADMIN_EMAILS"] = ADMIN_EMAIL
os.environ["SUPER_ADMIN_EMAILS"] = SUPER_ADMIN_EMAIL
sys.path.append(str(Path(__file__).resolve().parents[1]))


@pytest.fixture(scope="session")
def test_db_url() -> str:
    return os.environ["DATABASE_URL"]


@pytest.fixture(scope="session")
def app(test_db_url: str):
    from gpl_site.main import app as litestar_app
    return litestar_app


@pytest_asyncio.fixture()
async def db_session(app, test_db_url: str) -> AsyncIterator[AsyncSession]:
    """Session on its own engine, for arranging rows and reading them back. Tables are emptied first."""
    from gpl_site.models import Base

    engine = create_async_engine(test_db_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture()
async def client(app, db_session) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac


async def _signed_in(client: AsyncClient, email: str, role: str) -> AsyncClient:
    from gpl_site.auth.oauth import SESSION_COOKIE, start_admin_session

    session_id = secrets.token_urlsafe(16)
    await start_admin_session(session_id, email, role)
    client.cookies.set(SESSION_COOKIE, session_id)
    return client


@pytest_asyncio.fixture()
async def admin_client(client: AsyncClient) -> AsyncClient:
    from gpl_site.auth.oauth import ROLE_ADMIN
    return await _signed_in(client, ADMIN_EMAIL, ROLE_ADMIN)


@pytest_asyncio.fixture()
async def super_admin_client(client: AsyncClient) -> AsyncClient:
    from gpl_site.auth.oauth import ROLE_SUPER_ADMIN
    return await _signed_in(client, SUPER_ADMIN_EMAIL, ROLE_SUPER_ADMIN)
