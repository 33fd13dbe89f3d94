"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: conftest.py
@DateTime: 2026-03-10
@Docs: Test fixtures for SQLAlchemy E2E tests.
SQLAlchemy E2E 测试 fixtures。
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fastapi_template_import import ImportEngineConfig
from fastapi_template_import.contrib.sqlalchemy import Base

from .app import create_app


@pytest.fixture
async def db_session() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create an in-memory SQLite engine and yield a session factory.
    创建 SQLite 内存引擎并返回会话工厂。
    """
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def client(db_session: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient for the test app.
    提供测试应用的 httpx AsyncClient。
    """
    app = create_app(session_factory=db_session, config=ImportEngineConfig(max_combinations=50))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers={"X-Client-Id": "acme"}) as ac:
        yield ac
