"""
tests.conftest

Shared fixtures: a throwaway SQLite database per test, the store, and an HTTP client.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator, Callable
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from saas_template_params.api.app import create_app
from saas_template_params.db.init_db import init_db
from saas_template_params.db.session import create_engine, create_sessionmaker
from saas_template_params.domain import TemplateParameter
from saas_template_params.services.parameter_store import SqlAlchemyParameterStore
from saas_template_params.settings import ReplacePolicy, Settings


def _sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=_sqlite_url(tmp_path / "template_params.db"),
        log_json=False,
    )


@pytest_asyncio.fixture()
async def session_factory(settings: Settings) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_engine(settings)
    await init_db(engine)
    try:
        yield create_sessionmaker(engine)
    finally:
        await engine.dispose()


@pytest.fixture()
def store(session_factory: async_sessionmaker[AsyncSession]) -> SqlAlchemyParameterStore:
    return SqlAlchemyParameterStore(session_factory, policy=ReplacePolicy.atomic)


@pytest.fixture()
def non_atomic_store(
    session_factory: async_sessionmaker[AsyncSession],
) -> SqlAlchemyParameterStore:
    return SqlAlchemyParameterStore(session_factory, policy=ReplacePolicy.delete_then_insert)


@pytest_asyncio.fixture()
async def unreachable_session_factory(
    tmp_path: Path,
) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    # SQLite cannot create a database file inside a directory that doesn't exist.
    settings = Settings(env="test", database_url=_sqlite_url(tmp_path / "missing" / "db.sqlite"))
    engine = create_engine(settings)
    try:
        yield create_sessionmaker(engine)
    finally:
        await engine.dispose()


@pytest.fixture()
def subscription_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture()
def plan_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture()
def make_param(
    subscription_id: uuid.UUID, plan_id: uuid.UUID
) -> Callable[..., TemplateParameter]:
    def _make(
        name: str,
        value: str = "",
        *,
        subscription: uuid.UUID | None = None,
        plan: uuid.UUID | None = None,
    ) -> TemplateParameter:
        return TemplateParameter(
            subscription_id=subscription or subscription_id,
            plan_id=plan or plan_id,
            parameter_name=name,
            parameter_value=value,
        )

    return _make


@pytest_asyncio.fixture()
async def client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings)

    # httpx ASGITransport does not run lifespan events; drive them explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            yield http
