"""Shared pytest fixtures — async test client, fake DB session, fake Redis, reference data."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from homegrow.auth.dependencies import get_current_user
from homegrow.auth.jwt import create_access_token
from homegrow.config import get_settings
from homegrow.database import get_db
from homegrow.main import app
from homegrow.models.enums import UserRoleEnum
from homegrow.services.reference_data import ReferenceDataStore, get_reference_store


class FakeAsyncSession:
	def __init__(self) -> None:
		self.commit = AsyncMock()
		self.rollback = AsyncMock()
		self.close = AsyncMock()
		self.execute = AsyncMock()
		self.flush = AsyncMock()
		self.refresh = AsyncMock()
		self.delete = AsyncMock()
		self.added: list[Any] = []

	def add(self, instance: Any) -> None:
		self.added.append(instance)


class FakeRedis:
	def __init__(self) -> None:
		self._counter: dict[str, int] = {}
		self._values: dict[str, str] = {}
		self.incr = AsyncMock(side_effect=self._incr)
		self.expire = AsyncMock(return_value=True)
		self.get = AsyncMock(side_effect=self._get)
		self.setex = AsyncMock(side_effect=self._setex)

	async def _incr(self, key: str) -> int:
		value = self._counter.get(key, 0) + 1
		self._counter[key] = value
		return value

	async def _get(self, key: str) -> str | None:
		return self._values.get(key)

	async def _setex(self, key: str, _ttl: int, value: str) -> bool:
		self._values[key] = value
		return True


def make_user(role: UserRoleEnum = UserRoleEnum.user, **overrides: Any) -> SimpleNamespace:
	now = datetime.now(UTC)
	fields: dict[str, Any] = {
		"id": uuid.uuid4(),
		"name": "Test Gardener",
		"email": "gardener@test.local",
		"role": role,
		"is_active": True,
		"preferences": {},
		"hashed_password": "",
		"created_at": now,
		"updated_at": now,
	}
	fields.update(overrides)
	return SimpleNamespace(**fields)


@pytest.fixture(scope="session")
def store() -> ReferenceDataStore:
	"""Reference data shipped with the package, loaded once per test session."""
	return ReferenceDataStore.from_directory(get_settings().reference_data_dir)


@pytest.fixture
def fake_db_session() -> FakeAsyncSession:
	"""A lightweight async-session stub for dependency overrides in API tests."""
	return FakeAsyncSession()


@pytest.fixture
def fake_redis() -> FakeRedis:
	"""Fake Redis client with counter, get and setex behavior for the rate limiter."""
	return FakeRedis()


@pytest.fixture
def user_factory() -> Callable[..., SimpleNamespace]:
	"""Builds user stand-ins with the attributes the routes and schemas read."""
	return make_user


@pytest.fixture
def current_user() -> SimpleNamespace:
	return make_user()


@asynccontextmanager
async def _noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
	yield


@asynccontextmanager
async def _test_client() -> AsyncGenerator[AsyncClient, None]:
	original_lifespan = app.router.lifespan_context
	app.router.lifespan_context = _noop_lifespan

	transport = ASGITransport(app=app)
	try:
		async with AsyncClient(transport=transport, base_url="http://test") as test_client:
			yield test_client
	finally:
		app.router.lifespan_context = original_lifespan
		app.dependency_overrides.clear()
		app.state.redis = None


@pytest.fixture
async def client(
	fake_db_session: FakeAsyncSession,
	store: ReferenceDataStore,
	current_user: SimpleNamespace,
) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled, DB mocked and a signed-in user."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	async def override_current_user() -> Any:
		return current_user

	app.dependency_overrides[get_db] = override_get_db
	app.dependency_overrides[get_current_user] = override_current_user
	app.dependency_overrides[get_reference_store] = lambda: store

	async with _test_client() as test_client:
		yield test_client


@pytest.fixture
async def auth_client(
	fake_db_session: FakeAsyncSession,
	store: ReferenceDataStore,
) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with DB override only (real auth dependencies active)."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	app.dependency_overrides[get_db] = override_get_db
	app.dependency_overrides[get_reference_store] = lambda: store

	async with _test_client() as test_client:
		yield test_client


@pytest.fixture
def auth_user_id() -> uuid.UUID:
	return uuid.UUID("11111111-1111-1111-1111-111111111111")


@pytest.fixture
def access_token(auth_user_id: uuid.UUID) -> str:
	return create_access_token(str(auth_user_id), expires_minutes=30)
