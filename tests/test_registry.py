import asyncio
from unittest.mock import MagicMock

import pytest

from google_sheets_utils.services.sheets import (
    AuthConfig,
    AuthenticationError,
    ConfigConflictError,
    SheetsClient,
    SheetsRegistry,
    get_instance,
    get_registry,
)

READONLY = AuthConfig(scopes=["https://www.googleapis.com/auth/spreadsheets.readonly"])


@pytest.fixture
def created(monkeypatch):
    """Replace SheetsClient.create so no credentials are needed."""
    calls = []

    async def fake_create(auth_config=None):
        calls.append(auth_config)
        await asyncio.sleep(0)
        return SheetsClient(service=MagicMock())

    monkeypatch.setattr(SheetsClient, "create", staticmethod(fake_create))
    return calls


@pytest.mark.asyncio
async def test_same_instance_without_config(created):
    registry = SheetsRegistry()

    first = await registry.get_instance()
    second = await registry.get_instance()

    assert first is second
    assert len(created) == 1
    await registry.reset()


@pytest.mark.asyncio
async def test_default_config_recorded(created):
    registry = SheetsRegistry()

    await registry.get_instance()

    assert registry.auth_config.canonical() == AuthConfig().canonical()
    assert [c.canonical() for c in created] == [AuthConfig().canonical()]
    # Explicitly passing the default config is not a conflict
    await registry.get_instance(AuthConfig())
    await registry.reset()


@pytest.mark.asyncio
async def test_equal_config_returns_existing(created):
    registry = SheetsRegistry()

    first = await registry.get_instance(READONLY)
    second = await registry.get_instance(READONLY.model_copy(deep=True))
    third = await registry.get_instance()

    assert first is second is third
    await registry.reset()


@pytest.mark.asyncio
async def test_different_config_conflicts_without_mutation(created):
    registry = SheetsRegistry()
    first = await registry.get_instance()

    with pytest.raises(ConfigConflictError) as exc_info:
        await registry.get_instance(READONLY)

    assert "SheetsClient.create()" in str(exc_info.value)
    assert registry.auth_config.canonical() == AuthConfig().canonical()
    assert await registry.get_instance() is first
    assert len(created) == 1
    await registry.reset()


@pytest.mark.asyncio
async def test_concurrent_first_callers_share_instance(created):
    registry = SheetsRegistry()

    clients = await asyncio.gather(*(registry.get_instance() for _ in range(5)))

    assert all(c is clients[0] for c in clients)
    assert len(created) == 1
    await registry.reset()


@pytest.mark.asyncio
async def test_reset_allows_new_config(created):
    registry = SheetsRegistry()
    first = await registry.get_instance()

    await registry.reset()
    second = await registry.get_instance(READONLY)

    assert second is not first
    assert registry.auth_config == READONLY
    await registry.reset()


@pytest.mark.asyncio
async def test_authentication_error_leaves_registry_empty(monkeypatch):
    async def failing_create(auth_config=None):
        raise AuthenticationError("no credentials")

    monkeypatch.setattr(SheetsClient, "create", staticmethod(failing_create))
    registry = SheetsRegistry()

    with pytest.raises(AuthenticationError):
        await registry.get_instance()

    assert registry.auth_config is None


@pytest.mark.asyncio
async def test_module_level_get_instance(created):
    try:
        first = await get_instance()
        second = await get_instance()
        assert first is second
    finally:
        await get_registry().reset()


def test_registry_reused_across_event_loops(monkeypatch):
    registry = SheetsRegistry()

    async def failing_create(auth_config=None):
        await asyncio.sleep(0)
        raise AuthenticationError("transient")

    async def working_create(auth_config=None):
        await asyncio.sleep(0)
        return SheetsClient(service=MagicMock())

    async def burst():
        return await asyncio.gather(
            *(registry.get_instance() for _ in range(3)),
            return_exceptions=True
        )

    monkeypatch.setattr(SheetsClient, "create", staticmethod(failing_create))
    first = asyncio.run(burst())
    assert all(isinstance(r, AuthenticationError) for r in first)

    monkeypatch.setattr(SheetsClient, "create", staticmethod(working_create))
    second = asyncio.run(burst())
    assert all(isinstance(r, SheetsClient) for r in second)
    assert all(r is second[0] for r in second)

    asyncio.run(registry.reset())
    third = asyncio.run(burst())
    assert all(r is third[0] for r in third)
    assert third[0] is not second[0]
    asyncio.run(registry.reset())
