from collections.abc import Iterator

import pytest

from hermes_cli.core.config import ConfigManager
from hermes_cli.util.log import Log


@pytest.fixture(autouse=True)
def config_context(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in (
        "HERMES_WAITING_TIMEOUT_ACTION",
        "HERMES_WAITING_TIMEOUT_GLOBAL",
        "HERMES_SKIP_UPDATE_FLAG",
        "HERMES_TRACE",
        "HERMES_TRACE_ENV",
    ):
        monkeypatch.delenv(key, raising=False)
    ConfigManager.reset()
    try:
        yield
    finally:
        ConfigManager.reset()


@pytest.fixture(autouse=True)
def _log_teardown() -> Iterator[None]:
    yield
    Log.reset()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
