"""Library configuration.

The runner needs two timing numbers (poll granularity and wait ceiling)
plus the update-suppression flag and the tracing toggle expected by the
invoked tool. Values come from defaults overridden by ``HERMES_*``
environment variables, or from an explicit ``ConfigManager.set``.
"""

import os
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..util.log import Log

log = Log.create({"service": "config"})

ENV_PREFIX = "HERMES_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Config error in {source}: {message}")


class HermesLibConfig(BaseModel):
    """Timing and flag settings for the command runner."""

    waiting_timeout_action: int = Field(
        1000,
        gt=0,
        description="Wait in ms between SIGTERM and SIGKILL when a timed out process group is killed",
    )
    waiting_timeout_global: int = Field(
        30000,
        gt=0,
        description="Maximum total wait in ms before a command is killed",
    )
    skip_update_flag: str = Field("--skip-update", min_length=1)
    trace: bool = True
    trace_env: str = Field("SLACK_TEST_TRACE", min_length=1)

    model_config = ConfigDict(frozen=True, extra="forbid")


def _parse_bool(value: str) -> bool:
    text = value.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


_ENV_FIELDS: Dict[str, tuple[str, Callable[[str], Any]]] = {
    "WAITING_TIMEOUT_ACTION": ("waiting_timeout_action", int),
    "WAITING_TIMEOUT_GLOBAL": ("waiting_timeout_global", int),
    "SKIP_UPDATE_FLAG": ("skip_update_flag", str),
    "TRACE": ("trace", _parse_bool),
    "TRACE_ENV": ("trace_env", str),
}


def load_from_env(environ: Optional[Mapping[str, str]] = None) -> HermesLibConfig:
    """Build a config from ``HERMES_*`` environment variables.

    Raises:
        ConfigError: If a variable cannot be parsed or fails validation.
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for suffix, (name, parse) in _ENV_FIELDS.items():
        key = ENV_PREFIX + suffix
        raw = environ.get(key)
        if raw is None:
            continue
        try:
            values[name] = parse(raw)
        except ValueError as e:
            raise ConfigError(key, str(e)) from e

    try:
        return HermesLibConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError("environment", str(e)) from e


class ConfigManager:
    """Process-wide access to the read-only runner configuration."""

    _config: Optional[HermesLibConfig] = None

    @classmethod
    def get(cls) -> HermesLibConfig:
        """Return the active config, loading it from the environment once."""
        if cls._config is None:
            cls._config = load_from_env()
            log.debug("config loaded", cls._config.model_dump())
        return cls._config

    @classmethod
    def set(cls, config: HermesLibConfig) -> None:
        """Replace the active config."""
        cls._config = config

    @classmethod
    def reset(cls) -> None:
        """Drop the cached config so the next ``get`` reloads it."""
        cls._config = None
