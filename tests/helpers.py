"""Shared test helpers."""

from __future__ import annotations

import os
import sys

import pytest

from hermes_cli.core.config import HermesLibConfig

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")


def fast_config(**overrides: object) -> HermesLibConfig:
    """Config with short timings for tests that hit the wait ceiling."""
    values: dict[str, object] = {
        "waiting_timeout_action": 200,
        "waiting_timeout_global": 1000,
    }
    values.update(overrides)
    return HermesLibConfig.model_validate(values)


def pid_running(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


def pid_alive(pid: int) -> bool:
    """Like ``pid_running`` but treats an unreaped zombie as gone."""
    if not pid_running(pid):
        return False
    if not os.path.isdir("/proc"):
        return True
    try:
        with open(f"/proc/{pid}/stat", encoding="utf-8") as f:
            state = f.read().rsplit(")", 1)[1].split()[0]
    except (FileNotFoundError, IndexError):
        return False
    except OSError:
        return True
    return state != "Z"
