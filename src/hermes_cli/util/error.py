"""Error formatting utilities.

Turns runner and configuration errors into short messages for the
command line, with a generic fallback for anything else.
"""

import json
import traceback
from typing import Any

from ..core.config import ConfigError
from ..shell.errors import CommandTimeoutError, SpawnError


def format_error(error: Any) -> str | None:
    """Format known library errors into user-friendly messages.

    Returns None if the error type is not recognized, allowing
    fallback to format_unknown_error.
    """
    if isinstance(error, CommandTimeoutError):
        text = f"Command timed out after {error.waited_ms} ms: {error.command}"
        if error.output:
            text += f"\nOutput so far:\n{error.output}"
        return text
    if isinstance(error, SpawnError):
        cause = f" ({error.__cause__})" if error.__cause__ else ""
        return f"Could not start command: {error.command}{cause}"
    if isinstance(error, ConfigError):
        return str(error)
    return None


def format_unknown_error(error: Any) -> str:
    """Format any error into a string representation.

    Handles Exception objects, serializable objects, and primitives.
    """
    if isinstance(error, Exception):
        if error.__traceback__:
            return ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        return f"{error.__class__.__name__}: {error}"

    if isinstance(error, (dict, list)):
        try:
            return json.dumps(error, indent=2)
        except (TypeError, ValueError):
            return "Unexpected error (unserializable)"

    return str(error)
