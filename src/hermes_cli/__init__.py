"""hermes-cli-lib - run CLI commands from Python and collect their output.

Spawns a command through the shell, merges stdout and stderr with ANSI
sequences removed, and kills the process tree after a bounded wait.
"""

__version__ = "0.1.0"


# Lazy imports keep ``import hermes_cli`` cheap
def __getattr__(name: str):
    """Lazy import module components."""
    if name in ("HermesCLI", "ShellProcess", "ShellError", "SpawnError", "CommandTimeoutError", "strip_ansi"):
        from . import shell
        return getattr(shell, name)
    if name in ("HermesLibConfig", "ConfigManager", "ConfigError"):
        from .core import config
        return getattr(config, name)
    if name == "Log":
        from .util.log import Log
        return Log
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Runner
    "HermesCLI",
    "ShellProcess",
    "strip_ansi",
    # Errors
    "ShellError",
    "SpawnError",
    "CommandTimeoutError",
    # Config
    "HermesLibConfig",
    "ConfigManager",
    "ConfigError",
    # Logging
    "Log",
]
