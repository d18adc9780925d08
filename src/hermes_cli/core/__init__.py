"""Core infrastructure modules."""

from .global_paths import GlobalPath

__all__ = ["GlobalPath"]

# Config is imported from its module to avoid circular imports with util.log
# To use: from hermes_cli.core.config import ConfigManager
