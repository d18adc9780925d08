"""Utility modules."""

from .log import Log

__all__ = ["Log"]

# error formatting imports the shell package; import it from its module
# To use: from hermes_cli.util.error import format_error
