"""CLI command handlers."""

from py2rs.cli.handlers.convert import handle_convert
from py2rs.cli.handlers.idioms import handle_idioms

__all__ = ["handle_convert", "handle_idioms"]
