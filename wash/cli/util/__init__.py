"""CLI utilities (settings bootstrap, error reporting)."""

from wash.cli.util.errors import exit_on_error
from wash.cli.util.settings import load_config

__all__ = ["exit_on_error", "load_config"]
