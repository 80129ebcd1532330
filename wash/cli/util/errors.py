"""Error reporting for CLI commands."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from wash.cli.console import get_console
from wash.domain.shared.error import WashError

logger = logging.getLogger(__name__)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Print any wash error as ``Error: <message>`` and exit with status 1."""
    try:
        yield
    except WashError as e:
        logger.debug("Command failed with %s", e.code, exc_info=True)
        get_console().error(e.message)
        sys.exit(1)
