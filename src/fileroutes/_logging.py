"""Diagnostic logging for fileroutes.

Every module logs under the ``fileroutes`` namespace, which carries only a
NullHandler, so nothing is printed unless the host configures logging.
Verbose mode attaches a single stderr handler.  The CLI runs quiet mode,
which suppresses diagnostics entirely so only raised errors reach the user.
Library entry points only ever switch verbose on.
"""

import logging
import sys

logger = logging.getLogger("fileroutes")
logger.addHandler(logging.NullHandler())

_HANDLER_NAME = "fileroutes-stderr"
_FORMAT = "[fileroutes] %(levelname)s %(message)s"


def configure_logging(verbose: bool) -> logging.Logger:
    """Enable or silence fileroutes diagnostics and return the ``fileroutes`` logger.

    Safe to call repeatedly: the stderr handler is installed at most once.
    """
    if not verbose:
        logger.setLevel(logging.CRITICAL + 1)
        return logger

    logger.setLevel(logging.DEBUG)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger
