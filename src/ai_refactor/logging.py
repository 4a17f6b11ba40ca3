"""Console logging for the ai-refactor commands.

Every module logs through a child of the "ai_refactor" logger. The CLI
attaches one stderr handler to that parent so progress lines never mix
into prompt text written to stdout.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "ai_refactor"
LOG_FORMAT = "[ai-refactor] %(levelname)s %(message)s"

_HANDLER_NAME = "ai-refactor-console"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for one pipeline stage, e.g. get_logger("scanner")."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(ROOT_LOGGER).getChild(name)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Route ai_refactor records to stderr; DEBUG with --verbose, else INFO.

    Safe to call once per command invocation: any console handler left
    over from an earlier call is replaced, never stacked.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.propagate = False

    for stale in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(stale)
        stale.close()

    console = logging.StreamHandler(sys.stderr)
    console.set_name(_HANDLER_NAME)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)
    return root
