"""
Logging utilities for command-line use.
"""
from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging for command-line runs.

    Diagnostics go to stderr so stdout stays clean for command output.
    ``verbose`` enables the per-row and per-token debug messages.
    """
    root = logging.getLogger()
    root.handlers = []
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("phonics_toolkit").setLevel(logging.DEBUG if verbose else logging.INFO)
