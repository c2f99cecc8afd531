"""CLI utilities: argument parsing helpers, logging setup."""

import argparse
import logging
import sys
from datetime import date

from fiscal_kernel.logging_config import configure_logging


def iso_date(value: str) -> date:
    """argparse type for ``--today``."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}") from None


def setup_logging(verbose: bool) -> None:
    """Structured logs go to stderr; only errors unless ``--verbose``."""
    configure_logging(
        level=logging.DEBUG if verbose else logging.ERROR,
        stream=sys.stderr,
    )
