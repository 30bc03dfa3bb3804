"""
Logging configuration.

Log records go to stderr through rich, so they never mix with the
calendar output printed on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Install a rich handler on the root logger (INFO, or DEBUG if verbose)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_path=verbose,
                rich_tracebacks=True,
            )
        ],
        force=True,
    )
