"""Run the deck checks and the pytest suite programmatically."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import pytest

from .deck_store import load_deck
from .deck_validation import validate_deck
from .exceptions import DeckError
from .settings import configure_logging, load_settings

LOGGER = logging.getLogger(__name__)

DEFAULT_PYTEST_ARGS: tuple[str, ...] = ("-q",)


def run_tests(args: Optional[Sequence[str]] = None) -> int:
    """Run pytest with the provided ``args`` and return the exit code.

    Parameters
    ----------
    args:
        Optional command line arguments forwarded to :func:`pytest.main`.
        ``None`` means ``('-q',)``.
    """

    pytest_args = list(args) if args is not None else list(DEFAULT_PYTEST_ARGS)
    return pytest.main(pytest_args)


def check_deck(path: Optional[Path] = None, *, expected_slides: Optional[int] = None) -> int:
    """Validate the deck at ``path`` and return ``0`` when it has no errors."""

    settings = load_settings()
    deck_path = Path(path) if path is not None else settings.deck_path
    if expected_slides is None:
        expected_slides = settings.expected_slides

    try:
        deck = load_deck(deck_path)
    except (DeckError, FileNotFoundError) as exc:
        LOGGER.error("Cannot load deck: %s", exc)
        return 1

    report = validate_deck(deck, expected_slides=expected_slides)
    for line in report.summary().splitlines():
        LOGGER.info(line)
    return 0 if report.ok else 1


def run_default() -> int:
    """Check the configured deck, then run the test-suite."""

    configure_logging(load_settings().log_level)
    status = check_deck()
    if status:
        return status
    return run_tests()


if __name__ == "__main__":  # pragma: no cover - manual execution utility
    raise SystemExit(run_default())
