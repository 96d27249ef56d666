"""Environment driven configuration for the deck tooling."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

LOGGER = logging.getLogger(__name__)

DEFAULT_DECK_PATH = Path("deck/fixtures_talk.md")
DEFAULT_OUTPUT_DIR = Path("output")
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class DeckSettings:
    deck_path: Path = DEFAULT_DECK_PATH
    output_dir: Path = DEFAULT_OUTPUT_DIR
    log_level: str = DEFAULT_LOG_LEVEL
    expected_slides: Optional[int] = None


def load_settings(*, dotenv: bool = True) -> DeckSettings:
    """Read ``TALKDECK_*`` variables (optionally from a ``.env`` file)."""

    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    expected = os.getenv("TALKDECK_EXPECTED_SLIDES")
    try:
        expected_slides = int(expected) if expected else None
    except ValueError:
        raise ValueError(
            f"TALKDECK_EXPECTED_SLIDES must be an integer, got {expected!r}"
        ) from None

    return DeckSettings(
        deck_path=Path(os.getenv("TALKDECK_DECK_PATH") or DEFAULT_DECK_PATH),
        output_dir=Path(os.getenv("TALKDECK_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR),
        log_level=(os.getenv("TALKDECK_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        expected_slides=expected_slides,
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    LOGGER.debug("Logging configured at %s", logging.getLevelName(numeric))
