"""Utilities for reading decks and writing deck snapshots."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .deck_models import Deck
from .deck_parser import parse_deck
from .exceptions import DeckError
from .markdown_writer import render_markdown

LOGGER = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})
JSON_SUFFIXES = frozenset({".json"})


class DeckStore:
    """Load Markdown decks and persist :class:`Deck` snapshots."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    # ------------------------------------------------------------------
    # I/O helpers
    # ------------------------------------------------------------------
    def load(self) -> Deck:
        if not self.path.exists():
            raise FileNotFoundError(f"Deck not found at {self.path}")
        suffix = self._suffix()
        text = self.path.read_text(encoding="utf-8")
        if suffix in MARKDOWN_SUFFIXES:
            deck = parse_deck(text, source=str(self.path))
        else:
            deck = Deck.from_dict(json.loads(text))
        LOGGER.info("Loaded %d slides from %s", len(deck), self.path)
        return deck

    def save(self, deck: Deck) -> None:
        suffix = self._suffix()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if suffix in MARKDOWN_SUFFIXES:
            payload = render_markdown(deck, include_notes=True)
        else:
            payload = json.dumps(deck.to_dict(), ensure_ascii=False, indent=2)
        self.path.write_text(payload, encoding="utf-8")
        LOGGER.info("Saved %d slides to %s", len(deck), self.path)

    def _suffix(self) -> str:
        suffix = self.path.suffix.lower()
        if suffix not in MARKDOWN_SUFFIXES | JSON_SUFFIXES:
            raise DeckError(
                f"Unsupported deck file type '{suffix or '<none>'}'",
                source=str(self.path),
            )
        return suffix


def load_deck(path: Path) -> Deck:
    """Load the deck stored at ``path``."""

    return DeckStore(path).load()


def save_snapshot(deck: Deck, output_dir: Path, *, file_name: str = "deck.json") -> Path:
    """Write a JSON snapshot of ``deck`` into ``output_dir`` and return its path."""

    path = Path(output_dir) / file_name
    DeckStore(path).save(deck)
    return path
