"""Load, check and render the fixtures talk slide deck."""

from .deck_models import Deck, Exhibit, ExhibitKind, Slide
from .deck_parser import DeckParser, parse_deck
from .deck_store import DeckStore, load_deck, save_snapshot
from .deck_validation import Issue, Severity, ValidationReport, validate_deck
from .exceptions import DeckError, DeckParseError, DeckValidationError
from .markdown_writer import MarkdownWriter, render_markdown
from .settings import DeckSettings, configure_logging, load_settings

__all__ = [
    "Deck",
    "Slide",
    "Exhibit",
    "ExhibitKind",
    "DeckParser",
    "parse_deck",
    "DeckStore",
    "load_deck",
    "save_snapshot",
    "Issue",
    "Severity",
    "ValidationReport",
    "validate_deck",
    "DeckError",
    "DeckParseError",
    "DeckValidationError",
    "MarkdownWriter",
    "render_markdown",
    "DeckSettings",
    "load_settings",
    "configure_logging",
]
