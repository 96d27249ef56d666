"""Serialise :class:`Deck` objects back into Markdown."""

from __future__ import annotations

from typing import List, Optional

from .deck_models import Deck, Slide
from .deck_parser import SECTION_SEPARATOR, VERTICAL_SEPARATOR


class MarkdownWriter:
    """Write decks in the same format :class:`DeckParser` reads."""

    def __init__(
        self,
        *,
        section_separator: str = SECTION_SEPARATOR,
        vertical_separator: str = VERTICAL_SEPARATOR,
        note_marker: str = "Note:",
    ) -> None:
        self.section_separator = section_separator
        self.vertical_separator = vertical_separator
        self.note_marker = note_marker

    def write(self, deck: Deck, *, include_notes: bool = False) -> str:
        """Return ``deck`` as Markdown.

        The audience view (default) leaves speaker notes out and skips slides
        that only carry notes. With ``include_notes`` every note follows a
        ``Note:`` marker so the output parses back into an equal deck.
        """

        parts: List[str] = []
        previous: Optional[Slide] = None
        for slide in deck.slides:
            block = self._slide_block(slide, include_notes=include_notes)
            if not block:
                continue
            if previous is not None:
                separator = (
                    self.vertical_separator
                    if slide.section == previous.section
                    else self.section_separator
                )
                parts.append(separator)
            parts.append(block)
            previous = slide

        if not parts:
            return ""
        return "\n\n".join(parts) + "\n"

    def _slide_block(self, slide: Slide, *, include_notes: bool) -> str:
        sections: List[str] = []
        if slide.content.strip():
            sections.append(slide.content)
        if include_notes and slide.notes:
            sections.append(f"{self.note_marker}\n{slide.notes}")
        return "\n\n".join(sections)


def render_markdown(deck: Deck, *, include_notes: bool = False) -> str:
    """Convenience wrapper around :meth:`MarkdownWriter.write`."""

    return MarkdownWriter().write(deck, include_notes=include_notes)
