"""Parse Markdown slide decks into :class:`Deck` objects."""

from __future__ import annotations

import logging
import re
import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .deck_models import HEADING_RE, Deck, Exhibit, OpenFence, Slide, open_fence
from .exceptions import DeckParseError

LOGGER = logging.getLogger(__name__)

SECTION_SEPARATOR = "---"
VERTICAL_SEPARATOR = "--"

_SECTION_RE = re.compile(r"^---[ \t]*$")
_VERTICAL_RE = re.compile(r"^--[ \t]*$")
_NOTE_RE = re.compile(r"^notes?:[ \t]?(?P<rest>.*)$", re.IGNORECASE)
_NOTE_BLOCK_RE = re.compile(r"^\?\?\?[ \t]*$")


@dataclass
class _RawSlide:
    section: int
    start_line: int
    lines: List[Tuple[int, str]] = field(default_factory=list)


def parse_info_string(info: str) -> Tuple[str, Dict[str, str]]:
    """Split a fence info string into its language and ``key=value`` attributes."""

    if not info:
        return "", {}
    try:
        tokens = shlex.split(info)
    except ValueError:
        tokens = info.split()
    if not tokens:
        return "", {}

    language, rest = tokens[0], tokens[1:]
    if "=" in language:
        language, rest = "", tokens
    attributes: Dict[str, str] = {}
    for token in rest:
        key, sep, value = token.partition("=")
        if sep and key:
            attributes[key] = value
    return language, attributes


class DeckParser:
    """Split deck text into slides, exhibits and speaker notes."""

    def parse(self, text: str, source: Optional[str] = None) -> Deck:
        normalised = text.replace("\r\n", "\n").replace("\r", "\n")
        if normalised.startswith("\ufeff"):
            normalised = normalised[1:]

        raw_slides = self._split(normalised.split("\n"), source)

        slides: List[Slide] = []
        section_numbers: Dict[int, int] = {}
        positions: Dict[int, int] = {}
        for raw in raw_slides:
            slide = self._build_slide(raw, source)
            if slide is None:
                continue
            section = section_numbers.setdefault(raw.section, len(section_numbers) + 1)
            positions[section] = positions.get(section, 0) + 1
            slide.number = len(slides) + 1
            slide.section = section
            slide.position = positions[section]
            slides.append(slide)

        metadata = {"source": source} if source else {}
        deck = Deck(slides=slides, metadata=metadata)
        LOGGER.debug(
            "Parsed %d slides in %d sections from %s",
            len(slides),
            len(section_numbers),
            source or "<text>",
        )
        return deck

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _split(self, lines: List[str], source: Optional[str]) -> List[_RawSlide]:
        section = 1
        current = _RawSlide(section=section, start_line=1)
        chunks = [current]
        fence: Optional[OpenFence] = None

        for number, line in enumerate(lines, start=1):
            if fence is not None:
                if fence.closes(line):
                    fence = None
                current.lines.append((number, line))
                continue

            if _SECTION_RE.match(line):
                section += 1
                current = _RawSlide(section=section, start_line=number + 1)
                chunks.append(current)
                continue
            if _VERTICAL_RE.match(line):
                current = _RawSlide(section=section, start_line=number + 1)
                chunks.append(current)
                continue

            fence = open_fence(line, number)
            current.lines.append((number, line))

        if fence is not None:
            raise DeckParseError(
                f"Unterminated code fence '{fence.marker}'",
                line=fence.line,
                source=source,
            )
        return chunks

    def _build_slide(self, raw: _RawSlide, source: Optional[str]) -> Optional[Slide]:
        content_lines: List[str] = []
        note_lines: Optional[List[str]] = None
        exhibits: List[Exhibit] = []
        title: Optional[str] = None
        first_line: Optional[int] = None

        fence: Optional[OpenFence] = None
        fence_body: List[str] = []

        for number, line in raw.lines:
            target = content_lines if note_lines is None else note_lines

            if fence is not None:
                if fence.closes(line):
                    if note_lines is None:
                        language, attributes = parse_info_string(fence.info)
                        exhibits.append(
                            Exhibit.from_language(
                                language,
                                "\n".join(fence_body),
                                attributes=attributes,
                                line=fence.line,
                            )
                        )
                    fence = None
                    fence_body = []
                else:
                    fence_body.append(_dedent(line, fence.indent))
                target.append(line)
                continue

            note_match = _NOTE_RE.match(line)
            if note_match or _NOTE_BLOCK_RE.match(line):
                if note_lines is not None:
                    raise DeckParseError(
                        "Slide has more than one speaker note block",
                        line=number,
                        source=source,
                    )
                note_lines = []
                rest = note_match.group("rest") if note_match else ""
                if rest.strip():
                    note_lines.append(rest)
                continue

            fence = open_fence(line, number)
            if fence is None and note_lines is None and title is None:
                heading = HEADING_RE.match(line)
                if heading and heading.group("title"):
                    title = heading.group("title")
            if first_line is None and line.strip():
                first_line = number
            target.append(line)

        content = "\n".join(content_lines).strip("\n")
        notes = "\n".join(note_lines).strip() if note_lines is not None else ""
        if not content.strip() and not notes:
            return None

        return Slide(
            number=0,
            section=raw.section,
            position=1,
            content=content,
            title=title,
            exhibits=exhibits,
            notes=notes or None,
            line=first_line or raw.start_line,
        )


def _dedent(line: str, indent: int) -> str:
    removable = len(line) - len(line.lstrip(" "))
    return line[min(indent, removable):]


def parse_deck(text: str, *, source: Optional[str] = None) -> Deck:
    """Parse ``text`` into a :class:`Deck`."""

    return DeckParser().parse(text, source=source)
