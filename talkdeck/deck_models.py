"""Data models representing a parsed slide deck."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

HEADING_RE = re.compile(r"^ {0,3}#{1,6}[ \t]+(?P<title>.*?)(?:[ \t]+#+)?[ \t]*$")
FENCE_OPEN_RE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
FENCE_CLOSE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*$")


@dataclass
class OpenFence:
    """A fenced block that has been opened but not yet closed."""

    marker: str
    indent: int
    info: str
    line: Optional[int] = None

    def closes(self, line: str) -> bool:
        match = FENCE_CLOSE_RE.match(line)
        if not match:
            return False
        fence = match.group("fence")
        return fence[0] == self.marker[0] and len(fence) >= len(self.marker)


def open_fence(line: str, number: Optional[int] = None) -> Optional[OpenFence]:
    """Return the fence opened by ``line``, or ``None`` if it opens none.

    A backtick fence's info string may not contain a backtick.
    """

    match = FENCE_OPEN_RE.match(line)
    if not match:
        return None
    fence = match.group("fence")
    info = match.group("info").strip()
    if fence[0] == "`" and "`" in info:
        return None
    return OpenFence(marker=fence, indent=len(match.group("indent")), info=info, line=number)


class ExhibitKind(str, Enum):
    CODE = "code"
    DIFF = "diff"


DIFF_LANGUAGES = frozenset({"diff", "patch"})


@dataclass(slots=True)
class Exhibit:
    """A verbatim code or diff block shown on a slide."""

    kind: ExhibitKind
    code: str
    language: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    line: Optional[int] = field(default=None, compare=False)

    @classmethod
    def from_language(
        cls,
        language: str,
        code: str,
        *,
        attributes: Optional[Dict[str, str]] = None,
        line: Optional[int] = None,
    ) -> "Exhibit":
        kind = ExhibitKind.DIFF if language.lower() in DIFF_LANGUAGES else ExhibitKind.CODE
        return cls(
            kind=kind,
            code=code,
            language=language,
            attributes=dict(attributes or {}),
            line=line,
        )

    @property
    def caption(self) -> Optional[str]:
        return self.attributes.get("title")

    @property
    def is_diff(self) -> bool:
        return self.kind is ExhibitKind.DIFF

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "language": self.language,
            "code": self.code,
            "attributes": dict(self.attributes),
            "line": self.line,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Exhibit":
        return cls(
            kind=ExhibitKind(data.get("kind", ExhibitKind.CODE.value)),
            code=data.get("code", ""),
            language=data.get("language", ""),
            attributes=dict(data.get("attributes", {})),
            line=data.get("line"),
        )


@dataclass(slots=True)
class Slide:
    """A single slide within a deck."""

    number: int
    section: int
    position: int
    content: str
    title: Optional[str] = None
    exhibits: List[Exhibit] = field(default_factory=list)
    notes: Optional[str] = None
    line: Optional[int] = field(default=None, compare=False)

    @property
    def has_notes(self) -> bool:
        return bool(self.notes)

    @property
    def is_vertical(self) -> bool:
        return self.position > 1

    def prose(self) -> str:
        """Return the slide content without fenced blocks and the title heading."""

        lines: List[str] = []
        fence: Optional[OpenFence] = None
        title_skipped = False
        for raw in self.content.split("\n"):
            if fence is not None:
                if fence.closes(raw):
                    fence = None
                continue
            fence = open_fence(raw)
            if fence is not None:
                continue
            if not title_skipped and self.title is not None:
                heading = HEADING_RE.match(raw)
                if heading and heading.group("title") == self.title:
                    title_skipped = True
                    continue
            lines.append(raw)
        return "\n".join(lines).strip("\n")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "section": self.section,
            "position": self.position,
            "title": self.title,
            "content": self.content,
            "exhibits": [exhibit.to_dict() for exhibit in self.exhibits],
            "notes": self.notes,
            "line": self.line,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Slide":
        return cls(
            number=int(data.get("number", 1)),
            section=int(data.get("section", 1)),
            position=int(data.get("position", 1)),
            content=data.get("content", ""),
            title=data.get("title"),
            exhibits=[Exhibit.from_dict(item) for item in data.get("exhibits", [])],
            notes=data.get("notes"),
            line=data.get("line"),
        )


@dataclass(slots=True)
class Deck:
    """Ordered collection of slides in presentation order."""

    slides: List[Slide] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.slides)

    def __iter__(self) -> Iterator[Slide]:
        return iter(self.slides)

    @property
    def title(self) -> Optional[str]:
        return next((slide.title for slide in self.slides if slide.title), None)

    def get_slide(self, number: int) -> Slide:
        if number < 1 or number > len(self.slides):
            raise IndexError(f"Slide {number} out of range (deck has {len(self.slides)})")
        return self.slides[number - 1]

    def sections(self) -> List[List[Slide]]:
        grouped: Dict[int, List[Slide]] = {}
        for slide in self.slides:
            grouped.setdefault(slide.section, []).append(slide)
        return [grouped[key] for key in sorted(grouped)]

    def exhibits(self) -> List[Tuple[Slide, Exhibit]]:
        return [(slide, exhibit) for slide in self.slides for exhibit in slide.exhibits]

    def speaker_notes(self) -> Dict[int, str]:
        return {slide.number: slide.notes for slide in self.slides if slide.notes}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slides": [slide.to_dict() for slide in self.slides],
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Deck":
        slides = [Slide.from_dict(item) for item in data.get("slides", [])]
        slides.sort(key=lambda item: item.number)
        return cls(slides=slides, metadata=dict(data.get("metadata", {})))
