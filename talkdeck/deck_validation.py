"""Structural and content checks for parsed decks."""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from .deck_models import Deck, Exhibit, Slide
from .exceptions import DeckValidationError

LOGGER = logging.getLogger(__name__)

PYTHON_LANGUAGES = frozenset({"python", "py", "python3"})
CONSOLE_LANGUAGES = frozenset({"pycon"})

_DIFF_HEADER_PREFIXES = ("diff ", "index ", "--- ", "+++ ", "@@", "\\")
_DIFF_LINE_PREFIXES = (" ", "+", "-")


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(slots=True)
class Issue:
    """A single finding reported by :func:`validate_deck`."""

    severity: Severity
    slide_number: Optional[int]
    message: str
    line: Optional[int] = None

    def __str__(self) -> str:
        location = f"slide {self.slide_number}" if self.slide_number else "deck"
        if self.line is not None:
            location = f"{location}, line {self.line}"
        return f"{self.severity.value}: {location}: {self.message}"


@dataclass
class ValidationReport:
    issues: List[Issue] = field(default_factory=list)

    @property
    def errors(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity is Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        if not self.issues:
            return "No issues found."
        header = f"{len(self.errors)} error(s), {len(self.warnings)} warning(s)"
        return "\n".join([header, *(str(issue) for issue in self.issues)])

    def raise_for_errors(self) -> None:
        if self.errors:
            raise DeckValidationError(
                f"Deck has {len(self.errors)} validation error(s)",
                issues=self.errors,
            )


def validate_deck(deck: Deck, *, expected_slides: Optional[int] = None) -> ValidationReport:
    """Check ``deck`` and return a :class:`ValidationReport`.

    Python exhibits must compile, diff exhibits must be well formed unified
    diff fragments and, when ``expected_slides`` is given, the deck must hold
    exactly that many slides. Missing titles and empty slides are warnings.
    """

    report = ValidationReport()
    if not deck.slides:
        report.issues.append(Issue(Severity.ERROR, None, "Deck contains no slides"))
        return report

    if expected_slides is not None and len(deck) != expected_slides:
        report.issues.append(
            Issue(
                Severity.ERROR,
                None,
                f"Expected {expected_slides} slides, found {len(deck)}",
            )
        )

    for slide in deck.slides:
        report.issues.extend(_check_slide(slide))

    LOGGER.info(
        "Validated %d slides: %d error(s), %d warning(s)",
        len(deck),
        len(report.errors),
        len(report.warnings),
    )
    return report


def _check_slide(slide: Slide) -> Iterable[Issue]:
    if not slide.content.strip():
        yield Issue(Severity.WARNING, slide.number, "Slide has notes but no content", slide.line)
    elif slide.title is None:
        yield Issue(Severity.WARNING, slide.number, "Slide has no title heading", slide.line)

    for exhibit in slide.exhibits:
        for message in check_exhibit(exhibit):
            yield Issue(Severity.ERROR, slide.number, message, exhibit.line)


def check_exhibit(exhibit: Exhibit) -> List[str]:
    """Return the problems found in ``exhibit``; an empty list means it is fine."""

    if exhibit.is_diff:
        return _check_diff(exhibit.code)
    language = exhibit.language.lower()
    if language in PYTHON_LANGUAGES:
        return _check_python(exhibit.code)
    if language in CONSOLE_LANGUAGES:
        return _check_python(_console_source(exhibit.code))
    return []


def _check_python(source: str) -> List[str]:
    try:
        ast.parse(source)
    except SyntaxError as exc:
        return [f"Python exhibit does not compile (line {exc.lineno}): {exc.msg}"]
    return []


def _console_source(code: str) -> str:
    lines: List[str] = []
    for line in code.split("\n"):
        if line.startswith(">>> ") or line == ">>>":
            lines.append(line[4:])
        elif line.startswith("... ") or line == "...":
            lines.append(line[4:])
    return "\n".join(lines)


def _check_diff(code: str) -> List[str]:
    problems: List[str] = []
    changes = 0
    for offset, line in enumerate(code.split("\n"), start=1):
        if not line or line.startswith(_DIFF_HEADER_PREFIXES):
            continue
        if line.startswith(_DIFF_LINE_PREFIXES):
            if line[0] in "+-":
                changes += 1
            continue
        problems.append(f"Diff exhibit line {offset} is not a unified diff line: {line!r}")
    if changes == 0:
        problems.append("Diff exhibit has no added or removed lines")
    return problems
