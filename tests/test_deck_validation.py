import pytest

from talkdeck.deck_models import Exhibit
from talkdeck.deck_parser import parse_deck
from talkdeck.deck_validation import Severity, check_exhibit, validate_deck
from talkdeck.exceptions import DeckValidationError

from tests.deck_samples import BROKEN_DIFF_DECK, BROKEN_PYTHON_DECK, SIMPLE_DECK


def test_simple_deck_is_valid():
    report = validate_deck(parse_deck(SIMPLE_DECK), expected_slides=4)

    assert report.ok
    assert report.issues == []
    assert report.summary() == "No issues found."


def test_slide_count_mismatch_is_an_error():
    report = validate_deck(parse_deck(SIMPLE_DECK), expected_slides=5)

    assert not report.ok
    assert report.errors[0].message == "Expected 5 slides, found 4"
    assert report.errors[0].slide_number is None


def test_empty_deck_is_an_error():
    report = validate_deck(parse_deck(""))

    assert [issue.message for issue in report.errors] == ["Deck contains no slides"]


def test_python_syntax_error_is_reported_with_exhibit_line():
    report = validate_deck(parse_deck(BROKEN_PYTHON_DECK))

    [issue] = report.errors
    assert issue.slide_number == 1
    assert issue.line == 3
    assert "does not compile (line 1)" in issue.message
    assert str(issue).startswith("error: slide 1, line 3:")


def test_malformed_diff_is_reported():
    report = validate_deck(parse_deck(BROKEN_DIFF_DECK))

    messages = [issue.message for issue in report.errors]
    assert any("not a unified diff line" in message for message in messages)
    assert "Diff exhibit has no added or removed lines" in messages


def test_missing_title_and_notes_only_slides_are_warnings():
    deck = parse_deck("Just text\n---\nNote: only notes\n")

    report = validate_deck(deck)

    assert report.ok
    assert [issue.severity for issue in report.warnings] == [
        Severity.WARNING,
        Severity.WARNING,
    ]
    assert [issue.slide_number for issue in report.warnings] == [1, 2]


def test_raise_for_errors_carries_issues():
    report = validate_deck(parse_deck(BROKEN_PYTHON_DECK))

    with pytest.raises(DeckValidationError) as excinfo:
        report.raise_for_errors()

    assert excinfo.value.issues == report.errors


def test_raise_for_errors_is_silent_for_valid_decks():
    validate_deck(parse_deck(SIMPLE_DECK)).raise_for_errors()


@pytest.mark.parametrize(
    "language, code, problems",
    [
        ("python", "x = 1", 0),
        ("py", "def f(:\n  pass", 1),
        ("pycon", ">>> x = 1\n>>> x\n1", 0),
        ("pycon", ">>> def f(:\n...     pass", 1),
        ("text", "def f(:", 0),
        ("diff", "--- a/x.py\n+++ b/x.py\n@@ -1 +1 @@\n-a\n+b\n\\ No newline at end of file", 0),
        ("diff", " context only", 1),
    ],
)
def test_check_exhibit(language, code, problems):
    assert len(check_exhibit(Exhibit.from_language(language, code))) == problems
