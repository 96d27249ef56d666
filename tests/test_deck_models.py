import pytest

from talkdeck.deck_models import Deck, Exhibit, ExhibitKind, Slide
from talkdeck.deck_parser import parse_deck

from tests.deck_samples import SIMPLE_DECK


def test_deck_dict_roundtrip_preserves_slides():
    deck = parse_deck(SIMPLE_DECK, source="simple.md")

    restored = Deck.from_dict(deck.to_dict())

    assert restored == deck
    assert restored.get_slide(2).exhibits[0].line == deck.get_slide(2).exhibits[0].line


def test_from_dict_orders_slides_by_number():
    data = {
        "slides": [
            {"number": 2, "section": 2, "position": 1, "content": "# B", "title": "B"},
            {"number": 1, "section": 1, "position": 1, "content": "# A", "title": "A"},
        ]
    }

    deck = Deck.from_dict(data)

    assert [slide.title for slide in deck] == ["A", "B"]
    assert deck.title == "A"


def test_get_slide_out_of_range():
    deck = Deck(slides=[Slide(number=1, section=1, position=1, content="# A")])

    with pytest.raises(IndexError):
        deck.get_slide(0)
    with pytest.raises(IndexError):
        deck.get_slide(2)


def test_exhibit_kind_from_language():
    assert Exhibit.from_language("diff", "+a").kind is ExhibitKind.DIFF
    assert Exhibit.from_language("PATCH", "+a").kind is ExhibitKind.DIFF
    assert Exhibit.from_language("python", "a = 1").kind is ExhibitKind.CODE
    assert Exhibit.from_language("", "plain").kind is ExhibitKind.CODE


def test_prose_strips_title_and_fences():
    deck = parse_deck(SIMPLE_DECK)

    assert deck.get_slide(2).prose() == ""
    assert deck.get_slide(4).prose() == "- one\n- two"


def test_prose_keeps_inline_code_line_that_is_not_a_fence():
    slide = parse_deck("# Title\n\n```x``` is inline code\n\nMore prose here\n").get_slide(1)

    assert slide.exhibits == []
    assert slide.prose() == "```x``` is inline code\n\nMore prose here"


def test_prose_ignores_over_indented_closing_fence():
    slide = parse_deck("# T\n\n```python\nx = 1\n    ```\n```\n\nAfter\n").get_slide(1)

    assert slide.exhibits[0].code == "x = 1\n    ```"
    assert slide.prose() == "After"


def test_has_notes():
    deck = parse_deck(SIMPLE_DECK)

    assert deck.get_slide(1).has_notes
    assert not deck.get_slide(2).has_notes


def test_exhibits_are_paired_with_slides():
    deck = parse_deck(SIMPLE_DECK)

    pairs = [(slide.number, exhibit.kind) for slide, exhibit in deck.exhibits()]

    assert pairs == [(2, ExhibitKind.CODE), (3, ExhibitKind.DIFF)]
