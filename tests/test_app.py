import io
import json

import pytest

pytest.importorskip("streamlit")

import app
from talkdeck.deck_parser import parse_deck
from talkdeck.exceptions import DeckError

from tests.deck_samples import SIMPLE_DECK


class _Upload(io.BytesIO):
    def __init__(self, name, payload):
        super().__init__(payload)
        self.name = name


def test_slide_label_marks_vertical_slides():
    deck = parse_deck(SIMPLE_DECK)

    assert [app._slide_label(slide) for slide in deck] == [
        "1 Opening",
        "2 Setup methods",
        "2.2 Converted",
        "3 Closing",
    ]


def test_slide_markdown_leaves_out_exhibits_and_notes():
    deck = parse_deck(SIMPLE_DECK)

    assert app._slide_markdown(deck.get_slide(1)) == "## Opening\n\nWhy fixtures?"
    assert app._slide_markdown(deck.get_slide(2)) == "## Setup methods"


def test_load_uploaded_markdown_and_json():
    deck = parse_deck(SIMPLE_DECK, source="talk.md")

    from_markdown = app._load_uploaded_deck(_Upload("talk.md", SIMPLE_DECK.encode("utf-8")))
    payload = json.dumps(deck.to_dict()).encode("utf-8")
    from_json = app._load_uploaded_deck(_Upload("deck.JSON", payload))

    assert from_markdown == deck
    assert from_json == deck
    assert app._load_uploaded_deck(None) is None


@pytest.mark.parametrize(
    "name, payload, message",
    [
        ("talk.md", b"\xff\xfe# broken", "not UTF-8"),
        ("deck.json", b"{not json", "Invalid JSON"),
        ("deck.json", b"[1, 2]", "must be an object"),
        (
            "deck.json",
            json.dumps(
                {"slides": [{"number": 1, "content": "# A", "exhibits": [{"kind": "video"}]}]}
            ).encode("utf-8"),
            "Malformed deck snapshot",
        ),
    ],
)
def test_bad_uploads_raise_deck_error(name, payload, message):
    with pytest.raises(DeckError) as excinfo:
        app._load_uploaded_deck(_Upload(name, payload))

    assert message in str(excinfo.value)
    assert excinfo.value.source == name
