"""Streamlit viewer for the fixtures talk deck."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import streamlit as st

from talkdeck.deck_models import Deck, Slide
from talkdeck.deck_parser import parse_deck
from talkdeck.deck_store import DeckStore, save_snapshot
from talkdeck.deck_validation import ValidationReport, validate_deck
from talkdeck.exceptions import DeckError
from talkdeck.markdown_writer import render_markdown
from talkdeck.pptx_renderer import DeckRenderer
from talkdeck.settings import configure_logging, load_settings

LOGGER = logging.getLogger(__name__)


def _slide_label(slide: Slide) -> str:
    """Return the navigation label for ``slide`` (``3.2 Title`` for vertical slides)."""

    prefix = f"{slide.section}.{slide.position}" if slide.is_vertical else f"{slide.section}"
    return f"{prefix} {slide.title or 'Untitled'}"


def _load_uploaded_deck(upload) -> Optional[Deck]:
    """Parse an uploaded deck; malformed uploads raise :class:`DeckError`."""

    if upload is None:
        return None
    try:
        text = upload.getvalue().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DeckError("Upload is not UTF-8 text", source=upload.name) from exc

    if not upload.name.lower().endswith(".json"):
        return parse_deck(text, source=upload.name)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DeckError(f"Invalid JSON: {exc}", source=upload.name) from exc
    if not isinstance(payload, dict):
        raise DeckError("JSON snapshot must be an object", source=upload.name)
    try:
        return Deck.from_dict(payload)
    except (AttributeError, TypeError, ValueError) as exc:
        raise DeckError(f"Malformed deck snapshot: {exc}", source=upload.name) from exc


def _slide_markdown(slide: Slide) -> str:
    """Markdown shown in the main view; exhibits are rendered separately."""

    heading = f"## {slide.title}" if slide.title else ""
    return "\n\n".join(part for part in (heading, slide.prose()) if part)


@st.cache_data(show_spinner=False)
def load_default_deck(path: str) -> dict:
    return DeckStore(Path(path)).load().to_dict()


def _render_report(report: ValidationReport) -> None:
    if report.ok and not report.warnings:
        st.success("Deck passes all checks.")
        return
    for issue in report.errors:
        st.error(str(issue))
    for issue in report.warnings:
        st.warning(str(issue))


def _render_slide(slide: Slide, *, presenter_mode: bool) -> None:
    st.markdown(_slide_markdown(slide))
    for exhibit in slide.exhibits:
        if exhibit.caption:
            st.caption(exhibit.caption)
        st.code(exhibit.code, language=exhibit.language or None)
    if presenter_mode:
        st.divider()
        st.markdown("**Speaker notes**")
        if slide.has_notes:
            st.info(slide.notes)
        else:
            st.caption("No notes for this slide.")


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    st.set_page_config(page_title="Fixtures talk", layout="wide")

    with st.sidebar:
        st.header("Deck")
        uploaded = st.file_uploader("Open another deck", type=["md", "markdown", "json"])
        presenter_mode = st.toggle("Presenter mode", value=False)
        show_checks = st.checkbox("Show deck checks", value=False)

    try:
        deck = _load_uploaded_deck(uploaded)
        if deck is None:
            deck = Deck.from_dict(load_default_deck(str(settings.deck_path)))
    except (DeckError, FileNotFoundError) as exc:
        st.error("The deck could not be loaded.")
        st.exception(exc)
        return

    if not deck.slides:
        st.info("The deck has no slides.")
        return

    st.title(deck.title or "Untitled deck")

    if show_checks:
        _render_report(validate_deck(deck, expected_slides=settings.expected_slides))

    labels: List[str] = [_slide_label(slide) for slide in deck]
    st.session_state.setdefault("slide_number", 1)
    selected = st.select_slider(
        "Slide",
        options=list(range(1, len(deck) + 1)),
        value=min(st.session_state["slide_number"], len(deck)),
        format_func=lambda number: labels[number - 1],
    )
    st.session_state["slide_number"] = selected
    _render_slide(deck.get_slide(selected), presenter_mode=presenter_mode)

    renderer = DeckRenderer()
    if st.checkbox("Show slide preview", value=False):
        preview_bytes = renderer.render_preview_image(deck, slide_index=selected - 1)
        if preview_bytes:
            st.image(preview_bytes, caption=f"Slide {selected} preview", use_container_width=True)
        else:
            st.info("Preview unavailable. Check that LibreOffice is installed.")

    st.divider()
    col_json, col_md, col_pptx = st.columns(3)
    with col_json:
        st.download_button(
            "Download deck.json",
            data=json.dumps(deck.to_dict(), ensure_ascii=False, indent=2).encode("utf-8"),
            file_name="deck.json",
            mime="application/json",
        )
        if st.button(f"Save snapshot to {settings.output_dir}"):
            path = save_snapshot(deck, settings.output_dir)
            st.success(f"Saved {path}")
    with col_md:
        st.download_button(
            "Download audience Markdown",
            data=render_markdown(deck).encode("utf-8"),
            file_name="deck_audience.md",
            mime="text/markdown",
        )
    with col_pptx:
        try:
            pptx_bytes = renderer.render_deck(deck).getvalue()
        except Exception as exc:  # pragma: no cover - depends on python-pptx internals
            LOGGER.exception("PPTX rendering failed")
            st.warning("PPTX rendering failed.")
            st.exception(exc)
        else:
            st.download_button(
                "Download PPTX",
                data=pptx_bytes,
                file_name="fixtures_talk.pptx",
                mime="application/vnd.openxmlformats-officedocument.presentationml.presentation",
            )


if __name__ == "__main__":  # pragma: no cover - Streamlit handles execution
    main()
