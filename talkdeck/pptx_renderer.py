"""Utilities to render :class:`Deck` objects into PPTX files."""

from __future__ import annotations

import io
import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.util import Emu, Inches, Pt

from .deck_models import Deck, Exhibit, Slide

LOGGER = logging.getLogger(__name__)

TITLE_ONLY_LAYOUT = "Title Only"
CODE_FONT = "Courier New"
CODE_FONT_SIZE = Pt(12)
BODY_FONT_SIZE = Pt(18)
ADDED_COLOR = RGBColor(0x1A, 0x7F, 0x37)
REMOVED_COLOR = RGBColor(0xCF, 0x22, 0x2E)

_MARGIN = Inches(0.5)
_CONTENT_TOP = Inches(1.5)
_BULLET_PREFIXES = ("- ", "* ", "+ ")


class DeckRenderer:
    """Render decks into PPTX binaries (and optional previews)."""

    def __init__(self, template_path: Optional[Path] = None) -> None:
        self.template_path = Path(template_path) if template_path else None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render_deck(self, deck: Deck) -> io.BytesIO:
        """Return a PPTX stream with one slide per deck slide."""

        presentation = Presentation(str(self.template_path)) if self.template_path else Presentation()
        layout = _title_only_layout(presentation)

        for slide in deck.slides:
            pptx_slide = presentation.slides.add_slide(layout)
            self._write_slide(presentation, pptx_slide, slide)

        buffer = io.BytesIO()
        presentation.save(buffer)
        buffer.seek(0)
        LOGGER.info("Rendered %d slides to PPTX", len(deck))
        return buffer

    def render_preview_image(self, deck: Deck, *, slide_index: int = 0) -> Optional[bytes]:
        """Generate a PNG preview of one slide if LibreOffice is available.

        ``soffice --convert-to png`` only exports the first slide of a
        presentation, so the requested slide is rendered on its own.
        """

        if not deck.slides:
            return None
        soffice_path = _locate_soffice()
        if soffice_path is None:
            LOGGER.info("LibreOffice not found; skipping preview")
            return None

        index = max(0, min(slide_index, len(deck) - 1))
        single = Deck(slides=[deck.slides[index]], metadata=dict(deck.metadata))
        payload = self.render_deck(single).getvalue()
        with tempfile.TemporaryDirectory() as tmpdir:
            pptx_path = Path(tmpdir) / "preview.pptx"
            pptx_path.write_bytes(payload)
            cmd = [
                soffice_path,
                "--headless",
                "--convert-to",
                "png",
                "--outdir",
                tmpdir,
                str(pptx_path),
            ]
            try:
                subprocess.run(
                    cmd,
                    check=True,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    timeout=60,
                )
            except (OSError, subprocess.SubprocessError) as exc:
                LOGGER.warning("Preview conversion failed: %s", exc)
                return None

            png_path = pptx_path.with_suffix(".png")
            if not png_path.exists():
                return None
            return png_path.read_bytes()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _write_slide(self, presentation, pptx_slide, slide: Slide) -> None:
        if pptx_slide.shapes.title is not None:
            pptx_slide.shapes.title.text = slide.title or ""

        width = presentation.slide_width - 2 * _MARGIN
        top = _CONTENT_TOP

        prose_lines = [line for line in slide.prose().split("\n") if line.strip()]
        if prose_lines:
            height = Emu(int(BODY_FONT_SIZE * 1.5) * len(prose_lines))
            box = pptx_slide.shapes.add_textbox(_MARGIN, top, width, height)
            _fill_prose(box.text_frame, prose_lines)
            top += height

        for exhibit in slide.exhibits:
            lines = exhibit.code.split("\n")
            if exhibit.caption:
                lines_count = len(lines) + 1
            else:
                lines_count = len(lines)
            height = Emu(int(CODE_FONT_SIZE * 1.3) * lines_count)
            box = pptx_slide.shapes.add_textbox(_MARGIN, top, width, height)
            _fill_exhibit(box.text_frame, exhibit)
            top += height + Inches(0.1)

        if slide.has_notes:
            pptx_slide.notes_slide.notes_text_frame.text = slide.notes


# ----------------------------------------------------------------------
# Helper functions
# ----------------------------------------------------------------------

def _title_only_layout(presentation):
    try:
        return presentation.slide_layouts.get_by_name(TITLE_ONLY_LAYOUT) or presentation.slide_layouts[5]
    except IndexError:
        return presentation.slide_layouts[0]


def _fill_prose(text_frame, lines: List[str]) -> None:
    text_frame.word_wrap = True
    for idx, raw in enumerate(lines):
        paragraph = text_frame.paragraphs[0] if idx == 0 else text_frame.add_paragraph()
        indent = len(raw) - len(raw.lstrip(" "))
        text = raw.strip()
        if text.startswith(_BULLET_PREFIXES):
            text = "• " + text[2:]
            paragraph.level = min(indent // 2, 4)
        paragraph.text = text
        for run in paragraph.runs:
            run.font.size = BODY_FONT_SIZE


def _fill_exhibit(text_frame, exhibit: Exhibit) -> None:
    text_frame.word_wrap = False
    paragraphs_written = 0

    def next_paragraph():
        nonlocal paragraphs_written
        paragraph = text_frame.paragraphs[0] if paragraphs_written == 0 else text_frame.add_paragraph()
        paragraphs_written += 1
        return paragraph

    if exhibit.caption:
        run = next_paragraph().add_run()
        run.text = exhibit.caption
        run.font.bold = True
        run.font.size = CODE_FONT_SIZE

    for line in exhibit.code.split("\n"):
        run = next_paragraph().add_run()
        run.text = line
        run.font.name = CODE_FONT
        run.font.size = CODE_FONT_SIZE
        if exhibit.is_diff and line.startswith("+") and not line.startswith("+++"):
            run.font.color.rgb = ADDED_COLOR
        elif exhibit.is_diff and line.startswith("-") and not line.startswith("---"):
            run.font.color.rgb = REMOVED_COLOR


def _locate_soffice() -> Optional[str]:
    for candidate in ("soffice", "libreoffice"):
        found = shutil.which(candidate)
        if found:
            return found
    mac_path = Path("/Applications/LibreOffice.app/Contents/MacOS/soffice")
    if mac_path.exists():
        return str(mac_path)
    return None
