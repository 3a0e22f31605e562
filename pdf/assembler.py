"""
pdf/assembler.py — składanie dokumentu z fragmentów.

Kolejność stron w dokumencie końcowym jest stała:

  okładka (0/1) → copyright (0..n) → spis treści (rezerwa) → fiszka 1 → fiszka 2 → …

Strony są tylko dopisywane (nigdy przestawiane ani usuwane). Liczba stron
spisu jest ustalana przed wstawieniem pierwszej fiszki; dołożenie stron
później unieważniłoby wszystkie policzone już strony startowe.

Publiczne API:
  assemble(cover, copyright, fiches, config, summary_pages) -> AssemblyPlan
  fixed_summary_pages(fiche_count, entries_per_page) -> int
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import fitz  # PyMuPDF

from data_model.errors import FragmentDecodeError
from data_model.fiches import Fiche
from pdf.config import LayoutConfig

log = logging.getLogger(__name__)

_PNG_MAGIC = b"\x89PNG"
_JPEG_MAGIC = b"\xff\xd8"


@dataclass(slots=True)
class AssemblyPlan:
    """
    Wynik składania.

    - document:          dokument ze wszystkimi stronami (spis jeszcze pusty)
    - fiche_start_pages: 1-based strony startowe fiszek
    - summary_range:     (start, end) 0-based, półotwarty zakres stron spisu
    """
    document: fitz.Document
    fiche_start_pages: list[int] = field(default_factory=list)
    summary_range: tuple[int, int] = (0, 0)
    cover_pages: int = 0
    copyright_pages: int = 0

    @property
    def summary_pages(self) -> int:
        return self.summary_range[1] - self.summary_range[0]

    @property
    def first_content_index(self) -> int:
        """0-based indeks pierwszej strony po front matter."""
        return self.summary_range[1]


def fixed_summary_pages(fiche_count: int, entries_per_page: int) -> int:
    return max(1, math.ceil(fiche_count / entries_per_page))


def assemble(
    cover: bytes | None,
    copyright: bytes | None,
    fiches: Sequence[Fiche],
    config: LayoutConfig,
    summary_pages: int | None = None,
) -> AssemblyPlan:
    """
    Składa dokument i nadaje fiszkom strony startowe.

    Args:
        cover:         obraz okładki (PNG/JPEG) lub None.
        copyright:     PDF strony copyright lub None.
        fiches:        fiszki w kolejności wejścia; pole start_page zostaje ustawione.
        config:        konfiguracja (rozmiar stron generowanych).
        summary_pages: liczba stron spisu; None → ceil(n / entries_per_summary_page).

    Raises:
        FragmentDecodeError: fragment nie daje się zdekodować; dokument jest zamykany.
    """
    if summary_pages is None:
        summary_pages = fixed_summary_pages(len(fiches), config.entries_per_summary_page)

    doc = fitz.open()
    try:
        plan = AssemblyPlan(document=doc)

        if cover:
            _append_cover(doc, cover, config)
            plan.cover_pages = 1

        if copyright:
            plan.copyright_pages = _append_pdf(doc, copyright, "copyright")

        summary_start = doc.page_count
        for _ in range(summary_pages):
            doc.new_page(width=config.page_width, height=config.page_height)
        plan.summary_range = (summary_start, doc.page_count)

        for i, fiche in enumerate(fiches):
            start = doc.page_count + 1
            _append_pdf(doc, fiche.pdf, "fiche", i)
            fiche.start_page = start
            plan.fiche_start_pages.append(start)
    except Exception:
        doc.close()
        raise

    log.debug(
        "Złożono %d stron: okładka=%d copyright=%d spis=%d fiszki=%d",
        doc.page_count, plan.cover_pages, plan.copyright_pages, summary_pages, len(fiches),
    )
    return plan


# ---------------------------------------------------------------------------
# Fragmenty
# ---------------------------------------------------------------------------

def _image_filetype(data: bytes) -> str:
    if data.startswith(_PNG_MAGIC):
        return "png"
    if data.startswith(_JPEG_MAGIC):
        return "jpeg"
    raise FragmentDecodeError("cover", reason="oczekiwano obrazu PNG lub JPEG")


def _append_cover(doc: fitz.Document, data: bytes, config: LayoutConfig) -> None:
    """Okładka: jedna strona, obraz na całą powierzchnię (bez zachowania proporcji)."""
    _image_filetype(data)
    try:
        fitz.Pixmap(data)  # walidacja; do strony trafia oryginalny strumień
    except Exception as exc:
        raise FragmentDecodeError("cover", reason=str(exc)) from exc

    page = doc.new_page(width=config.page_width, height=config.page_height)
    page.insert_image(page.rect, stream=data, keep_proportion=False)


def _open_pdf(data: bytes, fragment: str, index: int | None) -> fitz.Document:
    try:
        src = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise FragmentDecodeError(fragment, index, str(exc)) from exc
    if not src.is_pdf or src.page_count == 0:
        src.close()
        raise FragmentDecodeError(fragment, index, "dokument nie zawiera stron")
    return src


def _append_pdf(doc: fitz.Document, data: bytes, fragment: str, index: int | None = None) -> int:
    """Kopiuje wszystkie strony fragmentu bez zmian; zwraca liczbę stron."""
    src = _open_pdf(data, fragment, index)
    try:
        count = src.page_count
        before = doc.page_count
        try:
            doc.insert_pdf(src)
        except Exception as exc:
            raise FragmentDecodeError(fragment, index, f"nie można skopiować stron ({exc})") from exc
        if doc.page_count - before != count:
            raise FragmentDecodeError(fragment, index, "skopiowano niepełną liczbę stron")
    finally:
        src.close()
    return count
