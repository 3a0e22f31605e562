"""
pdf/summary.py — układ i rysowanie spisu treści (sommaire).

Architektura:
  fiszki + strony startowe → layout_summary() → SummaryLayout (czyste dane)
  → draw_summary() → zarezerwowane strony spisu w dokumencie

layout_summary() nie dotyka dokumentu: szerokości tekstu dostaje przez
wstrzykniętą funkcję measure(text, size), stan kursora trzyma w lokalnym
LayoutCursor. Dzięki temu układ da się testować bez PyMuPDF i policzyć
"na sucho" (bez limitu stron) przy dynamicznej rezerwacji.

Przepełnienie: gdy na bieżącej stronie brakuje miejsca, kursor przechodzi
na następną zarezerwowaną stronę. Gdy stron zabraknie, polityka
config.overflow decyduje: truncate → pozostałe fiszki trafiają do
`omitted`, error → LayoutOverflowError.

Kluczowe funkcje publiczne:
  truncate_title(title, max_chars) -> str
  dot_leader(available, unit_width) -> int
  layout_summary(fiches, start_pages, page_count, measure, config) -> SummaryLayout
  count_summary_pages(fiches, measure, config) -> int
  draw_summary(document, summary_start, layout, font) -> None
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import fitz  # PyMuPDF

from data_model.errors import LayoutOverflowError
from data_model.fiches import Fiche
from data_model.summary import EntryKind, SummaryEntry, SummaryLayout
from pdf import style
from pdf.assembler import fixed_summary_pages
from pdf.config import CapacityMode, LayoutConfig, OverflowPolicy
from pdf.fonts import EmbeddedFont, Measure, draw_text

log = logging.getLogger(__name__)


@dataclass(slots=True)
class LayoutCursor:
    page_index: int
    y: float
    theme: str | None = None   # ostatnio narysowany temat; None = jeszcze żaden


# ---------------------------------------------------------------------------
# Pomocnicze (czyste)
# ---------------------------------------------------------------------------

def truncate_title(title: str, max_chars: int) -> str:
    """Tytuł dłuższy niż max_chars → dokładnie max_chars znaków + wielokropek."""
    if len(title) <= max_chars:
        return title
    return title[:max_chars] + style.ELLIPSIS


def dot_leader(available: float, unit_width: float) -> int:
    """Ile powtórzeń jednostki kropek mieści się w `available` (0 gdy brak miejsca)."""
    if available <= 0 or unit_width <= 0:
        return 0
    return math.floor(available / unit_width)


def _has_room(cursor: LayoutCursor, page_height: float, min_space: float) -> bool:
    return page_height - cursor.y >= min_space


def _advance(cursor: LayoutCursor, page_count: int | None) -> bool:
    """Przechodzi na następną stronę spisu; False gdy zarezerwowanych stron brak."""
    if page_count is not None and cursor.page_index + 1 >= page_count:
        return False
    cursor.page_index += 1
    cursor.y = style.SUMMARY_CONTINUED_TOP
    return True


def _ensure_room(
    cursor: LayoutCursor,
    page_height: float,
    min_space: float,
    page_count: int | None,
) -> bool:
    if _has_room(cursor, page_height, min_space):
        return True
    return _advance(cursor, page_count)


# ---------------------------------------------------------------------------
# Układ
# ---------------------------------------------------------------------------

def layout_summary(
    fiches: Sequence[Fiche],
    start_pages: Sequence[int],
    *,
    page_count: int | None,
    measure: Measure,
    config: LayoutConfig,
) -> SummaryLayout:
    """
    Rozmieszcza pozycje spisu na zarezerwowanych stronach.

    Args:
        fiches:      fiszki w kolejności wejścia.
        start_pages: 1-based strona startowa każdej fiszki (ta sama długość co fiches).
        page_count:  liczba zarezerwowanych stron spisu; None = bez limitu (układ próbny).
        measure:     measure(text, size) -> szerokość w punktach.
        config:      konfiguracja (szerokość strony, limit tytułu, polityka przepełnienia).

    Raises:
        LayoutOverflowError: brak miejsca przy config.overflow == "error".
    """
    if len(start_pages) != len(fiches):
        raise ValueError("start_pages musi mieć tyle elementów co fiches.")

    width, height = config.page_width, config.page_height
    margin = style.SUMMARY_MARGIN
    layout = SummaryLayout()

    # Tytuł spisu (wyśrodkowany) + linia oddzielająca, tylko na pierwszej stronie
    title_w = measure(config.summary_title, style.SUMMARY_TITLE_SIZE)
    layout.entries.append(SummaryEntry(
        kind=EntryKind.TITLE,
        text=config.summary_title,
        page_index=0,
        x=(width - title_w) / 2,
        y=style.SUMMARY_TITLE_Y,
    ))

    cursor = LayoutCursor(page_index=0, y=style.SUMMARY_FIRST_TOP)
    title_x = margin + style.ENTRY_INDENT
    usable = width - 2 * margin - style.ENTRY_INDENT
    unit_w = measure(style.DOT_UNIT, style.ENTRY_SIZE)

    for idx, fiche in enumerate(fiches):
        # 1. Nagłówek tematu przy zmianie tematu (fiszki bez tematu go nie zmieniają)
        if fiche.theme and fiche.theme != cursor.theme:
            if not _ensure_room(cursor, height, style.THEME_MIN_SPACE, page_count):
                _overflow(layout, len(fiches), idx, config)
                break
            layout.entries.append(SummaryEntry(
                kind=EntryKind.THEME,
                text=fiche.theme,
                page_index=cursor.page_index,
                x=margin,
                y=cursor.y,
                fiche_index=idx,
            ))
            cursor.theme = fiche.theme
            cursor.y += style.THEME_HEIGHT

        # 2. Miejsce na samą linię fiszki
        if not _ensure_room(cursor, height, style.ROW_MIN_SPACE, page_count):
            _overflow(layout, len(fiches), idx, config)
            break

        # 3–5. Obcięcie, pomiar, kropki
        text = truncate_title(fiche.title, config.title_max_chars)
        number = str(start_pages[idx])
        text_w = measure(text, style.ENTRY_SIZE)
        number_w = measure(number, style.ENTRY_SIZE)
        count = dot_leader(usable - text_w - number_w - style.LEADER_GAP, unit_w)

        # 6. Tytuł od marginesu, kropki za tytułem, numer do prawego marginesu
        layout.entries.append(SummaryEntry(
            kind=EntryKind.FICHE,
            text=text,
            page_index=cursor.page_index,
            x=title_x,
            y=cursor.y,
            fiche_index=idx,
            page_ref=start_pages[idx],
            leader=style.DOT_UNIT * count,
            leader_x=title_x + text_w + style.LEADER_OFFSET,
            number_x=width - margin - number_w,
        ))

        # 7.
        cursor.y += style.LINE_HEIGHT

    layout.pages_used = cursor.page_index + 1
    return layout


def _overflow(layout: SummaryLayout, total: int, idx: int, config: LayoutConfig) -> None:
    omitted = list(range(idx, total))
    if config.overflow is OverflowPolicy.ERROR:
        raise LayoutOverflowError(omitted)
    layout.omitted = omitted
    log.warning(
        "Spis treści obcięty: %d z %d fiszek nie zmieściło się w zarezerwowanych stronach",
        len(omitted), total,
    )


def count_summary_pages(
    fiches: Sequence[Fiche],
    *,
    measure: Measure,
    config: LayoutConfig,
) -> int:
    """
    Liczba stron spisu do zarezerwowania przed wstawieniem fiszek.

    fixed:   ceil(n / entries_per_summary_page)
    dynamic: układ próbny bez limitu stron; pionowe położenie pozycji nie zależy
             od numerów stron, więc wynik jest dokładny.
    """
    if config.summary_capacity is CapacityMode.FIXED:
        return fixed_summary_pages(len(fiches), config.entries_per_summary_page)
    dry = layout_summary(
        fiches,
        [0] * len(fiches),
        page_count=None,
        measure=measure,
        config=config,
    )
    return dry.pages_used


# ---------------------------------------------------------------------------
# Rysowanie
# ---------------------------------------------------------------------------

def draw_summary(
    document: fitz.Document,
    summary_start: int,
    layout: SummaryLayout,
    font: EmbeddedFont,
) -> None:
    """Rysuje pozycje układu na stronach spisu (summary_start = 0-based indeks pierwszej)."""
    for entry in layout.entries:
        page = document[summary_start + entry.page_index]
        width = page.rect.width

        if entry.kind is EntryKind.TITLE:
            draw_text(page, (entry.x, entry.y), entry.text, font, style.SUMMARY_TITLE_SIZE, style.GREY)
            page.draw_line(
                fitz.Point(style.SUMMARY_MARGIN, style.SUMMARY_RULE_Y),
                fitz.Point(width - style.SUMMARY_MARGIN, style.SUMMARY_RULE_Y),
                color=style.LIGHT_GREY,
                width=0.75,
            )

        elif entry.kind is EntryKind.THEME:
            draw_text(page, (entry.x, entry.y), entry.text, font, style.THEME_SIZE, style.GREY)
            rule_y = entry.y + style.THEME_RULE_DY
            page.draw_line(
                fitz.Point(style.SUMMARY_MARGIN, rule_y),
                fitz.Point(width - style.SUMMARY_MARGIN, rule_y),
                color=style.LIGHT_GREY,
                width=0.5,
            )

        else:
            draw_text(page, (entry.x, entry.y), entry.text, font, style.ENTRY_SIZE, style.GREY)
            draw_text(page, (entry.leader_x, entry.y), entry.leader, font, style.ENTRY_SIZE, style.LIGHT_GREY)
            draw_text(page, (entry.number_x, entry.y), str(entry.page_ref), font, style.ENTRY_SIZE, style.GREY)
