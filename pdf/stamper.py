"""
pdf/stamper.py — nagłówki i stopki stron fiszek (drugi przebieg).

Uruchamiane dopiero gdy liczba stron dokumentu jest ostateczna. Strony
front matter (okładka, copyright, spis) są pomijane według zakresu
indeksów, nie według treści. Przebieg wykonuje wyłącznie rysowanie:
żadna strona nie jest dodawana, usuwana ani przestawiana.

Fiszka i zajmuje ciągły zakres stron [start_i, start_{i+1}); ostatnia
fiszka kończy się na ostatniej stronie dokumentu.
"""

from __future__ import annotations

import bisect
from collections.abc import Sequence

import fitz  # PyMuPDF

from pdf import style
from pdf.config import HeaderMode, LayoutConfig
from pdf.fonts import EmbeddedFont, Measure, draw_text
from pdf.summary import truncate_title


def owner_of_page(page_number: int, start_pages: Sequence[int], total_pages: int) -> int | None:
    """
    Indeks fiszki, do której należy 1-based strona `page_number`.

    Największe start_pages[i] <= page_number; None przed pierwszą fiszką
    lub poza dokumentem. start_pages musi być rosnące.
    """
    if page_number < 1 or page_number > total_pages:
        return None
    idx = bisect.bisect_right(start_pages, page_number) - 1
    return idx if idx >= 0 else None


def header_text(subject: str, config: LayoutConfig) -> str:
    if config.brand and subject:
        return f"{config.brand} — {subject}"
    return config.brand or subject


def footer_label(page_number: int, total_pages: int, config: LayoutConfig) -> str:
    if config.footer_total:
        return f"{page_number} / {total_pages}"
    return str(page_number)


def fit_header_title(title: str, available: float, measure: Measure, max_chars: int) -> str:
    """
    Tytuł fiszki do środka nagłówka: obcięty jak w spisie (max_chars), a potem
    skracany dalej, aż zmieści się w `available`. "" gdy nie mieści się nic.
    """
    limit = min(len(title), max_chars)
    text = truncate_title(title, limit)
    while limit > 0 and measure(text, style.HEADER_SIZE) > available:
        limit -= 1
        text = truncate_title(title, limit)
    return text if limit > 0 else ""


def stamp(
    document: fitz.Document,
    start_pages: Sequence[int],
    titles: Sequence[str],
    subject: str,
    *,
    font: EmbeddedFont,
    config: LayoutConfig,
    first_content_index: int,
) -> int:
    """
    Rysuje nagłówek i stopkę na każdej stronie od `first_content_index`.

    Args:
        document:            dokument o ostatecznej liczbie stron.
        start_pages:         1-based strony startowe fiszek.
        titles:              tytuły fiszek (ta sama kolejność co start_pages).
        subject:             etykieta przedmiotu w nagłówku.
        font:                font użyty do pomiaru i rysowania.
        config:              tryb nagłówka, opcje stopki.
        first_content_index: 0-based indeks pierwszej strony poza front matter.

    Returns:
        Liczba ostemplowanych stron.
    """
    total = document.page_count
    left_text = header_text(subject, config)
    left_w = font.measure(left_text, style.HEADER_SIZE)
    stamped = 0

    for i in range(first_content_index, total):
        page = document[i]
        page_number = i + 1
        width, height = page.rect.width, page.rect.height

        # Nagłówek: pas w kolorze marki + przedmiot po lewej
        page.draw_rect(
            fitz.Rect(0, 0, width, style.HEADER_HEIGHT),
            color=None,
            fill=style.GREEN,
            width=0,
        )
        draw_text(page, (style.HEADER_TEXT_X, style.HEADER_TEXT_Y), left_text, font, style.HEADER_SIZE, style.WHITE)

        if config.header_mode is HeaderMode.FICHE:
            owner = owner_of_page(page_number, start_pages, total)
            if owner is not None and titles[owner]:
                # Wyśrodkowany tytuł nie może wejść na tekst po lewej
                available = width - 2 * (style.HEADER_TEXT_X + left_w + style.HEADER_TITLE_GAP)
                title = fit_header_title(titles[owner], available, font.measure, config.title_max_chars)
                title_w = font.measure(title, style.HEADER_SIZE)
                draw_text(
                    page, ((width - title_w) / 2, style.HEADER_TEXT_Y),
                    title, font, style.HEADER_SIZE, style.WHITE,
                )

        # Stopka: linia + numer strony do prawej, opcjonalnie nota wyśrodkowana
        rule_y = height - style.FOOTER_RULE_DY
        page.draw_line(
            fitz.Point(style.FOOTER_MARGIN, rule_y),
            fitz.Point(width - style.FOOTER_MARGIN, rule_y),
            color=style.LIGHT_GREY,
            width=style.FOOTER_RULE_WIDTH,
        )
        text_y = height - style.FOOTER_TEXT_DY
        label = footer_label(page_number, total, config)
        label_w = font.measure(label, style.FOOTER_SIZE)
        draw_text(page, (width - style.FOOTER_MARGIN - label_w, text_y), label, font, style.FOOTER_SIZE, style.GREY)

        if config.footer_notice:
            notice_w = font.measure(config.footer_notice, style.FOOTER_SIZE)
            draw_text(
                page, ((width - notice_w) / 2, text_y),
                config.footer_notice, font, style.FOOTER_SIZE, style.GREY,
            )

        stamped += 1

    return stamped
