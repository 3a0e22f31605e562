"""
pdf/fonts.py — wczytanie fontu i pomiar / rysowanie tekstu.

Jeden obiekt fitz.Font służy zarówno do pomiaru szerokości, jak i do
rysowania (przez fitz.TextWriter), więc pomiar i rysunek nigdy nie używają
różnych fontów. Gdy plik TTF nie istnieje lub jest uszkodzony, używamy
wbudowanej Helvetiki ("helv").

Publiczne API:
  load_font(path) -> EmbeddedFont
  EmbeddedFont.measure(text, size) -> float
  draw_text(page, point, text, font, size, color)
"""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Callable
from dataclasses import dataclass

import fitz  # PyMuPDF

log = logging.getLogger(__name__)

FALLBACK_FONT = "helv"

# measure(text, size) -> szerokość w punktach
type Measure = Callable[[str, float], float]


@dataclass(slots=True)
class EmbeddedFont:
    name: str
    font: fitz.Font
    fallback: bool = False

    def measure(self, text: str, size: float) -> float:
        return self.font.text_length(text, fontsize=size)


def load_font(path: str | pathlib.Path | None) -> EmbeddedFont:
    """
    Wczytuje font TTF; przy braku / błędzie pliku zwraca wbudowaną Helvetikę.
    """
    if path is not None:
        font_path = pathlib.Path(path)
        if font_path.is_file():
            try:
                return EmbeddedFont(font_path.stem, fitz.Font(fontfile=str(font_path)))
            except Exception as exc:  # plik uszkodzony lub nie-TTF
                log.warning("Nie można wczytać fontu %s (%s) — używam %s", font_path, exc, FALLBACK_FONT)
        else:
            log.warning("Brak pliku fontu %s — używam %s", font_path, FALLBACK_FONT)
    return EmbeddedFont(FALLBACK_FONT, fitz.Font(FALLBACK_FONT), fallback=True)


def draw_text(
    page: fitz.Page,
    point: tuple[float, float],
    text: str,
    font: EmbeddedFont,
    size: float,
    color: tuple[float, float, float],
) -> None:
    """Rysuje tekst od punktu bazowego `point` (lewy koniec linii bazowej)."""
    if not text:
        return
    writer = fitz.TextWriter(page.rect, color=color)
    writer.append(fitz.Point(*point), text, font=font.font, fontsize=size)
    writer.write_text(page)
