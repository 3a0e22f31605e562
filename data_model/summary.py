"""
data_model/summary.py — rekordy układu spisu treści (sommaire).

SummaryEntry to jedna pozycja do narysowania na stronie spisu: tytuł spisu,
nagłówek tematu albo linia fiszki z kropkami i numerem strony. Rekordy są
tymczasowe: powstają w pdf.summary.layout_summary() i są zużywane przez
draw_summary(); nigdy nie są zapisywane.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class EntryKind(StrEnum):
    TITLE = "title"
    THEME = "theme"
    FICHE = "fiche"


@dataclass(slots=True)
class SummaryEntry:
    """
    Pozycja spisu treści.

    - page_index: 0-based indeks strony spisu (nie dokumentu)
    - x, y:       punkt bazowy tekstu (układ PyMuPDF: y rośnie w dół)
    - page_ref:   numer strony fiszki (tylko FICHE)
    - leader:     ciąg kropek między tytułem a numerem (może być pusty)
    """
    kind: EntryKind
    text: str
    page_index: int
    x: float
    y: float
    fiche_index: int | None = None
    page_ref: int | None = None
    leader: str = ""
    leader_x: float = 0.0
    number_x: float = 0.0


@dataclass(slots=True)
class SummaryLayout:
    entries: list[SummaryEntry] = field(default_factory=list)
    pages_used: int = 1
    omitted: list[int] = field(default_factory=list)

    def fiche_entries(self) -> list[SummaryEntry]:
        return [e for e in self.entries if e.kind is EntryKind.FICHE]

    def theme_entries(self) -> list[SummaryEntry]:
        return [e for e in self.entries if e.kind is EntryKind.THEME]
