"""
data_model/fiches.py — model żądania scalenia fiszek i jego wyniku.

Fiche odpowiada jednemu dokumentowi wejściowemu ("fiszce"); MergeRequest to
cały zestaw fragmentów (okładka, strona copyright, fiszki) dla jednego
wywołania. MergeResult to gotowy PDF wraz z metadanymi paginacji.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Fiche:
    title: str
    theme: str | None        # None = bez grupy (nie generuje nagłówka tematu)
    pdf: bytes
    start_page: int | None = None  # 1-based, nadawane raz przez assembler


@dataclass(slots=True)
class MergeRequest:
    subject: str
    fiches: list[Fiche]
    cover: bytes | None = None      # obraz PNG/JPEG
    copyright: bytes | None = None  # PDF


@dataclass(slots=True)
class MergeResult:
    """
    Wynik scalenia.

    - pdf:          zserializowany dokument
    - total_pages:  liczba stron dokumentu końcowego
    - fiches_count: liczba fiszek wejściowych
    - summary_pages: liczba zarezerwowanych stron spisu treści
    - start_pages:  1-based strony startowe fiszek (w kolejności wejścia)
    - omitted:      indeksy fiszek, które nie zmieściły się w spisie treści
    """

    pdf: bytes
    total_pages: int
    fiches_count: int
    summary_pages: int
    start_pages: list[int] = field(default_factory=list)
    omitted: list[int] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            "pdf":                base64.b64encode(self.pdf).decode("ascii"),
            "totalPages":         self.total_pages,
            "fichesCount":        self.fiches_count,
            "summaryPages":       self.summary_pages,
            "startPages":         list(self.start_pages),
            "omittedFromSummary": list(self.omitted),
        }
