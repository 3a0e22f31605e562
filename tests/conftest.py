from __future__ import annotations

import base64
from pathlib import Path

import fitz
import pytest

from data_model.fiches import Fiche
from pdf.config import LayoutConfig

LETTER = (612.0, 792.0)


def make_pdf(pages: int = 1, size: tuple[float, float] = (595.28, 841.89), label: str = "fiche") -> bytes:
    doc = fitz.open()
    for i in range(pages):
        page = doc.new_page(width=size[0], height=size[1])
        page.insert_text((72, 200), f"{label} p{i + 1}", fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data


def make_png(width: int = 8, height: int = 8) -> bytes:
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pix.clear_with(180)
    return pix.tobytes("png")


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def stub_measure(text: str, size: float) -> float:
    return len(text) * size * 0.5


def make_fiches(count: int, themes: list[str | None] | None = None, pages: int = 1) -> list[Fiche]:
    fiches = []
    for i in range(count):
        theme = themes[i] if themes is not None else None
        fiches.append(Fiche(title=f"Fiche {i + 1}", theme=theme, pdf=make_pdf(pages, label=f"f{i + 1}")))
    return fiches


def two_themes(count: int = 30) -> list[str | None]:
    half = count // 2
    return ["Obligations"] * half + ["Contrats"] * (count - half)


@pytest.fixture
def config(tmp_path: Path) -> LayoutConfig:
    # Brak pliku TTF → wbudowana Helvetica; testy nie zależą od fontów w repo
    return LayoutConfig(font_path=tmp_path / "missing.ttf")


@pytest.fixture
def page_texts():
    def _texts(pdf_bytes: bytes) -> list[str]:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        try:
            return [page.get_text() for page in doc]
        finally:
            doc.close()
    return _texts
