from __future__ import annotations

import dataclasses

import pytest

from data_model.fiches import Fiche
from pdf import style
from pdf.assembler import assemble
from pdf.config import HeaderMode
from pdf.fonts import load_font
from pdf.stamper import fit_header_title, footer_label, header_text, owner_of_page, stamp
from tests.conftest import LETTER, make_pdf, stub_measure


@pytest.mark.parametrize(
    "page, owner",
    [(1, None), (2, None), (3, 0), (4, 0), (5, 1), (8, 1), (9, 2), (10, 2), (11, None), (0, None)],
)
def test_owner_of_page_boundaries(page, owner):
    assert owner_of_page(page, [3, 5, 9], 10) == owner


def test_owner_matches_ranges_for_every_page():
    starts = [4, 5, 7, 12]
    total = 15
    bounds = starts[1:] + [total + 1]
    for i, (start, end) in enumerate(zip(starts, bounds)):
        for p in range(start, end):
            assert owner_of_page(p, starts, total) == i


def test_header_and_footer_labels(config):
    assert header_text("Droit civil", config) == "Jurible — Droit civil"
    assert header_text("", config) == "Jurible"
    assert header_text("Droit", dataclasses.replace(config, brand="")) == "Droit"
    assert footer_label(7, 40, config) == "7"
    assert footer_label(7, 40, dataclasses.replace(config, footer_total=True)) == "7 / 40"


def _stamped_doc(config, fiches):
    plan = assemble(None, make_pdf(1, label="copyright"), fiches, config)
    font = load_font(config.font_path)
    count = stamp(
        plan.document,
        plan.fiche_start_pages,
        [f.title for f in fiches],
        "Droit civil",
        font=font,
        config=config,
        first_content_index=plan.first_content_index,
    )
    return plan, count


def test_stamp_skips_front_matter_and_marks_fiche_pages(config):
    fiches = [
        Fiche(title="Le contrat", theme=None, pdf=make_pdf(2)),
        Fiche(title="La responsabilite", theme=None, pdf=make_pdf(1, size=LETTER)),
    ]
    plan, count = _stamped_doc(config, fiches)
    doc = plan.document
    try:
        assert count == 3
        assert doc.page_count == 1 + 1 + 3
        texts = [page.get_text() for page in doc]

        for front in texts[:2]:
            assert "Droit civil" not in front

        assert "Droit civil" in texts[2]
        assert "Le contrat" in texts[2]
        assert "Le contrat" in texts[3]
        assert "La responsabilite" in texts[4]
        assert "La responsabilite" not in texts[3]
        assert "3" in texts[2].split()
        assert "5" in texts[4].split()
    finally:
        doc.close()


def test_stamp_subject_mode_omits_fiche_title(config):
    config = dataclasses.replace(config, header_mode=HeaderMode.SUBJECT, footer_total=True)
    fiches = [Fiche(title="Le contrat", theme=None, pdf=make_pdf(1))]
    plan, count = _stamped_doc(config, fiches)
    doc = plan.document
    try:
        assert count == 1
        text = doc[2].get_text()
        assert "Droit civil" in text
        assert "Le contrat" not in text
        assert "3 / 3" in text
    finally:
        doc.close()


def test_stamp_footer_notice(config):
    config = dataclasses.replace(config, footer_notice="Reproduction interdite")
    fiches = [Fiche(title="Le contrat", theme=None, pdf=make_pdf(1))]
    plan, _ = _stamped_doc(config, fiches)
    try:
        assert "Reproduction interdite" in plan.document[2].get_text()
    finally:
        plan.document.close()


def test_stamp_does_not_change_page_count(config):
    fiches = [Fiche(title="X", theme=None, pdf=make_pdf(4))]
    plan, _ = _stamped_doc(config, fiches)
    try:
        assert plan.document.page_count == 1 + 1 + 4
    finally:
        plan.document.close()


def test_fit_header_title_short_title_untouched():
    assert fit_header_title("Le contrat", 1000.0, stub_measure, 62) == "Le contrat"


def test_fit_header_title_uses_char_limit_first():
    assert fit_header_title("x" * 100, 1000.0, stub_measure, 62) == "x" * 62 + style.ELLIPSIS


def test_fit_header_title_shrinks_to_width():
    # stub_measure przy HEADER_SIZE = 4.5 pt na znak: 9 znaków + wielokropek = 45 pt
    out = fit_header_title("x" * 100, 45.0, stub_measure, 62)
    assert out == "x" * 9 + style.ELLIPSIS
    assert stub_measure(out, style.HEADER_SIZE) <= 45.0


def test_fit_header_title_no_room():
    assert fit_header_title("Le contrat", 2.0, stub_measure, 62) == ""


def test_stamp_long_fiche_title_is_truncated(config):
    title = " ".join(["Responsabilite"] * 20)
    fiches = [Fiche(title=title, theme=None, pdf=make_pdf(1))]
    plan, _ = _stamped_doc(config, fiches)
    try:
        text = plan.document[2].get_text()
        assert "Droit civil" in text
        assert title not in text.replace("\n", " ")
        assert style.ELLIPSIS in text
    finally:
        plan.document.close()
