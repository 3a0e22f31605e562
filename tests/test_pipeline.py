from __future__ import annotations

import dataclasses

import fitz
import pytest

from data_model.errors import (
    FragmentDecodeError,
    InternalError,
    InvalidRequestError,
    LayoutOverflowError,
)
from data_model.fiches import Fiche, MergeRequest
from pdf import pipeline
from pdf.config import CapacityMode, OverflowPolicy
from pdf.pipeline import merge_document
from tests.conftest import make_fiches, make_pdf, make_png, two_themes


def test_zero_fiches_is_invalid(config):
    with pytest.raises(InvalidRequestError):
        merge_document(MergeRequest(subject="Droit", fiches=[]), config)


def test_single_fiche(config, page_texts):
    request = MergeRequest(
        subject="Droit civil",
        fiches=[Fiche(title="Le contrat", theme="Obligations", pdf=make_pdf(3))],
    )
    result = merge_document(request, config)

    assert result.total_pages == 1 + 3
    assert result.summary_pages == 1
    assert result.start_pages == [2]
    assert result.fiches_count == 1
    assert result.omitted == []

    texts = page_texts(result.pdf)
    assert len(texts) == result.total_pages
    assert "Sommaire" in texts[0]
    assert "Obligations" in texts[0]
    assert "Le contrat" in texts[0]
    assert "Droit civil" not in texts[0]
    for text in texts[1:]:
        assert "Droit civil" in text
        assert "Le contrat" in text


def test_page_total_with_all_fragments(config):
    fiches = [
        Fiche(title="A", theme=None, pdf=make_pdf(2)),
        Fiche(title="B", theme=None, pdf=make_pdf(1)),
    ]
    request = MergeRequest(
        subject="Droit", fiches=fiches, cover=make_png(), copyright=make_pdf(2),
    )
    result = merge_document(request, config)
    assert result.total_pages == 1 + 2 + 1 + 3
    assert result.start_pages == [5, 7]
    doc = fitz.open(stream=result.pdf, filetype="pdf")
    try:
        assert doc.page_count == result.total_pages
    finally:
        doc.close()


def test_thirty_fiches_two_themes(config, page_texts):
    request = MergeRequest(subject="Droit", fiches=make_fiches(30, two_themes(30)))
    result = merge_document(request, config)

    assert result.summary_pages == 2
    assert result.total_pages == 2 + 30
    assert result.start_pages == list(range(3, 33))
    assert result.omitted == []

    texts = page_texts(result.pdf)
    assert texts[0].count("Obligations") == 1
    assert texts[0].count("Contrats") == 1
    assert "Fiche 1" in texts[0]
    assert "Fiche 30" in texts[1]
    assert "Fiche 30" not in texts[0]


def test_start_pages_strictly_increase_after_front_matter(config):
    request = MergeRequest(subject="", fiches=make_fiches(5, pages=2), copyright=make_pdf(1))
    result = merge_document(request, config)
    front = 1 + result.summary_pages
    assert result.start_pages[0] > front
    assert all(a < b for a, b in zip(result.start_pages, result.start_pages[1:]))


def test_decode_error_is_not_wrapped(config):
    fiches = make_fiches(2)
    fiches[1].pdf = b"garbage"
    with pytest.raises(FragmentDecodeError) as exc_info:
        merge_document(MergeRequest(subject="", fiches=fiches), config)
    assert exc_info.value.label == "fiche[1]"


def test_unexpected_failure_becomes_internal_error(config, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(pipeline, "stamp", boom)
    with pytest.raises(InternalError) as exc_info:
        merge_document(MergeRequest(subject="", fiches=make_fiches(1)), config)
    assert "disk on fire" not in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_bad_env_config_becomes_internal_error(monkeypatch):
    monkeypatch.setenv("FM_TITLE_MAX_CHARS", "abc")
    with pytest.raises(InternalError) as exc_info:
        merge_document(MergeRequest(subject="", fiches=make_fiches(1)))
    assert "FM_TITLE_MAX_CHARS" not in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_overflow_truncates_by_default(config):
    config = dataclasses.replace(config, entries_per_summary_page=40)
    result = merge_document(MergeRequest(subject="", fiches=make_fiches(40)), config)
    assert result.summary_pages == 1
    assert result.omitted == list(range(30, 40))
    assert result.total_pages == 1 + 40


def test_overflow_error_policy(config):
    config = dataclasses.replace(
        config, entries_per_summary_page=40, overflow=OverflowPolicy.ERROR,
    )
    with pytest.raises(LayoutOverflowError):
        merge_document(MergeRequest(subject="", fiches=make_fiches(40)), config)


def test_dynamic_capacity_reserves_what_layout_needs(config):
    config = dataclasses.replace(config, summary_capacity=CapacityMode.DYNAMIC)
    result = merge_document(MergeRequest(subject="", fiches=make_fiches(28)), config)
    assert result.summary_pages == 1
    assert result.omitted == []
    assert result.start_pages[0] == 2
