from __future__ import annotations

import base64

import pytest

from data_model.errors import ErrorKind, FragmentDecodeError, InvalidRequestError
from data_model.fiches import MergeResult
from data_model.request import decode_base64, parse_request
from tests.conftest import b64, make_pdf, make_png


def _payload(**overrides):
    payload = {
        "subjectLabel": "Droit civil",
        "fiches": [
            {"title": "Le contrat", "theme": "Obligations", "pdf": b64(make_pdf(1))},
            {"title": "La faute", "theme": None, "pdf": b64(make_pdf(2))},
        ],
    }
    payload.update(overrides)
    return payload


def test_parse_minimal_request():
    request = parse_request(_payload())
    assert request.subject == "Droit civil"
    assert [f.title for f in request.fiches] == ["Le contrat", "La faute"]
    assert [f.theme for f in request.fiches] == ["Obligations", None]
    assert request.fiches[0].pdf.startswith(b"%PDF")
    assert all(f.start_page is None for f in request.fiches)
    assert request.cover is None
    assert request.copyright is None


def test_parse_legacy_keys():
    payload = {
        "matiere": "Droit penal",
        "coverture": b64(make_png()),
        "copyright": b64(make_pdf(1)),
        "fiches": [{"titre": "L'infraction", "theme": "  ", "pdf": b64(make_pdf(1))}],
    }
    request = parse_request(payload)
    assert request.subject == "Droit penal"
    assert request.fiches[0].title == "L'infraction"
    assert request.fiches[0].theme is None
    assert request.cover.startswith(b"\x89PNG")
    assert request.copyright.startswith(b"%PDF")


@pytest.mark.parametrize("payload", [None, [], "x", {}, {"fiches": []}, {"fiches": "nope"}])
def test_empty_or_missing_fiches_is_invalid(payload):
    with pytest.raises(InvalidRequestError):
        parse_request(payload)


def test_fiche_without_pdf_is_invalid():
    with pytest.raises(InvalidRequestError):
        parse_request({"fiches": [{"title": "X"}]})


def test_fiche_not_object_is_invalid():
    with pytest.raises(InvalidRequestError):
        parse_request({"fiches": ["abc"]})


def test_malformed_base64_names_fiche_index():
    payload = _payload()
    payload["fiches"][1]["pdf"] = "!!!not-base64!!!"
    with pytest.raises(FragmentDecodeError) as exc_info:
        parse_request(payload)
    err = exc_info.value
    assert err.kind is ErrorKind.FRAGMENT_DECODE
    assert err.index == 1
    assert err.label == "fiche[1]"
    assert "fiche[1]" in str(err)


def test_malformed_cover_base64():
    with pytest.raises(FragmentDecodeError) as exc_info:
        parse_request(_payload(cover="%%%"))
    assert exc_info.value.label == "cover"


def test_data_url_prefix_and_line_breaks():
    raw = b64(make_pdf(1))
    wrapped = "data:application/pdf;base64," + "\n".join(raw[i:i + 60] for i in range(0, len(raw), 60))
    assert decode_base64(wrapped, "fiche", 0) == base64.b64decode(raw)


def test_decode_rejects_non_string():
    with pytest.raises(FragmentDecodeError):
        decode_base64(123, "copyright")


def test_result_payload_shape():
    result = MergeResult(
        pdf=b"%PDF-1.7", total_pages=4, fiches_count=2, summary_pages=1,
        start_pages=[2, 3], omitted=[],
    )
    payload = result.to_payload()
    assert base64.b64decode(payload["pdf"]) == b"%PDF-1.7"
    assert payload["totalPages"] == 4
    assert payload["fichesCount"] == 2
    assert payload["summaryPages"] == 1
    assert payload["startPages"] == [2, 3]
    assert payload["omittedFromSummary"] == []
