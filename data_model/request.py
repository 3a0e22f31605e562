"""
data_model/request.py — parsowanie żądania JSON do MergeRequest.

Kształt żądania (niezależny od transportu):

  {
    "subjectLabel": "Droit civil",           # alias: "subject", "matiere"
    "cover":        "<base64 PNG/JPEG>",     # alias: "coverture"; opcjonalne
    "copyright":    "<base64 PDF>",          # opcjonalne
    "fiches": [
      {"title": "...", "theme": "...", "pdf": "<base64 PDF>"}   # alias: "titre"
    ]
  }

Dane base64 mogą mieć prefiks data URL ("data:application/pdf;base64,").

Publiczne API:
  parse_request(payload) -> MergeRequest
  decode_base64(value, fragment, index) -> bytes
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
from typing import Any

from .errors import FragmentDecodeError, InvalidRequestError
from .fiches import Fiche, MergeRequest


def _first(payload: Mapping[str, Any], *keys: str) -> Any:
    """Zwraca wartość pierwszego obecnego klucza (nie-None)."""
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def decode_base64(value: Any, fragment: str, index: int | None = None) -> bytes:
    if not isinstance(value, str):
        raise FragmentDecodeError(fragment, index, "oczekiwano tekstu base64")
    text = value.strip()
    if text.startswith("data:") and "," in text:
        text = text.split(",", 1)[1]
    # Niektóre klienty wysyłają base64 łamany w linie
    text = "".join(text.split())
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise FragmentDecodeError(fragment, index, f"niepoprawne base64 ({exc})") from exc
    if not data:
        raise FragmentDecodeError(fragment, index, "pusty fragment")
    return data


def _normalize_theme(raw: Any) -> str | None:
    if raw is None:
        return None
    theme = str(raw).strip()
    return theme or None


def _parse_fiche(raw: Any, index: int) -> Fiche:
    if not isinstance(raw, Mapping):
        raise InvalidRequestError(f"fiches[{index}] musi być obiektem.")
    if raw.get("pdf") in (None, ""):
        raise InvalidRequestError(f"fiches[{index}]: brak pola 'pdf'.")

    title = _first(raw, "title", "titre") or ""
    return Fiche(
        title=str(title).strip(),
        theme=_normalize_theme(raw.get("theme")),
        pdf=decode_base64(raw["pdf"], "fiche", index),
    )


def parse_request(payload: Any) -> MergeRequest:
    """
    Waliduje i dekoduje żądanie.

    Raises:
        InvalidRequestError: payload nie jest obiektem, brak / pusta lista fiszek.
        FragmentDecodeError: base64 okładki, copyright lub fiszki jest niepoprawne.
    """
    if not isinstance(payload, Mapping):
        raise InvalidRequestError("Żądanie musi być obiektem JSON.")

    raw_fiches = payload.get("fiches")
    if not isinstance(raw_fiches, list) or not raw_fiches:
        raise InvalidRequestError("Lista 'fiches' jest wymagana i nie może być pusta.")

    # Kolejność: najpierw fiszki (błąd kształtu ma pierwszeństwo), potem front matter
    fiches = [_parse_fiche(raw, i) for i, raw in enumerate(raw_fiches)]

    raw_cover = _first(payload, "cover", "coverture")
    raw_copyright = payload.get("copyright")

    return MergeRequest(
        subject=str(_first(payload, "subjectLabel", "subject", "matiere") or "").strip(),
        fiches=fiches,
        cover=decode_base64(raw_cover, "cover") if raw_cover else None,
        copyright=decode_base64(raw_copyright, "copyright") if raw_copyright else None,
    )
