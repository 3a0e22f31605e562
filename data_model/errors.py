"""
data_model/errors.py — rodzaje błędów scalania.

Każdy błąd niesie `kind` (ErrorKind) i flagę `is_client_error`, dzięki czemu
warstwa transportowa (HTTP, CLI) mapuje go na status bez łańcucha isinstance.

  InvalidRequestError  — brak / pusta lista fiszek, zły kształt żądania
  FragmentDecodeError  — fragment (okładka, copyright, fiszka) nie daje się zdekodować
  LayoutOverflowError  — spis treści nie mieści się w zarezerwowanych stronach
                         (tylko przy polityce overflow=error; domyślnie obcinamy cicho)
  InternalError        — każdy inny nieoczekiwany błąd; komunikat nieprzezroczysty
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    INVALID_REQUEST = "E_INVALID_REQUEST"
    FRAGMENT_DECODE = "E_FRAGMENT_DECODE"
    LAYOUT_OVERFLOW = "E_LAYOUT_OVERFLOW"
    INTERNAL        = "E_INTERNAL"


class MergeError(Exception):
    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL
    is_client_error: ClassVar[bool] = False


class InvalidRequestError(MergeError):
    kind = ErrorKind.INVALID_REQUEST
    is_client_error = True


class FragmentDecodeError(MergeError):
    """Fragment nie jest poprawnym dokumentem / obrazem / base64."""

    kind = ErrorKind.FRAGMENT_DECODE
    is_client_error = True

    def __init__(self, fragment: str, index: int | None = None, reason: str = "") -> None:
        self.fragment = fragment   # "cover" | "copyright" | "fiche"
        self.index = index         # 0-based indeks fiszki (tylko dla "fiche")
        self.reason = reason
        message = f"Nie można zdekodować fragmentu {self.label}"
        if reason:
            message += f": {reason}"
        super().__init__(message)

    @property
    def label(self) -> str:
        if self.index is None:
            return self.fragment
        return f"{self.fragment}[{self.index}]"


class LayoutOverflowError(MergeError):
    kind = ErrorKind.LAYOUT_OVERFLOW
    is_client_error = True

    def __init__(self, omitted: list[int]) -> None:
        self.omitted = list(omitted)
        super().__init__(
            f"Spis treści nie mieści się w zarezerwowanych stronach "
            f"({len(self.omitted)} fiszek pominiętych)."
        )


class InternalError(MergeError):
    kind = ErrorKind.INTERNAL
    is_client_error = False
