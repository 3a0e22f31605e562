"""
pdf/config.py — konfiguracja układu przez zmienne środowiskowe.

Opcjonalnie plik .env w katalogu głównym projektu (python-dotenv).

Zmienne (wszystkie opcjonalne):
  FM_PAGE_SIZE          rozmiar generowanych stron "SZERxWYS" (domyślnie A4: 595.28x841.89)
  FM_FONT_PATH          plik TTF (domyślnie fonts/Poppins-SemiBold.ttf)
  FM_TITLE_MAX_CHARS    maks. liczba znaków tytułu w spisie (domyślnie 62)
  FM_ENTRIES_PER_PAGE   pozycji na stronę spisu przy rezerwacji stałej (domyślnie 25)
  FM_SUMMARY_CAPACITY   fixed | dynamic
  FM_SUMMARY_OVERFLOW   truncate | error
  FM_HEADER_MODE        fiche | subject
  FM_BRAND              prefiks nagłówka (domyślnie "Jurible")
  FM_SUMMARY_TITLE      tytuł spisu (domyślnie "Sommaire")
  FM_FOOTER_TOTAL       1/true → stopka "N / TOTAL"
  FM_FOOTER_NOTICE      wyśrodkowana linia copyright w stopce
  FM_LOG_LEVEL          poziom logowania (domyślnie INFO)
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass
from enum import StrEnum

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent

A4_PORTRAIT = (595.28, 841.89)
DEFAULT_FONT_PATH = PROJECT_ROOT / "fonts" / "Poppins-SemiBold.ttf"

_ENV_PREFIX = "FM_"
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


class CapacityMode(StrEnum):
    """Sposób szacowania liczby stron spisu przed wstawieniem fiszek."""
    FIXED   = "fixed"     # ceil(n / entries_per_summary_page)
    DYNAMIC = "dynamic"   # próbny układ bez limitu stron


class OverflowPolicy(StrEnum):
    """Co zrobić, gdy spis nie mieści się w zarezerwowanych stronach."""
    TRUNCATE = "truncate"  # pomiń resztę fiszek (ostrzeżenie w logu)
    ERROR    = "error"     # LayoutOverflowError


class HeaderMode(StrEnum):
    FICHE   = "fiche"    # przedmiot + tytuł fiszki wyśrodkowany
    SUBJECT = "subject"  # tylko przedmiot


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    page_width: float = A4_PORTRAIT[0]
    page_height: float = A4_PORTRAIT[1]
    font_path: pathlib.Path | None = DEFAULT_FONT_PATH
    title_max_chars: int = 62
    entries_per_summary_page: int = 25
    summary_capacity: CapacityMode = CapacityMode.FIXED
    overflow: OverflowPolicy = OverflowPolicy.TRUNCATE
    header_mode: HeaderMode = HeaderMode.FICHE
    brand: str = "Jurible"
    summary_title: str = "Sommaire"
    footer_total: bool = False
    footer_notice: str | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.page_width <= 0 or self.page_height <= 0:
            raise ValueError("Rozmiar strony musi być dodatni.")
        if self.title_max_chars < 1:
            raise ValueError("title_max_chars musi być >= 1.")
        if self.entries_per_summary_page < 1:
            raise ValueError("entries_per_summary_page musi być >= 1.")

    @property
    def page_size(self) -> tuple[float, float]:
        return (self.page_width, self.page_height)

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None) -> LayoutConfig:
        """
        Buduje konfigurację ze zmiennych FM_*.

        Args:
            env: słownik zmiennych; None → os.environ (po wczytaniu .env).

        Raises:
            ValueError: niepoprawna wartość zmiennej (komunikat zawiera jej nazwę).
        """
        if env is None:
            load_dotenv(PROJECT_ROOT / ".env", override=False)
            env = dict(os.environ)

        def get(name: str) -> str | None:
            value = env.get(_ENV_PREFIX + name)
            return value.strip() if value is not None else None

        kwargs: dict[str, object] = {}

        if (raw := get("PAGE_SIZE")):
            kwargs["page_width"], kwargs["page_height"] = _parse_page_size(raw)
        if (raw := get("FONT_PATH")) is not None:
            kwargs["font_path"] = pathlib.Path(raw) if raw else None
        if (raw := get("TITLE_MAX_CHARS")):
            kwargs["title_max_chars"] = _parse_int("TITLE_MAX_CHARS", raw)
        if (raw := get("ENTRIES_PER_PAGE")):
            kwargs["entries_per_summary_page"] = _parse_int("ENTRIES_PER_PAGE", raw)
        if (raw := get("SUMMARY_CAPACITY")):
            kwargs["summary_capacity"] = _parse_enum("SUMMARY_CAPACITY", CapacityMode, raw)
        if (raw := get("SUMMARY_OVERFLOW")):
            kwargs["overflow"] = _parse_enum("SUMMARY_OVERFLOW", OverflowPolicy, raw)
        if (raw := get("HEADER_MODE")):
            kwargs["header_mode"] = _parse_enum("HEADER_MODE", HeaderMode, raw)
        if (raw := get("BRAND")) is not None:
            kwargs["brand"] = raw
        if (raw := get("SUMMARY_TITLE")):
            kwargs["summary_title"] = raw
        if (raw := get("FOOTER_TOTAL")) is not None:
            kwargs["footer_total"] = _parse_bool("FOOTER_TOTAL", raw)
        if (raw := get("FOOTER_NOTICE")):
            kwargs["footer_notice"] = raw
        if (raw := get("LOG_LEVEL")):
            kwargs["log_level"] = raw.upper()

        return cls(**kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Parsowanie wartości
# ---------------------------------------------------------------------------

def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{_ENV_PREFIX}{name}: oczekiwano liczby całkowitej, otrzymano {raw!r}") from exc


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{_ENV_PREFIX}{name}: oczekiwano wartości logicznej, otrzymano {raw!r}")


def _parse_enum[E: StrEnum](name: str, enum_cls: type[E], raw: str) -> E:
    try:
        return enum_cls(raw.lower())
    except ValueError as exc:
        allowed = " | ".join(m.value for m in enum_cls)
        raise ValueError(f"{_ENV_PREFIX}{name}: dozwolone {allowed}, otrzymano {raw!r}") from exc


def _parse_page_size(raw: str) -> tuple[float, float]:
    parts = raw.lower().replace("×", "x").split("x")
    if len(parts) != 2:
        raise ValueError(f"{_ENV_PREFIX}PAGE_SIZE: oczekiwano 'SZERxWYS', otrzymano {raw!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise ValueError(f"{_ENV_PREFIX}PAGE_SIZE: niepoprawne wymiary {raw!r}") from exc
