"""
data_model — struktury danych FicheMerge.

Użycie:
  from data_model import Fiche, MergeRequest, parse_request, ...

Moduły:
  fiches   — Fiche, MergeRequest, MergeResult
  summary  — EntryKind, SummaryEntry, SummaryLayout
  errors   — ErrorKind, MergeError i podklasy
  request  — parse_request, decode_base64
"""

from .fiches import (
    Fiche,
    MergeRequest,
    MergeResult,
)
from .summary import (
    EntryKind,
    SummaryEntry,
    SummaryLayout,
)
from .errors import (
    ErrorKind,
    MergeError,
    InvalidRequestError,
    FragmentDecodeError,
    LayoutOverflowError,
    InternalError,
)
from .request import (
    parse_request,
    decode_base64,
)

__all__ = [
    # fiches
    "Fiche",
    "MergeRequest",
    "MergeResult",
    # summary
    "EntryKind",
    "SummaryEntry",
    "SummaryLayout",
    # errors
    "ErrorKind",
    "MergeError",
    "InvalidRequestError",
    "FragmentDecodeError",
    "LayoutOverflowError",
    "InternalError",
    # request
    "parse_request",
    "decode_base64",
]
