"""
pdf — składanie dokumentu z fiszek, spis treści i nagłówki/stopki (PyMuPDF).

Publiczne API:
  merge_document(request, config)                                -> MergeResult
  assemble(cover, copyright, fiches, config, summary_pages)      -> AssemblyPlan
  layout_summary(fiches, start_pages, page_count, measure, config) -> SummaryLayout
  count_summary_pages(fiches, measure, config)                   -> int
  draw_summary(document, summary_start, layout, font)            -> None
  stamp(document, start_pages, titles, subject, ...)             -> int
  owner_of_page(page_number, start_pages, total_pages)           -> int | None
  truncate_title(title, max_chars)                               -> str
  load_font(path)                                                -> EmbeddedFont
  LayoutConfig
"""

from .config import CapacityMode, HeaderMode, LayoutConfig, OverflowPolicy
from .fonts import EmbeddedFont, load_font
from .assembler import AssemblyPlan, assemble
from .summary import (
    count_summary_pages,
    dot_leader,
    draw_summary,
    layout_summary,
    truncate_title,
)
from .stamper import owner_of_page, stamp
from .pipeline import merge_document

__all__ = [
    "CapacityMode",
    "HeaderMode",
    "LayoutConfig",
    "OverflowPolicy",
    "EmbeddedFont",
    "load_font",
    "AssemblyPlan",
    "assemble",
    "count_summary_pages",
    "dot_leader",
    "draw_summary",
    "layout_summary",
    "truncate_title",
    "owner_of_page",
    "stamp",
    "merge_document",
]
