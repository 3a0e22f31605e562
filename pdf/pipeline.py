"""
pdf/pipeline.py — pełne scalenie: składanie → spis → nagłówki/stopki → zapis.

Kolejność jest ścisła: numery stron w spisie i w stopkach zależą od
ostatecznej liczby stron i ostatecznych stron startowych, znanych dopiero
po wstawieniu wszystkich fragmentów.

Wszystko albo nic: wyjątek przerywa przebieg przed serializacją, dokument
jest zamykany i nic częściowego nie wraca do wywołującego.

Publiczne API:
  merge_document(request, config) -> MergeResult
"""

from __future__ import annotations

import logging

from data_model.errors import InternalError, InvalidRequestError, MergeError
from data_model.fiches import MergeRequest, MergeResult
from pdf.assembler import assemble
from pdf.config import LayoutConfig
from pdf.fonts import load_font
from pdf.stamper import stamp
from pdf.summary import count_summary_pages, draw_summary, layout_summary

log = logging.getLogger(__name__)


def merge_document(request: MergeRequest, config: LayoutConfig | None = None) -> MergeResult:
    """
    Scala fragmenty żądania w jeden PDF.

    Raises:
        InvalidRequestError: pusta lista fiszek (nic nie jest liczone).
        FragmentDecodeError: fragment nie daje się zdekodować.
        LayoutOverflowError: spis nie mieści się (tylko przy overflow=error).
        InternalError:       każdy inny błąd (szczegóły w logu).
    """
    if not request.fiches:
        raise InvalidRequestError("Lista 'fiches' jest wymagana i nie może być pusta.")

    try:
        # Błędna wartość FM_* to błąd wdrożenia, nie żądania: trafia do InternalError
        return _merge(request, config or LayoutConfig.from_env())
    except MergeError:
        raise
    except Exception as exc:
        log.exception("Nieoczekiwany błąd scalania (%d fiszek)", len(request.fiches))
        raise InternalError("Wewnętrzny błąd generowania PDF.") from exc


def _merge(request: MergeRequest, config: LayoutConfig) -> MergeResult:
    font = load_font(config.font_path)

    summary_pages = count_summary_pages(request.fiches, measure=font.measure, config=config)
    plan = assemble(
        request.cover,
        request.copyright,
        request.fiches,
        config,
        summary_pages=summary_pages,
    )
    doc = plan.document
    try:
        layout = layout_summary(
            request.fiches,
            plan.fiche_start_pages,
            page_count=plan.summary_pages,
            measure=font.measure,
            config=config,
        )
        draw_summary(doc, plan.summary_range[0], layout, font)

        stamp(
            doc,
            plan.fiche_start_pages,
            [f.title for f in request.fiches],
            request.subject,
            font=font,
            config=config,
            first_content_index=plan.first_content_index,
        )

        total_pages = doc.page_count
        pdf_bytes = doc.tobytes(garbage=3, deflate=True)
    finally:
        doc.close()

    log.info(
        "PDF gotowy: %d stron, %d fiszek, spis=%d str., font=%s",
        total_pages, len(request.fiches), plan.summary_pages, font.name,
    )
    return MergeResult(
        pdf=pdf_bytes,
        total_pages=total_pages,
        fiches_count=len(request.fiches),
        summary_pages=plan.summary_pages,
        start_pages=list(plan.fiche_start_pages),
        omitted=list(layout.omitted),
    )
