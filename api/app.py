"""
api/app.py — cienka warstwa HTTP nad pdf.merge_document().

Endpointy:
  POST /api/merge-pdf   JSON (patrz data_model/request.py) → {pdf, totalPages, fichesCount, ...}
  GET  /api/health      {"status": "ok"}

Mapowanie błędów (każda odpowiedź błędu ma postać {"error": ..., ...}):
  InvalidRequestError  → 400
  niepoprawny JSON     → 400 (code E_INVALID_REQUEST)
  FragmentDecodeError  → 422 (+ pole "fragment")
  LayoutOverflowError  → 422 (+ pole "omitted")
  InternalError        → 500 (komunikat nieprzezroczysty)
  inne błędy HTTP      → status bez zmian (np. 405 dla GET)

PyMuPDF nie obsługuje pracy wielowątkowej, a endpoint działa w puli wątków
FastAPI, więc scalanie jest serializowane przez _MERGE_LOCK.

Uruchomienie:
  fm serve --port 8000
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from data_model.errors import ErrorKind, FragmentDecodeError, LayoutOverflowError, MergeError
from data_model.request import parse_request
from pdf.config import LayoutConfig
from pdf.pipeline import merge_document

log = logging.getLogger(__name__)

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.FRAGMENT_DECODE: 422,
    ErrorKind.LAYOUT_OVERFLOW: 422,
    ErrorKind.INTERNAL:        500,
}

# Jeden dokument fitz naraz w całym procesie
_MERGE_LOCK = threading.Lock()


def error_response(exc: MergeError) -> JSONResponse:
    body: dict[str, Any] = {"error": str(exc), "code": exc.kind.value}
    if isinstance(exc, FragmentDecodeError):
        body["fragment"] = exc.label
    elif isinstance(exc, LayoutOverflowError):
        body["omitted"] = exc.omitted
    return JSONResponse(body, status_code=_STATUS_BY_KIND[exc.kind])


def create_app(config: LayoutConfig | None = None) -> FastAPI:
    """Buduje aplikację; config=None → LayoutConfig.from_env() przy starcie."""
    layout_config = config or LayoutConfig.from_env()

    app = FastAPI(title="FicheMerge")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        log.info("Odrzucone żądanie (niepoprawne ciało): %s", exc.errors())
        return JSONResponse(
            {"error": "Ciało żądania musi być poprawnym obiektem JSON.",
             "code": ErrorKind.INVALID_REQUEST.value},
            status_code=400,
        )

    @app.exception_handler(StarletteHTTPException)
    async def on_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.get("/api/health")
    def api_health() -> dict[str, str]:
        return {"status": "ok"}

    # Funkcja synchroniczna: FastAPI uruchamia ją w puli wątków
    @app.post("/api/merge-pdf")
    def api_merge_pdf(payload: Any = Body(...)) -> JSONResponse:
        try:
            request = parse_request(payload)
            with _MERGE_LOCK:
                result = merge_document(request, layout_config)
        except MergeError as exc:
            if exc.is_client_error:
                log.info("Odrzucone żądanie: %s", exc)
            return error_response(exc)
        return JSONResponse(result.to_payload())

    return app
