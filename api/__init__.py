"""
api — warstwa HTTP (FastAPI) nad potokiem scalania.

Publiczne API:
  create_app(config) -> FastAPI
"""

from .app import create_app, error_response

__all__ = ["create_app", "error_response"]
