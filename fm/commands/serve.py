"""Komenda: fm serve — uruchamia API HTTP pod uvicornem."""

from __future__ import annotations

import argparse

from rich.console import Console

from fm._log import setup_logging
from pdf.config import LayoutConfig

console = Console()


def run(args: argparse.Namespace) -> None:
    import uvicorn

    from api.app import create_app

    try:
        config = LayoutConfig.from_env()
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)
    setup_logging(config.log_level)

    console.print(f"API: [bold]http://{args.host}:{args.port}/api/merge-pdf[/bold]")
    uvicorn.run(create_app(config), host=args.host, port=args.port, log_config=None)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "serve",
        help="Uruchamia API HTTP (POST /api/merge-pdf).",
    )
    p.add_argument("--host", default="127.0.0.1", help="Adres nasłuchu (domyślnie 127.0.0.1).")
    p.add_argument("--port", type=int, default=8000, help="Port (domyślnie 8000).")
    p.set_defaults(func=run)
