"""
fm — narzędzie CLI dla FicheMerge.

Użycie:
  fm <komenda> [opcje]

Komendy:
  merge   Składa PDF z manifestu (okładka, copyright, fiszki) ze spisem treści.
  serve   Uruchamia API HTTP (POST /api/merge-pdf).
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, więc wymuszamy UTF-8, żeby polskie
# i francuskie znaki w pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from fm.commands import merge as cmd_merge
from fm.commands import serve as cmd_serve


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fm",
        description="FicheMerge — narzędzie CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="fm 0.1.0"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_merge.add_parser(subparsers)
    cmd_serve.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
