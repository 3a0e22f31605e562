"""Komenda: fm merge — składanie PDF z manifestu JSON."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table
from rich import box

from data_model.errors import MergeError
from data_model.fiches import Fiche, MergeRequest, MergeResult
from fm._log import setup_logging
from pdf.config import LayoutConfig
from pdf.pipeline import merge_document

console = Console()


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

def _read_bytes(base: Path, raw: str | None, what: str) -> bytes | None:
    if not raw:
        return None
    path = Path(raw)
    if not path.is_absolute():
        path = base / path
    if not path.is_file():
        console.print(f"[red]Plik nie istnieje ({what}):[/red] {path}")
        raise SystemExit(1)
    return path.read_bytes()


def load_manifest(manifest_path: Path) -> MergeRequest:
    """
    Wczytuje manifest; ścieżki są względne wobec katalogu manifestu.

    {
      "subject":   "Droit civil",
      "cover":     "okladka.png",
      "copyright": "copyright.pdf",
      "fiches": [{"title": "...", "theme": "...", "pdf": "fiche1.pdf"}]
    }
    """
    try:
        data: dict[str, Any] = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Niepoprawny JSON manifestu:[/red] {e}")
        raise SystemExit(1)

    base = manifest_path.parent
    fiches: list[Fiche] = []
    for i, raw in enumerate(data.get("fiches") or []):
        pdf = _read_bytes(base, raw.get("pdf"), f"fiches[{i}]")
        if pdf is None:
            console.print(f"[red]fiches[{i}]: brak pola 'pdf'.[/red]")
            raise SystemExit(1)
        theme = (raw.get("theme") or "").strip() or None
        fiches.append(Fiche(title=(raw.get("title") or raw.get("titre") or "").strip(), theme=theme, pdf=pdf))

    return MergeRequest(
        subject=(data.get("subject") or data.get("matiere") or "").strip(),
        fiches=fiches,
        cover=_read_bytes(base, data.get("cover"), "cover"),
        copyright=_read_bytes(base, data.get("copyright"), "copyright"),
    )


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_table(request: MergeRequest, result: MergeResult) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("#",      justify="right", no_wrap=True, style="dim")
    table.add_column("STRONY", justify="center", no_wrap=True, style="bold cyan")
    table.add_column("TEMAT",  no_wrap=True, style="yellow")
    table.add_column("SPIS",   justify="center", no_wrap=True)
    table.add_column("TYTUŁ",  no_wrap=False, max_width=60)

    omitted = set(result.omitted)
    bounds = result.start_pages[1:] + [result.total_pages + 1]
    for i, fiche in enumerate(request.fiches):
        start, end = result.start_pages[i], bounds[i] - 1
        pages = str(start) if start == end else f"{start}–{end}"
        table.add_row(
            str(i + 1),
            pages,
            fiche.theme or "-",
            "[red]pominięta[/red]" if i in omitted else "tak",
            fiche.title[:80],
        )

    console.print()
    console.print(table)
    console.print(
        f"  [dim]{result.total_pages} stron, {result.fiches_count} fiszek, "
        f"spis: {result.summary_pages} str.[/dim]\n"
    )


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    manifest_path = Path(args.manifest)
    if not manifest_path.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {manifest_path}")
        raise SystemExit(1)

    try:
        config = LayoutConfig.from_env()
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)
    setup_logging(config.log_level)

    request = load_manifest(manifest_path)
    out_path = Path(args.out) if args.out else manifest_path.with_suffix(".pdf")

    console.print(
        f"Składanie [bold]{len(request.fiches)}[/bold] fiszek "
        f"(przedmiot=[cyan]{request.subject or '-'}[/cyan]) …"
    )

    try:
        result = merge_document(request, config)
    except MergeError as e:
        console.print(f"[red]Błąd scalania ({e.kind.value}):[/red] {e}")
        raise SystemExit(1)

    out_path.write_bytes(result.pdf)
    console.print(f"[green]PDF:[/green] {out_path}  ({result.total_pages} stron)")
    if result.omitted:
        console.print(
            f"[yellow]Uwaga:[/yellow] {len(result.omitted)} fiszek nie zmieściło się w spisie treści."
        )

    if args.show:
        _show_table(request, result)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "merge",
        help="Składa PDF z manifestu (okładka, copyright, fiszki) ze spisem treści.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Składa jeden PDF z fragmentów wskazanych w manifeście JSON: okładka,
strona copyright, spis treści (generowany) i fiszki z nagłówkami/stopkami.

Przykłady:
  fm merge manifest.json
  fm merge manifest.json --out droit-civil.pdf --show
        """,
    )
    p.add_argument(
        "manifest",
        metavar="MANIFEST.json",
        help="Ścieżka do manifestu JSON.",
    )
    p.add_argument(
        "--out",
        metavar="PLIK.pdf",
        default=None,
        help="Plik wynikowy (domyślnie: manifest z rozszerzeniem .pdf).",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę fiszek (strony, temat, obecność w spisie).",
    )
    p.set_defaults(func=run)
