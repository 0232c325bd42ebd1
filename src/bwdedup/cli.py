# src/bwdedup/cli.py

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pyfiglet
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bwdedup.common.config import apply_overrides, load_config
from bwdedup.common.errors import DedupError, OutputExistsError
from bwdedup.common.exporter import ExportWriter, default_output_path, load_export
from bwdedup.common.models import DedupKey, DedupResult, Keep
from bwdedup.dedup.engine import Deduplicator

# Status, banner and errors go to stderr; stdout only carries the summary lines
console = Console(stderr=True)
out = Console()

logger = logging.getLogger("bwdedup")


def _comma_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "1", "on"):
        return True
    if lowered in ("false", "no", "0", "off"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _setup_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bwdedup",
        description="Deduplicate Bitwarden JSON exports.",
    )
    parser.add_argument("-i", "--input", type=Path, required=True, metavar="FILE",
                        help="Bitwarden JSON export file")
    parser.add_argument("-o", "--output", type=Path, metavar="FILE",
                        help="Output file (defaults to <input>.dedup.json)")
    parser.add_argument("--force", action="store_true",
                        help="Overwrite the output file if it exists")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show what would be removed without writing output")
    parser.add_argument("--pretty", action="store_true",
                        help="Write pretty-printed JSON")
    parser.add_argument("--keep", choices=[k.value for k in Keep],
                        help="Keep strategy when duplicates are found (default: first)")
    parser.add_argument("--config", type=Path, metavar="FILE",
                        help="Config file, TOML or YAML (default: ./config.toml if present)")
    parser.add_argument("--ignore-key", type=_comma_list, action="extend", metavar="KEYS",
                        help="Ignore any keys with these names, anywhere in the item")
    parser.add_argument("--ignore-path", type=_comma_list, action="extend", metavar="PATHS",
                        help="Ignore specific dot-separated paths, relative to each item")
    parser.add_argument("--trim-strings", action="store_true",
                        help="Trim whitespace from all string values before comparing")
    parser.add_argument("--lowercase-strings", action="store_true",
                        help="Lowercase all string values (ASCII only) before comparing")
    parser.add_argument("--sort-uris", type=_parse_bool, metavar="BOOL",
                        help="Sort login.uris entries by URI before comparing (default: true)")
    parser.add_argument("--policy-key", type=_comma_list, action="extend", metavar="KEYS",
                        help=f"Deduplication keys ({', '.join(k.value for k in DedupKey)}); "
                             "an empty value compares whole items")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every duplicate decision")
    return parser


def _setup_logging(verbose: bool):
    handler = RichHandler(console=console, show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _display_banner():
    console.print(
        Panel(
            pyfiglet.figlet_format("bwdedup", font="slant"),
            subtitle="[cyan] Bitwarden export deduplicator [/cyan]",
            border_style="cyan",
            expand=False,
        )
    )


def _display_duplicates(result: DedupResult):
    if not result.duplicates:
        console.print("[green]No duplicates found.[/green]")
        return

    table = Table(
        title=f"[bold yellow]{result.removed}[/bold yellow] duplicate items",
        border_style="cyan",
        header_style="bold magenta",
    )
    table.add_column("Input #", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Output slot", justify="right")
    table.add_column("Action", style="green")

    for dup in result.duplicates:
        table.add_row(
            str(dup.index),
            escape(dup.name) if dup.name else "-",
            str(dup.kept_index),
            "replaces kept item" if dup.replaced else "removed",
        )
    console.print(table)


def run(args: argparse.Namespace):
    output = args.output or default_output_path(args.input)
    if output.exists() and not args.force and not args.dry_run:
        raise OutputExistsError(f"Output file already exists: {output} (use --force to overwrite)")

    config = apply_overrides(
        load_config(args.config),
        keep=args.keep,
        policy_keys=args.policy_key,
        ignore_keys=args.ignore_key,
        ignore_paths=args.ignore_path,
        trim_strings=args.trim_strings,
        lowercase_strings=args.lowercase_strings,
        sort_uris=args.sort_uris,
        pretty=args.pretty,
    )

    root = load_export(args.input)
    with console.status("[bold green]Deduplicating items..."):
        result = Deduplicator(config).run(root["items"])

    out.print(f"Items: {result.total} -> {result.kept} (removed {result.removed})", highlight=False, markup=False, soft_wrap=True)

    if args.dry_run:
        _display_duplicates(result)
        return

    ExportWriter(pretty=config.output.pretty).write(root, result.items, output)
    out.print(f"Wrote {output}", highlight=False, markup=False, soft_wrap=True)


def main(argv: Optional[List[str]] = None):
    args = _setup_arg_parser().parse_args(argv)
    _setup_logging(args.verbose)
    _display_banner()

    try:
        run(args)
    except DedupError as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
