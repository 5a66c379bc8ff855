#!/usr/bin/env python3
"""Command-line interface for mac-installer-scan."""
import json
import sys
import argparse

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.rule import Rule

from .utils.disk import human_size, file_size
from .services.scanner_service import Scanner
from .core import config as config_module
from .core.constants import MAX_INSTALLER_ENTRIES
from .core.models import Skip

console = Console()
err_console = Console(stderr=True)


def _evidence(finding) -> str:
    if not finding.candidate.is_archive:
        return "installer extension"
    result = finding.result
    if isinstance(result, Skip):
        return f"skipped: {result.reason}"
    v = result.verdict
    if v.entry_count > MAX_INSTALLER_ENTRIES:
        return f"more than {MAX_INSTALLER_ENTRIES} entries"
    if v.app_entry:
        return f"{v.entry_count} entries, app bundle {v.app_entry}"
    return f"{v.entry_count} entries, no app bundle"


def _report_skip(finding) -> None:
    if isinstance(finding.result, Skip):
        err_console.print(f"[dim]skip {escape(finding.candidate.path)}: {escape(finding.result.reason)}[/]", soft_wrap=True)


def print_paths(scanner: Scanner, verbose: bool = False) -> None:
    """One accepted path per line, nothing else on stdout."""
    for finding in scanner.findings():
        if verbose:
            _report_skip(finding)
        if finding.accepted:
            console.out(finding.candidate.path, highlight=False)


def print_details(scanner: Scanner, verbose: bool = False) -> None:
    cfg = scanner.config
    console.print(Rule("[bold cyan]Installer artifacts[/]", style="cyan"))
    console.print()
    console.print(
        f"[dim]walker: {scanner.walker.name}, lister: {scanner.lister.name}, "
        f"max depth: {cfg.max_depth}[/]\n"
    )
    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 2))
    table.add_column("Path", style="", overflow="fold")
    table.add_column("Kind", style="dim")
    table.add_column("Size", justify="right", style="yellow")
    table.add_column("Evidence", style="dim")
    total = 0
    count = 0
    for finding in scanner.findings():
        if verbose:
            _report_skip(finding)
        if not finding.accepted:
            continue
        size = file_size(finding.candidate.path)
        total += size
        count += 1
        table.add_row(
            escape(finding.candidate.path),
            finding.candidate.kind.value,
            human_size(size),
            escape(_evidence(finding)),
        )
    if count:
        console.print(table)
        console.print()
        console.print(f"  [bold green]{count} installer artifact(s), {human_size(total)}[/]")
    else:
        console.print("  [green]No installer artifacts found.[/]")
    console.print()


def _run_config(argv: list) -> None:
    """Run the configuration tasks."""
    p = argparse.ArgumentParser(prog="mac-installer-scan config", description="Manage configuration.")
    p.add_argument("--init", action="store_true", help="Create default config file")
    p.add_argument("--show", action="store_true", help="Show current config")
    args = p.parse_args(argv)
    if args.init:
        path = config_module.init_config()
        err_console.print(f"  [green]✓[/] Created config at [cyan]{escape(path)}[/]")
        return
    if args.show:
        if not config_module.config_exists():
            err_console.print("[yellow]No config found. Run: mac-installer-scan config --init[/]")
        cfg = config_module.build()
        console.out(json.dumps({
            "max_depth": cfg.max_depth,
            "roots": list(cfg.roots),
            "exclude_roots": sorted(cfg.exclude_roots),
        }, indent=2), highlight=False)
        return
    p.print_help()


def _depth_arg(value: str) -> int:
    depth = config_module.parse_depth(value)
    if depth is None:
        raise argparse.ArgumentTypeError(
            f"expected an integer between 1 and {config_module.MAX_DEPTH_LIMIT}, got {value!r}"
        )
    return depth


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mac-installer-scan",
        description="List installer artifacts (.dmg, .pkg, .mpkg, .iso, app .zip) in download folders.",
    )
    parser.add_argument("--max-depth", type=_depth_arg, default=None,
                        help=f"Directory depth to search (default 2, env {config_module.MAX_DEPTH_ENV}).")
    parser.add_argument("--root", action="append", default=None, metavar="PATH",
                        help="Search PATH instead of the standard folders (repeatable).")
    parser.add_argument("--details", action="store_true", help="Show a table with size and evidence.")
    parser.add_argument("--verbose", action="store_true", help="Report skipped archives on stderr.")
    return parser


def main(argv=None):
    """Main function. Returns the process exit status."""
    argv = argv if argv is not None else sys.argv[1:]
    if argv and argv[0] == "config":
        _run_config(argv[1:])
        return 0
    if argv and argv[0] == "scan":
        argv = argv[1:]

    args = build_parser().parse_args(argv)
    cfg = config_module.build(max_depth=args.max_depth, roots=args.root)
    scanner = Scanner(cfg)
    if args.details:
        print_details(scanner, verbose=args.verbose)
    else:
        print_paths(scanner, verbose=args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
