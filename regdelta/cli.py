"""CLI entry point for regdelta."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from regdelta_core.config import DEFAULT_CONFIG_TEMPLATE, RegDeltaConfig, load_config
from regdelta_core.diff import (
    DiffEngine,
    DiffEntry,
    DiffKind,
    KeyDiff,
    diff_to_json,
    filter_entries,
    summarize,
)
from regdelta_core.errors import RegDeltaError
from regdelta_core.paths import join_path, leaf_name
from regdelta_core.regfile import RegFileParser, describe_value, display_value_name
from regdelta_core.regfile.models import ValueRecord
from regdelta_core.snapshot import Snapshot, SnapshotBuilder, load_snapshot, save_snapshot

app = typer.Typer(
    name="regdelta",
    help="Compare Windows registry exports (.reg) and saved registry snapshots.",
)

config_app = typer.Typer(help="Manage regdelta configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: RegDeltaConfig | None = None

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

EXIT_DIFFERENCES = 2


class _JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "time": self.formatTime(record),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
        )


def _configure_logging(cfg: RegDeltaConfig) -> None:
    level = _LOG_LEVELS[cfg.log_level]
    if cfg.log_format == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonLogFormatter())
        logging.basicConfig(level=level, handlers=[handler], force=True)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,
        )


def _get_config() -> RegDeltaConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to regdelta.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _configure_logging(_config)


def _make_parser(cfg: RegDeltaConfig) -> RegFileParser:
    return RegFileParser(
        max_bytes=cfg.parser.max_bytes, encoding_errors=cfg.parser.encoding_errors
    )


def _is_snapshot_file(source: str) -> bool:
    return Path(source).suffix.lower() == ".json"


def _load_side(
    source: str, base: str | None, recursive: bool, cfg: RegDeltaConfig
) -> Snapshot:
    """Build one comparison side from a .reg file or a saved snapshot."""
    if _is_snapshot_file(source):
        if base:
            logger.info("Ignoring base path for saved snapshot %s", source)
        return load_snapshot(Path(source))

    document = _make_parser(cfg).parse_file(source)
    if not base:
        if not document.key_order:
            raise ValueError(f"No registry keys were found in {source}")
        base = document.key_order[0]
        logger.info("No base path given for %s; using %s", source, base)
    return SnapshotBuilder.from_document(
        document, base, recursive=recursive, source=Path(source).name
    )


def _size_text(left: ValueRecord | None, right: ValueRecord | None) -> str:
    if left and right:
        return f"First: {len(left.data)} bytes | Second: {len(right.data)} bytes"
    if left:
        return f"First: {len(left.data)} bytes"
    if right:
        return f"Second: {len(right.data)} bytes"
    return ""


_STATUS = {
    DiffKind.MISSING_LEFT: "[yellow]Missing in first[/yellow]",
    DiffKind.MISSING_RIGHT: "[yellow]Missing in second[/yellow]",
    DiffKind.TYPE_MISMATCH: "[red]Type mismatch[/red]",
    DiffKind.DATA_MISMATCH: "[red]Data mismatch[/red]",
}


def _display_diff(
    entries: list[DiffEntry], left: Snapshot, right: Snapshot, max_bytes: int
) -> None:
    """Display comparison results as a Rich table."""
    rprint(
        Panel(
            f"[dim]First:[/dim]  {escape(left.label)} ({len(left)} keys)\n"
            f"[dim]Second:[/dim] {escape(right.label)} ({len(right)} keys)",
            title="Registry Comparison",
            border_style="blue",
        )
    )
    if not entries:
        rprint("[green]No differences found.[/green]")
        return

    table = Table(title=f"Differences ({len(entries)})")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Status")
    table.add_column("First")
    table.add_column("Second")
    table.add_column("Size", style="dim")

    for entry in entries:
        if isinstance(entry, KeyDiff):
            path = join_path(left.base_path if entry.present_left else right.base_path, entry.relative_path)
            table.add_row(
                escape(path),
                "(Key)",
                "[magenta]Only in first[/magenta]" if entry.present_left else "[magenta]Only in second[/magenta]",
                "Present" if entry.present_left else "(Missing)",
                "Present" if entry.present_right else "(Missing)",
                "",
            )
            continue
        path = join_path(left.base_path, entry.relative_path)
        table.add_row(
            escape(path),
            escape(display_value_name(entry.value_name)),
            _STATUS[entry.kind],
            escape(describe_value(entry.left, max_bytes)),
            escape(describe_value(entry.right, max_bytes)),
            _size_text(entry.left, entry.right),
        )
    rprint(table)

    s = summarize(entries)
    rprint(
        f"[bold]{s.total}[/bold] difference(s): "
        f"{s.keys_only_left + s.keys_only_right} key(s) on one side, "
        f"{s.missing_left + s.missing_right} missing value(s), "
        f"{s.type_mismatches} type and {s.data_mismatches} data mismatch(es)"
    )


@app.command()
def compare(
    left: str = typer.Argument(..., help="First side: .reg file or saved snapshot .json"),
    right: str = typer.Argument(..., help="Second side: .reg file or saved snapshot .json"),
    base: str | None = typer.Option(None, "--base", "-b", help="Key path used for both sides"),
    left_base: str | None = typer.Option(None, "--left-base", help="Key path for the first side"),
    right_base: str | None = typer.Option(None, "--right-base", help="Key path for the second side"),
    recursive: bool | None = typer.Option(
        None, "--recursive/--no-recursive", help="Include subkeys below the base path"
    ),
    format: Annotated[
        str | None, typer.Option("--format", "-f", help="Output format: table or json")
    ] = None,
    exit_code: Annotated[
        bool, typer.Option("--exit-code", help="Exit with status 2 when differences exist")
    ] = False,
) -> None:
    """Compare two registry subtrees."""
    cfg = _get_config()
    do_recursive = recursive if recursive is not None else cfg.compare.recursive
    out_format = format or cfg.output.format
    if out_format not in ("table", "json"):
        rprint(f"[red]Error:[/red] Unknown format {escape(out_format)!r}")
        raise typer.Exit(1)

    try:
        left_snap = _load_side(left, left_base or base, do_recursive, cfg)
        right_snap = _load_side(right, right_base or base, do_recursive, cfg)
    except (RegDeltaError, ValueError) as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    entries = DiffEngine.compare(left_snap, right_snap)
    entries = filter_entries(
        entries, cfg.compare.ignore_value_names, cfg.compare.ignore_key_paths
    )

    if out_format == "json":
        typer.echo(diff_to_json(entries, left_snap, right_snap))
    else:
        _display_diff(entries, left_snap, right_snap, cfg.output.max_data_bytes)

    if exit_code and entries:
        raise typer.Exit(EXIT_DIFFERENCES)


@app.command()
def keys(
    file: str = typer.Argument(..., help="Path to a .reg file"),
) -> None:
    """List the keys of a .reg file, sorted, with deletion markers."""
    cfg = _get_config()
    try:
        report = _make_parser(cfg).parse_file_with_report(file)
    except RegDeltaError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    document = report.document
    tree = Tree(f"[bold]Keys[/bold] ({len(document)})")
    for path in document.sorted_key_paths():
        record = document.get(path)
        count = len(record.values) if record else 0
        tree.add(f"[green]{escape(path)}[/green] [dim]({count} values)[/dim]")
    rprint(tree)

    if document.deletions:
        del_tree = Tree(f"[bold]Deletions[/bold] ({len(document.deletions)})")
        for d in document.deletions:
            if d.kind == "key":
                del_tree.add(f"[red]-[/red] {escape(d.key_path)}")
            else:
                name = display_value_name(d.value_name or "")
                del_tree.add(f"[red]-[/red] {escape(d.key_path)} : {escape(name)}")
        rprint(del_tree)

    if report.skipped:
        rprint(f"[yellow]{report.skipped} line(s) skipped[/yellow] (run with log_level: debug for details)")


@app.command()
def snapshot(
    file: str = typer.Argument(..., help="Path to a .reg file"),
    base: str = typer.Option(..., "--base", "-b", help="Key path to capture"),
    output: str | None = typer.Option(None, "--output", "-o", help="Snapshot JSON path"),
    recursive: bool | None = typer.Option(
        None, "--recursive/--no-recursive", help="Include subkeys below the base path"
    ),
) -> None:
    """Capture a subtree of a .reg file as a snapshot JSON file."""
    cfg = _get_config()
    do_recursive = recursive if recursive is not None else cfg.compare.recursive
    try:
        snap = _load_side(file, base, do_recursive, cfg)
        dest = Path(output) if output else Path(f"{leaf_name(snap.base_path) or 'snapshot'}.snapshot.json")
        save_snapshot(snap, dest)
    except (RegDeltaError, ValueError) as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    rprint(
        Panel(
            f"[dim]File:[/dim]   {escape(str(dest))}\n"
            f"[dim]Base:[/dim]   {escape(snap.base_path)}\n"
            f"[dim]Keys:[/dim]   {len(snap)}\n"
            f"[dim]Values:[/dim] {snap.value_count}",
            title="Snapshot Saved",
            border_style="green",
        )
    )


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default regdelta.yaml in current directory."""
    target = Path("regdelta.yaml")
    if target.exists() and not force:
        rprint("[yellow]regdelta.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
