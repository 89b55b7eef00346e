"""logipath CLI — entry point for all commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from logipath import __version__
from logipath.config import DEFAULT_FS_SEP, DEFAULT_LOG_LEVEL, RULE_PATH
from logipath.rules import MappingRule, RuleError, load_rule, save_rule
from logipath.transformer import NotApplicable

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_NOT_APPLICABLE = 2


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"logipath {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="logipath",
    help="Map logical paths (namespaces, resource ids) to file-system paths.",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: N803
        None, "--version", "-V", callback=version_callback, is_eager=True,
        help="Show version and exit.",
    ),
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL, "--log-level", help="Logging level (DEBUG, INFO, ...).",
    ),
) -> None:
    """logipath — logical path to file-system path mapping."""
    from logipath.log import setup_logging

    setup_logging(log_level)


def _fail(message: str) -> NoReturn:
    rprint(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(EXIT_ERROR)


def _resolve_rule(
    rule_path: Path,
    base: str | None,
    sep: str | None,
    fs_base: str | None,
    fs_sep: str | None,
    ext: str | None,
) -> MappingRule:
    """Build a rule from explicit options, or load it from ``rule_path``."""
    explicit = (base, sep, fs_base)
    if any(v is not None for v in explicit):
        if any(v is None for v in explicit):
            _fail("--base, --sep and --fs-base must be given together")
        return MappingRule(
            logical_base=base, logical_sep=sep, fs_base=fs_base,
            fs_sep=fs_sep if fs_sep is not None else DEFAULT_FS_SEP, file_ext=ext,
        )

    rule = load_rule(rule_path)
    overrides: dict[str, Any] = {}
    if fs_sep is not None:
        overrides["fs_sep"] = fs_sep
    if ext is not None:
        overrides["file_ext"] = ext
    if overrides:
        rule = MappingRule.model_validate({**rule.model_dump(), **overrides})
    return rule


def _result_row(rule: MappingRule, source: str) -> dict[str, Any]:
    result = rule.apply(source)
    if isinstance(result, NotApplicable):
        logger.info("Not applicable: %s", result)
        return {"source": source, "applicable": False, "path": None}
    return {"source": source, "applicable": True, "path": result}


def format_results(rows: list[dict[str, Any]]) -> str:
    """Render transform results as a plain-text table.

    Columns: source, path (``-`` when the rule does not apply).
    """
    if not rows:
        return "No sources."

    paths = [r["path"] if r.get("applicable") else "-" for r in rows]
    src_w = max(len("Source"), *(len(r["source"]) for r in rows))
    path_w = max(len("Path"), *(len(p) for p in paths))

    lines = [
        f"{'Source':<{src_w}}  {'Path':<{path_w}}".rstrip(),
        f"{'-' * src_w}  {'-' * path_w}",
    ]
    for row, path in zip(rows, paths, strict=True):
        lines.append(f"{row['source']:<{src_w}}  {path}".rstrip())
    return "\n".join(lines)


@app.command("transform")
def transform_cmd(
    source: str = typer.Argument(help="Logical path to transform"),
    rule_path: Path = typer.Option(RULE_PATH, "--rule", help="Rule file (YAML)"),
    base: str | None = typer.Option(None, "--base", help="Logical base"),
    sep: str | None = typer.Option(None, "--sep", help="Logical separator"),
    fs_base: str | None = typer.Option(None, "--fs-base", help="File-system base"),
    fs_sep: str | None = typer.Option(None, "--fs-sep", help="File-system separator"),
    ext: str | None = typer.Option(None, "--ext", help="File extension to append"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """Transform one logical path. Exits 2 when the rule does not apply."""
    try:
        rule = _resolve_rule(rule_path, base, sep, fs_base, fs_sep, ext)
    except (RuleError, ValueError) as e:
        _fail(str(e))

    row = _result_row(rule, source)
    if as_json:
        typer.echo(json.dumps(row))
    elif row["applicable"]:
        typer.echo(row["path"])
    else:
        rprint(f"[yellow]Not applicable:[/yellow] {escape(source)}")

    if not row["applicable"]:
        raise typer.Exit(EXIT_NOT_APPLICABLE)


@app.command("batch")
def batch_cmd(
    sources: list[str] | None = typer.Argument(None, help="Logical paths"),
    rule_path: Path = typer.Option(RULE_PATH, "--rule", help="Rule file (YAML)"),
    from_file: Path | None = typer.Option(
        None, "--from-file", help="Read logical paths from a file, one per line",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
    plain: bool = typer.Option(False, "--plain", help="Plain-text table"),
) -> None:
    """Transform many logical paths with one rule."""
    items = list(sources or [])
    if from_file is not None:
        try:
            text = from_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _fail(f"Cannot read {from_file}: {e}")
        items.extend(line for line in text.splitlines() if line.strip())
    if not items:
        _fail("No logical paths given")

    try:
        rule = load_rule(rule_path)
    except RuleError as e:
        _fail(str(e))

    rows = [_result_row(rule, s) for s in items]
    if as_json:
        typer.echo(json.dumps(rows, indent=2))
        return
    if plain:
        typer.echo(format_results(rows))
        return

    table = Table(title=escape(f"{rule.logical_base} → {rule.fs_base}"))
    table.add_column("Source")
    table.add_column("Path")
    for row in rows:
        path = escape(row["path"]) if row["applicable"] else "[yellow]not applicable[/yellow]"
        table.add_row(escape(row["source"]), path)
    rprint(table)


@app.command("show-rule")
def show_rule_cmd(
    rule_path: Path = typer.Option(RULE_PATH, "--rule", help="Rule file (YAML)"),
) -> None:
    """Show the mapping rule in a rule file."""
    try:
        rule = load_rule(rule_path)
    except RuleError as e:
        _fail(str(e))

    rprint(f"[green]Rule:[/green] {escape(str(rule_path))}")
    rprint(f"  Logical base: {escape(rule.logical_base)}")
    rprint(f"  Logical sep:  {escape(rule.logical_sep)}")
    rprint(f"  FS base:      {escape(rule.fs_base)}")
    rprint(f"  FS sep:       {escape(rule.fs_sep)}")
    if rule.file_ext:
        rprint(f"  Extension:    {escape(rule.file_ext)}")


@app.command("init-rule")
def init_rule_cmd(
    base: str = typer.Option(..., "--base", help="Logical base"),
    sep: str = typer.Option(..., "--sep", help="Logical separator"),
    fs_base: str = typer.Option(..., "--fs-base", help="File-system base"),
    fs_sep: str = typer.Option(DEFAULT_FS_SEP, "--fs-sep", help="File-system separator"),
    ext: str | None = typer.Option(None, "--ext", help="File extension to append"),
    rule_path: Path = typer.Option(RULE_PATH, "--rule", help="Rule file (YAML)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing rule file"),
) -> None:
    """Write a rule file."""
    if rule_path.exists() and not force:
        _fail(f"{rule_path} already exists (use --force to overwrite)")

    try:
        rule = MappingRule(
            logical_base=base, logical_sep=sep, fs_base=fs_base,
            fs_sep=fs_sep, file_ext=ext,
        )
    except ValueError as e:
        _fail(str(e))

    try:
        save_rule(rule_path, rule)
    except RuleError as e:
        _fail(str(e))
    rprint(f"[green]Rule written:[/green] {escape(str(rule_path))}")
