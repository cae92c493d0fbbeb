"""Main CLI entry point and application setup."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import click
import msgspec
from click.exceptions import Exit
from rich.box import ROUNDED
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from citekey import __version__
from citekey.citations import (
    CitationKeyGenerator,
    KeyPatternPreferences,
    KeyPatterns,
    KeySuffix,
)
from citekey.cli.config import load_config
from citekey.core.models import Entry
from citekey.storage import MemoryEntryStore


@dataclass
class Context:
    """CLI context that holds shared resources."""

    console: Console
    config: dict[str, Any] = field(default_factory=dict)
    debug: bool = False

    @property
    def preferences(self) -> KeyPatternPreferences:
        """Key preferences from the loaded configuration."""
        return KeyPatternPreferences.from_config(self.config)


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.ERROR
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_console(no_color: bool = False, width: int | None = None) -> Console:
    """Create Rich console with appropriate settings."""
    return Console(
        no_color=no_color,
        width=width or 120,
        highlight=not no_color,
        color_system=None if no_color else "auto",
    )


class CitekeyGroup(click.Group):
    """Custom group that reports errors without tracebacks."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except KeyboardInterrupt:
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print("[yellow]Interrupted[/yellow]")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            raise
        except Exception as e:
            debug = getattr(ctx.obj, "debug", False) if ctx.obj else False
            if debug:
                raise
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print(f"[red]Error:[/red] {escape(str(e))}")
            else:
                click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


@click.group(cls=CitekeyGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.version_option(
    version=__version__, prog_name="citekey", message="citekey version %(version)s"
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: Path | None,
) -> None:
    """Citation key generator.

    Generates unique citation keys for bibliography entries from
    bracketed patterns such as [auth:lower][year].
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)

    try:
        config_data = load_config(config)
    except ValueError as e:
        if debug:
            raise
        click.echo(f"Error loading config file: {e}", err=True)
        ctx.exit(1)

    ctx.obj = Context(
        console=create_console(no_color=no_color),
        config=config_data,
        debug=debug,
    )


def _apply_overrides(
    preferences: KeyPatternPreferences,
    pattern: str | None,
    suffix: str | None,
    regex: str | None,
    replacement: str | None,
    unwanted: str | None,
) -> KeyPatternPreferences:
    changes: dict[str, Any] = {}
    if pattern is not None:
        # A pattern given on the command line applies to every entry type
        changes["default_pattern"] = pattern
        changes["type_patterns"] = {}
    if suffix is not None:
        changes["key_suffix"] = KeySuffix(suffix)
    if regex is not None:
        changes["key_pattern_regex"] = regex
    if replacement is not None:
        changes["key_pattern_replacement"] = replacement
    if unwanted is not None:
        changes["unwanted_characters"] = unwanted
    return preferences.replace(**changes) if changes else preferences


def _read_entries(path: Path) -> list[Entry]:
    try:
        raw = msgspec.json.decode(path.read_bytes(), type=list[dict[str, Any]])
        return [Entry.from_dict(item) for item in raw]
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        raise click.ClickException(f"Invalid entries file {path}: {e}") from e


def _keys_table(rows: list[tuple[Entry, str | None]]) -> Table:
    table = Table(
        title="Citation keys",
        box=ROUNDED,
        show_header=True,
        header_style="bold cyan",
        title_style="bold",
    )
    table.add_column("#", style="dim", width=4, justify="right")
    table.add_column("Type", style="magenta", width=14)
    table.add_column("Old key", style="dim")
    table.add_column("New key", style="cyan")

    for i, (entry, old_key) in enumerate(rows, start=1):
        new_key = entry.citation_key or ""
        cell = escape(new_key)
        if old_key != new_key:
            cell = f"[green]{cell}[/green]"
        table.add_row(str(i), escape(entry.type), escape(old_key or "-"), cell)

    return table


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--pattern", "-p", help="Key pattern for all entry types")
@click.option(
    "--suffix",
    type=click.Choice([s.value for s in KeySuffix]),
    help="When to append disambiguation letters",
)
@click.option("--regex", help="Regex applied to generated keys")
@click.option("--replacement", help="Replacement for --regex")
@click.option("--unwanted", help="Characters to remove from keys")
@click.option("--json", "as_json", is_flag=True, help="Print updated entries as JSON")
@click.pass_context
def generate(
    ctx: click.Context,
    file: Path,
    pattern: str | None,
    suffix: str | None,
    regex: str | None,
    replacement: str | None,
    unwanted: str | None,
    as_json: bool,
) -> None:
    """Generate citation keys for the entries in a JSON FILE."""
    console = ctx.obj.console
    preferences = _apply_overrides(
        ctx.obj.preferences, pattern, suffix, regex, replacement, unwanted
    )

    entries = _read_entries(file)
    store = MemoryEntryStore(entries)
    generator = CitationKeyGenerator(preferences.key_patterns(), store, preferences)

    rows = []
    changed = 0
    with store.write_lock():
        for entry in entries:
            old_key = entry.citation_key
            if generator.generate_and_set_key(entry):
                changed += 1
            rows.append((entry, old_key))

    if as_json:
        data = msgspec.json.encode([entry.to_dict() for entry in entries])
        click.echo(msgspec.json.format(data, indent=2).decode())
        return

    console.print(_keys_table(rows))
    console.print(f"\n[green]✓[/green] {changed} of {len(entries)} keys changed")


@cli.command()
@click.argument("pattern")
@click.option(
    "--field",
    "-f",
    "fields",
    multiple=True,
    help="Field as name=value (repeatable)",
)
@click.option("--type", "entry_type", default="misc", help="Entry type")
@click.pass_context
def preview(
    ctx: click.Context, pattern: str, fields: tuple[str, ...], entry_type: str
) -> None:
    """Expand PATTERN for an entry given on the command line."""
    values = {}
    for item in fields:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(
                f"Expected name=value, got '{item}'", param_hint="--field"
            )
        values[name.strip()] = value

    preferences = ctx.obj.preferences
    entry = Entry(type=entry_type, fields=values)
    generator = CitationKeyGenerator(
        KeyPatterns(pattern), MemoryEntryStore(), preferences
    )
    click.echo(generator.generate_key(entry))


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
