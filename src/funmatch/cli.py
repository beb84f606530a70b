"""Command line interface for the funmatch project."""

from __future__ import annotations

import difflib
import re
from pathlib import Path
from typing import Any, Optional

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from funmatch.config import (
    ConfigError,
    ConfigManager,
    FunmatchConfig,
    assign_dotted,
    resolve_with_precedence,
)
from funmatch.library import LibraryCache, LibraryEntry, LibraryScanner
from funmatch.logging_utils import configure_logging
from funmatch.matching import MetadataExtractor, ScoringEngine, check_query
from funmatch.session import (
    FileCopier,
    MatchRunner,
    RichConsoleIO,
    SessionContext,
    candidate_table,
)
from funmatch.state import HistoryStore, MissingLibraryError, StateError
from funmatch.studios import StudioRegistry, StudioRegistryError, StudioStore

console = Console()


def _format_summary_line(command: str, metrics: dict[str, Any]) -> str:
    """Return a consistent summary line for CLI commands.

    Args:
        command: Command name to include in the summary.
        metrics: Ordered mapping of metric names to values.

    Returns:
        str: Rich-formatted summary string.
    """
    parts = ", ".join(f"{key}={value}" for key, value in metrics.items())
    return f"[green]{command} summary: {parts}.[/green]"


def _load_config(
    manager: ConfigManager,
    cli_overrides: Optional[dict[str, Any]] = None,
) -> FunmatchConfig:
    """Load configuration and configure logging for a command.

    Raises:
        click.ClickException: If configuration loading or validation fails.
    """
    try:
        config = manager.load(cli_overrides=cli_overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    configure_logging(config.logging, manager.log_path)
    return config


def _load_library(
    manager: ConfigManager, *, videos: bool, scripts: bool
) -> tuple[list[LibraryEntry], list[LibraryEntry]]:
    cache = LibraryCache(manager.library_dir)
    try:
        video_entries = cache.load_videos() if videos else []
        script_entries = cache.load_scripts() if scripts else []
    except (MissingLibraryError, StateError) as exc:
        raise click.ClickException(str(exc)) from exc
    return video_entries, script_entries


def _build_engine(
    config: FunmatchConfig, registry: StudioRegistry
) -> tuple[MetadataExtractor, ScoringEngine]:
    extractor = MetadataExtractor(config.matching, registry)
    engine = ScoringEngine(config.matching, registry)
    return extractor, engine


def _build_runner(
    manager: ConfigManager,
    config: FunmatchConfig,
    scripts: list[LibraryEntry],
    *,
    dry_run: bool,
) -> MatchRunner:
    studio_store = StudioStore(manager.studios_path)
    registry = studio_store.load()
    extractor, engine = _build_engine(config, registry)
    history = HistoryStore(manager.history_path)
    try:
        history.load()
    except StateError as exc:
        raise click.ClickException(str(exc)) from exc
    context = SessionContext(
        scripts=scripts,
        extractor=extractor,
        engine=engine,
        history=history,
        registry=registry,
        studio_store=studio_store,
        copier=FileCopier(dry_run=dry_run),
        io=RichConsoleIO(console),
        settings=config.session,
        script_extension=config.library.script_extension,
    )
    return MatchRunner(context)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="funmatch")
def cli() -> None:
    """funmatch pairs local videos with companion funscripts by fuzzy name matching."""


@cli.command()
@click.option(
    "--video-root",
    "video_roots",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=str),
    help="Video directory to scan instead of the configured roots (repeatable).",
)
@click.option(
    "--script-root",
    "script_roots",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=str),
    help="Script directory to scan instead of the configured roots (repeatable).",
)
def scan(video_roots: tuple[str, ...], script_roots: tuple[str, ...]) -> None:
    """Scan the video and script libraries and refresh the cache.

    Args:
        video_roots: Optional replacement for ``library.video_roots``.
        script_roots: Optional replacement for ``library.script_roots``.
    """
    manager = ConfigManager()
    overrides: dict[str, Any] = {}
    if video_roots:
        overrides["library.video_roots"] = list(video_roots)
    if script_roots:
        overrides["library.script_roots"] = list(script_roots)
    config = _load_config(manager, overrides or None)
    library = config.library

    if not library.video_roots and not library.script_roots:
        raise click.ClickException(
            "No library roots configured. Set library.video_roots and library.script_roots "
            "with `funmatch config set` or pass --video-root/--script-root."
        )

    excluded = library.exclude_paths
    videos = LibraryScanner(
        extensions=library.video_extensions, recursive=library.recursive, exclude_paths=excluded
    ).scan(Path(root) for root in library.video_roots)
    scripts = LibraryScanner(
        extensions=[library.script_extension], recursive=library.recursive, exclude_paths=excluded
    ).scan(Path(root) for root in library.script_roots)

    cache = LibraryCache(manager.library_dir)
    cache.save_videos(videos)
    cache.save_scripts(scripts)
    console.print(_format_summary_line("Scan", {"videos": len(videos), "scripts": len(scripts)}))


@cli.command()
@click.option("--limit", type=click.IntRange(min=1), help="Stop after this many videos.")
@click.option("--dry-run", is_flag=True, help="Record decisions without copying scripts.")
def match(limit: Optional[int], dry_run: bool) -> None:
    """Interactively match every unhandled video with a script.

    Args:
        limit: Maximum number of videos to present.
        dry_run: When True, skip the script copy.
    """
    manager = ConfigManager()
    config = _load_config(manager)
    videos, scripts = _load_library(manager, videos=True, scripts=True)
    runner = _build_runner(manager, config, scripts, dry_run=dry_run)

    try:
        summary = runner.run(videos, limit=limit)
    except (EOFError, KeyboardInterrupt) as exc:
        raise click.Abort() from exc
    console.print(_format_summary_line("Match", summary.as_dict()))


@cli.command()
@click.argument("query", nargs=-1, required=True)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.option("--dry-run", is_flag=True, help="Record decisions without copying scripts.")
def target(query: tuple[str, ...], yes: bool, dry_run: bool) -> None:
    """Match the single video whose name best fits QUERY.

    History and existing scripts are ignored for the chosen video.

    Args:
        query: Words identifying the video.
        yes: When True, do not ask before matching.
        dry_run: When True, skip the script copy.
    """
    manager = ConfigManager()
    config = _load_config(manager)
    videos, scripts = _load_library(manager, videos=True, scripts=True)
    runner = _build_runner(manager, config, scripts, dry_run=dry_run)

    try:
        result = runner.run_target(" ".join(query), videos, confirm=not yes)
    except (EOFError, KeyboardInterrupt) as exc:
        raise click.Abort() from exc
    if result is not None:
        console.print(f"[green]Session ended: {result.state.value}.[/green]")


@cli.command()
@click.argument("query", nargs=-1, required=True)
@click.option("--limit", type=click.IntRange(min=1), help="Number of scripts to list.")
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON.")
def check(query: tuple[str, ...], limit: Optional[int], json_output: bool) -> None:
    """Show the scripts QUERY would match, without changing anything.

    Args:
        query: Text treated as a video name.
        limit: Maximum number of scripts to list.
        json_output: When True, emit JSON instead of a table.
    """
    manager = ConfigManager()
    config = _load_config(manager)
    _, scripts = _load_library(manager, videos=False, scripts=True)
    extractor, engine = _build_engine(config, StudioStore(manager.studios_path).load())

    text = " ".join(query)
    extraction, candidates = check_query(
        text,
        scripts,
        extractor=extractor,
        engine=engine,
        limit=limit or config.session.check_limit,
    )

    if json_output:
        console.print_json(
            data={
                "query": text,
                "extraction": extraction.model_dump(mode="json"),
                "candidates": [candidate.model_dump(mode="json") for candidate in candidates],
            }
        )
        return

    console.print(
        f"[dim]keywords: {escape(', '.join(extraction.keywords) or '-')} | "
        f"studio: {escape(extraction.studio or '-')} | date: {extraction.date_compact or '-'}[/dim]"
    )
    if not candidates:
        console.print("[yellow]No matching scripts found.[/yellow]")
        return
    console.print(candidate_table(candidates, title=f"Scripts matching '{escape(text)}'"))


@cli.group()
def studios() -> None:
    """Inspect and extend the studio registry."""


@studios.command("list")
def studios_list() -> None:
    """List studios in detection order with their patterns."""
    manager = ConfigManager()
    _load_config(manager)
    registry = StudioStore(manager.studios_path).load()

    table = Table(title=f"Studios ({len(registry)})")
    table.add_column("#", justify="right")
    table.add_column("Studio")
    table.add_column("Patterns", overflow="fold")
    for index, (name, patterns) in enumerate(registry, start=1):
        table.add_row(str(index), escape(name), escape("  ".join(patterns)))
    console.print(table)


@studios.command("add")
@click.argument("name")
@click.argument("pattern")
def studios_add(name: str, pattern: str) -> None:
    """Add PATTERN as a detection pattern for studio NAME.

    Args:
        name: Studio name; created at the end of the registry when new.
        pattern: Case-insensitive regular expression.

    Raises:
        click.ClickException: If the pattern is invalid or cannot be saved.
    """
    try:
        re.compile(pattern)
    except re.error as exc:
        raise click.ClickException(f"Invalid pattern: {exc}") from exc

    manager = ConfigManager()
    _load_config(manager)
    store = StudioStore(manager.studios_path)
    registry = store.load()
    if not registry.learn(name, pattern):
        console.print(f"[yellow]{escape(name)} already has that pattern.[/yellow]")
        return
    try:
        store.save(registry)
    except StudioRegistryError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(f"[green]Added pattern for {escape(name)}.[/green]")


@cli.group()
def config() -> None:
    """Manage funmatch configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Args:
        no_env: If True, ignore environment-derived overrides.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path describing the configuration field to update.
        value: YAML-literal value to write into the configuration file.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    before = manager.read_text().splitlines()
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException(
            "KEY must specify a dotted path such as 'session.default_action'."
        )

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        file_data = manager.load_file_overrides()
        assign_dotted(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=FunmatchConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    after = manager.read_text().splitlines()

    diff = [
        line
        for line in difflib.unified_diff(
            before,
            after,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
        if not line[1:].startswith("# Last updated:")
    ]
    changed = [line for line in diff if not line.startswith(("+++", "---"))]
    if not any(line.startswith(("+", "-")) for line in changed):
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an interactive editor session.

    Raises:
        click.ClickException: If edited content is invalid or cannot be saved.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")

    if edited is None or edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        parsed = yaml.safe_load(edited) or {}
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML: {exc}") from exc

    if not isinstance(parsed, dict):
        raise click.ClickException("Configuration file must contain a top-level mapping.")

    try:
        resolve_with_precedence(defaults=FunmatchConfig(), file_overrides=parsed)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(parsed)
    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
