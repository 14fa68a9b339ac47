"""cjs-resolve command line interface."""

import logging
import sys
from pathlib import Path

import click
from rich.logging import RichHandler
from rich.table import Table

from .console import console
from .console import err_console
from .errors import ModuleNotFoundError
from .logging_setup import init_json_logging
from .node_modules import node_modules_paths
from .resolver import browser_resolve_sync
from .resolver import resolve_sync
from .settings import SettingsManager
from .utils.error_format import escape_markup
from .utils.error_format import format_os_error

logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 1
EXIT_FILESYSTEM = 2


def _setup_logging(verbose: bool, log_file: str | None) -> None:
    if verbose:
        root = logging.getLogger()
        root.setLevel(logging.DEBUG)
        if not any(isinstance(h, RichHandler) for h in root.handlers):
            root.addHandler(RichHandler(console=err_console, show_path=False))
    if log_file:
        init_json_logging(log_file, "DEBUG" if verbose else None)


def _build_settings(ctx: click.Context, **overrides):
    """Effective settings with non-empty CLI flags applied on top."""
    manager: SettingsManager = ctx.obj["settings_manager"]
    settings = manager.effective()
    updates = {k: list(v) if isinstance(v, tuple) else v for k, v in overrides.items() if v not in (None, ())}
    return settings.model_copy(update=updates)


@click.group()
@click.version_option(package_name="cjs-resolve")
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding .cjs-resolve/settings.yaml (default: current directory)",
)
@click.pass_context
def cli(ctx: click.Context, project_dir: Path | None):
    """Resolve CommonJS module specifiers to files on disk."""
    ctx.ensure_object(dict)
    ctx.obj.setdefault("settings_manager", SettingsManager(project_dir=project_dir))


@cli.command()
@click.argument("specifier")
@click.option("--basedir", "-b", type=click.Path(file_okay=False), default=None, help="Directory to resolve from")
@click.option("--ext", "-e", "extensions", multiple=True, help="Extension to try (repeatable, ordered)")
@click.option("--module-dir", "-m", "module_directories", multiple=True, help="Module directory name (repeatable)")
@click.option("--path", "-p", "paths", multiple=True, help="Extra search root (repeatable)")
@click.option("--browser/--no-browser", default=None, help="Use browser-mode resolution")
@click.option("--preserve-symlinks", is_flag=True, help="Do not resolve basedir symlinks before searching")
@click.option("--verbose", "-v", is_flag=True, help="Log each resolution step")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Append JSONL logs to this file")
@click.pass_context
def resolve(
    ctx: click.Context,
    specifier: str,
    basedir: str | None,
    extensions: tuple[str, ...],
    module_directories: tuple[str, ...],
    paths: tuple[str, ...],
    browser: bool | None,
    preserve_symlinks: bool,
    verbose: bool,
    log_file: str | None,
):
    """Resolve SPECIFIER and print the absolute file path."""
    _setup_logging(verbose, log_file)
    settings = _build_settings(
        ctx,
        extensions=extensions,
        module_directories=module_directories,
        paths=paths,
        browser=browser,
        resolve_symlinks=False if preserve_symlinks else None,
    )
    options = settings.to_options(basedir)
    resolver = browser_resolve_sync if settings.browser else resolve_sync

    try:
        result = resolver(specifier, options)
    except ModuleNotFoundError as e:
        err_console.print(f"[red]Error:[/red] {escape_markup(e)} [dim]({e.code})[/dim]")
        sys.exit(EXIT_NOT_FOUND)
    except OSError as e:
        logger.debug("Filesystem error during resolution", exc_info=True)
        err_console.print(f"[red]Filesystem error:[/red] {escape_markup(format_os_error(e))}")
        sys.exit(EXIT_FILESYSTEM)

    console.print(escape_markup(result), soft_wrap=True, highlight=False)


@cli.command()
@click.option("--basedir", "-b", type=click.Path(file_okay=False), default=None, help="Directory to start from")
@click.option("--module-dir", "-m", "module_directories", multiple=True, help="Module directory name (repeatable)")
@click.option("--path", "-p", "paths", multiple=True, help="Extra search root (repeatable)")
@click.option("--preserve-symlinks", is_flag=True, help="Do not resolve basedir symlinks before searching")
@click.pass_context
def paths(
    ctx: click.Context,
    basedir: str | None,
    module_directories: tuple[str, ...],
    paths: tuple[str, ...],
    preserve_symlinks: bool,
):
    """Show the module directories searched for bare names, in order."""
    settings = _build_settings(
        ctx,
        module_directories=module_directories,
        paths=paths,
        resolve_symlinks=False if preserve_symlinks else None,
    )
    options = settings.to_options(basedir)

    try:
        roots = node_modules_paths(options.basedir, options)
    except OSError as e:
        err_console.print(f"[red]Filesystem error:[/red] {escape_markup(format_os_error(e))}")
        sys.exit(EXIT_FILESYSTEM)

    extra = set(options.paths)
    table = Table(title="Module search roots", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Directory", style="green")
    table.add_column("Source", style="yellow")
    for index, root in enumerate(roots, 1):
        table.add_row(str(index), escape_markup(root), "path" if root in extra else "ancestor")
    console.print(table)


@cli.command()
@click.pass_context
def config(ctx: click.Context):
    """Show the effective resolver settings."""
    manager: SettingsManager = ctx.obj["settings_manager"]
    settings = manager.effective()

    table = Table(title="Resolver settings", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="green")
    table.add_column("Value")
    for name, value in settings.model_dump().items():
        if isinstance(value, list):
            value = ", ".join(value) if value else "(none)"
        table.add_row(name, escape_markup(value))
    console.print(table)

    for path in manager.scope_files():
        state = "[green]found[/green]" if path.exists() else "[dim]missing[/dim]"
        console.print(f"  {escape_markup(path)}: {state}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
