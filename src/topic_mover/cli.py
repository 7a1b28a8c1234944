"""Command line interface for topic mover."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .core.relocator import RelocationController, RelocationResult
from .exceptions import ConfigurationError, TopicMoverError
from .infrastructure.adapters import FrontmatterMetadataSource, LocalVault
from .models.settings import Settings, canonical_setting_name, setting_names
from .settings_store import SettingsStore, default_settings_path
from .ui.settings_panel import SettingsPanel
from .watcher import VaultWatcher

console = Console()

_TRUE_WORDS = {'true', 'yes', 'on', '1'}
_FALSE_WORDS = {'false', 'no', 'off', '0'}

_RESULT_LABELS = {
    RelocationResult.MOVED: 'Moved',
    RelocationResult.ALREADY_IN_PLACE: 'Already in place',
    RelocationResult.NO_METADATA: 'No frontmatter',
    RelocationResult.NO_VALUE: 'Property missing',
    RelocationResult.INVALID_FOLDER_NAME: 'Invalid folder name',
    RelocationResult.FOLDER_MISSING: 'Folder missing',
    RelocationResult.FOLDER_CREATE_FAILED: 'Folder creation failed',
    RelocationResult.MOVE_FAILED: 'Move failed',
    RelocationResult.IN_FLIGHT: 'Skipped (in flight)',
    RelocationResult.DISABLED: 'Disabled',
    RelocationResult.ERROR: 'Errors',
}


def setup_logging(verbose: bool) -> None:
    """Send log records to the console through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose)],
        force=True
    )


def parse_setting_value(name: str, raw: str):
    """Convert command line text to the type of the named setting."""
    default = getattr(Settings, name)
    if isinstance(default, bool):
        word = raw.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ConfigurationError(f"Setting '{name}' expects true or false, got '{raw}'")
    return raw.strip()


def _store_for(vault: Path, config: Optional[Path]) -> SettingsStore:
    return SettingsStore(config or default_settings_path(vault))


def _build_controller(vault_root: Path, settings: Settings):
    vault = LocalVault(vault_root)
    controller = RelocationController(
        settings=settings,
        metadata_source=FrontmatterMetadataSource(vault.root),
        storage=vault
    )
    return vault, controller


def _settings_table(settings: Settings) -> Table:
    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name in setting_names():
        table.add_row(name, repr(getattr(settings, name)))
    return table


@click.group()
@click.version_option(package_name="topic-mover")
@click.option('--config', type=click.Path(path_type=Path), help='Settings file path')
@click.option('--verbose', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, config: Optional[Path], verbose: bool):
    """File Markdown notes into folders named by their frontmatter."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj['config'] = config
    ctx.obj['verbose'] = verbose


def _run(ctx, func, *args):
    """Run a command body, turning errors into a message and exit code 1."""
    try:
        return func(*args)
    except TopicMoverError as e:
        console.print(f"\n[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[red]Unexpected error: {escape(str(e))}[/red]")
        if ctx.obj.get('verbose'):
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
@click.argument('vault', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def init(ctx, vault: Path):
    """Write a default settings file for VAULT."""
    store = _store_for(vault, ctx.obj['config'])
    if store.path.exists():
        console.print(f"[yellow]Settings already exist at {store.path}[/yellow]")
        return
    _run(ctx, store.save, Settings.default())
    console.print(f"[green]Created {store.path}[/green]")


@cli.group()
def settings():
    """Show or change settings."""
    pass


@settings.command('show')
@click.argument('vault', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def settings_show(ctx, vault: Path):
    """Show the settings for VAULT."""
    store = _store_for(vault, ctx.obj['config'])
    current = _run(ctx, store.load)
    console.print(_settings_table(current))


@settings.command('set')
@click.argument('vault', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument('key')
@click.argument('value')
@click.pass_context
def settings_set(ctx, vault: Path, key: str, value: str):
    """Change one setting of VAULT and save it immediately."""
    store = _store_for(vault, ctx.obj['config'])

    def _set():
        current = store.load()
        name = canonical_setting_name(key)
        if name is None:
            raise ConfigurationError(
                f"Unknown setting '{key}'. Choose from: {', '.join(setting_names())}"
            )
        current.update(name, parse_setting_value(name, value))
        store.save(current)
        return name, getattr(current, name)

    name, new_value = _run(ctx, _set)
    console.print(f"[green]{name} = {new_value!r}[/green]")


@settings.command('edit')
@click.argument('vault', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def settings_edit(ctx, vault: Path):
    """Edit the settings of VAULT interactively."""
    store = _store_for(vault, ctx.obj['config'])
    _run(ctx, store.load)
    _run(ctx, SettingsPanel(store, console).display)


@settings.command('reset')
@click.argument('vault', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def settings_reset(ctx, vault: Path):
    """Restore the default settings of VAULT."""
    store = _store_for(vault, ctx.obj['config'])
    _run(ctx, store.save, Settings.default())
    console.print("[green]Settings reset to defaults[/green]")


@cli.command()
@click.argument('vault', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option('--dry-run', is_flag=True, help='Show what would be done without making changes')
@click.pass_context
def organize(ctx, vault: Path, dry_run: bool):
    """Move every note in VAULT to the folder its frontmatter names."""
    store = _store_for(vault, ctx.obj['config'])
    current = _run(ctx, store.load)
    local_vault, controller = _build_controller(vault, current)

    if not current.enabled:
        console.print("[yellow]Topic mover is disabled; enable it with 'settings set VAULT enabled true'[/yellow]")
        return

    if dry_run:
        plan = Table(title="Planned moves")
        plan.add_column("Note", style="cyan")
        plan.add_column("Target")
        for note in local_vault.iter_notes():
            target = _run(ctx, controller.plan, note)
            if target:
                plan.add_row(note.path, target)
        console.print(plan)
        return

    results = _run(ctx, controller.organize_vault, local_vault.iter_notes())

    results_table = Table(title="Results")
    results_table.add_column("Outcome", style="cyan")
    results_table.add_column("Count", justify="right")
    for result, label in _RESULT_LABELS.items():
        if results.get(result):
            results_table.add_row(label, str(results[result]))
    console.print(results_table)


@cli.command()
@click.argument('vault', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def watch(ctx, vault: Path):
    """Watch VAULT and file notes as their frontmatter changes."""
    store = _store_for(vault, ctx.obj['config'])
    current = _run(ctx, store.load)
    local_vault, controller = _build_controller(vault, current)

    console.print(f"[bold cyan]Watching {local_vault.root}[/bold cyan] (Ctrl+C to stop)")
    _run(ctx, VaultWatcher(controller, local_vault, store).run_forever)


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == '__main__':
    main()
