"""
Settings Switch CLI - Command-line interface.

Add, list, apply, remove and validate settings configurations from the
terminal.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from settings_switch.core.exceptions import (
    ConfigurationError,
    EditorNotFoundError,
    SettingsSwitchError,
    ValidationError,
    format_exception,
)
from settings_switch.core.models import ConfigurationRecord
from settings_switch.core.settings import SwitchSettings, get_settings
from settings_switch.editor import is_editor_available, open_editor
from settings_switch.registry import ConfigRegistry
from settings_switch.storage import atomic_write, file_exists, file_size, safe_copy
from settings_switch.validation import validate_settings_file

app = typer.Typer(
    name="settings-switch",
    help="Settings Switch - manage named snapshots of a JSON settings file",
    no_args_is_help=True,
)
console = Console()

DEFAULT_TEMPLATE = """{
  "theme": "dark",
  "fontSize": 14,
  "editorSettings": {
    "tabSize": 2,
    "wordWrap": true
  }
}
"""


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Settings Switch - manage named snapshots of a JSON settings file."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(format_exception(error))}")
    raise typer.Exit(1)


def _open_registry(settings: SwitchSettings) -> ConfigRegistry:
    registry = ConfigRegistry(
        home_dir=settings.home_dir,
        target_path=settings.target_path,
        backup_suffix=settings.backup_suffix,
    )
    return registry.open()


def _check_prerequisites(settings: SwitchSettings) -> None:
    """Refuse to run when the target application is not installed."""
    target_dir = settings.target_path.parent
    if settings.require_target_dir and not target_dir.is_dir():
        raise ConfigurationError(
            f"Target directory not found at {target_dir}. "
            "Install the application first or point SSW_TARGET elsewhere",
            env_var="SSW_TARGET",
        )


def _format_size(size: int | None) -> str:
    if size is None:
        return "unknown"
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


def _print_record(record: ConfigurationRecord, *, show_file: bool = False) -> None:
    console.print(f"   ID: {record.id}")
    console.print(f"   Name: {escape(record.name)}")
    if record.description:
        console.print(f"   Description: {escape(record.description)}")
    console.print(f"   Created: {record.created_display()}")
    if show_file:
        console.print(f"   File: {record.file_path}")


def _create_temp_config(target_path: Path) -> Path:
    """Seed a temp file from the current target, or from a template."""
    fd, name = tempfile.mkstemp(prefix="settings-switch-", suffix=".json")
    os.close(fd)
    temp_path = Path(name)

    try:
        if file_exists(target_path):
            safe_copy(target_path, temp_path)
        else:
            atomic_write(temp_path, DEFAULT_TEMPLATE.encode("utf-8"))
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise
    return temp_path


def _edit_until_valid(temp_path: Path) -> None:
    while True:
        open_editor(temp_path)
        try:
            validate_settings_file(temp_path)
            return
        except ValidationError as e:
            console.print(f"[red]Invalid JSON in edited file:[/red] {escape(str(e))}")
            if not typer.confirm("Do you want to edit again?", default=False):
                console.print("[yellow]Configuration creation cancelled due to invalid JSON[/yellow]")
                raise typer.Exit(1)


@app.command()
def add(
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Configuration name (prompted if omitted)"
    ),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="Configuration description"
    ),
):
    """Add a new configuration by editing a copy of the current settings."""
    try:
        settings = get_settings()
        _check_prerequisites(settings)
        if not is_editor_available():
            raise EditorNotFoundError()

        registry = _open_registry(settings)
        temp_path = _create_temp_config(settings.target_path)
        try:
            console.print(
                Panel.fit(
                    "[bold blue]New Configuration[/bold blue]\n"
                    f"Editing: {temp_path}\n"
                    "Save and close the editor to continue, Ctrl+C to cancel",
                )
            )
            _edit_until_valid(temp_path)

            if name is None:
                name = typer.prompt("Configuration name")
            if description is None:
                description = typer.prompt(
                    "Description (optional)", default="", show_default=False
                )

            record = registry.add(temp_path, name, description)
        finally:
            temp_path.unlink(missing_ok=True)
    except SettingsSwitchError as e:
        _fail(e)

    console.print("\n[green]Configuration added successfully![/green]")
    _print_record(record)
    console.print(
        f"\nUse 'settings-switch apply {escape(record.name)}' to switch to this configuration"
    )


def list_configs(
    detailed: bool = typer.Option(
        False, "--detailed", "-d", help="Show full IDs and descriptions"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output in JSON format"),
):
    """List all saved configurations."""
    try:
        registry = _open_registry(get_settings())
        records = registry.list_all()

        if json_output:
            typer.echo(json.dumps([r.model_dump() for r in records], indent=2))
            return

        if not records:
            console.print("[yellow]No configurations found.[/yellow]")
            console.print("Use 'settings-switch add' to create your first configuration")
            return

        active_ids = {r.id for r in registry.active_records()}
    except SettingsSwitchError as e:
        _fail(e)

    table = Table(title=f"Configurations ({len(records)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Created")
    table.add_column("Size", justify="right")
    table.add_column("Active", style="green")

    for record in records:
        config_id = record.id if detailed else f"{record.short_id}..."
        description = record.description or "-"
        if not detailed and len(description) > 40:
            description = description[:37] + "..."

        table.add_row(
            config_id,
            escape(record.name),
            escape(description),
            record.created_display("%Y-%m-%d %H:%M"),
            _format_size(file_size(record.stored_path)),
            "*" if record.id in active_ids else "",
        )

    console.print(table)
    console.print("\nUse 'settings-switch apply <name>' to switch to a configuration")
    console.print("Use 'settings-switch remove <name>' to delete a configuration")
    if not detailed:
        console.print("Use '--detailed' to see full IDs and descriptions")


app.command("list")(list_configs)
app.command("ls", hidden=True)(list_configs)
app.command("show", hidden=True)(list_configs)


@app.command()
def apply(
    identifier: str = typer.Argument(..., help="Configuration name or ID"),
    confirm: bool = typer.Option(
        False, "--confirm", "-c", help="Prompt for confirmation before applying"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Skip the confirmation prompt"),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Show what would be done without making changes"
    ),
):
    """Apply a configuration to the target settings file."""
    try:
        settings = get_settings()
        _check_prerequisites(settings)
        registry = _open_registry(settings)
        record = registry.get(identifier)
    except SettingsSwitchError as e:
        _fail(e)

    target_path = registry.target_path
    current_exists = file_exists(target_path)

    console.print(f"[bold blue]Applying configuration:[/bold blue] {escape(record.name)}")
    _print_record(record)
    console.print(f"   Target: {target_path}")
    if current_exists:
        console.print(f"   Backup: {registry.backup_path}")
        console.print(f"   Current file: {_format_size(file_size(target_path))}")
    else:
        console.print("   Current: no existing settings file found")
    console.print(f"   New file: {_format_size(file_size(record.stored_path))}\n")

    if dry_run:
        console.print("[yellow]DRY RUN MODE - No changes will be made[/yellow]")
        if current_exists:
            console.print(f"Would create backup: {registry.backup_path}")
        console.print(f"Would copy: {record.file_path} -> {target_path}")
        return

    if confirm and not force:
        if current_exists:
            question = "This will replace your current settings. Continue?"
        else:
            question = "No existing settings file found. Continue?"
        if not typer.confirm(question, default=False):
            console.print("[yellow]Operation cancelled[/yellow]")
            return

    try:
        result = registry.apply(record.id)
    except SettingsSwitchError as e:
        _fail(e)

    console.print("[green]Configuration applied successfully![/green]")
    if result.backed_up:
        console.print(f"Backup saved: {result.backup_path}")
        console.print(f"To rollback: mv {result.backup_path} {result.target_path}")
    console.print("Restart the application to see the changes")


def remove(
    identifier: str = typer.Argument(..., help="Configuration name or ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Remove without confirmation"),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Show what would be removed without making changes"
    ),
):
    """Remove a saved configuration."""
    try:
        registry = _open_registry(get_settings())
        record = registry.get(identifier)
    except SettingsSwitchError as e:
        _fail(e)

    console.print("[bold]Configuration to remove:[/bold]")
    _print_record(record, show_file=True)
    size = file_size(record.stored_path)
    if size is not None:
        console.print(f"   Size: {size} bytes")
    console.print()

    if dry_run:
        console.print("[yellow]DRY RUN MODE - No changes will be made[/yellow]")
        console.print(f"Would remove file: {record.file_path}")
        console.print(f"Would remove from configuration list: {escape(record.name)}")
        return

    if not force:
        console.print("[yellow]Warning: This action cannot be undone![/yellow]")
        if not typer.confirm(f"Are you sure you want to remove '{record.name}'?", default=False):
            console.print("[yellow]Operation cancelled[/yellow]")
            return
        typed = typer.prompt("Type the configuration name to confirm")
        if typed.strip() != record.name:
            console.print("[yellow]Configuration name did not match. Operation cancelled[/yellow]")
            return

    try:
        result = registry.remove(record.id)
    except SettingsSwitchError as e:
        _fail(e)

    console.print(f"[green]Configuration '{escape(record.name)}' removed successfully![/green]")
    if result.orphaned_file is not None:
        console.print(f"[yellow]Stored file could not be deleted: {result.orphaned_file}[/yellow]")

    remaining = len(registry)
    if remaining:
        console.print(f"{remaining} configuration{_plural(remaining)} remaining")
    else:
        console.print("No configurations remaining")


app.command("remove")(remove)
app.command("rm", hidden=True)(remove)
app.command("delete", hidden=True)(remove)
app.command("del", hidden=True)(remove)


@app.command()
def validate(
    identifier: Optional[str] = typer.Argument(None, help="Configuration name or ID"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show detailed validation information"
    ),
    all_configs: bool = typer.Option(
        False, "--all", "-a", help="Validate all configurations (default with no argument)"
    ),
):
    """Validate stored configurations contain a JSON object."""
    try:
        registry = _open_registry(get_settings())
        if identifier is None or all_configs:
            _validate_all(registry, verbose)
        else:
            _validate_single(registry, identifier, verbose)
    except SettingsSwitchError as e:
        _fail(e)


def _validate_single(registry: ConfigRegistry, identifier: str, verbose: bool) -> None:
    record = registry.get(identifier)

    console.print(f"[bold blue]Validating configuration:[/bold blue] {escape(record.name)}")
    if verbose:
        _print_record(record, show_file=True)

    try:
        registry.validate(record.id)
    except SettingsSwitchError as e:
        console.print(f"[red]Validation failed:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print("[green]Configuration is valid[/green]")


def _validate_all(registry: ConfigRegistry, verbose: bool) -> None:
    records = registry.list_all()
    if not records:
        console.print("[yellow]No configurations found to validate[/yellow]")
        return

    console.print(f"Validating {len(records)} configuration{_plural(len(records))}...\n")
    failures = {failure.record.id: failure.error for failure in registry.validate_all()}

    for record in records:
        error = failures.get(record.id)
        if error is None:
            console.print(f"[green]OK[/green]      {escape(record.name)}")
        else:
            console.print(f"[red]INVALID[/red] {escape(record.name)} - {escape(str(error))}")
        if verbose:
            console.print(f"   ID: {record.id}")
            console.print(f"   File: {record.file_path}")

    console.print("\n[bold]Validation Summary[/bold]")
    console.print(f"   Valid: {len(records) - len(failures)}")
    console.print(f"   Invalid: {len(failures)}")
    console.print(f"   Total: {len(records)}")

    if failures:
        console.print(
            f"\n[red]Found {len(failures)} invalid configuration{_plural(len(failures))}[/red]"
        )
        raise typer.Exit(1)

    console.print("\n[green]All configurations are valid![/green]")


@app.command()
def version():
    """Show Settings Switch version."""
    from settings_switch import __version__

    console.print(f"Settings Switch v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
