"""Settings file commands.

Provides commands to locate, inspect and create the devsweep settings file.
"""

from typing import Annotated

import tomli_w
import typer

from devsweep.core.paths import ensure_config_dir, get_settings_path
from devsweep.core.settings import Settings, SettingsError, load_settings, save_settings
from devsweep.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Manage the devsweep settings file.",
    no_args_is_help=True,
)


@app.command()
def path() -> None:
    """Print the settings file location."""
    typer.echo(str(get_settings_path()))


@app.command()
def show() -> None:
    """Show the effective settings as TOML."""
    settings_path = get_settings_path()
    try:
        settings = load_settings(settings_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not settings_path.exists():
        print_info(f"No settings file at {settings_path}; showing defaults.")

    data = settings.model_dump(exclude_none=True)
    typer.echo(tomli_w.dumps(data), nl=False)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Create a settings file with default values."""
    settings_path = get_settings_path()
    if settings_path.exists() and not force:
        print_error(f"Settings file already exists: {settings_path} (use --force)")
        raise typer.Exit(code=1)

    try:
        ensure_config_dir()
        written = save_settings(Settings(), settings_path)
    except (RuntimeError, SettingsError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {written}")
