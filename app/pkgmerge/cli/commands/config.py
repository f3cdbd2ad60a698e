"""Config command implementation.

Creates and inspects the pkgmerge configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from pkgmerge.core.config import (
    ConfigError,
    ConfigNotFoundError,
    config_exists,
    default_config,
    load_config,
    save_config,
)
from pkgmerge.core.paths import get_config_path
from pkgmerge.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Create and inspect the configuration.",
    no_args_is_help=True,
)

ConfigPathOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to config.toml.",
    ),
]


@app.command()
def init(
    config_path: ConfigPathOption = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a starter config.toml."""
    path = config_path or get_config_path()

    if config_exists(path) and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(default_config(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command("show")
def show_config(config_path: ConfigPathOption = None) -> None:
    """Display the configured inventory and sources."""
    path = config_path or get_config_path()

    try:
        config = load_config(path)
    except ConfigNotFoundError as e:
        print_error(f"Config not found: {path}")
        print_info("Run 'pkgmerge config init' to create one.")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e

    console.print(f"[muted]Config:[/] {path}")
    console.print(f"[muted]Inventory:[/] {config.inventory or '-'}")
    console.print(f"[muted]Sort by:[/] {config.sort_by}")

    if not config.sources:
        print_info("No sources configured.")
        return

    table = Table(
        title="Sources",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Name", no_wrap=True)
    table.add_column("URL", style="muted")
    table.add_column("Catalog", style="info")
    for entry in config.sources:
        source = entry.to_source()
        table.add_row(source.display_name, entry.url, str(entry.catalog))
    console.print(table)


@app.command("path")
def show_path() -> None:
    """Print the default config file path."""
    typer.echo(str(get_config_path()))
