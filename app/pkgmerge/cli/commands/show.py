"""Show command implementation.

Loads the local inventory and every configured catalog, merges them and
displays the packages grouped by API level or by source.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from pkgmerge.cli.display import create_projection_tree, print_projection_summary, print_skipped
from pkgmerge.core.config import ConfigError, ConfigNotFoundError, load_config
from pkgmerge.core.paths import get_config_path
from pkgmerge.core.reconciler import PackagesSession
from pkgmerge.core.refresh import build_loaders, refresh
from pkgmerge.models.category import SortMode
from pkgmerge.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Show installed and available packages.",
    invoke_without_command=True,
)


class SortChoice(str, Enum):
    """Available groupings for the package view."""

    API = "api"
    SOURCE = "source"


@app.callback(invoke_without_command=True)
def show_packages(
    ctx: typer.Context,
    sort_by: Annotated[
        SortChoice | None,
        typer.Option(
            "--by",
            "-b",
            help="Group packages by api or source (default from config).",
            case_sensitive=False,
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config.toml.",
        ),
    ] = None,
    updates_only: Annotated[
        bool,
        typer.Option(
            "--updates",
            "-u",
            help="Only show packages with an update or not yet installed.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
) -> None:
    """Merge installed packages with the configured catalogs and display them.

    Examples:
        pkgmerge show                      # Group by the configured default
        pkgmerge show --by source          # Group by catalog source
        pkgmerge show --updates            # Only updates and new packages
        pkgmerge show --json               # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

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

    mode = SortMode(sort_by.value if sort_by is not None else config.sort_by)
    local, remotes = build_loaders(config, path.parent)

    result = refresh(PackagesSession(), mode, local, remotes)
    projection = result.projection

    if json_output:
        data = projection.to_dict()
        data["skipped"] = [{"label": s.label, "reason": s.reason} for s in result.skipped]
        console.print_json(json.dumps(data))
        return

    print_skipped(result)

    if projection.item_count == 0:
        print_info("No packages installed or available.")
        return

    console.print(create_projection_tree(projection, updates_only=updates_only))
    print_projection_summary(projection)
