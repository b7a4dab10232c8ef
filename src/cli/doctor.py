"""Doctor command for license key diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console

from cli.ui_components import build_env_table
from core.config import load_settings
from core.environment import EnvironmentSource, write_env_values
from core.services.descriptors import required_env_keys
from core.services.resolver import resolve

app = typer.Typer(no_args_is_help=True, help="License key diagnostics and configuration.")

_console = Console()

# One representative package per license.
DOCTOR_PACKAGES = (
    "advanced-custom-fields-pro",
    "polylang-pro",
    "gravityforms",
    "wp-all-import-pro",
    "wp-all-export-pro",
)


@app.command()
def run() -> None:
    """Show which vendor license keys are configured."""

    settings = load_settings()
    env = EnvironmentSource.from_directory(settings.resolved_env_file_dir())

    table = build_env_table("wp-pro-plugins doctor")
    missing = 0
    for name in DOCTOR_PACKAGES:
        variant = resolve(name, "latest", namespace=settings.vendor_namespace)
        if variant is None:
            continue
        for key in required_env_keys(variant):
            if env.has(key):
                table.add_row(name, key, "[green]OK[/green]")
            else:
                missing += 1
                table.add_row(name, key, "[yellow]MISSING[/yellow]")

    _console.print(table)
    _console.print(f"[dim]Env file directory:[/dim] {settings.resolved_env_file_dir()}")

    if missing:
        _console.print(
            "\n[yellow]Note:[/yellow] packages whose keys are missing fail at install time. "
            "Run `wp-pro-plugins doctor setup <package>` to store them in .env."
        )


@app.command()
def setup(package: str = typer.Argument(..., help="Package name, e.g. polylang-pro.")) -> None:
    """Interactive setup: stores a package's license keys in the .env file."""

    settings = load_settings()
    variant = resolve(package, "latest", namespace=settings.vendor_namespace)
    if variant is None:
        raise typer.BadParameter(f"{package} is not a supported package")

    values: dict[str, str] = {}
    for key in required_env_keys(variant):
        values[key] = typer.prompt(key, hide_input=key.endswith("_KEY")).strip()

    if not all(values.values()):
        raise typer.BadParameter("all values are required")

    env_path = write_env_values(settings.resolved_env_file_dir(), values)
    _console.print(f"[green]Saved license keys to:[/green] {env_path}")
