"""CLI (Typer).

Comandos:
- resolve: muestra la variante y la URL del vendor de un paquete.
- rewrite-dist: añade el fragmento anti-caché a una dist URL.
- handle: adaptador de host por stream JSON (stdin -> stdout).
- download: resuelve y descarga el zip de un plugin.
- doctor: diagnóstico de license keys.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console

from adapters.downloader import download_package
from adapters.event_stream import handle_stream
from cli import doctor
from cli.ui_components import build_resolution_table, configure_logging
from core.config import load_settings
from core.domain.models import PackageIdentity
from core.errors import DownloadError, MissingEnvError
from core.services.descriptors import download_url, mask_secrets, secret_values
from core.services.installer import ProPluginsInstaller
from core.services.resolver import resolve
from core.services.url_rewriter import rewrite_dist_url

app = typer.Typer(
    no_args_is_help=True,
    help="Rewrite download URLs of commercial WordPress plugins using vendor license keys.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, _err_console)


@app.command(name="resolve")
def resolve_command(
    name: str = typer.Argument(..., help="Package name, e.g. junaidbhura/polylang-pro."),
    version: str = typer.Argument(..., help="Package version."),
    show_secrets: bool = typer.Option(False, "--show-secrets", help="Print license keys unmasked."),
) -> None:
    """Resolve a package to its vendor download URL."""

    settings = load_settings()
    installer = ProPluginsInstaller.from_settings(settings)

    variant = resolve(name, version, namespace=settings.vendor_namespace)
    if variant is None:
        _console.print(f"[yellow]{name} is not a supported package; its URL is left unchanged.[/yellow]")
        return

    try:
        url = download_url(variant, installer.env)
    except MissingEnvError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    if not show_secrets:
        url = mask_secrets(url, secret_values(variant, installer.env))
    _console.print(build_resolution_table(name, variant, url))


@app.command(name="rewrite-dist")
def rewrite_dist_command(
    url: str = typer.Argument(..., help="Current dist URL."),
    name: str = typer.Argument(..., help="Package name."),
    version: str = typer.Argument(..., help="Package version."),
    unique_id: str = typer.Option("", "--unique-id", help="Host unique name (defaults to <name>-<version>)."),
) -> None:
    """Print the dist URL with its cache-busting fragment."""

    identity = PackageIdentity(name=name, version=version, dist_url=url, unique_id=unique_id)
    typer.echo(rewrite_dist_url(url, identity))


@app.command()
def handle(
    input_path: Path | None = typer.Option(None, "--input", "-i", help="Read events from a file instead of stdin."),
) -> None:
    """Process host events as JSON lines and write one JSON result per event."""

    installer = ProPluginsInstaller.from_settings()

    if input_path is not None:
        lines = input_path.read_text(encoding="utf-8").splitlines()
    else:
        lines = sys.stdin

    for result in handle_stream(installer, lines):
        typer.echo(result.model_dump_json(exclude_none=True))


@app.command()
def download(
    name: str = typer.Argument(..., help="Package name."),
    version: str = typer.Argument(..., help="Package version."),
    output: Path = typer.Option(..., "--output", "-o", help="Destination zip file."),
) -> None:
    """Resolve a package and download it from the vendor."""

    settings = load_settings()
    installer = ProPluginsInstaller.from_settings(settings)

    variant = resolve(name, version, namespace=settings.vendor_namespace)
    if variant is None:
        _err_console.print(f"[red]{name} is not a supported package.[/red]")
        raise typer.Exit(code=1)

    try:
        url = download_url(variant, installer.env)
        path = download_package(url, output, settings=settings)
    except (MissingEnvError, DownloadError) as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    _console.print(f"[green]Downloaded {name} {version} to:[/green] {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
