"""Componentes de UI para CLI (Rich).

Separa los detalles visuales de la lógica de los comandos.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from core.domain.models import PluginVariant


def configure_logging(level: str, console: Console) -> None:
    """Envía el logging de la herramienta a `console` vía RichHandler."""

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def build_resolution_table(package_name: str, variant: PluginVariant, url: str) -> Table:
    table = Table(title=package_name, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Family", variant.family.label())
    table.add_row("Version", variant.version)
    if variant.slug:
        table.add_row("Slug", variant.slug)
    table.add_row("Download URL", url)
    return table


def build_env_table(title: str) -> Table:
    """Tabla de comprobación de license keys (doctor)."""

    table = Table(title=title)
    table.add_column("Product", style="bright_green", no_wrap=True)
    table.add_column("Variable", style="cyan")
    table.add_column("Status", style="white")
    return table
