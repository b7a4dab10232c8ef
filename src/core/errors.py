"""Excepciones del Core.

Un paquete no soportado NO es un error: el resolver devuelve `None`.
"""

from __future__ import annotations

from pathlib import Path


class WpProPluginsError(Exception):
    """Base de todas las excepciones de la herramienta."""


class MissingEnvError(WpProPluginsError):
    """Una variable de entorno requerida no existe o está vacía."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Environment variable '{key}' is not set.")


class MalformedEnvFileError(WpProPluginsError):
    """El `.env` existe pero no se puede leer o parsear."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Could not load env file '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DownloadError(WpProPluginsError):
    """Fallo HTTP al descargar el paquete del vendor."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Download failed ({reason})")
