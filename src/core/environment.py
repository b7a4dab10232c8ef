"""Lectura de secretos (license keys) desde el entorno.

Reglas:
- El entorno del proceso tiene prioridad sobre el `.env`.
- El entorno se consulta en cada `get`, nunca se cachea entre resoluciones.
- El `.env` es best-effort: si no se puede leer, se continúa sin él.
- Nunca se modifica `os.environ`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values, set_key

from core.errors import MalformedEnvFileError, MissingEnvError

logger = logging.getLogger(__name__)

ENV_FILENAME = ".env"


def load_env_file(path: Path) -> dict[str, str]:
    """Parsea un fichero `.env` y devuelve solo las claves con valor.

    Lanza `MalformedEnvFileError` si el fichero no se puede leer.
    """

    try:
        raw = dotenv_values(path, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise MalformedEnvFileError(path, str(exc)) from exc

    return {key: value for key, value in raw.items() if key and value is not None}


def write_env_values(directory: Path, values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en `<directory>/.env` conservando el resto."""

    env_path = directory / ENV_FILENAME
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(exist_ok=True)
    for key in sorted(values):
        if values[key]:
            set_key(env_path, key, values[key])
    return env_path


class EnvironmentSource:
    """Lookup de solo lectura sobre el entorno del proceso + `.env` opcional."""

    def __init__(
        self,
        file_values: Mapping[str, str] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._file_values = dict(file_values or {})
        self._environ = os.environ if environ is None else environ

    @classmethod
    def from_directory(
        cls,
        directory: Path,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> "EnvironmentSource":
        """Construye la fuente leyendo `<directory>/.env` si existe."""

        env_path = directory / ENV_FILENAME
        file_values: dict[str, str] = {}
        if env_path.is_file():
            try:
                file_values = load_env_file(env_path)
            except MalformedEnvFileError as exc:
                logger.warning("%s; continuing with the process environment only", exc)
            else:
                logger.debug("Loaded %d value(s) from %s", len(file_values), env_path)
        return cls(file_values, environ=environ)

    def _lookup(self, key: str) -> str | None:
        if key in self._environ:
            return self._environ[key]
        return self._file_values.get(key)

    def get(self, key: str) -> str:
        """Devuelve el valor de `key` o lanza `MissingEnvError(key)`."""

        value = self._lookup(key)
        if value is None or not value.strip():
            raise MissingEnvError(key)
        return value.strip()

    def has(self, key: str) -> bool:
        try:
            self.get(key)
        except MissingEnvError:
            return False
        return True
