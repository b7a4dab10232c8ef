"""Configuración del Core.

- Centraliza la configuración propia de la herramienta (pydantic-settings).
- Las license keys de los vendors NO viven aquí: se leen en el momento de la
  resolución a través de `core.environment.EnvironmentSource`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import MalformedEnvFileError

logger = logging.getLogger(__name__)

DEFAULT_VENDOR_NAMESPACE = "junaidbhura"
SETTINGS_ENV_FILE = ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="WP_PRO_PLUGINS_",
        extra="ignore",
        case_sensitive=False,
        env_file=SETTINGS_ENV_FILE,
        env_file_encoding="utf-8",
    )

    vendor_namespace: str = Field(
        default=DEFAULT_VENDOR_NAMESPACE,
        min_length=1,
        description="Namespace Composer bajo el que se publican los paquetes (p.ej. 'junaidbhura').",
    )
    env_file_dir: Path | None = Field(
        default=None,
        description="Directorio donde buscar el `.env` con las license keys (por defecto, el cwd).",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request al descargar (segundos).",
    )
    user_agent: str = Field(
        default="wp-pro-plugins/0.1",
        min_length=1,
        description="User-Agent para las descargas.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING...).",
    )

    def resolved_env_file_dir(self) -> Path:
        return self.env_file_dir or Path.cwd()


def load_settings() -> AppSettings:
    """Carga `AppSettings` sin abortar por un `.env` ilegible.

    Si el `.env` del cwd no se puede leer, se avisa y se usan solo las
    variables de entorno. Los valores inválidos siguen lanzando `ValidationError`.
    """

    try:
        return AppSettings()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(
            "%s; using process environment settings only",
            MalformedEnvFileError(Path(SETTINGS_ENV_FILE), str(exc)),
        )
        return AppSettings(_env_file=None)
