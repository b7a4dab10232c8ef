"""Modelos del dominio (Pydantic v2).

Describen *qué* se resuelve (paquete, variante de plugin, URL resultante), no
*cómo* se descarga. Todos son inmutables: se construyen por resolución y no se
comparten entre paquetes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

_HOST_KEYS = {
    "prettyVersion": "pretty_version",
    "distUrl": "dist_url",
    "uniqueName": "unique_id",
    "uniqueId": "unique_id",
}


class PackageIdentity(BaseModel):
    """Un paquete tal como lo observa el host en un evento de instalación."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre completo del paquete (p.ej. 'junaidbhura/polylang-pro').",
    )
    version: str = Field(
        ...,
        min_length=1,
        description="Versión normalizada del paquete.",
    )
    pretty_version: str = Field(
        default="",
        description="Versión tal como la escribe el usuario; es la que viaja a la URL del vendor.",
    )
    dist_url: str | None = Field(
        default=None,
        description="URL de distribución persistida en el lock file.",
    )
    unique_id: str = Field(
        default="",
        description="Identificador estable por paquete+versión (unique name del host).",
    )

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        # Payloads del host en camelCase (prettyVersion, distUrl, uniqueName).
        for host_key, field_name in _HOST_KEYS.items():
            if host_key in data and field_name not in data:
                data[field_name] = data.pop(host_key)
        name = data.get("name")
        version = data.get("version")
        if version and not data.get("pretty_version"):
            data["pretty_version"] = version
        if name and version and not data.get("unique_id"):
            data["unique_id"] = f"{name}-{version}"
        return data


class PluginFamily(str, Enum):
    """Familias de plugins comerciales soportadas."""

    ACF = "acf"
    POLYLANG_PRO = "polylang-pro"
    GRAVITY_FORMS = "gravity-forms"
    WPAI_PRO = "wpai-pro"

    def label(self) -> str:
        return _FAMILY_LABELS[self]


_FAMILY_LABELS = {
    PluginFamily.ACF: "Advanced Custom Fields Pro",
    PluginFamily.POLYLANG_PRO: "Polylang Pro",
    PluginFamily.GRAVITY_FORMS: "Gravity Forms",
    PluginFamily.WPAI_PRO: "WP All Import / Export Pro",
}


class PluginVariant(BaseModel):
    """Resultado de resolver un nombre de paquete soportado."""

    model_config = ConfigDict(frozen=True)

    family: PluginFamily
    version: str = Field(
        ...,
        description="Versión que se interpola en la URL del vendor.",
    )
    slug: str | None = Field(
        default=None,
        description="Slug del producto (solo Gravity Forms y WP All Import/Export).",
    )


class ResolvedUrl(BaseModel):
    """URL original + reescrita.

    `rewritten is None` significa "no aplica reescritura" (paquete no soportado),
    distinto de una reescritura que produce la misma URL.
    """

    model_config = ConfigDict(frozen=True)

    original: str
    rewritten: str | None = None

    @property
    def is_rewritten(self) -> bool:
        return self.rewritten is not None

    @property
    def effective(self) -> str:
        return self.original if self.rewritten is None else self.rewritten
