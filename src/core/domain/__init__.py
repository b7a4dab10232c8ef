"""Modelos y entidades del dominio.

- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni el host: solo paquetes, variantes y URLs.
"""

from core.domain.models import PackageIdentity, PluginFamily, PluginVariant, ResolvedUrl

__all__ = [
    "PackageIdentity",
    "PluginFamily",
    "PluginVariant",
    "ResolvedUrl",
]
