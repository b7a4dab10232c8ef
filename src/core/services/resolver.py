"""Resolución nombre de paquete -> variante de plugin.

Las reglas son una tabla declarativa evaluada en orden; añadir un vendor es
añadir una fila. Solo hay match exacto o por prefijo, sensible a mayúsculas.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config import DEFAULT_VENDOR_NAMESPACE
from core.domain.models import PluginFamily, PluginVariant


@dataclass(frozen=True)
class MatchRule:
    """Una fila de la tabla de resolución."""

    pattern: str
    family: PluginFamily
    prefix: bool = False
    with_slug: bool = False

    def matches(self, name: str) -> bool:
        if self.prefix:
            return name.startswith(self.pattern)
        return name == self.pattern


# El orden importa: los nombres exactos van antes que los prefijos.
MATCH_RULES: tuple[MatchRule, ...] = (
    MatchRule("advanced-custom-fields-pro", PluginFamily.ACF),
    MatchRule("polylang-pro", PluginFamily.POLYLANG_PRO),
    MatchRule("wp-all-import-pro", PluginFamily.WPAI_PRO, with_slug=True),
    MatchRule("wp-all-export-pro", PluginFamily.WPAI_PRO, with_slug=True),
    MatchRule("gravityforms", PluginFamily.GRAVITY_FORMS, prefix=True, with_slug=True),
    MatchRule("wpai-", PluginFamily.WPAI_PRO, prefix=True, with_slug=True),
)


def strip_namespace(name: str, namespace: str = DEFAULT_VENDOR_NAMESPACE) -> str | None:
    """Quita el prefijo `<namespace>/`.

    Devuelve `None` si el nombre pertenece a otro namespace. Los nombres sin
    namespace se aceptan tal cual.
    """

    prefix = namespace.rstrip("/") + "/"
    if name.startswith(prefix):
        return name[len(prefix) :]
    if "/" in name:
        return None
    return name


def match_rule(name: str, rules: tuple[MatchRule, ...] = MATCH_RULES) -> MatchRule | None:
    for rule in rules:
        if rule.matches(name):
            return rule
    return None


def resolve(
    name: str,
    version: str,
    *,
    namespace: str = DEFAULT_VENDOR_NAMESPACE,
    rules: tuple[MatchRule, ...] = MATCH_RULES,
) -> PluginVariant | None:
    """Resuelve `name` a una `PluginVariant`, o `None` si no está soportado."""

    short_name = strip_namespace(name, namespace)
    if not short_name:
        return None

    rule = match_rule(short_name, rules)
    if rule is None:
        return None

    return PluginVariant(
        family=rule.family,
        version=version,
        slug=short_name if rule.with_slug else None,
    )

