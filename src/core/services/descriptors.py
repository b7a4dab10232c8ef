"""Tabla de descriptores: variante de plugin -> URL de descarga del vendor.

Cada descriptor declara:
- las variables de entorno requeridas (nombre lógico -> nombre de la env var),
- la URL base del vendor,
- la plantilla de query string.

Las plantillas admiten `{version}`, `{slug}`, `{item_name}`, `{env_prefix}` y
los nombres lógicos de los secretos (`{key}`, `{site_url}`).

Variables de entorno por familia:
- ACF Pro: `ACF_PRO_KEY`
- Polylang Pro: `POLYLANG_PRO_KEY`, `POLYLANG_PRO_URL`
- Gravity Forms (+ add-ons): `GRAVITY_FORMS_KEY`
- WP All Import Pro y add-ons `wpai-*`: `WP_ALL_IMPORT_PRO_KEY`, `WP_ALL_IMPORT_PRO_URL`
- WP All Export Pro: `WP_ALL_EXPORT_PRO_KEY`, `WP_ALL_EXPORT_PRO_URL`
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote_plus, urlencode

from core.domain.models import PluginFamily, PluginVariant
from core.environment import EnvironmentSource


@dataclass(frozen=True)
class Descriptor:
    family: PluginFamily
    base_url: str
    env_keys: tuple[tuple[str, str], ...]
    query: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class WpaiProduct:
    item_name: str
    env_prefix: str


WPAI_IMPORT_PREFIX = "WP_ALL_IMPORT_PRO"
WPAI_EXPORT_PREFIX = "WP_ALL_EXPORT_PRO"

WPAI_PRODUCTS: dict[str, WpaiProduct] = {
    "wp-all-import-pro": WpaiProduct("WP All Import", WPAI_IMPORT_PREFIX),
    "wp-all-export-pro": WpaiProduct("WP All Export", WPAI_EXPORT_PREFIX),
    "wpai-acf-add-on": WpaiProduct("ACF Add-On", WPAI_IMPORT_PREFIX),
    "wpai-linkcloak-add-on": WpaiProduct("Link Cloaking Add-On", WPAI_IMPORT_PREFIX),
    "wpai-user-add-on": WpaiProduct("User Import Add-On", WPAI_IMPORT_PREFIX),
    "wpai-woocommerce-add-on": WpaiProduct("WooCommerce Import Add-On", WPAI_IMPORT_PREFIX),
}

_EDD_QUERY = (
    ("edd_action", "get_version"),
    ("license", "{key}"),
    ("item_name", "{item_name}"),
    ("url", "{site_url}"),
    ("version", "{version}"),
)

DESCRIPTORS: dict[PluginFamily, Descriptor] = {
    PluginFamily.ACF: Descriptor(
        family=PluginFamily.ACF,
        base_url="https://connect.advancedcustomfields.com/index.php",
        env_keys=(("key", "ACF_PRO_KEY"),),
        query=(("p", "pro"), ("a", "download"), ("k", "{key}"), ("t", "{version}")),
    ),
    PluginFamily.POLYLANG_PRO: Descriptor(
        family=PluginFamily.POLYLANG_PRO,
        base_url="https://polylang.pro",
        env_keys=(("key", "POLYLANG_PRO_KEY"), ("site_url", "POLYLANG_PRO_URL")),
        query=_EDD_QUERY,
    ),
    PluginFamily.GRAVITY_FORMS: Descriptor(
        family=PluginFamily.GRAVITY_FORMS,
        base_url="https://www.gravityhelp.com/wp-content/plugins/gravitymanager/api.php",
        env_keys=(("key", "GRAVITY_FORMS_KEY"),),
        query=(("op", "get_plugin"), ("slug", "{slug}"), ("key", "{key}"), ("version", "{version}")),
    ),
    PluginFamily.WPAI_PRO: Descriptor(
        family=PluginFamily.WPAI_PRO,
        base_url="https://www.wpallimport.com",
        env_keys=(("key", "{env_prefix}_KEY"), ("site_url", "{env_prefix}_URL")),
        query=_EDD_QUERY,
    ),
}


def wpai_product(slug: str) -> WpaiProduct:
    """Producto WP All Import/Export para `slug`; add-ons desconocidos usan la licencia de Import."""

    return WPAI_PRODUCTS.get(slug) or WpaiProduct(slug, WPAI_IMPORT_PREFIX)


def _template_context(variant: PluginVariant) -> dict[str, str]:
    slug = variant.slug or ""
    context = {
        "version": variant.version,
        "slug": slug,
        "item_name": variant.family.label(),
        "env_prefix": "",
    }
    if variant.family is PluginFamily.WPAI_PRO:
        product = wpai_product(slug)
        context["item_name"] = product.item_name
        context["env_prefix"] = product.env_prefix
    return context


def get_descriptor(variant: PluginVariant) -> Descriptor:
    return DESCRIPTORS[variant.family]


def required_env_keys(variant: PluginVariant) -> list[str]:
    """Nombres de las env vars que necesita `variant`, en orden de validación."""

    context = _template_context(variant)
    return [template.format(**context) for _, template in get_descriptor(variant).env_keys]


def download_url(variant: PluginVariant, env: EnvironmentSource) -> str:
    """Construye la URL autenticada del vendor.

    Valida todas las env vars antes de construir nada; lanza
    `MissingEnvError` con el nombre exacto de la primera que falte.
    """

    descriptor = get_descriptor(variant)
    context = _template_context(variant)

    secrets: dict[str, str] = {}
    for logical_name, template in descriptor.env_keys:
        secrets[logical_name] = env.get(template.format(**context))
    context.update(secrets)

    params = [(param, template.format(**context)) for param, template in descriptor.query]
    return f"{descriptor.base_url}?{urlencode(params)}"


def secret_values(variant: PluginVariant, env: EnvironmentSource) -> list[str]:
    """Valores de los secretos presentes, para enmascararlos en logs/salida."""

    return [env.get(key) for key in required_env_keys(variant) if env.has(key)]


def mask_secrets(text: str, secrets: list[str], mask: str = "***") -> str:
    """Sustituye cada secreto (crudo y url-encoded) por `mask`."""

    for secret in sorted(secrets, key=len, reverse=True):
        if not secret:
            continue
        text = text.replace(quote_plus(secret), mask).replace(secret, mask)
    return text
