"""Reescritura de URLs de un paquete.

El host distingue dos URLs:
- dist URL: persistida en el lock file; solo se le añade un fragmento
  `#<sha1(unique_id)>` para que la caché no confunda versiones.
- processed URL: la que se usa en la descarga actual; se sustituye entera por
  la URL del vendor.

Ninguna función hace I/O ni guarda estado: devuelven valores nuevos que el
adaptador del host aplica.
"""

from __future__ import annotations

import hashlib

from core.config import DEFAULT_VENDOR_NAMESPACE
from core.domain.models import PackageIdentity, ResolvedUrl
from core.environment import EnvironmentSource
from core.services.descriptors import download_url
from core.services.resolver import resolve


def cache_busting_token(identity: PackageIdentity) -> str:
    return hashlib.sha1(identity.unique_id.encode("utf-8")).hexdigest()  # nosec


def rewrite_dist_url(url: str | None, identity: PackageIdentity) -> str | None:
    """Añade `#<token>` a la dist URL si aún no lo lleva (idempotente)."""

    if not url:
        return url
    token = cache_busting_token(identity)
    if token in url:
        return url
    return f"{url}#{token}"


def resolve_url(
    url: str,
    identity: PackageIdentity,
    env: EnvironmentSource,
    *,
    namespace: str = DEFAULT_VENDOR_NAMESPACE,
) -> ResolvedUrl:
    """Calcula la URL del vendor para `identity` sin tocar la dist URL."""

    variant = resolve(identity.name, identity.pretty_version, namespace=namespace)
    if variant is None:
        return ResolvedUrl(original=url)
    return ResolvedUrl(original=url, rewritten=download_url(variant, env))


def rewrite_processed_url(
    url: str,
    identity: PackageIdentity,
    env: EnvironmentSource,
    *,
    namespace: str = DEFAULT_VENDOR_NAMESPACE,
) -> str:
    """URL del vendor para paquetes soportados; `url` sin cambios en otro caso."""

    return resolve_url(url, identity, env, namespace=namespace).effective
