"""Descarga del zip de un plugin a partir de la URL del vendor.

Hace de host mínimo fuera de Composer. Los vendors basados en Easy Digital
Downloads (Polylang, WP All Import) responden a `edd_action=get_version` con un
JSON cuyo `download_link` es el zip real; se sigue ese enlace una sola vez.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from core.config import AppSettings
from core.errors import DownloadError
from adapters.http_client import build_client

logger = logging.getLogger(__name__)


def _get(client: httpx.Client, url: str) -> httpx.Response:
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DownloadError(url, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise DownloadError(url, exc.__class__.__name__) from exc
    return response


def _is_json(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower() == "application/json"


def extract_download_link(response: httpx.Response) -> str | None:
    """`download_link` de una respuesta EDD, o `None` si no es JSON."""

    if not _is_json(response):
        return None
    try:
        payload = response.json()
    except ValueError as exc:
        raise DownloadError(str(response.url), "invalid JSON from vendor") from exc
    link = payload.get("download_link") if isinstance(payload, dict) else None
    if not isinstance(link, str) or not link.strip():
        raise DownloadError(str(response.url), "vendor response has no download link")
    return link.strip()


def fetch_package(client: httpx.Client, url: str) -> bytes:
    response = _get(client, url)
    link = extract_download_link(response)
    if link is not None:
        logger.debug("Following vendor download link")
        response = _get(client, link)
        if _is_json(response):
            raise DownloadError(link, "vendor returned JSON instead of a package")
    return response.content


def download_package(
    url: str,
    output_path: Path,
    *,
    client: httpx.Client | None = None,
    settings: AppSettings | None = None,
) -> Path:
    """Descarga `url` a `output_path` y devuelve la ruta escrita."""

    owns_client = client is None
    client = client or build_client(settings)
    try:
        content = fetch_package(client, url)
    finally:
        if owns_client:
            client.close()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(content)
    logger.info("Wrote %d bytes to %s", len(content), output_path)
    return output_path
