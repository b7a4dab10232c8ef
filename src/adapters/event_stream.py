"""Adaptador de host por stream JSON (una línea = un evento).

Permite conectar cualquier package manager que sepa emitir sus eventos como
JSON: el host escribe un evento por línea y lee un resultado por línea.

Entrada:
    {"event": "pre-package-install", "package": {...}}
    {"event": "pre-package-update", "operation": {"job_type": "update",
        "initial_package": {...}, "target_package": {...}}}
    {"event": "pre-file-download", "url": "...", "package": {...}}

Salida:
    {"event": ..., "package": ..., "dist_url"?: ..., "processed_url"?: ..., "error"?: ...}
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, Iterator

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.models import PackageIdentity
from core.errors import MissingEnvError
from core.services.installer import PRE_FILE_DOWNLOAD, SUBSCRIBED_EVENTS, ProPluginsInstaller

logger = logging.getLogger(__name__)


class OperationPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    job_type: str = Field(default="install")
    package: PackageIdentity | None = None
    initial_package: PackageIdentity | None = None
    target_package: PackageIdentity | None = None

    def selected_package(self) -> PackageIdentity | None:
        """En una actualización, el paquete que se instala es el destino."""

        if self.job_type == "update":
            return self.target_package
        return self.package


class EventPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    event: str = Field(..., min_length=1)
    package: PackageIdentity | None = None
    operation: OperationPayload | None = None
    url: str | None = None

    def selected_package(self) -> PackageIdentity | None:
        if self.package is not None:
            return self.package
        if self.operation is not None:
            return self.operation.selected_package()
        return None


class EventResult(BaseModel):
    event: str
    package: str | None = None
    dist_url: str | None = None
    processed_url: str | None = None
    error: str | None = None


class StreamInstallEvent:
    """`InstallEventPort` sobre un evento leído del stream."""

    def __init__(self, package: PackageIdentity) -> None:
        self._package = package
        self.dist_url: str | None = None

    def package(self) -> PackageIdentity:
        return self._package

    def set_dist_url(self, url: str) -> None:
        self.dist_url = url


class StreamDownloadEvent:
    """`DownloadEventPort` sobre un evento leído del stream."""

    def __init__(self, url: str, package: PackageIdentity | None) -> None:
        self._url = url
        self._package = package
        self.processed_url: str | None = None

    def requested_url(self) -> str:
        return self._url

    def associated_package(self) -> PackageIdentity | None:
        return self._package

    def set_processed_url(self, url: str) -> None:
        self.processed_url = url


def handle_event(installer: ProPluginsInstaller, payload: EventPayload) -> EventResult:
    """Ejecuta un evento y devuelve su resultado. Los errores quedan en `error`."""

    package = payload.selected_package()
    result = EventResult(event=payload.event, package=package.name if package else None)

    if payload.event not in SUBSCRIBED_EVENTS:
        result.error = f"Unsupported event: {payload.event}"
        logger.warning("%s: %s", result.package or payload.event, result.error)
        return result

    try:
        if payload.event == PRE_FILE_DOWNLOAD:
            download_event = StreamDownloadEvent(payload.url or "", package)
            installer.dispatch(payload.event, download_event)
            result.processed_url = download_event.processed_url
        else:
            if package is None:
                result.error = "event has no package"
                return result
            install_event = StreamInstallEvent(package)
            installer.dispatch(payload.event, install_event)
            result.dist_url = install_event.dist_url
    except (MissingEnvError, ValueError) as exc:
        logger.warning("%s: %s", result.package or payload.event, exc)
        result.error = str(exc)
    return result


def parse_event(line: str) -> EventPayload:
    return EventPayload.model_validate(json.loads(line))


def handle_stream(installer: ProPluginsInstaller, lines: Iterable[str]) -> Iterator[EventResult]:
    """Procesa cada línea de forma independiente; un evento inválido no corta el stream."""

    for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            payload = parse_event(line)
        except ValueError as exc:  # JSONDecodeError y ValidationError
            logger.warning("Invalid event: %s", exc)
            yield EventResult(event="invalid", error=f"invalid event: {exc}")
            continue
        yield handle_event(installer, payload)
