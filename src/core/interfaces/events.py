"""Contratos de los eventos del host (package manager).

Protocol en vez de herencia: el adaptador del host solo necesita exponer estos
métodos. El Core lee el paquete y devuelve URLs como strings planos, nunca
objetos de request del host.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import PackageIdentity


@runtime_checkable
class InstallEventPort(Protocol):
    """Evento de instalación/actualización de un paquete."""

    def package(self) -> PackageIdentity:
        """Paquete afectado; en una actualización, el paquete destino."""

        ...

    def set_dist_url(self, url: str) -> None:
        """Persiste la dist URL parcheada en el estado del lock."""

        ...


@runtime_checkable
class DownloadEventPort(Protocol):
    """Evento previo a la descarga de un fichero."""

    def requested_url(self) -> str:
        ...

    def associated_package(self) -> PackageIdentity | None:
        """Paquete asociado a la descarga, si el host lo conoce."""

        ...

    def set_processed_url(self, url: str) -> None:
        """URL que el host usará para esta descarga concreta."""

        ...
