"""Manejadores de eventos del host.

Une resolver, descriptores y rewriter con los puertos de
`core.interfaces.events`. No guarda ninguna URL entre eventos: el manejador de
pre-descarga vuelve a resolver a partir del paquete asociado al evento.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.config import DEFAULT_VENDOR_NAMESPACE, AppSettings, load_settings
from core.environment import EnvironmentSource
from core.interfaces.events import DownloadEventPort, InstallEventPort
from core.services.descriptors import required_env_keys
from core.services.resolver import resolve
from core.services.url_rewriter import resolve_url, rewrite_dist_url

logger = logging.getLogger(__name__)

PRE_PACKAGE_INSTALL = "pre-package-install"
PRE_PACKAGE_UPDATE = "pre-package-update"
PRE_FILE_DOWNLOAD = "pre-file-download"

# evento -> (método, prioridad)
SUBSCRIBED_EVENTS: dict[str, tuple[str, int]] = {
    PRE_PACKAGE_INSTALL: ("on_package_event", 0),
    PRE_PACKAGE_UPDATE: ("on_package_event", 0),
    PRE_FILE_DOWNLOAD: ("on_pre_file_download", -1),
}


@dataclass
class ProPluginsInstaller:
    env: EnvironmentSource
    namespace: str = DEFAULT_VENDOR_NAMESPACE

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "ProPluginsInstaller":
        """Crea el instalador cargando el `.env` del directorio configurado."""

        settings = settings or load_settings()
        env = EnvironmentSource.from_directory(settings.resolved_env_file_dir())
        return cls(env=env, namespace=settings.vendor_namespace)

    def on_package_event(self, event: InstallEventPort) -> str | None:
        """Añade el fragmento anti-caché a la dist URL de un paquete soportado.

        Valida también los secretos del vendor, de modo que una license key
        ausente falla en el evento de instalación (`MissingEnvError`).
        Devuelve la dist URL resultante, o `None` si el paquete no aplica.
        """

        package = event.package()
        variant = resolve(package.name, package.pretty_version, namespace=self.namespace)
        if variant is None:
            logger.debug("Skipping unsupported package %s", package.name)
            return None

        for key in required_env_keys(variant):
            self.env.get(key)

        dist_url = rewrite_dist_url(package.dist_url, package)
        if dist_url is not None and dist_url != package.dist_url:
            event.set_dist_url(dist_url)
            logger.debug("Cache-busted dist URL for %s", package.name)
        return dist_url

    def on_pre_file_download(self, event: DownloadEventPort) -> str | None:
        """Sustituye la URL de descarga por la del vendor.

        Devuelve la nueva URL, o `None` si la descarga no es de un paquete soportado.
        """

        package = event.associated_package()
        if package is None:
            return None

        resolved = resolve_url(event.requested_url(), package, self.env, namespace=self.namespace)
        if resolved.rewritten is None:
            return None

        event.set_processed_url(resolved.rewritten)
        logger.info("Using vendor download URL for %s %s", package.name, package.pretty_version)
        return resolved.rewritten

    def dispatch(self, event_name: str, event: InstallEventPort | DownloadEventPort) -> str | None:
        """Despacha `event` al manejador suscrito a `event_name`."""

        try:
            method_name, _priority = SUBSCRIBED_EVENTS[event_name]
        except KeyError:
            raise ValueError(f"Unsupported event: {event_name}") from None
        return getattr(self, method_name)(event)
