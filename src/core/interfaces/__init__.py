"""Interfaces/abstracciones del Core.

- Define contratos (Protocol) que implementan los adaptadores del host.
- El Core depende de estas abstracciones, nunca del package manager concreto.
"""

from core.interfaces.events import DownloadEventPort, InstallEventPort

__all__ = ["DownloadEventPort", "InstallEventPort"]
