"""Adaptadores del host: stream de eventos JSON y descargas HTTP."""
