"""Script de ejecución.

Permite ejecutar la CLI con `python -m main` durante desarrollo, además del
script `wp-pro-plugins` instalado por el paquete.
"""

from __future__ import annotations

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
