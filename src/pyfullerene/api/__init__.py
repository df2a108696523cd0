"""FastAPI transport layer for pyfullerene.

Models, service adapters, and routes; no domain logic.

The ``create_app()`` factory is lazily imported so that
``import pyfullerene.api`` never forces a FastAPI dependency.
"""


def create_app(service=None):
    """Deferred import of the FastAPI application factory."""
    from pyfullerene.api.app import create_app as _create_app

    return _create_app(service)
