"""
FastAPI dependencies for dependency injection.

The engine is built once by the app factory and kept on app.state, so
each app (and each test client) gets its own isolated store.
"""

from fastapi import Request

from quotalink_app.services.shortener_engine import ShortenerEngine


def get_engine(request: Request) -> ShortenerEngine:
    """
    Get the ShortenerEngine bound to this application.

    Routes depend on the engine only; the store, strategy and
    notifier behind it are wired in create_app().
    """
    return request.app.state.engine
