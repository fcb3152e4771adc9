"""Entry point for the ClassCart API server.

Starts the FastAPI application under uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``3000``); the database is configured through ``MONGODB_URI`` and
``DB_NAME``.

Usage:
    python run.py
"""
import uvicorn

from classcart_api.app.core.config import settings


def main() -> None:
    """Serve the API until interrupted.

    If the database cannot be reached at startup the application's
    startup hook fails and uvicorn exits with a non-zero status.
    """
    uvicorn.run(
        "classcart_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
