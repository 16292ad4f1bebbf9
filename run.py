"""Entry point for serving the Product Rating API.

Host and port come from ``Settings`` (``HOST`` and ``PORT`` environment
variables, defaulting to ``0.0.0.0:8000``).

Usage:
    python run.py
"""
import uvicorn

from product_rating_api.app.core.config import settings


def main() -> None:
    """Serve the application with Uvicorn."""
    uvicorn.run(
        "product_rating_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
