"""
Web server entry point.

Run this as a separate process: python -m app.server
"""

import uvicorn

from app.config import settings


def run() -> None:
    """Serve the API with uvicorn."""
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
