"""
LinkShelf Backend — Server Entry Point
========================================

Usage:
    python -m linkshelf
    linkshelf            (console script installed by pip)

Binds to BACKEND_HOST and PORT (or BACKEND_PORT) from the environment.
"""

import uvicorn

from linkshelf.config import settings


def main() -> None:
    uvicorn.run(
        "linkshelf.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
