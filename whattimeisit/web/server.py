"""Run the web application under uvicorn."""
from __future__ import annotations

import uvicorn

from whattimeisit.config.settings import get_settings
from whattimeisit.utils.logging import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(level=settings.log_level)
    uvicorn.run(
        "whattimeisit.web.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    main()
