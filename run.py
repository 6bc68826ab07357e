#!/usr/bin/env python
"""Start the DevToolbox HTTP service with the configured host and port."""

import structlog
import uvicorn

from devtoolbox.config import settings

logger = structlog.get_logger()


def main() -> None:
    settings.setup_logging()
    logger.info(
        "devtoolbox_launch",
        url=f"http://{settings.api_host}:{settings.api_port}",
        config=str(settings.config_path),
    )
    uvicorn.run(
        "devtoolbox.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
