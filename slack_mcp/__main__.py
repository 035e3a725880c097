#!/usr/bin/env python3
"""
Entry point: python -m slack_mcp (or the slack-mcp-server console script).
"""

import sys

import uvicorn

from .config import Config
from .exceptions import ConfigurationError
from .log_manager import configure_logging, get_logger
from .server import create_app


def main() -> int:
    configure_logging()
    logger = get_logger('server')

    try:
        config = Config.from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level="info")
    return 0


if __name__ == "__main__":
    sys.exit(main())
