"""Run the Pizza Store API with uvicorn: ``python -m pizzastore``."""

import logging
import sys

import uvicorn

from pizzastore.config import get_settings
from pizzastore.infrastructure.observability import setup_logging

logger = logging.getLogger("pizzastore")


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.log_file)
    logger.info(f"Starting Pizza Store API on {settings.host}:{settings.port}")
    try:
        # log_config=None keeps the handlers installed by setup_logging
        uvicorn.run(
            "pizzastore.main:app",
            host=settings.host,
            port=settings.port,
            log_config=None,
        )
    except SystemExit as e:
        # uvicorn exits with status 3 when the lifespan startup fails
        if e.code in (None, 0):
            return 0
        logger.critical(f"Pizza Store API failed to start (uvicorn exit {e.code})")
        return 1
    except Exception:
        logger.critical("Pizza Store API terminated unexpectedly", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
