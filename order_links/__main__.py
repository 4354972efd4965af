"""Run the order tracking links web service."""

import logging
import sys

from aiohttp import web

from . import create_app
from .config import load_config
from .const import SERVICE_NAME
from .exceptions import InvalidConfig

_LOGGER = logging.getLogger(__name__)


def main() -> int:
    """Load configuration from the environment and serve until interrupted."""
    try:
        config = load_config()
    except InvalidConfig as err:
        logging.basicConfig(level=logging.ERROR)
        _LOGGER.error("%s", err)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGER.info("%s starting on http://%s:%d", SERVICE_NAME, config.host, config.port)
    web.run_app(create_app(config), host=config.host, port=config.port, print=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
