import logging
import sys


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Install a single STDOUT handler on the root logger. Existing root handlers
    are removed first so calling this twice does not duplicate output.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)


def set_aiohttp_logging_level(level: int = logging.WARNING) -> None:
    """Quiet aiohttp's access/client loggers so pipeline logs stay readable."""
    for name in ("aiohttp.access", "aiohttp.client", "aiohttp.internal"):
        logging.getLogger(name).setLevel(level)
