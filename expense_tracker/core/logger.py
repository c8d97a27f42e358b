import logging
import sys
from colorlog import ColoredFormatter
from expense_tracker.core.settings import settings

LOG_FORMAT = (
    "%(log_color)s%(asctime)s %(levelname)-8s "
    "%(reset)s%(purple)s%(name)s%(reset)s | %(message)s"
)

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def build_handler(stream=None) -> logging.Handler:
    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        ColoredFormatter(
            LOG_FORMAT,
            datefmt="%Y-%m-%dT%H:%M:%S",
            reset=True,
            log_colors=LOG_COLORS,
            stream=stream,
            # deployed environments ship logs to a collector, not a terminal
            no_color=settings.APP_ENV in ("staging", "prod"),
        )
    )
    return handler


logger = logging.getLogger("expense_tracker")
logger.setLevel(settings.LOG_LEVEL.upper())
if not logger.handlers:
    logger.addHandler(build_handler())
logger.propagate = False
