import logging
import sys
import structlog
from doorcam.core.config import get_settings


def setup_logging():
    settings = get_settings()
    level = logging.getLevelName(settings.log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
    )

    # Every line carries the service name so multi-camera logs can be split
    structlog.contextvars.bind_contextvars(service=settings.service_name)


def get_logger(**initial_values):
    return structlog.get_logger(**initial_values)
