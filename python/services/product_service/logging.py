"""
Logging setup for the product service.

Every record is stamped with the service name so lines from several
services can share one stream. Request bodies are never logged.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(service)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
QUIET_LOGGERS = ("uvicorn.access",)


class ServiceNameFilter(logging.Filter):
    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        return True


def configure_logging(level: str = "INFO", service: str = "product-service") -> None:
    """Route all logging to stdout, tagged with ``service``.

    Unknown level names fall back to INFO.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    handler.addFilter(ServiceNameFilter(service))

    level_no = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level_no if isinstance(level_no, int) else logging.INFO,
        handlers=[handler],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
