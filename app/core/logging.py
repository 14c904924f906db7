"""Logging configuration driven by ``settings.log_level`` and ``settings.log_format``.

Modules log through stdlib ``logging.getLogger(__name__)``; the ``json`` format
renders those records with structlog, one JSON object per line.
"""

import logging
import sys

import structlog

from app.core.config import LogFormatEnum, Settings

SIMPLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering stdlib records, including ``extra`` fields, as JSON."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def setup_logging(settings: Settings) -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler(sys.stdout)
    if settings.log_format == LogFormatEnum.json:
        handler.setFormatter(json_formatter())
    else:
        handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_taskboard_handler", False):
            root.removeHandler(existing)
    handler._taskboard_handler = True
    root.addHandler(handler)
    root.setLevel(settings.log_level.value)

    # SQL echo is controlled by the engine, keep the logger quiet otherwise
    if not settings.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
