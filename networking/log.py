import logging
import os
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

import pytz

from .configs import LoggingConfig, networking_config

trace_id_var: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)


def trace_id_generator() -> str:
    return str(uuid.uuid4().hex)


def init_logging(config: LoggingConfig | None = None) -> None:
    """Configures root logging for applications that use this library standalone."""
    config = config or networking_config

    log_handlers: list[logging.Handler] = []
    log_file = config.LOG_FILE
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        log_handlers.append(
            RotatingFileHandler(
                filename=log_file,
                maxBytes=config.LOG_FILE_MAX_SIZE * 1024 * 1024,
                backupCount=config.LOG_FILE_BACKUP_COUNT,
            )
        )

    log_handlers.append(logging.StreamHandler(sys.stdout))

    for handler in log_handlers:
        handler.addFilter(RequestIdFilter())

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFORMAT,
        handlers=log_handlers,
        force=True,
    )

    for handler in logging.root.handlers:
        handler.setFormatter(RequestIdFormatter(config.LOG_FORMAT, config.LOG_DATEFORMAT))

    if config.LOG_TZ:
        timezone = pytz.timezone(config.LOG_TZ)

        def time_converter(seconds):
            return datetime.fromtimestamp(seconds, tz=timezone).timetuple()

        for handler in logging.root.handlers:
            if handler.formatter:
                handler.formatter.converter = time_converter


class RequestIdFilter(logging.Filter):
    # Exposes the trace id of the current NetworkingClient.send call (if any)
    # to the logging format.
    def filter(self, record):
        record.trace_id = trace_id_var.get()
        return True


class RequestIdFormatter(logging.Formatter):
    def format(self, record):
        if not hasattr(record, "trace_id") or record.trace_id is None:
            record.trace_id = ""
        return super().format(record)
