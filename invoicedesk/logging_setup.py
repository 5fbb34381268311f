from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


_LOG_FILE_NAME = "invoicedesk.log"
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 5
_CONFIGURED_FLAG = "_invoicedesk_logging_configured"

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_FIELDS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


class ContextFormatter(logging.Formatter):
    """Appends `extra={...}` fields as sorted key=value pairs after the event name."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in vars(record).items() if k not in _RECORD_FIELDS}
        if not context:
            return line
        pairs = " ".join(f"{key}={context[key]!r}" for key in sorted(context))
        return f"{line} {pairs}"


def _log_level() -> int:
    return logging.DEBUG if os.getenv("INVOICEDESK_DEBUG") == "1" else logging.INFO


def setup_logging(log_dir: str | Path = "./data/logs") -> None:
    level = _log_level()
    root_logger = logging.getLogger()
    if getattr(root_logger, _CONFIGURED_FLAG, False):
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    formatter = ContextFormatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
        RotatingFileHandler(log_path / _LOG_FILE_NAME, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT),
    ]
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    setattr(root_logger, _CONFIGURED_FLAG, True)
