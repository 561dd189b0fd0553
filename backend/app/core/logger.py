# app/core/logger.py
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone

from app.core.config import LogOptions

ERROR_LOG_FILE = "error.log"
COMBINED_LOG_FILE = "combined.log"

# attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line: timestamp, level, logger, message and the
    metadata passed with `extra=`.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(options: LogOptions) -> None:
    """
    Console + error-only file + combined file on the root logger.

    Calling it again is a no-op once handlers are installed, so the app
    factory can run several times in one process (tests, reload).
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, options.level.upper(), logging.INFO))

    if any(getattr(h, "_disease_query", False) for h in root.handlers):
        return

    formatter = JsonFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(stream=sys.stdout)]

    if options.to_files:
        os.makedirs(options.directory, exist_ok=True)

        error_handler = logging.FileHandler(
            os.path.join(options.directory, ERROR_LOG_FILE), mode="a", encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        handlers.append(error_handler)

        handlers.append(
            logging.FileHandler(
                os.path.join(options.directory, COMBINED_LOG_FILE), mode="a", encoding="utf-8"
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._disease_query = True  # type: ignore[attr-defined]
        root.addHandler(handler)


def reset_logging() -> None:
    """Detach and close the handlers installed by configure_logging."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_disease_query", False):
            root.removeHandler(handler)
            handler.close()
