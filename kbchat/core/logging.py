"""key=value log lines for the kbchat package.

Every kbchat logger sits under the ``kbchat`` logger, which owns the single
stdout handler. It logs at INFO until ``configure_logging`` applies the
level for KB_ENV.
"""

import logging
import sys
from typing import Any

from kbchat.core.config import Settings

ROOT_LOGGER = "kbchat"


def _quote(value: Any) -> str:
    text = str(value)
    return f'"{text}"' if " " in text else text


class StructuredFormatter(logging.Formatter):
    """Render a record as ``timestamp=... level=... logger=... message=...``."""

    def format(self, record: logging.LogRecord) -> str:
        fields = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = getattr(record, "request_id", None)
        if request_id is not None:
            fields["request_id"] = request_id
        fields.update(getattr(record, "extra_data", {}))

        line = " ".join(f"{k}={_quote(v)}" for k, v in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger in the ``kbchat`` hierarchy.

    Names outside the package (``__main__`` in scripts) are nested under it
    so they share the handler.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        root.addHandler(handler)
        root.setLevel(logging.INFO)

    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(settings: Settings) -> None:
    """DEBUG in dev (request lines included), INFO elsewhere."""
    level = logging.DEBUG if settings.KB_ENV == "dev" else logging.INFO
    get_logger(ROOT_LOGGER).setLevel(level)


def log_with_context(logger: logging.Logger, level: int, msg: str, **fields: Any) -> None:
    """Log ``msg`` with ``fields`` appended as key=value pairs, request_id first."""
    request_id = fields.pop("request_id", None)
    extra: dict[str, Any] = {"extra_data": fields}
    if request_id is not None:
        extra["request_id"] = request_id
    logger.log(level, msg, extra=extra)
