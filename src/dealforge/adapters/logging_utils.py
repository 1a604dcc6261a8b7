import logging
import json
import math
import sys
import time
from typing import Any

from .config import config


def _jsonable(value: Any) -> Any:
    # json.dumps would emit bare Infinity, which strict parsers reject
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": time.time(),
            "env": config.ENV,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # attach contextual info if provided
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update({k: _jsonable(v) for k, v in ctx.items()})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel(config.LOG_LEVEL)
        logger.propagate = False
    return logger


def log_event(logger: logging.Logger, message: str, level: int = logging.INFO, **context: Any) -> None:
    """Log `message` with `context` merged into the JSON payload."""
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"context": context})
