import contextlib
import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from taskvibe.core.config import settings

# Fields bound with log_context(); copied onto every record logged inside the block
bound_fields: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "bound_fields", default={}
)

TEXT_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) - %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with the bound fields merged in."""

    BASE_FIELDS = ("timestamp", "level", "logger", "message", "location")

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        for key, value in bound_fields.get().items():
            entry.setdefault(key, value)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class BoundFieldsFilter(logging.Filter):
    """Expose bound fields as record attributes for text formatters and handlers."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in bound_fields.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def _build_formatter() -> logging.Formatter:
    if settings.ENVIRONMENT == "production":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT)


def _build_handlers(root: logging.Logger) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_path))
        except OSError as e:
            root.warning(f"Logging to stdout only, cannot open {log_path}: {e}")
    return handlers


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger and return the ``taskvibe`` logger.

    Text output in development and testing, JSON lines in production. Safe to
    call again; previous handlers are replaced.
    """
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper())
    root = logging.getLogger()
    root.setLevel(log_level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = _build_formatter()
    fields_filter = BoundFieldsFilter()
    for handler in _build_handlers(root):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(fields_filter)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger("taskvibe")


@contextlib.contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """
    Bind fields to every log record emitted inside the block.

    Usage:
        with log_context(user_id=user.id, action="complete_task"):
            logger.info("Task completed")

    Blocks nest; inner bindings win and are dropped again on exit.
    """
    token = bound_fields.set({**bound_fields.get(), **fields})
    try:
        yield
    finally:
        bound_fields.reset(token)
