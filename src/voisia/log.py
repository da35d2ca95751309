"""Logging setup: structlog over the standard logging module.

structlog is configured at import so every ``get_logger()`` call returns a
logger that hands its event dict to stdlib ``logging``. ``configure_logging``
then decides where records go:

- stdout
- ``<log_dir>/voisia.log``, rolled over at ``log_max_bytes``; rolled files
  get a timestamp suffix and are never deleted

Records from the HTTP client stack (httpx, httpcore, ...) are dropped on
both targets; provider clients log their own request/response summaries.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog
from structlog import contextvars as struct_context

from .config import Settings

LOG_FILE_NAME = "voisia.log"
HTTP_CLIENT_LOGGERS = ("httpx", "httpcore", "hpack", "h2")

_SHARED_PROCESSORS: list[structlog.typing.Processor] = [
    struct_context.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=False),
    structlog.processors.StackInfoRenderer(),
]


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


_configure_structlog()


class DropHttpClientRecords(logging.Filter):
    """Reject records emitted by the HTTP client library loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not any(record.name == name or record.name.startswith(f"{name}.") for name in HTTP_CLIENT_LOGGERS)


class KeepAllRotatingFileHandler(RotatingFileHandler):
    """Size-capped log file whose rolled-over files are all kept.

    On rollover the current file is renamed to ``<stem>_<timestamp><suffix>``
    and a fresh file is opened; no backup count applies.
    """

    def __init__(self, filename: Path, max_bytes: int) -> None:
        super().__init__(filename, maxBytes=max_bytes, backupCount=0, encoding="utf-8", delay=True)

    def _rolled_name(self) -> Path:
        base = Path(self.baseFilename)
        stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        target = base.with_name(f"{base.stem}_{stamp}{base.suffix}")
        counter = 1
        while target.exists():
            target = base.with_name(f"{base.stem}_{stamp}.{counter}{base.suffix}")
            counter += 1
        return target

    def doRollover(self) -> None:
        if self.stream:
            self.stream.close()
            self.stream = None  # type: ignore[assignment]
        base = Path(self.baseFilename)
        if base.exists():
            self.rotate(str(base), str(self._rolled_name()))
        if not self.delay:
            self.stream = self._open()


def _formatter() -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
    )


def _ensure_log_dir(log_dir: Path) -> Path | None:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"Failed to create logs directory at {log_dir}: {exc}", file=sys.stderr)
        return None
    return log_dir


def configure_logging(settings: Settings) -> list[logging.Handler]:
    """Install stdout and rotating-file handlers on the root logger.

    Idempotent: handlers installed by a previous call are replaced, other
    handlers on the root logger are left alone. File logging is skipped
    (stdout still works) when the log directory cannot be created.

    Returns:
        The handlers that were installed
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_voisia_handler", False):
            root.removeHandler(handler)
            handler.close()

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    root.setLevel(level)

    formatter = _formatter()
    http_filter = DropHttpClientRecords()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.log_to_file:
        log_dir = _ensure_log_dir(Path(settings.log_dir))
        if log_dir is not None:
            handlers.append(KeepAllRotatingFileHandler(log_dir / LOG_FILE_NAME, settings.log_max_bytes))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(http_filter)
        handler._voisia_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    get_logger(__name__).info("logging configured", level=logging.getLevelName(level), targets=len(handlers))
    return handlers


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.stdlib.get_logger(name)


__all__ = [
    "HTTP_CLIENT_LOGGERS",
    "DropHttpClientRecords",
    "KeepAllRotatingFileHandler",
    "configure_logging",
    "get_logger",
]
