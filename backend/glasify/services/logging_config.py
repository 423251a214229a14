"""Structured logging configuration for the Glasify seeding pipeline."""
import logging
import json
import sys
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """JSON structured log formatter for CI and production runs."""
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        for extra in ("stage", "entity", "duration_ms"):
            if hasattr(record, extra):
                log_entry[extra] = getattr(record, extra)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False):
    """Configure application logging."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
        ))

    root.handlers = [handler]

    # Suppress noisy loggers
    for name in ["sqlalchemy.engine", "aiosqlite", "asyncio"]:
        logging.getLogger(name).setLevel(logging.WARNING)


class SeedLogger:
    """
    Progress logger used by the orchestrator.

    Wraps a stdlib logger with section/success helpers; per-item debug lines
    are dropped unless ``verbose``.
    """

    def __init__(self, name: str = "glasify-orchestrator", verbose: bool = False):
        self._log = logging.getLogger(name)
        self.verbose = verbose

    def section(self, title: str) -> None:
        self._log.info("── %s ──", title, extra={"stage": title})

    def info(self, msg: str, *args) -> None:
        self._log.info(msg, *args)

    def success(self, msg: str, *args) -> None:
        self._log.info("OK " + msg, *args)

    def warn(self, msg: str, *args) -> None:
        self._log.warning(msg, *args)

    def error(self, msg: str, *args, exc_info=None) -> None:
        self._log.error(msg, *args, exc_info=exc_info)

    def debug(self, msg: str, *args) -> None:
        if self.verbose:
            # verbose runs promote item-level progress to INFO so it survives the root level
            self._log.info(msg, *args)
        else:
            self._log.debug(msg, *args)
