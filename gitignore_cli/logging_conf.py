"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

import structlog

_LOGGING_INITIALISED = False


def configure_logging(verbose: bool = False, log_file: Path | None = None) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return application logger.

    The console handler writes to stderr so it never mixes with the per-item
    report printed on stdout.
    """

    global _LOGGING_INITIALISED
    if not _LOGGING_INITIALISED:
        level = "DEBUG" if verbose else "WARNING"
        handlers: dict[str, dict] = {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "plain",
                "stream": "ext://sys.stderr",
            },
        }
        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers["file"] = {
                "class": "logging.FileHandler",
                "level": "DEBUG",
                "filename": str(log_file),
                "formatter": "plain",
                "encoding": "utf-8",
            }
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "plain": {
                        "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                    }
                },
                "handlers": handlers,
                "loggers": {
                    "gitignore_cli": {
                        "handlers": list(handlers),
                        "level": "DEBUG" if (verbose or log_file is not None) else "WARNING",
                        "propagate": False,
                    },
                },
            }
        )

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("gitignore_cli")


def component_logger(component: str) -> structlog.BoundLogger:
    """Return a logger namespaced under the application logger."""

    return structlog.get_logger(f"gitignore_cli.{component}").bind(component=component)


__all__ = ["component_logger", "configure_logging"]
