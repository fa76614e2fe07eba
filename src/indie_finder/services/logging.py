"""Logging setup for the Indie Game Finder service.

structlog renders every event and stdlib logging routes the result to the
console and, when a log directory is given, to rotating files. Uvicorn's
loggers are sent through the same handlers.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

import structlog

ENVIRONMENTS = ("development", "production")

# Server loggers that should end up in the same handlers as the application
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

APP_LOG_MAX_BYTES = 10 * 1024 * 1024
ERROR_LOG_MAX_BYTES = 5 * 1024 * 1024

SHARED_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


class LoggingService:
    """Configures structlog and the stdlib handlers behind it."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Path | None = None,
        environment: str = "development",
    ) -> None:
        """Initialize the logging service.

        Args:
            log_level: The minimum log level to capture
            log_dir: Directory for log files (None for console only)
            environment: "development" for readable console output,
                "production" for JSON
        """
        self.log_level = log_level.upper()
        self.log_dir = log_dir
        self.environment = environment

    @property
    def renders_json(self) -> bool:
        """JSON in production, and whenever events also go to files."""
        return self.environment != "development" or self.log_dir is not None

    def configure(self) -> None:
        level = getattr(logging, self.log_level, logging.INFO)

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(level)
        root_logger.addHandler(self._console_handler(level))

        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            root_logger.addHandler(_rotating_handler(self.log_dir / "app.log", APP_LOG_MAX_BYTES, 5, level))
            root_logger.addHandler(
                _rotating_handler(self.log_dir / "error.log", ERROR_LOG_MAX_BYTES, 3, logging.ERROR)
            )

        for name in SERVER_LOGGERS:
            server_logger = logging.getLogger(name)
            server_logger.handlers.clear()
            server_logger.propagate = True

        renderer = structlog.processors.JSONRenderer() if self.renders_json else structlog.dev.ConsoleRenderer(colors=True)

        structlog.configure(
            processors=[*SHARED_PROCESSORS, renderer],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            # Logging is configured again once the configuration file is read
            cache_logger_on_first_use=False,
        )

    def _console_handler(self, level: int) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        if self.environment == "development":
            handler.setFormatter(logging.Formatter(
                fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            ))
        else:
            handler.setFormatter(logging.Formatter("%(message)s"))
        return handler


def _rotating_handler(path: Path, max_bytes: int, backup_count: int, level: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    environment: str = "development",
) -> LoggingService:
    """Configure application logging and return the service that did it."""
    service = LoggingService(log_level=log_level, log_dir=log_dir, environment=environment)
    service.configure()
    return service
