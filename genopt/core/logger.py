"""
📝 Logging System
Rich console output, optional rotating JSON files and structlog configuration
"""

import json
import logging
import logging.handlers
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from rich.console import Console
from rich.logging import RichHandler

from .config import get_settings


class JSONFormatter(logging.Formatter):
    """One JSON object per log record"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging() -> None:
    """Configure root logging and structlog from the current settings"""
    settings = get_settings()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=settings.debug,
        rich_tracebacks=True,
    )
    console_handler.setLevel(getattr(logging, settings.log_level))
    console_handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    root_logger.addHandler(console_handler)

    if settings.log_to_file:
        settings.logs_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=settings.logs_dir / "genopt.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG if settings.debug else logging.INFO)
        file_handler.setFormatter(JSONFormatter())

        error_handler = logging.handlers.RotatingFileHandler(
            filename=settings.logs_dir / "errors.log",
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())

        root_logger.addHandler(file_handler)
        root_logger.addHandler(error_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # numpy and rich stay quiet below WARNING
    logging.getLogger("numpy").setLevel(logging.WARNING)
    logging.getLogger("rich").setLevel(logging.WARNING)

    logger = get_logger("genopt.startup")
    logger.debug("Logging system initialized", extra={
        "extra_data": {
            "log_level": settings.log_level,
            "log_to_file": settings.log_to_file,
            "logs_dir": str(settings.logs_dir),
            "environment": settings.environment,
        }
    })


def get_logger(name: str, extra_data: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Return a logger, wrapped in an adapter when extra data is given.

    Args:
        name: Logger name (e.g. "genopt.optimizer")
        extra_data: Fields attached to every record of the returned logger

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if extra_data:
        logger = logging.LoggerAdapter(logger, {"extra_data": extra_data})

    return logger


def get_optimizer_logger(run_id: Optional[str] = None) -> logging.Logger:
    """
    Logger for one optimization run.

    Args:
        run_id: Identifier of the run (a short random id when omitted)

    Returns:
        Logger tagged with the run id
    """
    return get_logger("genopt.optimizer", {"run_id": run_id or uuid.uuid4().hex[:8]})


try:
    setup_logging()
except Exception as e:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.error(f"Failed to setup advanced logging: {e}")
