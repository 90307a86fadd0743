"""
Structured Logging.

Every module logs through structlog on top of the stdlib root logger:

    logger = get_logger(__name__)
    logger.info("Note saved", extra={"note_id": 3})

setup_logging() runs once at startup. It reads config/settings/logging.yaml
(validated by LoggingSchema); its arguments and NOTEKEEPER_LOG_LEVEL take
precedence over the file.

JSON records carry:
    timestamp   - ISO 8601 UTC timestamp
    level       - debug, info, warning, error, critical
    logger      - Module path (e.g. notekeeper.services.note_store)
    event       - Log message
    func_name   - Function that emitted the record
    lineno      - Line number in source file
    source      - Origin of the record (cli, ui, store, internal)

source is never derived from the logger name. Set it per call with
log_with_source(), or for the whole current context with bind_source().

Console output goes to stderr; the optional file handler writes rotating
JSONL (logs/notekeeper.jsonl by default).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from notekeeper.core.config import find_project_root, get_settings, load_yaml_config
from notekeeper.core.config_schema import FileHandlerSchema, LoggingSchema

VALID_SOURCES = frozenset({
    "cli",
    "ui",
    "store",
    "internal",
    "unknown",
})

# Libraries that are too chatty below WARNING.
QUIET_LOGGERS = ("aiosqlite", "sqlalchemy.engine")

_logging_config: LoggingSchema | None = None


def _load_logging_config() -> LoggingSchema:
    """
    Load and validate logging.yaml once per process.

    Raises:
        FileNotFoundError: If logging.yaml does not exist
    """
    global _logging_config
    if _logging_config is None:
        _logging_config = LoggingSchema(**load_yaml_config("logging.yaml"))
    return _logging_config


def _resolve_log_path(configured_path: str) -> Path:
    path = Path(configured_path)
    return path if path.is_absolute() else find_project_root() / path


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(renderer: Processor) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_shared_processors(),
    )


def _console_handler(format_type: str) -> logging.Handler:
    if format_type == "console":
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(renderer))
    return handler


def _file_handler(config: FileHandlerSchema) -> logging.Handler:
    log_path = _resolve_log_path(config.path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger's handlers.

    Any argument left as None falls back to logging.yaml. The level
    falls back to NOTEKEEPER_LOG_LEVEL first. Calling this again replaces
    the handlers installed by the previous call.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'json' or 'console' for the console handler
        enable_console: Whether to log to stderr
        enable_file_logging: Whether to write the JSONL file
    """
    config = _load_logging_config()

    level_name = (level or get_settings().log_level or config.level).upper()
    if format_type is None:
        format_type = config.format
    if enable_console is None:
        enable_console = config.handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = config.handlers.file.enabled

    structlog.configure(
        processors=_shared_processors() + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level_name)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        root_logger.addHandler(_console_handler(format_type))
    if enable_file_logging:
        root_logger.addHandler(_file_handler(config.handlers.file))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Structlog logger for a module; pass __name__."""
    return structlog.get_logger(name)


def bind_source(source: str) -> None:
    """
    Tag every record logged from the current context with a source.

    Raises:
        ValueError: If source is not one of VALID_SOURCES
    """
    if source not in VALID_SOURCES:
        raise ValueError(f"Unknown log source: {source!r}")
    structlog.contextvars.bind_contextvars(source=source)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a single record with an explicit source.

    Raises:
        AttributeError: If level is not a valid log level

    Example:
        log_with_source(logger, "ui", "info", "Swipe ignored", position=3)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, source=source, **kwargs)
