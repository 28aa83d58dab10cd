"""
Logging configuration for the Stacks swap tool.
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from loguru import logger

# Lazy import settings to avoid circular dependency
_settings = None

_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[network]} | {name}:{function}:{line} - {message}"
# Request lines from these libraries stay at WARNING unless LOG_LEVEL is DEBUG
_QUIET_LIBRARIES = ("httpx", "httpcore")
_FALLBACK_DIR = Path("/tmp/stxswap_logs")


def _get_settings():
    """Get settings with lazy loading."""
    global _settings
    if _settings is None:
        from stxswap.settings.config import settings as app_settings
        _settings = app_settings
    return _settings


def _resolve_log_path(default_path: Path) -> Path:
    try:
        default_path.parent.mkdir(parents=True, exist_ok=True)
        return default_path
    except OSError:
        fallback_dir = Path.cwd() / "logs"
        fallback_dir.mkdir(parents=True, exist_ok=True)
        return fallback_dir / default_path.name


def _add_file_sink(path: Path, **kwargs) -> None:
    """Add a rotating file sink, falling back to a temp directory on permission errors."""
    try:
        logger.add(str(path), **kwargs)
    except PermissionError:
        _FALLBACK_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(str(_FALLBACK_DIR / path.name), **kwargs)


class LoguruHandler(logging.Handler):
    """Route standard-library log records (httpx, asyncio) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def setup_logging():
    """Configure loguru logger with appropriate settings."""
    settings = _get_settings()

    logger.remove()
    logger.configure(extra={"app": settings.app_name, "network": settings.stacks_network})

    log_level = (settings.log_level or "INFO").upper()
    # Allow LOG_LEVEL env override (e.g. debug/trace) used in tests
    env_level = os.getenv("LOG_LEVEL", "").upper()
    if env_level:
        log_level = env_level

    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=log_level,
        colorize=True,
    )

    log_path = _resolve_log_path(Path(settings.log_file))
    _add_file_sink(
        log_path,
        format=_FILE_FORMAT,
        level="DEBUG",
        rotation="100 MB",
        retention="30 days",
        compression="zip",
    )
    _add_file_sink(
        _resolve_log_path(log_path.parent / "errors.log"),
        format=_FILE_FORMAT,
        level="ERROR",
        rotation="50 MB",
        retention="90 days",
        compression="zip",
    )
    # Broadcast outcomes, one line per swap attempt
    _add_file_sink(
        _resolve_log_path(log_path.parent / "swap_results.log"),
        format="{time:YYYY-MM-DD HH:mm:ss} | {message}",
        level="INFO",
        filter=lambda record: record["extra"].get("SWAP_RESULT"),
        rotation="50 MB",
        retention="365 days",
        compression="zip",
    )

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(LoguruHandler())
    library_level = logging.DEBUG if log_level in ("DEBUG", "TRACE") else logging.WARNING
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(library_level)

    logger.info(f"Logging initialized - Level: {log_level}, File: {log_path}, Network: {settings.stacks_network}")
    return logger


_log = None


def _get_log():
    """Get or initialize the logger."""
    global _log
    if _log is None:
        try:
            _log = setup_logging()
        except Exception as exc:
            # Keep the default stderr sink when sinks cannot be configured
            logger.warning(f"Logging setup failed, using default sink: {exc}")
            _log = logger
    return _log


log = _get_log()
