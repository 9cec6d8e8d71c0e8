"""Loguru logging setup for the booking service."""

import contextvars
import logging
import sys
from pathlib import Path
from types import FrameType
from typing import Any, Dict, Optional, Union

from loguru import logger

# Booking session served by the current task, set by the web layer
session_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "booking_session_id", default=None
)

__all__ = ["session_id_ctx", "setup_structured_logging", "InterceptHandler"]

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}:{line}</cyan> | {extra[session_id]} - <level>{message}</level>"
)
_TEXT_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | "
    "{extra[session_id]} - {message}"
)

# Rotation settings shared by every file sink
_FILE_SINK = {"rotation": "10 MB", "retention": "30 days", "compression": "zip"}


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records (tenacity, uvicorn, aiohttp) to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: Union[str, int]
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so Loguru reports the real caller
        frame: Optional[FrameType] = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _session_patcher(record: Dict[str, Any]) -> None:
    """Copy the current booking session id into ``record["extra"]``."""
    session_id = session_id_ctx.get()
    if session_id:
        record["extra"]["session_id"] = session_id


def setup_structured_logging(
    level: str = "INFO",
    json_format: bool = True,
    logs_dir: Union[str, Path] = "logs",
    diagnose: bool = False,
) -> None:
    """
    Configure Loguru sinks and route stdlib logging through them.

    Console output is human readable. The main log file holds JSON lines
    when ``json_format`` is set, plain text otherwise; errors also go to a
    daily error file.

    Args:
        level: Minimum level for console and main file
        json_format: Serialize the main log file as JSON lines
        logs_dir: Directory for log files (created if missing)
        diagnose: Show variable values in error tracebacks
    """
    logs_path = Path(logs_dir)
    logs_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.configure(patcher=_session_patcher, extra={"session_id": "-"})

    logger.add(sys.stdout, format=_CONSOLE_FORMAT, level=level, colorize=True)
    if json_format:
        logger.add(
            logs_path / "clinic_booking.jsonl", level=level, serialize=True, **_FILE_SINK
        )
    else:
        logger.add(
            logs_path / "clinic_booking.log", format=_TEXT_FORMAT, level=level, **_FILE_SINK
        )
    logger.add(
        logs_path / "errors_{time:YYYY-MM-DD}.log",
        format=_TEXT_FORMAT,
        level="ERROR",
        backtrace=True,
        diagnose=diagnose,
        **{**_FILE_SINK, "retention": "90 days"},
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.root.setLevel(level)

    logger.info(f"Logging initialized (level={level}, json={json_format}, dir={logs_path})")
