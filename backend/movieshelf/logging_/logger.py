import os
import sys
from datetime import datetime
from typing import Any

from loguru import logger
from loguru._logger import Logger

from movieshelf.core.config import settings


def dynamic_formatter(record: Any) -> str:
    base = "[{time:HH:mm:ss}] [{level}] {module}:{function}:{line} - {message}"

    extras = record.get("extra", {})
    if extras:
        base += " ("
        for key, value in extras.items():
            base += f"{key}={value}, "
        base += ")\n"
    else:
        base += "\n"

    if record["exception"]:
        base += "{exception}"

    return base


def dynamic_console_formatter(record: Any) -> str:
    base = "[<green>{time:HH:mm:ss}</green>] <level>[{level}]</level> {module}:{function}:<blue>{line}</blue> - {message}\n"

    if record["exception"]:
        base += "{exception}"

    return base


def _add_file_sinks(name: str, log_dir: str) -> None:
    today = datetime.now().strftime("%Y-%m-%d")
    log_path = os.path.join(log_dir, today, name)
    os.makedirs(log_path, exist_ok=True)

    if settings.DEBUG:
        logger.add(
            os.path.join(log_path, "trace.log"),
            format=dynamic_formatter,
            level="TRACE",
            rotation="00:00",  # Rotate daily at midnight
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=True,
            retention="3 days",
        )
        logger.add(
            os.path.join(log_path, "debug.log"),
            format=dynamic_formatter,
            level="DEBUG",
            rotation="00:00",
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=True,
            retention="7 days",
        )

    logger.add(
        os.path.join(log_path, "error.log"),
        format=dynamic_formatter,
        level="ERROR",
        rotation="00:00",
        compression="zip",
        enqueue=True,
        backtrace=True,
        diagnose=True,
        retention="30 days",
    )
    logger.add(
        os.path.join(log_path, "info.log"),
        format=dynamic_formatter,
        level="INFO",
        rotation="00:00",
        compression="zip",
        enqueue=True,
        backtrace=True,
        diagnose=True,
    )


def setup_logger(name: str, log_dir: str | None = None) -> Logger:
    logger.remove()  # Remove default handler

    if settings.LOG_TO_FILES:
        _add_file_sinks(name, log_dir or settings.LOG_DIR)

    logger.add(
        sys.stderr,
        format=dynamic_console_formatter,
        level="DEBUG" if settings.DEBUG else "INFO",
        enqueue=True,
        backtrace=True,
        diagnose=True,
        colorize=True,
    )

    return logger  # type: ignore
