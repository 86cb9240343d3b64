"""
Единая настройка логирования для бота и скриптов обслуживания.
"""

from __future__ import annotations

import json
import logging
import logging.config
import time
from pathlib import Path

LOG_DIR = Path("logs")
LOG_FILE = LOG_DIR / "app.log"
MAX_FILE_AGE_DAYS = 30


def setup_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
            "short": {
                "format": "%(asctime)s [%(levelname)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "short",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "standard",
                "filename": str(log_dir / LOG_FILE.name),
                "maxBytes": 5 * 1024 * 1024,  # 5 МБ на файл
                "backupCount": 10,
                "encoding": "utf-8",
                "delay": True,
            },
        },
        "root": {
            "handlers": ["console", "file"],
            "level": level,
        },
        "loggers": {
            "aiogram.event": {
                "level": "WARNING",
            },
            "httpx": {
                "level": "WARNING",
            },
        },
    }

    logging.config.dictConfig(config)
    cleanup_logs(log_dir)


def cleanup_logs(log_dir: Path | None = None) -> None:
    """Удаляет логи старше MAX_FILE_AGE_DAYS."""
    log_dir = log_dir or LOG_DIR
    max_age_seconds = MAX_FILE_AGE_DAYS * 24 * 60 * 60
    now = time.time()

    for file in log_dir.glob(f"{LOG_FILE.name}*"):
        try:
            if now - file.stat().st_mtime > max_age_seconds:
                file.unlink(missing_ok=True)
        except FileNotFoundError:
            continue


def log_json(logger: logging.Logger, level: str, **payload) -> None:
    """Структурированное логирование в JSON."""
    msg = json.dumps(payload, ensure_ascii=False, default=str)
    getattr(logger, level, logger.info)(msg)
