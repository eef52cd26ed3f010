# prepwise/api/utils/common_utils.py
from __future__ import annotations

import hashlib
import logging
import os
import sys
from decimal import ROUND_HALF_UP, Decimal
from logging.handlers import RotatingFileHandler
from typing import Any, Iterable, List, Union

LOG_ROOT = os.getenv("APP_LOG_ROOT", os.path.join(os.getcwd(), "logs", "prepwise"))
os.makedirs(LOG_ROOT, exist_ok=True)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_ROTATE_BYTES = int(os.getenv("LOG_ROTATE_BYTES", str(10 * 1024 * 1024)))
LOG_ROTATE_BACKUPS = int(os.getenv("LOG_ROTATE_BACKUPS", "5"))

_loggers: dict[str, logging.Logger] = {}


def _level(level: str | None) -> int:
    return getattr(logging, (level or os.getenv("LOG_LEVEL", "INFO")).upper(), logging.INFO)


def _handlers(name: str) -> list[logging.Handler]:
    file_handler = RotatingFileHandler(
        os.path.join(LOG_ROOT, f"{name}.log"),
        maxBytes=LOG_ROTATE_BYTES,
        backupCount=LOG_ROTATE_BACKUPS,
        encoding="utf-8",
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in (file_handler, stream_handler):
        handler.setFormatter(formatter)
    return [file_handler, stream_handler]


def get_logger(name: str = "prepwise", level: str | None = None) -> logging.Logger:
    """
    Module logger writing to stdout and to a rotating `<name>.log` under APP_LOG_ROOT.
    Handlers are attached once per name; a later call with `level` only changes the level.
    """
    logger = _loggers.get(name)
    if logger is None:
        logger = logging.getLogger(name)
        logger.propagate = False
        if not logger.handlers:
            for handler in _handlers(name):
                logger.addHandler(handler)
        _loggers[name] = logger
    logger.setLevel(_level(level))
    return logger


def sha256_hex(text: str) -> str:
    return hashlib.sha256((text or "").encode("utf-8")).hexdigest()


def truncate(text: str, limit: int, suffix: str = "") -> str:
    text = text or ""
    if len(text) <= limit:
        return text
    return text[:limit] + suffix


def dedupe(items: Iterable[Any]) -> List[Any]:
    """Drop repeated entries, keeping first-seen order."""
    seen = set()
    out: List[Any] = []
    for it in items or []:
        if it in seen:
            continue
        seen.add(it)
        out.append(it)
    return out


def round_half_up(value: float, digits: int = 0) -> Union[int, float]:
    """
    Round halves away from zero (2.5 -> 3, 7.25 -> 7.3), unlike the built-in
    `round`, which rounds halves to even. Returns an int when `digits` is 0.
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)
