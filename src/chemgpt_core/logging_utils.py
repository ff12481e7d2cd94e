# src/chemgpt_core/logging_utils.py
"""
Loguru setup for the assistant and the `evt=... | key=value` event format.

Provider credentials never reach the log: fields whose name looks like a
secret are masked, and `key=` query parameters in URLs are blanked.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any, Mapping

from loguru import logger

from chemgpt_core.config import get_settings

LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
_STDLIB_LEVELS = {"TRACE": "DEBUG", "SUCCESS": "INFO"}

_MAX_FIELD_CHARS = 160
_MAX_LIST_ITEMS = 5
_SECRET_FIELD = re.compile(r"(api_?key|token|secret|authorization)", re.IGNORECASE)
_URL_KEY_PARAM = re.compile(r"([?&]key=)[^&\s]+")

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[origin]: <32}</cyan> | "
    "<level>{message}</level>"
)


def resolve_level(value: str | None, fallback: str = "INFO") -> str:
    candidate = (value or "").strip().upper()
    return candidate if candidate in LEVELS else fallback


def _stdlib_level(name: str) -> int:
    return logging.getLevelName(_STDLIB_LEVELS.get(name, name))


def _add_origin(record: dict[str, Any]) -> None:
    extra = record["extra"]
    module = str(extra.get("std_name") or record["name"] or "-").rsplit(".", 1)[-1]
    line = extra.get("std_line") or record["line"]
    extra["origin"] = f"{module}:{line}"


class InterceptHandler(logging.Handler):
    """Forward uvicorn/httpx stdlib records to loguru, keeping their origin."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.bind(std_name=record.name, std_line=record.lineno).opt(
            exception=record.exc_info,
        ).log(level, record.getMessage())


def setup_logging(default_level: str = "INFO", levels: Mapping[str, str] | None = None) -> str:
    """
    Install the stderr sink and route stdlib loggers through it.

    `levels` overrides the configured levels; keys are `app`, `access`
    and `httpx`. Unset entries come from `Settings` (CHEMGPT_LOG_LEVEL,
    CHEMGPT_ACCESS_LOG_LEVEL, CHEMGPT_HTTPX_LOG_LEVEL). Returns the app level.
    """
    current = get_settings()
    overrides = dict(levels or {})
    app_level = resolve_level(overrides.get("app") or current.CHEMGPT_LOG_LEVEL, resolve_level(default_level))
    access_level = resolve_level(overrides.get("access") or current.CHEMGPT_ACCESS_LOG_LEVEL, "WARNING")
    httpx_level = resolve_level(overrides.get("httpx") or current.CHEMGPT_HTTPX_LOG_LEVEL, "WARNING")

    logger.remove()
    logger.configure(patcher=_add_origin)
    logger.add(sys.stderr, level=app_level, format=LOG_FORMAT, colorize=True, backtrace=False, diagnose=False)

    logging.basicConfig(handlers=[InterceptHandler()], level=_stdlib_level(app_level), force=True)
    routed = {
        "uvicorn": app_level,
        "uvicorn.error": app_level,
        "uvicorn.access": access_level,
        "httpx": httpx_level,
        "httpcore": httpx_level,
    }
    for name, level in routed.items():
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
        std_logger.setLevel(_stdlib_level(level))

    return app_level


def _mask(value: str) -> str:
    return f"{value[:3]}***" if len(value) > 6 else "***"


def _format_field(key: str, value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        shown = [str(item) for item in value[:_MAX_LIST_ITEMS]]
        if len(value) > _MAX_LIST_ITEMS:
            shown.append(f"+{len(value) - _MAX_LIST_ITEMS}")
        value = ",".join(shown)
    text = str(value)
    if _SECRET_FIELD.search(key):
        return _mask(text)
    text = _URL_KEY_PARAM.sub(r"\1***", text).replace("\n", "\\n")
    if len(text) > _MAX_FIELD_CHARS:
        text = text[: _MAX_FIELD_CHARS - 3] + "..."
    if not text or any(ch in text for ch in " |'"):
        return "'" + text.replace("'", "\\'") + "'"
    return text


def log_event(event: str, **fields: Any) -> str:
    """Render `evt=<event> | key=value | ...` with secrets masked and long values cut."""
    parts = [f"evt={event}"]
    parts.extend(f"{key}={_format_field(key, value)}" for key, value in fields.items())
    return " | ".join(parts)
