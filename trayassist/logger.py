"""Structured logging with text or JSON output and redaction of sensitive fields."""

from __future__ import annotations

import copy
import inspect
import json
import re
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, TextIO


class Level(IntEnum):
    """Logging severity; higher is more severe."""

    DEBUG = -4
    INFO = 0
    WARN = 4
    ERROR = 8


_LEVELS_BY_NAME = {
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warn": Level.WARN,
    "error": Level.ERROR,
}


def parse_level(level: str) -> Level:
    """Map a level name to a Level, falling back to INFO."""
    return _LEVELS_BY_NAME.get(level, Level.INFO)


REDACTED = "[REDACTED]"

# A basic filter; it does not catch every kind of secret.
_SENSITIVE_PATTERNS = (
    re.compile(r"\b(api[_-]?key|secret|token|password|credential)\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bauth(orization|entication)?\b", re.IGNORECASE | re.ASCII),
    re.compile(r"(bearer\s+[a-zA-Z0-9\-_.]+)", re.IGNORECASE | re.ASCII),
)


def _is_sensitive(key: str, value: Any) -> bool:
    if any(p.search(key) for p in _SENSITIVE_PATTERNS):
        return True
    return isinstance(value, str) and any(p.search(value) for p in _SENSITIVE_PATTERNS)


def _level_label(level: int) -> str:
    for base in (Level.ERROR, Level.WARN, Level.INFO, Level.DEBUG):
        if level >= base:
            break
    offset = level - base
    return base.name if offset == 0 else f"{base.name}{offset:+d}"


def _needs_quote(text: str) -> bool:
    return not text or any(c.isspace() or c in '"=' or not c.isprintable() for c in text)


def _text_value(value: Any) -> str:
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif value is None:
        text = "<nil>"
    else:
        text = str(value)
    return json.dumps(text, ensure_ascii=False) if _needs_quote(text) else text


@dataclass(frozen=True)
class _Attr:
    groups: tuple[str, ...]
    key: str
    value: Any


class Logger:
    """A structured logger writing one line per record to ``output``."""

    def __init__(
        self,
        level: Level | int | str = Level.INFO,
        *,
        json_format: bool = False,
        add_source: bool = False,
        output: TextIO | None = None,
    ) -> None:
        if isinstance(level, str):
            level = parse_level(level)
        self._level = int(level)
        self._json = json_format
        self._add_source = add_source
        self._output = output if output is not None else sys.stdout
        self._groups: tuple[str, ...] = ()
        self._attrs: tuple[_Attr, ...] = ()
        self._lock = threading.Lock()

    def _derive(self, groups: tuple[str, ...], attrs: tuple[_Attr, ...]) -> Logger:
        child = copy.copy(self)
        child._groups = groups
        child._attrs = attrs
        return child

    def bind(self, **kwargs: Any) -> Logger:
        """Return a logger that adds these attributes to every record."""
        extra = tuple(_Attr(self._groups, k, v) for k, v in kwargs.items())
        return self._derive(self._groups, self._attrs + extra)

    def with_group(self, name: str) -> Logger:
        """Return a logger whose later attributes are nested under ``name``."""
        if not name:
            return self
        return self._derive(self._groups + (name,), self._attrs)

    def with_request_id(self, request_id: str) -> Logger:
        return self.bind(request_id=request_id)

    def with_tool(self, tool_name: str) -> Logger:
        return self.bind(tool=tool_name)

    def with_platform(self, platform: str) -> Logger:
        return self.bind(platform=platform)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(Level.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(Level.INFO, msg, kwargs)

    def warn(self, msg: str, **kwargs: Any) -> None:
        self._log(Level.WARN, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(Level.ERROR, msg, kwargs)

    def _log(self, level: Level, msg: str, kwargs: dict[str, Any]) -> None:
        if level < self._level:
            return
        record_attrs = tuple(
            _Attr(self._groups, key, REDACTED if _is_sensitive(key, value) else value)
            for key, value in kwargs.items()
        )
        attrs = self._attrs + record_attrs
        now = datetime.now().astimezone()
        source = self._caller() if self._add_source else None
        if self._json:
            line = self._format_json(now, level, msg, source, attrs)
        else:
            line = self._format_text(now, level, msg, source, attrs)
        with self._lock:
            self._output.write(line + "\n")

    @staticmethod
    def _caller() -> dict[str, Any]:
        frame = inspect.currentframe()
        while frame is not None and frame.f_code.co_filename == __file__:
            frame = frame.f_back
        if frame is None:
            return {"function": "", "file": "", "line": 0}
        return {
            "function": frame.f_code.co_qualname,
            "file": frame.f_code.co_filename,
            "line": frame.f_lineno,
        }

    @staticmethod
    def _format_json(now, level, msg, source, attrs) -> str:
        doc: dict[str, Any] = {"time": now.isoformat(), "level": _level_label(level)}
        if source is not None:
            doc["source"] = source
        doc["msg"] = msg
        for attr in attrs:
            target = doc
            for group in attr.groups:
                if not isinstance(target.get(group), dict):
                    target[group] = {}
                target = target[group]
            target[attr.key] = attr.value
        return json.dumps(doc, default=str, ensure_ascii=False)

    @staticmethod
    def _format_text(now, level, msg, source, attrs) -> str:
        parts = [
            f"time={now.isoformat(timespec='milliseconds')}",
            f"level={_level_label(level)}",
        ]
        if source is not None:
            parts.append(f"source={_text_value(f'{source['file']}:{source['line']}')}")
        parts.append(f"msg={_text_value(msg)}")
        for attr in attrs:
            key = ".".join(attr.groups + (attr.key,))
            parts.append(f"{_text_value(key)}={_text_value(attr.value)}")
        return " ".join(parts)


_request_id: ContextVar[str] = ContextVar("request_id", default="")


@contextmanager
def request_id_context(request_id: str) -> Iterator[str]:
    """Make ``request_id`` the current request identifier within the block."""
    token = _request_id.set(request_id)
    try:
        yield request_id
    finally:
        _request_id.reset(token)


def current_request_id() -> str:
    """The current request identifier, or an empty string outside any request."""
    return _request_id.get()