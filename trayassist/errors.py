"""Structured application errors carrying a code, context and a user-facing message."""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Error categories used throughout the application."""

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    TOOL_TIMEOUT = "TOOL_TIMEOUT"
    INVALID_PARAMS = "INVALID_PARAMS"
    COPILOT_CONNECTION = "COPILOT_CONNECTION"
    AUTH_FAILED = "AUTH_FAILED"
    MESSAGE_FAILED = "MESSAGE_FAILED"
    INTERNAL = "INTERNAL_ERROR"


_USER_MESSAGES: dict[str, str] = {
    ErrorCode.CONFIG_NOT_FOUND: "Configuration error. Please check your settings.",
    ErrorCode.TOOL_NOT_FOUND: "The requested tool is not available.",
    ErrorCode.TOOL_TIMEOUT: "The operation took too long. Please try again.",
    ErrorCode.INVALID_PARAMS: "Invalid input provided.",
    ErrorCode.COPILOT_CONNECTION: "Unable to connect to the AI service. Please try again later.",
    ErrorCode.AUTH_FAILED: "Authentication failed. Please check your credentials.",
    ErrorCode.MESSAGE_FAILED: "Failed to send the message. Please try again.",
}
_DEFAULT_USER_MESSAGE = "An unexpected error occurred. Please try again."


def _copy_extra(extra: dict[str, Any] | None) -> dict[str, Any] | None:
    """Copy nested dicts and lists so derived errors never share mutable context."""
    if extra is None:
        return None
    result: dict[str, Any] = {}
    for key, value in extra.items():
        if isinstance(value, dict):
            result[key] = _copy_extra(value)
        elif isinstance(value, list):
            result[key] = [_copy_extra(item) if isinstance(item, dict) else item for item in value]
        else:
            result[key] = value
    return result


class AppError(Exception):
    """An application error identified by a code.

    Derived errors are created with the ``with_*`` methods, which never modify
    the original instance.
    """

    def __init__(
        self,
        code: str,
        message: str,
        cause: BaseException | None = None,
        request_id: str = "",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(str(code), message)
        self.code = str(code)
        self.message = message
        self.request_id = request_id
        self.extra = extra
        self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        """The underlying exception, if any."""
        return self.__cause__

    def __str__(self) -> str:
        if self.cause is not None:
            return f"[{self.code}] {self.message}: {self.cause}"
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"AppError(code={self.code!r}, message={self.message!r})"

    def _derive(self, **changes: Any) -> AppError:
        fields: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "cause": self.cause,
            "request_id": self.request_id,
            "extra": _copy_extra(self.extra),
        }
        fields.update(changes)
        return AppError(**fields)

    def with_cause(self, cause: BaseException | None) -> AppError:
        """Return a copy with ``cause`` attached."""
        return self._derive(cause=cause)

    def with_message(self, message: str) -> AppError:
        """Return a copy with a different message."""
        return self._derive(message=message)

    def with_request_id(self, request_id: str) -> AppError:
        """Return a copy tagged with a request identifier."""
        return self._derive(request_id=request_id)

    def with_extra(self, key: str, value: Any) -> AppError:
        """Return a copy with one more piece of context."""
        extra = _copy_extra(self.extra) or {}
        extra[key] = value
        return self._derive(extra=extra)

    def matches(self, other: object) -> bool:
        """True when ``other`` is an AppError of the same category (code)."""
        return isinstance(other, AppError) and self.code == other.code

    def user_message(self) -> str:
        """A message safe to show to end users, free of technical detail."""
        return _USER_MESSAGES.get(self.code, _DEFAULT_USER_MESSAGE)


ERR_CONFIG_NOT_FOUND = AppError(ErrorCode.CONFIG_NOT_FOUND, "configuration not found")
ERR_TOOL_NOT_FOUND = AppError(ErrorCode.TOOL_NOT_FOUND, "tool not found")
ERR_TOOL_TIMEOUT = AppError(ErrorCode.TOOL_TIMEOUT, "tool execution timed out")
ERR_INVALID_PARAMS = AppError(ErrorCode.INVALID_PARAMS, "invalid parameters")
ERR_COPILOT_CONNECTION = AppError(ErrorCode.COPILOT_CONNECTION, "failed to connect to Copilot")
ERR_AUTH_FAILED = AppError(ErrorCode.AUTH_FAILED, "authentication failed")
ERR_MESSAGE_FAILED = AppError(ErrorCode.MESSAGE_FAILED, "failed to send message")


def wrap_error(code: str, message: str, cause: BaseException | None) -> AppError:
    """Create an AppError wrapping ``cause``."""
    return AppError(code, message, cause=cause)


def _chain(err: BaseException | None) -> Iterator[BaseException]:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.__cause__


def get_app_error(err: BaseException | None) -> AppError | None:
    """Return the first AppError in the cause chain of ``err``, or None."""
    return next((e for e in _chain(err) if isinstance(e, AppError)), None)


def is_app_error(err: BaseException | None, code: str) -> bool:
    """True when the cause chain of ``err`` holds an AppError whose code is ``code``."""
    found = get_app_error(err)
    return found is not None and found.code == str(code)