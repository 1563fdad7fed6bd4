"""Error reporters that send errors to logs or to several destinations at once."""

from __future__ import annotations

import contextvars
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any

from trayassist.errors import get_app_error
from trayassist.logger import Logger, current_request_id

DEFAULT_REPORT_TIMEOUT = 5.0
"""Seconds a MultiReporter waits for its reporters by default."""


class ErrorReporter(ABC):
    """Something that sends errors to an external system."""

    def report(self, err: BaseException) -> None:
        """Send an error with no extra context."""
        self.report_with_context(err, None)

    @abstractmethod
    def report_with_context(self, err: BaseException, extra: Mapping[str, Any] | None) -> None:
        """Send an error together with additional context."""


class NoOpReporter(ErrorReporter):
    """A reporter that discards everything; handy as a default."""

    def report(self, err: BaseException) -> None:
        """Discard the error."""

    def report_with_context(self, err: BaseException, extra: Mapping[str, Any] | None) -> None:
        """Discard the error and its context."""


class LogReporter(ErrorReporter):
    """Reports errors by writing them to a Logger at error level."""

    def __init__(self, logger: Logger) -> None:
        self._logger = logger

    def report(self, err: BaseException) -> None:
        self.report_with_context(err, None)

    def report_with_context(self, err: BaseException, extra: Mapping[str, Any] | None) -> None:
        """Log the error; an AppError's request id wins over the current one."""
        fields: dict[str, Any] = {"error": str(err)}
        request_id = current_request_id()

        app_err = get_app_error(err)
        if app_err is not None:
            fields["error_code"] = app_err.code
            if app_err.request_id:
                request_id = app_err.request_id
            fields.update(app_err.extra or {})

        if request_id:
            fields["request_id"] = request_id

        fields.update(extra or {})
        self._logger.error("error reported", **fields)


class MultiReporter(ErrorReporter):
    """Sends each error to several reporters concurrently, waiting at most a timeout."""

    def __init__(self, *reporters: ErrorReporter, timeout: float = DEFAULT_REPORT_TIMEOUT) -> None:
        self._reporters = tuple(reporters)
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        """Seconds to wait for all reporters."""
        return self._timeout

    def with_timeout(self, timeout: float) -> MultiReporter:
        """Return a reporter with the same destinations and a different timeout."""
        return MultiReporter(*self._reporters, timeout=timeout)

    def report(self, err: BaseException) -> None:
        self._dispatch(lambda reporter: reporter.report(err))

    def report_with_context(self, err: BaseException, extra: Mapping[str, Any] | None) -> None:
        self._dispatch(lambda reporter: reporter.report_with_context(err, extra))

    def _dispatch(self, call: Callable[[ErrorReporter], None]) -> None:
        threads = []
        for reporter in self._reporters:
            context = contextvars.copy_context()
            thread = threading.Thread(
                target=context.run,
                args=(call, reporter),
                name=f"reporter-{type(reporter).__name__}",
                daemon=True,
            )
            thread.start()
            threads.append(thread)

        deadline = time.monotonic() + self._timeout
        for thread in threads:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            thread.join(remaining)