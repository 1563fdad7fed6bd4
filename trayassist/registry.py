"""Registration, lookup and validated, time-limited execution of tools."""

from __future__ import annotations

import asyncio
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

DEFAULT_TIMEOUT = 600.0
"""Seconds a tool may run before its execution is abandoned."""


class RegistryError(Exception):
    """Base class for registry failures."""


class ToolNotFoundError(RegistryError, LookupError):
    """No tool is registered under the requested name."""


class ToolTimeoutError(RegistryError, TimeoutError):
    """A tool did not finish within the registry's timeout."""


class DuplicateToolError(RegistryError):
    """A tool with the same name is already registered."""


class DuplicateFactoryError(RegistryError):
    """A factory for the same tool type is already registered."""


class InvalidParamTypeError(RegistryError):
    """A parameter value does not match its declared type or allowed values."""


class MissingParameterError(RegistryError, ValueError):
    """A required parameter was not supplied."""


@dataclass
class Parameter:
    """One input or output of a tool.

    ``type`` is one of string, integer, number, boolean, array or object;
    ``allowed`` restricts string values to an enumeration.
    """

    name: str
    type: str = "string"
    required: bool = False
    default: Any = None
    description: str = ""
    allowed: tuple[str, ...] = ()


@dataclass
class ToolSchema:
    """The inputs a tool accepts and the outputs it produces."""

    inputs: list[Parameter] = field(default_factory=list)
    outputs: list[Parameter] = field(default_factory=list)


class Tool(ABC):
    """A named, self-describing action the registry can run."""

    name: str
    description: str = ""

    @abstractmethod
    def schema(self) -> ToolSchema:
        """Describe the tool's parameters."""

    @abstractmethod
    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        """Run the tool with already validated parameters."""


class _ToolConfig(Protocol):
    name: str
    type: str
    enabled: bool


ToolFactory = Callable[[Any], Tool]


def _type_name(value: Any) -> str:
    return type(value).__name__


def _validate_param_type(value: Any, expected: str, allowed: Iterable[str]) -> None:
    """Raise InvalidParamTypeError when ``value`` does not fit ``expected``."""
    if value is None:
        return
    allowed = tuple(allowed)
    if expected == "string":
        if not isinstance(value, str):
            raise InvalidParamTypeError(f"expected string, got {_type_name(value)}")
        if allowed and value not in allowed:
            raise InvalidParamTypeError(
                f"value {value!r} not in allowed values: {list(allowed)}"
            )
    elif expected == "integer":
        if isinstance(value, bool):
            raise InvalidParamTypeError(f"expected integer, got {_type_name(value)}")
        if isinstance(value, float):
            if not value.is_integer():
                raise InvalidParamTypeError(f"expected integer, got float {value}")
        elif not isinstance(value, int):
            raise InvalidParamTypeError(f"expected integer, got {_type_name(value)}")
    elif expected == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidParamTypeError(f"expected number, got {_type_name(value)}")
    elif expected == "boolean":
        if not isinstance(value, bool):
            raise InvalidParamTypeError(f"expected boolean, got {_type_name(value)}")
    elif expected == "array":
        if not isinstance(value, (list, tuple)):
            raise InvalidParamTypeError(f"expected array, got {_type_name(value)}")
    elif expected == "object":
        if not isinstance(value, dict):
            raise InvalidParamTypeError(f"expected object, got {_type_name(value)}")
    # Unknown types are not validated.


class Registry:
    """Holds tools by name and the factories that build them from configuration."""

    def __init__(self, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        self._lock = threading.RLock()
        self._tools: dict[str, Tool] = {}
        self._factories: dict[str, ToolFactory] = {}
        self._timeout = timeout

    @property
    def timeout(self) -> float | None:
        """Seconds each execution may take; None means no limit."""
        with self._lock:
            return self._timeout

    @timeout.setter
    def timeout(self, value: float | None) -> None:
        with self._lock:
            self._timeout = value

    def register_factory(self, tool_type: str, factory: ToolFactory) -> None:
        """Register the factory used by load_from_config for ``tool_type``."""
        with self._lock:
            if tool_type in self._factories:
                raise DuplicateFactoryError(f"factory already registered: {tool_type}")
            self._factories[tool_type] = factory

    def register(self, tool: Tool) -> None:
        """Add a tool; its name must not be taken yet."""
        with self._lock:
            if tool.name in self._tools:
                raise DuplicateToolError(f"tool already registered: {tool.name}")
            self._tools[tool.name] = tool

    def unregister(self, name: str) -> bool:
        """Remove a tool; True if it was registered."""
        with self._lock:
            return self._tools.pop(name, None) is not None

    def get(self, name: str) -> Tool | None:
        """The tool registered as ``name``, or None."""
        with self._lock:
            return self._tools.get(name)

    def names(self) -> list[str]:
        """Names of all registered tools, sorted."""
        with self._lock:
            return sorted(self._tools)

    def list_tools(self) -> list[Tool]:
        """All registered tools, ordered by name."""
        with self._lock:
            return [self._tools[name] for name in sorted(self._tools)]

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)

    async def execute(self, name: str, params: Mapping[str, Any] | None) -> dict[str, Any]:
        """Validate ``params`` against the tool's schema and run it within the timeout.

        The caller's mapping is never modified; defaults are applied to a copy.
        """
        tool = self.get(name)
        if tool is None:
            raise ToolNotFoundError(f"tool not found: {name}")

        exec_params: dict[str, Any] = dict(params or {})
        for param in tool.schema().inputs:
            if param.name not in exec_params:
                if param.required:
                    raise MissingParameterError(f"missing required parameter: {param.name}")
                if param.default is not None:
                    exec_params[param.name] = param.default
                continue
            try:
                _validate_param_type(exec_params[param.name], param.type, param.allowed)
            except InvalidParamTypeError as exc:
                raise InvalidParamTypeError(
                    f"invalid parameter type for parameter {param.name}: {exc}"
                ) from exc

        timeout = self.timeout
        scope = asyncio.timeout(timeout)
        try:
            async with scope:
                return await tool.execute(exec_params)
        except TimeoutError as exc:
            if scope.expired():
                raise ToolTimeoutError(
                    f"tool execution timed out: {name} after {timeout}s"
                ) from exc
            raise

    def load_from_config(self, tool_configs: Iterable[_ToolConfig]) -> None:
        """Build and register every enabled tool described in ``tool_configs``.

        All failures are collected and raised together as an ExceptionGroup.
        """
        errors: list[Exception] = []
        for cfg in tool_configs:
            if not cfg.enabled:
                continue
            with self._lock:
                factory = self._factories.get(cfg.type)
            if factory is None:
                errors.append(
                    RegistryError(f"unknown tool type {cfg.type!r} for tool {cfg.name!r}")
                )
                continue
            try:
                tool = factory(cfg)
            except Exception as exc:
                error = RegistryError(f"failed to create tool {cfg.name!r}: {exc}")
                error.__cause__ = exc
                errors.append(error)
                continue
            try:
                self.register(tool)
            except DuplicateToolError as exc:
                error = RegistryError(f"failed to register tool {cfg.name!r}: {exc}")
                error.__cause__ = exc
                errors.append(error)
        if errors:
            raise ExceptionGroup("failed to load tools from configuration", errors)