# trayassist

Building blocks for a small desktop assistant: a registry that validates
parameters and runs tools under a timeout, a structured logger that hides
sensitive values, error reporters, and semantic version comparison.

## Installation

```
pip install trayassist
```

With the test dependencies:

```
pip install "trayassist[test]"
```

## Modules

- `trayassist.errors`: `AppError`, an exception carrying a code from
  `ErrorCode`, a message, an optional cause, a request ID and extra context.
  `with_cause`, `with_message`, `with_request_id` and `with_extra` return new
  errors and leave the original alone. `matches` compares errors by code and
  `user_message` gives text fit for end users. `wrap_error`, `get_app_error`
  and `is_app_error` build errors and search a cause chain for them.
- `trayassist.logger`: `Logger` writes one text or JSON line per record at
  `Level.DEBUG`, `INFO`, `WARN` or `ERROR` (`parse_level` maps names such as
  `"warn"` to a level). Fields passed to `debug`, `info`, `warn` or `error`
  whose key or string value looks like a secret (`api_key`, `password`,
  `token`, `secret`, `auth`, a `Bearer token` value and the like) are written
  as `[REDACTED]`. `bind`, `with_group`, `with_request_id`, `with_tool` and
  `with_platform` return loggers that add fields to every record.
  `request_id_context` sets the current request ID inside a `with` block and
  `current_request_id` reads it.
- `trayassist.reporter`: `ErrorReporter` and its implementations
  `NoOpReporter`, `LogReporter` (logs the error with its code, request ID and
  context) and `MultiReporter`, which hands each error to all its reporters
  on separate threads and stops waiting after its timeout (5 seconds by
  default, changed with `with_timeout`).
- `trayassist.params`: `get_required_string`, `get_optional_string`,
  `get_optional_int` and `get_optional_bool` read typed values from a
  parameter dictionary.
- `trayassist.registry`: a thread-safe `Registry` of `Tool` objects. Its
  async `execute` checks parameters against the tool's `ToolSchema`
  (required names, types, allowed string values), fills in defaults on a
  copy, and raises `ToolTimeoutError` when the tool runs past
  `Registry.timeout` (600 seconds by default). `register_factory` and
  `load_from_config` build tools from configuration objects that have
  `name`, `type` and `enabled` attributes; failures are raised together as
  an `ExceptionGroup`.
- `trayassist.updater`: `Updater` compares semantic versions with or
  without a leading `v`. A current version of `dev`, `none` or an empty
  string is treated as `0.0.0`.
- `trayassist.downie` and `trayassist.gdrive`: `DownieTool` and
  `GoogleDriveTool`, tools that validate a download or upload request and
  answer with a `"pending"` status.

## Example

```python
import asyncio

from trayassist.downie import DownieTool
from trayassist.registry import Registry

registry = Registry(timeout=30)
registry.register(DownieTool(enabled=True))

result = asyncio.run(registry.execute("downie", {"url": "https://example.com/video"}))
print(result["status"], result["format"], result["resolution"])
# pending mp4 1080p
```

## What it does not do

- It has no system tray icon, menu or command-line program; it is a library.
- `Updater.check_for_update` does not contact any release server and always
  reports no update; `Updater.update` downloads and installs nothing.
- `DownieTool` does not start a download and `GoogleDriveTool` does not
  upload a file; both only return a pending response.
- It does not read configuration files; `load_from_config` takes objects you
  have already built.

## Running the tests

```
pytest
```