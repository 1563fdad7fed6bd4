"""Video download tool driven through the Downie application."""

from __future__ import annotations

import asyncio
from typing import Any

from trayassist.params import get_optional_string, get_required_string
from trayassist.registry import Parameter, Tool, ToolSchema

FORMATS = ("mp4", "mkv", "webm", "m4v")
RESOLUTIONS = ("2160p", "1440p", "1080p", "720p", "480p", "360p")


class NotEnabledError(RuntimeError):
    """The Downie tool is disabled."""

    def __init__(self) -> None:
        super().__init__("downie tool is not enabled")


class MissingURLError(ValueError):
    """No video URL was given."""

    def __init__(self) -> None:
        super().__init__("url parameter is required")


class DownieTool(Tool):
    """Queues video downloads in Downie."""

    name = "downie"
    description = "Download videos using Downie application"

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def schema(self) -> ToolSchema:
        """Inputs: url, format and resolution; outputs: status and message."""
        return ToolSchema(
            inputs=[
                Parameter(
                    name="url",
                    type="string",
                    required=True,
                    description="The video URL to download",
                ),
                Parameter(
                    name="format",
                    type="string",
                    required=False,
                    default="mp4",
                    description="Output format",
                    allowed=FORMATS,
                ),
                Parameter(
                    name="resolution",
                    type="string",
                    required=False,
                    default="1080p",
                    description="Video resolution",
                    allowed=RESOLUTIONS,
                ),
            ],
            outputs=[
                Parameter(
                    name="status",
                    type="string",
                    required=True,
                    description="Download status",
                ),
                Parameter(
                    name="message",
                    type="string",
                    required=True,
                    description="Status message",
                ),
            ],
        )

    async def execute(self, params: dict[str, Any]) -> dict[str, Any]:
        """Queue a download of ``params["url"]``.

        Raises CancelledError or TimeoutError first if the calling task is
        already cancelled or past its deadline.
        """
        await asyncio.sleep(0)

        if not self.enabled:
            raise NotEnabledError()

        try:
            url = get_required_string(params, "url")
        except ValueError as exc:
            raise MissingURLError() from exc

        video_format = get_optional_string(params, "format", "mp4")
        resolution = get_optional_string(params, "resolution", "1080p")

        return {
            "status": "pending",
            "message": f"Download request queued for: {url}",
            "format": video_format,
            "resolution": resolution,
        }