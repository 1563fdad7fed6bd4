import asyncio

import pytest

from trayassist.downie import DownieTool, MissingURLError, NotEnabledError
from trayassist.registry import InvalidParamTypeError, Registry


def test_name():
    assert DownieTool().name == "downie"


def test_description_not_empty():
    assert DownieTool().description != ""
    assert "Downie" in DownieTool().description


def test_new_keeps_enabled_flag():
    assert DownieTool(enabled=True).enabled is True
    assert DownieTool().enabled is False


def test_schema():
    schema = DownieTool().schema()
    assert len(schema.inputs) == 3

    url_param = schema.inputs[0]
    assert url_param.name == "url"
    assert url_param.required is True

    format_param = schema.inputs[1]
    assert format_param.required is False
    assert format_param.default == "mp4"
    assert len(format_param.allowed) > 0
    for fmt in ["mp4", "mkv", "webm", "m4v"]:
        assert fmt in format_param.allowed

    res_param = schema.inputs[2]
    assert len(res_param.allowed) > 0
    for res in ["2160p", "1440p", "1080p", "720p", "480p", "360p"]:
        assert res in res_param.allowed

    assert [p.name for p in schema.outputs] == ["status", "message"]


@pytest.mark.asyncio
async def test_execute_not_enabled():
    with pytest.raises(NotEnabledError):
        await DownieTool(enabled=False).execute({"url": "https://example.com"})


@pytest.mark.asyncio
async def test_execute_missing_url():
    with pytest.raises(MissingURLError):
        await DownieTool(enabled=True).execute({})


@pytest.mark.asyncio
async def test_execute_empty_url():
    with pytest.raises(MissingURLError):
        await DownieTool(enabled=True).execute({"url": ""})


@pytest.mark.asyncio
async def test_execute_context_cancelled():
    tool = DownieTool(enabled=True)
    task = asyncio.create_task(tool.execute({"url": "https://example.com"}))
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert task.cancelled() is True
    result = await tool.execute({"url": "https://example.com"})
    assert result["status"] == "pending"


@pytest.mark.asyncio
async def test_execute_deadline_exceeded():
    loop = asyncio.get_running_loop()
    with pytest.raises(TimeoutError):
        async with asyncio.timeout_at(loop.time() - 1):
            await DownieTool(enabled=True).execute({"url": "https://example.com"})


@pytest.mark.asyncio
async def test_execute_valid_request():
    result = await DownieTool(enabled=True).execute({"url": "https://example.com/video"})
    assert result["status"] == "pending"
    assert result["message"] == "Download request queued for: https://example.com/video"
    assert result["format"] == "mp4"
    assert result["resolution"] == "1080p"


@pytest.mark.asyncio
async def test_execute_custom_options():
    result = await DownieTool(enabled=True).execute(
        {"url": "https://example.com/video", "format": "mkv", "resolution": "720p"}
    )
    assert result["format"] == "mkv"
    assert result["resolution"] == "720p"


@pytest.mark.asyncio
async def test_registry_rejects_disallowed_format():
    registry = Registry()
    registry.register(DownieTool(enabled=True))
    with pytest.raises(InvalidParamTypeError):
        await registry.execute("downie", {"url": "https://example.com", "format": "avi"})


@pytest.mark.asyncio
async def test_registry_applies_defaults():
    registry = Registry()
    registry.register(DownieTool(enabled=True))
    result = await registry.execute("downie", {"url": "https://example.com"})
    assert result["format"] == "mp4"
    assert result["resolution"] == "1080p"