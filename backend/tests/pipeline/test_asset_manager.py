"""
Tests for AssetManager downloads, placeholders and cleanup.
"""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from pipeline.asset_manager import PLACEHOLDER_VIDEO_CONTENT, AssetManager
from pipeline.error_handler import ErrorCode, PipelineError
from tests.utils import mock_http_client


class TestDownloadVideo:

    @pytest.mark.asyncio
    async def test_streams_result_to_disk(self, tmp_path):
        client = mock_http_client(lambda request: httpx.Response(200, content=b"mp4-bytes" * 1000))
        manager = AssetManager(output_dir=str(tmp_path), http_client=client)

        path = await manager.download_video("https://cdn.example.com/result.mp4")

        assert Path(path).parent == tmp_path
        assert Path(path).suffix == ".mp4"
        assert Path(path).read_bytes() == b"mp4-bytes" * 1000

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, tmp_path):
        responses = iter([httpx.Response(503), httpx.Response(200, content=b"ok")])
        client = mock_http_client(lambda request: next(responses))
        manager = AssetManager(output_dir=str(tmp_path), http_client=client)

        with patch("pipeline.asset_manager.asyncio.sleep", new=AsyncMock()) as sleep:
            path = await manager.download_video("https://cdn.example.com/result.mp4")

        assert Path(path).read_bytes() == b"ok"
        sleep.assert_awaited_once_with(1)

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, tmp_path):
        client = mock_http_client(lambda request: httpx.Response(404))
        manager = AssetManager(output_dir=str(tmp_path), http_client=client)

        with patch("pipeline.asset_manager.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(PipelineError) as exc_info:
                await manager.download_video("https://cdn.example.com/missing.mp4", max_retries=3)

        assert exc_info.value.code == ErrorCode.ASSET_DOWNLOAD_FAILED
        assert list(tmp_path.iterdir()) == []


class TestPlaceholderAndCleanup:

    @pytest.mark.asyncio
    async def test_write_placeholder_video(self, tmp_path):
        manager = AssetManager(output_dir=str(tmp_path / "videos"))

        path = await manager.write_placeholder_video()

        assert Path(path).read_bytes() == PLACEHOLDER_VIDEO_CONTENT

    def test_cleanup_ignores_missing_and_empty(self, tmp_path):
        existing = tmp_path / "avatar.mp4"
        existing.write_bytes(b"x")
        manager = AssetManager(output_dir=str(tmp_path))

        manager.cleanup(str(existing), str(tmp_path / "gone.mp4"), None, "")

        assert not existing.exists()
