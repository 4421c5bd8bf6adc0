"""
Asset manager for generated media on local disk.

Handles:
- Streaming vendor result videos into GENERATED_VIDEO_PATH
- Placeholder videos for the mock provider
- Cleanup of intermediate files
"""

import asyncio
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
import httpx
import structlog

from config import settings
from pipeline.error_handler import ErrorCode, PipelineError


logger = structlog.get_logger(__name__)


PLACEHOLDER_VIDEO_CONTENT = b"Placeholder video - integrate with AI service"


class AssetManager:
    """
    Manages generated video files.

    Every generated video is stored as ``<GENERATED_VIDEO_PATH>/<uuid>.mp4``.

    Example:
        >>> am = AssetManager()
        >>> path = await am.download_video("https://cdn.example.com/result.mp4")
    """

    def __init__(
        self,
        output_dir: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize asset manager.

        Args:
            output_dir: Directory for generated videos (default: GENERATED_VIDEO_PATH)
            http_client: Optional shared httpx client
        """
        self.output_dir = Path(output_dir or settings.GENERATED_VIDEO_PATH)
        self._http_client = http_client

    def new_video_path(self) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / f"{uuid.uuid4()}.mp4"

    async def _stream_to_file(self, client: httpx.AsyncClient, url: str, file_path: Path) -> None:
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            async with aiofiles.open(file_path, "wb") as f:
                async for chunk in response.aiter_bytes(8192):
                    await f.write(chunk)

    async def download_video(self, url: str, max_retries: int = 3) -> str:
        """
        Download a result video with exponential backoff retry.

        Retries transient failures:
        - Attempt 1: immediate
        - Attempt 2: wait 1 second
        - Attempt 3: wait 2 seconds

        Returns:
            Path to the downloaded file

        Raises:
            PipelineError: ASSET_DOWNLOAD_FAILED when every attempt fails
        """
        file_path = self.new_video_path()

        for attempt in range(max_retries):
            try:
                if self._http_client is not None:
                    await self._stream_to_file(self._http_client, url, file_path)
                else:
                    async with httpx.AsyncClient(
                        timeout=settings.VENDOR_HTTP_TIMEOUT,
                        follow_redirects=True,
                    ) as client:
                        await self._stream_to_file(client, url, file_path)

                logger.info("video_downloaded", url=url, path=str(file_path))
                return str(file_path)

            except httpx.HTTPError as e:
                # Clean up partial download
                if file_path.exists():
                    file_path.unlink()

                if attempt == max_retries - 1:
                    logger.error("video_download_failed", url=url, attempts=max_retries, error=str(e))
                    raise PipelineError(
                        ErrorCode.ASSET_DOWNLOAD_FAILED,
                        f"Failed to download {url}: {e}",
                        {"url": url, "attempts": max_retries},
                    )

                delay = 2 ** attempt
                logger.warning(
                    "video_download_retrying",
                    url=url,
                    attempt=attempt + 1,
                    delay=delay,
                    error=str(e),
                )
                await asyncio.sleep(delay)

        raise PipelineError(ErrorCode.ASSET_DOWNLOAD_FAILED, f"Failed to download {url}")

    async def write_placeholder_video(self) -> str:
        """Write the mock provider's placeholder file"""
        file_path = self.new_video_path()
        async with aiofiles.open(file_path, "wb") as f:
            await f.write(PLACEHOLDER_VIDEO_CONTENT)
        logger.info("placeholder_video_written", path=str(file_path))
        return str(file_path)

    def cleanup(self, *paths: Optional[str]) -> None:
        """Remove intermediate files, ignoring the ones already gone"""
        for path in paths:
            if not path:
                continue
            try:
                Path(path).unlink()
                logger.debug("intermediate_file_removed", path=path)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("intermediate_file_cleanup_failed", path=path, error=str(e))
