"""
Temporary public hosting for local files.

Shotstack and the Instagram Graph API only accept media by public URL, so
locally stored videos are pushed to an anonymous file host first.
"""

from pathlib import Path
from typing import Optional

import aiofiles
import httpx
import structlog
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from config import settings
from pipeline.error_handler import VendorAPIError


logger = structlog.get_logger(__name__)


class TemporaryFileHost:
    """
    Uploads files to file.io (JSON response) or 0x0.st (plain-text response).

    Usage:
        host = TemporaryFileHost()
        url = await host.upload_to_file_io("./generated/videos/avatar.mp4")
    """

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        self._http_client = http_client
        self.logger = logger.bind(service="file_host")

    @retry(
        stop=stop_after_attempt(settings.VENDOR_MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
        reraise=True,
    )
    async def _post_file(self, url: str, file_path: str) -> httpx.Response:
        async with aiofiles.open(file_path, "rb") as f:
            content = await f.read()
        files = {"file": (Path(file_path).name, content, "application/octet-stream")}

        if self._http_client is not None:
            return await self._http_client.post(url, files=files)
        async with httpx.AsyncClient(timeout=settings.VENDOR_HTTP_TIMEOUT) as client:
            return await client.post(url, files=files)

    async def upload_to_file_io(self, file_path: str) -> str:
        """
        Upload to file.io.

        Returns:
            Public link to the file
        """
        response = await self._post_file(settings.FILE_IO_URL, file_path)
        if response.status_code not in (200, 201):
            raise VendorAPIError.from_response("file.io", response, "upload")

        try:
            result = response.json()
        except ValueError:
            raise VendorAPIError("file.io", f"failed to parse upload response: {response.text[:200]}")

        if not isinstance(result, dict) or result.get("success") is not True:
            raise VendorAPIError("file.io", f"upload failed: {result}")

        link = result.get("link")
        if not link:
            raise VendorAPIError("file.io", "no link in upload response")

        self.logger.info("file_hosted", host="file.io", path=file_path, url=link)
        return link

    async def upload_to_0x0(self, file_path: str) -> str:
        """
        Upload to 0x0.st.

        Returns:
            Public URL of the file
        """
        response = await self._post_file(settings.ZERO_X_ZERO_URL, file_path)
        if response.status_code != 200:
            raise VendorAPIError.from_response("0x0.st", response, "upload")

        url = response.text.strip()
        if not url:
            raise VendorAPIError("0x0.st", "empty upload response")

        self.logger.info("file_hosted", host="0x0.st", path=file_path, url=url)
        return url
