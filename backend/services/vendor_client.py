"""
Base class for the third-party AI service clients.

Each vendor client shares:
- Credential check at construction time
- An httpx.AsyncClient (injectable for tests, created per call otherwise)
- Retry with exponential backoff on connection failures
- structlog logger bound to the service name
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

import httpx
import structlog
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from config import settings
from pipeline.error_handler import ErrorCode, PipelineError, VendorAPIError


logger = structlog.get_logger(__name__)


def mask_secret(secret: str) -> str:
    """Show only the first and last characters of a credential"""
    if not secret:
        return ""
    if len(secret) <= 8:
        return "***"
    return f"{secret[:4]}...{secret[-4:]}"


class VendorClient:
    """
    Common plumbing for vendor API wrappers.

    Subclasses set ``service_name`` and ``credential_env`` and override
    ``_auth_headers``.
    """

    service_name = "vendor"
    credential_env = ""

    def __init__(
        self,
        api_key: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        if not api_key:
            raise PipelineError(
                ErrorCode.MISSING_CREDENTIALS,
                f"{self.credential_env} not configured",
                {"service": self.service_name},
                user_message=f"{self.credential_env} not configured.",
            )

        self.api_key = api_key
        self._http_client = http_client
        self.timeout = timeout or settings.VENDOR_HTTP_TIMEOUT
        self.logger = logger.bind(service=self.service_name)

        self.logger.debug("vendor_client_initialized", api_key=mask_secret(api_key))

    def _auth_headers(self) -> Dict[str, str]:
        return {}

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            yield client

    @retry(
        stop=stop_after_attempt(settings.VENDOR_MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
        reraise=True,
    )
    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """
        Send one request with the client's auth headers.

        Connection failures are retried; any response, including error
        statuses, is returned to the caller.
        """
        headers = {**self._auth_headers(), **kwargs.pop("headers", {})}
        async with self._client() as client:
            return await client.request(method, url, headers=headers, **kwargs)

    def _json(self, response: httpx.Response, action: str) -> dict:
        """Decode a JSON object body or raise VendorAPIError"""
        try:
            payload = response.json()
        except ValueError:
            raise VendorAPIError(
                self.service_name,
                f"{action} returned a non-JSON body: {response.text[:200]}",
                status_code=response.status_code,
            )
        if not isinstance(payload, dict):
            raise VendorAPIError(
                self.service_name,
                f"{action} returned unexpected JSON: {payload!r}",
                status_code=response.status_code,
            )
        return payload

    def _require_success(self, response: httpx.Response, action: str, accepted=(200, 201)) -> None:
        if response.status_code not in accepted:
            self.logger.error(
                "vendor_request_failed",
                action=action,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise VendorAPIError.from_response(self.service_name, response, action)
