"""
Errors raised by the upload, video, website and Instagram stages.

Every failure carries an ErrorCode. The code picks the HTTP status the API
answers with and the default message shown to the user.
"""

from enum import Enum
from typing import Optional, Dict, Any

import httpx
import structlog

logger = structlog.get_logger(__name__)


class ErrorCode(Enum):
    """Failure codes, grouped by who has to act on them"""

    # Request problems (400, 404, 413)
    INVALID_INPUT = "INVALID_INPUT"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    MISSING_CREDENTIALS = "MISSING_CREDENTIALS"
    MISSING_SCRIPT = "MISSING_SCRIPT"
    MISSING_VIDEO = "MISSING_VIDEO"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"

    # Stage failures (500)
    SCRIPT_GENERATION_FAILED = "SCRIPT_GENERATION_FAILED"
    AVATAR_GENERATION_FAILED = "AVATAR_GENERATION_FAILED"
    PRODUCT_VIDEO_FAILED = "PRODUCT_VIDEO_FAILED"
    COMPOSITING_FAILED = "COMPOSITING_FAILED"
    VIDEO_GENERATION_FAILED = "VIDEO_GENERATION_FAILED"
    WEBSITE_GENERATION_FAILED = "WEBSITE_GENERATION_FAILED"
    SOCIAL_PUBLISH_FAILED = "SOCIAL_PUBLISH_FAILED"
    ASSET_DOWNLOAD_FAILED = "ASSET_DOWNLOAD_FAILED"

    # Vendor failures (500, 504 on timeout)
    VENDOR_API_ERROR = "VENDOR_API_ERROR"
    VENDOR_TASK_FAILED = "VENDOR_TASK_FAILED"
    VENDOR_TIMEOUT = "VENDOR_TIMEOUT"
    API_RATE_LIMIT = "API_RATE_LIMIT"

    # Local storage and database (500)
    DATABASE_ERROR = "DATABASE_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"


_CLIENT_ERROR_CODES = {
    ErrorCode.INVALID_INPUT,
    ErrorCode.FILE_TOO_LARGE,
    ErrorCode.UNSUPPORTED_FORMAT,
    ErrorCode.MISSING_REQUIRED_FIELD,
    ErrorCode.MISSING_CREDENTIALS,
    ErrorCode.MISSING_SCRIPT,
    ErrorCode.MISSING_VIDEO,
}

_HTTP_STATUS = {
    ErrorCode.PROJECT_NOT_FOUND: 404,
    ErrorCode.FILE_TOO_LARGE: 413,
    ErrorCode.VENDOR_TIMEOUT: 504,
}


class PipelineError(Exception):
    """
    A stage failure with its code, a technical message, vendor context and an
    optional message for the person using the app.

    Example:
        >>> raise PipelineError(
        ...     ErrorCode.AVATAR_GENERATION_FAILED,
        ...     "D-ID talk failed: face not detected",
        ...     {"step": 1}
        ... )
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self._user_message = user_message
        super().__init__(self.message)

    @property
    def http_status(self) -> int:
        """HTTP status code the API layer should answer with"""
        if self.code in _HTTP_STATUS:
            return _HTTP_STATUS[self.code]
        if self.code in _CLIENT_ERROR_CODES:
            return 400
        return 500

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form, used when the error is logged or returned as JSON"""
        return {
            "error_code": self.code.value,
            "message": self.message,
            "details": self.details,
            "user_message": self.get_user_friendly_message()
        }

    def get_user_friendly_message(self) -> str:
        """Message safe to show in the UI; the override wins over the per-code default"""
        if self._user_message:
            return self._user_message

        friendly_messages = {
            ErrorCode.INVALID_INPUT: "Please check your input and try again.",
            ErrorCode.FILE_TOO_LARGE: "Uploaded file is too large.",
            ErrorCode.UNSUPPORTED_FORMAT: "File format not supported. Please use PNG, JPG, WebP, MP4, MOV or AVI.",
            ErrorCode.MISSING_REQUIRED_FIELD: "Required field is missing. Please check your request.",
            ErrorCode.MISSING_CREDENTIALS: "A required API credential is not configured.",
            ErrorCode.MISSING_SCRIPT: "No script available. Please upload files first.",
            ErrorCode.MISSING_VIDEO: "No video available. Please generate a video first.",
            ErrorCode.PROJECT_NOT_FOUND: "Project not found.",

            ErrorCode.SCRIPT_GENERATION_FAILED: "Failed to generate script with AI.",
            ErrorCode.AVATAR_GENERATION_FAILED: "Failed to generate avatar video.",
            ErrorCode.PRODUCT_VIDEO_FAILED: "Failed to generate product video.",
            ErrorCode.COMPOSITING_FAILED: "Failed to composite final video.",
            ErrorCode.VIDEO_GENERATION_FAILED: "Failed to generate video.",
            ErrorCode.WEBSITE_GENERATION_FAILED: "Failed to generate website.",
            ErrorCode.SOCIAL_PUBLISH_FAILED: "Failed to upload to Instagram.",
            ErrorCode.ASSET_DOWNLOAD_FAILED: "Failed to download generated asset.",

            ErrorCode.VENDOR_API_ERROR: "An external AI service returned an error. Please try again.",
            ErrorCode.VENDOR_TASK_FAILED: "An external AI service could not complete the task.",
            ErrorCode.VENDOR_TIMEOUT: "An external AI service took too long to respond.",
            ErrorCode.API_RATE_LIMIT: "Too many requests. Please wait a moment and try again.",

            ErrorCode.DATABASE_ERROR: "Database error occurred. Please try again.",
            ErrorCode.STORAGE_ERROR: "Storage error occurred. Please try again.",
        }

        return friendly_messages.get(
            self.code,
            "An error occurred. Please try again."
        )

    def log_error(self) -> None:
        """Client and retryable errors log as warnings, the rest as errors"""
        log_data = self.to_dict()

        if self.code in _CLIENT_ERROR_CODES:
            logger.warning("client_error", **log_data)
        elif should_retry(self):
            logger.warning("retryable_error", **log_data)
        else:
            logger.error("pipeline_error", **log_data)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


def should_retry(error: Exception) -> bool:
    """
    True when the same call may succeed if repeated: rate limits, vendor 5xx,
    timeouts and dropped connections.

    Example:
        >>> should_retry(PipelineError(ErrorCode.API_RATE_LIMIT, "429"))
        True
        >>> should_retry(PipelineError(ErrorCode.MISSING_SCRIPT, "no script"))
        False
    """
    retryable_codes = [
        ErrorCode.API_RATE_LIMIT,
        ErrorCode.VENDOR_TIMEOUT,
        ErrorCode.ASSET_DOWNLOAD_FAILED,
        ErrorCode.DATABASE_ERROR,
    ]

    if isinstance(error, VendorAPIError):
        return error.status_code is None or error.status_code >= 500 or error.status_code == 429

    if isinstance(error, PipelineError):
        return error.code in retryable_codes

    if isinstance(error, (httpx.TransportError, TimeoutError, ConnectionError)):
        return True

    return False


class VendorAPIError(PipelineError):
    """
    Error for an unexpected response from an external AI service.

    Carries the service name and HTTP status so callers can wrap it in a
    stage-specific error without losing the vendor context.
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict] = None
    ):
        error_details = dict(details or {})
        error_details["service"] = service
        if status_code is not None:
            error_details["status_code"] = status_code

        code = ErrorCode.API_RATE_LIMIT if status_code == 429 else ErrorCode.VENDOR_API_ERROR

        self.service = service
        self.status_code = status_code
        super().__init__(code, f"{service}: {message}", error_details)

    @classmethod
    def from_response(cls, service: str, response: httpx.Response, action: str) -> "VendorAPIError":
        """Build an error from a non-success vendor response"""
        return cls(
            service,
            f"{action} failed (status {response.status_code}): {response.text}",
            status_code=response.status_code,
        )


def stage_error(code: ErrorCode, error: Exception, **details) -> PipelineError:
    """
    Wrap any exception raised inside a stage in a stage-specific PipelineError.

    Vendor context (service, status code, task id) is preserved in details.
    Client errors such as missing credentials are returned unchanged.
    """
    if isinstance(error, PipelineError) and error.code in _CLIENT_ERROR_CODES:
        return error

    merged = {}
    if isinstance(error, PipelineError):
        merged.update(error.details)
        merged["cause"] = error.code.value
        message = error.message
    else:
        merged["cause"] = type(error).__name__
        message = str(error) or type(error).__name__
    merged.update(details)

    # Timeouts stay timeouts so the API can answer 504
    if isinstance(error, PipelineError) and error.code == ErrorCode.VENDOR_TIMEOUT:
        code = ErrorCode.VENDOR_TIMEOUT

    return PipelineError(code, message, merged)
