"""
Shared create-task / poll-until-terminal helper.

Every vendor in the pipeline (D-ID, RunwayML, Synthesia, Shotstack and the
Instagram Graph API) exposes the same shape: a task is created, its status is
polled at a fixed interval for a bounded number of attempts, and the result
URL is read once the task reaches a terminal state. This module owns that
loop so each client only has to describe how to read one status response.

A status check callable must:
- return the terminal result when the task succeeded,
- raise ``TaskPending`` while the task is still running,
- raise ``VendorTaskFailed`` when the vendor reports a terminal failure.

Transport errors raised by the check are logged and treated as "still
pending". Exhausting the attempts raises ``PipelineError(VENDOR_TIMEOUT)``.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryError,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from config import settings
from pipeline.error_handler import ErrorCode, PipelineError


logger = structlog.get_logger(__name__)


class TaskPending(Exception):
    """Raised by a status check while the vendor task has not finished"""

    def __init__(self, status: Optional[str] = None):
        self.status = status
        super().__init__(f"task pending (status={status})")


class VendorTaskFailed(PipelineError):
    """Vendor reported a terminal failure for a task"""

    def __init__(self, service: str, task_id: str, reason: str):
        self.service = service
        self.task_id = task_id
        self.reason = reason
        super().__init__(
            ErrorCode.VENDOR_TASK_FAILED,
            f"{service} task {task_id} failed: {reason}",
            {"service": service, "task_id": task_id},
        )


def read_status_payload(response: httpx.Response) -> dict:
    """
    Decode a poll response body.

    Non-success responses and malformed bodies are not terminal: they are
    reported as pending so the poll loop tries again.
    """
    if response.status_code != 200:
        raise TaskPending(f"http_{response.status_code}")
    try:
        payload = response.json()
    except ValueError:
        raise TaskPending("malformed_response")
    if not isinstance(payload, dict):
        raise TaskPending("malformed_response")
    return payload


def _log_poll_retry(service: str, task_id: str) -> Callable[[RetryCallState], None]:
    def _before_sleep(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, TaskPending):
            logger.info(
                "task_poll_pending",
                service=service,
                task_id=task_id,
                attempt=retry_state.attempt_number,
                status=error.status,
            )
        else:
            logger.warning(
                "task_poll_error",
                service=service,
                task_id=task_id,
                attempt=retry_state.attempt_number,
                error=str(error),
            )
    return _before_sleep


async def poll_until_complete(
    check: Callable[[], Awaitable[Any]],
    *,
    service: str,
    task_id: str,
    max_attempts: Optional[int] = None,
    interval: Optional[float] = None,
) -> Any:
    """
    Poll a vendor task until it reaches a terminal state.

    Args:
        check: Async callable performing one status request
        service: Vendor name used in logs and errors
        task_id: Vendor task identifier
        max_attempts: Maximum number of status requests (default: POLL_MAX_ATTEMPTS)
        interval: Seconds between requests (default: POLL_INTERVAL_SECONDS)

    Returns:
        Whatever ``check`` returns for the terminal success state

    Raises:
        VendorTaskFailed: Vendor reported a terminal failure
        PipelineError: VENDOR_TIMEOUT when attempts are exhausted
    """
    max_attempts = max_attempts or settings.POLL_MAX_ATTEMPTS
    interval = settings.POLL_INTERVAL_SECONDS if interval is None else interval

    logger.info(
        "task_poll_started",
        service=service,
        task_id=task_id,
        max_attempts=max_attempts,
        interval=interval,
    )

    # Freshly created tasks are never done, wait one interval first
    if interval:
        await asyncio.sleep(interval)

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_fixed(interval),
        retry=retry_if_exception_type((TaskPending, httpx.TransportError)),
        before_sleep=_log_poll_retry(service, task_id),
    )

    # Callers pass lambdas returning a coroutine; tenacity only awaits coroutine functions
    async def _attempt():
        return await check()

    try:
        result = await retrying(_attempt)
    except RetryError as e:
        last_error = e.last_attempt.exception()
        logger.error(
            "task_poll_timeout",
            service=service,
            task_id=task_id,
            attempts=max_attempts,
            last_error=str(last_error),
        )
        raise PipelineError(
            ErrorCode.VENDOR_TIMEOUT,
            f"{service} task {task_id} did not finish after {max_attempts} attempts",
            {"service": service, "task_id": task_id, "attempts": max_attempts},
        )

    logger.info("task_poll_completed", service=service, task_id=task_id)
    return result
