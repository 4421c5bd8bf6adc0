"""
Tests for the shared poll-until-terminal loop.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from pipeline.error_handler import ErrorCode, PipelineError
from services.polling import (
    TaskPending,
    VendorTaskFailed,
    poll_until_complete,
    read_status_payload,
)


class TestReadStatusPayload:
    """Test decoding of a single status response."""

    def test_returns_json_object(self):
        response = httpx.Response(200, json={"status": "done"})
        assert read_status_payload(response) == {"status": "done"}

    def test_non_200_is_pending(self):
        with pytest.raises(TaskPending) as exc_info:
            read_status_payload(httpx.Response(502, text="bad gateway"))
        assert exc_info.value.status == "http_502"

    def test_malformed_body_is_pending(self):
        with pytest.raises(TaskPending):
            read_status_payload(httpx.Response(200, text="<html>"))
        with pytest.raises(TaskPending):
            read_status_payload(httpx.Response(200, json=["not", "an", "object"]))


class TestPollUntilComplete:
    """Test bounded polling."""

    @pytest.mark.asyncio
    async def test_returns_result_after_pending(self):
        check = AsyncMock(side_effect=[TaskPending("started"), TaskPending("processing"), "https://cdn/x.mp4"])

        result = await poll_until_complete(check, service="d-id", task_id="tlk_1", max_attempts=5, interval=0)

        assert result == "https://cdn/x.mp4"
        assert check.await_count == 3

    @pytest.mark.asyncio
    async def test_transport_errors_are_retried(self):
        check = AsyncMock(side_effect=[httpx.ReadTimeout("slow"), "done-url"])

        result = await poll_until_complete(check, service="runwayml", task_id="task_1", max_attempts=3, interval=0)

        assert result == "done-url"

    @pytest.mark.asyncio
    async def test_terminal_failure_is_not_retried(self):
        check = AsyncMock(side_effect=VendorTaskFailed("shotstack", "render_1", "bad asset"))

        with pytest.raises(VendorTaskFailed) as exc_info:
            await poll_until_complete(check, service="shotstack", task_id="render_1", max_attempts=5, interval=0)

        assert check.await_count == 1
        assert exc_info.value.code == ErrorCode.VENDOR_TASK_FAILED
        assert exc_info.value.details == {"service": "shotstack", "task_id": "render_1"}

    @pytest.mark.asyncio
    async def test_exhausted_attempts_raise_timeout(self):
        check = AsyncMock(side_effect=TaskPending("processing"))

        with pytest.raises(PipelineError) as exc_info:
            await poll_until_complete(check, service="instagram", task_id="c_1", max_attempts=4, interval=0)

        assert check.await_count == 4
        assert exc_info.value.code == ErrorCode.VENDOR_TIMEOUT
        assert exc_info.value.details["attempts"] == 4

    @pytest.mark.asyncio
    async def test_defaults_come_from_settings(self):
        # POLL_MAX_ATTEMPTS is 3 under test
        check = AsyncMock(side_effect=TaskPending("processing"))

        with pytest.raises(PipelineError):
            await poll_until_complete(check, service="d-id", task_id="tlk_2")

        assert check.await_count == 3

    @pytest.mark.asyncio
    async def test_lambda_returning_coroutine_is_awaited(self):
        statuses = iter(["pending", "pending", "done"])

        async def get_status(task_id):
            status = next(statuses)
            if status != "done":
                raise TaskPending(status)
            return f"https://cdn/{task_id}.mp4"

        result = await poll_until_complete(
            lambda: get_status("tlk_3"),
            service="d-id",
            task_id="tlk_3",
            max_attempts=5,
            interval=0,
        )

        assert result == "https://cdn/tlk_3.mp4"

    @pytest.mark.asyncio
    async def test_lambda_terminal_failure_propagates(self):
        async def get_status():
            raise VendorTaskFailed("instagram", "c_1", "container status ERROR")

        with pytest.raises(VendorTaskFailed):
            await poll_until_complete(lambda: get_status(), service="instagram", task_id="c_1", interval=0)
