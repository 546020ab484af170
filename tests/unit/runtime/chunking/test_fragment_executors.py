"""Unit tests for fragment dispatch logic."""

from __future__ import annotations

import asyncio

import pytest

from langtool.client.core import DispatchMode, FragmentCheckError, ServerError, ServerOverloadedError
from langtool.client.models import CheckRequest
from langtool.client.runtime.chunking import DispatchPolicy, FragmentExecutor, RetryPolicy

TEXTS = ["First part.\n\n", "Second part.\n\n", "Third."]


def _requests() -> list[CheckRequest]:
    return [CheckRequest(text=t, language="en-US") for t in TEXTS]


class TestFragmentExecutor:
    """Test FragmentExecutor functionality."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", [DispatchMode.SEQUENTIAL, DispatchMode.CONCURRENT])
    async def test_responses_follow_request_order(self, mode, make_response):
        """Test responses are bound to their fragment text in order."""

        async def check(request: CheckRequest):
            return make_response([TEXTS.index(request.text)])

        result = await FragmentExecutor(DispatchPolicy(mode=mode)).execute(
            requests=_requests(), check=check
        )

        assert [r.text for r in result.responses] == TEXTS
        assert [r.matches[0].offset for r in result.responses] == [0, 1, 2]
        assert result.fragments_used == 3
        assert result.attempts == 3
        assert result.total_matches == 3
        assert len(result.latencies_ms) == 3

    @pytest.mark.asyncio
    async def test_concurrent_order_with_out_of_order_completion(self, make_response):
        """Test the first fragment finishing last still comes first."""
        finished: list[int] = []

        async def check(request: CheckRequest):
            index = TEXTS.index(request.text)
            await asyncio.sleep(0.03 * (len(TEXTS) - index))
            finished.append(index)
            return make_response([index])

        result = await FragmentExecutor(DispatchPolicy()).execute(
            requests=_requests(), check=check
        )

        assert finished == [2, 1, 0]
        assert [r.text for r in result.responses] == TEXTS

    @pytest.mark.asyncio
    async def test_concurrent_requests_overlap(self, make_response):
        """Test concurrent mode has several requests in flight."""
        in_flight = 0
        peak = 0

        async def check(request: CheckRequest):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return make_response()

        await FragmentExecutor(DispatchPolicy()).execute(requests=_requests(), check=check)
        assert peak == 3

    @pytest.mark.asyncio
    async def test_max_concurrency(self, make_response):
        """Test max_concurrency caps the requests in flight."""
        in_flight = 0
        peak = 0

        async def check(request: CheckRequest):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return make_response()

        policy = DispatchPolicy(max_concurrency=1)
        await FragmentExecutor(policy).execute(requests=_requests(), check=check)
        assert peak == 1

    @pytest.mark.asyncio
    async def test_sequential_runs_one_at_a_time(self, make_response):
        """Test sequential mode sends requests in order, one by one."""
        calls: list[str] = []

        async def check(request: CheckRequest):
            calls.append(request.text)
            return make_response()

        policy = DispatchPolicy(mode=DispatchMode.SEQUENTIAL)
        await FragmentExecutor(policy).execute(requests=_requests(), check=check)
        assert calls == TEXTS

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", [DispatchMode.SEQUENTIAL, DispatchMode.CONCURRENT])
    async def test_failure_aborts_dispatch(self, mode, make_response):
        """Test one failing fragment fails the whole dispatch."""

        async def check(request: CheckRequest):
            if request.text == TEXTS[1]:
                raise ServerError("bad request", status_code=400, body="bad request")
            return make_response()

        with pytest.raises(FragmentCheckError) as exc_info:
            await FragmentExecutor(DispatchPolicy(mode=mode)).execute(
                requests=_requests(), check=check
            )

        assert exc_info.value.fragment_index == 1
        assert exc_info.value.fragment_count == 3
        assert isinstance(exc_info.value.__cause__, ServerError)

    @pytest.mark.asyncio
    async def test_failure_cancels_pending_fragments(self, make_response):
        """Test slow fragments are cancelled once another one failed."""
        cancelled = asyncio.Event()

        async def check(request: CheckRequest):
            if request.text == TEXTS[0]:
                raise ServerError("boom", status_code=500)
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return make_response()

        with pytest.raises(FragmentCheckError):
            await FragmentExecutor(DispatchPolicy()).execute(requests=_requests(), check=check)
        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_sequential_failure_stops_remaining(self, make_response):
        """Test sequential mode does not send fragments after a failure."""
        calls: list[str] = []

        async def check(request: CheckRequest):
            calls.append(request.text)
            raise ServerError("boom", status_code=500)

        policy = DispatchPolicy(mode=DispatchMode.SEQUENTIAL)
        with pytest.raises(FragmentCheckError):
            await FragmentExecutor(policy).execute(requests=_requests(), check=check)
        assert calls == TEXTS[:1]

    @pytest.mark.asyncio
    async def test_retry_on_overload(self, make_response):
        """Test overloaded answers are retried until success."""
        failures = {t: 2 for t in TEXTS}

        async def check(request: CheckRequest):
            if failures[request.text] > 0:
                failures[request.text] -= 1
                raise ServerOverloadedError(status_code=503)
            return make_response()

        policy = DispatchPolicy(retry=RetryPolicy())
        result = await FragmentExecutor(policy).execute(requests=_requests(), check=check)

        assert len(result.responses) == 3
        assert result.attempts == 9

    @pytest.mark.asyncio
    async def test_retry_gives_up_after_max_attempts(self):
        """Test max_attempts bounds the number of tries."""
        calls = 0

        async def check(request: CheckRequest):
            nonlocal calls
            calls += 1
            raise ServerOverloadedError(status_code=503)

        policy = DispatchPolicy(
            mode=DispatchMode.SEQUENTIAL, retry=RetryPolicy(max_attempts=3)
        )
        with pytest.raises(FragmentCheckError) as exc_info:
            await FragmentExecutor(policy).execute(requests=_requests()[:1], check=check)

        assert calls == 3
        assert isinstance(exc_info.value.__cause__, ServerOverloadedError)

    @pytest.mark.asyncio
    async def test_non_transient_errors_are_not_retried(self):
        """Test the default predicate only retries overload errors."""
        calls = 0

        async def check(request: CheckRequest):
            nonlocal calls
            calls += 1
            raise ServerError("bad request", status_code=400, body="bad request")

        policy = DispatchPolicy(retry=RetryPolicy())
        with pytest.raises(FragmentCheckError):
            await FragmentExecutor(policy).execute(requests=_requests()[:1], check=check)
        assert calls == 1

    @pytest.mark.asyncio
    async def test_no_retry_without_policy(self):
        """Test overload errors are final when no retry policy is set."""
        calls = 0

        async def check(request: CheckRequest):
            nonlocal calls
            calls += 1
            raise ServerOverloadedError(status_code=503)

        with pytest.raises(FragmentCheckError):
            await FragmentExecutor().execute(requests=_requests()[:1], check=check)
        assert calls == 1

    @pytest.mark.asyncio
    async def test_empty_requests(self):
        """Test zero requests give an empty result."""

        async def check(request: CheckRequest):
            raise AssertionError("check must not be called")

        result = await FragmentExecutor().execute(requests=[], check=check)
        assert result.responses == []
        assert result.fragments_used == 0
        assert result.attempts == 0


class TestRetryPolicy:
    """Test RetryPolicy decisions."""

    def test_should_retry_overload(self):
        """Test the default predicate accepts overload errors."""
        assert RetryPolicy().should_retry(ServerOverloadedError(), attempt=1)

    def test_should_not_retry_other_errors(self):
        """Test other errors are not retried."""
        assert not RetryPolicy().should_retry(ServerError("x", status_code=400), attempt=1)
        assert not RetryPolicy().should_retry(ValueError("x"), attempt=1)

    def test_max_attempts(self):
        """Test the last allowed attempt is not retried."""
        policy = RetryPolicy(max_attempts=2)
        assert policy.should_retry(ServerOverloadedError(), attempt=1)
        assert not policy.should_retry(ServerOverloadedError(), attempt=2)

    def test_custom_predicate(self):
        """Test a custom predicate replaces the default."""
        policy = RetryPolicy(predicate=lambda exc: isinstance(exc, TimeoutError))
        assert policy.should_retry(TimeoutError(), attempt=5)

    def test_invalid_values(self):
        """Test invalid settings are rejected."""
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)
        with pytest.raises(ValueError):
            RetryPolicy(delay=-1)
        with pytest.raises(ValueError):
            DispatchPolicy(max_concurrency=0)
