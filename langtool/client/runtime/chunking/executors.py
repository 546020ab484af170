"""Fragment dispatch logic.

This module provides the FragmentExecutor class that sends the fragments of
a split request to the server, sequentially or concurrently, and hands back
the responses in fragment order whatever the completion order was.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from time import perf_counter

from ...core.enums import DispatchMode
from ...core.exceptions import FragmentCheckError
from ...models import CheckRequest, CheckResponse, ResponseWithContext
from .definitions import DispatchPolicy, DispatchResult, FragmentPlan
from .telemetry import (
    log_dispatch_complete,
    log_fragment_completed,
    log_fragment_error,
    log_fragment_retry,
)

CheckFn = Callable[[CheckRequest], Awaitable[CheckResponse]]


class FragmentExecutor:
    """Executes fragment requests and collects their responses.

    The executor takes the per-fragment requests produced by the planner and
    a check function, runs every request, and returns the responses bound to
    their fragment text. The whole dispatch fails as soon as one fragment
    fails; no partial result is returned.
    """

    def __init__(self, policy: DispatchPolicy | None = None) -> None:
        """Initialize fragment executor.

        Args:
            policy: Dispatch policy (defaults to concurrent, no retry)
        """
        self._policy = policy or DispatchPolicy()

    @property
    def policy(self) -> DispatchPolicy:
        return self._policy

    async def execute(
        self,
        *,
        requests: Sequence[CheckRequest],
        check: CheckFn,
    ) -> DispatchResult:
        """Check every fragment request.

        Args:
            requests: Fragment requests in document order
            check: Async function sending one request to the server

        Returns:
            DispatchResult whose responses follow the order of ``requests``

        Raises:
            InvalidRequestError: If a request has neither text nor data
            FragmentCheckError: If checking a fragment failed; the original
                error is chained
        """
        texts = [request.try_get_text() for request in requests]
        count = len(requests)
        plans = [
            FragmentPlan(fragment_index=i, fragment_count=count, length=len(text))
            for i, text in enumerate(texts)
        ]

        result = DispatchResult(latencies_ms=[0.0] * count)
        start = perf_counter()

        if self._policy.mode == DispatchMode.SEQUENTIAL:
            responses = []
            for plan, request in zip(plans, requests):
                responses.append(await self._run_fragment(plan, request, check, result))
        else:
            responses = await self._run_concurrently(plans, requests, check, result)

        result.responses = [
            ResponseWithContext(text, response) for text, response in zip(texts, responses)
        ]
        result.fragments_used = count
        result.total_matches = sum(len(r.matches) for r in responses)

        log_dispatch_complete(
            mode=self._policy.mode.value,
            result=result,
            total_latency_ms=(perf_counter() - start) * 1000.0,
        )

        return result

    async def _run_concurrently(
        self,
        plans: list[FragmentPlan],
        requests: Sequence[CheckRequest],
        check: CheckFn,
        result: DispatchResult,
    ) -> list[CheckResponse]:
        semaphore = (
            asyncio.Semaphore(self._policy.max_concurrency)
            if self._policy.max_concurrency is not None
            else None
        )

        async def run(plan: FragmentPlan, request: CheckRequest) -> CheckResponse:
            if semaphore is None:
                return await self._run_fragment(plan, request, check, result)
            async with semaphore:
                return await self._run_fragment(plan, request, check, result)

        tasks = [asyncio.create_task(run(plan, request)) for plan, request in zip(plans, requests)]
        try:
            # gather keeps the order of its arguments
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _run_fragment(
        self,
        plan: FragmentPlan,
        request: CheckRequest,
        check: CheckFn,
        result: DispatchResult,
    ) -> CheckResponse:
        retry = self._policy.retry
        attempt = 0
        fragment_start = perf_counter()

        while True:
            attempt += 1
            result.attempts += 1
            try:
                response = await check(request)
                break
            except Exception as e:
                if retry is not None and retry.should_retry(e, attempt):
                    log_fragment_retry(
                        fragment_index=plan.fragment_index,
                        attempt=attempt,
                        error_message=str(e),
                    )
                    if retry.delay:
                        await asyncio.sleep(retry.delay)
                    continue

                log_fragment_error(
                    fragment_index=plan.fragment_index,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise FragmentCheckError(
                    f"checking fragment {plan.fragment_index + 1}/{plan.fragment_count} "
                    f"failed: {e}",
                    fragment_index=plan.fragment_index,
                    fragment_count=plan.fragment_count,
                ) from e

        latency_ms = (perf_counter() - fragment_start) * 1000.0
        result.latencies_ms[plan.fragment_index] = latency_ms
        log_fragment_completed(
            fragment_index=plan.fragment_index,
            matches=len(response.matches),
            attempts=attempt,
            latency_ms=latency_ms,
        )
        return response
