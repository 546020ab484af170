"""Async HTTP client on top of aiohttp.

The client owns a lazily created ``aiohttp.ClientSession`` and adds the few
behaviours every LanguageTool call needs: base URL resolution, response
hooks, a throttle window, automatic waiting on 429/418 answers and the
translation of error answers into library exceptions.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from ...core.exceptions import OVERLOADED_MESSAGE, RateLimitError, ServerError, ServerOverloadedError

logger = logging.getLogger(__name__)

ResponseHook = Callable[[aiohttp.ClientResponse], "float | None | Awaitable[float | None]"]

RATE_LIMIT_STATUSES = (418, 429)


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        max_rate_limit_retries: int = 3,
        rate_limit_fallback: float = 1.0,
    ) -> None:
        """Initialize HTTP client.

        Args:
            base_url: Prefix for relative URLs
            timeout: Total timeout of one request, in seconds
            max_rate_limit_retries: Retries of a request answered with 429/418
            rate_limit_fallback: Wait used when such an answer has no Retry-After
        """
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.max_rate_limit_retries = max_rate_limit_retries
        self.rate_limit_fallback = rate_limit_fallback
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []
        self._throttle_until: float | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a hook called with every response.

        A hook may be sync or async. A positive number returned by a hook is
        used as a throttle window before the next request.
        """
        self._response_hooks.append(hook)

    def set_throttle(self, seconds: float) -> None:
        """Delay the next request by ``seconds``, extending any current window."""
        if seconds <= 0:
            return
        until = time.time() + seconds
        if self._throttle_until is None or until > self._throttle_until:
            self._throttle_until = until

    def _resolve(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def _wait_throttle(self) -> None:
        if self._throttle_until is None:
            return
        delay = self._throttle_until - time.time()
        if delay > 0:
            await asyncio.sleep(delay)
        self._throttle_until = None

    async def _run_hooks(self, response: aiohttp.ClientResponse) -> None:
        for hook in self._response_hooks:
            try:
                delay = hook(response)
                if inspect.isawaitable(delay):
                    delay = await delay
                if delay:
                    self.set_throttle(float(delay))
            except Exception as e:
                logger.warning("Response hook failed: %s", e)

    def _retry_after(self, response: aiohttp.ClientResponse) -> float:
        raw = response.headers.get("Retry-After")
        if raw is None:
            return self.rate_limit_fallback
        try:
            return max(float(raw), 0.0)
        except ValueError:
            return self.rate_limit_fallback

    async def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        body = await response.text()
        if body.strip() == OVERLOADED_MESSAGE:
            raise ServerOverloadedError(status_code=response.status)
        raise ServerError(
            f"server answered with status {response.status}: {body}",
            status_code=response.status,
            body=body,
        )

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        url = self._resolve(url)
        attempt = 0
        while True:
            await self._wait_throttle()
            send = self.session.get if method == "GET" else self.session.post
            async with send(url, **kwargs) as response:
                await self._run_hooks(response)

                if response.status in RATE_LIMIT_STATUSES:
                    retry_after = self._retry_after(response)
                    if attempt >= self.max_rate_limit_retries:
                        raise RateLimitError(
                            f"rate limit exceeded for {url}", retry_after=retry_after
                        )
                    attempt += 1
                    logger.warning(
                        "Rate limited (status %s), retrying in %.2fs", response.status, retry_after
                    )
                    self.set_throttle(retry_after)
                    continue

                await self._raise_for_status(response)
                return await response.json(content_type=None)

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request returning the decoded JSON body.

        Raises:
            ServerError: On a non 2xx answer
            RateLimitError: When still rate limited after the allowed retries
        """
        return await self._request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        data: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST request with a form (``data``) or JSON (``json``) body.

        Raises:
            ServerError: On a non 2xx answer
            RateLimitError: When still rate limited after the allowed retries
        """
        kwargs: dict[str, Any] = {"headers": headers}
        if data is not None:
            kwargs["data"] = data
        if json is not None:
            kwargs["json"] = json
        return await self._request("POST", url, **kwargs)

    async def status(self, url: str) -> int:
        """GET ``url`` and return the status code, whatever it is."""
        await self._wait_throttle()
        async with self.session.get(self._resolve(url)) as response:
            await self._run_hooks(response)
            return response.status

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
