"""REST transport delegating to HTTPClient."""

from __future__ import annotations

from typing import Any

from .http_client import HTTPClient, ResponseHook


class RESTTransport:
    """Thin transport layer over HTTPClient.

    Paths are resolved against ``base_url``; absolute URLs are used as is.
    """

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        self._http = HTTPClient(base_url=base_url, timeout=timeout)

    @property
    def base_url(self) -> str | None:
        return self._http.base_url

    def add_response_hook(self, hook: ResponseHook) -> None:
        self._http.add_response_hook(hook)

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return await self._http.get(path, params=params, headers=headers)

    async def status(self, path: str) -> int:
        return await self._http.status(path)

    async def post(
        self,
        path: str,
        form: dict[str, str] | None = None,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        if form is not None:
            return await self._http.post(path, data=form, headers=headers)
        return await self._http.post(path, json=json_body, headers=headers)

    async def close(self) -> None:
        await self._http.close()
