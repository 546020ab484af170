"""Async client for a LanguageTool server.

The ServerClient is the entry point of the library: it sends check,
languages and words requests, and implements the split-check-join pipeline
used for texts longer than the server accepts.

Architecture:
    This module implements a Facade over the REST runtime and the
    splitting layer. ServerClient handles:
    - Request serialization through endpoint specs (RestRunner)
    - Suggestion truncation on check responses
    - Dispatch of fragment requests through FragmentExecutor
    - Joining partial responses and mapping match positions

Design Decisions:
    - A single aiohttp session per client, closed by close() or the async
      context manager
    - Transport injection allows testing with a mocked transport
    - Every HTTP answer is logged at debug level through a response hook
    - Empty fragment lists are an error (EmptyMergeInputError) rather than an
      empty response, since a response needs server metadata

See Also:
    - FragmentPlanner: Splits one request into fragment requests
    - FragmentExecutor: Dispatches fragment requests
    - ResponseWithContext: Joins responses and maps positions
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

import aiohttp

from ..annotate import annotate
from ..config import ServerConfig
from ..endpoints import check as check_endpoint
from ..endpoints import languages as languages_endpoint
from ..endpoints import words as words_endpoint
from ..models import (
    CheckRequest,
    CheckResponse,
    Language,
    ResponseWithContext,
    WordsAddRequest,
    WordsAddResponse,
    WordsDeleteRequest,
    WordsDeleteResponse,
    WordsRequest,
    WordsResponse,
)
from ..runtime.chunking import (
    DispatchPolicy,
    FragmentExecutor,
    FragmentPlanner,
    SplitPolicy,
    join_responses,
)
from ..runtime.rest import RESTTransport, RestRunner

logger = logging.getLogger(__name__)


def _log_response(response: aiohttp.ClientResponse) -> None:
    logger.debug("%s %s answered %s", response.method, response.url, response.status)


class ServerClient:
    """Client to communicate with a LanguageTool server.

    Example:
        >>> async with ServerClient(ServerConfig("http://localhost", "8081")) as client:
        ...     request = CheckRequest(text="Some phrase with a smal mistake.")
        ...     response = await client.check_text(request)
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        max_suggestions: int = -1,
        timeout: float = 30.0,
        transport: RESTTransport | None = None,
    ) -> None:
        """Initialize server client.

        Args:
            config: Server location (defaults to the public server)
            max_suggestions: Keep at most this many replacements per match
                (non-positive keeps all)
            timeout: Total timeout of one HTTP request, in seconds
            transport: Pre-built transport, mostly for tests
        """
        self._config = config or ServerConfig()
        self._max_suggestions = max_suggestions
        self._transport = transport or RESTTransport(self._config.api_url, timeout=timeout)
        self._transport.add_response_hook(_log_response)
        self._runner = RestRunner(self._transport)

    @classmethod
    def from_env(cls, **kwargs) -> ServerClient:
        """Create a client for the server named by ``LANGUAGETOOL_HOSTNAME``/``_PORT``.

        Raises:
            InvalidValueError: If a variable is missing
        """
        return cls(ServerConfig.from_env(), **kwargs)

    @classmethod
    def from_env_or_default(cls, **kwargs) -> ServerClient:
        return cls(ServerConfig.from_env_or_default(), **kwargs)

    @property
    def config(self) -> ServerConfig:
        return self._config

    @property
    def max_suggestions(self) -> int:
        return self._max_suggestions

    @max_suggestions.setter
    def max_suggestions(self, value: int) -> None:
        self._max_suggestions = value

    async def check(self, request: CheckRequest) -> CheckResponse:
        """Send one check request.

        Raises:
            ServerError: On an error answer (ServerOverloadedError when busy)
        """
        return await self._runner.run(
            spec=check_endpoint.SPEC,
            adapter=check_endpoint.Adapter(),
            params={"request": request, "max_suggestions": self._max_suggestions},
        )

    async def check_multiple_and_join(
        self,
        requests: Sequence[CheckRequest],
        policy: DispatchPolicy | None = None,
    ) -> ResponseWithContext:
        """Check fragment requests and join their responses.

        Args:
            requests: Consecutive fragments of one document, in order
            policy: Dispatch policy (defaults to concurrent, no retry)

        Returns:
            Joined response whose offsets refer to the concatenated text

        Raises:
            FragmentCheckError: If one fragment failed; nothing is returned
            EmptyMergeInputError: If ``requests`` is empty
        """
        result = await FragmentExecutor(policy).execute(requests=requests, check=self.check)
        return join_responses(result.responses)

    async def check_multiple_and_join_without_context(
        self,
        requests: Sequence[CheckRequest],
        policy: DispatchPolicy | None = None,
    ) -> CheckResponse:
        """Same as check_multiple_and_join, returning the bare response."""
        joined = await self.check_multiple_and_join(requests, policy)
        return joined.response

    async def check_text(
        self,
        request: CheckRequest,
        split_policy: SplitPolicy | None = None,
        dispatch_policy: DispatchPolicy | None = None,
    ) -> CheckResponse:
        """Split, check and join a request of any length.

        Matches of the returned response carry ``more_context`` (line number
        and line offset in the whole text).

        Raises:
            InvalidRequestError: If the request has neither text nor data
            EmptyMergeInputError: If the text is empty
            FragmentCheckError: If one fragment failed
        """
        requests = FragmentPlanner(split_policy).plan(request)
        joined = await self.check_multiple_and_join(requests, dispatch_policy)
        return joined.into_response()

    async def annotate_check(self, request: CheckRequest, origin: str | None = None) -> str:
        """Check a request and render its matches as text snippets."""
        text = request.try_get_text()
        response = await self.check(request)
        return annotate(response, text, origin)

    async def languages(self) -> list[Language]:
        """List the languages supported by the server."""
        return await self._runner.run(
            spec=languages_endpoint.SPEC,
            adapter=languages_endpoint.Adapter(),
            params={},
        )

    async def words(self, request: WordsRequest) -> WordsResponse:
        """List words of the user's personal dictionaries."""
        return await self._runner.run(
            spec=words_endpoint.LIST_SPEC,
            adapter=words_endpoint.LIST_ADAPTER,
            params={"request": request},
        )

    async def words_add(self, request: WordsAddRequest) -> WordsAddResponse:
        """Add a word to a personal dictionary."""
        return await self._runner.run(
            spec=words_endpoint.ADD_SPEC,
            adapter=words_endpoint.ADD_ADAPTER,
            params={"request": request},
        )

    async def words_delete(self, request: WordsDeleteRequest) -> WordsDeleteResponse:
        """Remove a word from a personal dictionary."""
        return await self._runner.run(
            spec=words_endpoint.DELETE_SPEC,
            adapter=words_endpoint.DELETE_ADAPTER,
            params={"request": request},
        )

    async def ping(self) -> float:
        """Return the round trip time to the server, in milliseconds.

        Any HTTP answer counts as a reply; only connection errors raise.
        """
        start = time.perf_counter()
        status = await self._transport.status("")
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.debug("Ping answered with status %s in %.1f ms", status, elapsed_ms)
        return elapsed_ms

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> ServerClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
