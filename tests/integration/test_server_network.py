"""Integration tests against a live LanguageTool server.

Point LANGUAGETOOL_HOSTNAME and LANGUAGETOOL_PORT at a local server to avoid
the public server's rate limits.
"""

import os

import pytest

from langtool.client.core import DispatchMode
from langtool.client.models import CheckRequest, Data, DataAnnotation
from langtool.client.runtime.chunking import DispatchPolicy, RetryPolicy, SplitPolicy

pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_LANGTOOL_NETWORK_TESTS") != "1",
    reason="Requires network access to a LanguageTool server",
)

POEM = (
    "I have so many friends.\n\n"
    "They are very funy.\n\n"
    "I think I am very lucky to have them.\n\n"
    "One day, I will write them a poem.\n\n"
    "But, in the meantime, I write code.\n"
)


class TestServerIntegration:
    """Test the client against a running server."""

    @pytest.mark.asyncio
    async def test_ping(self, client):
        """Test the server answers."""
        assert await client.ping() > 0.0

    @pytest.mark.asyncio
    async def test_languages(self, client):
        """Test English is supported."""
        languages = await client.languages()
        assert any(lang.long_code == "en-US" for lang in languages)

    @pytest.mark.asyncio
    async def test_check(self, client):
        """Test a spelling mistake is found."""
        response = await client.check(
            CheckRequest(text="Some phrase with a smal mistake.", language="en-US")
        )
        assert any(m.offset == 19 for m in response.matches)

    @pytest.mark.asyncio
    async def test_check_data(self, client):
        """Test annotated documents are accepted."""
        data = Data.from_units(
            [
                DataAnnotation.new_text("A "),
                DataAnnotation.new_markup("<b>"),
                DataAnnotation.new_text("tset"),
                DataAnnotation.new_markup("</b>"),
            ]
        )
        response = await client.check(CheckRequest(data=data, language="en-US"))
        assert response.matches

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", [DispatchMode.SEQUENTIAL, DispatchMode.CONCURRENT])
    async def test_split_check_matches_whole_check(self, client, mode):
        """Test a split check finds the same offsets as a single request."""
        request = CheckRequest(text=POEM, language="en-US")
        whole = await client.check(request)

        split = await client.check_text(
            request,
            SplitPolicy(max_length=40, pattern="\n\n"),
            DispatchPolicy(mode=mode, max_concurrency=2, retry=RetryPolicy(max_attempts=3, delay=1.0)),
        )

        assert [m.offset for m in split.matches] == [m.offset for m in whole.matches]
        assert all(m.more_context is not None for m in split.matches)
