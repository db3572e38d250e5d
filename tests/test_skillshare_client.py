#!/usr/bin/env python
"""Tests for skillshare client module."""

import httpx
import pytest

from skillstream.config import Settings
from skillstream.exceptions import TransportError
from skillstream.skillshare.client import SkillshareClient


def _client(handler, **settings):
    return SkillshareClient(Settings(**settings), transport=httpx.MockTransport(handler))


class TestSkillshareClient:
    """Test the SkillshareClient class."""

    def test_query_posts_json_with_referer(self):
        """GraphQL payloads are POSTed as JSON with the site referer."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text='{"data": {}}')

        with _client(handler) as client:
            body = client.query('{"query": "q"}')

        assert body == '{"data": {}}'
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://www.skillshare.com/api/graphql"
        assert request.headers["content-type"] == "application/json"
        assert request.headers["referer"] == "https://www.skillshare.com/"
        assert request.content == b'{"query": "q"}'

    def test_fetch_gets_url(self):
        """Mirror lookups are plain GETs that return the body."""
        def handler(request):
            assert request.method == "GET"
            return httpx.Response(200, text="hello")

        with _client(handler) as client:
            assert client.fetch("https://mirror.example/id/1") == "hello"

    def test_custom_main_url_sets_referer(self):
        """The referer follows the configured site URL."""
        def handler(request):
            assert request.headers["referer"] == "https://mirror.example/"
            return httpx.Response(200, text="")

        with _client(handler, main_url="https://mirror.example") as client:
            client.fetch("https://mirror.example/x")

    def test_timeout_configured(self):
        """The configured timeout is applied to the underlying client."""
        client = SkillshareClient(Settings(timeout=12.5))
        try:
            assert client._http.timeout.read == 12.5
        finally:
            client.close()

    def test_http_status_error(self):
        """Non-success statuses are transport errors."""
        with _client(lambda request: httpx.Response(503)) as client:
            with pytest.raises(TransportError, match="503"):
                client.query("{}")

    def test_timeout_error(self):
        """Timeouts are transport errors and are not retried."""
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ReadTimeout("timed out", request=request)

        with _client(handler) as client:
            with pytest.raises(TransportError, match="timed out"):
                client.query("{}")
        assert len(calls) == 1

    def test_connect_error(self):
        """Connection failures are transport errors chained to the httpx error."""
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with _client(handler) as client:
            with pytest.raises(TransportError) as excinfo:
                client.fetch("https://mirror.example/x")
        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
