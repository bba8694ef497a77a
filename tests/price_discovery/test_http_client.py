"""Tests for the HTTP client TLS policy, headers and caching."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.price_discovery.common.config import Config
from src.price_discovery.common.http_client import HTTPClient


def _client(config: Config, **kwargs) -> HTTPClient:
    client = HTTPClient(config, **kwargs)
    response = MagicMock()
    response.text = "<html>ok</html>"
    client._session.post = MagicMock(return_value=response)
    return client


class TestHTTPClient:
    def test_tls_disabled_only_for_listed_host(self, config):
        client = _client(config, insecure_hosts=("www.car-part.com",))

        client.post_form("https://www.car-part.com/cgi-bin/search.cgi", {"a": "1"})
        client.post_form("https://example.com/search", {"a": "1"})

        first, second = client._session.post.call_args_list
        assert first.kwargs["verify"] is False
        assert second.kwargs["verify"] is True

    def test_form_post_headers_and_timeout(self, config):
        client = _client(config)

        client.post_form("https://example.com/", {"userPage": "2"})

        kwargs = client._session.post.call_args.kwargs
        assert kwargs["data"] == {"userPage": "2"}
        assert kwargs["timeout"] == config.request_timeout
        assert kwargs["headers"]["User-Agent"] == config.user_agent
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"

    def test_http_error_status_raises(self, config):
        client = _client(config)
        client._session.post.return_value.raise_for_status.side_effect = (
            requests.HTTPError("500 Server Error")
        )

        with pytest.raises(requests.HTTPError):
            client.post_form("https://example.com/", {})

    def test_raw_html_cached_when_enabled(self, tmp_path):
        config = Config(raw_html_cache_dir=str(tmp_path / "raw"))
        client = _client(config)

        client.post_form("https://example.com/", {}, cache_key="carpart 2015/p1")

        files = list((tmp_path / "raw").glob("carpart_2015_p1_*.html"))
        assert len(files) == 1
        assert files[0].read_text(encoding="utf-8") == "<html>ok</html>"

    def test_no_cache_dir_by_default(self, config):
        assert config.raw_html_cache_abs_dir is None
        client = _client(config)
        client.post_form("https://example.com/", {}, cache_key="anything")

    def test_rotated_user_agent_sent(self):
        config = Config(rotate_user_agent=True, raw_html_cache_dir="")
        with patch("src.price_discovery.common.http_client.UserAgent") as ua_cls:
            ua_cls.return_value.random = "Mozilla/5.0 (X11; Linux x86_64) Rotated"
            client = _client(config)

        client.post_form("https://example.com/", {})

        ua_cls.assert_called_once_with(fallback=config.user_agent)
        sent = client._session.post.call_args.kwargs["headers"]["User-Agent"]
        assert sent == client.user_agent == "Mozilla/5.0 (X11; Linux x86_64) Rotated"
