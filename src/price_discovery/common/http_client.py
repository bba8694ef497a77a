"""HTTP client with per-host TLS policy, spoofed User-Agent and raw HTML caching."""

from __future__ import annotations

import hashlib
import logging
import warnings
from datetime import datetime
from pathlib import Path
from urllib.parse import urlparse

import requests
from fake_useragent import UserAgent
from urllib3.exceptions import InsecureRequestWarning

from .config import Config

logger = logging.getLogger(__name__)


class HTTPClient:
    """HTTP client wrapping requests for HTML catalog scraping.

    Features:
    - Desktop browser User-Agent (fixed, or rotated via fake_useragent)
    - TLS verification disabled only for explicitly listed hosts
    - Raw HTML caching for audit trail when a cache dir is configured

    Requests are issued exactly once; retrying is left to the caller.
    """

    def __init__(
        self,
        config: Config | None = None,
        insecure_hosts: tuple[str, ...] = (),
    ) -> None:
        self.config = config or Config()
        self._session = requests.Session()
        self._insecure_hosts = {h.lower() for h in insecure_hosts}
        self._user_agent = self._pick_user_agent()

        cache_dir = self.config.raw_html_cache_abs_dir
        if cache_dir is not None:
            cache_dir.mkdir(parents=True, exist_ok=True)

    def _pick_user_agent(self) -> str:
        if self.config.rotate_user_agent:
            return UserAgent(fallback=self.config.user_agent).random
        return self.config.user_agent

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def post_form(
        self,
        url: str,
        data: dict[str, str],
        headers: dict[str, str] | None = None,
        cache_key: str | None = None,
    ) -> requests.Response:
        """Send a form-encoded POST request.

        Args:
            url: Target URL.
            data: Form fields, sent as application/x-www-form-urlencoded.
            headers: Extra headers (merged with defaults).
            cache_key: Optional key for raw HTML caching.

        Returns:
            requests.Response object.

        Raises:
            requests.RequestException: On timeout, transport failure or
                an HTTP error status.
        """
        merged_headers = {
            "User-Agent": self._user_agent,
            "Content-Type": "application/x-www-form-urlencoded",
        }
        if headers:
            merged_headers.update(headers)

        verify = self._verify_for(url)
        with warnings.catch_warnings():
            if not verify:
                warnings.simplefilter("ignore", InsecureRequestWarning)
            resp = self._session.post(
                url,
                data=data,
                headers=merged_headers,
                timeout=self.config.request_timeout,
                verify=verify,
            )
        resp.raise_for_status()

        if cache_key and self.config.raw_html_cache_abs_dir is not None:
            self._cache_response(cache_key, resp.text)

        return resp

    def _verify_for(self, url: str) -> bool:
        host = (urlparse(url).hostname or "").lower()
        return host not in self._insecure_hosts

    def _cache_response(self, cache_key: str, html: str) -> Path:
        """Save raw HTML to cache directory for audit.

        File naming: {cache_key}_{date}_{hash}.html
        """
        cache_dir = self.config.raw_html_cache_abs_dir
        assert cache_dir is not None
        date_str = datetime.now().strftime("%Y%m%d")
        content_hash = hashlib.md5(html.encode()).hexdigest()[:8]
        safe_key = "".join(c if c.isalnum() or c in "-_" else "_" for c in cache_key)
        filename = f"{safe_key}_{date_str}_{content_hash}.html"
        path = cache_dir / filename
        path.write_text(html, encoding="utf-8")
        logger.debug("Cached HTML: %s", path)
        return path

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
