# src/scrapers/recommendation_scraper.py

"""Fetcher and page decoder for the AliExpress recommendation API."""

import json
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.scrapers.base_scraper import PageFetcher
from src.scrapers.errors import FetchError, ResponseFormatError


class RecommendationFetcher(PageFetcher):
    """Fetches recommendation pages over HTTP via curl_cffi.

    The endpoint answers with JSONP (``jQuery..._...({...});``); this class
    only returns the raw text, :func:`decode_page` unwraps it.
    """

    def __init__(self, timeout: int | None = None) -> None:
        super().__init__("gpsfront")
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = (
            timeout or self.settings.REQUEST_TIMEOUT
        )

    def build_url(self, limit: int, offset: int) -> str:
        """Render the endpoint URL for one page."""
        return self.settings.RECOMMEND_API.format(
            callback=self.settings.JSONP_CALLBACK,
            widget_id=self.settings.WIDGET_ID,
            limit=limit,
            offset=offset,
            postback=self.settings.POSTBACK_ID,
            cache_token=self.settings.CACHE_TOKEN,
        )

    def fetch_page(self, limit: int, offset: int) -> str:
        """GET one page; any transport error or non-2xx raises FetchError."""
        url = self.build_url(limit, offset)
        self.logger.debug("[%s] GET %s", self.source_name, url)
        try:
            resp = self.session.get(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.error(
                "[%s] Request error at offset %d: %s",
                self.source_name,
                offset,
                exc,
                exc_info=True,
            )
            raise FetchError(offset, limit, str(exc)) from exc

        if not 200 <= resp.status_code < 300:
            self.logger.error(
                "[%s] HTTP %d at offset %d",
                self.source_name,
                resp.status_code,
                offset,
            )
            raise FetchError(
                offset, limit, f"HTTP {resp.status_code}"
            )
        return str(resp.text)

    def close(self) -> None:
        self.session.close()


def strip_jsonp(text: str) -> str:
    """Drop everything before the first ``{`` of a JSONP body."""
    start = text.find("{")
    if start == -1:
        raise ResponseFormatError(
            "no JSON object found in response body"
        )
    return text[start:]


def decode_page(text: str) -> list[dict[str, Any]]:
    """Return the ``results`` items of a JSONP page.

    Trailing wrapper characters after the object (``);``) are ignored.
    A page without ``results`` is empty, not an error.
    """
    body = strip_jsonp(text)
    try:
        payload, _ = json.JSONDecoder().raw_decode(body)
    except json.JSONDecodeError as exc:
        raise ResponseFormatError(
            f"malformed JSON: {exc}"
        ) from exc

    if not isinstance(payload, dict):
        raise ResponseFormatError("payload is not a JSON object")

    results: Any = payload.get("results")
    if results is None:
        return []
    if not isinstance(results, list):
        raise ResponseFormatError(
            f"'results' is {type(results).__name__}, expected array"
        )
    return results
