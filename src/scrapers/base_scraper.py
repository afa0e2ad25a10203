# src/scrapers/base_scraper.py

"""Abstract page source for the recommendation collector."""

import logging
from abc import ABC, abstractmethod


class PageFetcher(ABC):
    """Returns the raw body of one recommendation page.

    The HTTP implementation lives in
    :mod:`src.scrapers.recommendation_scraper`; tests substitute a fetcher
    that replays canned JSONP strings.
    """

    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        self.logger = logging.getLogger(
            f"ali_recommend.{source_name}"
        )

    @abstractmethod
    def fetch_page(self, limit: int, offset: int) -> str:
        """Return the undecoded response text for ``limit`` items at ``offset``.

        Raises:
            FetchError: The page could not be retrieved.
        """
        ...

    def close(self) -> None:
        """Release any held connections."""
