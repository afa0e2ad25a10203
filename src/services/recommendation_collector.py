# src/services/recommendation_collector.py

"""Drives the paged fetch → decode → normalize loop."""

import logging
from dataclasses import dataclass, field
from datetime import tzinfo

from src.config.settings import Settings
from src.filters.product_normalizer import normalize_item
from src.models.product import Product
from src.scrapers.base_scraper import PageFetcher
from src.scrapers.errors import FieldParseError, ResponseFormatError
from src.scrapers.recommendation_scraper import decode_page

logger = logging.getLogger("ali_recommend.collector")


def plan_pages(
    quantity: int, page_size: int = Settings.PAGE_SIZE,
) -> list[tuple[int, int]]:
    """Return the ``(limit, offset)`` pairs covering ``quantity`` items.

    >>> plan_pages(100)
    [(40, 0), (40, 40), (20, 80)]
    """
    if quantity < 0:
        raise ValueError(f"quantity must be >= 0, got {quantity}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return [
        (min(page_size, quantity - offset), offset)
        for offset in range(0, quantity, page_size)
    ]


@dataclass
class CollectionResult:
    """Records gathered by one run, in page order."""

    quantity: int
    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    pages_fetched: int = 0
    empty_pages: int = 0


class RecommendationCollector:
    """Fetches every planned page and normalizes its items."""

    def __init__(
        self,
        fetcher: PageFetcher,
        tz: tzinfo | None = None,
        page_size: int = Settings.PAGE_SIZE,
    ) -> None:
        self.fetcher = fetcher
        self.tz = tz
        self.page_size = page_size

    def _collect_page(self, limit: int, offset: int) -> list[Product]:
        text = self.fetcher.fetch_page(limit, offset)
        try:
            items = decode_page(text)
        except ResponseFormatError as exc:
            raise ResponseFormatError(
                f"page offset={offset} limit={limit}: {exc}"
            ) from exc

        products: list[Product] = []
        for item in items:
            try:
                products.append(normalize_item(item, self.tz))
            except FieldParseError as exc:
                raise exc.at_offset(offset) from exc
        return products

    def collect(self, quantity: int) -> CollectionResult:
        """Fetch ``quantity`` items; the first failing page aborts the run."""
        pages = plan_pages(quantity, self.page_size)
        result = CollectionResult(quantity=quantity)
        logger.info(
            "Collecting %d items in %d page(s)", quantity, len(pages)
        )

        for limit, offset in pages:
            page_products = self._collect_page(limit, offset)
            result.pages_fetched += 1
            if not page_products:
                result.empty_pages += 1
            result.products.extend(page_products)
            logger.debug(
                "Page offset=%d limit=%d returned %d item(s)",
                offset,
                limit,
                len(page_products),
            )

        logger.info(
            "Collected %d product(s) from %d page(s)",
            len(result.products),
            result.pages_fetched,
        )
        return result
