# tests/test_recommendation_collector.py

"""Tests for page planning and the fetch/normalize loop."""

import json
import math
import unittest
from typing import Any

from src.scrapers.base_scraper import PageFetcher
from src.scrapers.errors import (
    FetchError,
    FieldParseError,
    ResponseFormatError,
)
from src.services.recommendation_collector import (
    RecommendationCollector,
    plan_pages,
)
from tests.factories import MSK, sample_item


class _CannedFetcher(PageFetcher):
    """Serves generated JSONP pages and records every request."""

    def __init__(self, pages: dict[int, str] | None = None) -> None:
        super().__init__("canned")
        self.pages = pages or {}
        self.calls: list[tuple[int, int]] = []
        self.closed = False

    def fetch_page(self, limit: int, offset: int) -> str:
        self.calls.append((limit, offset))
        if offset in self.pages:
            return self.pages[offset]
        items: list[dict[str, Any]] = [
            sample_item(productTitle=f"item-{offset + i}")
            for i in range(limit)
        ]
        return f"cb({json.dumps({'results': items})});"

    def close(self) -> None:
        self.closed = True


class TestPlanPages(unittest.TestCase):
    """(limit, offset) planning."""

    def test_default_quantity(self) -> None:
        self.assertEqual(plan_pages(100), [(40, 0), (40, 40), (20, 80)])

    def test_zero_quantity(self) -> None:
        self.assertEqual(plan_pages(0), [])

    def test_below_one_page(self) -> None:
        self.assertEqual(plan_pages(7), [(7, 0)])

    def test_exact_multiple(self) -> None:
        self.assertEqual(plan_pages(80), [(40, 0), (40, 40)])

    def test_page_count_limits_and_offsets(self) -> None:
        """ceil(Q/40) pages, limits sum to Q, offsets step by 40."""
        for quantity in (1, 39, 40, 41, 79, 80, 81, 100, 1000):
            with self.subTest(quantity=quantity):
                pages = plan_pages(quantity)
                self.assertEqual(len(pages), math.ceil(quantity / 40))
                self.assertEqual(sum(lim for lim, _ in pages), quantity)
                self.assertEqual(
                    [off for _, off in pages],
                    list(range(0, quantity, 40)),
                )
                self.assertTrue(all(1 <= lim <= 40 for lim, _ in pages))

    def test_negative_quantity(self) -> None:
        with self.assertRaises(ValueError):
            plan_pages(-1)

    def test_custom_page_size(self) -> None:
        self.assertEqual(plan_pages(5, page_size=2), [(2, 0), (2, 2), (1, 4)])


class TestRecommendationCollector(unittest.TestCase):
    """Collector behaviour against a canned fetcher."""

    def test_requests_follow_plan(self) -> None:
        fetcher = _CannedFetcher()
        RecommendationCollector(fetcher, tz=MSK).collect(100)
        self.assertEqual(fetcher.calls, [(40, 0), (40, 40), (20, 80)])

    def test_zero_quantity_issues_no_requests(self) -> None:
        fetcher = _CannedFetcher()
        result = RecommendationCollector(fetcher, tz=MSK).collect(0)
        self.assertEqual(fetcher.calls, [])
        self.assertEqual(result.products, [])
        self.assertEqual(result.pages_fetched, 0)

    def test_products_in_page_order(self) -> None:
        result = RecommendationCollector(
            _CannedFetcher(), tz=MSK
        ).collect(100)
        self.assertEqual(len(result.products), 100)
        self.assertEqual(
            [p.title for p in result.products],
            [f"item-{i}" for i in range(100)],
        )
        self.assertEqual(result.pages_fetched, 3)

    def test_duplicates_kept(self) -> None:
        page = f"cb({json.dumps({'results': [sample_item()] * 3})})"
        fetcher = _CannedFetcher({0: page})
        result = RecommendationCollector(fetcher, tz=MSK).collect(3)
        self.assertEqual(len(result.products), 3)
        self.assertEqual(result.products[0], result.products[2])

    def test_missing_results_counts_as_empty_page(self) -> None:
        fetcher = _CannedFetcher({40: 'cb({"finished": true})'})
        result = RecommendationCollector(fetcher, tz=MSK).collect(100)
        self.assertEqual(len(result.products), 60)
        self.assertEqual(result.empty_pages, 1)
        self.assertEqual(len(fetcher.calls), 3)

    def test_field_error_tagged_with_offset(self) -> None:
        bad = json.dumps({"results": [sample_item(oriMinPrice="N/A")]})
        fetcher = _CannedFetcher({40: f"cb({bad})"})
        with self.assertRaises(FieldParseError) as ctx:
            RecommendationCollector(fetcher, tz=MSK).collect(100)
        self.assertEqual(ctx.exception.offset, 40)
        self.assertEqual(ctx.exception.field, "oriMinPrice")
        self.assertIn("offset=40", str(ctx.exception))
        # Run aborts at the failing page
        self.assertEqual(fetcher.calls, [(40, 0), (40, 40)])

    def test_malformed_page_tagged_with_offset(self) -> None:
        fetcher = _CannedFetcher({0: "<html>oops</html>"})
        with self.assertRaises(ResponseFormatError) as ctx:
            RecommendationCollector(fetcher, tz=MSK).collect(10)
        self.assertIn("offset=0", str(ctx.exception))

    def test_fetch_error_propagates(self) -> None:
        class _Failing(_CannedFetcher):
            def fetch_page(self, limit: int, offset: int) -> str:
                raise FetchError(offset, limit, "HTTP 500")

        with self.assertRaises(FetchError):
            RecommendationCollector(_Failing(), tz=MSK).collect(10)


if __name__ == "__main__":
    unittest.main()
