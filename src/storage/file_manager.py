# src/storage/file_manager.py

"""Serializes collected products and writes the output file."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.product import Product
from src.scrapers.errors import OutputWriteError

logger = logging.getLogger("ali_recommend.storage")


def _format_offset(value: datetime) -> str:
    offset = value.utcoffset()
    if offset is None:
        return ""
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_timestamp(value: datetime, keep_offset: bool = False) -> str:
    """Render a zoned timestamp as local wall-clock text.

    The year is always four digits. ``keep_offset`` appends the UTC offset
    (``+03:00``) instead of dropping it.
    """
    pattern = Settings.TIMESTAMP_FORMAT.replace(
        "%Y", f"{value.year:04d}"
    )
    text = value.strftime(pattern)
    if keep_offset:
        text += _format_offset(value)
    return text


def product_to_dict(
    product: Product, keep_offset: bool = False,
) -> dict[str, Any]:
    """Map a product onto the camelCase JSON object of the output file."""
    return {
        "title": product.title,
        "originalMinPrice": product.original_min_price,
        "originalMaxPrice": product.original_max_price,
        "minPrice": product.min_price,
        "maxPrice": product.max_price,
        "discount": product.discount,
        "stock": product.stock,
        "ordersFromStartPromotion": product.orders_from_start_promotion,
        "totalOrders": product.total_orders,
        "productAverageStar": product.product_average_star,
        "reviewsNumber": product.reviews_number,
        "created": format_timestamp(product.created, keep_offset),
        "startPromotion": format_timestamp(
            product.start_promotion, keep_offset
        ),
        "endPromotion": format_timestamp(
            product.end_promotion, keep_offset
        ),
    }


def serialize_products(
    products: list[Product], keep_offset: bool = False,
) -> str:
    """Pretty-printed JSON array of all products, in order."""
    data = [product_to_dict(p, keep_offset) for p in products]
    return json.dumps(data, ensure_ascii=False, indent=2, allow_nan=False)


class FileManager:
    """Writes the export file, replacing any previous content."""

    def __init__(self, output_path: Path | None = None) -> None:
        self.output_path: Path = output_path or (
            Settings.RESULTS_DIR / Settings.OUTPUT_FILENAME
        )
        logger.debug(
            "FileManager initialised — output_path=%s", self.output_path
        )

    def save(
        self, products: list[Product], keep_offset: bool = False,
    ) -> Path:
        """Serialize ``products`` and write them as the whole file."""
        try:
            text = serialize_products(products, keep_offset)
        except ValueError as exc:
            # NaN/Infinity have no JSON form
            raise OutputWriteError(self.output_path, str(exc)) from exc

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.output_path, "w", encoding="utf-8") as f:
                f.write(text)
                f.write("\n")
        except OSError as exc:
            logger.error(
                "Write to %s failed: %s",
                self.output_path,
                exc,
                exc_info=True,
            )
            raise OutputWriteError(
                self.output_path, exc.strerror or str(exc)
            ) from exc

        logger.info(
            "Saved %d products to %s", len(products), self.output_path
        )
        return self.output_path
