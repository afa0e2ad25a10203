# src/filters/product_normalizer.py

"""Maps raw recommendation items onto :class:`Product` records."""

import math
import re
from datetime import datetime, timezone, tzinfo
from typing import Any

from src.models.product import Product
from src.scrapers.errors import FieldParseError

_NON_DECIMAL = re.compile(r"[^0-9.]")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")

# Product field -> source key in the API item
SOURCE_KEYS: dict[str, str] = {
    "title": "productTitle",
    "original_min_price": "oriMinPrice",
    "original_max_price": "oriMaxPrice",
    "min_price": "minPrice",
    "max_price": "maxPrice",
    "discount": "discount",
    "stock": "stock",
    "orders_from_start_promotion": "orders",
    "total_orders": "totalTranpro3",
    "product_average_star": "productAverageStar",
    "reviews_number": "itemEvalTotalNum",
    "created": "gmtCreate",
    "start_promotion": "startTime",
    "end_promotion": "endTime",
}


def _finite(value: float, raw: Any, field: str) -> float:
    if not math.isfinite(value):
        raise FieldParseError(field, f"{raw!r} is not a finite number")
    return value


def _json_number(raw: Any) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def _from_number(raw: int | float, field: str) -> float:
    try:
        value = float(raw)
    except OverflowError as exc:
        raise FieldParseError(field, "number out of range") from exc
    return _finite(value, raw, field)


def extract_decimal(raw: Any, field: str = "value") -> float:
    """Parse a number out of text like ``'US $1,299.50'`` or ``'35%'``.

    Only digits and ``.`` are kept; an empty remainder is an error rather
    than zero. JSON numbers are taken as they are.
    """
    if _json_number(raw):
        return _from_number(raw, field)
    cleaned = _NON_DECIMAL.sub("", str(raw))
    if not cleaned:
        raise FieldParseError(
            field, f"no numeric characters in {raw!r}"
        )
    try:
        value = float(cleaned)
    except ValueError as exc:
        raise FieldParseError(
            field, f"cannot parse {raw!r} as a decimal"
        ) from exc
    return _finite(value, raw, field)


def parse_int(raw: Any, field: str = "value") -> int:
    """Parse an integer from the value's string form, without stripping.

    Only an optional sign and ASCII digits are accepted: ``" 12 "``,
    ``"1_000"`` and ``"1,043"`` are errors.
    """
    if isinstance(raw, bool):
        raise FieldParseError(field, f"expected integer, got {raw!r}")
    text = str(raw)
    if not _INTEGER.fullmatch(text):
        raise FieldParseError(
            field, f"cannot parse {raw!r} as an integer"
        )
    try:
        return int(text)
    except ValueError as exc:
        raise FieldParseError(field, "integer too long") from exc


def parse_float(raw: Any, field: str = "value") -> float:
    """Parse a plain decimal (no stripping), e.g. a star rating."""
    if isinstance(raw, bool):
        raise FieldParseError(field, f"expected number, got {raw!r}")
    if _json_number(raw):
        return _from_number(raw, field)
    text = str(raw)
    if not _DECIMAL.fullmatch(text):
        raise FieldParseError(
            field, f"cannot parse {raw!r} as a decimal"
        )
    return _finite(float(text), raw, field)


def epoch_to_local(seconds: int, tz: tzinfo | None = None) -> datetime:
    """Convert epoch seconds to an aware datetime.

    With ``tz=None`` the host's configured zone is used, so the wall-clock
    result depends on the machine running the export.
    """
    instant = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return instant.astimezone(tz)


def _require(item: dict[str, Any], key: str) -> Any:
    if key not in item:
        raise FieldParseError(key, "missing from item")
    return item[key]


def normalize_item(
    item: Any, tz: tzinfo | None = None,
) -> Product:
    """Build a :class:`Product` from one ``results`` entry."""
    if not isinstance(item, dict):
        raise FieldParseError(
            "<item>", f"expected object, got {type(item).__name__}"
        )

    def decimal(attr: str) -> float:
        key = SOURCE_KEYS[attr]
        return extract_decimal(_require(item, key), key)

    def integer(attr: str) -> int:
        key = SOURCE_KEYS[attr]
        return parse_int(_require(item, key), key)

    def stamp(attr: str) -> datetime:
        key = SOURCE_KEYS[attr]
        seconds = parse_int(_require(item, key), key)
        try:
            return epoch_to_local(seconds, tz)
        except (OverflowError, OSError, ValueError) as exc:
            raise FieldParseError(
                key, f"epoch {seconds} out of range"
            ) from exc

    title_key = SOURCE_KEYS["title"]
    title = _require(item, title_key)
    if not isinstance(title, str):
        raise FieldParseError(title_key, f"expected string, got {title!r}")

    star_key = SOURCE_KEYS["product_average_star"]
    return Product(
        title=title,
        original_min_price=decimal("original_min_price"),
        original_max_price=decimal("original_max_price"),
        min_price=decimal("min_price"),
        max_price=decimal("max_price"),
        discount=decimal("discount"),
        stock=integer("stock"),
        orders_from_start_promotion=integer(
            "orders_from_start_promotion"
        ),
        total_orders=integer("total_orders"),
        product_average_star=parse_float(
            _require(item, star_key), star_key
        ),
        reviews_number=integer("reviews_number"),
        created=stamp("created"),
        start_promotion=stamp("start_promotion"),
        end_promotion=stamp("end_promotion"),
    )
