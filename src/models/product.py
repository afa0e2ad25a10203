# src/models/product.py

"""Product record built from one recommendation API item."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Product:
    """One catalog item from a recommendation page.

    Prices and the discount come from strings such as ``"US $12.50"``
    or ``"35%"``; timestamps are timezone-aware.
    """

    title: str
    original_min_price: float
    original_max_price: float
    min_price: float
    max_price: float
    discount: float
    stock: int
    orders_from_start_promotion: int
    total_orders: int
    product_average_star: float
    reviews_number: int
    created: datetime
    start_promotion: datetime
    end_promotion: datetime
