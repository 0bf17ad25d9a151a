"""
Data models for the Unbox API client.

This module contains the builders for ingest payloads:
- Order: A commerce order (ids, totals, addresses, skus, attributes)
- Customer: The customer who placed the order

Both are mutable dataclasses with fluent set_* methods. to_dict() validates
and returns an independent plain dict ready for JSON encoding.
"""

from .order import Order
from .customer import Customer
from .validation import AttributeValue

__all__ = [
    "Order",
    "Customer",
    "AttributeValue",
]
