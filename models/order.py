"""
Order data model.

An Order describes a commerce order being sent for ingestion. It is a
mutable builder: create it, set fields with the fluent set_* methods (or
pass them to the constructor), then call to_dict() to get the payload.

Validation:
    - set_skus/set_product_titles/set_promo_codes/set_tags and
      set_attributes validate eagerly
    - to_dict() checks required fields and re-checks array items and
      attributes, since dataclass fields can also be assigned directly
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Any, List, Mapping, Optional, Sequence, Union

from .validation import (
    AttributeValue,
    check_required_fields,
    format_datetime,
    include_if_not_empty,
    items_must_be_strings,
    validate_attributes,
)

REQUIRED_FIELDS = ("id", "number", "created_at", "total_amount", "total_items", "currency")

# Output key -> attribute, emitted only when non-empty
OPTIONAL_FIELDS = (
    ("billing_country", "billing_country"),
    ("billing_postcode", "billing_postcode"),
    ("billing_city", "billing_city"),
    ("shipping_country", "shipping_country"),
    ("shipping_postcode", "shipping_postcode"),
    ("shipping_city", "shipping_city"),
    ("gift_message", "gift_message"),
    ("gift_message_recipient", "gift_message_recipient"),
)

# Output key -> attribute, display name used in error messages
STRING_ARRAY_FIELDS = (
    ("skus", "skus", "skus"),
    ("product_titles", "product_titles", "product titles"),
    ("promo_codes", "promo_codes", "promo codes"),
)


@dataclass
class Order:
    """
    A commerce order.

    Required: id, number, created_at, total_amount, total_items, currency.
    Everything else is optional and left out of to_dict() when empty,
    except subscription_reorder which is emitted whenever it was set.
    """

    id: Optional[str] = None
    """Platform order id."""

    number: Optional[str] = None
    """Customer-facing order number (e.g. '#100001')."""

    created_at: Optional[datetime] = None
    """When the order was placed (naive, sent as-is)."""

    total_amount: Optional[Union[float, Decimal]] = None
    """Order total."""

    total_items: Optional[int] = None
    """Number of items in the order."""

    currency: Optional[str] = None
    """ISO currency code (e.g. 'GBP')."""

    billing_country: Optional[str] = None
    billing_postcode: Optional[str] = None
    billing_city: Optional[str] = None
    shipping_country: Optional[str] = None
    shipping_postcode: Optional[str] = None
    shipping_city: Optional[str] = None

    gift_message: Optional[str] = None
    gift_message_recipient: Optional[str] = None

    skus: Optional[List[str]] = None
    product_titles: Optional[List[str]] = None
    promo_codes: Optional[List[str]] = None

    subscription_reorder: Optional[bool] = None
    """Whether the order is a subscription reorder. Sent even when False."""

    tags: Optional[List[str]] = None

    attributes: Optional[Dict[str, AttributeValue]] = None
    """Free-form string-keyed data. Values may not be None."""

    def set_id(self, id: str) -> "Order":
        self.id = id
        return self

    def set_number(self, number: str) -> "Order":
        self.number = number
        return self

    def set_created_at(self, created_at: datetime) -> "Order":
        self.created_at = created_at
        return self

    def set_total_amount(self, total_amount: Union[float, Decimal]) -> "Order":
        self.total_amount = total_amount
        return self

    def set_total_items(self, total_items: int) -> "Order":
        self.total_items = total_items
        return self

    def set_currency(self, currency: str) -> "Order":
        self.currency = currency
        return self

    def set_billing_country(self, billing_country: str) -> "Order":
        self.billing_country = billing_country
        return self

    def set_billing_postcode(self, billing_postcode: str) -> "Order":
        self.billing_postcode = billing_postcode
        return self

    def set_billing_city(self, billing_city: str) -> "Order":
        self.billing_city = billing_city
        return self

    def set_shipping_country(self, shipping_country: str) -> "Order":
        self.shipping_country = shipping_country
        return self

    def set_shipping_postcode(self, shipping_postcode: str) -> "Order":
        self.shipping_postcode = shipping_postcode
        return self

    def set_shipping_city(self, shipping_city: str) -> "Order":
        self.shipping_city = shipping_city
        return self

    def set_gift_message(self, gift_message: str) -> "Order":
        self.gift_message = gift_message
        return self

    def set_gift_message_recipient(self, gift_message_recipient: str) -> "Order":
        self.gift_message_recipient = gift_message_recipient
        return self

    def set_skus(self, skus: Sequence[str]) -> "Order":
        """Raises ValidationError if any sku is not a string."""
        self.skus = items_must_be_strings(skus, "skus")
        return self

    def set_product_titles(self, product_titles: Sequence[str]) -> "Order":
        """Raises ValidationError if any title is not a string."""
        self.product_titles = items_must_be_strings(product_titles, "product titles")
        return self

    def set_promo_codes(self, promo_codes: Sequence[str]) -> "Order":
        """Raises ValidationError if any code is not a string."""
        self.promo_codes = items_must_be_strings(promo_codes, "promo codes")
        return self

    def set_subscription_reorder(self, subscription_reorder: bool) -> "Order":
        self.subscription_reorder = subscription_reorder
        return self

    def set_tags(self, tags: Sequence[str]) -> "Order":
        """Raises ValidationError if any tag is not a string."""
        self.tags = items_must_be_strings(tags, "tags")
        return self

    def set_attributes(self, attributes: Mapping[str, AttributeValue]) -> "Order":
        """Raises ValidationError on a non-string key or a None value."""
        self.attributes = validate_attributes(attributes)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the ingest API's order payload.

        Returns:
            An independent dict with snake_case keys

        Raises:
            ValidationError: If a required field is unset, an array item is
                not a string, or the attributes are invalid
        """
        check_required_fields(self, REQUIRED_FIELDS)

        output: Dict[str, Any] = {
            "id": self.id,
            "number": self.number,
            "created_at": format_datetime(self.created_at),
            "total_amount": self.total_amount,
            "total_items": self.total_items,
            "currency": self.currency,
        }

        for output_key, attr in OPTIONAL_FIELDS:
            include_if_not_empty(output, output_key, getattr(self, attr))

        for output_key, attr, display_name in STRING_ARRAY_FIELDS:
            items = getattr(self, attr)
            if items:
                output[output_key] = items_must_be_strings(items, display_name)

        if self.subscription_reorder is not None:
            output["is_subscription_reorder"] = self.subscription_reorder

        if self.tags:
            output["tags"] = items_must_be_strings(self.tags, "tags")

        if self.attributes:
            output["attributes"] = validate_attributes(self.attributes)

        return output
