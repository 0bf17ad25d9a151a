"""
Customer data model.

The customer who placed an Order. Like Order, this is a mutable builder
whose to_dict() is the validation point.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any, List, Mapping, Optional, Sequence, Union

from .validation import (
    AttributeValue,
    check_required_fields,
    include_if_not_empty,
    items_must_be_strings,
    validate_attributes,
)

REQUIRED_FIELDS = ("first_name", "last_name", "email")


@dataclass
class Customer:
    """
    A customer.

    Required: first_name, last_name, email.
    marketing_consent, total_orders and total_spent are emitted whenever
    they were set, even as False or 0. Other optional fields are left out
    when empty.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    vendor_customer_id: Optional[str] = None
    """Customer id on the e-commerce platform."""

    language: Optional[str] = None

    marketing_consent: Optional[bool] = None
    total_orders: Optional[int] = None
    total_spent: Optional[Union[float, Decimal]] = None

    tags: Optional[List[str]] = None
    attributes: Optional[Dict[str, AttributeValue]] = None

    def set_first_name(self, first_name: str) -> "Customer":
        self.first_name = first_name
        return self

    def set_last_name(self, last_name: str) -> "Customer":
        self.last_name = last_name
        return self

    def set_email(self, email: str) -> "Customer":
        self.email = email
        return self

    def set_vendor_customer_id(self, vendor_customer_id: str) -> "Customer":
        self.vendor_customer_id = vendor_customer_id
        return self

    def set_language(self, language: str) -> "Customer":
        self.language = language
        return self

    def set_marketing_consent(self, marketing_consent: bool) -> "Customer":
        self.marketing_consent = marketing_consent
        return self

    def set_total_orders(self, total_orders: int) -> "Customer":
        self.total_orders = total_orders
        return self

    def set_total_spent(self, total_spent: Union[float, Decimal]) -> "Customer":
        self.total_spent = total_spent
        return self

    def set_tags(self, tags: Sequence[str]) -> "Customer":
        self.tags = items_must_be_strings(tags, "tags")
        return self

    def set_attributes(self, attributes: Mapping[str, AttributeValue]) -> "Customer":
        self.attributes = validate_attributes(attributes)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the ingest API's customer payload.

        Raises:
            ValidationError: If a required field is unset or tags/attributes
                are invalid
        """
        check_required_fields(self, REQUIRED_FIELDS)

        output: Dict[str, Any] = {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
        }

        include_if_not_empty(output, "vendor_customer_id", self.vendor_customer_id)
        include_if_not_empty(output, "language", self.language)

        if self.tags:
            output["tags"] = items_must_be_strings(self.tags, "tags")

        if self.attributes:
            output["attributes"] = validate_attributes(self.attributes)

        if self.marketing_consent is not None:
            output["marketing_consent"] = self.marketing_consent
        if self.total_orders is not None:
            output["total_orders"] = self.total_orders
        if self.total_spent is not None:
            output["total_spent"] = self.total_spent

        return output
