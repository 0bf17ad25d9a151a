"""
Unit tests for the Order and Customer builders.
"""

from datetime import datetime

import pytest

from core.exceptions import ValidationError
from models import Customer, Order


# Fixtures

@pytest.fixture
def required_order():
    """Create an order with only the required fields set."""
    return (
        Order()
        .set_id("1")
        .set_number("#100001")
        .set_created_at(datetime(2024, 3, 1, 9, 30, 5))
        .set_total_amount(123.45)
        .set_total_items(3)
        .set_currency("GBP")
    )


@pytest.fixture
def required_customer():
    """Create a customer with only the required fields set."""
    return (
        Customer()
        .set_first_name("John")
        .set_last_name("Smith")
        .set_email("john@example.com")
    )


# Tests for Order

class TestOrder:

    def test_required_fields_only(self, required_order):
        """Test that no optional key appears when only required fields are set."""
        assert required_order.to_dict() == {
            "id": "1",
            "number": "#100001",
            "created_at": "2024-03-01 09:30:05",
            "total_amount": 123.45,
            "total_items": 3,
            "currency": "GBP",
        }

    def test_all_fields(self, required_order):
        output = (
            required_order
            .set_billing_country("GB")
            .set_billing_postcode("SW1A 1AA")
            .set_billing_city("London")
            .set_shipping_country("FR")
            .set_shipping_postcode("75001")
            .set_shipping_city("Paris")
            .set_gift_message("Happy birthday!")
            .set_gift_message_recipient("Jane")
            .set_skus(["SKU-1", "SKU-2"])
            .set_product_titles(["Socks", "Hat"])
            .set_promo_codes(["WELCOME10"])
            .set_subscription_reorder(True)
            .set_tags(["vip"])
            .set_attributes({"channel": "web", "items": [1, 2], "nested": {"a": True}})
            .to_dict()
        )

        assert output == {
            "id": "1",
            "number": "#100001",
            "created_at": "2024-03-01 09:30:05",
            "total_amount": 123.45,
            "total_items": 3,
            "currency": "GBP",
            "billing_country": "GB",
            "billing_postcode": "SW1A 1AA",
            "billing_city": "London",
            "shipping_country": "FR",
            "shipping_postcode": "75001",
            "shipping_city": "Paris",
            "gift_message": "Happy birthday!",
            "gift_message_recipient": "Jane",
            "skus": ["SKU-1", "SKU-2"],
            "product_titles": ["Socks", "Hat"],
            "promo_codes": ["WELCOME10"],
            "is_subscription_reorder": True,
            "tags": ["vip"],
            "attributes": {"channel": "web", "items": [1, 2], "nested": {"a": True}},
        }

    def test_setters_are_fluent(self):
        order = Order()
        assert order.set_id("1") is order
        assert order.set_tags(["a"]) is order
        assert order.set_attributes({"a": 1}) is order

    @pytest.mark.parametrize(
        "missing",
        ["id", "number", "created_at", "total_amount", "total_items", "currency"],
    )
    def test_each_required_field_is_checked(self, required_order, missing):
        setattr(required_order, missing, None)

        with pytest.raises(ValidationError) as exc_info:
            required_order.to_dict()

        assert exc_info.value.field == missing
        assert f'Required field "{missing}" must be set' in str(exc_info.value)

    def test_first_missing_field_is_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            Order().set_currency("GBP").to_dict()

        assert exc_info.value.field == "id"

    @pytest.mark.parametrize("setter", ["set_skus", "set_product_titles", "set_promo_codes", "set_tags"])
    def test_empty_arrays_are_omitted(self, required_order, setter):
        getattr(required_order, setter)([])

        assert len(required_order.to_dict()) == 6

    def test_empty_strings_and_attributes_are_omitted(self, required_order):
        required_order.set_gift_message("").set_billing_city("").set_attributes({})

        assert len(required_order.to_dict()) == 6

    @pytest.mark.parametrize(
        "setter, field_name",
        [
            ("set_skus", "skus"),
            ("set_product_titles", "product titles"),
            ("set_promo_codes", "promo codes"),
            ("set_tags", "tags"),
        ],
    )
    def test_array_items_must_be_strings(self, setter, field_name):
        with pytest.raises(ValidationError) as exc_info:
            getattr(Order(), setter)(["ok", 3])

        assert f"All {field_name} array items must be strings" in str(exc_info.value)

    def test_array_items_are_checked_on_serialize(self, required_order):
        required_order.skus = ["SKU-1", None]

        with pytest.raises(ValidationError):
            required_order.to_dict()

    def test_subscription_reorder_false_is_included(self, required_order):
        required_order.set_subscription_reorder(False)

        assert required_order.to_dict()["is_subscription_reorder"] is False

    def test_attribute_keys_must_be_strings(self):
        with pytest.raises(ValidationError) as exc_info:
            Order().set_attributes({1: "value"})

        assert "Attribute keys must be strings, received: 1" in str(exc_info.value)

    def test_attribute_values_may_not_be_null(self):
        with pytest.raises(ValidationError) as exc_info:
            Order().set_attributes({"gift_wrap": None})

        assert 'Received a null value for attribute "gift_wrap"' in str(exc_info.value)

    def test_invalid_attributes_assigned_directly_fail_on_serialize(self, required_order):
        required_order.attributes = {"ok": "yes", "bad": None}

        with pytest.raises(ValidationError):
            required_order.to_dict()

    def test_falsy_attribute_values_are_allowed(self, required_order):
        required_order.set_attributes({"count": 0, "flag": False, "note": ""})

        assert required_order.to_dict()["attributes"] == {"count": 0, "flag": False, "note": ""}

    def test_output_is_independent_of_builder(self, required_order):
        required_order.set_skus(["SKU-1"]).set_attributes({"items": ["a"]})

        output = required_order.to_dict()
        output["skus"].append("SKU-2")
        output["attributes"]["items"].append("b")

        assert required_order.skus == ["SKU-1"]
        assert required_order.attributes == {"items": ["a"]}

    def test_constructor_accepts_fields(self):
        order = Order(
            id="1",
            number="#1",
            created_at=datetime(2024, 1, 1),
            total_amount=0.0,
            total_items=0,
            currency="USD",
        )

        output = order.to_dict()
        assert output["created_at"] == "2024-01-01 00:00:00"
        assert output["total_amount"] == 0.0
        assert output["total_items"] == 0


# Tests for Customer

class TestCustomer:

    def test_required_fields_only(self, required_customer):
        assert required_customer.to_dict() == {
            "first_name": "John",
            "last_name": "Smith",
            "email": "john@example.com",
        }

    def test_all_fields(self, required_customer):
        output = (
            required_customer
            .set_vendor_customer_id("CUST-9")
            .set_language("en")
            .set_marketing_consent(True)
            .set_total_orders(4)
            .set_total_spent(250.5)
            .set_tags(["repeat"])
            .set_attributes({"tier": "gold"})
            .to_dict()
        )

        assert output == {
            "first_name": "John",
            "last_name": "Smith",
            "email": "john@example.com",
            "vendor_customer_id": "CUST-9",
            "language": "en",
            "tags": ["repeat"],
            "attributes": {"tier": "gold"},
            "marketing_consent": True,
            "total_orders": 4,
            "total_spent": 250.5,
        }

    @pytest.mark.parametrize("missing", ["first_name", "last_name", "email"])
    def test_each_required_field_is_checked(self, required_customer, missing):
        setattr(required_customer, missing, None)

        with pytest.raises(ValidationError) as exc_info:
            required_customer.to_dict()

        assert exc_info.value.field == missing

    def test_falsy_flags_are_included_when_set(self, required_customer):
        output = (
            required_customer
            .set_marketing_consent(False)
            .set_total_orders(0)
            .set_total_spent(0.0)
            .to_dict()
        )

        assert output["marketing_consent"] is False
        assert output["total_orders"] == 0
        assert output["total_spent"] == 0.0

    def test_empty_optional_fields_are_omitted(self, required_customer):
        required_customer.set_language("").set_tags([]).set_attributes({})

        assert len(required_customer.to_dict()) == 3

    def test_tags_must_be_strings(self):
        with pytest.raises(ValidationError):
            Customer().set_tags(["ok", None])

    def test_attribute_keys_must_be_strings(self):
        with pytest.raises(ValidationError):
            Customer().set_attributes({("a", "b"): "value"})

    def test_attribute_values_may_not_be_null(self, required_customer):
        required_customer.attributes = {"tier": None}

        with pytest.raises(ValidationError) as exc_info:
            required_customer.to_dict()

        assert exc_info.value.field == "attributes"
