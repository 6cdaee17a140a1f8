"""
Tests for row models and money helpers
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from eventhub.services.models import Event, EventInput, Order, Profile, Role
from eventhub.services.money import format_money, parse_decimal, round_money, to_decimal, to_float


class TestProfile:
    def test_unknown_role_falls_back_to_user(self):
        assert Profile(id="U1", role="superuser").role == Role.USER

    def test_numeric_id_coerced(self):
        assert Profile(id=42).id == "42"


class TestEvent:
    """Tests for Event row model."""

    def test_price_from_float_keeps_cents(self):
        event = Event(id="A", name="Jazz Night", price=9.99)

        assert event.price == Decimal("9.99")

    def test_vendor_join_is_flattened(self, sample_event):
        event = Event(**{**sample_event, "profiles": {"business_name": "Blue Note"}})

        assert event.business_name == "Blue Note"
        assert event.date.isoformat() == "2025-07-01"


class TestEventInput:
    """Tests for the vendor event form."""

    def test_valid_input(self):
        data = EventInput(name="  Rock Night ", date="2025-08-01", price="0")

        assert data.name == "Rock Night"
        assert data.to_row() == {
            "name": "Rock Night",
            "description": None,
            "date": "2025-08-01",
            "price": 0.0,
        }

    @pytest.mark.parametrize("price", ["-1", "abc", None, "NaN"])
    def test_invalid_price(self, price):
        with pytest.raises(ValidationError, match="valid price"):
            EventInput(name="Rock Night", date="2025-08-01", price=price)

    def test_name_required(self):
        with pytest.raises(ValidationError):
            EventInput(name="   ", date="2025-08-01", price="10")

    def test_date_required(self):
        with pytest.raises(ValidationError):
            EventInput(name="Rock Night", price="10")


class TestOrder:
    def test_nested_items_and_buyer(self):
        order = Order(
            id="o-1",
            user_id="U1",
            total_price="40.00",
            order_items=[{"order_id": "o-1", "event_id": "A", "quantity": 2, "price": 20.0}],
            profiles={"full_name": "Test User"},
        )

        assert order.items[0].price == Decimal("20.0")
        assert order.buyer_name == "Test User"
        assert order.total_price == Decimal("40.00")
        assert order.item_count == 1

    def test_item_count_aggregate(self):
        order = Order(id="o-1", user_id="U1", total_price=10, order_items=[{"count": 4}])

        assert order.item_count == 4
        assert order.items == []


class TestMoney:
    """Tests for Decimal money helpers."""

    def test_to_decimal_tolerates_garbage(self):
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("abc") == Decimal("0")
        assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")

    def test_parse_decimal_is_strict(self):
        assert parse_decimal(" 12.50 ") == Decimal("12.50")
        for value in (None, True, "abc", "Infinity"):
            with pytest.raises(ValueError):
                parse_decimal(value)

    def test_round_and_format(self):
        assert round_money("2.345") == Decimal("2.35")
        assert format_money(Decimal("1234.5")) == "$1,234.50"
        assert format_money(10, currency="EUR") == "10.00 EUR"

    def test_to_float(self):
        assert to_float(Decimal("29.97")) == 29.97
