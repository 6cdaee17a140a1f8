"""Database Models - Pydantic models for remote rows."""
import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from eventhub.services.money import parse_decimal, to_decimal as _to_decimal


class Role(str, Enum):
    """Profile role classification."""
    USER = "user"  # customer
    VENDOR = "vendor"
    ADMIN = "admin"


class Profile(BaseModel):
    """Profile row, one per auth user (created by a signup trigger)."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: Role = Role.USER
    business_name: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    @field_validator("role", mode="before")
    @classmethod
    def unknown_role_is_user(cls, v):
        # Anything unrecognized routes like a customer
        try:
            return Role(v)
        except ValueError:
            return Role.USER


class Event(BaseModel):
    """Purchasable event listing."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    vendor_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    date: Optional[dt.date] = None
    price: Decimal
    created_at: Optional[dt.datetime] = None
    business_name: Optional[str] = None  # from the joined vendor profile

    @model_validator(mode="before")
    @classmethod
    def flatten_vendor(cls, data):
        # select('*, profiles(business_name)') nests the vendor profile
        if isinstance(data, dict) and isinstance(data.get("profiles"), dict):
            data = {**data, "business_name": data["profiles"].get("business_name")}
        return data

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)


class EventInput(BaseModel):
    """Vendor event form."""
    name: str
    description: Optional[str] = None
    date: dt.date
    price: Decimal

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Event name is required")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_non_negative(cls, v):
        try:
            price = parse_decimal(v)
        except ValueError:
            raise ValueError("Please enter a valid price for the event.") from None
        if price < 0:
            raise ValueError("Please enter a valid price for the event.")
        return price

    def to_row(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "date": self.date.isoformat(),
            "price": float(self.price),
        }


class OrderItem(BaseModel):
    """Order line; `price` is the unit price at purchase time."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    order_id: str
    event_id: str
    quantity: int
    price: Decimal

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)


class Order(BaseModel):
    """Order row created at checkout."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    user_id: str
    total_price: Decimal
    created_at: Optional[dt.datetime] = None
    items: list[OrderItem] = []
    item_count: Optional[int] = None
    buyer_name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_joins(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        nested = data.get("order_items")
        if isinstance(nested, list):
            if nested and all(isinstance(i, dict) and set(i) == {"count"} for i in nested):
                # order_items(count) aggregate
                data.pop("order_items")
                data["item_count"] = nested[0]["count"]
            else:
                data["items"] = data.pop("order_items")
                data.setdefault("item_count", len(data["items"]))
        if isinstance(data.get("profiles"), dict):
            data["buyer_name"] = data["profiles"].get("full_name")
        return data

    @field_validator("total_price", mode="before")
    @classmethod
    def convert_total_to_decimal(cls, v):
        return _to_decimal(v)


class VendorSale(BaseModel):
    """Order item on one of the vendor's events, with buyer and event name."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    order_id: str
    event_id: str
    quantity: int
    price: Decimal
    event_name: Optional[str] = None
    buyer_name: Optional[str] = None
    ordered_at: Optional[dt.datetime] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_joins(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        order = data.pop("orders", None) or {}
        event = data.pop("events", None) or {}
        data["ordered_at"] = order.get("created_at")
        data["buyer_name"] = (order.get("profiles") or {}).get("full_name")
        data["event_name"] = event.get("name")
        return data

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class PlatformStats(BaseModel):
    """Admin dashboard aggregates."""
    users: int = 0
    events: int = 0
    orders: int = 0
    revenue: Decimal = Decimal("0")
