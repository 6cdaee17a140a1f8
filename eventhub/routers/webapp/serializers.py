"""Response shaping: Decimals become floats at the HTTP boundary."""
from eventhub.services.models import Event, Order, PlatformStats, Profile, VendorSale
from eventhub.services.money import to_float


def event_response(event: Event) -> dict:
    return {
        "id": event.id,
        "vendor_id": event.vendor_id,
        "name": event.name,
        "description": event.description,
        "date": event.date.isoformat() if event.date else None,
        "price": to_float(event.price),
        "business_name": event.business_name,
    }


def order_response(order: Order) -> dict:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "total_price": to_float(order.total_price),
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "buyer_name": order.buyer_name,
        "item_count": order.item_count if order.item_count is not None else len(order.items),
        "items": [
            {
                "event_id": item.event_id,
                "quantity": item.quantity,
                "price": to_float(item.price),
            }
            for item in order.items
        ],
    }


def profile_response(profile: Profile) -> dict:
    return {
        "id": profile.id,
        "email": profile.email,
        "full_name": profile.full_name,
        "role": profile.role.value,
        "business_name": profile.business_name,
    }


def sale_response(sale: VendorSale) -> dict:
    return {
        "order_id": sale.order_id,
        "event_id": sale.event_id,
        "event_name": sale.event_name,
        "buyer_name": sale.buyer_name,
        "quantity": sale.quantity,
        "price": to_float(sale.price),
        "total": to_float(sale.line_total),
        "ordered_at": sale.ordered_at.isoformat() if sale.ordered_at else None,
    }


def stats_response(stats: PlatformStats) -> dict:
    return {
        "users": stats.users,
        "events": stats.events,
        "orders": stats.orders,
        "revenue": to_float(stats.revenue),
    }
