"""
Tests for Cart Manager and cart storage
"""

import json
from decimal import Decimal
from unittest.mock import Mock

import pytest

from eventhub.cart import (
    Cart,
    CartLine,
    CartManager,
    FileCartStorage,
    MalformedCart,
    MemoryCartStorage,
    RedisCartStorage,
)
from eventhub.services.models import Event


def make_event(event_id="A", price=20.00, name="Jazz Night"):
    return {"id": event_id, "name": name, "price": price, "date": "2025-07-01"}


@pytest.fixture
def storage():
    return MemoryCartStorage()


@pytest.fixture
def manager(storage):
    return CartManager(storage)


class TestCartLine:
    """Tests for CartLine dataclass."""

    def test_price_and_line_total(self):
        """Test unit price comes from the snapshot."""
        line = CartLine(item_id="A", snapshot={"id": "A", "price": Decimal("9.99")}, quantity=3)

        assert line.price == Decimal("9.99")
        assert line.line_total == Decimal("29.97")

    def test_to_record_is_flat(self):
        """Test persisted record layout: id, snapshot fields, quantity."""
        line = CartLine(
            item_id="A",
            snapshot={"id": "A", "name": "Jazz Night", "price": Decimal("20.00")},
            quantity=2,
        )

        record = line.to_record()
        assert record == {"id": "A", "name": "Jazz Night", "price": "20.00", "quantity": 2}

    def test_from_record_rejects_bad_quantity(self):
        """Test non-integer quantities are malformed."""
        for quantity in ("2", 1.5, None, True):
            with pytest.raises(MalformedCart):
                CartLine.from_record({"id": "A", "price": "1.00", "quantity": quantity})

    def test_from_record_rejects_missing_id_and_price(self):
        with pytest.raises(MalformedCart):
            CartLine.from_record({"price": "1.00", "quantity": 1})
        with pytest.raises(MalformedCart):
            CartLine.from_record({"id": "A", "price": "free", "quantity": 1})


class TestCart:
    """Tests for Cart dataclass."""

    def test_empty_cart(self):
        cart = Cart()

        assert cart.is_empty
        assert cart.total == Decimal("0")
        assert cart.total_items == 0

    def test_from_records_rejects_duplicates(self):
        """Test two records for one id do not form a cart."""
        records = [
            {"id": "A", "price": "1.00", "quantity": 1},
            {"id": "A", "price": "1.00", "quantity": 2},
        ]
        with pytest.raises(MalformedCart):
            Cart.from_records(records)

    def test_from_records_rejects_non_list(self):
        with pytest.raises(MalformedCart):
            Cart.from_records({"id": "A"})


class TestCartManager:
    """Tests for CartManager operations."""

    def test_add_new_item_appends(self, manager):
        manager.add_item(make_event("A"))
        manager.add_item(make_event("B"), 2)

        assert [line.item_id for line in manager.lines] == ["A", "B"]
        assert manager.lines[1].quantity == 2

    def test_add_existing_item_increments(self, manager):
        """Test adding the same event twice sums the quantities."""
        manager.add_item(make_event("A"), 2)
        manager.add_item(make_event("A"), 3)

        assert len(manager.lines) == 1
        assert manager.lines[0].quantity == 5

    def test_add_pydantic_event(self, manager, sample_event):
        """Test an Event model is snapshotted with its fields."""
        manager.add_item(Event(**sample_event))

        line = manager.lines[0]
        assert line.item_id == "A"
        assert line.name == "Jazz Night"
        assert line.price == Decimal("20.0")

    def test_add_item_without_id_raises(self, manager):
        with pytest.raises(ValueError):
            manager.add_item({"name": "No id", "price": 1})

    @pytest.mark.parametrize("price", [None, "free", "Infinity"])
    def test_add_item_without_valid_price_raises(self, manager, price):
        """Test an item is never added at an implied price of zero."""
        with pytest.raises(ValueError):
            manager.add_item({"id": "A", "price": price})

        assert manager.is_empty()

    def test_add_item_missing_price_raises(self, manager):
        with pytest.raises(ValueError):
            manager.add_item({"id": "A", "name": "No price"})

    def test_snapshot_price_is_not_live(self, manager):
        """Test later changes to the source event do not reach the cart."""
        event = make_event("A", price=20.00)
        manager.add_item(event)
        event["price"] = 99.00

        assert manager.total() == Decimal("20.0")

    def test_remove_item(self, manager):
        manager.add_item(make_event("A"))
        manager.add_item(make_event("B"))

        manager.remove_item("A")

        assert [line.item_id for line in manager.lines] == ["B"]

    def test_remove_absent_item_is_noop(self, manager):
        manager.add_item(make_event("A"))

        manager.remove_item("missing")

        assert [line.item_id for line in manager.lines] == ["A"]

    def test_update_quantity_sets_absolute_value(self, manager):
        manager.add_item(make_event("A"), 2)

        manager.update_quantity("A", 7)

        assert manager.lines[0].quantity == 7

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_update_quantity_non_positive_removes(self, manager, quantity):
        manager.add_item(make_event("A"))
        manager.add_item(make_event("B"))

        manager.update_quantity("A", quantity)

        assert [line.item_id for line in manager.lines] == ["B"]

    @pytest.mark.parametrize("quantity", [0, -1, 4])
    def test_update_quantity_absent_item_is_noop(self, manager, quantity):
        manager.add_item(make_event("A"), 2)

        manager.update_quantity("missing", quantity)

        assert [(line.item_id, line.quantity) for line in manager.lines] == [("A", 2)]

    def test_ids_stay_unique_across_operations(self, manager):
        """Test at most one line per id after mixed operations."""
        manager.add_item(make_event("A"))
        manager.add_item(make_event("B"))
        manager.add_item(make_event("A"), 2)
        manager.update_quantity("B", 0)
        manager.add_item(make_event("B"))
        manager.add_item(make_event("A"))
        manager.remove_item("C")

        ids = [line.item_id for line in manager.lines]
        assert len(ids) == len(set(ids))
        assert ids == ["A", "B"]
        assert manager.lines[0].quantity == 4

    def test_total_adds_exact_line_totals(self, manager):
        """Test 9.99 x 3 increases the total by exactly 29.97."""
        manager.add_item(make_event("A", price=20.00), 2)
        before = manager.total()

        manager.add_item(make_event("B", price=9.99), 3)

        assert manager.total() - before == Decimal("29.97")
        assert manager.total() == Decimal("69.97")

    def test_total_recomputed_after_mutations(self, manager):
        manager.add_item(make_event("A", price=10), 1)
        manager.update_quantity("A", 4)

        assert manager.total() == Decimal("40")
        assert manager.item_count() == 4

    def test_clear(self, manager, storage):
        manager.add_item(make_event("A"))

        manager.clear()

        assert manager.is_empty()
        assert json.loads(storage.value) == []

    def test_every_mutation_persists(self, storage):
        """Test each mutation saves the whole cart."""
        storage.save = Mock(wraps=storage.save)
        manager = CartManager(storage)

        manager.add_item(make_event("A"))
        manager.update_quantity("A", 3)
        manager.remove_item("A")
        manager.clear()

        assert storage.save.call_count == 4

    def test_save_failure_propagates(self, storage):
        storage.save = Mock(side_effect=OSError("disk full"))
        manager = CartManager(storage)

        with pytest.raises(OSError):
            manager.add_item(make_event("A"))

    def test_snapshot_is_independent_copy(self, manager):
        manager.add_item(make_event("A"), 2)
        snapshot = manager.snapshot()

        manager.update_quantity("A", 9)

        assert snapshot.lines[0].quantity == 2

    def test_restores_persisted_cart(self, storage):
        """Test a new manager picks up the saved cart."""
        first = CartManager(storage)
        first.add_item(make_event("A", price=9.99), 3)

        second = CartManager(storage)

        assert second.lines[0].quantity == 3
        assert second.total() == Decimal("29.97")

    def test_non_positive_quantity_survives_reload(self, storage):
        """Test a zero-quantity line does not cost the rest of the cart on reload."""
        first = CartManager(storage)
        first.add_item({"id": "A", "price": 20}, 2)
        first.add_item({"id": "B", "price": 5}, 0)

        second = CartManager(storage)

        assert [(line.item_id, line.quantity) for line in second.lines] == [("A", 2), ("B", 0)]
        assert second.snapshot() == first.snapshot()
        assert second.total() == Decimal("40")


class TestCartStorage:
    """Tests for persisted cart backends."""

    def test_round_trip(self, storage):
        """Test save then load yields an equal cart."""
        manager = CartManager(storage)
        manager.add_item(make_event("A", price=20.00), 2)
        manager.add_item(make_event("B", price=9.99, name="Opera"), 1)

        restored = storage.load()

        assert restored == manager.snapshot()

    def test_persisted_layout(self, storage):
        manager = CartManager(storage)
        manager.add_item(make_event("A", price=20.00), 2)

        records = json.loads(storage.value)

        assert records == [
            {"id": "A", "name": "Jazz Night", "price": "20.0", "date": "2025-07-01", "quantity": 2}
        ]

    def test_absent_value_loads_empty(self):
        assert MemoryCartStorage().load().is_empty

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "{}",
            '[{"price": "1.00", "quantity": 1}]',
            '[{"id": "A", "price": "1.00", "quantity": 1}, {"id": "A", "price": "1.00", "quantity": 1}]',
            "[1, 2, 3]",
        ],
    )
    def test_corrupted_value_loads_empty(self, raw):
        """Test malformed data is treated as no cart."""
        assert MemoryCartStorage(raw).load().is_empty

    def test_file_storage_round_trip(self, tmp_path):
        storage = FileCartStorage(tmp_path / "profile")
        manager = CartManager(storage)
        manager.add_item(make_event("A", price=12.50), 2)

        assert storage.path.name == "eventhub_cart.json"
        assert FileCartStorage(tmp_path / "profile").load() == manager.snapshot()

    def test_file_storage_corrupted_file(self, tmp_path):
        storage = FileCartStorage(tmp_path)
        storage.path.write_text("[{broken", encoding="utf-8")

        assert storage.load().is_empty

    def test_file_storage_missing_file(self, tmp_path):
        assert FileCartStorage(tmp_path / "nowhere").load().is_empty

    def test_redis_storage(self):
        redis = Mock()
        redis.get.return_value = None
        storage = RedisCartStorage(redis)

        assert storage.load().is_empty

        manager = CartManager(storage)
        manager.add_item(make_event("A"), 1)

        key, value = redis.set.call_args[0]
        assert key == "eventhub_cart"
        assert json.loads(value)[0]["id"] == "A"

    def test_redis_read_error_loads_empty(self):
        redis = Mock()
        redis.get.side_effect = ConnectionError("unreachable")

        assert RedisCartStorage(redis).load().is_empty
