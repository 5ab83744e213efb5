"""Tests for the session StateStore: collections, tickets and clearing."""

import pytest

from backoffice.inventory.item import InventoryItem
from backoffice.session.store import BackupSettings, StateStore


def _item(item_id, quantity=5, threshold=4):
    return InventoryItem(id=item_id, name=item_id, sku=item_id.upper(), quantity=quantity, threshold=threshold)


class TestCollections:
    def test_load_and_find(self):
        store = StateStore()
        store.load("inventory", [_item("a"), _item("b")])

        assert store.find("inventory", "b").id == "b"
        assert store.find("inventory", "zzz") is None

    def test_replace_keeps_position(self):
        store = StateStore()
        store.load("inventory", [_item("a"), _item("b"), _item("c")])

        assert store.replace("inventory", _item("b", quantity=1)) is True
        assert [item.id for item in store.inventory] == ["a", "b", "c"]
        assert store.find("inventory", "b").quantity == 1

    def test_replace_unknown(self):
        store = StateStore()
        assert store.replace("inventory", _item("a")) is False

    def test_prepend_and_remove(self):
        store = StateStore()
        store.prepend("inventory", _item("c"))
        store.prepend("inventory", _item("b"))
        store.prepend("inventory", _item("a"))
        store.remove("inventory", "b")

        assert [item.id for item in store.inventory] == ["a", "c"]

    def test_unknown_collection(self):
        with pytest.raises(KeyError):
            StateStore().load("widgets", [])


class TestTickets:
    def test_latest_ticket_is_current(self):
        store = StateStore()
        ticket = store.begin("inventory:a")
        assert store.is_current(ticket)

    def test_newer_ticket_supersedes(self):
        store = StateStore()
        older = store.begin("inventory:a")
        newer = store.begin("inventory:a")

        assert not store.is_current(older)
        assert store.is_current(newer)

    def test_keys_are_independent(self):
        store = StateStore()
        first = store.begin("inventory:a")
        store.begin("inventory:b")
        assert store.is_current(first)

    def test_clear_invalidates_outstanding_tickets(self):
        store = StateStore()
        ticket = store.begin("inventory:a")
        store.clear()

        assert not store.is_current(ticket)
        assert not store.is_same_session(ticket)

    def test_ticket_numbers_restart_after_clear_without_collisions(self):
        store = StateStore()
        before = store.begin("inventory:a")
        store.clear()
        after = store.begin("inventory:a")

        assert before.number == after.number
        assert not store.is_current(before)
        assert store.is_current(after)

    def test_same_session_ignores_ordering(self):
        store = StateStore()
        older = store.begin("emails")
        store.begin("emails")
        assert store.is_same_session(older)


class TestReconcile:
    def test_untouched_records_take_fetched_values(self):
        store = StateStore()
        store.load("inventory", [_item("a", quantity=5), _item("b", quantity=5)])
        ticket = store.begin("reload:inventory")

        store.reconcile("inventory", [_item("a", quantity=1), _item("b", quantity=2)], ticket)

        assert [(item.id, item.quantity) for item in store.inventory] == [("a", 1), ("b", 2)]

    def test_local_writes_after_the_fetch_began_win(self):
        store = StateStore()
        store.load("inventory", [_item("a", quantity=5), _item("b", quantity=5), _item("c")])
        ticket = store.begin("reload:inventory")

        store.replace("inventory", _item("a", quantity=9))
        store.remove("inventory", "c")
        store.prepend("inventory", _item("new"))
        store.reconcile("inventory", [_item("a", quantity=5), _item("b", quantity=2), _item("c")], ticket)

        assert [(item.id, item.quantity) for item in store.inventory] == [("new", 5), ("a", 9), ("b", 2)]

    def test_request_in_flight_keeps_local_copy(self):
        store = StateStore()
        store.load("inventory", [_item("a", quantity=5)])
        ticket = store.begin("reload:inventory")
        store.begin("inventory:a")

        store.reconcile("inventory", [_item("a", quantity=1)], ticket)

        assert store.find("inventory", "a").quantity == 5

    def test_writes_before_the_fetch_began_are_replaced(self):
        store = StateStore()
        store.prepend("inventory", _item("gone"))
        ticket = store.begin("reload:inventory")

        store.reconcile("inventory", [_item("a")], ticket)

        assert [item.id for item in store.inventory] == ["a"]


class TestClearAndSnapshot:
    def test_clear_resets_everything(self):
        store = StateStore()
        store.load("inventory", [_item("a")])
        store.cart.add_item(_item("a"), 1)
        store.notifications.info("hello")
        store.backup_settings = store.backup_settings.updated(enabled=True)
        generation = store.generation

        store.clear()

        assert store.inventory == []
        assert store.cart.is_empty
        assert len(store.notifications) == 0
        assert store.backup_settings == BackupSettings()
        assert store.generation == generation + 1

    def test_snapshot_is_immutable_view(self):
        store = StateStore()
        store.load("inventory", [_item("a", quantity=2, threshold=4), _item("b")])
        store.cart.add_item(store.find("inventory", "b"), 2)
        store.notifications.info("hello")

        snapshot = store.snapshot(user="someone")
        store.remove("inventory", "a")

        assert isinstance(snapshot.inventory, tuple)
        assert len(snapshot.inventory) == 2
        assert [item.id for item in snapshot.low_stock_items] == ["a"]
        assert snapshot.cart_total_items == 2
        assert snapshot.unread_count == 1
        assert snapshot.user == "someone"

    def test_active_discounts(self):
        from backoffice.discount.discount import Discount

        store = StateStore()
        on = Discount(code="ON", discount_type="Percentage", value=5)
        off = Discount(code="OFF", discount_type="Percentage", value=5, is_active=False)
        store.load("discounts", [on, off])

        assert store.active_discounts == [on]


class TestBackupSettings:
    def test_frequency_validated(self):
        with pytest.raises(ValueError):
            BackupSettings().updated(frequency="hourly")

    def test_update(self):
        settings = BackupSettings().updated(enabled=True, frequency="weekly")
        assert settings.enabled is True
        assert settings.frequency == "weekly"
