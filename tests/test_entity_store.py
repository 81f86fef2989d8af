"""
test_entity_store.py – Unit tests for EntityStore.

Tests cover:
- Identity uniqueness on insert
- NotFoundError on get/remove/update of absent identities
- Validated, all-or-nothing field updates
- Enumeration order and container protocol
"""

import dataclasses
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from datetime import date

import pytest
from hypothesis import given
from hypothesis import strategies as st

from models import GroceryItem, Patient, Student
from repositories import (
    EntityStore,
    ErrorKind,
    DuplicateIdentityError,
    InvalidValueError,
    NotFoundError,
    RepositoryError,
)


EXPIRY = date(2027, 1, 31)


@pytest.fixture
def store():
    groceries = EntityStore()
    groceries.insert(GroceryItem(101, "Rice (5kg)", 50, EXPIRY))
    groceries.insert(GroceryItem(102, "Beans (2kg)", 30, EXPIRY))
    return groceries


class TestInsert:
    def test_insert_then_get(self, store):
        item = store.get(101)
        assert item.name == "Rice (5kg)"
        assert item.quantity == 50

    def test_duplicate_insert_rejected(self, store):
        with pytest.raises(DuplicateIdentityError) as exc_info:
            store.insert(GroceryItem(101, "Rice (5kg) - Duplicate", 10, EXPIRY))
        assert exc_info.value.identity == 101
        assert exc_info.value.kind is ErrorKind.DUPLICATE_IDENTITY
        assert len(store) == 2
        assert store.get(101).name == "Rice (5kg)"

    def test_insert_with_negative_quantity_rejected(self, store):
        with pytest.raises(InvalidValueError):
            store.insert(GroceryItem(103, "Oil", -1, EXPIRY))
        assert 103 not in store

    def test_entity_without_mutable_fields(self):
        patients = EntityStore()
        patients.insert(Patient(1, "Alice Mensah", 29, "Female"))
        assert patients.get(1).age == 29

    @given(st.lists(st.integers(min_value=0, max_value=20), max_size=50))
    def test_identities_stay_unique(self, ids):
        groceries = EntityStore()
        for item_id in ids:
            try:
                groceries.insert(GroceryItem(item_id, f"item {item_id}", 1, EXPIRY))
            except DuplicateIdentityError:
                pass
        stored = [item.id for item in groceries.list_all()]
        assert len(stored) == len(set(stored))
        assert set(stored) == set(ids)


class TestLookupAndRemove:
    def test_get_missing(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.get(999)
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_remove(self, store):
        assert store.remove(101) is True
        assert not store.exists(101)
        with pytest.raises(NotFoundError):
            store.get(101)

    def test_remove_missing_leaves_store_unchanged(self, store):
        with pytest.raises(NotFoundError):
            store.remove(999)
        assert [item.id for item in store.list_all()] == [101, 102]

    def test_remove_twice(self, store):
        store.remove(102)
        with pytest.raises(NotFoundError):
            store.remove(102)

    def test_reinsert_after_remove(self, store):
        item = store.get(101)
        store.remove(101)
        store.insert(item)
        assert store.get(101) is item
        assert len(store) == 2

    def test_errors_share_base_class(self, store):
        with pytest.raises(RepositoryError):
            store.get(999)


class TestUpdateField:
    def test_update_quantity(self, store):
        updated = store.update_field(102, 'quantity', 45)
        assert updated.quantity == 45
        assert store.get(102).quantity == 45

    def test_update_to_equal_value(self, store):
        store.update_field(102, 'quantity', 30)
        assert store.get(102).quantity == 30

    def test_update_to_zero(self, store):
        store.update_field(102, 'quantity', 0)
        assert store.get(102).quantity == 0

    def test_negative_value_rejected(self, store):
        with pytest.raises(InvalidValueError) as exc_info:
            store.update_field(102, 'quantity', -1000)
        assert exc_info.value.kind is ErrorKind.INVALID_VALUE
        assert exc_info.value.value == -1000
        assert store.get(102).quantity == 30

    def test_non_integer_value_rejected(self, store):
        with pytest.raises(InvalidValueError):
            store.update_field(102, 'quantity', "40")
        assert store.get(102).quantity == 30

    def test_immutable_field_rejected(self, store):
        with pytest.raises(InvalidValueError):
            store.update_field(102, 'name', "Lentils")
        assert store.get(102).name == "Beans (2kg)"

    def test_missing_identity_checked_first(self, store):
        with pytest.raises(NotFoundError):
            store.update_field(999, 'quantity', -5)

    def test_adjust_field(self, store):
        store.adjust_field(101, 'quantity', 5)
        assert store.get(101).quantity == 55

    def test_adjust_field_below_zero(self, store):
        with pytest.raises(InvalidValueError):
            store.adjust_field(102, 'quantity', -1000)
        assert store.get(102).quantity == 30

    def test_adjust_immutable_field_rejected(self, store):
        with pytest.raises(InvalidValueError) as exc_info:
            store.adjust_field(102, 'name', 5)
        assert "cannot be updated" in str(exc_info.value)
        assert store.get(102).name == "Beans (2kg)"

    def test_adjust_with_wrong_delta_type_rejected(self, store):
        with pytest.raises(InvalidValueError):
            store.adjust_field(102, 'quantity', "5")
        assert store.get(102).quantity == 30

    def test_entities_cannot_be_changed_behind_the_store(self, store):
        item = store.get(102)
        with pytest.raises(dataclasses.FrozenInstanceError):
            item.quantity = -7
        assert store.get(102).quantity == 30

    def test_update_leaves_earlier_copies_alone(self, store):
        before = store.get(102)
        listed = store.list_all()
        updated = store.update_field(102, 'quantity', 45)
        assert before.quantity == 30
        assert [item.quantity for item in listed] == [50, 30]
        assert updated is store.get(102)
        assert updated is not before

    def test_score_rule(self):
        students = EntityStore()
        students.insert(Student(1, "Ama Serwaa", 75))
        with pytest.raises(InvalidValueError):
            students.update_field(1, 'score', 101)
        students.update_field(1, 'score', 100)
        assert students.get(1).grade == "A"


class TestEnumeration:
    def test_list_all_in_insertion_order(self, store):
        store.insert(GroceryItem(50, "Salt", 5, EXPIRY))
        assert [item.id for item in store.list_all()] == [101, 102, 50]

    def test_list_all_returns_copy(self, store):
        items = store.list_all()
        items.clear()
        assert len(store) == 2

    def test_container_protocol(self, store):
        assert 101 in store
        assert 999 not in store
        assert [item.id for item in store] == [101, 102]

    def test_clear(self, store):
        store.clear()
        assert len(store) == 0
        assert store.list_all() == []

    def test_replace_all(self, store):
        store.replace_all([GroceryItem(7, "Sugar", 3, EXPIRY)])
        assert [item.id for item in store] == [7]

    def test_replace_all_with_duplicates_keeps_contents(self, store):
        with pytest.raises(DuplicateIdentityError):
            store.replace_all([GroceryItem(7, "Sugar", 3, EXPIRY), GroceryItem(7, "Sugar", 4, EXPIRY)])
        assert [item.id for item in store] == [101, 102]
