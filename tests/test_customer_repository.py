"""Tests for the SQLite customer store."""

import pytest

from customer_service_api.app.core.config import settings
from customer_service_api.app.core.db import get_cursor
from customer_service_api.app.core.exceptions import (
    CustomerAlreadyExistsError,
    StoreFailureError,
)
from customer_service_api.app.repositories.customer_repository import CustomerRepository
from customer_service_api.app.schemas.customer import Customer


def _customer(mobile_number: str, name: str = "Customer") -> Customer:
    return Customer(
        name=name,
        email=f"{mobile_number}@example.com",
        mobile_number=mobile_number,
        branch_address="Nairobi",
    )


class TestSave:
    def test_insert_assigns_id_and_creation_audit(self) -> None:
        saved = CustomerRepository.save(_customer("0700000001"))
        assert saved.customer_id is not None
        assert saved.created_at is not None
        assert saved.created_by == settings.audit_actor
        assert saved.updated_at is None
        assert saved.updated_by is None

    def test_insert_does_not_modify_argument(self) -> None:
        customer = _customer("0700000001")
        CustomerRepository.save(customer)
        assert customer.customer_id is None

    def test_update_stamps_update_audit(self, monkeypatch) -> None:
        saved = CustomerRepository.save(_customer("0700000001"))
        creator = settings.audit_actor
        monkeypatch.setattr(settings, "audit_actor", "BACKOFFICE")
        saved.name = "Renamed"
        updated = CustomerRepository.save(saved)
        assert updated.customer_id == saved.customer_id
        assert updated.name == "Renamed"
        assert updated.created_by == creator
        assert updated.created_at == saved.created_at
        assert updated.updated_by == "BACKOFFICE"
        assert updated.updated_at is not None

    def test_duplicate_mobile_number_rejected_by_unique_index(self) -> None:
        CustomerRepository.save(_customer("0700000001"))
        with pytest.raises(CustomerAlreadyExistsError) as excinfo:
            CustomerRepository.save(_customer("0700000001", name="Other"))
        assert excinfo.value.mobile_number == "0700000001"
        assert CustomerRepository.find_by_mobile_number("0700000001").name == "Customer"


class TestLookupAndDelete:
    def test_find_by_mobile_number_and_id(self) -> None:
        saved = CustomerRepository.save(_customer("0700000001"))
        assert CustomerRepository.find_by_mobile_number("0700000001") == saved
        assert CustomerRepository.find_by_id(saved.customer_id) == saved
        assert CustomerRepository.find_by_mobile_number("0799999999") is None
        assert CustomerRepository.find_by_id(9999) is None

    def test_delete_by_customer_id(self) -> None:
        saved = CustomerRepository.save(_customer("0700000001"))
        assert CustomerRepository.delete_by_customer_id(saved.customer_id) == 1
        assert CustomerRepository.find_by_id(saved.customer_id) is None
        assert CustomerRepository.delete_by_customer_id(saved.customer_id) == 0

    def test_customer_id_is_never_reused(self) -> None:
        first = CustomerRepository.save(_customer("0700000001"))
        CustomerRepository.delete_by_customer_id(first.customer_id)
        second = CustomerRepository.save(_customer("0700000001"))
        assert second.customer_id > first.customer_id


class TestFindAll:
    @pytest.fixture(autouse=True)
    def seed(self) -> None:
        for i, name in enumerate(["delta", "alpha", "charlie", "bravo", "echo"]):
            CustomerRepository.save(_customer(f"070000000{i}", name=name))

    def test_pages_and_total(self) -> None:
        customers, total = CustomerRepository.find_all(page=1, size=2)
        assert total == 5
        assert [c.name for c in customers] == ["charlie", "bravo"]

    def test_sort_by_name_descending(self) -> None:
        customers, _ = CustomerRepository.find_all(page=0, size=5, sort_by="name", ascending=False)
        assert [c.name for c in customers] == ["echo", "delta", "charlie", "bravo", "alpha"]

    def test_snake_case_sort_field_accepted(self) -> None:
        customers, _ = CustomerRepository.find_all(page=0, size=1, sort_by="mobile_number", ascending=False)
        assert customers[0].mobile_number == "0700000004"

    def test_unknown_sort_field_falls_back_to_customer_id(self) -> None:
        customers, _ = CustomerRepository.find_all(page=0, size=5, sort_by="name; DROP TABLE customers")
        ids = [c.customer_id for c in customers]
        assert ids == sorted(ids)

    def test_page_past_end_is_empty(self) -> None:
        customers, total = CustomerRepository.find_all(page=3, size=2)
        assert customers == []
        assert total == 5


class TestSearch:
    def test_matches_name_case_insensitively_or_mobile_substring(self) -> None:
        CustomerRepository.save(_customer("0755512345", name="Zed"))
        CustomerRepository.save(_customer("0700000001", name="Agent 555X"))
        CustomerRepository.save(_customer("0700000002", name="agent x555"))
        CustomerRepository.save(_customer("0700000003", name="Nobody"))
        found = CustomerRepository.find_by_name_or_phone("555")
        assert sorted(c.mobile_number for c in found) == ["0700000001", "0700000002", "0755512345"]

    def test_name_match_ignores_case(self) -> None:
        CustomerRepository.save(_customer("0700000001", name="Alice Wanjiru"))
        assert len(CustomerRepository.find_by_name_or_phone("WANJ")) == 1

    def test_name_match_folds_non_ascii_case(self) -> None:
        CustomerRepository.save(_customer("0700000001", name="Алёна Иванова"))
        CustomerRepository.save(_customer("0700000002", name="ÉMILE Durand"))
        CustomerRepository.save(_customer("0700000003", name="Alice"))
        assert [c.name for c in CustomerRepository.find_by_name_or_phone("алёна")] == ["Алёна Иванова"]
        assert [c.name for c in CustomerRepository.find_by_name_or_phone("ИВАНОВА")] == ["Алёна Иванова"]
        assert [c.name for c in CustomerRepository.find_by_name_or_phone("émile")] == ["ÉMILE Durand"]

    def test_wildcards_are_literal(self) -> None:
        CustomerRepository.save(_customer("0700000001", name="Alice"))
        assert CustomerRepository.find_by_name_or_phone("%") == []
        assert CustomerRepository.find_by_name_or_phone("_") == []

    def test_no_match_returns_empty_list(self) -> None:
        CustomerRepository.save(_customer("0700000001", name="Alice"))
        assert CustomerRepository.find_by_name_or_phone("xyz") == []


def test_database_error_becomes_store_failure() -> None:
    with get_cursor() as cursor:
        cursor.execute("DROP TABLE customers")
    with pytest.raises(StoreFailureError) as excinfo:
        CustomerRepository.find_by_mobile_number("0700000001")
    assert excinfo.value.__cause__ is not None
