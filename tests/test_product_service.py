"""Tests for ProductService against real and simulated storage."""
from contextlib import nullcontext
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from catalog_api.exceptions import BadRequestError, InternalError, NotFoundError, ValidationError
from catalog_api.services.product_service import ProductService
from catalog_api.storage import MutationResult

VALID = {"name": "Widget", "price": 9.99, "quantity": 5}


def fake_storage(**kwargs):
    """Storage double whose transaction block does nothing."""
    storage = MagicMock(**kwargs)
    storage.transaction.return_value = nullcontext(storage)
    return storage


def test_round_trip(storage):
    """Test create then get returns identical fields."""
    service = ProductService(storage)

    created = service.create_product({**VALID, "description": "Blue"})

    assert service.get_product(created["id"]) == created
    assert service.list_products() == [created]


def test_get_accepts_string_and_negative_ids(storage):
    """Test ids parse from strings and negative ids are looked up, not rejected."""
    service = ProductService(storage)
    created = service.create_product(VALID)

    assert service.get_product(str(created["id"]))["id"] == created["id"]
    with pytest.raises(NotFoundError):
        service.get_product("-1")


def test_validation_happens_before_storage():
    """Test storage is never called with invalid input."""
    storage = fake_storage()
    service = ProductService(storage)

    with pytest.raises(ValidationError):
        service.create_product({"name": "", "price": 1, "quantity": 1})
    with pytest.raises(ValidationError):
        service.update_product("abc", VALID)
    with pytest.raises(ValidationError):
        service.delete_product(None)

    storage.execute.assert_not_called()
    storage.fetch_one.assert_not_called()


def test_create_without_generated_id():
    """Test a missing insert id is reported as a bad request."""
    storage = fake_storage()
    storage.execute.return_value = MutationResult(changes=1, last_insert_rowid=None)

    with pytest.raises(BadRequestError) as exc_info:
        ProductService(storage).create_product(VALID)

    assert exc_info.value.message == "Failed to add the product"
    assert not isinstance(exc_info.value, ValidationError)


def test_create_constraint_violation_is_internal():
    """Test integrity errors are downgraded to InternalError."""
    storage = fake_storage()
    storage.execute.side_effect = IntegrityError("INSERT", {}, Exception("constraint failed"))

    with pytest.raises(InternalError) as exc_info:
        ProductService(storage).create_product(VALID)

    assert exc_info.value.message == "Failed to add the product"
    assert "constraint failed" in exc_info.value.details


def test_get_storage_fault_is_internal():
    """Test read faults are wrapped, not propagated raw."""
    storage = fake_storage()
    storage.fetch_one.side_effect = OperationalError("SELECT", {}, Exception("no such table"))

    with pytest.raises(InternalError):
        ProductService(storage).get_product(1)


@pytest.mark.parametrize("method, args", [
    ("delete_product", (1,)),
    ("update_product", (1, VALID)),
])
def test_multiple_rows_affected_is_internal(method, args):
    """Test touching more than one row is treated as a uniqueness violation."""
    storage = fake_storage()
    storage.execute.return_value = MutationResult(changes=2)

    with pytest.raises(InternalError):
        getattr(ProductService(storage), method)(*args)


@pytest.mark.parametrize("method, args", [
    ("delete_product", (42,)),
    ("update_product", (42, VALID)),
])
def test_zero_rows_affected_is_not_found(method, args):
    """Test mutations that match nothing raise NotFoundError."""
    storage = fake_storage()
    storage.execute.return_value = MutationResult(changes=0)

    with pytest.raises(NotFoundError):
        getattr(ProductService(storage), method)(*args)


def test_multi_row_delete_rolls_back(storage):
    """Test the transaction is rolled back when the row-count check fails."""
    service = ProductService(storage)
    created = service.create_product(VALID)
    original_execute = storage.execute

    def report_two_rows(statement):
        result = original_execute(statement)
        return MutationResult(changes=result.changes + 1)

    storage.execute = report_two_rows
    with pytest.raises(InternalError):
        service.delete_product(created["id"])

    storage.execute = original_execute
    assert service.get_product(created["id"]) == created


@pytest.mark.parametrize("method, args", [
    ("get_product", (2 ** 63,)),
    ("update_product", (-(2 ** 63) - 1, VALID)),
    ("delete_product", ("99999999999999999999",)),
])
def test_ids_beyond_storage_range_skip_storage(method, args):
    """Test ids that storage cannot bind are reported as not found."""
    storage = fake_storage()

    with pytest.raises(NotFoundError):
        getattr(ProductService(storage), method)(*args)

    storage.fetch_one.assert_not_called()
    storage.execute.assert_not_called()
