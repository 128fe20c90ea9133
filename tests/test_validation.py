# tests/test_validation.py
import pytest

from app.core import validate_product, validate_product_update
from app.errors import ValidationError

VALID = {
    "name": "Laptop",
    "description": "Thin and light",
    "price": 1200,
    "category": "electronics",
}


def _message(fn, body):
    with pytest.raises(ValidationError) as exc_info:
        fn(body)
    assert exc_info.value.status_code == 400
    return exc_info.value.message


def test_valid_create_payload():
    payload = validate_product({**VALID, "extra": "ignored"})
    assert payload.name == "Laptop"
    assert payload.price == 1200
    assert payload.in_stock is True


def test_create_payload_keeps_explicit_stock_flag():
    assert validate_product({**VALID, "inStock": False}).in_stock is False


def test_empty_create_payload_lists_all_required_fields():
    assert _message(validate_product, {}) == (
        "Validation failed: Name is required and must be a non-empty string, "
        "Description is required and must be a non-empty string, "
        "Price is required, "
        "Category is required and must be a non-empty string"
    )


def test_null_price_is_missing():
    assert _message(validate_product, {**VALID, "price": None}) == "Validation failed: Price is required"


@pytest.mark.parametrize("price", [-1, -0.01, "10", True, [1]])
def test_bad_price(price):
    assert _message(validate_product, {**VALID, "price": price}) == (
        "Validation failed: Price must be a non-negative number"
    )


def test_price_bounds():
    assert validate_product({**VALID, "price": 0}).price == 0
    assert validate_product({**VALID, "price": 999999.99}).price == 999999.99
    assert _message(validate_product, {**VALID, "price": 1000000}) == (
        "Validation failed: Price must be less than $999,999.99"
    )


def test_length_caps():
    ok = validate_product({**VALID, "name": "n" * 100, "description": "d" * 500, "category": "c" * 50})
    assert len(ok.name) == 100

    message = _message(validate_product, {
        **VALID, "name": "n" * 101, "description": "d" * 501, "category": "c" * 51,
    })
    assert message == (
        "Validation failed: Name must be less than 100 characters, "
        "Description must be less than 500 characters, "
        "Category must be less than 50 characters"
    )


def test_whitespace_only_strings_are_blank():
    assert _message(validate_product, {**VALID, "category": "   "}) == (
        "Validation failed: Category is required and must be a non-empty string"
    )


@pytest.mark.parametrize("flag", ["true", 1, None])
def test_in_stock_must_be_boolean(flag):
    assert _message(validate_product, {**VALID, "inStock": flag}) == (
        "Validation failed: inStock must be a boolean value"
    )


def test_type_and_range_errors_accumulate_in_order():
    message = _message(validate_product, {
        "name": 42, "description": "ok", "price": 5_000_000, "category": "c" * 60, "inStock": "no",
    })
    assert message == (
        "Validation failed: Name is required and must be a non-empty string, "
        "inStock must be a boolean value, "
        "Category must be less than 50 characters, "
        "Price must be less than $999,999.99"
    )


def test_valid_partial_update():
    payload = validate_product_update({"price": 10.5})
    assert payload.model_dump(exclude_unset=True) == {"price": 10.5}


def test_update_maps_in_stock():
    payload = validate_product_update({"inStock": False})
    assert payload.model_dump(exclude_unset=True) == {"in_stock": False}


def test_update_with_only_unknown_fields_passes_and_changes_nothing():
    assert validate_product_update({"colour": "red"}).model_dump(exclude_unset=True) == {}


def test_empty_update():
    assert _message(validate_product_update, {}) == (
        "Validation failed: At least one field must be provided for update"
    )


def test_update_field_errors():
    message = _message(validate_product_update, {
        "name": "",
        "description": "d" * 501,
        "price": -3,
        "category": None,
        "inStock": "false",
    })
    assert message == (
        "Validation failed: Name must be a non-empty string, "
        "Description must be less than 500 characters, "
        "Price must be a non-negative number, "
        "Category must be a non-empty string, "
        "inStock must be a boolean value"
    )


def test_update_price_cap():
    assert _message(validate_product_update, {"price": 1_000_000}) == (
        "Validation failed: Price must be less than $999,999.99"
    )


def test_huge_integer_price_is_over_the_cap():
    huge = 10 ** 400
    assert _message(validate_product, {**VALID, "price": huge}) == (
        "Validation failed: Price must be less than $999,999.99"
    )
    assert _message(validate_product_update, {"price": huge}) == (
        "Validation failed: Price must be less than $999,999.99"
    )
