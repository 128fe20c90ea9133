# app/core.py
import json
import math
from typing import Any, Dict, List

from fastapi import Request

from .errors import ValidationError
from .models import ProductIn, ProductUpdate

# Payload checks for create/update.  They run on the raw decoded JSON (no
# coercion) and collect every violation into one ValidationError.

MAX_NAME = 100
MAX_DESCRIPTION = 500
MAX_CATEGORY = 50
MAX_PRICE = 999999.99

# JSON field -> ProductIn/ProductUpdate attribute
_FIELDS = {
    "name": "name",
    "description": "description",
    "price": "price",
    "category": "category",
    "inStock": "in_stock",
}


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # ints are exact; isfinite would overflow on huge ones
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def _raise_if_any(errors: List[str]) -> None:
    if errors:
        raise ValidationError(f"Validation failed: {', '.join(errors)}")


def _known_fields(body: Dict[str, Any]) -> Dict[str, Any]:
    return {attr: body[key] for key, attr in _FIELDS.items() if key in body}


def validate_product(body: Dict[str, Any]) -> ProductIn:
    """Check a create payload; every core field is required."""
    name = body.get("name")
    description = body.get("description")
    price = body.get("price")
    category = body.get("category")
    errors: List[str] = []

    if not _is_text(name):
        errors.append("Name is required and must be a non-empty string")
    if not _is_text(description):
        errors.append("Description is required and must be a non-empty string")
    if price is None:
        errors.append("Price is required")
    elif not _is_number(price) or price < 0:
        errors.append("Price must be a non-negative number")
    if not _is_text(category):
        errors.append("Category is required and must be a non-empty string")

    if "inStock" in body and not isinstance(body["inStock"], bool):
        errors.append("inStock must be a boolean value")

    if isinstance(name, str) and len(name) > MAX_NAME:
        errors.append(f"Name must be less than {MAX_NAME} characters")
    if isinstance(description, str) and len(description) > MAX_DESCRIPTION:
        errors.append(f"Description must be less than {MAX_DESCRIPTION} characters")
    if isinstance(category, str) and len(category) > MAX_CATEGORY:
        errors.append(f"Category must be less than {MAX_CATEGORY} characters")
    if _is_number(price) and price > MAX_PRICE:
        errors.append("Price must be less than $999,999.99")

    _raise_if_any(errors)
    return ProductIn(**_known_fields(body))


def _check_text(body: Dict[str, Any], key: str, label: str, limit: int, errors: List[str]) -> None:
    if key not in body:
        return
    value = body[key]
    if not _is_text(value):
        errors.append(f"{label} must be a non-empty string")
    elif len(value) > limit:
        errors.append(f"{label} must be less than {limit} characters")


def validate_product_update(body: Dict[str, Any]) -> ProductUpdate:
    """Check an update payload; fields are optional but must be well-formed."""
    errors: List[str] = []

    _check_text(body, "name", "Name", MAX_NAME, errors)
    _check_text(body, "description", "Description", MAX_DESCRIPTION, errors)

    if "price" in body:
        price = body["price"]
        if not _is_number(price) or price < 0:
            errors.append("Price must be a non-negative number")
        elif price > MAX_PRICE:
            errors.append("Price must be less than $999,999.99")

    _check_text(body, "category", "Category", MAX_CATEGORY, errors)

    if "inStock" in body and not isinstance(body["inStock"], bool):
        errors.append("inStock must be a boolean value")

    if not body:
        errors.append("At least one field must be provided for update")

    _raise_if_any(errors)
    return ProductUpdate(**_known_fields(body))


# ---------------------------
# FastAPI dependencies
# ---------------------------
async def read_json_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise ValidationError("Invalid JSON format in request body")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


async def product_create_payload(request: Request) -> ProductIn:
    return validate_product(await read_json_body(request))


async def product_update_payload(request: Request) -> ProductUpdate:
    return validate_product_update(await read_json_body(request))
