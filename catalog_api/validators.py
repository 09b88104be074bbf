"""
Validation of untrusted product input.

Every function is pure: it either returns a normalized value or raises
``ValidationError``. Parsing is delegated to pydantic type adapters; their
errors are translated into the catalog's messages. The product service runs
these before touching storage.
"""
from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import Field, StringConstraints, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from catalog_api.exceptions import ValidationError
from catalog_api.schemas.product import ProductPayload

# Signed 64-bit range of an SQLite INTEGER
STORAGE_INT_MIN = -(2 ** 63)
STORAGE_INT_MAX = 2 ** 63 - 1

_name_adapter = TypeAdapter(
    Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]
)
_number_adapter = TypeAdapter(Annotated[float, Field(allow_inf_nan=False)])
_integer_adapter = TypeAdapter(int)
_storable_integer_adapter = TypeAdapter(
    Annotated[int, Field(ge=STORAGE_INT_MIN, le=STORAGE_INT_MAX)]
)


def _parse(adapter: TypeAdapter, raw: Any):
    """Run ``adapter`` over ``raw``; booleans are never numbers."""
    if isinstance(raw, bool):
        raise ValueError("booleans are not numeric")
    if isinstance(raw, str):
        raw = raw.strip()
    return adapter.validate_python(raw)


def is_storable_id(product_id: int) -> bool:
    """True when ``product_id`` fits the storage integer range."""
    return STORAGE_INT_MIN <= product_id <= STORAGE_INT_MAX


def validate_name(raw: Any) -> str:
    """Trim a product name, rejecting absent or blank values."""
    try:
        return _name_adapter.validate_python(raw)
    except PydanticValidationError:
        raise ValidationError("name required", field="name")


def validate_number(raw: Any, field: str = "value") -> float:
    """Parse a finite floating-point number."""
    try:
        return _parse(_number_adapter, raw)
    except (PydanticValidationError, ValueError):
        raise ValidationError(f"{field} must be numeric", field=field)


def validate_integer(raw: Any, field: str = "value") -> int:
    """Parse a whole number that storage can hold."""
    try:
        return _parse(_storable_integer_adapter, raw)
    except (PydanticValidationError, ValueError):
        raise ValidationError(f"{field} must be numeric", field=field)


def validate_id(raw: Any) -> int:
    """
    Parse a product identifier taken from a path or a request body.

    Any whole number is accepted, including ones outside the storage range;
    the service reports those as not found.
    """
    try:
        return _parse(_integer_adapter, raw)
    except (PydanticValidationError, ValueError):
        raise ValidationError("invalid id", field="id")


def validate_product(data: Any) -> ProductPayload:
    """
    Validate the mutable product fields of a create or update body.

    The name is checked first. Price and quantity are then both checked
    before failing, so one error names every bad numeric field.

    Args:
        data: Decoded JSON body; None is treated as an empty object

    Returns:
        Immutable validated payload
    """
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValidationError("request body must be a JSON object")

    name = validate_name(data.get("name"))

    failed = []
    price = quantity = None
    try:
        price = validate_number(data.get("price"), field="price")
    except ValidationError:
        failed.append("price")
    try:
        quantity = validate_integer(data.get("quantity"), field="quantity")
    except ValidationError:
        failed.append("quantity")
    if failed:
        raise ValidationError(
            f"{' and '.join(failed)} must be numeric",
            field=",".join(failed),
        )

    description = data.get("description")
    if description is None:
        description = ""
    elif not isinstance(description, str):
        raise ValidationError("description must be a string", field="description")

    return ProductPayload(
        name=name,
        price=price,
        description=description,
        quantity=quantity,
    )
