"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``PhotoUpload``: an uploaded photo spooled to a temporary file.
- ``ProductInputDTO``: validated input for product create/update.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from modules.products.exceptions import InvalidProductInput

MAX_PHOTO_BYTES = 1_000_000

PHOTO_TOO_LARGE = "Photo should be less than 1MB"

# Column limits of ``Product.price`` (max_digits=10, decimal_places=2) and
# ``Product.quantity`` (PositiveIntegerField).
PRICE_CENT = Decimal("0.01")
PRICE_UPPER_BOUND = Decimal("100000000")
MAX_QUANTITY = 2_147_483_647

INPUT_FIELDS = ("name", "description", "price", "category", "quantity", "shipping")


def _rule_error(message: str) -> PydanticCustomError:
    return PydanticCustomError("product_rule", message)


def _label(info: ValidationInfo) -> str:
    return info.field_name.capitalize()


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _as_decimal(value: Any) -> Optional[Decimal]:
    """Parse ints, floats, decimals and numeric strings; ``None`` otherwise."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _positive_number(v: Any, info: ValidationInfo) -> Decimal:
    if _is_blank(v):
        raise _rule_error(f"{_label(info)} is required")
    number = _as_decimal(v)
    if number is None:
        raise _rule_error(f"{_label(info)} must be a valid number")
    if number <= 0:
        raise _rule_error(f"{_label(info)} must be a positive number")
    return number


class PhotoUpload(BaseModel):
    """Descriptor of an uploaded photo: where it lives and what it claims to be."""

    model_config = ConfigDict(frozen=True)

    path: str
    size: int = Field(ge=0)
    content_type: str


class ProductInputDTO(BaseModel):
    """Immutable, validated product fields shared by create and update.

    Rules run in field order and the first failing one decides the error
    a client sees:

    - ``name``, ``description``, ``category``: present and not blank.
    - ``price``: a positive number that fits the price column (whole
      cents, below 100 000 000).
    - ``quantity``: a positive whole number that fits the quantity column.
    - ``photo``: at most 1MB, checked only once every field is valid.

    ``shipping`` is optional and passed through unchanged.  Build instances
    with :meth:`parse` to get an ``InvalidProductInput`` instead of a
    pydantic ``ValidationError``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    price: Decimal
    category: str
    quantity: int
    shipping: Any = None
    photo: Optional[PhotoUpload] = None

    @field_validator("name", "description", "category", mode="before")
    @classmethod
    def text_must_be_present(cls, v: Any, info: ValidationInfo) -> str:
        if _is_blank(v):
            raise _rule_error(f"{_label(info)} is required")
        return str(v).strip()

    @field_validator("price", mode="before")
    @classmethod
    def price_must_be_positive(cls, v: Any, info: ValidationInfo) -> Decimal:
        number = _positive_number(v, info)
        if number >= PRICE_UPPER_BOUND or number != number.quantize(PRICE_CENT):
            raise _rule_error(f"{_label(info)} must be a valid number")
        return number

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_must_be_positive_whole(cls, v: Any, info: ValidationInfo) -> int:
        number = _positive_number(v, info)
        if number > MAX_QUANTITY or number != number.to_integral_value():
            raise _rule_error(f"{_label(info)} must be a valid number")
        return int(number)

    @model_validator(mode="after")
    def photo_within_limit(self) -> Self:
        if self.photo is not None and self.photo.size > MAX_PHOTO_BYTES:
            raise _rule_error(PHOTO_TOO_LARGE)
        return self

    @classmethod
    def parse(
        cls, fields: Mapping[str, Any], photo: Optional[PhotoUpload] = None
    ) -> ProductInputDTO:
        """Validate raw request fields and build the DTO.

        Absent fields are passed as ``None`` so their own rule reports them.

        Raises:
            InvalidProductInput: with the first violated rule's message.
        """
        data = {name: fields.get(name) for name in INPUT_FIELDS}
        try:
            return cls.model_validate({**data, "photo": photo})
        except ValidationError as exc:
            raise InvalidProductInput(exc.errors()[0]["msg"]) from exc
