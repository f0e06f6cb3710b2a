# restaurant/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel

from restaurant.domain.order_status import OrderStatus

NAME_MAX_LENGTH = 255
CENTS = Decimal("0.01")
# column limits: Integer quantity, Numeric(10, 2) money
QUANTITY_MAX = 2_147_483_647
MONEY_MAX = Decimal("99999999.99")


def _to_cents(value: Decimal | None) -> Decimal | None:
    return value.quantize(CENTS) if value is not None else None


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        # surrounding blanks are dropped before length checks
        str_strip_whitespace=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# ---------- input ----------

class CategoryCreate(ApiModel):
    """Schema for creating a category."""

    name: StrictStr = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)


class CategoryUpdate(ApiModel):
    """Schema for a partial category update."""

    name: StrictStr | None = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)


class ProductCreate(ApiModel):
    """Schema for creating a product."""

    category_id: int
    name: StrictStr = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)

    @field_validator("price")
    @classmethod
    def round_price(cls, value):
        return _to_cents(value)


class ProductUpdate(ApiModel):
    """Schema for a partial product update."""

    category_id: int | None = None
    name: StrictStr | None = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)

    @field_validator("price")
    @classmethod
    def round_price(cls, value):
        return _to_cents(value)


class OrderLineIn(ApiModel):
    """One line of a new order; the unit price is captured as sent."""

    product_id: int
    quantity: int = Field(..., ge=1, le=QUANTITY_MAX)
    unit_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)

    @field_validator("unit_price")
    @classmethod
    def round_unit_price(cls, value):
        return _to_cents(value)


class OrderCreate(ApiModel):
    """Schema for creating an order."""

    lines: List[OrderLineIn] = Field(..., min_length=1)


class OrderStatusUpdate(ApiModel):
    """Only the status of an order can change after creation."""

    status: OrderStatus


class ListQuery(ApiModel):
    """Pagination and ordering of a listing, echoed back as ``filter``."""

    per_page: int = Field(10, ge=1)
    sort_by: str = "id"
    direction: Literal["asc", "desc"] = "asc"
    page: int = Field(1, ge=1)


# ---------- output ----------

class CategoryRef(ApiModel):
    id: int
    name: str


class ProductRef(ApiModel):
    id: int
    category_id: int
    name: str
    price: Decimal


class CategoryOut(ApiModel):
    """Category with the products it owns."""

    id: int
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    products: List[ProductRef] = []


class ProductOrderLineOut(ApiModel):
    order_id: int
    order_status: str | None = None
    quantity: int
    unit_price: Decimal


class ProductOut(ApiModel):
    """Product with its category."""

    id: int
    category_id: int
    name: str
    price: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None
    category: CategoryRef | None = None


class ProductDetailOut(ProductOut):
    """Product with its category and every order line referencing it."""

    order_lines: List[ProductOrderLineOut] = []


class OrderLineOut(ApiModel):
    id: int
    product_id: int
    product_name: str | None = None
    quantity: int
    unit_price: Decimal


class OrderOut(ApiModel):
    id: int
    status: OrderStatus
    total_price: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None
    lines: List[OrderLineOut] = []
