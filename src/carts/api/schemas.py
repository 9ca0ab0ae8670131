"""Pydantic request/response schemas for the Cart API.

These are the external contracts, in camelCase, kept separate from the
internal protean commands.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from carts.settings import MAX_ITEM_QUANTITY


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class AddItemRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "productId": "P1",
                    "name": "Widget",
                    "price": "10.00",
                    "quantity": 2,
                }
            ]
        },
    )

    product_id: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    quantity: int = Field(ge=1, le=MAX_ITEM_QUANTITY)


class UpdateQuantityRequest(CamelModel):
    quantity: int = Field(ge=1, le=MAX_ITEM_QUANTITY)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartItemResponse(CamelModel):
    product_id: str
    name: str
    price: Decimal
    quantity: int
    subtotal: Decimal | None = None


class CartResponse(CamelModel):
    cart_id: str
    tenant_id: str
    user_id: str
    items: list[CartItemResponse] = []
    item_count: int = 0
    total_amount: Decimal
    currency: str
    updated_at: datetime | None = None


class ErrorResponse(CamelModel):
    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
    validation_errors: dict[str, str] | None = None
