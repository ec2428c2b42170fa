"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands and aggregates. Identifiers are accepted as
numbers or strings and always handled as strings.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    home_address: str | None = None
    street_address: str | None = None
    ward: str | None = None
    township: str | None = None
    city: str
    state: str | None = None
    postal_code: str | None = None
    country: str
    note: str | None = None


class CartItemSchema(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    product_id: str
    quantity: int


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    items: list[CartItemSchema]
    payment_type: str
    payslip_reference: str | None = None
    shipping_address: AddressSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "7", "quantity": 2}],
                    "payment_type": "Cash on Delivery",
                    "shipping_address": {
                        "home_address": "No. 12",
                        "street_address": "Bogyoke Road",
                        "city": "Yangon",
                        "country": "Myanmar",
                    },
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str


class CreateDiscountRuleRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    shop_id: str
    discount_for: str
    discount_for_id: str | None = None
    discount_type: str
    discount_percent: float = 0.0
    discounted_price: float = 0.0
    discount_reason: str | None = None
    expiration: date | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PlaceOrderResponse(BaseModel):
    order_id: str
    is_already_reviewed: bool


class OrderItemResponse(BaseModel):
    product_id: str
    title: str | None = None
    quantity: int
    unit_price: float
    base_price: float | None = None
    discount_percent: float | None = None
    discount_type: str | None = None
    discount_reason: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    buyer_id: str
    shop_id: str
    currency_id: str
    payment_type: str
    status: str
    order_total: float
    invoice_number: str | None = None
    invoice_url: str | None = None
    items: list[OrderItemResponse]
    shipping_address: AddressSchema | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DiscountRuleIdResponse(BaseModel):
    rule_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class OrderListResponse(BaseModel):
    data: list[OrderResponse]
    total: int
    page: int
    per_page: int | None = None
    page_counts: int
