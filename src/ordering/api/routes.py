"""FastAPI routes for the Ordering domain — orders and discount rules."""

from datetime import date

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.authentication import current_principal
from identity.principal import Principal, Role
from ordering.api.schemas import (
    AddressSchema,
    CreateDiscountRuleRequest,
    DiscountRuleIdResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    StatusResponse,
    UpdateOrderStatusRequest,
)
from ordering.exceptions import Unauthorized
from ordering.order.admission import OrderAdmission
from ordering.order.authorization import can_view_order
from ordering.order.listing import list_orders
from ordering.order.reminder import remind_seller
from ordering.order.status_update import load_order, update_order_status
from ordering.order.validation import CartLine
from ordering.pricing.management import CreateDiscountRule, DeactivateDiscountRule

# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _order_response(order) -> OrderResponse:
    address = order.shipping_address
    return OrderResponse(
        order_id=str(order.id),
        buyer_id=str(order.buyer_id),
        shop_id=str(order.shop_id),
        currency_id=str(order.currency_id),
        payment_type=order.payment_type,
        status=order.status,
        order_total=order.order_total,
        invoice_number=order.invoice_number,
        invoice_url=order.invoice_url,
        items=[
            OrderItemResponse(
                product_id=item.product_id,
                title=item.title,
                quantity=item.quantity,
                unit_price=item.unit_price,
                base_price=item.base_price,
                discount_percent=item.discount_percent,
                discount_type=item.discount_type,
                discount_reason=item.discount_reason,
            )
            for item in order.items
        ],
        shipping_address=AddressSchema(**address.to_dict()) if address else None,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest, principal: Principal = Depends(current_principal)) -> PlaceOrderResponse:
    result = OrderAdmission().admit(
        principal=principal,
        lines=[CartLine(product_id=item.product_id, quantity=item.quantity) for item in body.items],
        payment_type=body.payment_type,
        payslip_reference=body.payslip_reference,
        shipping_address=body.shipping_address.model_dump(exclude_none=True) if body.shipping_address else None,
    )
    return PlaceOrderResponse(order_id=result.order_id, is_already_reviewed=result.is_already_reviewed)


@order_router.get("", response_model=OrderListResponse)
async def get_orders(
    from_date: date | None = None,
    to_date: date | None = None,
    from_amount: float | None = None,
    to_amount: float | None = None,
    page: int = 1,
    per_page: int | None = None,
    principal: Principal = Depends(current_principal),
) -> OrderListResponse:
    result = list_orders(
        principal,
        from_date=from_date,
        to_date=to_date,
        from_amount=from_amount,
        to_amount=to_amount,
        page=page,
        per_page=per_page,
    )
    return OrderListResponse(
        data=[_order_response(order) for order in result.orders],
        total=result.total,
        page=result.page,
        per_page=result.per_page,
        page_counts=result.page_counts,
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderResponse:
    order = load_order(order_id)
    if not can_view_order(principal, order.buyer_id):
        raise Unauthorized("Unauthorized!")
    return _order_response(order)


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def change_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(current_principal),
) -> OrderResponse:
    order = update_order_status(principal, order_id, body.status)
    return _order_response(order)


@order_router.post("/{order_id}/remind", status_code=202, response_model=StatusResponse)
async def remind_order_seller(order_id: str, principal: Principal = Depends(current_principal)) -> StatusResponse:
    remind_seller(principal, order_id)
    return StatusResponse(status="reminder_sent")


# ---------------------------------------------------------------------------
# Discount Rule Router
# ---------------------------------------------------------------------------
discount_rule_router = APIRouter(prefix="/discount-rules", tags=["discount-rules"])


def _require_pricing_admin(principal: Principal) -> None:
    if principal.role not in (Role.ADMIN.value, Role.AGENT.value):
        raise Unauthorized("Unauthorized!")


@discount_rule_router.post("", status_code=201, response_model=DiscountRuleIdResponse)
async def create_discount_rule(
    body: CreateDiscountRuleRequest,
    principal: Principal = Depends(current_principal),
) -> DiscountRuleIdResponse:
    _require_pricing_admin(principal)
    command = CreateDiscountRule(
        shop_id=body.shop_id,
        discount_for=body.discount_for,
        discount_for_id=body.discount_for_id,
        discount_type=body.discount_type,
        discount_percent=body.discount_percent,
        discounted_price=body.discounted_price,
        discount_reason=body.discount_reason,
        expiration=body.expiration,
        created_by=principal.user_id,
    )
    rule_id = current_domain.process(command, asynchronous=False)
    return DiscountRuleIdResponse(rule_id=rule_id)


@discount_rule_router.delete("/{rule_id}", response_model=StatusResponse)
async def deactivate_discount_rule(rule_id: str, principal: Principal = Depends(current_principal)) -> StatusResponse:
    _require_pricing_admin(principal)
    current_domain.process(
        DeactivateDiscountRule(rule_id=rule_id, deactivated_by=principal.user_id),
        asynchronous=False,
    )
    return StatusResponse(status="deactivated")
