"""FastAPI routes for the Ordering domain: customer, seller and admin views of orders."""

from fastapi import APIRouter, Depends

from ordering.api.actor import current_actor, require_role
from ordering.api.schemas import (
    CreateOrderRequest,
    OrderListResponse,
    OrderResponse,
    UpdateOrderStatusRequest,
)
from ordering.order import service
from ordering.order.access import ensure_can_place
from ordering.order.queries import OrderFilters
from ordering.shared.actor import Actor, Role


def _list_response(actor, status, page, limit, sort_by, sort_order) -> OrderListResponse:
    filters = OrderFilters(status=status, page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)
    orders = service.list_orders(actor, filters)
    return OrderListResponse(
        orders=[OrderResponse.from_order(order) for order in orders],
        page=filters.page,
        limit=filters.limit,
    )


# ---------------------------------------------------------------------------
# Customer Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, actor: Actor = Depends(current_actor)) -> OrderResponse:
    ensure_can_place(actor)
    order = service.create_order(
        customer_id=actor.actor_id,
        shipping_address=body.shipping_address,
        items=[item.model_dump() for item in body.items],
    )
    return OrderResponse.from_order(order)


@order_router.get("", response_model=OrderListResponse)
async def list_orders(
    status: str | None = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    actor: Actor = Depends(current_actor),
) -> OrderListResponse:
    return _list_response(actor, status, page, limit, sort_by, sort_order)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, actor: Actor = Depends(current_actor)) -> OrderResponse:
    return OrderResponse.from_order(service.get_order(order_id, actor))


@order_router.patch("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, actor: Actor = Depends(current_actor)) -> OrderResponse:
    return OrderResponse.from_order(service.cancel_order(order_id, actor))


# ---------------------------------------------------------------------------
# Seller Router
# ---------------------------------------------------------------------------
seller_order_router = APIRouter(prefix="/seller/orders", tags=["seller"])


@seller_order_router.get("", response_model=OrderListResponse)
async def list_seller_orders(
    status: str | None = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    actor: Actor = Depends(require_role(Role.SELLER)),
) -> OrderListResponse:
    return _list_response(actor, status, page, limit, sort_by, sort_order)


@seller_order_router.patch("/{order_id}", response_model=OrderResponse)
async def update_seller_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    actor: Actor = Depends(require_role(Role.SELLER)),
) -> OrderResponse:
    return OrderResponse.from_order(service.update_order_status(order_id, body.status, actor))


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_order_router = APIRouter(prefix="/admin/orders", tags=["admin"])


@admin_order_router.get("", response_model=OrderListResponse)
async def list_all_orders(
    status: str | None = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    actor: Actor = Depends(require_role(Role.ADMIN)),
) -> OrderListResponse:
    return _list_response(actor, status, page, limit, sort_by, sort_order)


@admin_order_router.patch("/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    actor: Actor = Depends(require_role(Role.ADMIN)),
) -> OrderResponse:
    return OrderResponse.from_order(service.update_order_status(order_id, body.status, actor))
