"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), kept separate from
internal Protean commands. Money travels as decimal strings.
"""

from datetime import datetime

from pydantic import BaseModel, StrictInt


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CartItemSchema(BaseModel):
    medicine_id: str
    quantity: StrictInt


class CreateOrderRequest(BaseModel):
    shipping_address: str
    items: list[CartItemSchema]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": "221B Baker Street, London",
                    "items": [
                        {"medicine_id": "med-paracetamol-500", "quantity": 2},
                        {"medicine_id": "med-cetirizine-10", "quantity": 1},
                    ],
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    id: str
    medicine_id: str
    seller_id: str
    quantity: int
    price: str


class OrderResponse(BaseModel):
    id: str
    customer_id: str
    status: str
    total_amount: str
    currency: str
    shipping_address: str
    items: list[OrderItemResponse]
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            customer_id=str(order.customer_id),
            status=order.status,
            total_amount=str(order.total_amount.amount),
            currency=order.total_amount.currency,
            shipping_address=order.shipping_address,
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    medicine_id=str(item.medicine_id),
                    seller_id=str(item.seller_id),
                    quantity=item.quantity,
                    price=str(item.price.amount),
                )
                for item in order.items
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    page: int
    limit: int
