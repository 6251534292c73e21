"""
Pricing & Orders API - FastAPI routers for quotes, rules and order placement.
"""
from fastapi import APIRouter, Query
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field

from ..engine.errors import ValidationError
from ..engine.models import Order
from . import state

pricing_router = APIRouter(prefix="/api/pricing", tags=["pricing"])
orders_router = APIRouter(prefix="/api/orders", tags=["orders"])


# Pydantic models for API
class ItemRequest(BaseModel):
    """One requested line."""
    product_id: int
    quantity: int = Field(ge=1)


class QuoteRequest(BaseModel):
    """Request model for quotes and orders."""
    customer_id: int
    items: list[ItemRequest] = Field(min_length=1)

    def product_quantities(self) -> dict[int, int]:
        """Merge repeated product ids into one line."""
        quantities: dict[int, int] = {}
        for item in self.items:
            quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity
        return quantities


class CompareRequest(BaseModel):
    product_ids: list[int] = Field(min_length=1)


class StatusUpdate(BaseModel):
    # Blank is parsed (and rejected) by the order service after the order lookup
    status: str = ""


def order_to_dict(order: Order) -> dict:
    return jsonable_encoder({
        "id": order.id,
        "customer_id": order.customer_id,
        "customer_name": order.customer_name,
        "created_at": order.created_at,
        "total_amount": order.total_amount,
        "status": order.status,
        "items": [
            {
                "product_id": item.product_id,
                "product_name": item.product_name,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total_price": item.total_price,
            }
            for item in order.items
        ],
    })


# Pricing endpoints

@pricing_router.post("/quote")
async def generate_quote(req: QuoteRequest):
    """Price a prospective order without touching stock."""
    customer = state.customer_service.get_customer(req.customer_id)
    quote = state.pricing_engine.generate_quote(customer, req.product_quantities())
    return jsonable_encoder(quote)


@pricing_router.get("/quote/{customer_id}")
async def generate_quote_from_query(
    customer_id: int,
    product_ids: list[int] = Query([], alias="productId"),
    quantities: list[int] = Query([], alias="quantity"),
):
    """
    Quote from paired query parameters: ?productId=1&quantity=5&productId=2&quantity=3

    Lines with a quantity of 0 or less are dropped.
    """
    if len(product_ids) != len(quantities):
        raise ValidationError("Product IDs and quantities must be provided and have the same count")

    customer = state.customer_service.get_customer(customer_id)

    product_quantities: dict[int, int] = {}
    for product_id, quantity in zip(product_ids, quantities):
        if quantity > 0:
            product_quantities[product_id] = product_quantities.get(product_id, 0) + quantity

    quote = state.pricing_engine.generate_quote(customer, product_quantities)
    return jsonable_encoder(quote)


@pricing_router.get("/rules")
async def list_rules():
    """Active pricing rules."""
    return [
        {
            **jsonable_encoder(rule),
            "discount_factor": float(rule.discount_factor),
        }
        for rule in state.pricing_engine.list_active_rules()
    ]


@pricing_router.get("/products/{customer_id}")
async def product_prices(customer_id: int):
    """All products priced for one customer."""
    customer, rows = state.pricing_engine.price_list(customer_id)
    return jsonable_encoder({
        "customer_id": customer.id,
        "customer_name": customer.name,
        "customer_type": customer.customer_type,
        "products": rows,
    })


@pricing_router.post("/compare")
async def compare_pricing(req: CompareRequest):
    """Retail versus wholesale prices for the given products."""
    return jsonable_encoder({
        "product_ids": req.product_ids,
        "comparison": state.pricing_engine.compare_pricing(req.product_ids),
    })


# Order endpoints

@orders_router.get("")
async def list_orders():
    return [order_to_dict(order) for order in state.order_service.list_orders()]


@orders_router.get("/{order_id}")
async def get_order(order_id: int):
    return order_to_dict(state.order_service.get_order(order_id))


@orders_router.post("", status_code=201)
async def create_order(req: QuoteRequest):
    """Validate stock, create the order and reduce stock."""
    order = state.order_service.place_order(req.customer_id, req.product_quantities())
    return order_to_dict(order)


@orders_router.put("/{order_id}/status")
async def update_order_status(order_id: int, update: StatusUpdate):
    order = state.order_service.update_order_status(order_id, update.status)
    return {"message": "Order status updated successfully", "status": order.status.value}
