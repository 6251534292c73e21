"""
Catalog API - FastAPI routers for customers and products.
"""
from fastapi import APIRouter, Response
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, field_validator

from ..engine.errors import InvalidArgumentError, NotFoundError
from ..engine.models import CustomerType
from . import state

customers_router = APIRouter(prefix="/api/customers", tags=["customers"])
products_router = APIRouter(prefix="/api/products", tags=["products"])


class CustomerCreate(BaseModel):
    """Request model for creating or replacing a customer."""
    name: str
    email: str
    customer_type: CustomerType

    @field_validator("customer_type", mode="before")
    @classmethod
    def parse_customer_type(cls, value):
        """Accept any casing, e.g. 'wholesale'."""
        try:
            return CustomerType.parse(value)
        except InvalidArgumentError as e:
            raise ValueError(str(e)) from e


def stock_status(stock: int) -> str:
    if stock > 10:
        return "In Stock"
    if stock > 0:
        return "Low Stock"
    return "Out of Stock"


# Customers

@customers_router.get("")
async def list_customers():
    return jsonable_encoder(state.customer_service.list_customers())


@customers_router.get("/{customer_id}")
async def get_customer(customer_id: int):
    return jsonable_encoder(state.customer_service.get_customer(customer_id))


@customers_router.post("", status_code=201)
async def create_customer(data: CustomerCreate):
    customer = state.customer_service.create_customer(data.name, data.email, data.customer_type)
    return jsonable_encoder(customer)


@customers_router.put("/{customer_id}")
async def update_customer(customer_id: int, data: CustomerCreate):
    customer = state.customer_service.update_customer(customer_id, data.name, data.email, data.customer_type)
    return jsonable_encoder(customer)


@customers_router.delete("/{customer_id}", status_code=204)
async def delete_customer(customer_id: int):
    state.customer_service.delete_customer(customer_id)
    return Response(status_code=204)


# Products

@products_router.get("")
async def list_products():
    return jsonable_encoder(state.store.list_products())


@products_router.get("/stock/{product_id}")
async def product_stock(product_id: int):
    product = state.store.find_product(product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return {
        "product_id": product.id,
        "product_name": product.name,
        "stock": product.stock,
        "is_available": product.stock > 0,
        "stock_status": stock_status(product.stock),
    }


@products_router.get("/{product_id}")
async def get_product(product_id: int):
    product = state.store.find_product(product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return jsonable_encoder(product)
