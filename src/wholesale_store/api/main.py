from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wholesale_store import __version__
from wholesale_store.engine.errors import (
    StoreError,
    NotFoundError,
    ValidationError,
    InvalidArgumentError,
    CatalogStoreError,
    StockConsistencyError,
)
from wholesale_store.api import state
from wholesale_store.api.search_api import router as search_router
from wholesale_store.api.orders_api import pricing_router, orders_router
from wholesale_store.api.catalog_api import customers_router, products_router

app = FastAPI(
    title="Wholesale Store API",
    description="Quoting, ordering and product search for the wholesale/retail store",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(search_router)
app.include_router(pricing_router)
app.include_router(orders_router)
app.include_router(customers_router)
app.include_router(products_router)


ERROR_STATUS_CODES = {
    NotFoundError: 404,
    ValidationError: 400,
    InvalidArgumentError: 400,
    CatalogStoreError: 500,
    StockConsistencyError: 500,
}


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Map StoreError subclasses to HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


@app.get("/")
async def root():
    return {"status": "online", "message": "Wholesale Store API Active"}


@app.get("/system/status")
async def get_status():
    store = state.store
    return {
        "engine_active": True,
        "products_count": len(store.list_products()),
        "customers_count": len(store.list_customers()),
        "active_rules_count": len(state.pricing_engine.list_active_rules()),
        "orders_count": len(store.list_orders()),
        "atomic_stock_reservation": state.settings.atomic_stock_reservation,
    }
