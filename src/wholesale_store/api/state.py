"""
Shared engine instances used by the API routers.

Routers read these attributes at request time, so ``reload_data`` swaps the
whole catalog without re-importing the app.
"""
from typing import Optional

from ..config.settings import get_settings, Settings
from ..data.load_catalog import load_catalog_store
from ..engine.pricing_engine import PricingEngine
from ..search.search_engine import SearchEngine
from ..services.customer_service import CustomerService
from ..services.order_service import OrderService

settings: Settings = None
store = None
pricing_engine: PricingEngine = None
search_engine: SearchEngine = None
order_service: OrderService = None
customer_service: CustomerService = None


def reload_data(new_settings: Optional[Settings] = None):
    """Reload the seed catalog and rebuild every engine on top of it."""
    global settings, store, pricing_engine, search_engine, order_service, customer_service

    settings = new_settings or get_settings()
    store = load_catalog_store(settings)
    pricing_engine = PricingEngine(store, settings)
    search_engine = SearchEngine(store)
    order_service = OrderService(store, pricing_engine, settings)
    customer_service = CustomerService(store)


reload_data()
