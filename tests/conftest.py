"""Pytest fixtures for the wholesale store tests."""
import os
import sys
from datetime import datetime, timezone

import pandas as pd
import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from wholesale_store.config.settings import Settings
from wholesale_store.data.load_catalog import load_catalog_store
from wholesale_store.engine import PricingEngine
from wholesale_store.search.search_engine import SearchEngine
from wholesale_store.services.order_service import OrderService

FIXED_NOW = datetime(2025, 8, 27, 12, 0, 0, tzinfo=timezone.utc)

DEFAULT_CUSTOMERS = [
    {"id": 1, "name": "John Smith", "email": "john.smith@email.com", "customer_type": "Retail"},
    {"id": 3, "name": "ABC Electronics Corp", "email": "procurement@abcelectronics.com", "customer_type": "Wholesale"},
]

DEFAULT_RULES = [
    {"id": 1, "customer_type": "Wholesale", "discount_percentage": "10.0", "minimum_order_amount": "",
     "is_active": "true", "description": "Standard wholesale discount - 10% off"},
    {"id": 2, "customer_type": "Wholesale", "discount_percentage": "15.0", "minimum_order_amount": "500.00",
     "is_active": "true", "description": "Volume discount - 15% off for orders over $500"},
]


def fixed_clock():
    return FIXED_NOW


@pytest.fixture
def settings():
    """Settings pointing at the packaged seed catalog."""
    return Settings.load()


@pytest.fixture
def store(settings):
    """Fresh seed catalog per test so stock changes never leak."""
    return load_catalog_store(settings)


@pytest.fixture
def engine(store, settings):
    return PricingEngine(store, settings, clock=fixed_clock)


@pytest.fixture
def search_engine(store):
    return SearchEngine(store)


@pytest.fixture
def order_service(store, engine, settings):
    return OrderService(store, engine, settings)


@pytest.fixture
def write_catalog(tmp_path):
    """
    Write custom seed CSVs and return Settings for them.

    Products are required; customers and rules default to the seed ones.
    """
    def _write(products, customers=None, rules=None, **overrides):
        pd.DataFrame(products).to_csv(tmp_path / 'products.csv', index=False)
        pd.DataFrame(customers if customers is not None else DEFAULT_CUSTOMERS).to_csv(
            tmp_path / 'customers.csv', index=False)
        rule_rows = rules if rules is not None else DEFAULT_RULES
        rule_frame = pd.DataFrame(rule_rows, columns=list(DEFAULT_RULES[0].keys()))
        rule_frame.to_csv(tmp_path / 'pricing_rules.csv', index=False)
        custom = Settings.load(data_dir=tmp_path)
        for key, value in overrides.items():
            setattr(custom, key, value)
        return custom

    return _write


def product_row(pid, name, description="", stock=10, base_price="10.00"):
    return {"id": pid, "name": name, "description": description, "stock": stock, "base_price": base_price}
