"""
Golden test cases for pricing engine regression testing.
These tests capture the expected behavior of the pricing engine against the
seed catalog and should fail if pricing logic changes unexpectedly.
"""
import csv
import os
from decimal import Decimal

import pytest

from conftest import fixed_clock
from wholesale_store.config.settings import Settings
from wholesale_store.data.load_catalog import load_catalog_store
from wholesale_store.engine import PricingEngine


@pytest.fixture(scope="module")
def golden_engine():
    """One engine over the seed catalog; quotes never change stock."""
    settings = Settings.load()
    return PricingEngine(load_catalog_store(settings), settings, clock=fixed_clock)


def load_golden_cases():
    """Load golden test cases from CSV."""
    cases_path = os.path.join(os.path.dirname(__file__), 'golden_cases.csv')

    if not os.path.exists(cases_path):
        pytest.skip(f"Golden cases file not found: {cases_path}. Run generate_golden_cases.py first.")

    with open(cases_path, 'r', newline='', encoding='utf-8') as f:
        return list(csv.DictReader(f))


@pytest.mark.parametrize(
    "case", load_golden_cases(),
    ids=lambda c: f"c{c['customer_id']}-p{c['product_id']}-qty{c['qty']}",
)
def test_golden_case(golden_engine, case):
    """Test that quoting matches the expected golden case."""
    customer = golden_engine.store.find_customer(int(case['customer_id']))
    product_id = int(case['product_id'])
    qty = int(case['qty'])

    quote = golden_engine.generate_quote(customer, {product_id: qty})

    assert quote.customer_type.value == case['expected_type'], \
        f"Customer type mismatch: expected {case['expected_type']}, got {quote.customer_type.value}"

    assert len(quote.items) == 1, f"Expected 1 line item, got {len(quote.items)}"
    line = quote.items[0]

    assert line.discounted_price == Decimal(case['expected_unit_price']), \
        f"Price mismatch for product {product_id}: expected ${case['expected_unit_price']}, got ${line.discounted_price}"

    expected_rule = int(case['expected_rule_id']) if case['expected_rule_id'] else None
    assert line.rule_id == expected_rule, \
        f"Rule mismatch for product {product_id}: expected {expected_rule}, got {line.rule_id}"

    assert quote.total == Decimal(case['expected_total']), \
        f"Total mismatch: expected ${case['expected_total']}, got ${quote.total}"


def test_line_totals_are_unit_price_times_quantity(golden_engine):
    customer = golden_engine.store.find_customer(3)
    quote = golden_engine.generate_quote(customer, {1: 3, 4: 7, 6: 12})

    for line in quote.items:
        assert line.line_total == line.discounted_price * line.quantity
    assert quote.subtotal == sum(line.line_total for line in quote.items)
