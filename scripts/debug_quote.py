import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from wholesale_store.data.load_catalog import load_catalog_store
from wholesale_store.engine import PricingEngine

def debug(customer_id: int = 3, items: dict = None):
    store = load_catalog_store()
    engine = PricingEngine(store)
    items = items or {1: 6, 3: 2}

    customer = store.find_customer(customer_id)
    print(f"Customer: {customer.name} ({customer.customer_type.value})")

    print("\nActive Rules:")
    for rule in engine.list_active_rules():
        minimum = f">= ${rule.minimum_order_amount}" if rule.minimum_order_amount is not None else "no minimum"
        print(f"  [{rule.id}] {rule.customer_type.value} {rule.discount_percentage}% ({minimum}) - {rule.description}")

    print(f"\n--- Quote for {items} ---")
    quote = engine.generate_quote(customer, items)
    for line in quote.items:
        print(
            f"  {line.product_name:<22} x{line.quantity:<4} base ${line.base_price:<8} "
            f"unit ${line.discounted_price:<8} line ${line.line_total}"
        )
    print(f"\n  Subtotal:            ${quote.subtotal}")
    print(f"  Additional discount: ${quote.additional_discount}")
    print(f"  Total:               ${quote.total}")

    print("\nTrace:")
    print(quote.get_trace_text())

if __name__ == "__main__":
    customer_arg = int(sys.argv[1]) if len(sys.argv) > 1 else 3
    debug(customer_arg)
