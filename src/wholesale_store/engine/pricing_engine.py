"""
Pricing Engine - Core pricing resolution logic with traceability.

Resolution order for a quote:
1. Snapshot check each requested product (exists, enough stock)
2. Per line: Retail pays base price; Wholesale gets the best eligible rule
   for ``base_price × quantity``
3. Order level: best eligible rule for the subtotal; applied again as an
   additional discount only when that rule declares a minimum the subtotal meets
4. Orders are built from the quote with line prices copied, never referenced
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional

from ..config.settings import get_settings, Settings
from .errors import NotFoundError, ValidationError
from .models import (
    Customer, CustomerType, Order, OrderItem, OrderStatus, PricingRule, Product, Quote, QuoteItem,
    round_money,
)
from .rule_matcher import RuleMatcher

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PricingEngine:
    """
    Computes unit prices, quotes and orders against a catalog store.

    Holds no mutable state of its own; every call reads the store fresh.
    """

    def __init__(self, store, settings: Optional[Settings] = None, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.settings = settings or get_settings()
        self.rule_matcher = RuleMatcher(store)
        self.clock = clock or _utcnow

    def _money(self, value: Decimal) -> Decimal:
        return round_money(value, self.settings.money_places)

    # ------------------------------------------------------------------
    # Unit pricing
    # ------------------------------------------------------------------
    def calculate_price(self, product: Product, customer_type: CustomerType, quantity: int = 1) -> Decimal:
        """
        Unit price for a product and customer type, unrounded.

        ``quantity`` only decides rule eligibility through
        ``base_price × quantity``; the discount factor is per unit.
        """
        price, _ = self._price_with_rule(product, customer_type, quantity)
        return price

    def _price_with_rule(self, product: Product, customer_type: CustomerType, quantity: int) -> tuple[Decimal, Optional[PricingRule]]:
        if customer_type == CustomerType.RETAIL:
            return product.base_price, None

        rule = self.rule_matcher.best_rule(customer_type, product.base_price * quantity)
        if rule is None:
            return product.base_price, None
        return product.base_price * rule.discount_factor, rule

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------
    def _validate_request(self, product_quantities: dict[int, int]):
        if not product_quantities:
            raise ValidationError("At least one product with quantity greater than 0 must be specified")
        bad = [pid for pid, qty in product_quantities.items() if qty < 1]
        if bad:
            raise ValidationError(f"Quantity must be at least 1 for products: {bad}")

    def generate_quote(self, customer: Customer, product_quantities: dict[int, int]) -> Quote:
        """
        Price a prospective order for a customer.

        Args:
            customer: The customer requesting the quote
            product_quantities: Dict of {product_id: quantity}

        Returns:
            Quote with per-line and order-level pricing. Stock is never touched.

        Raises:
            ValidationError: If a product is missing or short on stock, or a
                quantity is below 1
        """
        self._validate_request(product_quantities)

        quote = Quote(
            customer_id=customer.id,
            customer_name=customer.name,
            customer_type=customer.customer_type,
            generated_at=self.clock(),
        )
        quote.add_trace("Customer", f"Pricing for {customer.name}", customer.customer_type.value)

        subtotal = Decimal("0.00")
        for product_id, quantity in product_quantities.items():
            product = self.store.find_product(product_id)
            if product is None or product.stock < quantity:
                raise ValidationError(f"Product {product_id} not found or insufficient stock")

            unit_price, rule = self._price_with_rule(product, customer.customer_type, quantity)
            discounted_price = self._money(unit_price)
            line_total = discounted_price * quantity

            item = QuoteItem(
                product_id=product.id,
                product_name=product.name,
                quantity=quantity,
                base_price=product.base_price,
                discounted_price=discounted_price,
                discount_amount=(product.base_price - discounted_price) * quantity,
                line_total=line_total,
                rule_id=rule.id if rule else None,
            )
            quote.items.append(item)
            subtotal += line_total

            if rule:
                _, message = self.rule_matcher.apply_rule_to_price(rule, product.base_price)
                quote.add_trace("Rule Applied", message, f"${discounted_price}")
            quote.add_trace("Extension", f"{product.name}: {quantity} × ${discounted_price}", f"${line_total}")

        quote.subtotal = subtotal

        # Second pass over the subtotal. The winning rule may be the same one
        # already applied per line; it stacks when it has a minimum that is met.
        order_rule = self.rule_matcher.best_rule(customer.customer_type, subtotal)
        if (order_rule is not None and order_rule.minimum_order_amount is not None
                and subtotal >= order_rule.minimum_order_amount):
            quote.additional_discount = self._money(subtotal * order_rule.discount_percentage / Decimal(100))
            quote.total = subtotal - quote.additional_discount
            quote.order_rule_id = order_rule.id
            quote.add_trace(
                "Order Discount",
                f"Rule {order_rule.id} ({order_rule.discount_percentage}%) on subtotal ${subtotal}",
                f"-${quote.additional_discount}",
            )
        else:
            quote.total = subtotal

        quote.add_trace("Total", "Quote total", f"${quote.total}")
        return quote

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------
    def validate_stock_availability(self, product_quantities: dict[int, int]) -> bool:
        """True iff every product exists and has at least the requested stock."""
        for product_id, quantity in product_quantities.items():
            product = self.store.find_product(product_id)
            if product is None or product.stock < quantity:
                return False
        return True

    def reduce_stock(self, product_quantities: dict[int, int]):
        """
        Decrement stock for every listed product as one store write.

        No floor is enforced: callers validate first. Unknown ids are skipped.
        """
        changes = {}
        for product_id, quantity in product_quantities.items():
            product = self.store.find_product(product_id)
            if product is not None:
                changes[product_id] = product.stock - quantity
        self.store.persist_stock_changes(changes)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def create_order(self, customer_id: int, product_quantities: dict[int, int]) -> Order:
        """
        Price and persist a confirmed order.

        Stock is only checked by the quote's snapshot; reducing it is the
        caller's job (see OrderService).
        """
        customer = self.store.find_customer(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)

        quote = self.generate_quote(customer, product_quantities)
        order = self.store.persist_order(self.order_from_quote(quote))
        logger.info("Order %s created for customer %s, total %s", order.id, customer.name, order.total_amount)
        return order

    def order_from_quote(self, quote: Quote) -> Order:
        """Unpersisted confirmed order carrying copies of the quote's line prices."""
        return Order(
            id=None,
            customer_id=quote.customer_id,
            customer_name=quote.customer_name,
            created_at=self.clock(),
            total_amount=quote.total,
            status=OrderStatus.CONFIRMED,
            items=tuple(
                OrderItem(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.discounted_price,
                )
                for item in quote.items
            ),
        )

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------
    def list_active_rules(self) -> list[PricingRule]:
        """Active rules ordered by customer type, then discount ascending."""
        rules = []
        for customer_type in CustomerType:
            rules.extend(sorted(self.store.list_active_rules(customer_type), key=lambda r: r.discount_percentage))
        return rules

    def price_list(self, customer_id: int) -> tuple[Customer, list[dict]]:
        """Every product with its single-unit price for the customer's type."""
        customer = self.store.find_customer(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)

        rows = []
        for product in self.store.list_products():
            rows.append({
                "id": product.id,
                "name": product.name,
                "description": product.description,
                "stock": product.stock,
                "base_price": product.base_price,
                "calculated_price": self._money(self.calculate_price(product, customer.customer_type, 1)),
                "customer_type": customer.customer_type,
            })
        return customer, rows

    def compare_pricing(self, product_ids: list[int]) -> list[dict]:
        """Retail versus wholesale unit price for each known product id."""
        comparison = []
        for product_id in product_ids:
            product = self.store.find_product(product_id)
            if product is None:
                continue
            retail = self.calculate_price(product, CustomerType.RETAIL)
            wholesale = self.calculate_price(product, CustomerType.WHOLESALE)
            discount = product.base_price - wholesale
            if product.base_price > 0:
                pct = discount / product.base_price * 100
            else:
                pct = Decimal("0")
            comparison.append({
                "product_id": product.id,
                "product_name": product.name,
                "base_price": product.base_price,
                "retail_price": self._money(retail),
                "wholesale_price": self._money(wholesale),
                "wholesale_discount": self._money(discount),
                "wholesale_discount_percentage": self._money(pct),
            })
        return comparison
