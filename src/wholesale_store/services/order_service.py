"""
Order Service - Places orders around the pricing engine.

Default path keeps stock validation and stock reduction as two separate
store calls, exactly as the store front has always done:

    validate_stock_availability → create_order → reduce_stock

Nothing holds a lock between the check and the decrement, so two
concurrent orders for the same product can both pass validation and drive
stock negative. Setting ``atomic_stock_reservation`` switches to a
reserve-first path that validates and decrements under the store lock.
"""
import logging
from typing import Optional

from ..config.settings import get_settings, Settings
from ..engine.errors import CatalogStoreError, NotFoundError, StockConsistencyError, ValidationError
from ..engine.models import Order, OrderStatus
from ..engine.pricing_engine import PricingEngine

logger = logging.getLogger(__name__)

INSUFFICIENT_STOCK_MESSAGE = "Insufficient stock for one or more products."


class OrderService:
    """Order placement, lookup and status updates."""

    def __init__(self, store, pricing_engine: PricingEngine, settings: Optional[Settings] = None):
        self.store = store
        self.pricing_engine = pricing_engine
        self.settings = settings or get_settings()

    def place_order(self, customer_id: int, product_quantities: dict[int, int]) -> Order:
        """
        Validate stock, create the order and reduce stock.

        Raises:
            NotFoundError: Unknown customer
            ValidationError: Bad quantities or insufficient stock
            StockConsistencyError: The order was saved but stock reduction failed
        """
        if self.store.find_customer(customer_id) is None:
            raise NotFoundError("Customer", customer_id)

        if self.settings.atomic_stock_reservation:
            return self._place_order_reserved(customer_id, product_quantities)

        if not self.pricing_engine.validate_stock_availability(product_quantities):
            raise ValidationError(INSUFFICIENT_STOCK_MESSAGE)

        order = self.pricing_engine.create_order(customer_id, product_quantities)

        try:
            self.pricing_engine.reduce_stock(product_quantities)
        except CatalogStoreError as e:
            logger.error("Stock reduction failed after order %s was persisted", order.id, exc_info=True)
            raise StockConsistencyError(order.id, e) from e

        return order

    def _place_order_reserved(self, customer_id: int, product_quantities: dict[int, int]) -> Order:
        """Quote, then reserve stock atomically, then persist; release on failure."""
        customer = self.store.find_customer(customer_id)
        quote = self.pricing_engine.generate_quote(customer, product_quantities)

        if not self.store.reserve_stock(product_quantities):
            raise ValidationError(INSUFFICIENT_STOCK_MESSAGE)

        try:
            order = self.store.persist_order(self.pricing_engine.order_from_quote(quote))
        except Exception:
            logger.error("Order persist failed; releasing reserved stock %s", product_quantities)
            self.store.release_stock(product_quantities)
            raise

        logger.info("Order %s created with reserved stock for customer %s", order.id, customer.name)
        return order

    def get_order(self, order_id: int) -> Order:
        order = self.store.find_order(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    def list_orders(self) -> list[Order]:
        return self.store.list_orders()

    def update_order_status(self, order_id: int, status: str) -> Order:
        """Set any status in the OrderStatus set; there are no transition rules."""
        self.get_order(order_id)
        new_status = OrderStatus.parse(status)
        order = self.store.update_order_status(order_id, new_status)
        logger.info("Order %s status set to %s", order_id, new_status.value)
        return order
