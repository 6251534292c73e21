"""
Catalog Store - products, customers, pricing rules and orders.

The engines only depend on the CatalogStore protocol. InMemoryCatalogStore
keeps the seed tables as pandas DataFrames indexed by id and hands out frozen
dataclass snapshots, so callers never hold live references to store rows.
"""
import logging
import threading
from dataclasses import replace
from decimal import Decimal
from typing import Optional, Protocol

import pandas as pd

from ..engine.errors import CatalogStoreError
from ..engine.models import Customer, CustomerType, Order, OrderStatus, PricingRule, Product

logger = logging.getLogger(__name__)


class CatalogStore(Protocol):
    """Storage operations consumed by the pricing and search engines."""

    def list_products(self) -> list[Product]:
        ...

    def find_product(self, product_id: int) -> Optional[Product]:
        ...

    def find_customer(self, customer_id: int) -> Optional[Customer]:
        ...

    def list_active_rules(self, customer_type: CustomerType) -> list[PricingRule]:
        ...

    def persist_stock_changes(self, changes: dict[int, int]) -> None:
        """Write new stock levels for several products as one unit."""
        ...

    def persist_order(self, order: Order) -> Order:
        """Store an order and return it with its assigned id."""
        ...


def _optional_decimal(value) -> Optional[Decimal]:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    text = str(value).strip()
    if not text or text.lower() == 'nan':
        return None
    return Decimal(text)


class InMemoryCatalogStore:
    """
    Process-local catalog store backed by pandas DataFrames.

    Expected frames (all indexed by integer id):
    - products: name, description, stock (int), base_price (decimal string)
    - customers: name, email, customer_type
    - rules: customer_type, discount_percentage, minimum_order_amount, is_active, description

    Every mutation swaps in a modified copy of the frame under the store lock,
    so a failed batch leaves the previous state untouched.
    """

    def __init__(self, products: pd.DataFrame, customers: pd.DataFrame, rules: pd.DataFrame):
        self.products = products
        self.customers = customers
        self.rules = rules
        self._orders: dict[int, Order] = {}
        self._next_order_id = 1
        # Ids are never reused, even after the highest one is deleted
        self._next_customer_id = int(customers.index.max()) + 1 if len(customers) else 1
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Row conversion
    # ------------------------------------------------------------------
    @staticmethod
    def _to_product(product_id, row) -> Product:
        return Product(
            id=int(product_id),
            name=str(row['name']),
            description=str(row['description']),
            stock=int(row['stock']),
            base_price=Decimal(str(row['base_price'])),
        )

    @staticmethod
    def _to_customer(customer_id, row) -> Customer:
        return Customer(
            id=int(customer_id),
            name=str(row['name']),
            email=str(row['email']),
            customer_type=CustomerType.parse(row['customer_type']),
        )

    @staticmethod
    def _to_rule(rule_id, row) -> PricingRule:
        return PricingRule(
            id=int(rule_id),
            customer_type=CustomerType.parse(row['customer_type']),
            discount_percentage=Decimal(str(row['discount_percentage'])),
            minimum_order_amount=_optional_decimal(row['minimum_order_amount']),
            is_active=bool(row['is_active']),
            description=str(row['description']),
        )

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------
    def list_products(self) -> list[Product]:
        """All products in catalog (seed file) order."""
        frame = self.products
        return [self._to_product(pid, row) for pid, row in frame.iterrows()]

    def find_product(self, product_id: int) -> Optional[Product]:
        frame = self.products
        if product_id not in frame.index:
            return None
        return self._to_product(product_id, frame.loc[product_id])

    def persist_stock_changes(self, changes: dict[int, int]) -> None:
        """
        Apply new stock levels for several products atomically.

        Raises CatalogStoreError without applying anything if any id is unknown.
        """
        with self._lock:
            missing = [pid for pid in changes if pid not in self.products.index]
            if missing:
                raise CatalogStoreError(f"Cannot persist stock for unknown products: {missing}")

            updated = self.products.copy()
            for product_id, new_stock in changes.items():
                updated.at[product_id, 'stock'] = int(new_stock)
            self.products = updated

        logger.info("Persisted stock changes: %s", changes)

    def reserve_stock(self, quantities: dict[int, int]) -> bool:
        """
        Validate and decrement stock in one step under the store lock.

        Returns False (and changes nothing) if any product is missing or short.
        """
        with self._lock:
            frame = self.products
            for product_id, quantity in quantities.items():
                if product_id not in frame.index or int(frame.at[product_id, 'stock']) < quantity:
                    return False
            self.persist_stock_changes({
                product_id: int(frame.at[product_id, 'stock']) - quantity
                for product_id, quantity in quantities.items()
            })
            return True

    def release_stock(self, quantities: dict[int, int]) -> None:
        """Put reserved quantities back."""
        with self._lock:
            frame = self.products
            self.persist_stock_changes({
                product_id: int(frame.at[product_id, 'stock']) + quantity
                for product_id, quantity in quantities.items()
                if product_id in frame.index
            })

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------
    def list_customers(self) -> list[Customer]:
        return [self._to_customer(cid, row) for cid, row in self.customers.iterrows()]

    def find_customer(self, customer_id: int) -> Optional[Customer]:
        frame = self.customers
        if customer_id not in frame.index:
            return None
        return self._to_customer(customer_id, frame.loc[customer_id])

    def find_customer_by_email(self, email: str) -> Optional[Customer]:
        frame = self.customers
        match = frame[frame['email'].str.lower() == email.strip().lower()]
        if match.empty:
            return None
        return self._to_customer(match.index[0], match.iloc[0])

    def add_customer(self, name: str, email: str, customer_type: CustomerType) -> Customer:
        with self._lock:
            frame = self.customers
            new_id = self._next_customer_id
            self._next_customer_id += 1
            row = pd.DataFrame(
                [{'name': name, 'email': email, 'customer_type': customer_type.value}],
                index=pd.Index([new_id], name=frame.index.name),
            )
            self.customers = pd.concat([frame, row])
        return self.find_customer(new_id)

    def update_customer(self, customer: Customer) -> Customer:
        with self._lock:
            if customer.id not in self.customers.index:
                raise CatalogStoreError(f"Cannot update unknown customer {customer.id}")
            updated = self.customers.copy()
            updated.loc[customer.id, ['name', 'email', 'customer_type']] = [
                customer.name, customer.email, customer.customer_type.value
            ]
            self.customers = updated
        return self.find_customer(customer.id)

    def delete_customer(self, customer_id: int) -> None:
        with self._lock:
            self.customers = self.customers.drop(index=customer_id)

    # ------------------------------------------------------------------
    # Pricing rules
    # ------------------------------------------------------------------
    def list_rules(self) -> list[PricingRule]:
        return [self._to_rule(rid, row) for rid, row in self.rules.iterrows()]

    def list_active_rules(self, customer_type: CustomerType) -> list[PricingRule]:
        frame = self.rules
        match = frame[(frame['customer_type'] == customer_type.value) & (frame['is_active'])]
        return [self._to_rule(rid, row) for rid, row in match.iterrows()]

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def persist_order(self, order: Order) -> Order:
        with self._lock:
            stored = replace(order, id=self._next_order_id)
            self._orders[stored.id] = stored
            self._next_order_id += 1
        return stored

    def find_order(self, order_id: int) -> Optional[Order]:
        return self._orders.get(order_id)

    def list_orders(self) -> list[Order]:
        """Newest first."""
        return sorted(self._orders.values(), key=lambda o: (o.created_at, o.id), reverse=True)

    def customer_has_orders(self, customer_id: int) -> bool:
        return any(o.customer_id == customer_id for o in self._orders.values())

    def update_order_status(self, order_id: int, status: OrderStatus) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return None
            order = replace(order, status=status)
            self._orders[order_id] = order
        return order
