"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation.
Money is always Decimal; quote and order lines are value snapshots.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

from .errors import InvalidArgumentError


def round_money(value: Decimal, places: int = 2) -> Decimal:
    """Round a money amount half-up to the given number of decimal places."""
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


class CustomerType(str, Enum):
    RETAIL = "Retail"
    WHOLESALE = "Wholesale"

    @classmethod
    def parse(cls, value: str) -> 'CustomerType':
        return _parse_enum(cls, value, "customer type")


class OrderStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    SHIPPED = "Shipped"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value: str) -> 'OrderStatus':
        return _parse_enum(cls, value, "order status")


def _parse_enum(enum_cls, value, label: str):
    """Match an enum member by value, case-insensitively."""
    if isinstance(value, enum_cls):
        return value
    text = str(value or "").strip().lower()
    for member in enum_cls:
        if member.value.lower() == text:
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise InvalidArgumentError(label, f"'{value}' (expected one of: {allowed})")


@dataclass(frozen=True)
class Product:
    """A catalog product as read from the store."""
    id: int
    name: str
    description: str
    stock: int
    base_price: Decimal


@dataclass(frozen=True)
class Customer:
    id: int
    name: str
    email: str
    customer_type: CustomerType


@dataclass(frozen=True)
class PricingRule:
    """A discount rule for one customer type, optionally gated by order amount."""
    id: int
    customer_type: CustomerType
    discount_percentage: Decimal
    minimum_order_amount: Optional[Decimal] = None
    is_active: bool = True
    description: str = ""

    @property
    def discount_factor(self) -> Decimal:
        return 1 - self.discount_percentage / Decimal(100)


@dataclass
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class QuoteItem:
    """A single priced line in a quote."""
    product_id: int
    product_name: str
    quantity: int
    base_price: Decimal
    discounted_price: Decimal
    discount_amount: Decimal
    line_total: Decimal
    rule_id: Optional[int] = None


@dataclass
class Quote:
    """Complete, unpersisted result of a pricing calculation."""
    customer_id: int
    customer_name: str
    customer_type: CustomerType
    generated_at: datetime
    items: list[QuoteItem] = field(default_factory=list)
    subtotal: Decimal = Decimal("0.00")
    additional_discount: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")
    order_rule_id: Optional[int] = None
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the quote-level trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)


@dataclass(frozen=True)
class OrderItem:
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Order:
    """A committed order. Line prices are copies taken from the quote."""
    id: Optional[int]
    customer_id: int
    customer_name: str
    created_at: datetime
    total_amount: Decimal
    status: OrderStatus
    items: tuple[OrderItem, ...] = ()

    def items_total(self) -> Decimal:
        return sum((item.total_price for item in self.items), Decimal("0.00"))
