"""Engine subpackage - core pricing logic and resolution."""
from .pricing_engine import PricingEngine
from .models import Customer, CustomerType, Order, OrderItem, OrderStatus, PricingRule, Product, Quote, QuoteItem

__all__ = [
    'PricingEngine', 'Customer', 'CustomerType', 'Order', 'OrderItem', 'OrderStatus',
    'PricingRule', 'Product', 'Quote', 'QuoteItem',
]
