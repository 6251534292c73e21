"""
Rule Matcher - Selects and applies pricing rules.

Used by the pricing engine for both the per-line discount and the
order-level discount pass.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .models import CustomerType, PricingRule


@dataclass
class MatchedRule:
    """A rule that matched with context."""
    rule: PricingRule
    match_reason: str


def rule_sort_key(rule: PricingRule) -> Decimal:
    """
    Selection policy: the highest discount percentage wins.

    Not the most specific rule and not the newest one. Ties keep store order.
    """
    return rule.discount_percentage


class RuleMatcher:
    """
    Matches pricing rules against a customer type and order amount.

    Rules are read fresh from the catalog store on every call.
    """

    def __init__(self, store):
        self.store = store

    def find_matching_rules(self, customer_type: CustomerType, order_amount: Decimal) -> list[MatchedRule]:
        """
        Find all eligible rules for the context.

        Eligible means active, same customer type, and either no minimum
        order amount or ``order_amount >= minimum``. Returns rules sorted by
        discount percentage, highest first.
        """
        matched = []
        for rule in self.store.list_active_rules(customer_type):
            if not rule.is_active or rule.customer_type != customer_type:
                continue

            if rule.minimum_order_amount is not None:
                if order_amount < rule.minimum_order_amount:
                    continue
                reason = f"{customer_type.value}, amount {order_amount} >= {rule.minimum_order_amount}"
            else:
                reason = f"{customer_type.value}, no minimum"

            matched.append(MatchedRule(rule=rule, match_reason=reason))

        matched.sort(key=lambda m: rule_sort_key(m.rule), reverse=True)
        return matched

    def best_rule(self, customer_type: CustomerType, order_amount: Decimal) -> Optional[PricingRule]:
        """The single rule to apply, or None if nothing qualifies."""
        matched = self.find_matching_rules(customer_type, order_amount)
        return matched[0].rule if matched else None

    @staticmethod
    def apply_rule_to_price(rule: PricingRule, base_price: Decimal) -> tuple[Decimal, str]:
        """
        Apply a rule's discount factor to a unit price.

        Returns (new_price, trace_message).
        """
        new_price = base_price * rule.discount_factor
        return new_price, f"Rule {rule.id} applied {rule.discount_percentage}% discount: ${base_price} → ${new_price}"
