"""
Customer Service - CRUD operations for customer records.
Validates required fields and email uniqueness before touching the store.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from ..engine.errors import NotFoundError, ValidationError
from ..engine.models import Customer, CustomerType

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_NAME_LENGTH = 100


@dataclass
class ValidationResult:
    """Result of customer validation."""
    valid: bool
    errors: list[str] = field(default_factory=list)


class CustomerService:
    """Service for managing customers."""

    def __init__(self, store):
        self.store = store

    def list_customers(self) -> list[Customer]:
        return self.store.list_customers()

    def get_customer(self, customer_id: int) -> Customer:
        customer = self.store.find_customer(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    def validate_customer(self, name: str, email: str, existing_id: Optional[int] = None) -> ValidationResult:
        """Validate customer fields before saving."""
        result = ValidationResult(valid=True)

        if not name or not name.strip():
            result.errors.append("Name is required")
        elif len(name.strip()) > MAX_NAME_LENGTH:
            result.errors.append(f"Name must be at most {MAX_NAME_LENGTH} characters")

        if not email or not email.strip():
            result.errors.append("Email is required")
        elif not EMAIL_PATTERN.match(email.strip()):
            result.errors.append("Email is not a valid address")
        else:
            other = self.store.find_customer_by_email(email)
            if other is not None and other.id != existing_id:
                result.errors.append("A customer with this email already exists")

        result.valid = not result.errors
        return result

    def create_customer(self, name: str, email: str, customer_type: CustomerType) -> Customer:
        """Create a new customer."""
        validation = self.validate_customer(name, email)
        if not validation.valid:
            raise ValidationError("; ".join(validation.errors), validation.errors)

        customer = self.store.add_customer(name.strip(), email.strip(), customer_type)
        logger.info("Created new customer: %s (%s)", customer.name, customer.customer_type.value)
        return customer

    def update_customer(self, customer_id: int, name: str, email: str, customer_type: CustomerType) -> Customer:
        """Update an existing customer."""
        self.get_customer(customer_id)

        validation = self.validate_customer(name, email, existing_id=customer_id)
        if not validation.valid:
            raise ValidationError("; ".join(validation.errors), validation.errors)

        return self.store.update_customer(Customer(
            id=customer_id,
            name=name.strip(),
            email=email.strip(),
            customer_type=customer_type,
        ))

    def delete_customer(self, customer_id: int):
        """Delete a customer that has no orders."""
        self.get_customer(customer_id)
        if self.store.customer_has_orders(customer_id):
            raise ValidationError("Cannot delete customer with existing orders")
        self.store.delete_customer(customer_id)
