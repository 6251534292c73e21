"""Services subpackage - order placement and customer management."""
