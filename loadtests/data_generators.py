"""Faker-based data generators for the Carts load test scenarios.

Payloads use the camelCase field names of the API's request schemas and
stay inside its validation rules (positive two-decimal price, quantity
between 1 and 1000).
"""

import random
import uuid

from faker import Faker

fake = Faker()


def tenant_id() -> str:
    return f"tenant-{random.randint(1, 20)}"


def user_id() -> str:
    return f"user-{uuid.uuid4().hex[:8]}"


def product_id() -> str:
    return f"prod-{uuid.uuid4().hex[:8]}"


def product_name() -> str:
    return f"{fake.word().capitalize()} {fake.word().capitalize()}"[:255]


def price() -> float:
    return round(random.uniform(0.99, 299.99), 2)


def cart_item_data(pid: str | None = None, quantity: int | None = None) -> dict:
    """Generate an AddItemRequest payload."""
    return {
        "productId": pid or product_id(),
        "name": product_name(),
        "price": price(),
        "quantity": quantity if quantity is not None else random.randint(1, 5),
    }


def quantity_update(quantity: int | None = None) -> dict:
    """Generate an UpdateQuantityRequest payload."""
    return {"quantity": quantity if quantity is not None else random.randint(1, 10)}
