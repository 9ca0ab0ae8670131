"""Runtime settings for the carts domain, read from the environment."""

import os

DEFAULT_CURRENCY = os.getenv("CART_DEFAULT_CURRENCY", "USD")

# Upper bound on an item's quantity, per request and after a merge
MAX_ITEM_QUANTITY = int(os.getenv("CART_MAX_ITEM_QUANTITY", "1000"))
