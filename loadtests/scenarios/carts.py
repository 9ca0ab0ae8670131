"""Cart load test scenarios.

CartLifecycleJourney walks one shopper through every reconciliation
outcome. CartBrowsingUser runs it with realistic pacing, CartFloodUser
hammers the add endpoint, and HotCartUser makes many Locust users share
a single cart to exercise concurrent adds of the same product.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, constant_pacing, task

from loadtests.data_generators import cart_item_data, product_id, quantity_update, tenant_id, user_id
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CartState


class CartLifecycleJourney(SequentialTaskSet):
    """Add -> Merge -> Update -> Remove -> Restore -> View -> Clear.

    Generates events: CartCreated, CartItemAdded (Created, Merged,
    Restored), CartItemQuantityUpdated, CartItemRemoved, CartCleared.
    """

    def on_start(self):
        self.state = CartState(tenant_id=tenant_id(), user_id=user_id())

    def _add(self, payload, label):
        with self.client.post(
            "/api/cart/items",
            params=self.state.owner_params,
            json=payload,
            catch_response=True,
            name="POST /api/cart/items",
        ) as resp:
            if resp.status_code == 201:
                self.state.item_count = resp.json()["itemCount"]
                return True
            resp.failure(f"{label} failed: {resp.status_code} - {extract_error_detail(resp)}")
            return False

    @task
    def add_first_item(self):
        pid = product_id()
        if self._add(cart_item_data(pid), "Add item"):
            self.state.product_ids.append(pid)
        else:
            self.interrupt()

    @task
    def add_second_item(self):
        pid = product_id()
        if self._add(cart_item_data(pid), "Add second item"):
            self.state.product_ids.append(pid)

    @task
    def merge_first_item(self):
        self._add(cart_item_data(self.state.product_ids[0], quantity=1), "Merge item")

    @task
    def update_quantity(self):
        pid = self.state.product_ids[0]
        with self.client.put(
            f"/api/cart/items/{pid}",
            params=self.state.owner_params,
            json=quantity_update(),
            catch_response=True,
            name="PUT /api/cart/items/{productId}",
        ) as resp:
            if resp.status_code == 200:
                self.state.item_count = resp.json()["itemCount"]
            else:
                resp.failure(f"Update quantity failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def remove_item(self):
        pid = self.state.product_ids[-1]
        with self.client.delete(
            f"/api/cart/items/{pid}",
            params=self.state.owner_params,
            catch_response=True,
            name="DELETE /api/cart/items/{productId}",
        ) as resp:
            if resp.status_code == 200:
                self.state.removed_product_ids.append(pid)
                self.state.item_count = resp.json()["itemCount"]
            else:
                resp.failure(f"Remove item failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def restore_item(self):
        if self.state.removed_product_ids:
            self._add(cart_item_data(self.state.removed_product_ids.pop()), "Restore item")

    @task
    def view_cart(self):
        with self.client.get(
            "/api/cart",
            params=self.state.owner_params,
            catch_response=True,
            name="GET /api/cart",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code} - {extract_error_detail(resp)}")
            elif resp.json()["itemCount"] != self.state.item_count:
                resp.failure(f"Item count drifted: expected {self.state.item_count}, got {resp.json()['itemCount']}")

    @task
    def clear_cart(self):
        with self.client.delete(
            "/api/cart",
            params=self.state.owner_params,
            catch_response=True,
            name="DELETE /api/cart",
        ) as resp:
            if resp.status_code != 204:
                resp.failure(f"Clear cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CartBrowsingUser(HttpUser):
    """Shoppers building, editing and clearing their own carts."""

    wait_time = between(0.5, 3.0)
    tasks = [CartLifecycleJourney]


class CartFloodUser(HttpUser):
    """Stress test: back-to-back adds into a fresh cart per request."""

    wait_time = constant_pacing(0.1)

    @task
    def add_to_new_cart(self):
        self.client.post(
            "/api/cart/items",
            params={"tenantId": tenant_id(), "userId": user_id()},
            json=cart_item_data(),
            name="[STRESS] POST /api/cart/items",
        )


class HotCartUser(HttpUser):
    """Many users adding the same few products to one shared cart.

    Every add must be reconciled into the existing line, so the cart
    should never show the same product twice.
    """

    wait_time = constant_pacing(0.2)
    owner = {"tenantId": "tenant-hot", "userId": "user-hot"}
    products = [f"prod-hot-{n}" for n in range(3)]

    @task(5)
    def add_shared_product(self):
        with self.client.post(
            "/api/cart/items",
            params=self.owner,
            json=cart_item_data(random.choice(self.products), quantity=1),
            catch_response=True,
            name="[HOT] POST /api/cart/items",
        ) as resp:
            # The merge limit is expected once the shared line fills up
            if resp.status_code == 400:
                resp.success()
            elif resp.status_code != 201:
                resp.failure(f"Hot add failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task(1)
    def check_for_duplicates(self):
        with self.client.get("/api/cart", params=self.owner, catch_response=True, name="[HOT] GET /api/cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"View hot cart failed: {resp.status_code} - {extract_error_detail(resp)}")
                return
            seen = [item["productId"] for item in resp.json()["items"]]
            if len(seen) != len(set(seen)):
                resp.failure(f"Duplicate active lines: {sorted(seen)}")

    @task(1)
    def reset(self):
        self.client.delete("/api/cart", params=self.owner, name="[HOT] DELETE /api/cart")
