"""Carts load testing: Locust entry point.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Realistic shoppers only:
    locust -f loadtests/locustfile.py CartBrowsingUser

    # Contention on a single cart:
    locust -f loadtests/locustfile.py HotCartUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py CartBrowsingUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.carts import CartBrowsingUser, CartFloodUser, HotCartUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Extracts the envelope's message so you see "Item not found in cart
    with productId: ..." instead of just "404".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Confirm the service is still healthy once the load stops."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    if environment.host is None:
        return
    try:
        resp = requests.get(f"{environment.host}/api/cart/health", timeout=5)
        print(f"[LOADTEST] Health after run: {resp.status_code} {resp.text}\n")
    except Exception as e:
        print(f"[LOADTEST] Could not reach health endpoint: {e}\n")
