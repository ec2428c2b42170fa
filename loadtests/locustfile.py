"""Bazaar Load Testing — Locust entry point.

Discovers all user classes from the scenarios package. The target service
must recognise the bearer tokens in LOADTEST_BUYER_TOKEN and
LOADTEST_ADMIN_TOKEN (through IDENTITY_SERVICE_URL), and the products in
LOADTEST_PRODUCT_IDS must exist in its catalogue and ledger.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Oversell check on one hot product:
    locust -f loadtests/locustfile.py StockContentionUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py BuyerUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.notifications import InboxUser  # noqa: F401
from loadtests.scenarios.ordering import BuyerUser, OrderLifecycleUser, StockContentionUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    A 409 from order placement is the expected answer once stock runs out
    and is not logged.
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        if response.status_code == 409 and name == "POST /orders":
            return
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print how the hot product's stock race ended."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    stats = environment.stats.get("POST /orders (hot product)", "POST")
    if stats.num_requests:
        print(
            f"[LOADTEST] Hot product: {stats.num_requests} attempts, "
            f"{stats.num_failures} unexpected failures"
        )
    print()
