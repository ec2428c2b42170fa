"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the API's Pydantic request schemas.
"""

import os
import random
import uuid

from faker import Faker

fake = Faker()


def _env_list(name: str, default: str) -> list[str]:
    return [value.strip() for value in os.getenv(name, default).split(",") if value.strip()]


PRODUCT_IDS = _env_list("LOADTEST_PRODUCT_IDS", "7,8")
HOT_PRODUCT_ID = os.getenv("LOADTEST_HOT_PRODUCT", PRODUCT_IDS[0])

BUYER_TOKEN = os.getenv("LOADTEST_BUYER_TOKEN", "token-buyer-1")
ADMIN_TOKEN = os.getenv("LOADTEST_ADMIN_TOKEN", "token-admin-1")


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def shipping_address() -> dict:
    return {
        "home_address": fake.building_number(),
        "street_address": fake.street_name()[:255],
        "township": fake.city_suffix()[:100],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "postal_code": fake.postcode()[:20],
        "country": fake.country()[:100],
        "note": fake.sentence(nb_words=6)[:500],
    }


def cart_items(max_lines: int = 2) -> list[dict]:
    """One to ``max_lines`` distinct products with small quantities."""
    product_ids = random.sample(PRODUCT_IDS, k=min(len(PRODUCT_IDS), random.randint(1, max_lines)))
    return [{"product_id": product_id, "quantity": random.randint(1, 2)} for product_id in product_ids]


def order_data(items: list[dict] | None = None) -> dict:
    """PlaceOrderRequest payload. Roughly a third of orders are prepaid."""
    payload = {
        "items": items or cart_items(),
        "payment_type": "Cash on Delivery",
        "shipping_address": shipping_address(),
    }
    if random.random() < 0.33:
        payload["payment_type"] = random.choice(["Full Prepaid", "Half Prepaid"])
        payload["payslip_reference"] = f"payslips/{uuid.uuid4().hex[:12]}.jpg"
    return payload


def push_token_data() -> dict:
    return {
        "device_type": random.choice(["android", "ios", "web"]),
        "token": f"lt-{uuid.uuid4().hex}",
    }
