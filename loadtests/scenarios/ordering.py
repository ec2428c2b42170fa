"""Ordering load test scenarios.

Three user types:

- BuyerUser walks an order from placement to the buyer's own ending
- OrderLifecycleUser drives an order through fulfilment as an admin
- StockContentionUser races many buyers for one hot product; every
  attempt must end in 201 or 409, never in an oversell or a 5xx
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    ADMIN_TOKEN,
    BUYER_TOKEN,
    HOT_PRODUCT_ID,
    auth_headers,
    order_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import OrderState


def _place_order(taskset, headers, payload, name="POST /orders"):
    with taskset.client.post("/orders", json=payload, headers=headers, catch_response=True, name=name) as resp:
        if resp.status_code == 201:
            taskset.state.order_id = resp.json()["order_id"]
        elif resp.status_code == 409:
            # Out of stock is a valid outcome under load
            resp.success()
            taskset.interrupt()
        else:
            resp.failure(f"Place order failed: {resp.status_code} — {extract_error_detail(resp)}")
            taskset.interrupt()


def _set_status(taskset, headers, status):
    with taskset.client.put(
        f"/orders/{taskset.state.order_id}/status",
        json={"status": status},
        headers=headers,
        catch_response=True,
        name=f"PUT /orders/{{id}}/status [{status}]",
    ) as resp:
        if resp.status_code == 200:
            taskset.state.current_status = status
        else:
            resp.failure(f"Set {status} failed: {resp.status_code} — {extract_error_detail(resp)}")
            taskset.interrupt()


class BuyerJourney(SequentialTaskSet):
    """Place Order -> View -> Remind Seller -> Cancel or Complete."""

    def on_start(self):
        self.state = OrderState()
        self.headers = auth_headers(BUYER_TOKEN)

    @task
    def place_order(self):
        _place_order(self, self.headers, order_data())

    @task
    def view_order(self):
        with self.client.get(
            f"/orders/{self.state.order_id}",
            headers=self.headers,
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View order failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def remind_seller(self):
        with self.client.post(
            f"/orders/{self.state.order_id}/remind",
            headers=self.headers,
            catch_response=True,
            name="POST /orders/{id}/remind",
        ) as resp:
            if resp.status_code == 202:
                self.state.reminded = True
            else:
                resp.failure(f"Remind failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def end_order(self):
        _set_status(self, self.headers, random.choice(["Cancelled", "Completed"]))

    @task
    def done(self):
        self.interrupt()


class OrderFulfilmentJourney(SequentialTaskSet):
    """Place Order -> Processing -> Shipped -> Delivered -> Completed, as an admin."""

    def on_start(self):
        self.state = OrderState()
        self.headers = auth_headers(ADMIN_TOKEN)

    @task
    def place_order(self):
        _place_order(self, self.headers, order_data())

    @task
    def processing(self):
        _set_status(self, self.headers, "Processing")

    @task
    def shipped(self):
        _set_status(self, self.headers, "Shipped")

    @task
    def delivered(self):
        _set_status(self, self.headers, "Delivered")

    @task
    def completed(self):
        _set_status(self, self.headers, "Completed")

    @task
    def done(self):
        self.interrupt()


class StockContentionTasks(SequentialTaskSet):
    """Single-unit orders for the hot product until stock runs out."""

    def on_start(self):
        self.state = OrderState()
        self.headers = auth_headers(BUYER_TOKEN)

    @task
    def grab_last_units(self):
        payload = order_data(items=[{"product_id": HOT_PRODUCT_ID, "quantity": 1}])
        payload["payment_type"] = "Cash on Delivery"
        payload.pop("payslip_reference", None)
        _place_order(self, self.headers, payload, name="POST /orders (hot product)")

    @task
    def done(self):
        self.interrupt()


class BuyerUser(HttpUser):
    tasks = [BuyerJourney]
    wait_time = between(1, 3)


class OrderLifecycleUser(HttpUser):
    tasks = [OrderFulfilmentJourney]
    wait_time = between(1, 3)


class StockContentionUser(HttpUser):
    tasks = [StockContentionTasks]
    wait_time = between(0.05, 0.2)
