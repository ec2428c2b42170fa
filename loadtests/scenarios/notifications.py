"""Notification inbox load test scenario.

Reads the inbox, checks the unread badge, marks the newest notice read
and registers a device, the way a mobile client does on app start.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import BUYER_TOKEN, auth_headers, push_token_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import InboxState


class InboxJourney(SequentialTaskSet):
    def on_start(self):
        self.state = InboxState()
        self.headers = auth_headers(BUYER_TOKEN)

    @task
    def register_device(self):
        with self.client.post(
            "/notifications/push-tokens",
            json=push_token_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /notifications/push-tokens",
        ) as resp:
            if resp.status_code == 201:
                self.state.push_token_id = resp.json()["push_token_id"]
            else:
                resp.failure(f"Register device failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def list_inbox(self):
        with self.client.get(
            "/notifications",
            params={"status": "Unread"},
            headers=self.headers,
            catch_response=True,
            name="GET /notifications",
        ) as resp:
            if resp.status_code == 200:
                self.state.notification_ids = [n["notification_id"] for n in resp.json()["data"]]
            else:
                resp.failure(f"List inbox failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def unread_badge(self):
        with self.client.get(
            "/notifications/unread-count",
            headers=self.headers,
            catch_response=True,
            name="GET /notifications/unread-count",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Unread count failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def mark_newest_read(self):
        if not self.state.notification_ids:
            return
        with self.client.put(
            f"/notifications/{self.state.notification_ids[0]}/status",
            json={"status": "Read"},
            headers=self.headers,
            catch_response=True,
            name="PUT /notifications/{id}/status",
        ) as resp:
            # Another simulated client may have marked it first
            if resp.status_code in (200, 400):
                resp.success()
            else:
                resp.failure(f"Mark read failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class InboxUser(HttpUser):
    tasks = [InboxJourney]
    wait_time = between(1, 5)
