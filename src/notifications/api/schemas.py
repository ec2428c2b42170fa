"""Pydantic request/response schemas for the Notifications API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class MarkNotificationRequest(BaseModel):
    status: str


class RegisterPushTokenRequest(BaseModel):
    device_type: str
    token: str


class NotificationResponse(BaseModel):
    notification_id: str
    title: str
    message: str
    status: str
    payload: dict[str, Any] | None = None
    created_at: datetime | None = None


class NotificationListResponse(BaseModel):
    data: list[NotificationResponse]
    unread: int


class UnreadCountResponse(BaseModel):
    unread: int


class PushTokenIdResponse(BaseModel):
    push_token_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
