"""FastAPI routes for the Notifications domain — a user's own inbox and devices."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.authentication import current_principal
from identity.principal import Principal
from notifications.api.schemas import (
    MarkNotificationRequest,
    NotificationListResponse,
    NotificationResponse,
    PushTokenIdResponse,
    RegisterPushTokenRequest,
    StatusResponse,
    UnreadCountResponse,
)
from notifications.device.push_token import RegisterPushToken
from notifications.notification.inbox import list_notifications, unread_count
from notifications.notification.marking import MarkNotification
from shared.errors import InvalidListLimit

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
async def get_notifications(
    status: str | None = None,
    limit: int | None = None,
    principal: Principal = Depends(current_principal),
) -> NotificationListResponse:
    if limit is not None and limit < 1:
        raise InvalidListLimit("limit must be a positive number")
    notifications = list_notifications(principal.user_id, status=status, limit=limit)
    return NotificationListResponse(
        data=[
            NotificationResponse(
                notification_id=str(n.id),
                title=n.title,
                message=n.message,
                status=n.status,
                payload=n.payload_data,
                created_at=n.created_at,
            )
            for n in notifications
        ],
        unread=unread_count(principal.user_id),
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(principal: Principal = Depends(current_principal)) -> UnreadCountResponse:
    return UnreadCountResponse(unread=unread_count(principal.user_id))


@router.put("/{notification_id}/status", response_model=StatusResponse)
async def mark_notification(
    notification_id: str,
    body: MarkNotificationRequest,
    principal: Principal = Depends(current_principal),
) -> StatusResponse:
    current_domain.process(
        MarkNotification(
            notification_id=notification_id,
            recipient_id=principal.user_id,
            status=body.status,
        ),
        asynchronous=False,
    )
    return StatusResponse(status=body.status)


@router.post("/push-tokens", status_code=201, response_model=PushTokenIdResponse)
async def register_push_token(
    body: RegisterPushTokenRequest,
    principal: Principal = Depends(current_principal),
) -> PushTokenIdResponse:
    push_token_id = current_domain.process(
        RegisterPushToken(user_id=principal.user_id, device_type=body.device_type, token=body.token),
        asynchronous=False,
    )
    return PushTokenIdResponse(push_token_id=push_token_id)
