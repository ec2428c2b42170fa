"""Order status templates — buyer updates and admin alerts for buyer actions."""

_BUYER_MESSAGES = {
    "Pending": "Your order #{order_id} is waiting for confirmation.",
    "Processing": "Your order #{order_id} is being prepared by the seller.",
    "Shipped": "Good news! Your order #{order_id} has been shipped.",
    "Delivered": "Your order #{order_id} has been delivered.",
    "Completed": "Your order #{order_id} is complete. Thank you for shopping with us!",
    "Cancelled": "Your order #{order_id} has been cancelled.",
    "Returned": "The return of order #{order_id} has been recorded.",
    "Refunded": "Your order #{order_id} has been refunded.",
    "Failed": "Unfortunately your order #{order_id} could not be fulfilled.",
    "On Hold": "Your order #{order_id} is on hold. We will update you soon.",
    "Backordered": "Some items in your order #{order_id} are backordered.",
}

_ADMIN_ALERTS = {
    "Cancelled": (
        "Order Cancelled",
        "Order ID #{order_id} was cancelled by {user_name}.",
    ),
    "Returned": (
        "Return Request Submitted",
        "Return requested by {user_name} for Order ID #{order_id} - please review and process.",
    ),
    "Completed": (
        "Order Completed",
        "{user_name} confirmed receipt of Order ID #{order_id}.",
    ),
}

# Statuses a non-admin can set that admins must hear about
ADMIN_ALERT_STATUSES = frozenset(_ADMIN_ALERTS)


class OrderStatusBuyerTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        status = context.get("status", "")
        message = _BUYER_MESSAGES.get(status, "Your order #{order_id} is now " + status + ".")
        return {
            "title": f"Order {status}",
            "message": message.format(order_id=context.get("order_id", "N/A")),
        }


class OrderStatusAdminTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        status = context.get("status", "")
        title, message = _ADMIN_ALERTS.get(status, (f"Order {status}", "Order ID #{order_id} is now " + status + "."))
        return {
            "title": title,
            "message": message.format(
                order_id=context.get("order_id", "N/A"),
                user_name=context.get("user_name") or "a customer",
            ),
        }
