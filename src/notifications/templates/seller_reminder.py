"""Seller reminder template — the buyer is waiting on an order."""


class SellerReminderTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        buyer_name = context.get("buyer_name") or "The buyer"
        return {
            "title": "Urgent: Order Reminder",
            "message": (
                f"{buyer_name} is waiting on Order ID #{context.get('order_id', 'N/A')} "
                f"(currently {context.get('status', 'N/A')}). Please process it as soon as possible."
            ),
        }
