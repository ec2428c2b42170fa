"""Order placed templates — sent to admins and to the selling users."""


def _items_summary(items: list[dict]) -> str:
    return ", ".join(f"{item.get('title') or item.get('product_id')} x{item.get('quantity')}" for item in items)


class OrderPlacedAdminTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        buyer_name = context.get("buyer_name") or "A customer"
        shop_name = context.get("shop_name") or "a shop"
        items = context.get("items", [])
        return {
            "title": "New Order Received",
            "message": (
                f"{buyer_name} placed Order ID #{order_id} at {shop_name} "
                f"({len(items)} item(s), {context.get('payment_type', 'N/A')})."
            ),
        }


class OrderPlacedSellerTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        return {
            "title": "New Order",
            "message": (
                f"You have a new order #{order_id}: {_items_summary(context.get('items', []))}. "
                f"Payment: {context.get('payment_type', 'N/A')}."
            ),
        }
