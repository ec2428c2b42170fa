"""Domain events for the DiscountRule aggregate."""

from protean.fields import DateTime, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="DiscountRule")
class DiscountRuleCreated:
    __version__ = 1

    rule_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    discount_for = String(required=True)
    discount_for_id = String()
    discount_type = String(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="DiscountRule")
class DiscountRuleDeactivated:
    __version__ = 1

    rule_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    deactivated_by = Identifier()
    deactivated_at = DateTime(required=True)
