"""Discount rule administration — create and deactivate commands."""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Date, Float, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.exceptions import DiscountRuleNotFound
from ordering.pricing.discount_rule import DiscountRule


@ordering.command(part_of="DiscountRule")
class CreateDiscountRule:
    shop_id = Identifier(required=True)
    discount_for = String(required=True)
    discount_for_id = String(max_length=64)
    discount_type = String(required=True)
    discount_percent = Float(default=0.0)
    discounted_price = Float(default=0.0)
    discount_reason = String(max_length=500)
    expiration = Date()
    created_by = Identifier()


@ordering.command(part_of="DiscountRule")
class DeactivateDiscountRule:
    rule_id = Identifier(required=True)
    deactivated_by = Identifier()


@ordering.command_handler(part_of=DiscountRule)
class DiscountRuleCommandHandler:
    @handle(CreateDiscountRule)
    def create_rule(self, command):
        rule = DiscountRule.create(
            shop_id=command.shop_id,
            discount_for=command.discount_for,
            discount_for_id=command.discount_for_id,
            discount_type=command.discount_type,
            discount_percent=command.discount_percent or 0.0,
            discounted_price=command.discounted_price or 0.0,
            discount_reason=command.discount_reason,
            expiration=command.expiration,
            created_by=command.created_by,
        )
        current_domain.repository_for(DiscountRule).add(rule)
        return str(rule.id)

    @handle(DeactivateDiscountRule)
    def deactivate_rule(self, command):
        repo = current_domain.repository_for(DiscountRule)
        try:
            rule = repo.get(command.rule_id)
        except ObjectNotFoundError as exc:
            raise DiscountRuleNotFound(f"Discount rule {command.rule_id} not found") from exc
        rule.deactivate(deactivated_by=command.deactivated_by)
        repo.add(rule)
