"""Discount resolution — the effective unit price of a product at admission.

Eligible rules are the shop's active rules that have not expired
(expiration on or after today, UTC). The most specific scope wins:
product, then brand, then category, then shop-wide. Within a scope the
most recently created rule wins.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime

from protean.utils.globals import current_domain

from ordering.pricing.discount_rule import SCOPE_PRIORITY, DiscountRule, DiscountType


@dataclass(frozen=True)
class PricingOutcome:
    discount_percent: float
    discounted_price: float
    discount_reason: str
    discount_type: str

    @classmethod
    def neutral(cls, base_price: float) -> "PricingOutcome":
        return cls(
            discount_percent=0.0,
            discounted_price=base_price,
            discount_reason="",
            discount_type=DiscountType.NONE.value,
        )


def select_rule(rules: Iterable[DiscountRule], product_id, brand_id, category_id, today: date) -> DiscountRule | None:
    candidates = [
        rule for rule in rules if rule.is_eligible_on(today) and rule.applies_to(product_id, brand_id, category_id)
    ]
    if not candidates:
        return None

    def _rank(rule):
        created = rule.created_at.timestamp() if rule.created_at else 0.0
        return (SCOPE_PRIORITY[rule.discount_for], -created, str(rule.id))

    return min(candidates, key=_rank)


def apply_rule(rule: DiscountRule | None, base_price: float) -> PricingOutcome:
    if rule is None:
        return PricingOutcome.neutral(base_price)

    if rule.discount_type == DiscountType.PERCENTAGE.value:
        return PricingOutcome(
            discount_percent=rule.discount_percent,
            discounted_price=round(base_price * (1 - rule.discount_percent / 100), 2),
            discount_reason=rule.discount_reason or "",
            discount_type=rule.discount_type,
        )
    if rule.discount_type == DiscountType.AMOUNT.value:
        return PricingOutcome(
            discount_percent=0.0,
            discounted_price=rule.discounted_price,
            discount_reason=rule.discount_reason or "",
            discount_type=rule.discount_type,
        )
    return PricingOutcome(
        discount_percent=0.0,
        discounted_price=base_price,
        discount_reason="",
        discount_type=rule.discount_type or DiscountType.NONE.value,
    )


class DiscountResolver:
    """Resolves prices against the rules stored for a shop.

    Rules are fetched once per shop for the lifetime of the resolver, so a
    single admission prices every line against the same rule set.
    """

    def __init__(self, today: date | None = None) -> None:
        self.today = today or datetime.now(UTC).date()
        self._rules_by_shop: dict[str, list[DiscountRule]] = {}

    def _rules_for(self, shop_id) -> list[DiscountRule]:
        key = str(shop_id)
        if key not in self._rules_by_shop:
            self._rules_by_shop[key] = current_domain.repository_for(DiscountRule).active_for_shop(key)
        return self._rules_by_shop[key]

    def resolve(self, shop_id, product_id, brand_id, category_id, base_price: float) -> PricingOutcome:
        rule = select_rule(self._rules_for(shop_id), product_id, brand_id, category_id, self.today)
        return apply_rule(rule, base_price)
