"""DiscountRule aggregate (CQRS) — a shop's price reduction rule.

A rule targets one scope of the shop's catalogue: a single product, a
brand, a category, or everything the shop sells. Rules are never applied
to stored product prices; the resolver evaluates them when an order is
admitted and the outcome is frozen into the order line.
"""

from datetime import UTC, date, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Date, DateTime, Float, Identifier, String

from ordering.domain import ordering
from ordering.pricing.events import DiscountRuleCreated, DiscountRuleDeactivated


class DiscountFor(Enum):
    PRODUCT = "product"
    BRAND = "brand"
    CATEGORY = "category"
    ALL = "all"


class DiscountType(Enum):
    PERCENTAGE = "Discount by Specific Percentage"
    AMOUNT = "Discount by Specific Amount"
    NONE = "No Discount"


# Lower wins.
SCOPE_PRIORITY = {
    DiscountFor.PRODUCT.value: 1,
    DiscountFor.BRAND.value: 2,
    DiscountFor.CATEGORY.value: 3,
    DiscountFor.ALL.value: 4,
}


@ordering.aggregate
class DiscountRule:
    shop_id = Identifier(required=True)
    discount_for = String(choices=DiscountFor, required=True)
    discount_for_id = String(max_length=64)
    discount_type = String(choices=DiscountType, default=DiscountType.NONE.value)
    discount_percent = Float(default=0.0, min_value=0.0, max_value=100.0)
    discounted_price = Float(default=0.0, min_value=0.0)
    discount_reason = String(max_length=500, default="")
    expiration = Date()
    is_active = Boolean(default=True)
    created_by = Identifier()
    created_at = DateTime()

    @invariant.post
    def scoped_rule_must_name_its_target(self):
        if self.discount_for != DiscountFor.ALL.value and not self.discount_for_id:
            raise ValidationError({"discount_for_id": [f"Required for {self.discount_for} discounts"]})

    @classmethod
    def create(
        cls,
        shop_id,
        discount_for,
        discount_type,
        discount_for_id=None,
        discount_percent=0.0,
        discounted_price=0.0,
        discount_reason="",
        expiration=None,
        created_by=None,
    ):
        rule = cls(
            shop_id=shop_id,
            discount_for=discount_for,
            discount_for_id=str(discount_for_id) if discount_for_id is not None else None,
            discount_type=discount_type,
            discount_percent=discount_percent,
            discounted_price=discounted_price,
            discount_reason=discount_reason or "",
            expiration=expiration,
            is_active=True,
            created_by=created_by,
            created_at=datetime.now(UTC),
        )
        rule.raise_(
            DiscountRuleCreated(
                rule_id=str(rule.id),
                shop_id=str(shop_id),
                discount_for=discount_for,
                discount_for_id=rule.discount_for_id,
                discount_type=discount_type,
                created_at=rule.created_at,
            )
        )
        return rule

    def is_eligible_on(self, day: date) -> bool:
        return bool(self.is_active) and (self.expiration is None or self.expiration >= day)

    def applies_to(self, product_id, brand_id, category_id) -> bool:
        target = self.discount_for_id
        if self.discount_for == DiscountFor.PRODUCT.value:
            return target == str(product_id)
        if self.discount_for == DiscountFor.BRAND.value:
            return brand_id is not None and target == str(brand_id)
        if self.discount_for == DiscountFor.CATEGORY.value:
            return category_id is not None and target == str(category_id)
        return self.discount_for == DiscountFor.ALL.value

    def deactivate(self, deactivated_by=None):
        if not self.is_active:
            raise ValidationError({"is_active": ["Discount rule is already inactive"]})
        self.is_active = False
        self.raise_(
            DiscountRuleDeactivated(
                rule_id=str(self.id),
                shop_id=str(self.shop_id),
                deactivated_by=deactivated_by,
                deactivated_at=datetime.now(UTC),
            )
        )


@ordering.repository(part_of=DiscountRule)
class DiscountRuleRepository:
    def active_for_shop(self, shop_id) -> list[DiscountRule]:
        """Every active rule of one shop, unpaged. Expiration is evaluated by the caller."""
        return self._dao.query.filter(shop_id=str(shop_id), is_active=True).limit(None).all().items
