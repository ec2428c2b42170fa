"""Catalogue port — read-only product and shop facts needed at order time."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductPricing:
    """Product facts frozen into an order line at admission."""

    product_id: str
    shop_id: str
    currency_id: str
    base_price: float
    creator_id: str
    title: str = ""
    brand_id: str | None = None
    category_id: str | None = None
    brand_name: str = ""
    model: str = ""
    currency_symbol: str = ""


@dataclass(frozen=True)
class ShopProfile:
    shop_id: str
    name: str
    phone: str | None = None
    address: str | None = None


class Catalogue(ABC):
    @abstractmethod
    def get_product_pricing(self, product_id: str) -> ProductPricing | None:
        ...

    @abstractmethod
    def get_shop_profile(self, shop_id: str) -> ShopProfile | None:
        ...

    @abstractmethod
    def is_shop_reviewed_by(self, shop_id: str, user_id: str) -> bool:
        """Whether the user has already left a review for the shop."""
        ...
