"""In-memory catalogue adapter.

Products and shops are added with ``add_product`` / ``add_shop``, or
loaded from a JSON fixture (``CATALOGUE_FIXTURE``) shaped like::

    {"products": [{"product_id": "7", "shop_id": "s1", ...}],
     "shops": [{"shop_id": "s1", "name": "..."}],
     "reviews": [{"shop_id": "s1", "user_id": "u1"}]}
"""

import json
from pathlib import Path

from ordering.catalogue.port import Catalogue, ProductPricing, ShopProfile


class FakeCatalogue(Catalogue):
    def __init__(self):
        self.products: dict[str, ProductPricing] = {}
        self.shops: dict[str, ShopProfile] = {}
        self.reviews: set[tuple[str, str]] = set()

    @classmethod
    def from_fixture(cls, path: str | Path) -> "FakeCatalogue":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        catalogue = cls()
        for product in data.get("products", []):
            catalogue.add_product(**product)
        for shop in data.get("shops", []):
            catalogue.add_shop(**shop)
        for review in data.get("reviews", []):
            catalogue.add_review(review["shop_id"], review["user_id"])
        return catalogue

    def add_product(self, product_id, shop_id, currency_id, base_price, creator_id, **details) -> ProductPricing:
        product = ProductPricing(
            product_id=str(product_id),
            shop_id=str(shop_id),
            currency_id=str(currency_id),
            base_price=float(base_price),
            creator_id=str(creator_id),
            **details,
        )
        self.products[product.product_id] = product
        return product

    def add_shop(self, shop_id, name, phone=None, address=None) -> ShopProfile:
        shop = ShopProfile(shop_id=str(shop_id), name=name, phone=phone, address=address)
        self.shops[shop.shop_id] = shop
        return shop

    def add_review(self, shop_id, user_id):
        self.reviews.add((str(shop_id), str(user_id)))

    def get_product_pricing(self, product_id: str) -> ProductPricing | None:
        return self.products.get(str(product_id))

    def get_shop_profile(self, shop_id: str) -> ShopProfile | None:
        return self.shops.get(str(shop_id))

    def is_shop_reviewed_by(self, shop_id: str, user_id: str) -> bool:
        return (str(shop_id), str(user_id)) in self.reviews

    def reset(self):
        self.products.clear()
        self.shops.clear()
        self.reviews.clear()
