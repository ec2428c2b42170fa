"""Catalogue service adapter over HTTP.

Endpoints used::

    GET {base}/products/<id>/pricing       -> {"data": {...ProductPricing fields}}
    GET {base}/shops/<id>                  -> {"data": {"id", "name", "phone", "address"}}
    GET {base}/shops/<id>/reviews?user_id= -> {"data": [...]}
"""

import requests

from ordering.catalogue.port import Catalogue, ProductPricing, ShopProfile

_PRICING_FIELDS = set(ProductPricing.__dataclass_fields__)


class HttpCatalogue(Catalogue):
    def __init__(self, base_url: str, timeout: float = 5.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str, **params):
        response = requests.get(f"{self.base_url}{path}", params=params or None, timeout=self.timeout)
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json().get("data")

    def get_product_pricing(self, product_id: str) -> ProductPricing | None:
        data = self._get(f"/products/{product_id}/pricing")
        if data is None:
            return None
        fields = {k: v for k, v in data.items() if k in _PRICING_FIELDS}
        fields["product_id"] = str(product_id)
        fields["base_price"] = float(fields["base_price"])
        return ProductPricing(**fields)

    def get_shop_profile(self, shop_id: str) -> ShopProfile | None:
        data = self._get(f"/shops/{shop_id}")
        if data is None:
            return None
        return ShopProfile(
            shop_id=str(data.get("id", shop_id)),
            name=data.get("name") or "",
            phone=data.get("phone"),
            address=data.get("address"),
        )

    def is_shop_reviewed_by(self, shop_id: str, user_id: str) -> bool:
        data = self._get(f"/shops/{shop_id}/reviews", user_id=user_id)
        return bool(data)
