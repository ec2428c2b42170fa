"""Catalogue adapter factory.

Selection order: CATALOGUE_SERVICE_URL (HTTP adapter), CATALOGUE_FIXTURE
(in-memory adapter seeded from JSON), else an empty in-memory adapter.
"""

import os

from ordering.catalogue.fake_catalogue import FakeCatalogue
from ordering.catalogue.port import Catalogue, ProductPricing, ShopProfile

_current_catalogue: Catalogue | None = None


def get_catalogue() -> Catalogue:
    global _current_catalogue
    if _current_catalogue is None:
        if os.getenv("CATALOGUE_SERVICE_URL"):
            from ordering.catalogue.http_catalogue import HttpCatalogue

            _current_catalogue = HttpCatalogue(
                os.environ["CATALOGUE_SERVICE_URL"],
                timeout=float(os.getenv("HTTP_TIMEOUT_SECONDS", "5")),
            )
        elif os.getenv("CATALOGUE_FIXTURE"):
            _current_catalogue = FakeCatalogue.from_fixture(os.environ["CATALOGUE_FIXTURE"])
        else:
            _current_catalogue = FakeCatalogue()
    return _current_catalogue


def set_catalogue(catalogue: Catalogue) -> None:
    global _current_catalogue
    _current_catalogue = catalogue


def reset_catalogue() -> None:
    global _current_catalogue
    _current_catalogue = None


__all__ = ["Catalogue", "ProductPricing", "ShopProfile", "get_catalogue", "reset_catalogue", "set_catalogue"]
