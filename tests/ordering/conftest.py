"""Ordering fixtures — a small shop with stocked products and known users.

Shop ``shop-1`` sells products 7 and 8 in currency ``mmk`` and product 10
in ``usd``; ``shop-2`` sells product 9. Every product is listed by
``seller-1`` except product 9 (``seller-2``).
"""

import pytest

from identity.principal import Role


@pytest.fixture()
def buyer(directory):
    return directory.register("buyer-1", Role.USER.value, name="Aung Aung", phone="09-111")


@pytest.fixture()
def other_buyer(directory):
    return directory.register("buyer-2", Role.USER.value, name="Su Su")


@pytest.fixture()
def admin(directory):
    return directory.register("admin-1", Role.ADMIN.value, name="Admin One")


@pytest.fixture()
def agent(directory):
    return directory.register("agent-1", Role.AGENT.value, name="Agent One", can_modify_order_status=True)


@pytest.fixture()
def restricted_agent(directory):
    return directory.register("agent-2", Role.AGENT.value, name="Agent Two")


@pytest.fixture()
def shop(catalogue, ledger):
    catalogue.add_shop("shop-1", "Golden Phones", phone="09-222", address="Yangon")
    catalogue.add_shop("shop-2", "Silver Audio", phone="09-333", address="Mandalay")
    catalogue.add_product(
        "7",
        "shop-1",
        "mmk",
        100.0,
        "seller-1",
        title="Phone X",
        brand_id="b-1",
        category_id="cat-1",
        brand_name="Acme",
        model="X1",
        currency_symbol="Ks",
    )
    catalogue.add_product(
        "8",
        "shop-1",
        "mmk",
        40.0,
        "seller-1",
        title="Phone Case",
        brand_id="b-2",
        category_id="cat-2",
        brand_name="Cover",
        model="C2",
        currency_symbol="Ks",
    )
    catalogue.add_product("9", "shop-2", "mmk", 60.0, "seller-2", title="Earbuds")
    catalogue.add_product("10", "shop-1", "usd", 15.0, "seller-1", title="Charger")

    ledger.put_stock("7", 2)
    ledger.put_stock("8", 10)
    ledger.put_stock("9", 5)
    ledger.put_stock("10", 5)
    return catalogue
