"""Tests for schema management helpers."""

from types import SimpleNamespace

from ordering.domain import ordering
from shared.db import _register_models, rdbms_providers


def _record(name, provider="default"):
    return SimpleNamespace(cls=SimpleNamespace(__name__=name, meta_=SimpleNamespace(provider=provider)))


class _Repository:
    def __init__(self, touched, name):
        self._touched = touched
        self._name = name

    @property
    def _dao(self):
        self._touched.append(self._name)
        return object()


class TestRdbmsProviders:
    def test_memory_providers_are_skipped(self):
        assert rdbms_providers(ordering) == []

    def test_sql_providers_are_selected(self):
        domain = SimpleNamespace(
            providers={
                "default": SimpleNamespace(conn_info={"provider": "memory"}),
                "reports": SimpleNamespace(conn_info={"provider": "sqlite"}),
                "orders": SimpleNamespace(conn_info={"provider": "postgresql"}),
            }
        )

        assert [p.conn_info["provider"] for p in rdbms_providers(domain)] == ["sqlite", "postgresql"]


class TestRegisterModels:
    def test_models_of_the_provider_are_loaded(self):
        touched = []
        domain = SimpleNamespace(
            registry=SimpleNamespace(
                aggregates={"order": _record("Order"), "rule": _record("DiscountRule", provider="reports")},
                entities={"item": _record("OrderItem")},
            ),
            repository_for=lambda cls: _Repository(touched, cls.__name__),
        )

        _register_models(domain, SimpleNamespace(name="default"))

        assert touched == ["Order", "OrderItem"]
