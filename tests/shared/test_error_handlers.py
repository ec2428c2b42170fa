"""Tests for the HTTP rendering of domain errors."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.exceptions import ObjectNotFoundError, ValidationError

from inventory.ledger import InsufficientStock
from shared.error_handlers import register_error_handlers
from shared.errors import Conflict, MarketplaceError, NotFound, Unauthenticated, Unauthorized


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/raise/{kind}")
    async def raise_error(kind: str):
        errors = {
            "bad": MarketplaceError("Bad request"),
            "auth": Unauthenticated("Invalid token"),
            "forbidden": Unauthorized("Unauthorized!"),
            "missing": NotFound("Nothing here"),
            "stock": InsufficientStock(product_id="7", requested=2),
            "validation": ValidationError({"quantity": ["must be positive"]}),
            "protean-missing": ObjectNotFoundError("Order with id x not found"),
        }
        raise errors[kind]

    return TestClient(app)


class TestErrorTaxonomy:
    def test_error_codes(self):
        assert MarketplaceError().status_code == 400
        assert Unauthenticated().status_code == 401
        assert Unauthorized().status_code == 403
        assert NotFound().status_code == 404
        assert Conflict().status_code == 409

    def test_default_message_is_class_name(self):
        assert Conflict().to_dict() == {"error": "Conflict", "code": "Conflict"}


class TestErrorHandlers:
    @pytest.mark.parametrize(
        "kind, status_code, code",
        [
            ("bad", 400, "MarketplaceError"),
            ("auth", 401, "Unauthenticated"),
            ("forbidden", 403, "Unauthorized"),
            ("missing", 404, "NotFound"),
            ("stock", 409, "InsufficientStock"),
        ],
    )
    def test_marketplace_errors(self, client, kind, status_code, code):
        response = client.get(f"/raise/{kind}")

        assert response.status_code == status_code
        assert response.json()["code"] == code

    def test_validation_error_keeps_field_messages(self, client):
        response = client.get("/raise/validation")

        assert response.status_code == 400
        assert response.json() == {"error": {"quantity": ["must be positive"]}, "code": "ValidationError"}

    def test_protean_not_found(self, client):
        response = client.get("/raise/protean-missing")

        assert response.status_code == 404
        assert response.json()["code"] == "NotFound"
