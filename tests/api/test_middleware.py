"""Tests for API middleware and error envelopes."""

from product_management.api.deps import get_products
from product_management.api.products import router
from product_management.domain.exceptions import InvalidStateTransitionError
from product_management.main import app

PREFIX = router.prefix


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    async def test_generates_request_id_if_not_provided(self, client) -> None:
        """Should generate request ID if not in request headers."""
        response = await client.get("/health")
        assert response.status_code == 200
        assert "X-Request-ID" in response.headers
        # UUID format
        assert len(response.headers["X-Request-ID"]) == 36

    async def test_uses_provided_request_id(self, client) -> None:
        """Should use request ID from request headers."""
        custom_id = "custom-request-id-12345"
        response = await client.get("/health", headers={"X-Request-ID": custom_id})
        assert response.headers["X-Request-ID"] == custom_id

    async def test_malformed_request_id_is_replaced(self, client) -> None:
        """Unusable client ids are swapped for a generated one."""
        for supplied in ("x" * 200, "bad id with spaces"):
            response = await client.get("/health", headers={"X-Request-ID": supplied})
            assert response.headers["X-Request-ID"] != supplied
            assert len(response.headers["X-Request-ID"]) == 36

    async def test_error_responses_carry_request_id(self, auth_client) -> None:
        """Error responses are correlated too."""
        response = await auth_client.get(
            f"{PREFIX}/999", headers={"X-Request-ID": "missing-product"}
        )
        assert response.status_code == 400
        assert response.headers["X-Request-ID"] == "missing-product"


class TestErrorHandling:
    """Tests for the error envelopes."""

    async def test_unknown_route_uses_message_envelope(self, client) -> None:
        """Framework 404s use the same envelope."""
        response = await client.get("/nope")
        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}

    async def test_unhandled_exception_returns_500(self, auth_client) -> None:
        """Unexpected failures become a generic 500."""

        def broken_service():
            raise RuntimeError("store unavailable")

        app.dependency_overrides[get_products] = broken_service

        response = await auth_client.get(f"{PREFIX}/all")

        assert response.status_code == 500
        assert response.json() == {"message": "Server Error"}
        assert "X-Request-ID" in response.headers

    async def test_state_conflict_is_reported_as_not_found(self, auth_client) -> None:
        """A product in the wrong state surfaces as not found."""

        def conflicting_service():
            raise InvalidStateTransitionError("Product", "1", "active", "active")

        app.dependency_overrides[get_products] = conflicting_service

        response = await auth_client.get(f"{PREFIX}/all")

        assert response.status_code == 400
        assert response.json() == {"message": "Product not found"}
