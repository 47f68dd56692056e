"""Tests for custom exception hierarchy."""

from mhimmo.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    EntityNotFoundError,
    InvalidEntityStateError,
    MhImmoError,
    ReferentialIntegrityError,
    StorageError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_base_is_exception(self) -> None:
        assert isinstance(MhImmoError("test"), Exception)

    def test_referential_integrity_is_entity_not_found(self) -> None:
        err = ReferentialIntegrityError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, MhImmoError)

    def test_all_derive_from_base(self) -> None:
        for cls in (
            AuthenticationError,
            AuthorizationError,
            ConfigurationError,
            InvalidEntityStateError,
            StorageError,
            ValidationError,
        ):
            assert isinstance(cls("test"), MhImmoError)

    def test_exception_message(self) -> None:
        err = ReferentialIntegrityError("Property prop-9 not found")
        assert str(err) == "Property prop-9 not found"
        assert err.message == "Property prop-9 not found"


class TestHttpMapping:
    """Test status codes and response bodies."""

    def test_status_codes(self) -> None:
        assert EntityNotFoundError.http_status == 404
        assert ReferentialIntegrityError.http_status == 404
        assert InvalidEntityStateError.http_status == 409
        assert AuthenticationError.http_status == 401
        assert AuthorizationError.http_status == 403
        assert ValidationError.http_status == 400
        assert StorageError.http_status == 500

    def test_to_response(self) -> None:
        body = InvalidEntityStateError("Property prop-1 already has an active contract").to_response()
        assert body == {
            "error": {
                "code": "invalid_state",
                "message": "Property prop-1 already has an active contract",
            }
        }
