"""Tests for admin_auth exceptions."""

from modules.admin_auth.exceptions import (
    IdentityLookupFailed,
    MissingRequiredInput,
    SchemaCapabilityMissing,
    StoreQueryFailed,
    VerificationUpdateFailed,
)
from shared.exceptions import BackofficeError, ExternalServiceError, ValidationError


class TestVerificationUpdateFailed:
    def test_message_and_code(self):
        error = VerificationUpdateFailed("user-123", "permission denied")
        assert error.message == "Failed to update verification: permission denied"
        assert error.code == "VERIFICATION_UPDATE_FAILED"
        assert error.reason == "permission denied"
        assert error.details == {"principal_id": "user-123", "service": "profile_store"}

    def test_is_external_service_error(self):
        assert isinstance(VerificationUpdateFailed("u", "x"), ExternalServiceError)


class TestSchemaCapabilityMissing:
    def test_default_message(self):
        error = SchemaCapabilityMissing("admin_verified")
        assert error.column == "admin_verified"
        assert "admin_verified" in error.message
        assert error.code == "SCHEMA_CAPABILITY_MISSING"

    def test_keeps_store_message(self):
        error = SchemaCapabilityMissing("admin_verified", "column does not exist")
        assert error.message == "column does not exist"


class TestReadPathErrors:
    def test_store_query_failed(self):
        error = StoreQueryFailed("timeout")
        assert error.service == "profile_store"
        assert isinstance(error, BackofficeError)

    def test_identity_lookup_failed(self):
        error = IdentityLookupFailed("unreachable")
        assert error.service == "identity_store"
        assert "principal_id" not in error.details


class TestMissingRequiredInput:
    def test_is_validation_error(self):
        error = MissingRequiredInput("userId", "User ID is required")
        assert isinstance(error, ValidationError)
        assert error.to_dict()["error"] == "User ID is required"
        assert error.field == "userId"

    def test_default_message(self):
        assert MissingRequiredInput("userId").message == "userId is required"
