"""
Admin authorization module exceptions.

Read-path exceptions are recovered inside AdminAuthorizer by failing
closed. VerificationUpdateFailed and MissingRequiredInput reach the API
error handlers.
"""

from shared.exceptions import ExternalServiceError, ValidationError


class SchemaCapabilityMissing(ExternalServiceError):
    """Raised when the profile table lacks an expected column."""

    def __init__(self, column: str, message: str = ""):
        super().__init__(
            message or f"Column not available: {column}",
            service="profile_store",
            code="SCHEMA_CAPABILITY_MISSING",
            details={"column": column},
        )
        self.column = column


class StoreQueryFailed(ExternalServiceError):
    """Raised when a profile store query fails for any other reason."""

    def __init__(self, message: str):
        super().__init__(message, service="profile_store", code="STORE_QUERY_FAILED")


class IdentityLookupFailed(ExternalServiceError):
    """Raised when Supabase Auth cannot resolve a principal."""

    def __init__(self, message: str, principal_id: str = ""):
        super().__init__(
            message,
            service="identity_store",
            code="IDENTITY_LOOKUP_FAILED",
            details={"principal_id": principal_id} if principal_id else None,
        )


class VerificationUpdateFailed(ExternalServiceError):
    """Raised when granting or revoking admin verification fails."""

    def __init__(self, principal_id: str, message: str):
        super().__init__(
            f"Failed to update verification: {message}",
            service="profile_store",
            code="VERIFICATION_UPDATE_FAILED",
            details={"principal_id": principal_id},
        )
        self.principal_id = principal_id
        self.reason = message


class MissingRequiredInput(ValidationError):
    """Raised when a required request field is absent or empty."""

    def __init__(self, field: str, message: str = ""):
        super().__init__(
            message or f"{field} is required",
            code="MISSING_REQUIRED_INPUT",
            details={"field": field},
        )
        self.field = field
