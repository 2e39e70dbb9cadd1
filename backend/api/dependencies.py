"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.admin_auth.interfaces import IAdminAuthorizer


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as
    singletons within the container. Use reset() to clear them in tests.
    """

    def __init__(self) -> None:
        self._admin_authorizer: "IAdminAuthorizer | None" = None

    @property
    def admin_auth(self) -> "IAdminAuthorizer":
        """Get the admin authorizer instance."""
        if self._admin_authorizer is None:
            from modules.admin_auth.service import create_admin_authorizer
            self._admin_authorizer = create_admin_authorizer()
        return self._admin_authorizer

    def reset(self) -> None:
        """Reset all cached services."""
        self._admin_authorizer = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_admin_authorizer() -> "IAdminAuthorizer":
    """FastAPI dependency for the admin authorizer."""
    return get_container().admin_auth
