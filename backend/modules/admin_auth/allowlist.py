"""
Static admin allow-list.

A bridge for the schema migration window: emails listed here are treated
as admins while the admin_verified column cannot be read. Remove the
entries once ADMIN_VERIFICATION_MODE=column is live.
"""

from typing import Iterable, Optional


class AdminAllowlist:
    """
    Immutable set of operator emails.

    Matching is exact and case-sensitive: "Admin@example.com" does not
    match "admin@example.com".
    """

    __slots__ = ("_emails",)

    def __init__(self, emails: Iterable[str] = ()):
        self._emails = frozenset(emails)

    def __contains__(self, email: object) -> bool:
        return isinstance(email, str) and email in self._emails

    def __len__(self) -> int:
        return len(self._emails)

    def __repr__(self) -> str:
        return f"AdminAllowlist({sorted(self._emails)!r})"

    def allows(self, email: Optional[str]) -> bool:
        """Whether the email is allow-listed. None and "" never are."""
        if not email:
            return False
        return email in self
