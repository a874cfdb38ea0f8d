"""
Contacts Service Errors

Adapters raise these at the store seam. The query layer turns them into
failure results; anything else a store raises is wrapped in QueryFailure.
"""

from typing import Optional


class ContactsError(Exception):
    """Base class for contacts errors."""


class PermissionDenied(ContactsError):
    """The host contact store refused access."""

    def __init__(self, message: str = "Access to contacts was not granted", status=None):
        super().__init__(message)
        self.status = status


class QueryFailure(ContactsError):
    """An enumeration or search call against the host store failed."""

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.original = original

    @classmethod
    def wrap(cls, exc: BaseException) -> "QueryFailure":
        failure = cls(f"Contact query failed: {exc}", original=exc)
        failure.__cause__ = exc
        return failure


class AccountError(ContactsError):
    """Contacts account configuration problem."""
