"""
Contacts Service

Permission handling, fetch, grouped fetch and search over a host contact store.
"""

from .errors import AccountError, ContactsError, PermissionDenied, QueryFailure
from .filtering import CATCH_ALL_KEY, bucket_key, group_by_alphabet, is_included
from .interface import (
    AuthorizationStatus, Configuration, Contact, ContactsAccount, ContactStore,
    EmailAddress, FetchResults, GroupedFetchResults, Name, PhoneNumber, PhoneType,
    SortOrder
)
from .manager import ContactsManager
from .query import Contacts

__all__ = [
    "AccountError", "ContactsError", "PermissionDenied", "QueryFailure",
    "CATCH_ALL_KEY", "bucket_key", "group_by_alphabet", "is_included",
    "AuthorizationStatus", "Configuration", "Contact", "ContactsAccount", "ContactStore",
    "EmailAddress", "FetchResults", "GroupedFetchResults", "Name", "PhoneNumber", "PhoneType",
    "SortOrder",
    "ContactsManager", "Contacts"
]
