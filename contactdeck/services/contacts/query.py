"""
Contacts Query Layer

Fetch, group and search contacts from an injected ContactStore. Store calls
are blocking, so each query runs in a worker thread and completes back on
the caller's event loop.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from .errors import ContactsError, QueryFailure
from .filtering import group_by_alphabet, is_included, sort_by_given_name
from .interface import (
    AuthorizationStatus, Configuration, Contact, ContactStore,
    FetchResults, GroupedFetchResults, SortOrder
)

logger = logging.getLogger(__name__)


def _as_contacts_error(exc: Exception) -> ContactsError:
    if isinstance(exc, ContactsError):
        return exc
    return QueryFailure.wrap(exc)


class Contacts:
    """Query layer over a host contact store."""

    def __init__(self, store: ContactStore, configuration: Optional[Configuration] = None):
        self.store = store
        self.configuration = configuration or Configuration.default()

    def is_included(self, contact: Contact) -> bool:
        return is_included(contact, self.configuration)

    # Access

    async def request_access(self) -> Tuple[bool, Optional[ContactsError]]:
        """
        Request access to the user's contacts.

        Returns:
            Tuple of (granted, error). Errors are returned, never raised.
        """
        try:
            granted = await asyncio.to_thread(self.store.request_access)
        except Exception as e:
            logger.error(f"❌ Contacts access request failed: {e}")
            return False, _as_contacts_error(e)
        return bool(granted), None

    async def authorization_status(self) -> AuthorizationStatus:
        """
        Current authorization status to access the contact data.

        A store that fails while checking reports DENIED.
        """
        try:
            return await asyncio.to_thread(self.store.authorization_status)
        except Exception as e:
            logger.warning(f"⚠️ Authorization status check failed: {e}")
            return AuthorizationStatus.DENIED

    # Fetch

    def _enumerate_included(self, sort_order: SortOrder) -> List[Contact]:
        return [
            contact for contact in self.store.enumerate_contacts(sort_order)
            if self.is_included(contact)
        ]

    async def fetch_contacts(self, sort_order: SortOrder = SortOrder.NONE) -> FetchResults:
        """
        Fetch every included contact in the given sort order.

        Args:
            sort_order: Order the store should enumerate in (default: NONE)
        """
        try:
            contacts = await asyncio.to_thread(self._enumerate_included, sort_order)
        except Exception as e:
            error = _as_contacts_error(e)
            logger.error(f"❌ Failed to fetch contacts: {error}")
            return FetchResults.failure(error)
        return FetchResults.success(contacts)

    def _grouped(self):
        # Grouping always enumerates by given name, whatever the caller's default.
        contacts = self.store.enumerate_contacts(SortOrder.GIVEN_NAME)
        return group_by_alphabet(contacts, self.configuration)

    async def fetch_contacts_grouped_by_alphabet(self) -> GroupedFetchResults:
        """Fetch included contacts bucketed by the first letter of the given name."""
        try:
            groups = await asyncio.to_thread(self._grouped)
        except Exception as e:
            error = _as_contacts_error(e)
            logger.error(f"❌ Failed to fetch grouped contacts: {error}")
            return GroupedFetchResults.failure(error)
        return GroupedFetchResults.success(groups)

    # Search

    def _search(self, query: str) -> List[Contact]:
        if query:
            contacts = self.store.contacts_matching_name(query)
        else:
            contacts = self.store.contacts_in_default_container()
        return sort_by_given_name(c for c in contacts if self.is_included(c))

    async def search_contact(self, query: str) -> FetchResults:
        """
        Search contacts by name.

        An empty query returns everything in the store's default container.
        Results are filtered and sorted ascending by given name.
        """
        try:
            contacts = await asyncio.to_thread(self._search, query)
        except Exception as e:
            error = _as_contacts_error(e)
            logger.error(f"❌ Contact search failed for '{query}': {error}")
            return FetchResults.failure(error)
        return FetchResults.success(contacts)
