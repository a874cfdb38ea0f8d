"""
In-Memory Contacts Adapter

Implements ContactStore over a list of contacts held in process, optionally
loaded from a JSON file. Backs the "memory" adapter type and the tests.
"""

import json
from pathlib import Path
from typing import Iterable, List, Optional
import logging

from ..errors import PermissionDenied
from ..interface import (
    AuthorizationStatus, Contact, ContactsAccount, ContactStore, EmailAddress,
    EmailType, Name, PhoneNumber, PhoneType, SortOrder
)

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER = "memory"


class MemoryContactStore(ContactStore):
    """Contact store backed by a Python list."""

    adapter_type = "memory"

    def __init__(
        self,
        contacts: Optional[Iterable[Contact]] = None,
        status: AuthorizationStatus = AuthorizationStatus.AUTHORIZED,
        account: Optional[ContactsAccount] = None
    ):
        super().__init__(account)
        self.contacts: List[Contact] = list(contacts or [])
        self.status = status

        if account:
            if account.config.get("path"):
                self.contacts.extend(self._load_file(Path(account.config["path"])))
            if account.config.get("status"):
                self.status = AuthorizationStatus(account.config["status"])

    @classmethod
    def from_json_file(cls, path: Path, status: AuthorizationStatus = AuthorizationStatus.AUTHORIZED):
        return cls(contacts=cls._load_file(path), status=status)

    @staticmethod
    def _load_file(path: Path) -> List[Contact]:
        """Load contacts from a {"contacts": [...]} JSON file."""
        data = json.loads(Path(path).read_text())
        contacts = [_parse_contact(item) for item in data.get("contacts", [])]
        logger.info(f"✅ Loaded {len(contacts)} contacts from {path}")
        return contacts

    def _check_access(self) -> None:
        if self.status != AuthorizationStatus.AUTHORIZED:
            raise PermissionDenied(status=self.status)

    def request_access(self) -> bool:
        if self.status in (AuthorizationStatus.NOT_DETERMINED, AuthorizationStatus.AUTHORIZED):
            self.status = AuthorizationStatus.AUTHORIZED
            return True
        return False

    def authorization_status(self) -> AuthorizationStatus:
        return self.status

    def enumerate_contacts(self, sort_order: SortOrder = SortOrder.NONE) -> Iterable[Contact]:
        self._check_access()
        if sort_order == SortOrder.GIVEN_NAME:
            contacts = sorted(self.contacts, key=lambda c: (c.given_name, c.family_name))
        elif sort_order in (SortOrder.FAMILY_NAME, SortOrder.USER_DEFAULT):
            contacts = sorted(self.contacts, key=lambda c: (c.family_name, c.given_name))
        else:
            contacts = list(self.contacts)
        yield from contacts

    def contacts_matching_name(self, name: str) -> List[Contact]:
        """Case-insensitive prefix match against any word of the contact's names."""
        self._check_access()
        needle = name.strip().lower()
        if not needle:
            return []
        matches = []
        for contact in self.contacts:
            words = " ".join(
                p for p in (contact.name.given, contact.name.family, contact.name.display) if p
            ).lower().split()
            if any(word.startswith(needle) for word in words):
                matches.append(contact)
        return matches

    def contacts_in_default_container(self) -> List[Contact]:
        self._check_access()
        return list(self.contacts)

    def default_container_identifier(self) -> str:
        return DEFAULT_CONTAINER


def _parse_contact(data: dict) -> Contact:
    phones = [
        PhoneNumber(
            number=p.get("number", ""),
            type=PhoneType(p.get("type", "other")),
            primary=p.get("primary", False),
            label=p.get("label")
        )
        for p in data.get("phones", [])
    ]
    emails = [
        EmailAddress(
            address=e.get("address", ""),
            type=EmailType(e.get("type", "other")),
            primary=e.get("primary", False),
            label=e.get("label")
        )
        for e in data.get("emails", [])
    ]
    return Contact(
        id=str(data["id"]),
        name=Name(
            given=data.get("given"),
            family=data.get("family"),
            middle=data.get("middle"),
            display=data.get("display")
        ),
        phones=phones,
        emails=emails,
        organization=data.get("organization"),
        notes=data.get("notes")
    )
