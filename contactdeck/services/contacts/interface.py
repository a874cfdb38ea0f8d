"""
Contacts Service Interface

Core abstraction for host contact stores. Adapters implement ContactStore
to expose a platform's contacts database (Google Contacts, an in-memory
book, etc.) to the query layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from .errors import ContactsError


class PhoneType(Enum):
    """Phone number types."""
    MOBILE = "mobile"
    IPHONE = "iphone"
    HOME = "home"
    WORK = "work"
    MAIN = "main"
    FAX_HOME = "fax_home"
    FAX_WORK = "fax_work"
    PAGER = "pager"
    OTHER = "other"


class EmailType(Enum):
    """Email address types."""
    HOME = "home"
    WORK = "work"
    OTHER = "other"


class SortOrder(Enum):
    """Order in which a store enumerates contacts."""
    NONE = "none"
    USER_DEFAULT = "user_default"
    GIVEN_NAME = "given_name"
    FAMILY_NAME = "family_name"


class AuthorizationStatus(Enum):
    """Access the host granted to its contacts database."""
    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED = "authorized"


@dataclass
class Name:
    """Structured name."""
    given: Optional[str] = None
    family: Optional[str] = None
    middle: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    display: Optional[str] = None

    def __str__(self):
        if self.display:
            return self.display
        parts = [self.prefix, self.given, self.middle, self.family, self.suffix]
        return " ".join(p for p in parts if p)


@dataclass
class EmailAddress:
    """Email address."""
    address: str
    type: EmailType = EmailType.OTHER
    primary: bool = False
    label: Optional[str] = None


@dataclass
class PhoneNumber:
    """Phone number."""
    number: str
    type: PhoneType = PhoneType.OTHER
    primary: bool = False
    label: Optional[str] = None


@dataclass
class Contact:
    """A contact record, owned by the host store and only read here."""
    id: str
    name: Name = field(default_factory=Name)
    phones: List[PhoneNumber] = field(default_factory=list)
    emails: List[EmailAddress] = field(default_factory=list)
    organization: Optional[str] = None
    notes: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def given_name(self) -> str:
        return self.name.given or ""

    @property
    def family_name(self) -> str:
        return self.name.family or ""

    @property
    def display_name(self) -> str:
        """Get display name."""
        return str(self.name) or "(No name)"

    @property
    def primary_email(self) -> Optional[str]:
        """Get primary email address."""
        for email in self.emails:
            if email.primary:
                return email.address
        return self.emails[0].address if self.emails else None

    @property
    def primary_phone(self) -> Optional[str]:
        """Get primary phone number."""
        for phone in self.phones:
            if phone.primary:
                return phone.number
        return self.phones[0].number if self.phones else None


@dataclass(frozen=True)
class Configuration:
    """
    Inclusion policy applied to every fetched record.

    A record is visible when its id is not in exclude_ids and, if a filter
    is set, the filter returns True for it.
    """
    exclude_ids: FrozenSet[str] = frozenset()
    filter: Optional[Callable[[Contact], bool]] = None

    def __post_init__(self):
        # A bare string would become a set of its characters
        if isinstance(self.exclude_ids, str):
            raise TypeError("exclude_ids must be a collection of ids, not a string")
        object.__setattr__(self, "exclude_ids", frozenset(self.exclude_ids))

    @classmethod
    def default(cls) -> "Configuration":
        return cls(exclude_ids=frozenset(), filter=None)


@dataclass
class FetchResults:
    """Either a list of contacts or the error that aborted the query."""
    contacts: List[Contact] = field(default_factory=list)
    error: Optional[ContactsError] = None

    @classmethod
    def success(cls, contacts: List[Contact]) -> "FetchResults":
        return cls(contacts=list(contacts))

    @classmethod
    def failure(cls, error: ContactsError) -> "FetchResults":
        return cls(contacts=[], error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[Contact]:
        """Return the contacts or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.contacts


@dataclass
class GroupedFetchResults:
    """Either contacts bucketed by first letter or the error that aborted the query."""
    groups: Dict[str, List[Contact]] = field(default_factory=dict)
    error: Optional[ContactsError] = None

    @classmethod
    def success(cls, groups: Dict[str, List[Contact]]) -> "GroupedFetchResults":
        return cls(groups=groups)

    @classmethod
    def failure(cls, error: ContactsError) -> "GroupedFetchResults":
        return cls(groups={}, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Dict[str, List[Contact]]:
        """Return the buckets or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.groups


@dataclass
class ContactsAccount:
    """A named contacts account configuration."""
    name: str
    adapter: str
    credentials_ref: str = ""
    config: Dict[str, Any] = field(default_factory=dict)


class ContactStore(ABC):
    """
    Base class for host contact stores.

    Methods are blocking calls into the host; the query layer runs them in a
    worker thread. Raise PermissionDenied when the host refuses access; any
    other exception is reported to callers as a QueryFailure.
    """

    adapter_type: str = "base"

    def __init__(self, account: Optional[ContactsAccount] = None):
        self.account = account

    @abstractmethod
    def request_access(self) -> bool:
        """Ask the host for access to its contacts. Returns whether it was granted."""
        pass

    @abstractmethod
    def authorization_status(self) -> AuthorizationStatus:
        """Current authorization status, without prompting."""
        pass

    @abstractmethod
    def enumerate_contacts(self, sort_order: SortOrder = SortOrder.NONE) -> Iterable[Contact]:
        """Yield every contact in the store in the requested order."""
        pass

    @abstractmethod
    def contacts_matching_name(self, name: str) -> List[Contact]:
        """Contacts whose name matches, using the host's matching rules."""
        pass

    @abstractmethod
    def contacts_in_default_container(self) -> List[Contact]:
        """All contacts in the store's default container."""
        pass

    @abstractmethod
    def default_container_identifier(self) -> str:
        """Identifier of the container contacts_in_default_container reads."""
        pass
