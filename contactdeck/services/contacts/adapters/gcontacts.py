"""
Google Contacts Adapter

Implements ContactStore for the Google People API. Authorization follows
the OAuth token file: no token means access was never requested.
"""

from pathlib import Path
import threading
from typing import Any, Dict, Iterable, List, Optional
import logging

from ..errors import PermissionDenied, QueryFailure
from ..interface import (
    AuthorizationStatus, Contact, ContactsAccount, ContactStore,
    EmailAddress, EmailType, Name, PhoneNumber, PhoneType, SortOrder
)
from contactdeck.config import GCONTACTS_TOKEN, GOOGLE_CREDENTIALS

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/contacts.readonly"]
CONTACTS_SCOPES = {
    "https://www.googleapis.com/auth/contacts.readonly",
    "https://www.googleapis.com/auth/contacts",
}

# Field mask for reading contact data
PERSON_FIELDS = "names,emailAddresses,phoneNumbers,organizations,biographies,photos"

DEFAULT_CONTAINER = "people/me"

# People API sortOrder values; NONE leaves the server default
SORT_ORDERS = {
    SortOrder.GIVEN_NAME: "FIRST_NAME_ASCENDING",
    SortOrder.FAMILY_NAME: "LAST_NAME_ASCENDING",
    SortOrder.USER_DEFAULT: "LAST_NAME_ASCENDING",
}

PAGE_SIZE = 1000
SEARCH_PAGE_SIZE = 30  # API max


class GoogleContactsStore(ContactStore):
    """Google Contacts store using People API."""

    adapter_type = "gcontacts"

    def __init__(self, account: Optional[ContactsAccount] = None, service: Any = None):
        super().__init__(account)
        config = account.config if account else {}
        self._service = service
        # httplib2 connections behind the service are not thread-safe
        self._lock = threading.Lock()

        # Get token paths from account config, with fallback to defaults
        self._token_path = Path(config.get("token_path", str(GCONTACTS_TOKEN)))
        self._credentials_path = Path(config.get("credentials_path", str(GOOGLE_CREDENTIALS)))

    # Authorization

    def _load_credentials(self):
        from google.oauth2.credentials import Credentials
        return Credentials.from_authorized_user_file(str(self._token_path))

    def _save_credentials(self, creds) -> None:
        self._token_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._token_path, 'w') as f:
            f.write(creds.to_json())

    def authorization_status(self) -> AuthorizationStatus:
        if self._service is not None:
            return AuthorizationStatus.AUTHORIZED
        if not self._token_path.exists():
            return AuthorizationStatus.NOT_DETERMINED

        try:
            creds = self._load_credentials()
        except (ValueError, OSError) as e:
            logger.warning(f"⚠️ Failed to load token file: {e}")
            return AuthorizationStatus.DENIED

        if creds.scopes and not CONTACTS_SCOPES.intersection(creds.scopes):
            return AuthorizationStatus.RESTRICTED

        if creds.expired and creds.refresh_token:
            from google.auth.exceptions import RefreshError, TransportError
            from google.auth.transport.requests import Request
            try:
                creds.refresh(Request())
            except (RefreshError, TransportError) as e:
                logger.warning(f"⚠️ Token refresh failed: {e}")
                return AuthorizationStatus.DENIED
            try:
                self._save_credentials(creds)
            except OSError as e:
                logger.warning(f"⚠️ Could not save refreshed token: {e}")
                return AuthorizationStatus.DENIED

        return AuthorizationStatus.AUTHORIZED if creds.valid else AuthorizationStatus.DENIED

    def request_access(self) -> bool:
        """Run the OAuth consent flow unless a usable token already exists."""
        status = self.authorization_status()
        if status == AuthorizationStatus.AUTHORIZED:
            return True
        if status == AuthorizationStatus.RESTRICTED:
            logger.error("❌ Token lacks a contacts scope; re-authorize with contacts access")
            return False

        if not self._credentials_path.exists():
            logger.error(f"❌ Credentials file not found: {self._credentials_path}")
            return False

        from google_auth_oauthlib.flow import InstalledAppFlow

        flow = InstalledAppFlow.from_client_secrets_file(str(self._credentials_path), SCOPES)
        creds = flow.run_local_server(port=0)
        self._save_credentials(creds)
        logger.info(f"✅ Token saved: {self._token_path}")
        return True

    def _get_service(self):
        with self._lock:
            if self._service is not None:
                return self._service

            status = self.authorization_status()
            if status != AuthorizationStatus.AUTHORIZED:
                raise PermissionDenied(f"Google Contacts access is {status.value}", status=status)

            from googleapiclient.discovery import build

            self._service = build('people', 'v1', credentials=self._load_credentials())
            logger.info("✅ Connected to Google Contacts")
            return self._service

    def _execute(self, request) -> Dict[str, Any]:
        from googleapiclient.errors import HttpError

        try:
            with self._lock:
                return request.execute()
        except HttpError as e:
            if e.resp.status in (401, 403):
                raise PermissionDenied(f"Google Contacts refused access: {e}") from e
            raise QueryFailure.wrap(e)

    # Queries

    def enumerate_contacts(self, sort_order: SortOrder = SortOrder.NONE) -> Iterable[Contact]:
        service = self._get_service()
        params = {
            'resourceName': self.default_container_identifier(),
            'pageSize': PAGE_SIZE,
            'personFields': PERSON_FIELDS,
        }
        if sort_order in SORT_ORDERS:
            params['sortOrder'] = SORT_ORDERS[sort_order]

        while True:
            results = self._execute(service.people().connections().list(**params))
            for person in results.get('connections', []):
                yield self._parse_contact(person)

            page_token = results.get('nextPageToken')
            if not page_token:
                break
            params['pageToken'] = page_token

    def contacts_matching_name(self, name: str) -> List[Contact]:
        service = self._get_service()
        results = self._execute(service.people().searchContacts(
            query=name,
            pageSize=SEARCH_PAGE_SIZE,
            readMask=PERSON_FIELDS
        ))
        return [
            self._parse_contact(result.get('person', {}))
            for result in results.get('results', [])
        ]

    def contacts_in_default_container(self) -> List[Contact]:
        return list(self.enumerate_contacts(SortOrder.NONE))

    def default_container_identifier(self) -> str:
        return DEFAULT_CONTAINER

    # Parsing

    def _parse_contact(self, person: dict) -> Contact:
        """Parse People API person into Contact object."""
        resource_name = person.get('resourceName', '')
        contact_id = resource_name.replace('people/', '') if resource_name else ''

        names = person.get('names', [])
        name = Name()
        if names:
            n = names[0]
            name = Name(
                given=n.get('givenName'),
                family=n.get('familyName'),
                middle=n.get('middleName'),
                prefix=n.get('honorificPrefix'),
                suffix=n.get('honorificSuffix'),
                display=n.get('displayName')
            )

        emails = []
        for e in person.get('emailAddresses', []):
            emails.append(EmailAddress(
                address=e.get('value', ''),
                type=self._map_email_type(e.get('type', '')),
                primary=e.get('metadata', {}).get('primary', False),
                label=e.get('formattedType')
            ))

        phones = []
        for p in person.get('phoneNumbers', []):
            phones.append(PhoneNumber(
                number=p.get('canonicalForm') or p.get('value', ''),
                type=self._map_phone_type(p.get('type', '')),
                primary=p.get('metadata', {}).get('primary', False),
                label=p.get('formattedType')
            ))

        organization = None
        orgs = person.get('organizations', [])
        if orgs:
            organization = orgs[0].get('name')

        notes = None
        bios = person.get('biographies', [])
        if bios:
            notes = bios[0].get('value')

        extra = {'etag': person.get('etag')}
        photos = person.get('photos', [])
        if photos:
            extra['photo_url'] = photos[0].get('url')

        return Contact(
            id=contact_id,
            name=name,
            phones=phones,
            emails=emails,
            organization=organization,
            notes=notes,
            extra=extra
        )

    def _map_email_type(self, type_str: str) -> EmailType:
        """Map Google type string to EmailType."""
        mapping = {
            'home': EmailType.HOME,
            'work': EmailType.WORK,
        }
        return mapping.get(type_str.lower(), EmailType.OTHER)

    def _map_phone_type(self, type_str: str) -> PhoneType:
        """Map Google type string to PhoneType."""
        mapping = {
            'mobile': PhoneType.MOBILE,
            'home': PhoneType.HOME,
            'work': PhoneType.WORK,
            'main': PhoneType.MAIN,
            'homeFax': PhoneType.FAX_HOME,
            'workFax': PhoneType.FAX_WORK,
            'pager': PhoneType.PAGER,
        }
        return mapping.get(type_str, PhoneType.OTHER)
