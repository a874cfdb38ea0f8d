import pytest

from contactdeck.services.contacts import Contact, Name, PhoneNumber
from contactdeck.services.contacts.adapters.memory import MemoryContactStore


def make_contact(contact_id, given, family=None, phone=None):
    phones = [PhoneNumber(number=phone)] if phone else []
    return Contact(id=contact_id, name=Name(given=given, family=family), phones=phones)


@pytest.fixture
def contacts():
    return [
        make_contact("id-1", "Ann", "Lee", phone="+1 (555) 010-0001"),
        make_contact("id-2", "Zoe", "Park"),
        make_contact("id-3", "ann", "Smith"),
        make_contact("id-4", "bob", "Ng"),
    ]


@pytest.fixture
def store(contacts):
    return MemoryContactStore(contacts)
