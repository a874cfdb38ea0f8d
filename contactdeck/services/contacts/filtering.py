"""
Inclusion filter and alphabetic grouping for fetched contacts.
"""

import string
from typing import Dict, Iterable, List

from .interface import Configuration, Contact

CATCH_ALL_KEY = "#"


def is_included(contact: Contact, configuration: Configuration) -> bool:
    """Check if a contact should be added to query results."""
    if contact.id in configuration.exclude_ids:
        return False
    if configuration.filter is not None:
        return bool(configuration.filter(contact))
    return True


def bucket_key(given_name: str) -> str:
    """
    Bucket for a given name: its uppercased first letter, or "#".

    Names shorter than two characters always land in "#", as do names that
    do not start with an ASCII letter.
    """
    if len(given_name) < 2:
        return CATCH_ALL_KEY
    first = given_name[0]
    if first not in string.ascii_letters:
        return CATCH_ALL_KEY
    return first.upper()


def group_by_alphabet(
    contacts: Iterable[Contact],
    configuration: Configuration
) -> Dict[str, List[Contact]]:
    """Group included contacts by bucket key, keeping input order in each bucket."""
    groups: Dict[str, List[Contact]] = {}
    for contact in contacts:
        if not is_included(contact, configuration):
            continue
        groups.setdefault(bucket_key(contact.given_name), []).append(contact)
    return groups


def sort_by_given_name(contacts: Iterable[Contact]) -> List[Contact]:
    return sorted(contacts, key=lambda c: c.given_name)
