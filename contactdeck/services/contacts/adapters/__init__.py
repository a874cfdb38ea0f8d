"""Contact store adapters."""

from .gcontacts import GoogleContactsStore
from .memory import MemoryContactStore

ADAPTERS = {
    GoogleContactsStore.adapter_type: GoogleContactsStore,
    MemoryContactStore.adapter_type: MemoryContactStore,
}

__all__ = ["ADAPTERS", "GoogleContactsStore", "MemoryContactStore"]
