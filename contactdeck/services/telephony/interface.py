"""
Telephony Service Interface

Adapters expose the host's URL-scheme handling and cellular provider state.
"""

from abc import ABC, abstractmethod
from typing import Optional


class TelephonyAdapter(ABC):
    """Base class for host telephony adapters."""

    adapter_type: str = "base"

    @abstractmethod
    def can_open_url(self, url: str) -> bool:
        """Whether the host has a handler for the URL's scheme."""
        pass

    @abstractmethod
    def mobile_network_code(self) -> Optional[str]:
        """Mobile network code of the current cellular provider, if any."""
        pass

    @abstractmethod
    def open_url(self, url: str) -> bool:
        """Hand the URL to the host. Returns whether the host accepted it."""
        pass
