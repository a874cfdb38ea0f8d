"""
Static Telephony Adapter

Fixed answers for headless hosts and tests.
"""

from typing import Iterable, List, Optional

from ..interface import TelephonyAdapter


class StaticTelephony(TelephonyAdapter):
    """Telephony adapter with preset capabilities. Records opened URLs."""

    adapter_type = "static"

    def __init__(
        self,
        schemes: Iterable[str] = (),
        network_code: Optional[str] = None,
        accept_urls: bool = True
    ):
        self.schemes = {s.lower() for s in schemes}
        self.network_code = network_code
        self.accept_urls = accept_urls
        self.opened: List[str] = []

    def can_open_url(self, url: str) -> bool:
        return url.split(":", 1)[0].lower() in self.schemes

    def mobile_network_code(self) -> Optional[str]:
        return self.network_code

    def open_url(self, url: str) -> bool:
        self.opened.append(url)
        return self.accept_urls
