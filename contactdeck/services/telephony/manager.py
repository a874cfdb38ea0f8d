"""
Telephone

Capability checks and call placement on top of a TelephonyAdapter.
"""

from typing import Union
import logging

from contactdeck.services.contacts.interface import PhoneNumber
from .interface import TelephonyAdapter

logger = logging.getLogger(__name__)

CALL_URL = "tel://"
SMS_URL = "sms:"


def phone_number_digits(phone: Union[PhoneNumber, str]) -> str:
    """
    Digits of a phone number, keeping a leading "+".

    Returns "" when the number holds no digits at all.
    """
    raw = phone.number if isinstance(phone, PhoneNumber) else (phone or "")
    raw = raw.strip()
    digits = "".join(ch for ch in raw if ch.isdigit())
    if not digits:
        return ""
    return f"+{digits}" if raw.startswith("+") else digits


class Telephone:
    """Phone call and SMS capability checks."""

    def __init__(self, adapter: TelephonyAdapter):
        self.adapter = adapter

    def is_capable_to_call(self) -> bool:
        """Check if the host can place phone calls right now."""
        if not self.adapter.can_open_url(CALL_URL):
            return False
        # A dialer without a carrier (no SIM, airplane mode) cannot place the call.
        mnc = self.adapter.mobile_network_code()
        return bool(mnc)

    def is_capable_to_sms(self) -> bool:
        """Check if the host supports SMS."""
        return self.adapter.can_open_url(SMS_URL)

    def make_call(self, phone: Union[PhoneNumber, str]) -> None:
        """Make call to given number. Malformed numbers are ignored."""
        digits = phone_number_digits(phone)
        if not digits:
            logger.error("Error in Making Call")
            return

        url = f"{CALL_URL}{digits}"
        if not self.adapter.open_url(url):
            logger.warning(f"⚠️ Host did not accept {url}")
