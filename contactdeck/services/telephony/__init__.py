"""
Telephony Service

Phone call and SMS capability checks and call placement.
"""

from .interface import TelephonyAdapter
from .manager import Telephone, phone_number_digits

__all__ = ["TelephonyAdapter", "Telephone", "phone_number_digits"]
