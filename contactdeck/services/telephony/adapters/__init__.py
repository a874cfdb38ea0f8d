"""Telephony adapters."""

from .static import StaticTelephony
from .system import SystemTelephony

__all__ = ["StaticTelephony", "SystemTelephony"]
