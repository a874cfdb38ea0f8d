"""
System Telephony Adapter

Probes the desktop host: xdg-mime / xdg-open on Linux, open on macOS, and
ModemManager (mmcli) for the cellular operator.
"""

import re
import sys
from typing import Optional
import logging

from contactdeck import shell
from ..interface import TelephonyAdapter

logger = logging.getLogger(__name__)

# macOS ships FaceTime and Messages as handlers for these
DARWIN_SCHEMES = {"tel", "sms", "facetime"}

MODEM_PATH = re.compile(r"/Modem/(\d+)")
OPERATOR_CODE = re.compile(r"^modem\.3gpp\.operator-code\s*:\s*(\S+)\s*$", re.MULTILINE)
MCC_LENGTH = 3


def _scheme(url: str) -> str:
    return url.split(":", 1)[0].lower()


class SystemTelephony(TelephonyAdapter):
    """Telephony probes for Linux and macOS desktops."""

    adapter_type = "system"

    def __init__(self, platform: Optional[str] = None):
        self.platform = platform or sys.platform

    def can_open_url(self, url: str) -> bool:
        scheme = _scheme(url)
        if self.platform == "darwin":
            return scheme in DARWIN_SCHEMES

        if not shell.command_available("xdg-mime"):
            return False
        success, output = shell.run_command(
            ["xdg-mime", "query", "default", f"x-scheme-handler/{scheme}"]
        )
        return success and bool(output)

    def mobile_network_code(self) -> Optional[str]:
        if not shell.command_available("mmcli"):
            return None

        success, output = shell.run_command(["mmcli", "-L"])
        if not success:
            return None
        match = MODEM_PATH.search(output)
        if not match:
            logger.info("No modem found")
            return None

        success, output = shell.run_command(["mmcli", "-m", match.group(1), "--output-keyvalue"])
        if not success:
            return None
        match = OPERATOR_CODE.search(output)
        if not match:
            return None

        # Operator code is MCC followed by MNC; "--" means unregistered
        operator_code = match.group(1)
        if not operator_code.isdigit() or len(operator_code) <= MCC_LENGTH:
            return None
        return operator_code[MCC_LENGTH:]

    def open_url(self, url: str) -> bool:
        opener = "open" if self.platform == "darwin" else "xdg-open"
        if not shell.command_available(opener):
            logger.error(f"❌ {opener} not available")
            return False
        success, output = shell.run_command([opener, url])
        if not success:
            logger.error(f"❌ Failed to open {url}: {output}")
        return success
