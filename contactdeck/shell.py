"""
Shared command execution utilities for contactdeck.

Host probes (URL handlers, modem state) go through here so adapters share
one timeout and error policy.
"""

import shutil
import subprocess
from typing import List, Tuple
import logging

logger = logging.getLogger(__name__)


def command_available(name: str) -> bool:
    """Check if an executable is on PATH."""
    return shutil.which(name) is not None


def run_command(args: List[str], timeout: int = 10) -> Tuple[bool, str]:
    """
    Execute a command without a shell.

    Args:
        args: Program and arguments
        timeout: Timeout in seconds (default: 10)

    Returns:
        Tuple of (success, output)
    """
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"⚠️ Command timed out after {timeout}s: {args[0]}")
        return False, f"❌ Command timed out after {timeout}s"
    except OSError as e:
        logger.warning(f"⚠️ Could not run {args[0]}: {e}")
        return False, f"❌ Error: {e}"

    output = result.stdout
    if result.stderr:
        output += f"\n[stderr]\n{result.stderr}"
    if result.returncode != 0:
        output += f"\n[exit code: {result.returncode}]"

    return result.returncode == 0, output.strip()
