"""Host machine information.

The computer name appears in crash reports and ByHost preference files
("Jane’s MacBook Pro" -> "janes-macbook-pro"), so it is read once by the
calling layer and handed to the matcher as a plain string.
"""

import logging
import subprocess

from .constants import TIMEOUT_SYSTEM_QUICK

logger = logging.getLogger(__name__)

SCUTIL_PATH = "/usr/sbin/scutil"


def get_computer_name() -> str:
    """Read the machine's display name with scutil.

    Returns:
        The computer name, or "" if it cannot be determined (not macOS,
        scutil missing, timeout)
    """
    try:
        result = subprocess.run(
            [SCUTIL_PATH, "--get", "ComputerName"],
            capture_output=True,
            text=True,
            timeout=TIMEOUT_SYSTEM_QUICK,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
        logger.debug("Could not read computer name: %s", e)
        return ""

    if result.returncode != 0:
        logger.debug("scutil exited with %d: %s", result.returncode, result.stderr.strip())
        return ""

    return result.stdout.strip()
