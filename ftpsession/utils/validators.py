"""Input validators for ftpsession.

Provides validation functions for FTP connection parameters.
"""

import re
from typing import Optional, Tuple


# IPv4 address pattern
IPV4_PATTERN = re.compile(
    r'^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}'
    r'(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$'
)

# Hostname pattern (simplified)
HOSTNAME_PATTERN = re.compile(
    r'^(?=.{1,253}$)(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.[A-Za-z0-9-]{1,63})*$'
)


def validate_host(host: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a host (IPv4 address or hostname).

    Args:
        host: Host string to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not host or not host.strip():
        return False, "Host is required"

    host = host.strip()

    if IPV4_PATTERN.match(host) or HOSTNAME_PATTERN.match(host):
        return True, None

    return False, f"Invalid host format: {host}"


def validate_port(port: int) -> Tuple[bool, Optional[str]]:
    """
    Validate a TCP port number.

    Args:
        port: Port number to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(port, bool) or not isinstance(port, int):
        return False, f"Port must be an integer, got {port!r}"

    if not 1 <= port <= 65535:
        return False, f"Port must be between 1 and 65535, got {port}"

    return True, None
