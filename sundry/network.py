"""
Sundry client address detection for WSGI/CGI style request environments.

Proxies and CDNs report the originating client in headers such as X-Forwarded-For. The headers listed in
ProxyConf.IP_HEADERS are tried in order; the first one holding a valid address wins, and REMOTE_ADDR is
the fallback.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ipaddress
import logging
import os

from collections.abc import Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type
from .validators import validate_ip_address

__all__ = ["IPAddress", "ProxyConf", "detect_client_address", "validate_ip_address"]

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

class ProxyConf:
    """Request environment keys that may carry the client address, in priority order."""
    # @formatter:off
    IP_HEADERS: tuple[str, ...] = (
        "HTTP_CF_CONNECTING_IP",
        "HTTP_CLIENT_IP",
        "HTTP_X_FORWARDED_FOR",
        "HTTP_X_FORWARDED",
        "HTTP_X_CLUSTER_CLIENT_IP",
        "HTTP_FORWARDED_FOR",
        "HTTP_FORWARDED",
        "HTTP_X_REAL_IP",
    )
    REMOTE_ADDR: str = "REMOTE_ADDR"
    # @formatter:on


class IPAddress(ipaddress.IPv4Address):
    """
    An IPv4 address built from the client address of a request.

    Examples:
        >>> IPAddress.detect({"HTTP_X_FORWARDED_FOR": "203.0.113.7, 10.0.0.1"})
        IPAddress('10.0.0.1')
    """

    @classmethod
    def detect(cls, environ: Mapping[str, str] | None = None) -> "IPAddress":
        """
        Detect the client address and wrap it.

        Raises:
            ValueError: If no address can be detected, or the address is not IPv4.
        """
        address = detect_client_address(environ)
        if address is None:
            raise ValueError("unable to detect the client address: no proxy header or REMOTE_ADDR")
        return cls(address)


# Methods --------------------------------------------------------------------------------------------------------------

def detect_client_address(environ: Mapping[str, str] | None = None) -> str | None:
    """
    Detect the client address from a request environment.

    Comma-separated header values (proxy chains) contribute their last entry. Headers whose entry is not
    a valid IP address are skipped.

    Args:
        environ: The WSGI environ or CGI variables; os.environ when omitted.

    Returns:
        The normalized address, REMOTE_ADDR when no header qualifies, or None when neither is present.

    Examples:
        >>> detect_client_address({"HTTP_CLIENT_IP": "junk", "HTTP_X_REAL_IP": "198.51.100.4"})
        '198.51.100.4'
        >>> detect_client_address({}) is None
        True
    """
    environ = os.environ if environ is None else environ
    if not isinstance(environ, Mapping):
        raise TypeError(f"environ must be a Mapping, got {fmt_type(environ)}")

    for header in ProxyConf.IP_HEADERS:
        raw = environ.get(header)
        if not raw:
            continue
        candidate = raw.split(",")[-1].strip()
        try:
            address = validate_ip_address(candidate)
        except ValueError:
            logger.debug("ignoring %s: invalid address %r", header, candidate)
            continue
        return address

    return environ.get(ProxyConf.REMOTE_ADDR) or None
