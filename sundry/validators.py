"""
Sundry Data Validators

Validation functions for emails, IP addresses and URLs. They check the **content/format** of values,
return the normalized value on success and raise ValueError on failure. Filters in the filters module
and the string predicates are built on top of them.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ipaddress
import re

from typing import Literal, Sequence
from urllib.parse import urlsplit

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type, fmt_value


# Constants ------------------------------------------------------------------------------------------------------------

_EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9](?:[a-zA-Z0-9._%+-]*[a-zA-Z0-9])?"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?)*\.[a-zA-Z]{2,}$"
)
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")
_HOST_LABEL_PATTERN = re.compile(r"^(?!-)[A-Za-z0-9_-]{1,63}(?<!-)$")

# Schemes whose URLs carry no authority part, e.g. mailto:user@example.com
_OPAQUE_SCHEMES = ("mailto", "news", "urn", "tel", "data")


# Methods --------------------------------------------------------------------------------------------------------------

def validate_email(email: str, *, strip: bool = True, lowercase: bool = True) -> str:
    """
    Validate email address format according to simplified RFC 5322 rules.

    Quoted local parts, comments, IP-literals and internationalized domains are not supported.

    Args:
        email: Email address string to validate.
        strip: If True, strip leading/trailing whitespace before validation.
        lowercase: If True, convert email to lowercase after validation.

    Returns:
        The validated email address.

    Raises:
        TypeError: If email is not a string.
        ValueError: If email is empty, exceeds length limits (254 chars total, 64 for
            local part), or has invalid format.

    Examples:
        >>> validate_email("User@example.COM")
        'user@example.com'
        >>> validate_email("invalid.email")
        Traceback (most recent call last):
            ...
        ValueError: invalid email format: missing '@' symbol: 'invalid.email'
    """
    if not isinstance(email, str):
        raise TypeError(f"email must be a string, got {fmt_type(email)}")

    if strip:
        email = email.strip()
    elif email != email.strip():
        raise ValueError(f"invalid email format: contains leading or trailing whitespace: '{email}'")

    if not email:
        raise ValueError("email cannot be empty")
    if len(email) > 254:
        raise ValueError(f"email exceeds maximum length of 254 characters (got {len(email)})")
    if "@" not in email:
        raise ValueError(f"invalid email format: missing '@' symbol: '{email}'")

    local_part, domain = email.rsplit("@", 1)
    if len(local_part) > 64:
        raise ValueError(f"email local part exceeds maximum length of 64 characters (got {len(local_part)})")
    if ".." in email:
        raise ValueError(f"invalid email format: consecutive dots: '{email}'")
    if not _EMAIL_PATTERN.match(email):
        raise ValueError(f"invalid email format: '{email}'")

    return email.lower() if lowercase else email


def validate_ip_address(
    ip: str,
    *,
    strip: bool = True,
    version: Literal[4, 6, "any"] = "any",
    leading_zeros: bool = False,
) -> str:
    """
    Validate IP address format for IPv4 and/or IPv6.

    Uses Python's `ipaddress` module for standards-compliant validation per RFC 791 (IPv4)
    and RFC 4291 (IPv6).

    Args:
        ip: IP address string to validate.
        strip: If True, strip leading/trailing whitespace before validation.
        version: Required IP version, 4, 6 or "any".
        leading_zeros: If True, allow leading zeros in IPv4 octets (e.g., '192.168.001.001').

    Returns:
        The validated IP address string in normalized form (IPv6 compressed per RFC 5952).

    Raises:
        TypeError: If ip is not a string or version is invalid.
        ValueError: If ip is empty, has invalid format, or doesn't match the required version.

    Examples:
        >>> validate_ip_address("  10.0.0.1  ")
        '10.0.0.1'
        >>> validate_ip_address("2001:0db8::0001")
        '2001:db8::1'
        >>> validate_ip_address("192.168.1")
        Traceback (most recent call last):
            ...
        ValueError: invalid IP address format: '192.168.1'
    """
    if not isinstance(ip, str):
        raise TypeError(f"IP address must be a string, got {fmt_type(ip)}")
    if version not in (4, 6, "any"):
        raise TypeError(f"version must be 4, 6, or 'any', got {fmt_value(version)}")

    if strip:
        ip = ip.strip()
    elif ip != ip.strip():
        raise ValueError(f"invalid IP address format: contains leading or trailing whitespace: '{ip}'")

    if not ip:
        raise ValueError("IP address cannot be empty")

    # IPv6 leading zeros are standard hex notation
    if "." in ip and ":" not in ip:
        parts = ip.split(".")
        if len(parts) == 4 and any(len(part) > 1 and part[0] == "0" for part in parts):
            if not leading_zeros:
                raise ValueError(f"invalid IPv4 address: leading zeros not allowed (octal ambiguity): '{ip}'")
            if all(part.isdigit() for part in parts):
                ip = ".".join(str(int(part)) for part in parts)

    try:
        ip_obj = ipaddress.ip_address(ip)
    except ValueError:
        raise ValueError(f"invalid IP address format: '{ip}'") from None

    if version != "any" and ip_obj.version != version:
        actual_version = "IPv4" if ip_obj.version == 4 else "IPv6"
        expected_version = "IPv4" if version == 4 else "IPv6"
        raise ValueError(f"IP address version mismatch: '{ip}' is {actual_version}, expected {expected_version}")

    return str(ip_obj)


def validate_url(
    url: str,
    *,
    schemes: Sequence[str] | None = None,
    require_path: bool = False,
    require_query: bool = False,
) -> str:
    """
    Validate an absolute URL.

    Hierarchical URLs need a host that is a domain name, an IPv4 address or a bracketed IPv6 address,
    plus an optional numeric port. Opaque schemes like mailto: only need a non-empty body.

    Args:
        url: URL string to validate. Whitespace anywhere in the URL is rejected.
        schemes: Permitted schemes (case-insensitive). None accepts any syntactically valid scheme.
        require_path: Require a non-empty path component.
        require_query: Require a non-empty query component.

    Returns:
        The URL unchanged.

    Raises:
        TypeError: If url is not a string.
        ValueError: If the URL is malformed or violates the requested constraints.

    Examples:
        >>> validate_url("https://example.com/docs?page=2")
        'https://example.com/docs?page=2'
        >>> validate_url("example.com")
        Traceback (most recent call last):
            ...
        ValueError: invalid URL: missing scheme: 'example.com'
    """
    if not isinstance(url, str):
        raise TypeError(f"URL must be a string, got {fmt_type(url)}")
    if not url or any(ch.isspace() for ch in url):
        raise ValueError(f"invalid URL: empty or contains whitespace: {fmt_value(url)}")

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as exc:
        raise ValueError(f"invalid URL: {exc}: '{url}'") from None

    if not parts.scheme or not _SCHEME_PATTERN.match(parts.scheme):
        raise ValueError(f"invalid URL: missing scheme: '{url}'")
    if schemes is not None and parts.scheme.lower() not in {s.lower() for s in schemes}:
        raise ValueError(f"invalid URL: scheme '{parts.scheme}' not in {sorted(schemes)}")

    if parts.scheme.lower() in _OPAQUE_SCHEMES and not parts.netloc:
        if not parts.path:
            raise ValueError(f"invalid URL: empty body: '{url}'")
    else:
        host = parts.hostname
        if not host or not _is_valid_host(host):
            raise ValueError(f"invalid URL: missing or invalid host: '{url}'")
        if port is not None and not 0 < port < 65536:
            raise ValueError(f"invalid URL: port out of range: '{url}'")

    if require_path and parts.path in ("", "/"):
        raise ValueError(f"invalid URL: path required: '{url}'")
    if require_query and not parts.query:
        raise ValueError(f"invalid URL: query required: '{url}'")

    return url


# Private Methods ------------------------------------------------------------------------------------------------------

def _is_valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass

    if len(host) > 253:
        return False
    labels = host.rstrip(".").split(".")
    if all(label.isdigit() for label in labels):
        # Numeric hosts must be real IPv4 addresses
        return False
    return all(_HOST_LABEL_PATTERN.match(label) for label in labels)
