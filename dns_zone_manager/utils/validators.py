"""
Validators - Input validation and name handling for DNS records

This module provides validation functions for record names, types and TTLs,
and the name qualification rule that turns user-supplied names into
fully-qualified, dot-terminated owner names.
"""

import ipaddress
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"^(\*|_?[a-zA-Z0-9]([a-zA-Z0-9_-]*[a-zA-Z0-9])?)$")
_TYPE_RE = re.compile(r"^[A-Za-z0-9]+$")


def qualify_name(name: Optional[str], origin: str) -> str:
    """
    Qualify a record name against a zone apex.

    Args:
        name: The user-supplied name (relative, absolute, "@", or empty)
        origin: The zone apex, trailing-dot terminated

    Returns:
        The fully-qualified name, always ending in "."
    """
    name = (name or "").strip()
    if name in ("", "@"):
        return origin

    if name.endswith("."):
        return name

    if is_ip_address(name):
        return name

    apex = origin.rstrip(".")
    if name == apex or name.endswith("." + apex):
        return name + "."

    return f"{name.rstrip('.')}.{origin}"


def is_ip_address(value: str) -> bool:
    """Check whether a value is an IPv4 or IPv6 literal."""
    try:
        ipaddress.ip_address(value)
        return True
    except ValueError:
        return False


def validate_fqdn(fqdn: str) -> bool:
    """
    Validate a fully-qualified, dot-terminated domain name.

    Args:
        fqdn: The FQDN to validate

    Returns:
        True if valid, False otherwise
    """
    if not fqdn or not isinstance(fqdn, str):
        return False

    if not fqdn.endswith("."):
        logger.warning(f"FQDN is not dot-terminated: {fqdn}")
        return False

    if len(fqdn) > 254:
        logger.warning(f"FQDN too long: {fqdn}")
        return False

    labels = fqdn[:-1].split(".")
    if any(label == "" for label in labels):
        logger.warning(f"FQDN contains empty labels: {fqdn}")
        return False

    for label in labels:
        if len(label) > 63 or not _LABEL_RE.match(label):
            logger.warning(f"Invalid label '{label}' in FQDN: {fqdn}")
            return False

    return True


def validate_zone_dns(dns: str) -> bool:
    """Validate a zone apex such as ``example.com.``."""
    if not validate_fqdn(dns):
        return False
    return not is_ip_address(dns[:-1])


def validate_ttl(ttl) -> bool:
    """TTLs are non-negative integer seconds."""
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        return False
    return ttl >= 0


def validate_record_type(record_type: str) -> bool:
    """Record types are opaque tags; only their shape is checked."""
    if not record_type or not isinstance(record_type, str):
        return False
    return bool(_TYPE_RE.match(record_type))
