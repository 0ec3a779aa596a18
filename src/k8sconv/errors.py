"""Conversion exceptions.

Every failure raised by the conversion core inherits from ConversionError
so callers can handle them in one place.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base exception for conversion failures."""


class MalformedInputError(ConversionError, ValueError):
    """An input value could not be parsed.

    Raised for unparseable IP addresses, CIDRs, ports, protocols and AS
    numbers, and for manifests with the wrong shape. Never defaulted
    silently: dropping a peer or port would change which traffic is allowed.

    Example:
        raise MalformedInputError("Invalid CIDR: 10.0.0.0/33")
    """
