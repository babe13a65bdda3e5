"""
Errors raised while turning extension values into DER.

All of these are deterministic: retrying an encoding operation with the same
input will fail in exactly the same way.
"""

__all__ = [
    'ExtensionEncodingError',
    'NonASCIIError',
    'MalformedIntegerError',
    'UnrecognizedEnumerationError',
]


class ExtensionEncodingError(ValueError):
    """Signal that a value cannot be represented in DER."""
    pass


class NonASCIIError(ExtensionEncodingError):
    """A string destined for an IA5String contains non-ASCII characters."""
    pass


class MalformedIntegerError(ExtensionEncodingError):
    """
    A buffer does not hold the minimal big-endian encoding of a non-negative
    integer, or the integer itself is out of range.
    """
    pass


class UnrecognizedEnumerationError(ExtensionEncodingError):
    """A value has no corresponding code in a fixed lookup table."""
    pass
