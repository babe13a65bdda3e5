"""
Primitive helpers on top of ``asn1crypto``: minimal unsigned integers,
bit strings with an explicit unused-bit count, reason flags and
GeneralizedTime values.
"""

from datetime import datetime, timezone
from typing import Iterable, Tuple, Type, TypeVar

from asn1crypto import core, x509

from .errors import ExtensionEncodingError, MalformedIntegerError

__all__ = [
    'uint_to_be_bytes', 'unsigned_integer', 'der_uint',
    'set_bit', 'trim_bit_mask', 'bit_string', 'named_bits',
    'REASON_FLAG_BITS', 'reason_flags', 'generalized_time', 'sequence',
]

BitStringType = TypeVar('BitStringType', bound=core.BitString)
SequenceType = TypeVar('SequenceType', bound=core.Sequence)


def uint_to_be_bytes(value: int) -> bytes:
    """
    Convert a non-negative integer to big-endian bytes, suitable as the
    content octets of a DER INTEGER.

    The buffer is as short as possible, except that a leading null byte is
    added when the most significant bit of the value would otherwise be set.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedIntegerError(
            f"Expected an integer, not {type(value).__name__}."
        )
    if value < 0:
        raise MalformedIntegerError("Negative integers are not supported")
    # rounding down and adding one byte takes care of the sign bit
    return value.to_bytes(value.bit_length() // 8 + 1, 'big')


def unsigned_integer(contents: bytes) -> core.Integer:
    """
    Wrap big-endian content octets in an INTEGER, after making sure that
    they are the minimal encoding of a non-negative value.
    """
    if not contents:
        raise MalformedIntegerError("Integer encodings cannot be empty")
    if contents[0] & 0x80:
        raise MalformedIntegerError(
            "Integer encoding has its sign bit set: "
            f"{contents.hex()} is not an unsigned value"
        )
    if len(contents) > 1 and contents[0] == 0 and not contents[1] & 0x80:
        raise MalformedIntegerError(
            f"Integer encoding {contents.hex()} has redundant leading zeroes"
        )
    return core.Integer(contents=bytes(contents))


def der_uint(value: int) -> core.Integer:
    return unsigned_integer(uint_to_be_bytes(value))


def set_bit(mask: bytearray, n: int, value: bool):
    """Set bit ``n`` of ``mask``, counting from the MSB of the first byte."""
    if value:
        mask[n // 8] |= 1 << (7 - n % 8)


def trim_bit_mask(mask) -> Tuple[bytes, int]:
    """
    Apply the DER rules for named bit lists: trailing zero bytes are
    dropped, and the unused bit count is the number of trailing zero bits in
    the last remaining byte. An all-zero mask becomes an empty bit string.

    :return:
        A tuple of the content bytes and the unused bit count.
    """
    data = bytes(mask).rstrip(b'\x00')
    if not data:
        return b'', 0
    last = data[-1]
    return data, (last & -last).bit_length() - 1


def bit_string(data: bytes, unused_bits: int,
               cls: Type[BitStringType] = core.BitString) -> BitStringType:
    """
    Build a BIT STRING from its content bytes and unused bit count.
    """
    if not 0 <= unused_bits <= 7:
        raise ExtensionEncodingError(
            f"Unused bit count must be between 0 and 7, not {unused_bits}"
        )
    if not data and unused_bits:
        raise ExtensionEncodingError(
            "An empty bit string cannot have unused bits"
        )
    if data and data[-1] & ((1 << unused_bits) - 1):
        raise ExtensionEncodingError("Unused bits must be zero")
    return cls(contents=bytes([unused_bits]) + bytes(data))


def named_bits(positions: Iterable[int], size: int,
               cls: Type[BitStringType] = core.BitString) -> BitStringType:
    """
    Encode a set of bit positions as a minimal named bit list.
    """
    mask = bytearray((size + 7) // 8)
    for pos in positions:
        if not 0 <= pos < size:
            raise ExtensionEncodingError(
                f"Bit {pos} does not fit in a {size}-bit string"
            )
        set_bit(mask, pos, True)
    return bit_string(*trim_bit_mask(mask), cls=cls)


REASON_FLAG_BITS = {
    'key_compromise': 1,
    'ca_compromise': 2,
    'affiliation_changed': 3,
    'superseded': 4,
    'cessation_of_operation': 5,
    'certificate_hold': 6,
    'privilege_withdrawn': 7,
    'aa_compromise': 8,
}


def reason_flags(reasons: Iterable[str]) -> x509.ReasonFlags:
    """
    Build the ReasonFlags bit string used by distribution points and
    issuing distribution points.

    :param reasons:
        Reason names, as keys of :data:`REASON_FLAG_BITS`.
    """

    def _positions():
        for reason in reasons:
            try:
                yield REASON_FLAG_BITS[reason]
            except KeyError as e:
                raise ExtensionEncodingError(
                    f"'{reason}' cannot be used as a reason flag"
                ) from e

    return named_bits(_positions(), 9, cls=x509.ReasonFlags)


def generalized_time(dt: datetime) -> core.GeneralizedTime:
    """
    Convert a timestamp to a DER GeneralizedTime, in UTC and with whole
    seconds. Naive datetimes are taken to be in UTC already.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return core.GeneralizedTime(dt.replace(microsecond=0))


def sequence(cls: Type[SequenceType], params: dict) -> SequenceType:
    """
    Build a SEQUENCE from a dictionary of fields that may well be empty.

    asn1crypto only computes the contents of a structure when a field is
    set, so a value with all fields absent would fail to serialise.
    """
    result = cls(params)
    if result.contents is None:
        result.contents = b''
    return result
