"""Compact integer encodings (MBN) and tag-length-value packing.

MBN ("multi-byte number") stores 7 bits per byte, most significant chunk
first; the high bit of each byte is the continuation flag. Signed numbers
use bit 0x40 of the first byte as the sign bit. All numbers are limited to
64 bits.

TLV entries are encoded as an unsigned MBN tag (non-zero, at most INT_MAX),
an unsigned MBN length and that many bytes of data.
"""

from __future__ import annotations

from itertools import takewhile
from typing import Dict, Iterable, Optional, Tuple

__all__ = [
    "DataPackError",
    "DuplicateTagError",
    "UnknownTagError",
    "signed_mbn_size",
    "signed_mbn_encode",
    "signed_mbn_decode",
    "signed_mbn_decode_exact",
    "unsigned_mbn_size",
    "unsigned_mbn_encode",
    "unsigned_mbn_decode",
    "unsigned_mbn_decode_exact",
    "tlv_size",
    "tlv_encode",
    "tlv_decode",
    "tlvs_decode",
]

_MAX_BITS = 64
_UINT64_MASK = (1 << 64) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_INT_MAX = (1 << 31) - 1
# Only this many tags from the list passed to tlvs_decode are considered.
_MAX_TAGS = 31


class DataPackError(ValueError):
    """The input does not hold a valid encoding."""


class DuplicateTagError(DataPackError):
    """A known tag occurs more than once in a TLV sequence."""

    def __init__(self, tag: int) -> None:
        super().__init__(f"duplicate tag {tag}")
        self.tag = tag


class UnknownTagError(DataPackError):
    """A TLV sequence holds a tag that was not asked for."""

    def __init__(self, tag: int) -> None:
        super().__init__(f"unknown tag {tag}")
        self.tag = tag


def _to_int64(value: int) -> int:
    value &= _UINT64_MASK
    return value - (1 << 64) if value & (1 << 63) else value


def _check_int64(value: int) -> None:
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise OverflowError(f"{value} does not fit into a signed 64-bit integer")


def _check_uint64(value: int) -> None:
    if not 0 <= value <= _UINT64_MASK:
        raise OverflowError(f"{value} does not fit into an unsigned 64-bit integer")


def _check_size(size: int) -> None:
    if size < 1:
        raise ValueError(f"invalid encoding size {size}")


def _encode_chunks(value: int, size: int) -> bytes:
    """Write the low ``size`` 7-bit chunks of ``value``, most significant first."""
    out = bytearray(size)
    out[-1] = value & 0x7F
    for pos in range(size - 2, -1, -1):
        value >>= 7
        out[pos] = (value & 0x7F) | 0x80
    return bytes(out)


def _read_chunks(data, offset: int) -> Tuple[int, int, int, int]:
    """Read a multi-byte sequence whose first byte has the continuation bit.

    Returns (value, nbits, msc, consumed) where nbits counts the bits of all
    bytes but the last one.
    """
    end = len(data)
    last = msc = data[offset]
    nbits = 7
    off = 1
    value = last & 0x7F
    while offset + off < end:
        last = data[offset + off]
        off += 1
        if not last & 0x80:
            break
        value = (value << 7) | (last & 0x7F)
        if nbits + 7 <= _MAX_BITS:
            nbits += 7
        else:
            raise DataPackError("too many bytes in a number")
    if last & 0x80:
        raise DataPackError("truncated number")
    value = ((value << 7) | last) & _UINT64_MASK
    return value, nbits, msc, off


def signed_mbn_size(value: int) -> int:
    """Number of bytes the signed encoding of ``value`` takes."""
    _check_int64(value)
    n = 1
    msc = value & 0x7F
    value >>= 7
    if value < 0:
        while value != -1:
            msc = value & 0x7F
            value >>= 7
            n += 1
        if not msc & 0x40:
            n += 1
    else:
        while value:
            msc = value & 0x7F
            value >>= 7
            n += 1
        if msc & 0x40:
            n += 1
    return n


def signed_mbn_encode(value: int, size: Optional[int] = None) -> bytes:
    """Encode a signed 64-bit integer, optionally padded to ``size`` bytes."""
    _check_int64(value)
    if size is None:
        size = signed_mbn_size(value)
    _check_size(size)
    return _encode_chunks(value, size)


def signed_mbn_decode(data, offset: int = 0) -> Tuple[int, int]:
    """Decode a signed number at ``offset``; return (value, next offset)."""
    if offset < 0 or offset >= len(data):
        raise DataPackError("no data to decode")
    first = data[offset]
    if not first & 0x80:
        value = first - 0x80 if first & 0x40 else first
        return value, offset + 1
    value, nbits, msc, off = _read_chunks(data, offset)
    if msc & 0x40:
        if nbits + 7 < _MAX_BITS:
            return value | ~((1 << (nbits + 7)) - 1), offset + off
        if (msc | ((1 << (_MAX_BITS - nbits)) - 1)) == 0xFF:
            return _to_int64(value), offset + off
    elif nbits + 7 < _MAX_BITS or (msc & ~((1 << (_MAX_BITS - nbits)) - 1)) == 0x80:
        return _to_int64(value), offset + off
    raise DataPackError("broken number encoding")


def signed_mbn_decode_exact(data) -> int:
    """Decode ``data`` that holds exactly one signed number and nothing else."""
    if not data:
        raise DataPackError("no data to decode")
    value, end = signed_mbn_decode(data)
    if end != len(data):
        raise DataPackError("trailing data after the number")
    return value


def unsigned_mbn_size(value: int) -> int:
    """Number of bytes the unsigned encoding of ``value`` takes."""
    _check_uint64(value)
    n = 1
    value >>= 7
    while value:
        value >>= 7
        n += 1
    return n


def unsigned_mbn_encode(value: int, size: Optional[int] = None) -> bytes:
    """Encode an unsigned 64-bit integer, optionally padded to ``size`` bytes."""
    _check_uint64(value)
    if size is None:
        size = unsigned_mbn_size(value)
    _check_size(size)
    return _encode_chunks(value, size)


def unsigned_mbn_decode(data, offset: int = 0) -> Tuple[int, int]:
    """Decode an unsigned number at ``offset``; return (value, next offset)."""
    if offset < 0 or offset >= len(data):
        raise DataPackError("no data to decode")
    first = data[offset]
    if not first & 0x80:
        return first, offset + 1
    value, nbits, msc, off = _read_chunks(data, offset)
    if nbits + 7 < _MAX_BITS or (msc & ~((1 << (_MAX_BITS - nbits)) - 1)) == 0x80:
        return value, offset + off
    raise DataPackError("broken number encoding")


def unsigned_mbn_decode_exact(data) -> int:
    """Decode ``data`` that holds exactly one unsigned number and nothing else."""
    if not data:
        raise DataPackError("no data to decode")
    value, end = unsigned_mbn_decode(data)
    if end != len(data):
        raise DataPackError("trailing data after the number")
    return value


def tlv_size(tag: int, length: int) -> int:
    """Number of bytes a TLV entry with ``length`` bytes of data takes."""
    return unsigned_mbn_size(tag) + unsigned_mbn_size(length) + length


def tlv_encode(tag: int, value: bytes = b"") -> bytes:
    """Encode one TLV entry."""
    value = bytes(value)
    return unsigned_mbn_encode(tag) + unsigned_mbn_encode(len(value)) + value


def tlv_decode(data, offset: int = 0) -> Tuple[int, bytes, int]:
    """Decode one TLV entry at ``offset``; return (tag, value, next offset)."""
    tag, pos = unsigned_mbn_decode(data, offset)
    if tag > _INT_MAX:
        raise DataPackError(f"tag {tag} is too large")
    length, pos = unsigned_mbn_decode(data, pos)
    if len(data) - pos < length:
        raise DataPackError("truncated TLV value")
    end = pos + length
    return tag, bytes(data[pos:end]), end


def tlvs_decode(
    data, tags: Iterable[int], skip_unknown: bool = False
) -> Dict[int, bytes]:
    """Decode a sequence of TLV entries and return the known ones by tag.

    Only the first 31 tags (up to the first zero) are recognised. Unknown
    tags raise ``UnknownTagError`` unless ``skip_unknown`` is set; a known
    tag seen twice raises ``DuplicateTagError``. An entry with tag zero ends
    the sequence.
    """
    known = list(takewhile(bool, tags))[:_MAX_TAGS]
    result: Dict[int, bytes] = {}
    offset = 0
    while offset < len(data):
        tag, value, offset = tlv_decode(data, offset)
        if not tag:
            break
        if tag in known:
            if tag in result:
                raise DuplicateTagError(tag)
            result[tag] = value
        elif not skip_unknown:
            raise UnknownTagError(tag)
    if offset != len(data):
        raise DataPackError("garbage after the last TLV entry")
    return result