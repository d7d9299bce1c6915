import pytest

from glibutil.datapack import (
    DataPackError,
    DuplicateTagError,
    UnknownTagError,
    signed_mbn_decode,
    signed_mbn_decode_exact,
    signed_mbn_encode,
    signed_mbn_size,
    tlv_decode,
    tlv_encode,
    tlv_size,
    tlvs_decode,
    unsigned_mbn_decode,
    unsigned_mbn_decode_exact,
    unsigned_mbn_encode,
    unsigned_mbn_size,
)

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1


@pytest.mark.parametrize(
    "value, encoded",
    [
        (33, b"\x21"),
        (-33, b"\x5f"),
        (65, b"\x80\x41"),
        (-65, b"\xff\x3f"),
        (129, b"\x81\x01"),
        (-129, b"\xfe\x7f"),
    ],
)
def test_signed_examples(value, encoded):
    assert signed_mbn_encode(value) == encoded
    assert signed_mbn_size(value) == len(encoded)
    assert signed_mbn_decode_exact(encoded) == value


@pytest.mark.parametrize(
    "value, encoded",
    [(33, b"\x21"), (65, b"\x41"), (129, b"\x81\x01")],
)
def test_unsigned_examples(value, encoded):
    assert unsigned_mbn_encode(value) == encoded
    assert unsigned_mbn_size(value) == len(encoded)
    assert unsigned_mbn_decode_exact(encoded) == value


@pytest.mark.parametrize(
    "value",
    [0, 1, -1, 63, 64, -64, -65, 127, 128, 8191, 8192, -8193,
     1 << 40, -(1 << 40), INT64_MIN, INT64_MAX, INT64_MIN + 1, INT64_MAX - 1],
)
def test_signed_round_trip(value):
    encoded = signed_mbn_encode(value)
    assert len(encoded) == signed_mbn_size(value)
    assert signed_mbn_decode(encoded) == (value, len(encoded))


@pytest.mark.parametrize(
    "value", [0, 1, 127, 128, 16383, 16384, 1 << 56, INT64_MAX, UINT64_MAX]
)
def test_unsigned_round_trip(value):
    encoded = unsigned_mbn_encode(value)
    assert len(encoded) == unsigned_mbn_size(value)
    assert unsigned_mbn_decode(encoded) == (value, len(encoded))


def test_extreme_sizes():
    assert signed_mbn_size(INT64_MIN) == 10
    assert signed_mbn_size(INT64_MAX) == 10
    assert unsigned_mbn_size(UINT64_MAX) == 10


@pytest.mark.parametrize("value", [-129, -1, 0, 5, 129])
def test_signed_padded_round_trip(value):
    encoded = signed_mbn_encode(value, 6)
    assert len(encoded) == 6
    assert signed_mbn_decode_exact(encoded) == value


@pytest.mark.parametrize("value", [0, 5, 129])
def test_unsigned_padded_round_trip(value):
    encoded = unsigned_mbn_encode(value, 5)
    assert len(encoded) == 5
    assert unsigned_mbn_decode_exact(encoded) == value


def test_decode_advances_offset():
    data = signed_mbn_encode(129) + signed_mbn_encode(-33)
    value, pos = signed_mbn_decode(data, 0)
    assert (value, pos) == (129, 2)
    assert signed_mbn_decode(data, pos) == (-33, 3)

    data = unsigned_mbn_encode(129) + unsigned_mbn_encode(33)
    value, pos = unsigned_mbn_decode(data)
    assert unsigned_mbn_decode(data, pos) == (33, len(data))


@pytest.mark.parametrize("decode", [signed_mbn_decode, unsigned_mbn_decode])
@pytest.mark.parametrize(
    "data",
    [b"", b"\x80", b"\x81\x82", b"\x80" * 10 + b"\x00"],
)
def test_decode_broken(decode, data):
    with pytest.raises(DataPackError):
        decode(data)


def test_decode_offset_past_end():
    with pytest.raises(DataPackError):
        unsigned_mbn_decode(b"\x01", 1)
    with pytest.raises(DataPackError):
        signed_mbn_decode(b"\x01", 1)


def test_unsigned_unused_bits_must_be_zero():
    assert unsigned_mbn_decode_exact(b"\x81" + b"\x80" * 8 + b"\x00") >= 1 << 63
    with pytest.raises(DataPackError):
        unsigned_mbn_decode(b"\x82" + b"\x80" * 8 + b"\x00")


def test_signed_unused_bits_must_match_sign():
    with pytest.raises(DataPackError):
        signed_mbn_decode(b"\xc0" + b"\x80" * 8 + b"\x00")
    with pytest.raises(DataPackError):
        signed_mbn_decode(b"\x82" + b"\x80" * 8 + b"\x00")


@pytest.mark.parametrize(
    "decode", [signed_mbn_decode_exact, unsigned_mbn_decode_exact]
)
def test_decode_exact_rejects_trailing_and_empty(decode):
    with pytest.raises(DataPackError):
        decode(b"\x21\x00")
    with pytest.raises(DataPackError):
        decode(b"")


def test_out_of_range_values():
    with pytest.raises(OverflowError):
        signed_mbn_encode(INT64_MAX + 1)
    with pytest.raises(OverflowError):
        signed_mbn_size(INT64_MIN - 1)
    with pytest.raises(OverflowError):
        unsigned_mbn_encode(-1)
    with pytest.raises(OverflowError):
        unsigned_mbn_size(UINT64_MAX + 1)


def test_invalid_size():
    with pytest.raises(ValueError):
        signed_mbn_encode(1, 0)
    with pytest.raises(ValueError):
        unsigned_mbn_encode(1, 0)


def test_tlv_empty_value():
    encoded = tlv_encode(5)
    assert encoded == b"\x05\x00"
    assert tlv_size(5, 0) == len(encoded)
    assert tlv_decode(encoded) == (5, b"", 2)


@pytest.mark.parametrize(
    "tag, value", [(1, b"abc"), (200, b"x" * 300), (2**31 - 1, b"\x00")]
)
def test_tlv_round_trip(tag, value):
    encoded = tlv_encode(tag, value)
    assert len(encoded) == tlv_size(tag, len(value))
    assert tlv_decode(encoded) == (tag, value, len(encoded))


def test_tlv_decode_with_offset():
    data = tlv_encode(1, b"a") + tlv_encode(2, b"bc")
    tag, value, pos = tlv_decode(data)
    assert (tag, value) == (1, b"a")
    assert tlv_decode(data, pos) == (2, b"bc", len(data))


def test_tlv_decode_errors():
    with pytest.raises(DataPackError):
        tlv_decode(tlv_encode(1, b"abc")[:-1])
    with pytest.raises(DataPackError):
        tlv_decode(tlv_encode(2**31, b"a"))
    with pytest.raises(DataPackError):
        tlv_decode(b"")


def test_tlvs_decode_known():
    data = tlv_encode(2, b"bc") + tlv_encode(1, b"a")
    assert tlvs_decode(data, [1, 2, 3]) == {1: b"a", 2: b"bc"}
    assert tlvs_decode(b"", [1, 2]) == {}


def test_tlvs_decode_duplicate():
    data = tlv_encode(1, b"a") + tlv_encode(1, b"b")
    with pytest.raises(DuplicateTagError) as info:
        tlvs_decode(data, [1])
    assert info.value.tag == 1


def test_tlvs_decode_unknown():
    data = tlv_encode(1, b"a") + tlv_encode(7, b"z")
    with pytest.raises(UnknownTagError) as info:
        tlvs_decode(data, [1])
    assert info.value.tag == 7
    assert tlvs_decode(data, [1], skip_unknown=True) == {1: b"a"}


def test_tlvs_decode_only_first_31_tags():
    data = tlv_encode(35, b"q")
    with pytest.raises(UnknownTagError):
        tlvs_decode(data, range(1, 40))
    assert tlvs_decode(tlv_encode(31, b"q"), range(1, 40)) == {31: b"q"}


def test_tlvs_decode_tag_list_stops_at_zero():
    data = tlv_encode(3, b"q")
    with pytest.raises(UnknownTagError):
        tlvs_decode(data, [1, 0, 3])


def test_tlvs_decode_broken():
    data = tlv_encode(1, b"a") + tlv_encode(2, b"bc")[:-1]
    with pytest.raises(DataPackError):
        tlvs_decode(data, [1, 2])