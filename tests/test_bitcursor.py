# tests/test_bitcursor.py
import pytest

from lcicoder.binary.codecs.bitcursor import (
    BufferOverrun,
    Cursor,
    HexFormatError,
    OctetBuffer,
    Writer,
    sign_extend,
)


@pytest.mark.parametrize("value,nbits,expected", [
    (0, 8, 0),
    (0x7F, 8, 127),
    (0x80, 8, -128),
    (0xFF, 8, -1),
    (0x2000, 14, -8192),
    (0x1FFF, 14, 8191),
    ((1 << 34) - 1, 34, -1),
])
def test_sign_extend(value, nbits, expected):
    assert sign_extend(value, nbits) == expected


def test_mirrored_bits_are_lsb_first_within_octet():
    ob = OctetBuffer.zeroed(2)
    assert ob.put_bits(0, 6, 18) == 6
    assert ob.to_hex() == "1200"
    ob.put_bits(6, 4, 0b1011)
    assert ob.to_hex() == "d202"
    assert ob.get_bits(0, 6) == 18
    assert ob.get_bits(6, 4) == 0b1011


def test_put_bits_clears_existing_bits():
    ob = OctetBuffer(b"\xff\xff")
    ob.put_bits(4, 8, 0)
    assert ob.to_hex() == "0ff0"


def test_numbers_are_big_endian():
    ob = OctetBuffer.zeroed(4)
    ob.put_number(1, 2, 0x1234)
    ob.put_octet(3, 0xAB)
    assert ob.to_hex() == "001234ab"
    assert ob.get_number(0, 3) == 0x1234
    assert ob.get_octet(3) == 0xAB


def test_writes_past_end_fail_without_touching_buffer():
    ob = OctetBuffer(b"\x01\x02")
    with pytest.raises(BufferOverrun):
        ob.put_octet(2, 0xFF)
    with pytest.raises(BufferOverrun):
        ob.put_number(1, 2, 0xFFFF)
    with pytest.raises(BufferOverrun):
        ob.put_bits(10, 8, 0xFF)
    assert ob.to_hex() == "0102"


def test_from_hex_accepts_mixed_case_and_prefix():
    assert OctetBuffer.from_hex("01AbCd").to_hex() == "01abcd"
    assert OctetBuffer.from_hex(' lci=0100 ').to_hex() == "0100"


@pytest.mark.parametrize("text", ["010", "01zz", "01 00"])
def test_from_hex_rejects_malformed(text):
    with pytest.raises(HexFormatError):
        OctetBuffer.from_hex(text)


def test_cursor_reads_mirrored_fields_across_octets():
    # first two fields of the Sydney Opera House LCI field
    cur = Cursor(bytes.fromhex("52834d12efd2b08b9b4bf1cc2c000041"))
    assert cur.bits(6) == 18
    assert sign_extend(cur.bits(34), 34) == -1136052723
    assert cur.tell() == 5


def test_writer_and_cursor_agree():
    ob = OctetBuffer.zeroed(4)
    w = Writer(ob)
    w.bits(3, 5)
    w.bits(13, 0x1ABC)
    w.u16(0xBEEF)
    assert w.tell() == 4

    cur = Cursor(ob)
    assert cur.bits(3) == 5
    assert cur.bits(13) == 0x1ABC
    assert cur.u16() == 0xBEEF
    assert cur.remaining() == 0


def test_cursor_underrun():
    cur = Cursor(b"\x01")
    with pytest.raises(BufferOverrun):
        cur.u16()
    with pytest.raises(BufferOverrun):
        cur.take(2)
