from __future__ import annotations
import string


class HexFormatError(ValueError):
    pass


class BufferOverrun(ValueError):
    pass


_HEXDIGITS = frozenset(string.hexdigits)


def sign_extend(value: int, nbits: int) -> int:
    """Interpret the low `nbits` of `value` as a two's complement number."""
    value &= (1 << nbits) - 1
    return value - (1 << nbits) if value & (1 << (nbits - 1)) else value


class OctetBuffer:
    """
    Fixed-size octet buffer behind the hex interchange string.

    Octets are addressed big-endian. Bit fields use the mirrored convention of
    the LCI field: bit index 0 is the LSB of octet 0, indices advance from the
    low bit to the high bit of each octet before moving to the next octet.
    """
    __slots__ = ("buf",)

    def __init__(self, data: bytes | bytearray | memoryview):
        self.buf = bytearray(data)

    @classmethod
    def zeroed(cls, size: int) -> "OctetBuffer":
        return cls(bytes(size))

    @classmethod
    def from_hex(cls, text: str) -> "OctetBuffer":
        s = text.strip()
        if s[:4].lower() == "lci=":
            s = s[4:].strip().strip('"')
        if len(s) % 2:
            raise HexFormatError(f"odd number of hex digits ({len(s)})")
        bad = next((i for i, ch in enumerate(s) if ch not in _HEXDIGITS), None)
        if bad is not None:
            raise HexFormatError(f"non-hex character {s[bad]!r} at position {bad}")
        return cls(bytes.fromhex(s))

    def __len__(self) -> int: return len(self.buf)

    def to_hex(self) -> str: return self.buf.hex()

    def _check(self, start: int, n: int) -> None:
        if start < 0 or n < 0 or start + n > len(self.buf):
            raise BufferOverrun(f"octets {start}..{start + n - 1} outside buffer of {len(self.buf)}")

    # octets (big-endian)
    def get_octet(self, i: int) -> int:
        self._check(i, 1)
        return self.buf[i]

    def put_octet(self, i: int, value: int) -> int:
        self._check(i, 1)
        self.buf[i] = value & 0xFF
        return i + 1

    def get_number(self, i: int, n: int) -> int:
        self._check(i, n)
        return int.from_bytes(self.buf[i:i + n], "big")

    def put_number(self, i: int, n: int, value: int) -> int:
        self._check(i, n)
        self.buf[i:i + n] = (value & ((1 << (8 * n)) - 1)).to_bytes(n, "big")
        return i + n

    # bits (mirrored, LSB-first within each octet)
    def get_bits(self, bit_start: int, n: int) -> int:
        if bit_start < 0 or n < 0 or bit_start + n > 8 * len(self.buf):
            raise BufferOverrun(f"bits {bit_start}+{n} outside buffer of {8 * len(self.buf)} bits")
        val = 0
        for k in range(n):
            idx = bit_start + k
            if (self.buf[idx >> 3] >> (idx & 7)) & 1:
                val |= 1 << k
        return val

    def put_bits(self, bit_start: int, n: int, value: int) -> int:
        if bit_start < 0 or n < 0 or bit_start + n > 8 * len(self.buf):
            raise BufferOverrun(f"bits {bit_start}+{n} outside buffer of {8 * len(self.buf)} bits")
        for k in range(n):
            idx = bit_start + k
            mask = 1 << (idx & 7)
            if (value >> k) & 1:
                self.buf[idx >> 3] |= mask
            else:
                self.buf[idx >> 3] &= ~mask & 0xFF
        return bit_start + n


class Cursor:
    __slots__ = ("octets", "pos", "_bitpos")

    def __init__(self, data: OctetBuffer | bytes | bytearray):
        self.octets = data if isinstance(data, OctetBuffer) else OctetBuffer(data)
        self.pos = 0
        self._bitpos = 0

    def remaining(self) -> int: return len(self.octets) - self.pos
    def tell(self) -> int: return self.pos

    def take(self, n: int) -> bytes:
        end = self.pos + n
        if end > len(self.octets): raise BufferOverrun(f"underrun: need {n} at {self.pos}")
        out = bytes(self.octets.buf[self.pos:end])
        self.pos = end
        return out

    # byte-aligned big-endian reads
    def number(self, n: int) -> int:
        val = self.octets.get_number(self.pos, n)
        self.pos += n
        return val
    def u8(self) -> int:  return self.number(1)
    def u16(self) -> int: return self.number(2)
    def u24(self) -> int: return self.number(3)

    # bits (mirrored); the octet position advances once the bit run is aligned again
    def bits(self, n: int) -> int:
        val = self.octets.get_bits(8 * self.pos + self._bitpos, n)
        self._bitpos += n
        self.pos += self._bitpos >> 3
        self._bitpos &= 7
        return val


class Writer:
    """Sequential writer over a pre-sized OctetBuffer."""
    __slots__ = ("octets", "pos", "_bitpos")

    def __init__(self, octets: OctetBuffer):
        self.octets = octets
        self.pos = 0
        self._bitpos = 0

    def tell(self) -> int: return self.pos

    def number(self, n: int, value: int) -> None:
        self.pos = self.octets.put_number(self.pos, n, value)
    def u8(self, value: int) -> None:  self.number(1, value)
    def u16(self, value: int) -> None: self.number(2, value)
    def u24(self, value: int) -> None: self.number(3, value)

    def raw(self, data: bytes) -> None:
        for b in data:
            self.u8(b)

    def bits(self, n: int, value: int) -> None:
        self.octets.put_bits(8 * self.pos + self._bitpos, n, value)
        self._bitpos += n
        self.pos += self._bitpos >> 3
        self._bitpos &= 7
