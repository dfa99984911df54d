"""Bit-level reading and writing on top of bitstring."""

from bitstring import Bits, BitArray, ConstBitStream, ReadError


class BitReader:
    """Reads unsigned integers of arbitrary width, most significant bit first.

    Running out of data is reported by returning None rather than raising.
    """

    def __init__(self, data):
        self.stream = ConstBitStream(data)

    def read_bits(self, n):
        try:
            return self.stream.read(f'uint:{n}')
        except ReadError:
            return None

    def read_byte(self):
        return self.read_bits(8)

    def read_bit(self):
        b = self.read_bits(1)
        if b is None:
            return None
        return bool(b)


class BitWriter:
    def __init__(self):
        self.bits = BitArray()

    def write_bits(self, value, n):
        self.bits.append(Bits(uint=value, length=n))

    def write_byte(self, b):
        self.write_bits(b, 8)

    def write_bit(self, flag):
        self.bits.append(Bits(bin='0b1' if flag else '0b0'))

    def close(self):
        # tobytes() pads the last partial byte with zeros
        return self.bits.tobytes()
