import unittest

from bitio import BitReader, BitWriter


class BitIOTests(unittest.TestCase):
    def test_close_pads_with_zeros(self):
        out = BitWriter()
        out.write_bit(True)
        out.write_bits(256, 9)
        self.assertEqual(out.close(), b'\xc0\x00')

    def test_bytes_and_bits_are_msb_first(self):
        out = BitWriter()
        out.write_byte(0xAB)
        out.write_bits(0b101, 3)
        self.assertEqual(out.close(), b'\xab\xa0')

    def test_reader_returns_none_at_end(self):
        self.assertIsNone(BitReader(b'\xab').read_bits(9))
        reader = BitReader(b'\xab')
        self.assertEqual(reader.read_byte(), 0xAB)
        self.assertIsNone(reader.read_byte())
        self.assertIsNone(reader.read_bit())

    def test_reader_reads_mixed_widths(self):
        out = BitWriter()
        out.write_bit(False)
        out.write_bits(300, 9)
        out.write_bits(40000, 16)
        reader = BitReader(out.close())
        self.assertFalse(reader.read_bit())
        self.assertEqual(reader.read_bits(9), 300)
        self.assertEqual(reader.read_bits(16), 40000)
        # 26 bits written, 6 bits of padding left
        self.assertEqual(reader.read_bits(6), 0)
        self.assertIsNone(reader.read_bit())

    def test_read_bit_values(self):
        reader = BitReader(b'\x80')
        self.assertIs(reader.read_bit(), True)
        self.assertIs(reader.read_bit(), False)

    def test_empty_input(self):
        self.assertEqual(BitWriter().close(), b'')
        self.assertIsNone(BitReader(b'').read_byte())
        self.assertIsNone(BitReader(b'').read_bit())


if __name__ == '__main__':
    unittest.main()
