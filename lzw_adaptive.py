"""Adaptive-width LZW encoding and decoding.

Codewords start at 9 bits and widen one bit at a time up to 16 bits as the
dictionary fills. Once the 16-bit dictionary is full it is either frozen or,
if the stream was compressed with resets enabled, cleared and reseeded.

Stream layout: one header bit (1 = resets enabled), the codewords, and the
EOF codeword, zero-padded to a whole number of bytes.
"""

import argparse
import sys

from bitio import BitReader, BitWriter
from tst import R, seed, seeded_dictionary

EOF_CODE = R
FIRST_CODE = R + 1
MIN_CODE_LEN = 9
MAX_CODE_LEN = 16


class LZWDecodeError(ValueError):
    """Raised when a compressed stream is corrupt or truncated."""


class CodecState:
    """Width, capacity and codeword counter shared by encoder and decoder.

    Both sides call claim() and then advance() exactly once per data codeword,
    which keeps their widths and resets in lockstep.
    """

    def __init__(self, reset=False):
        self.reset = bool(reset)
        self.resets = 0
        self.start_epoch()

    def start_epoch(self):
        self.width = MIN_CODE_LEN
        self.capacity = 2**MIN_CODE_LEN
        self.next_code = FIRST_CODE

    @property
    def frozen(self):
        return self.next_code >= self.capacity

    def claim(self):
        """Take the next free codeword, or None if the dictionary is full."""
        if self.frozen:
            return None
        code = self.next_code
        self.next_code += 1
        return code

    def advance(self):
        """Widen codewords or reset once capacity is reached.

        Returns True if the dictionary has to be reseeded.
        """
        if self.next_code < self.capacity:
            return False
        if self.width < MAX_CODE_LEN:
            self.width += 1
            self.capacity = 2**self.width
            return False
        if self.reset:
            self.start_epoch()
            self.resets += 1
            return True
        return False


def init_index_table():
    table = [bytes([i]) for i in range(R)]
    # Placeholder for EOF_CODE, never looked up
    table.append(b'')
    return table


class LZWEncoder:
    def __init__(self, reset=False):
        self.reset = reset
        self.state = CodecState(reset)
        self.dictionary = None

    def encode_to_codes(self, in_bytes):
        """Return the (codeword, width) pairs for in_bytes, ending with EOF."""
        state = self.state = CodecState(self.reset)
        dictionary = self.dictionary = seeded_dictionary()
        reader = BitReader(in_bytes)
        codes = []

        buffer = bytearray()
        b = reader.read_byte()
        if b is not None:
            buffer.append(b)
        while buffer:
            # Grow the buffer until it is longer than its longest known prefix
            length, code = dictionary.longest_prefix_of(buffer)
            while length == len(buffer):
                b = reader.read_byte()
                if b is None:
                    break
                buffer.append(b)
                length, code = dictionary.longest_prefix_of(buffer)

            codes.append((code, state.width))

            # Every codeword claims a code, the last one included, even when
            # there is no extra byte to build an entry from.
            new_code = state.claim()
            if new_code is not None and len(buffer) > length:
                dictionary.insert(bytes(buffer[:length + 1]), new_code)
            if state.advance():
                dictionary.clear()
                seed(dictionary)

            del buffer[:length]

        codes.append((EOF_CODE, state.width))
        return codes

    def encode(self, in_bytes):
        return pack_codes(self.encode_to_codes(in_bytes), self.reset)


def pack_codes(codes, reset):
    out = BitWriter()
    out.write_bit(reset)
    for code, width in codes:
        out.write_bits(code, width)
    return out.close()


class LZWDecoder:
    def __init__(self):
        self.state = None
        self.table = None

    def decode(self, in_bytes):
        in_stream = BitReader(in_bytes)
        reset = in_stream.read_bit()
        if reset is None:
            raise LZWDecodeError('Corrupted stream: missing header')

        state = self.state = CodecState(reset)
        table = self.table = init_index_table()
        out_array = bytearray()
        prev = None
        # Code the encoder assigned after the previous codeword; its entry is
        # only known once the next codeword has been read.
        pending = None
        while True:
            k = in_stream.read_bits(state.width)
            if k is None:
                raise LZWDecodeError('Corrupted stream: unexpected end of stream (no EOF codeword)')
            if k == EOF_CODE:
                break

            if k == pending:
                v = prev + prev[:1]
            elif k < len(table):
                v = table[k]
            else:
                raise LZWDecodeError(f'Corrupted stream: invalid codeword {k} at width {state.width}')

            if pending is not None:
                table.append(prev + v[:1])
            out_array += v
            prev = v

            pending = state.claim()
            if state.advance():
                table = self.table = init_index_table()
                prev = None
                pending = None
        return bytes(out_array)


def lzwa_encode(in_bytes, reset=False):
    return LZWEncoder(reset=reset).encode(in_bytes)


def lzwa_decode(in_bytes):
    return LZWDecoder().decode(in_bytes)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Adaptive-width LZW compression')
    parser.add_argument('mode', choices=['-', '+'],
                        help="'-' compresses standard input, '+' expands it")
    parser.add_argument('option', nargs='?', choices=['r', 'n'],
                        help="compress only: 'r' enables dictionary resets, 'n' (default) disables them")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='print size statistics to standard error')
    args = parser.parse_args(argv)
    if args.mode == '+' and args.option is not None:
        parser.error("the reset option only applies to '-'")

    in_bytes = sys.stdin.buffer.read()
    try:
        if args.mode == '-':
            codec = LZWEncoder(reset=args.option == 'r')
            out_bytes = codec.encode(in_bytes)
        else:
            codec = LZWDecoder()
            out_bytes = codec.decode(in_bytes)
    except LZWDecodeError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    for _ in range(codec.state.resets):
        print('Resetting dictionary...', file=sys.stderr)

    sys.stdout.buffer.write(out_bytes)
    sys.stdout.buffer.flush()

    if args.verbose:
        orig, comp = (in_bytes, out_bytes) if args.mode == '-' else (out_bytes, in_bytes)
        print(f'Original size: {len(orig)}', file=sys.stderr)
        print(f'Compressed size: {len(comp)}', file=sys.stderr)
        if orig:
            print(f'Compression ratio: {len(comp) / len(orig)}', file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
