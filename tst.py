"""Ternary search trie mapping byte strings to LZW codewords."""

NIL = -1
R = 256


class PrefixDictionary:
    """Ternary search trie keyed by byte strings.

    Nodes are kept in parallel lists and addressed by index, with NIL standing
    in for a missing child. Each node holds one byte value and the codeword of
    the key ending there, or None if no key ends there.
    """

    def __init__(self):
        self.clear()

    def clear(self):
        self.byte = []
        self.left = []
        self.mid = []
        self.right = []
        self.code = []
        self.root = NIL
        self.size = 0

    def __len__(self):
        return self.size

    def __contains__(self, key):
        return self.lookup(key) is not None

    def _new_node(self, b):
        self.byte.append(b)
        self.left.append(NIL)
        self.mid.append(NIL)
        self.right.append(NIL)
        self.code.append(None)
        return len(self.byte) - 1

    def _find(self, key):
        x = self.root
        d = 0
        while x != NIL:
            c = key[d]
            if c < self.byte[x]:
                x = self.left[x]
            elif c > self.byte[x]:
                x = self.right[x]
            elif d < len(key) - 1:
                x = self.mid[x]
                d += 1
            else:
                return x
        return NIL

    def lookup(self, key):
        if len(key) == 0:
            raise ValueError('illegal key')
        x = self._find(key)
        if x == NIL:
            return None
        return self.code[x]

    def insert(self, key, code):
        if len(key) == 0:
            raise ValueError('illegal key')
        if self.root == NIL:
            self.root = self._new_node(key[0])
        x = self.root
        d = 0
        while True:
            c = key[d]
            if c < self.byte[x]:
                if self.left[x] == NIL:
                    self.left[x] = self._new_node(c)
                x = self.left[x]
            elif c > self.byte[x]:
                if self.right[x] == NIL:
                    self.right[x] = self._new_node(c)
                x = self.right[x]
            elif d < len(key) - 1:
                d += 1
                if self.mid[x] == NIL:
                    self.mid[x] = self._new_node(key[d])
                x = self.mid[x]
            else:
                if self.code[x] is None:
                    self.size += 1
                self.code[x] = code
                return

    def longest_prefix_of(self, key):
        """Return (length, code) for the longest prefix of key that has a code.

        (0, None) means not even the first byte is present.
        """
        length = 0
        code = None
        x = self.root
        i = 0
        while x != NIL and i < len(key):
            c = key[i]
            if c < self.byte[x]:
                x = self.left[x]
            elif c > self.byte[x]:
                x = self.right[x]
            else:
                i += 1
                if self.code[x] is not None:
                    length = i
                    code = self.code[x]
                x = self.mid[x]
        return length, code


def balanced_order(lo, hi):
    """Yield lo..hi-1 median first, so that inserting them builds a balanced tree."""
    pending = [(lo, hi)]
    while pending:
        lo, hi = pending.pop()
        if lo >= hi:
            continue
        m = (lo + hi) // 2
        yield m
        pending.append((m + 1, hi))
        pending.append((lo, m))


def seed(dictionary):
    for i in balanced_order(0, R):
        dictionary.insert(bytes([i]), i)
    return dictionary


def seeded_dictionary():
    return seed(PrefixDictionary())
