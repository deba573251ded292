# filename: huffman_core.py

import heapq
import math
from decimal import Decimal
from numbers import Real

from loguru import logger

from huffman_config import settings
from huffman_errors import CorruptStreamError, EmptyInputError, InvalidWeightError, UnknownSymbolError


def _printable(char):
    if isinstance(char, str):
        return "".join(c if c.isprintable() else c.encode("unicode_escape").decode("ascii") for c in char)
    return str(char)


class HuffmanNode:
    __slots__ = ("char", "weight", "code", "left", "right", "order")

    def __init__(self, char, weight, left=None, right=None, order=0):
        self.char = char
        self.weight = weight
        self.code = ""
        self.left = left
        self.right = right
        self.order = order

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    def __lt__(self, other):
        return (self.weight, self.order) < (other.weight, other.order)

    def __str__(self):
        return f"{_printable(self.char)}, {self.weight}, {self.code}"

    def __repr__(self):
        return f"HuffmanNode(char={self.char!r}, weight={self.weight!r}, code={self.code!r})"


def _check_weight(char, weight):
    if isinstance(weight, bool) or not isinstance(weight, (Real, Decimal)):
        raise InvalidWeightError(char, weight)
    is_nan = weight.is_nan() if isinstance(weight, Decimal) else math.isnan(weight)
    if is_nan or weight < 0:
        raise InvalidWeightError(char, weight)


class HuffmanLogic:
    def build_tree(self, frequencies):
        if not frequencies:
            raise EmptyInputError()
        for char, weight in frequencies.items():
            _check_weight(char, weight)

        # Leaves are numbered by (weight, symbol) and merged nodes continue the
        # numbering, so equal weights always pop in the same order.
        ordered = sorted(frequencies.items(), key=lambda item: (item[1], item[0]))
        priority_queue = [HuffmanNode(char, weight, order=i) for i, (char, weight) in enumerate(ordered)]
        heapq.heapify(priority_queue)
        next_order = len(priority_queue)

        while len(priority_queue) > 1:
            left = heapq.heappop(priority_queue)
            right = heapq.heappop(priority_queue)
            merged = HuffmanNode(None, left.weight + right.weight, left, right, order=next_order)
            next_order += 1
            heapq.heappush(priority_queue, merged)

        root = priority_queue[0]
        self.generate_codes(root)
        return root

    def generate_codes(self, root):
        """Assign every node the path from the root, '0' for left and '1' for right."""
        stack = [(root, "")]
        while stack:
            node, code = stack.pop()
            node.code = code
            if not node.is_leaf:
                stack.append((node.right, code + "1"))
                stack.append((node.left, code + "0"))
        return root


def padding_length(bit_count):
    return (8 - bit_count % 8) % 8


def pack_bits(bits):
    """Pack a '0'/'1' string into bytes, MSB first, zero-padded on the right.

    The number of padding bits is not recorded.
    """
    if not bits:
        return b""
    if not set(bits) <= {"0", "1"}:
        raise ValueError("bit string may only contain '0' and '1'")
    padded = bits + "0" * padding_length(len(bits))
    return int(padded, 2).to_bytes(len(padded) // 8, "big")


def unpack_bits(data):
    if not data:
        return ""
    return format(int.from_bytes(data, "big"), f"0{len(data) * 8}b")


class HuffmanTree:
    """Codec built once from a symbol -> weight mapping.

    The tree is read-only after construction; the code table is derived by
    traversal on every call.
    """

    def __init__(self, frequencies):
        self.logic = HuffmanLogic()
        self.root = self.logic.build_tree(frequencies)
        self.text_alphabet = all(isinstance(char, str) for char in frequencies)
        logger.opt(lazy=True).debug(
            "Built Huffman tree: symbols={} weight={} depth={}",
            lambda: len(frequencies),
            lambda: self.root.weight,
            lambda: self.depth,
        )

    def nodes(self):
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            if not node.is_leaf:
                stack.append(node.right)
                stack.append(node.left)

    def leaves(self):
        return (node for node in self.nodes() if node.is_leaf)

    @property
    def depth(self):
        return max(len(leaf.code) for leaf in self.leaves())

    def code_table(self):
        return {leaf.char: leaf.code for leaf in self.leaves()}

    def sorted_report(self):
        return sorted(self.leaves(), key=lambda leaf: (-leaf.weight, leaf.order))

    def write_report(self, sink):
        """Write one "char, weight, code" line per symbol, heaviest first.

        Errors from ``sink.write`` propagate and nothing is echoed. Once the
        sink has every line, the same lines go to the logger when
        ``report_echo`` is set.
        """
        lines = [f"{leaf}\n" for leaf in self.sorted_report()]
        for line in lines:
            sink.write(line)
        if settings.report_echo:
            for line in lines:
                logger.info(line.rstrip("\n"))
        return len(lines)

    def encode_to_bits(self, text):
        codes = self.code_table()
        parts = []
        for position, char in enumerate(text):
            code = codes.get(char)
            if code is None:
                raise UnknownSymbolError(char, position)
            parts.append(code)
        return "".join(parts)

    def encode_to_bytes(self, text):
        return pack_bits(self.encode_to_bits(text))

    def decode_bits(self, bits, length=None):
        """Walk the tree bit by bit.

        With ``length`` decoding stops after that many symbols, so trailing
        padding is ignored. Without it the bits must end on a code boundary.
        """
        root = self.root
        symbols = []
        if root.is_leaf:
            if bits:
                raise CorruptStreamError("a single-symbol tree encodes to an empty bit string")
            symbols = [root.char] * (length or 0)
        else:
            node = root
            for bit in bits:
                if length is not None and len(symbols) >= length:
                    break
                if bit == "0":
                    node = node.left
                elif bit == "1":
                    node = node.right
                else:
                    raise CorruptStreamError(f"invalid bit {bit!r}")
                if node.is_leaf:
                    symbols.append(node.char)
                    node = root
            if length is not None and len(symbols) < length:
                raise CorruptStreamError(f"bit string ended after {len(symbols)} of {length} symbols")
            if length is None and node is not root:
                raise CorruptStreamError("bit string ends inside a code")

        if self.text_alphabet:
            return "".join(symbols)
        return symbols
