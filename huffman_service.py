# filename: huffman_service.py
"""
Self-describing container around the Huffman codec.

Wire format (big-endian):
    [4B]  MAGIC  "HFv1"
    [1B]  kind          (0 = text, 1 = bytes)
    [8B]  symbol_count  number of encoded symbols
    [8B]  bit_length    payload length in bits, before padding
    [4B]  entries       number of (symbol, weight) pairs
    [12B each] (symbol uint32, weight uint64)
    [N B] payload, ceil(bit_length / 8) bytes, MSB first
"""
import struct
from collections import Counter

from loguru import logger

from huffman_core import HuffmanTree, pack_bits, unpack_bits
from huffman_errors import CorruptStreamError

MAGIC = b"HFv1"
KIND_TEXT = 0
KIND_BYTES = 1

_HEADER = struct.Struct(">4sBQQI")
_ENTRY = struct.Struct(">IQ")


def count_frequencies(data):
    """Symbol counts: characters for ``str`` input, byte values for ``bytes``."""
    return Counter(data)


class HuffmanService:
    def compress(self, data):
        if not data:
            return b""
        kind = KIND_TEXT if isinstance(data, str) else KIND_BYTES
        freqs = count_frequencies(data)
        tree = HuffmanTree(freqs)
        bits = tree.encode_to_bits(data)

        header = bytearray(_HEADER.pack(MAGIC, kind, len(data), len(bits), len(freqs)))
        for symbol, weight in sorted(freqs.items()):
            header += _ENTRY.pack(ord(symbol) if kind == KIND_TEXT else symbol, weight)

        payload = pack_bits(bits)
        logger.debug(
            f"Compressed {len(data)} symbols into {len(header) + len(payload)} bytes "
            f"({len(bits)} bits, {len(freqs)} distinct)"
        )
        return bytes(header) + payload

    def decompress(self, blob):
        if not blob:
            return b""
        if len(blob) < _HEADER.size:
            raise self._reject(f"header truncated: {len(blob)} < {_HEADER.size} bytes")

        magic, kind, symbol_count, bit_length, entries = _HEADER.unpack_from(blob, 0)
        if magic != MAGIC:
            raise self._reject(f"invalid magic {magic!r}")
        if kind not in (KIND_TEXT, KIND_BYTES):
            raise self._reject(f"unknown payload kind {kind}")

        offset = _HEADER.size
        table_end = offset + entries * _ENTRY.size
        if len(blob) < table_end:
            raise self._reject("code table truncated")

        freqs = {}
        for symbol, weight in _ENTRY.iter_unpack(blob[offset:table_end]):
            if kind == KIND_TEXT:
                try:
                    symbol = chr(symbol)
                except (ValueError, OverflowError):
                    raise self._reject(f"invalid code point {symbol}") from None
            elif symbol > 0xFF:
                raise self._reject(f"invalid byte value {symbol}")
            if symbol in freqs:
                raise self._reject(f"duplicate symbol {symbol!r} in code table")
            freqs[symbol] = weight
        if not freqs:
            raise self._reject("empty code table")
        if sum(freqs.values()) != symbol_count:
            raise self._reject(f"code table weights do not add up to {symbol_count} symbols")

        payload = blob[table_end:]
        expected = (bit_length + 7) // 8
        if len(payload) != expected:
            raise self._reject(f"payload is {len(payload)} bytes, expected {expected}")

        tree = HuffmanTree(freqs)
        bits = unpack_bits(payload)[:bit_length]
        # a single-symbol tree has empty codes, only the header count says how many
        length = symbol_count if tree.root.is_leaf else None
        symbols = tree.decode_bits(bits, length)
        if len(symbols) != symbol_count:
            raise self._reject(f"decoded {len(symbols)} symbols, header says {symbol_count}")

        if kind == KIND_TEXT:
            return symbols
        return bytes(symbols)

    @staticmethod
    def _reject(reason):
        logger.warning(f"Rejecting Huffman stream: {reason}")
        return CorruptStreamError(reason)
