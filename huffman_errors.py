# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every error raised by the codec."""


class EmptyInputError(HuffmanError, ValueError):
    def __init__(self, message="cannot build a Huffman tree from an empty frequency mapping"):
        super().__init__(message)


class InvalidWeightError(HuffmanError, ValueError):
    def __init__(self, symbol, weight):
        self.symbol = symbol
        self.weight = weight
        super().__init__(f"invalid weight {weight!r} for symbol {symbol!r}")


class UnknownSymbolError(HuffmanError, KeyError):
    """Raised when text holds a symbol the tree was not built with."""

    def __init__(self, symbol, position=None):
        self.symbol = symbol
        self.position = position
        super().__init__(symbol)

    def __str__(self):
        if self.position is None:
            return f"symbol {self.symbol!r} is not in the code table"
        return f"symbol {self.symbol!r} at position {self.position} is not in the code table"


class CorruptStreamError(HuffmanError, ValueError):
    pass
