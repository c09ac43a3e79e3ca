'''Symbol alphabet of the suffix tree: 'A'-'Z' plus one terminal sentinel.

Symbols are mapped to small integer codes that index the children table of
every node: 'A' -> 0, ..., 'Z' -> 25, and the sentinel '$' -> 26. This code
order is also the order in which every traversal visits children.
'''
import numpy as np

from ..errors import InvalidInputError, UnsupportedSymbolError

SENTINEL = '$'
LETTERS = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
ALPHABET_SIZE = len(LETTERS) + 1  # 27
SENTINEL_CODE = ALPHABET_SIZE - 1
NO_SYMBOL = -1

# Byte value -> symbol code; NO_SYMBOL for bytes outside the alphabet.
_CODE_TABLE = np.full(256, NO_SYMBOL, dtype=np.int64)
_CODE_TABLE[np.frombuffer(LETTERS.encode('ascii'), dtype=np.uint8)] = np.arange(len(LETTERS))
_CODE_TABLE[ord(SENTINEL)] = SENTINEL_CODE


def symbol_code(ch: str) -> int:
    """Returns the code of a single symbol, or NO_SYMBOL if it is not in the alphabet."""
    if len(ch) != 1 or not ch.isascii():
        return NO_SYMBOL
    return int(_CODE_TABLE[ord(ch)])


def encode_symbols(symbols: str) -> np.ndarray:
    """Maps every character to its code without validating it.

    Characters outside the alphabet (including non-ASCII ones) map to NO_SYMBOL.
    """
    if symbols.isascii():
        return _CODE_TABLE[np.frombuffer(symbols.encode('ascii'), dtype=np.uint8)]
    return np.array([symbol_code(ch) for ch in symbols], dtype=np.int64)


def encode_text(text: str) -> np.ndarray:
    """Validates a text for construction and returns its symbol codes.

    The text must be non-empty, contain only alphabet symbols, and end with
    exactly one sentinel that appears nowhere else.

    Args:
        text: The text to encode, sentinel already appended.

    Returns:
        A 1-D int64 numpy array with one code per symbol.

    Raises:
        TypeError: If `text` is not a string.
        InvalidInputError: If the text is empty or the sentinel rule is broken.
        UnsupportedSymbolError: If a symbol is outside 'A'-'Z' and the sentinel.
    """
    if not isinstance(text, str):
        raise TypeError(f"Text must be a string, got {type(text).__name__}.")
    if not text:
        raise InvalidInputError("Text must not be empty; it needs at least the sentinel.")

    codes = encode_symbols(text)
    unsupported = np.flatnonzero(codes == NO_SYMBOL)
    if unsupported.size:
        position = int(unsupported[0])
        raise UnsupportedSymbolError(text[position], position)

    sentinels = np.flatnonzero(codes == SENTINEL_CODE)
    if sentinels.size == 0:
        raise InvalidInputError(f"Text must end with the sentinel {SENTINEL!r}.")
    if sentinels.size > 1 or sentinels[0] != len(text) - 1:
        raise InvalidInputError(
            f"Sentinel {SENTINEL!r} must appear exactly once, at the end of the text "
            f"(found at positions {sentinels.tolist()}).")
    return codes
