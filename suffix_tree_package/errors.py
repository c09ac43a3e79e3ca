'''Exception types raised by the suffix tree package.

All errors derive from `SuffixTreeError`. Input errors also derive from
`ValueError` and ordering errors from `RuntimeError`, so callers that already
catch the built-in types keep working.
'''


class SuffixTreeError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(SuffixTreeError, ValueError):
    """The text is empty, or its sentinel is missing, duplicated or misplaced."""


class UnsupportedSymbolError(SuffixTreeError, ValueError):
    """A symbol outside the declared alphabet was found in the text.

    Attributes:
        symbol (str): The offending character.
        position (int): Its 0-based offset in the text.
    """
    def __init__(self, symbol: str, position: int):
        self.symbol = symbol
        self.position = position
        super().__init__(f"Unsupported symbol {symbol!r} at position {position}. "
                         f"Only 'A'-'Z' and the sentinel are accepted.")


class PreconditionViolation(SuffixTreeError, RuntimeError):
    """An operation was called out of order (e.g. a position query before indexing)."""


class ConstructionAbortedError(SuffixTreeError, RuntimeError):
    """An internal invariant broke while building or indexing the tree."""
