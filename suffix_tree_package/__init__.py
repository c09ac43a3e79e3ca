'''Initialize the suffix_tree_package, exposing the suffix tree handle, its query functions and error types.'''

from .errors import (
    SuffixTreeError, InvalidInputError, UnsupportedSymbolError,
    PreconditionViolation, ConstructionAbortedError
)
from .suffix_tree_wrapper import (
    SuffixTreeWrapper,
    construct, search, find_all_matches, count_occurrences,
    longest_repeated_substring, shortest_unique_substring, traverse
)

__all__ = [
    'SuffixTreeWrapper',
    'construct', 'search', 'find_all_matches', 'count_occurrences',
    'longest_repeated_substring', 'shortest_unique_substring', 'traverse',
    'SuffixTreeError', 'InvalidInputError', 'UnsupportedSymbolError',
    'PreconditionViolation', 'ConstructionAbortedError'
]
