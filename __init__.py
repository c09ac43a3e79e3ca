from .suffix_tree_package import (
    SuffixTreeWrapper,
    construct, search, find_all_matches, count_occurrences,
    longest_repeated_substring, shortest_unique_substring, traverse
)

__all__ = [
    'SuffixTreeWrapper',
    'construct', 'search', 'find_all_matches', 'count_occurrences',
    'longest_repeated_substring', 'shortest_unique_substring', 'traverse'
]
