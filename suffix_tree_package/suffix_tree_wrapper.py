'''Public interface of the suffix tree package.

This module provides the `SuffixTreeWrapper` class, the handle callers get for
a built suffix tree, plus module-level functions that mirror its methods
(`construct`, `search`, `find_all_matches`, ...).

The wrapper drives the pure Python backend in a fixed order:
- validate the text and build the tree (`UkkonenBuilder`),
- label the leaves with their suffix offsets (`assign_suffix_indices`),
- answer queries (`QueryEngine`).

It enforces that order at the API boundary. A position query on a tree that
has not been indexed, or a second indexing pass, raises `PreconditionViolation`
instead of returning wrong offsets.

Typical usage:

    tree = SuffixTreeWrapper("BANANA$")
    tree.find_all_matches("ANA")        # [1, 3]
    tree.longest_repeated_substring()   # 'ANA'
'''
import sys

import numpy as np

from .errors import PreconditionViolation
from .python_backend.node_arena import ROOT
from .python_backend.queries import QueryEngine, TreeTraversal
from .python_backend.suffix_indexer import assign_suffix_indices
from .python_backend.ukkonen import ConstructionStep, UkkonenBuilder


class SuffixTreeWrapper:
    '''A suffix tree over one sentinel-terminated text.

    The tree is built completely when the object is created and never changes
    afterwards; there is no API to insert into or remove from it.

    Attributes:
        text (str): The indexed text, sentinel included.
        arena (NodeArena): Storage of the tree's nodes.
        indexed (bool): True once leaves carry their suffix offsets.
    '''
    def __init__(self, text: str, *, build_index: bool = True,
                 record_steps: bool = False, verbose: bool = False):
        """Builds the suffix tree of `text`.

        Args:
            text: The text to index, with the sentinel '$' already appended.
            build_index: If True (default), run the suffix indexer right away so
                         position queries are available.
            record_steps: If True, keep one `ConstructionStep` per phase, see `steps`.
            verbose: If True, print construction progress to stderr.

        Raises:
            TypeError: If `text` is not a string.
            InvalidInputError: If the text is empty or its sentinel is missing,
                               duplicated or not at the end.
            UnsupportedSymbolError: If the text has a symbol outside 'A'-'Z' and '$'.
            ConstructionAbortedError: If an internal invariant breaks while building.
        """
        self._builder = UkkonenBuilder(text, record_steps=record_steps, verbose=verbose)
        self.text = text
        self.arena = self._builder.build()
        self._engine = QueryEngine(self.arena, text)
        self.indexed = False
        self.verbose = verbose
        if build_index:
            self.index_suffixes()

    def index_suffixes(self) -> np.ndarray:
        """Runs the suffix indexer. It must run exactly once per tree.

        Returns:
            The suffix offsets of all leaves, in leaf id order.

        Raises:
            PreconditionViolation: If the tree is already indexed.
        """
        if self.indexed:
            raise PreconditionViolation("Suffix indices have already been assigned for this tree.")
        indices = assign_suffix_indices(self.arena, len(self.text))
        self.indexed = True
        if self.verbose:
            print(f"Indexed {indices.size:,} leaves.", file=sys.stderr)
        return indices

    def search(self, pattern: str) -> bool:
        """Returns True if `pattern` occurs in the text.

        Raises:
            TypeError: If `pattern` is not a string.
        """
        return self._engine.search(self._check_pattern(pattern))

    def find_all_matches(self, pattern: str) -> list[int]:
        """Returns the sorted 0-based offsets of every occurrence of `pattern`.

        An absent pattern gives an empty list, exactly like a pattern with no
        occurrences; callers tell "not found" apart only by emptiness.

        Raises:
            TypeError: If `pattern` is not a string.
            PreconditionViolation: If the tree has not been indexed.
        """
        self._require_index("find_all_matches")
        return self._engine.find_all_matches(self._check_pattern(pattern))

    def count_occurrences(self, pattern: str) -> int:
        """Returns the number of occurrences of `pattern`. Does not need the index."""
        return self._engine.count_occurrences(self._check_pattern(pattern))

    def longest_repeated_substring(self) -> str:
        """Returns the longest substring occurring at least twice, or "" if none."""
        return self._engine.longest_repeated_substring()

    def shortest_unique_substring(self) -> str:
        """Returns the shortest substring occurring exactly once, sentinel excluded."""
        return self._engine.shortest_unique_substring()

    def traverse(self) -> TreeTraversal:
        """Returns a restartable iterable of (depth, edge label) pairs in DFS order."""
        return TreeTraversal(self.arena, self.text)

    def leaf_suffix_indices(self) -> np.ndarray:
        """Returns the suffix offsets of all leaves, in leaf id order.

        Raises:
            PreconditionViolation: If the tree has not been indexed.
        """
        self._require_index("leaf_suffix_indices")
        return self.arena.suffix_index[self.arena.leaves()]

    def display(self, file=None) -> None:
        """Prints the tree, one edge label per line, indented by depth."""
        file = file if file is not None else sys.stdout
        print("Suffix Tree:", file=file)
        for depth, label in self.traverse():
            print("    " * depth + label, file=file)

    @property
    def steps(self) -> list[ConstructionStep]:
        """list[ConstructionStep]: Per-phase snapshots, empty unless built with `record_steps=True`."""
        return self._builder.steps

    @property
    def node_count(self) -> int:
        """int: Number of nodes, the root included."""
        return self.arena.size

    @property
    def leaf_count(self) -> int:
        """int: Number of leaves (equal to the text length)."""
        return int(self._engine.leaf_counts()[ROOT])

    def _require_index(self, operation: str) -> None:
        if not self.indexed:
            raise PreconditionViolation(
                f"{operation} reports positions; call index_suffixes() first "
                f"or build the tree with build_index=True.")

    @staticmethod
    def _check_pattern(pattern: str) -> str:
        if not isinstance(pattern, str):
            raise TypeError(f"Pattern must be a string, got {type(pattern).__name__}.")
        return pattern

    def __contains__(self, pattern: str) -> bool:
        return self.search(pattern)

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        preview = self.text if len(self.text) <= 20 else self.text[:17] + "..."
        return f"SuffixTreeWrapper(text={preview!r}, nodes={self.node_count}, indexed={self.indexed})"


def construct(text: str, **options) -> SuffixTreeWrapper:
    """Builds and indexes the suffix tree of `text`. See `SuffixTreeWrapper` for options and errors."""
    return SuffixTreeWrapper(text, **options)


def search(tree: SuffixTreeWrapper, pattern: str) -> bool:
    return tree.search(pattern)


def find_all_matches(tree: SuffixTreeWrapper, pattern: str) -> list[int]:
    return tree.find_all_matches(pattern)


def count_occurrences(tree: SuffixTreeWrapper, pattern: str) -> int:
    return tree.count_occurrences(pattern)


def longest_repeated_substring(tree: SuffixTreeWrapper) -> str:
    return tree.longest_repeated_substring()


def shortest_unique_substring(tree: SuffixTreeWrapper) -> str:
    return tree.shortest_unique_substring()


def traverse(tree: SuffixTreeWrapper) -> TreeTraversal:
    return tree.traverse()


# Example usage:
if __name__ == '__main__':
    print("SuffixTreeWrapper Example")
    tree = SuffixTreeWrapper("BANANA$")
    tree.display()

    for p in ["ANA", "NAN", "BANANA", "APPLE", ""]:
        print(f"Pattern '{p}': {'Found' if tree.search(p) else 'Not Found'}, "
              f"positions {tree.find_all_matches(p)}")

    print(f"Longest repeated substring: '{tree.longest_repeated_substring()}'")
    print(f"Shortest unique substring: '{tree.shortest_unique_substring()}'")
