'''Read-only queries over a finished suffix tree.

`QueryEngine` answers membership, occurrence, longest-repeated-substring and
shortest-unique-substring questions by walking a `NodeArena` built by
`UkkonenBuilder`. `TreeTraversal` is the lazy (depth, edge label) view of the
tree used by printers and by the builder's step recorder.

All traversals use explicit stacks, so deep trees never hit Python's
recursion limit. Children are always visited in symbol order ('A' ... 'Z',
then the sentinel), which makes every tie-break deterministic.

Path-labels are never built by string concatenation. For any non-root node
`v` at string depth `d`, the builder guarantees that
`text[edge_end(v) - d + 1 : edge_end(v) + 1]` is the path-label of `v`.
'''
import numpy as np

from .alphabet import NO_SYMBOL, SENTINEL_CODE, encode_symbols
from .node_arena import NO_NODE, ROOT, NodeArena
from ..errors import PreconditionViolation


class TreeTraversal:
    """Restartable depth-first view of the tree's edges.

    Iterating yields `(depth, label)` pairs, where `depth` is the number of
    edges from the root (the root's children have depth 1) and `label` is the
    edge's substring of the text. Every call to `iter()` starts a fresh walk.
    """
    def __init__(self, arena: NodeArena, text: str):
        self.arena = arena
        self.text = text

    def __iter__(self):
        arena = self.arena
        stack = [(child, 1) for child in reversed(arena.children_of(ROOT))]
        while stack:
            node, depth = stack.pop()
            start = int(arena.label_start[node])
            yield depth, self.text[start:arena.edge_end(node) + 1]
            stack.extend((child, depth + 1) for child in reversed(arena.children_of(node)))


class QueryEngine:
    """Answers substring queries against a complete suffix tree.

    The engine never modifies the tree. Queries that report positions need the
    suffix indexer to have run first.

    Attributes:
        arena (NodeArena): The tree's node storage.
        text (str): The indexed text, sentinel included.
    """
    def __init__(self, arena: NodeArena, text: str):
        """Initializes the engine.

        Raises:
            PreconditionViolation: If the arena's construction has not completed.
        """
        if not arena.complete:
            raise PreconditionViolation("Cannot query a suffix tree whose construction did not complete.")
        self.arena = arena
        self.text = text
        self.symbols: list[int] = encode_symbols(text).tolist()
        self._leaf_counts: np.ndarray | None = None

    def locate(self, pattern: str) -> int:
        """Finds where `pattern` ends in the tree.

        Returns:
            The node whose incoming edge contains (or ends at) the last symbol of
            the pattern, ROOT for the empty pattern, or NO_NODE if the pattern
            does not occur.
        """
        arena = self.arena
        symbols = self.symbols
        codes = encode_symbols(pattern).tolist()
        node = ROOT
        pos = 0
        while pos < len(codes):
            code = codes[pos]
            if code == NO_SYMBOL:
                return NO_NODE # Symbols outside the alphabet never occur in the text
            child = arena.child(node, code)
            if child == NO_NODE:
                return NO_NODE
            start = int(arena.label_start[child])
            span = min(arena.edge_length(child), len(codes) - pos)
            if symbols[start:start + span] != codes[pos:pos + span]:
                return NO_NODE
            pos += span
            node = child
        return node

    def search(self, pattern: str) -> bool:
        """Returns True if `pattern` is a substring of the text (the empty pattern always is)."""
        return self.locate(pattern) != NO_NODE

    def count_occurrences(self, pattern: str) -> int:
        """Returns how many times `pattern` occurs in the text.

        Works on an unindexed tree: it reads the number of leaves below the
        point where the pattern ends.
        """
        node = self.locate(pattern)
        if node == NO_NODE:
            return 0
        return int(self.leaf_counts()[node])

    def find_all_matches(self, pattern: str) -> list[int]:
        """Returns the 0-based starting offsets of every occurrence of `pattern`.

        Args:
            pattern: The substring to look for.

        Returns:
            Sorted, duplicate-free offsets. Empty if the pattern does not occur.
            The empty pattern matches at every offset, the sentinel's included.

        Raises:
            PreconditionViolation: If a leaf below the match has no suffix index.
        """
        node = self.locate(pattern)
        if node == NO_NODE:
            return []
        indices = self.arena.suffix_index[self._subtree_leaves(node)]
        if indices.size and indices.min() < 0:
            raise PreconditionViolation("Suffix indices have not been assigned; run the suffix indexer first.")
        return np.unique(indices).tolist()

    def longest_repeated_substring(self) -> str:
        """Returns the longest substring that occurs at least twice.

        Occurrences may overlap. Among equally long answers the first one met in
        symbol order (the lexicographically smallest) wins. Returns "" if no
        symbol repeats.
        """
        arena = self.arena
        best_node, best_depth = NO_NODE, 0
        stack = [(ROOT, 0)]
        while stack:
            node, depth = stack.pop()
            if arena.child_count[node] >= 2 and depth > best_depth:
                best_node, best_depth = node, depth
            stack.extend((child, depth + arena.edge_length(child))
                         for child in reversed(arena.children_of(node)))
        if best_node == NO_NODE:
            return ""
        return self._path_label(best_node, best_depth)

    def shortest_unique_substring(self) -> str:
        """Returns the shortest substring that occurs exactly once.

        A node with a single leaf below it spells a unique path. The shortest
        unique string along that path ends one symbol past the parent node,
        so that point is the only candidate taken from each such node.
        Candidates that would include the sentinel are dropped. Among equally
        short answers the lexicographically smallest wins.
        """
        arena = self.arena
        leaf_counts = self.leaf_counts()
        best = ""
        best_length = len(self.text) + 1
        stack = [(child, 0) for child in reversed(arena.children_of(ROOT))]
        while stack:
            node, parent_depth = stack.pop()
            start = int(arena.label_start[node])
            if leaf_counts[node] == 1:
                # No node below has a shorter unique candidate than this one.
                if self.symbols[start] != SENTINEL_CODE and parent_depth + 1 < best_length:
                    best_length = parent_depth + 1
                    best = self.text[start - parent_depth:start + 1]
                continue
            depth = parent_depth + arena.edge_length(node)
            stack.extend((child, depth) for child in reversed(arena.children_of(node)))
        return best

    def leaf_counts(self) -> np.ndarray:
        """Returns, for every node id, the number of leaves in its subtree."""
        if self._leaf_counts is None:
            arena = self.arena
            counts = np.zeros(arena.size, dtype=np.int64)
            order = self._preorder()
            for node in reversed(order):
                if arena.child_count[node] == 0:
                    counts[node] = 1
                else:
                    counts[node] = counts[arena.children_of(node)].sum()
            self._leaf_counts = counts
        return self._leaf_counts

    def _preorder(self, start: int = ROOT) -> list[int]:
        arena = self.arena
        order = []
        stack = [start]
        while stack:
            node = stack.pop()
            order.append(node)
            stack.extend(reversed(arena.children_of(node)))
        return order

    def _subtree_leaves(self, node: int) -> np.ndarray:
        nodes = np.asarray(self._preorder(node), dtype=np.int64)
        return nodes[self.arena.child_count[nodes] == 0]

    def _path_label(self, node: int, depth: int) -> str:
        end = self.arena.edge_end(node)
        return self.text[end - depth + 1:end + 1]
