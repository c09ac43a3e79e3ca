'''Arena storage for suffix tree nodes.

Nodes are not individual Python objects. Each node is an integer id, and its
fields live in numpy arrays owned by a single `NodeArena`:

- `label_start`, `label_end`: inclusive range of the incoming edge label.
- `is_open`: True for leaves whose end is the shared `leaf_end` cursor.
- `children`: a (capacity, ALPHABET_SIZE) table of child ids, NO_NODE if absent.
- `child_count`: number of populated entries of the node's children row.
- `suffix_link`: id of the suffix link target, NO_NODE if unset.
- `suffix_index`: starting offset of the suffix a leaf spells, NO_NODE until indexed.

The shared `leaf_end` is stored once in the arena. Incrementing it extends
every open leaf at the same time; `freeze_open_leaves` turns all of them into
ordinary frozen edges when construction is finished.
'''
import numpy as np

from .alphabet import ALPHABET_SIZE
from ..errors import ConstructionAbortedError

NO_NODE = -1
ROOT = 0


class NodeArena:
    """Fixed-capacity storage for all nodes of one suffix tree.

    A suffix tree over a text of length n has n leaves, at most n - 1 internal
    nodes and a root, so a capacity of 2n + 1 is never exceeded.

    Attributes:
        capacity (int): Maximum number of nodes.
        size (int): Number of nodes allocated so far (the root included).
        leaf_end (int): The shared end index of all open leaves.
        complete (bool): True once construction has finished and no leaf is open.
    """
    def __init__(self, text_length: int):
        """Allocates the arena and creates the root node.

        Args:
            text_length: Length of the text the tree is built for.
        """
        self.capacity = 2 * text_length + 1
        self.size = 0
        self.leaf_end = -1
        self.complete = False # Set by the builder once every phase has run

        self.label_start = np.zeros(self.capacity, dtype=np.int64)
        self.label_end = np.zeros(self.capacity, dtype=np.int64)
        self.is_open = np.zeros(self.capacity, dtype=bool)
        self.children = np.full((self.capacity, ALPHABET_SIZE), NO_NODE, dtype=np.int64)
        self.child_count = np.zeros(self.capacity, dtype=np.int64)
        self.suffix_link = np.full(self.capacity, NO_NODE, dtype=np.int64)
        self.suffix_index = np.full(self.capacity, NO_NODE, dtype=np.int64)

        # The root's label is the empty range [-1, -2].
        self.new_node(-1, -2)

    def new_node(self, start: int, end: int | None = None) -> int:
        """Allocates a node and returns its id.

        Args:
            start: Start index of the incoming edge label.
            end: Frozen end index of the label, or None for an open leaf whose
                 end follows the shared `leaf_end` cursor.

        Raises:
            ConstructionAbortedError: If the arena is full.
        """
        if self.size >= self.capacity:
            raise ConstructionAbortedError(
                f"Node arena overflow: more than {self.capacity} nodes requested.")
        node = self.size
        self.size += 1
        self.label_start[node] = start
        if end is None:
            self.is_open[node] = True
        else:
            self.label_end[node] = end
        return node

    def edge_end(self, node: int) -> int:
        """Returns the inclusive end index of the node's edge label."""
        if self.is_open[node]:
            return self.leaf_end
        return int(self.label_end[node])

    def edge_length(self, node: int) -> int:
        """Returns the length of the node's incoming edge label (0 for the root)."""
        return self.edge_end(node) - int(self.label_start[node]) + 1

    def child(self, node: int, code: int) -> int:
        """Returns the child of `node` whose edge starts with symbol `code`, or NO_NODE."""
        return int(self.children[node, code])

    def set_child(self, node: int, code: int, child: int) -> None:
        """Attaches `child` under `node` for symbol `code`, replacing any previous child."""
        if self.children[node, code] == NO_NODE:
            self.child_count[node] += 1
        self.children[node, code] = child

    def children_of(self, node: int) -> list[int]:
        """Returns the node's children in symbol order ('A' ... 'Z', sentinel)."""
        row = self.children[node]
        return row[row != NO_NODE].tolist()

    def is_leaf(self, node: int) -> bool:
        return node != ROOT and self.child_count[node] == 0

    def freeze(self, node: int, end: int) -> None:
        """Gives the node an independent end index, detaching it from `leaf_end`."""
        self.label_end[node] = end
        self.is_open[node] = False

    def freeze_open_leaves(self) -> None:
        """Freezes every open leaf at the current value of `leaf_end`."""
        open_nodes = self.is_open[:self.size]
        self.label_end[:self.size][open_nodes] = self.leaf_end
        open_nodes[:] = False

    def leaves(self) -> np.ndarray:
        """Returns the ids of all leaves."""
        ids = np.arange(1, self.size)
        return ids[self.child_count[1:self.size] == 0]

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"NodeArena(size={self.size}, capacity={self.capacity}, leaf_end={self.leaf_end})"
