'''Labels every leaf of a finished suffix tree with the offset of its suffix.'''
import numpy as np

from .node_arena import ROOT, NodeArena
from ..errors import ConstructionAbortedError, PreconditionViolation


def assign_suffix_indices(arena: NodeArena, text_length: int) -> np.ndarray:
    """Sets `suffix_index = text_length - depth` on every leaf.

    `depth` is the total length of the edge labels from the root to the leaf.
    Internal nodes keep NO_NODE. The walk uses an explicit stack.

    Args:
        arena: The complete tree.
        text_length: Length of the indexed text, sentinel included.

    Returns:
        The suffix indices of all leaves, in leaf id order.

    Raises:
        PreconditionViolation: If construction has not completed.
        ConstructionAbortedError: If the resulting indices are not a permutation
                                  of 0 ... text_length - 1.
    """
    if not arena.complete:
        raise PreconditionViolation("Cannot index a suffix tree whose construction did not complete.")

    stack = [(ROOT, 0)]
    while stack:
        node, depth = stack.pop()
        if arena.is_leaf(node):
            arena.suffix_index[node] = text_length - depth
            continue
        for child in arena.children_of(node):
            stack.append((child, depth + arena.edge_length(child)))

    indices = arena.suffix_index[arena.leaves()]
    if (indices.size != text_length or indices.min() < 0
            or not np.all(np.bincount(indices, minlength=text_length) == 1)):
        raise ConstructionAbortedError(
            f"Leaf suffix indices are not a permutation of 0..{text_length - 1}: {sorted(indices.tolist())}")
    return indices
