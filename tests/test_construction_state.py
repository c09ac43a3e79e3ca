'''Tests for the construction internals: alphabet codes, the node arena and the Ukkonen builder.

These exercise the backend modules directly, below `SuffixTreeWrapper`:
shared leaf ends, arena capacity, the build-once rule, the complete-tree
precondition of the query engine and indexer, and the suffix links left on
every internal node.

Usage:
    pytest tests/test_construction_state.py
'''
import os
import sys

import numpy as np
import pytest

# Add the project root to sys.path to allow importing from suffix_tree_package
_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from suffix_tree_package.errors import (
    ConstructionAbortedError, InvalidInputError, PreconditionViolation, UnsupportedSymbolError
)
from suffix_tree_package.python_backend.alphabet import (
    ALPHABET_SIZE, NO_SYMBOL, SENTINEL_CODE, encode_symbols, encode_text, symbol_code
)
from suffix_tree_package.python_backend.node_arena import NO_NODE, ROOT, NodeArena
from suffix_tree_package.python_backend.queries import QueryEngine
from suffix_tree_package.python_backend.suffix_indexer import assign_suffix_indices
from suffix_tree_package.python_backend.ukkonen import UkkonenBuilder


def node_depths(arena: NodeArena) -> dict[int, int]:
    """Returns {node id: string depth} for every node of a finished arena."""
    depths = {ROOT: 0}
    stack = [ROOT]
    while stack:
        node = stack.pop()
        for child in arena.children_of(node):
            depths[child] = depths[node] + arena.edge_length(child)
            stack.append(child)
    return depths


def path_label(arena: NodeArena, text: str, node: int, depth: int) -> str:
    end = arena.edge_end(node)
    return text[end - depth + 1:end + 1]


# --- Alphabet ---

def test_symbol_codes():
    assert ALPHABET_SIZE == 27
    assert encode_text("AZ$").tolist() == [0, 25, SENTINEL_CODE]
    assert symbol_code('M') == 12
    assert symbol_code('a') == NO_SYMBOL
    assert symbol_code('AB') == NO_SYMBOL
    assert encode_symbols("A?$").tolist() == [0, NO_SYMBOL, SENTINEL_CODE]
    assert encode_symbols("ÅA").tolist() == [NO_SYMBOL, 0]


def test_unsupported_symbol_is_reported_before_sentinel_problems():
    with pytest.raises(UnsupportedSymbolError):
        encode_text("ab")
    with pytest.raises(InvalidInputError):
        encode_text("AB")


def test_bytes_are_not_accepted_as_text():
    with pytest.raises(TypeError):
        encode_text(b"AB$")


# --- Node arena ---

def test_open_leaves_share_the_leaf_end():
    arena = NodeArena(5)
    first = arena.new_node(0)
    second = arena.new_node(2)
    frozen = arena.new_node(1, 1)
    arena.leaf_end = 3
    assert arena.edge_length(first) == 4
    assert arena.edge_length(second) == 2
    arena.leaf_end = 4
    assert arena.edge_end(first) == arena.edge_end(second) == 4
    assert arena.edge_length(frozen) == 1


def test_freeze_open_leaves_detaches_them_from_the_cursor():
    arena = NodeArena(4)
    leaf = arena.new_node(1)
    arena.leaf_end = 3
    arena.freeze_open_leaves()
    assert not arena.is_open[leaf]
    arena.leaf_end = 10
    assert arena.edge_end(leaf) == 3


def test_root_has_an_empty_label():
    arena = NodeArena(3)
    assert len(arena) == 1
    assert arena.edge_length(ROOT) == 0
    assert not arena.is_leaf(ROOT)


def test_set_child_counts_only_new_slots():
    arena = NodeArena(4)
    a = arena.new_node(0)
    b = arena.new_node(1)
    arena.set_child(ROOT, 1, a)
    arena.set_child(ROOT, 0, b)
    assert arena.child_count[ROOT] == 2
    arena.set_child(ROOT, 1, b)
    assert arena.child_count[ROOT] == 2
    assert arena.children_of(ROOT) == [b, b]
    assert arena.child(ROOT, 2) == NO_NODE


def test_arena_overflow_aborts_construction():
    arena = NodeArena(1) # Room for the root and two more nodes
    arena.new_node(0)
    arena.new_node(0)
    with pytest.raises(ConstructionAbortedError):
        arena.new_node(0)


# --- Builder ---

def test_build_runs_once():
    builder = UkkonenBuilder("ABAB$")
    arena = builder.build()
    assert arena.complete
    assert not arena.is_open[:arena.size].any()
    with pytest.raises(PreconditionViolation):
        builder.build()


def test_unbuilt_tree_cannot_be_queried_or_indexed():
    builder = UkkonenBuilder("ABAB$")
    with pytest.raises(PreconditionViolation):
        QueryEngine(builder.arena, builder.text)
    with pytest.raises(PreconditionViolation):
        assign_suffix_indices(builder.arena, len(builder.text))


def test_extend_leaves_pending_suffixes_until_the_sentinel():
    builder = UkkonenBuilder("ABCABXABCD$")
    for i in range(5):
        builder.extend(i)
    # "AB" has been seen twice, so two suffixes wait on the A edge.
    assert builder.context.remainder == 2
    assert builder.context.active.node == ROOT
    assert builder.context.active.length == 2
    builder.extend(5)
    assert builder.context.remainder == 0
    assert builder.context.active.length == 0


@pytest.mark.parametrize("text", [
    "BANANA$", "MISSISSIPPI$", "ABCABXABCD$", "AAAAAAAA$", "ABABABBABABA$", "DEDODEDEDODO$",
])
def test_node_count_and_shape(text):
    arena = UkkonenBuilder(text).build()
    n = len(text)
    assert arena.size <= 2 * n + 1
    assert arena.leaves().size == n
    internal = [node for node in range(1, arena.size) if not arena.is_leaf(node)]
    # Every internal node branches.
    assert all(arena.child_count[node] >= 2 for node in internal)


@pytest.mark.parametrize("text", [
    "BANANA$", "MISSISSIPPI$", "ABCABXABCD$", "AAAAAAAA$", "ABABABBABABA$", "DEDODEDEDODO$",
])
def test_suffix_links_drop_the_first_symbol(text):
    arena = UkkonenBuilder(text).build()
    depths = node_depths(arena)
    for node in range(1, arena.size):
        if arena.is_leaf(node):
            continue
        link = int(arena.suffix_link[node])
        assert link != NO_NODE
        label = path_label(arena, text, node, depths[node])
        target = "" if link == ROOT else path_label(arena, text, link, depths[link])
        assert target == label[1:]


def test_indexer_labels_only_leaves():
    text = "BANANA$"
    arena = UkkonenBuilder(text).build()
    indices = assign_suffix_indices(arena, len(text))
    assert np.array_equal(np.sort(indices), np.arange(len(text)))
    internal = [node for node in range(arena.size) if not arena.is_leaf(node)]
    assert (arena.suffix_index[internal] == NO_NODE).all()


def test_indexer_rejects_a_tree_for_another_length():
    arena = UkkonenBuilder("BANANA$").build()
    with pytest.raises(ConstructionAbortedError):
        assign_suffix_indices(arena, 9)


def test_verbose_build_reports_progress(capsys):
    UkkonenBuilder("ABCDEFGHIJ$", verbose=True).build()
    err = capsys.readouterr().err
    assert "Building suffix tree for a text of 11 symbols" in err
    assert "Phase 11/11" in err
    assert "Suffix tree built" in err
