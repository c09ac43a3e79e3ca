'''Pure Python implementation of Ukkonen's online suffix tree construction.

This module provides `UkkonenBuilder`, which turns a sentinel-terminated text
into a complete suffix tree stored in a `NodeArena`, together with the small
state objects the algorithm advances while it runs:

- `ActivePoint`: the (node, edge, length) cursor of Ukkonen's algorithm.
- `ConstructionContext`: the active point plus the pending-suffix counter,
  the internal node waiting for a suffix link, and the current phase.
- `ConstructionStep`: an optional per-phase snapshot used to replay the
  construction one symbol at a time.

The text is processed left to right in phases. Each phase bumps the shared
`leaf_end` of the arena, which extends every open leaf at once, and then runs
extension steps until the remaining suffixes are implicitly present. Walking
down whole edges at a time and following suffix links keeps the total work
amortized O(n).
'''
import sys

from .alphabet import LETTERS, SENTINEL, encode_text
from .node_arena import NO_NODE, ROOT, NodeArena
from .queries import TreeTraversal
from ..errors import ConstructionAbortedError, PreconditionViolation

_SYMBOLS = LETTERS + SENTINEL


class ActivePoint:
    """The position where the next suffix extension takes place.

    Attributes:
        node (int): Id of the active node.
        edge (int): Index in the text of the first symbol of the active edge.
                    Only meaningful while `length` > 0.
        length (int): Number of symbols matched along the active edge.
    """
    __slots__ = ('node', 'edge', 'length')

    def __init__(self, node: int = ROOT, edge: int = 0, length: int = 0):
        self.node = node
        self.edge = edge
        self.length = length

    def __repr__(self) -> str:
        return f"ActivePoint(node={self.node}, edge={self.edge}, length={self.length})"


class ConstructionContext:
    """All mutable state of one construction, bundled so every step reads and writes it explicitly.

    Attributes:
        active (ActivePoint): The active point.
        remainder (int): Suffixes of the current phase still waiting to be inserted.
        last_new_internal_node (int): Internal node created in this phase that still
                                      needs a suffix link, or NO_NODE.
        phase (int): Index of the symbol being added, -1 before the first phase.
    """
    __slots__ = ('active', 'remainder', 'last_new_internal_node', 'phase')

    def __init__(self):
        self.active = ActivePoint()
        self.remainder = 0
        self.last_new_internal_node = NO_NODE
        self.phase = -1

    def __repr__(self) -> str:
        return (f"ConstructionContext(phase={self.phase}, active={self.active!r}, "
                f"remainder={self.remainder}, last_new_internal_node={self.last_new_internal_node})")


class ConstructionStep:
    """Snapshot of the builder right after one phase.

    Attributes:
        phase (int): Index of the symbol that was added.
        symbol (str): The symbol that was added.
        active_node (int): Id of the active node after the phase.
        active_edge_symbol (str | None): First symbol of the active edge, None when
                                         the active point sits on a node.
        active_length (int): Active length after the phase.
        remainder (int): Suffixes carried over to the next phase.
        node_count (int): Nodes allocated so far.
        edges (tuple[tuple[int, str], ...]): The partial tree as (depth, label) pairs in DFS order.
    """
    __slots__ = ('phase', 'symbol', 'active_node', 'active_edge_symbol',
                 'active_length', 'remainder', 'node_count', 'edges')

    def __init__(self, phase, symbol, active_node, active_edge_symbol,
                 active_length, remainder, node_count, edges):
        self.phase = phase
        self.symbol = symbol
        self.active_node = active_node
        self.active_edge_symbol = active_edge_symbol
        self.active_length = active_length
        self.remainder = remainder
        self.node_count = node_count
        self.edges = edges

    @property
    def message(self) -> str:
        return f"Extended with '{self.symbol}' (i={self.phase})"

    def __repr__(self) -> str:
        return (f"ConstructionStep(phase={self.phase}, symbol={self.symbol!r}, "
                f"active_node={self.active_node}, active_edge_symbol={self.active_edge_symbol!r}, "
                f"active_length={self.active_length}, remainder={self.remainder}, "
                f"node_count={self.node_count})")


class UkkonenBuilder:
    """Builds the suffix tree of a sentinel-terminated text with Ukkonen's algorithm.

    The text is validated when the builder is created; the tree itself is built
    by `build()`, which can only run once. After a successful build every open
    leaf is frozen and the arena is marked complete.

    Attributes:
        text (str): The input text, sentinel included.
        codes (np.ndarray): Symbol codes of the text.
        arena (NodeArena): Storage of the tree under construction.
        context (ConstructionContext): The algorithm's mutable state.
        steps (list[ConstructionStep]): One snapshot per phase if `record_steps` is set.
        complete (bool): True once `build()` has finished.
    """
    def __init__(self, text: str, record_steps: bool = False, verbose: bool = False):
        """Initializes the builder.

        Args:
            text: The text to index. It must end with the single sentinel.
            record_steps: If True, keep a `ConstructionStep` after every phase.
            verbose: If True, print construction progress to stderr.

        Raises:
            TypeError, InvalidInputError, UnsupportedSymbolError: If the text is rejected.
        """
        self.codes = encode_text(text)
        self.text = text
        self.symbols: list[int] = self.codes.tolist() # Plain ints are faster to compare in the hot loop
        self.arena = NodeArena(len(text))
        self.context = ConstructionContext()
        self.steps: list[ConstructionStep] = []
        self.record_steps = record_steps
        self.verbose = verbose
        self.complete = False

    def build(self) -> NodeArena:
        """Runs every phase and returns the finished arena.

        Raises:
            PreconditionViolation: If the tree has already been built.
            ConstructionAbortedError: If an internal invariant is violated.
        """
        if self.complete:
            raise PreconditionViolation("The suffix tree has already been built.")

        n = len(self.symbols)
        report_every = max(1, n // 10)
        if self.verbose:
            print(f"Building suffix tree for a text of {n:,} symbols...", file=sys.stderr)

        for i in range(n):
            self.extend(i)
            if self.record_steps:
                self._record_step(i)
            if self.verbose and (i + 1) % report_every == 0:
                print(f"  Phase {i + 1:,}/{n:,}: {self.arena.size:,} nodes, "
                      f"remainder {self.context.remainder}", file=sys.stderr)

        if self.context.remainder != 0:
            # With a unique sentinel the last phase always makes every suffix explicit.
            raise ConstructionAbortedError(
                f"{self.context.remainder} suffix(es) left uninserted after the final phase.")

        self.arena.freeze_open_leaves()
        self.arena.complete = True
        self.complete = True
        if self.verbose:
            print(f"Suffix tree built: {self.arena.size:,} nodes.", file=sys.stderr)
        return self.arena

    def extend(self, i: int) -> None:
        """Runs phase `i`: adds `text[i]` to every suffix inserted so far.

        Args:
            i: Index of the symbol to add.
        """
        arena = self.arena
        ctx = self.context
        active = ctx.active
        symbols = self.symbols
        current = symbols[i]

        arena.leaf_end = i # Extends every open leaf by one symbol
        ctx.phase = i
        ctx.remainder += 1
        ctx.last_new_internal_node = NO_NODE

        while ctx.remainder > 0:
            if active.length == 0:
                active.edge = i

            edge_code = symbols[active.edge]
            next_node = arena.child(active.node, edge_code)

            if next_node == NO_NODE:
                if active.length > 0:
                    raise ConstructionAbortedError(
                        f"Active point {active!r} points into a missing edge in phase {i}.")
                # Rule A: no edge for this symbol yet, hang a new open leaf.
                arena.set_child(active.node, edge_code, arena.new_node(i))
                self._resolve_suffix_link(active.node)
            else:
                if self._walk_down(next_node):
                    continue

                if symbols[int(arena.label_start[next_node]) + active.length] == current:
                    # Rule B: the suffix is already implicitly present, and so are all shorter ones.
                    active.length += 1
                    self._resolve_suffix_link(active.node)
                    break

                # Rule C: mismatch inside the edge, split it.
                split_node = self._split_edge(next_node, edge_code)
                arena.set_child(split_node, current, arena.new_node(i))
                if ctx.last_new_internal_node != NO_NODE:
                    arena.suffix_link[ctx.last_new_internal_node] = split_node
                ctx.last_new_internal_node = split_node

            ctx.remainder -= 1
            self._advance_active_point(i)

    def _walk_down(self, next_node: int) -> bool:
        """Skips over `next_node`'s whole edge if the active length covers it."""
        active = self.context.active
        edge_length = self.arena.edge_length(next_node)
        if active.length >= edge_length:
            active.node = next_node
            active.edge += edge_length
            active.length -= edge_length
            return True
        return False

    def _split_edge(self, next_node: int, edge_code: int) -> int:
        """Splits the active edge at the active length and returns the new internal node.

        The new node takes the first `active.length` symbols of the edge with a
        frozen end; `next_node` keeps the rest of the label and its own end.
        """
        arena = self.arena
        active = self.context.active
        start = int(arena.label_start[next_node])
        split_end = start + active.length - 1

        split_node = arena.new_node(start, split_end)
        arena.set_child(active.node, edge_code, split_node)
        arena.label_start[next_node] = split_end + 1
        arena.set_child(split_node, self.symbols[split_end + 1], next_node)
        return split_node

    def _resolve_suffix_link(self, target: int) -> None:
        """Points the pending internal node's suffix link at `target` and clears it."""
        ctx = self.context
        if ctx.last_new_internal_node != NO_NODE:
            self.arena.suffix_link[ctx.last_new_internal_node] = target
            ctx.last_new_internal_node = NO_NODE

    def _advance_active_point(self, i: int) -> None:
        """Moves the active point to where the next shorter suffix is inserted."""
        ctx = self.context
        active = ctx.active
        if active.node == ROOT and active.length > 0:
            active.length -= 1
            active.edge = i - ctx.remainder + 1
        elif active.node != ROOT:
            link = int(self.arena.suffix_link[active.node])
            active.node = ROOT if link == NO_NODE else link
        if active.length < 0:
            raise ConstructionAbortedError(f"Negative active length in phase {i}: {active!r}.")

    def _record_step(self, i: int) -> None:
        active = self.context.active
        edge_symbol = _SYMBOLS[self.symbols[active.edge]] if active.length > 0 else None
        self.steps.append(ConstructionStep(
            phase=i,
            symbol=self.text[i],
            active_node=active.node,
            active_edge_symbol=edge_symbol,
            active_length=active.length,
            remainder=self.context.remainder,
            node_count=self.arena.size,
            edges=tuple(TreeTraversal(self.arena, self.text)),
        ))

    def __repr__(self) -> str:
        return f"UkkonenBuilder(len={len(self.text)}, complete={self.complete}, context={self.context!r})"
