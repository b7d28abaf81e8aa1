"""Structural graph analysis for RuleRift boards.

Every non-blocked cell is a node; edges join orthogonally adjacent
non-blocked cells. Blocking a cell removes its node, so the selectors use
this view to measure fragmentation and chokepoints:

- :func:`build_graph` builds the adjacency in one pass over the grid.
- :func:`articulation_points` finds cut vertices with a single low-link DFS
  per component.
- :func:`count_components` counts connected regions.

The graph is derived and ephemeral: rebuild it whenever the blocked set
changes. Placing numbers never changes it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import chain
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from .board import DIRECTIONS, Board, Coord
from .models import Relation


@dataclass(slots=True)
class GridGraph:
    """Adjacency of the open cells of one board position."""

    adjacency: Dict[Coord, List[Coord]] = field(default_factory=dict)
    # (from, to, relation) for every recorded inequality between cells.
    # Not graph edges; kept for diagnostics and rule tooling.
    relation_edges: List[Tuple[Coord, Coord, Relation]] = field(
        default_factory=list
    )

    def __len__(self) -> int:
        return len(self.adjacency)

    def __contains__(self, node: Coord) -> bool:
        return node in self.adjacency

    @property
    def nodes(self) -> List[Coord]:
        return list(self.adjacency)

    def degree(self, node: Coord) -> int:
        """Neighbour count of ``node``; 0 for nodes not in the graph."""
        return len(self.adjacency.get(node, ()))


def build_graph(board: Board) -> GridGraph:
    """Build the open-cell adjacency of ``board``."""
    graph = GridGraph()
    cells = board.cells
    n = len(cells)

    for r in range(n):
        for c in range(n):
            if not cells[r][c].blocked:
                graph.adjacency[(r, c)] = []

    for (r, c), neighbors in graph.adjacency.items():
        cell = cells[r][c]
        for direction in DIRECTIONS:
            dr, dc = direction.offset
            nr, nc = r + dr, c + dc
            if not (0 <= nr < n and 0 <= nc < n):
                continue
            rel = cell.relations.get(direction)
            if rel is not None:
                graph.relation_edges.append(((r, c), (nr, nc), rel))
            if not cells[nr][nc].blocked:
                neighbors.append((nr, nc))

    return graph


def articulation_points(
    graph: GridGraph,
    order: Optional[Iterable[Coord]] = None,
) -> FrozenSet[Coord]:
    """Return the cut vertices of ``graph``.

    Each node gets a discovery index and a low-link value (the lowest index
    reachable through one back edge from its DFS subtree). A non-root node
    is a cut vertex iff some DFS child has ``low[child] >= index[node]``;
    a DFS root is one iff it has more than one DFS child.

    Every unvisited node starts a new DFS, so disconnected graphs are
    handled. ``order`` only changes which nodes are tried first as roots;
    the returned set does not depend on it.

    The DFS is iterative so deep corridors never hit the recursion limit.
    """
    adjacency = graph.adjacency
    index: Dict[Coord, int] = {}
    low: Dict[Coord, int] = {}
    cut: set = set()
    counter = 0

    starts = chain(order, adjacency) if order is not None else adjacency
    for root in starts:
        if root in index or root not in adjacency:
            continue

        index[root] = low[root] = counter
        counter += 1
        root_children = 0
        stack = [(root, None, iter(adjacency[root]))]

        while stack:
            node, parent, neighbors = stack[-1]
            descended = False
            for nxt in neighbors:
                if nxt not in index:
                    index[nxt] = low[nxt] = counter
                    counter += 1
                    stack.append((nxt, node, iter(adjacency[nxt])))
                    descended = True
                    break
                if nxt != parent:
                    # Back edge
                    if index[nxt] < low[node]:
                        low[node] = index[nxt]
            if descended:
                continue

            stack.pop()
            if parent is None:
                continue
            if low[node] < low[parent]:
                low[parent] = low[node]
            if parent == root:
                root_children += 1
            elif low[node] >= index[parent]:
                cut.add(parent)

        if root_children > 1:
            cut.add(root)

    return frozenset(cut)


def count_components(graph: GridGraph) -> int:
    """Number of connected components; 0 for an empty graph."""
    adjacency = graph.adjacency
    seen: set = set()
    components = 0
    for start in adjacency:
        if start in seen:
            continue
        components += 1
        seen.add(start)
        stack = [start]
        while stack:
            node = stack.pop()
            for nxt in adjacency[node]:
                if nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
    return components
