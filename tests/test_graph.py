"""Tests for the structural graph analyzer."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from rulerift.board import Board, create_board, set_relation
from rulerift.graph import (
    GridGraph,
    articulation_points,
    build_graph,
    count_components,
)
from rulerift.models import Direction, Relation


def _board_from_mask(size: int, mask: list[bool]) -> Board:
    board = create_board(size)
    for i, blocked in enumerate(mask):
        board.cells[i // size][i % size].blocked = blocked
    return board


def _without(graph: GridGraph, node) -> GridGraph:
    return GridGraph(adjacency={
        other: [n for n in neighbors if n != node]
        for other, neighbors in graph.adjacency.items()
        if other != node
    })


def _brute_force_cut_vertices(graph: GridGraph) -> frozenset:
    """Nodes whose removal raises the component count."""
    base = count_components(graph)
    return frozenset(
        node for node in graph.nodes
        if count_components(_without(graph, node)) > base
    )


masks = st.integers(min_value=3, max_value=5).flatmap(
    lambda n: st.tuples(
        st.just(n),
        st.lists(st.booleans(), min_size=n * n, max_size=n * n),
    )
)


class TestBuildGraph:
    def test_open_cells_only(self, make_board) -> None:
        graph = build_graph(make_board(". # .", "...", "..."))
        assert len(graph) == 8
        assert (0, 1) not in graph
        assert sorted(graph.adjacency[(0, 0)]) == [(1, 0)]
        assert graph.degree((1, 1)) == 3
        assert graph.degree((0, 1)) == 0

    def test_relation_edges(self) -> None:
        board = create_board(3)
        set_relation(board, 0, 0, Direction.RIGHT, Relation.LESS_THAN)
        graph = build_graph(board)
        assert ((0, 0), (0, 1), Relation.LESS_THAN) in graph.relation_edges
        assert ((0, 1), (0, 0), Relation.GREATER_THAN) in graph.relation_edges
        assert len(graph.relation_edges) == 2


class TestArticulationPoints:
    def test_full_grid_has_none(self) -> None:
        assert articulation_points(build_graph(create_board(4))) == frozenset()

    def test_corridor(self, corridor_board) -> None:
        cut = articulation_points(build_graph(corridor_board))
        assert cut == frozenset({(2, 1), (2, 2), (2, 3)})

    def test_hub(self, hub_board) -> None:
        cut = articulation_points(build_graph(hub_board))
        assert (2, 2) in cut
        assert cut == _brute_force_cut_vertices(build_graph(hub_board))

    def test_disconnected_graph(self, make_board) -> None:
        board = make_board(". # .", ". # .", ". # .")
        graph = build_graph(board)
        assert count_components(graph) == 2
        assert articulation_points(graph) == frozenset({(1, 0), (1, 2)})

    def test_empty_graph(self, make_board) -> None:
        graph = build_graph(make_board("###", "###", "###"))
        assert count_components(graph) == 0
        assert articulation_points(graph) == frozenset()

    @given(masks, st.randoms(use_true_random=False))
    @settings(max_examples=60, deadline=None)
    def test_matches_brute_force(self, case, rnd) -> None:
        size, mask = case
        graph = build_graph(_board_from_mask(size, mask))
        expected = _brute_force_cut_vertices(graph)
        assert articulation_points(graph) == expected

        order = graph.nodes
        rnd.shuffle(order)
        assert articulation_points(graph, order=order) == expected
