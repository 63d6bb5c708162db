"""Unit tests for settlement and road placement rules."""

from __future__ import annotations

import random
import unittest

from advisor.app.catan import board_generator, geometry
from advisor.app.catan.engine import placement
from advisor.app.catan.models.board import VertexDirection


class TestSettlementPlacement(unittest.TestCase):
    """Tests for the distance rule and settlement place/remove."""

    def setUp(self) -> None:
        self.board = board_generator.generate_balanced_board(seed=1)
        self.vid = geometry.vertex_id(0, 0, VertexDirection.N)

    def test_all_vertices_valid_on_fresh_board(self) -> None:
        self.assertEqual(len(placement.get_valid_placements(self.board)), 54)

    def test_unknown_vertex_invalid(self) -> None:
        self.assertFalse(placement.is_valid_placement('vertex_x', self.board))

    def test_place_marks_vertex(self) -> None:
        board = placement.place_settlement(self.vid, self.board, 'blue')
        vertex = board.vertices[self.vid]
        self.assertTrue(vertex.has_settlement)
        self.assertEqual(vertex.player_color, 'blue')
        self.assertFalse(self.board.vertices[self.vid].has_settlement)

    def test_default_colour_is_red(self) -> None:
        board = placement.place_settlement(self.vid, self.board)
        self.assertEqual(board.vertices[self.vid].player_color, 'red')

    def test_occupied_vertex_rejected(self) -> None:
        board = placement.place_settlement(self.vid, self.board)
        again = placement.place_settlement(self.vid, board, 'blue')
        self.assertIs(again, board)

    def test_neighbour_rejected(self) -> None:
        board = placement.place_settlement(self.vid, self.board)
        for adj in board.vertices[self.vid].adjacent_vertices:
            self.assertFalse(placement.is_valid_placement(adj, board))
            self.assertIs(placement.place_settlement(adj, board, 'blue'), board)

    def test_two_edges_away_allowed(self) -> None:
        board = placement.place_settlement(self.vid, self.board)
        adj = board.vertices[self.vid].adjacent_vertices[0]
        two_away = [
            v for v in board.vertices[adj].adjacent_vertices if v != self.vid
        ]
        self.assertTrue(placement.is_valid_placement(two_away[0], board))

    def test_try_place_reports_reason(self) -> None:
        board = placement.place_settlement(self.vid, self.board)
        adj = board.vertices[self.vid].adjacent_vertices[0]
        result = placement.try_place_settlement(adj, board, 'blue')
        self.assertFalse(result.success)
        self.assertIs(result.updated_board, board)
        self.assertIn('Too close', result.reason or '')

    def test_try_place_unknown(self) -> None:
        result = placement.try_place_settlement('vertex_x', self.board)
        self.assertFalse(result.success)
        self.assertIn('Unknown vertex', result.reason or '')

    def test_distance_rule_holds_after_random_placements(self) -> None:
        """No two settled vertices are ever adjacent."""
        rng = random.Random(7)
        board = self.board
        ids = sorted(board.vertices)
        for _ in range(200):
            board = placement.place_settlement(rng.choice(ids), board, 'red')
        settled = {v.id for v in board.settlements()}
        self.assertGreater(len(settled), 1)
        for vid in settled:
            for adj in board.vertices[vid].adjacent_vertices:
                self.assertNotIn(adj, settled)

    def test_round_trip_removal(self) -> None:
        board = placement.place_settlement(self.vid, self.board, 'red')
        restored = placement.remove_settlement(self.vid, board)
        self.assertEqual(restored.vertices[self.vid], self.board.vertices[self.vid])

    def test_remove_empty_vertex_is_noop(self) -> None:
        self.assertIs(placement.remove_settlement(self.vid, self.board), self.board)
        self.assertIs(placement.remove_settlement('vertex_x', self.board), self.board)

    def test_placement_shares_hex_map(self) -> None:
        board = placement.place_settlement(self.vid, self.board)
        self.assertIs(board.hexes, self.board.hexes)

    def test_clear_settlements(self) -> None:
        board = placement.place_settlement(self.vid, self.board, 'red')
        adj = board.vertices[self.vid].adjacent_vertices[0]
        board = placement.place_road(self.vid, adj, board, 'red')
        cleared = placement.clear_settlements(board)
        self.assertEqual(cleared.settlements(), [])
        self.assertEqual(cleared.edges, {})
        self.assertEqual(cleared.ports, self.board.ports)

    def test_clear_empty_board_is_noop(self) -> None:
        self.assertIs(placement.clear_settlements(self.board), self.board)


class TestRoadPlacement(unittest.TestCase):
    """Tests for road placement and cascading removal."""

    def setUp(self) -> None:
        board = board_generator.generate_balanced_board(seed=1)
        self.vid = geometry.vertex_id(0, 0, VertexDirection.N)
        self.board = placement.place_settlement(self.vid, board, 'red')
        self.adj = self.board.vertices[self.vid].adjacent_vertices[0]

    def test_place_road(self) -> None:
        board = placement.place_road(self.vid, self.adj, self.board, 'red')
        eid = geometry.edge_id(self.vid, self.adj)
        self.assertIn(eid, board.edges)
        self.assertEqual(board.edges[eid].player_color, 'red')
        self.assertTrue(board.edges[eid].has_road)

    def test_road_requires_own_settlement(self) -> None:
        result = placement.try_place_road(self.vid, self.adj, self.board, 'blue')
        self.assertFalse(result.success)
        self.assertIs(result.updated_board, self.board)

    def test_road_requires_settlement_at_origin(self) -> None:
        board = placement.place_road(self.adj, self.vid, self.board, 'red')
        self.assertIs(board, self.board)

    def test_road_requires_adjacent_endpoint(self) -> None:
        far = geometry.vertex_id(0, 0, VertexDirection.S)
        result = placement.try_place_road(self.vid, far, self.board, 'red')
        self.assertFalse(result.success)
        self.assertEqual(result.reason, 'Road endpoints are not adjacent')

    def test_road_once_per_edge(self) -> None:
        board = placement.place_road(self.vid, self.adj, self.board, 'red')
        self.assertIs(placement.place_road(self.vid, self.adj, board, 'red'), board)

    def test_remove_settlement_cascades_roads(self) -> None:
        board = placement.place_road(self.vid, self.adj, self.board, 'red')
        removed = placement.remove_settlement(self.vid, board)
        self.assertEqual(removed.edges, {})
        self.assertFalse(removed.vertices[self.vid].has_settlement)

    def test_remove_keeps_other_roads(self) -> None:
        other = geometry.vertex_id(0, 0, VertexDirection.S)
        board = placement.place_settlement(other, self.board, 'blue')
        board = placement.place_road(self.vid, self.adj, board, 'red')
        blue_adj = board.vertices[other].adjacent_vertices[0]
        board = placement.place_road(other, blue_adj, board, 'blue')
        removed = placement.remove_settlement(self.vid, board)
        self.assertEqual(len(removed.edges), 1)
        self.assertIn(geometry.edge_id(other, blue_adj), removed.edges)


if __name__ == '__main__':
    unittest.main()
