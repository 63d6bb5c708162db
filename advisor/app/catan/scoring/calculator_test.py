"""Unit tests for weighted scoring and recommendations."""

from __future__ import annotations

import unittest
from unittest import mock

from advisor.app.catan import board_generator
from advisor.app.catan.engine import placement
from advisor.app.catan.models import scoring
from advisor.app.catan.scoring import calculator


class TestCalculateVertexScore(unittest.TestCase):
    """Tests for calculate_vertex_score."""

    def setUp(self) -> None:
        self.board = board_generator.generate_random_board(seed=7)
        self.vertex_id = placement.get_valid_placements(self.board)[0]

    def test_total_is_weighted_breakdown(self) -> None:
        score = calculator.calculate_vertex_score(self.vertex_id, self.board)
        assert score is not None
        self.assertEqual(score.vertex_id, self.vertex_id)
        self.assertAlmostEqual(
            score.total_score,
            score.breakdown.weighted_total(scoring.DEFAULT_WEIGHTS),
        )
        self.assertTrue(score.explanation)

    def test_custom_weights_change_total(self) -> None:
        weights = scoring.ScoreWeights(probability=0, diversity=0, number_quality=0)
        score = calculator.calculate_vertex_score(self.vertex_id, self.board, weights)
        assert score is not None
        self.assertAlmostEqual(
            score.total_score, score.breakdown.weighted_total(weights)
        )

    def test_unknown_vertex_returns_none(self) -> None:
        self.assertIsNone(calculator.calculate_vertex_score('vertex_x', self.board))

    def test_occupied_or_blocked_vertex_returns_none(self) -> None:
        board = placement.place_settlement(self.vertex_id, self.board, 'blue')
        self.assertIsNone(calculator.calculate_vertex_score(self.vertex_id, board))
        neighbour = board.vertices[self.vertex_id].adjacent_vertices[0]
        self.assertIsNone(calculator.calculate_vertex_score(neighbour, board))

    def test_scholar_mode_by_name(self) -> None:
        score = calculator.calculate_vertex_score(
            self.vertex_id, self.board, mode='scholar'
        )
        assert score is not None
        self.assertIn('Total', score.explanation)

    def test_unknown_mode_raises(self) -> None:
        with self.assertRaises(ValueError):
            calculator.calculate_vertex_score(self.vertex_id, self.board, mode='bogus')

    @mock.patch('common.settings.EXPLANATION_MODE', 'scholar')
    def test_default_mode_from_settings(self) -> None:
        score = calculator.calculate_vertex_score(self.vertex_id, self.board)
        assert score is not None
        self.assertIn('Weights: Balanced', score.explanation)


class TestTopRecommendations(unittest.TestCase):
    """Tests for get_top_recommendations."""

    def setUp(self) -> None:
        self.board = board_generator.generate_random_board(seed=21)

    def test_default_count_and_order(self) -> None:
        top = calculator.get_top_recommendations(self.board)
        self.assertEqual(len(top), 5)
        totals = [s.total_score for s in top]
        self.assertEqual(totals, sorted(totals, reverse=True))
        for score in top:
            self.assertTrue(placement.is_valid_placement(score.vertex_id, self.board))

    def test_top_is_best_legal_vertex(self) -> None:
        best = calculator.get_top_recommendations(self.board, count=1)[0]
        for vid in placement.get_valid_placements(self.board):
            score = calculator.calculate_vertex_score(vid, self.board)
            assert score is not None
            self.assertLessEqual(score.total_score, best.total_score)

    @mock.patch('common.settings.RECOMMENDATION_COUNT', 3)
    def test_count_from_settings(self) -> None:
        self.assertEqual(len(calculator.get_top_recommendations(self.board)), 3)

    def test_count_larger_than_legal_spots(self) -> None:
        top = calculator.get_top_recommendations(self.board, count=100)
        self.assertEqual(len(top), len(placement.get_valid_placements(self.board)))

    def test_settled_spots_excluded(self) -> None:
        first = calculator.get_top_recommendations(self.board, count=1)[0]
        board = placement.place_settlement(first.vertex_id, self.board, 'red')
        ids = {s.vertex_id for s in calculator.get_top_recommendations(board, 54)}
        self.assertNotIn(first.vertex_id, ids)
        for vid in board.vertices[first.vertex_id].adjacent_vertices:
            self.assertNotIn(vid, ids)

    def test_port_weight_raises_port_vertex_totals(self) -> None:
        low = scoring.ScoreWeights(port=0.0)
        high = scoring.ScoreWeights(port=2.0)
        for vid in self.board.ports:
            a = calculator.calculate_vertex_score(vid, self.board, low)
            b = calculator.calculate_vertex_score(vid, self.board, high)
            assert a is not None and b is not None
            self.assertGreater(b.total_score, a.total_score)

    def test_empty_board_has_no_production(self) -> None:
        board = board_generator.create_empty_board()
        top = calculator.get_top_recommendations(board, count=1)
        self.assertEqual(top[0].breakdown.probability_score, 0.0)


if __name__ == '__main__':
    unittest.main()
