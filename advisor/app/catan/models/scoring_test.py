"""Unit tests for scoring models and presets."""

from __future__ import annotations

import unittest

import pydantic

from advisor.app.catan.models import scoring


class TestScoreWeights(unittest.TestCase):
    """Tests for ScoreWeights and presets."""

    def test_defaults(self) -> None:
        weights = scoring.ScoreWeights()
        self.assertEqual(weights.probability, 1.0)
        self.assertEqual(weights.diversity, 0.8)
        self.assertEqual(weights.number_quality, 0.6)
        self.assertEqual(weights.port, 0.5)
        self.assertEqual(weights.expansion, 0.4)
        self.assertEqual(weights.scarcity, 0.3)
        self.assertEqual(weights.complement, 0.7)

    def test_mutable_but_validated(self) -> None:
        weights = scoring.ScoreWeights()
        weights.port = 2.0
        self.assertEqual(weights.port, 2.0)
        with self.assertRaises(pydantic.ValidationError):
            weights.port = -1.0

    def test_negative_rejected(self) -> None:
        with self.assertRaises(pydantic.ValidationError):
            scoring.ScoreWeights(expansion=-0.1)

    def test_four_presets(self) -> None:
        self.assertEqual(
            set(scoring.SCORE_PRESETS),
            {'balanced', 'city_builder', 'road_rush', 'port_trader'},
        )
        balanced = scoring.SCORE_PRESETS['balanced']
        self.assertEqual(balanced.weights, scoring.DEFAULT_WEIGHTS)
        self.assertEqual(scoring.SCORE_PRESETS['port_trader'].weights.port, 1.2)

    def test_match_preset(self) -> None:
        self.assertEqual(scoring.match_preset(scoring.ScoreWeights()), 'balanced')
        road_rush = scoring.SCORE_PRESETS['road_rush'].weights.model_copy()
        self.assertEqual(scoring.match_preset(road_rush), 'road_rush')
        self.assertIsNone(scoring.match_preset(scoring.ScoreWeights(port=0.55)))


class TestScoreBreakdown(unittest.TestCase):
    """Tests for ScoreBreakdown weighting."""

    def setUp(self) -> None:
        self.breakdown = scoring.ScoreBreakdown(
            probability_score=0.3,
            diversity_score=0.6,
            number_quality_score=2.0,
            port_score=0.4,
            expansion_score=0.5,
            scarcity_score=0.1,
            complement_score=0.0,
        )

    def test_contributions_in_display_order(self) -> None:
        contributions = self.breakdown.contributions(scoring.DEFAULT_WEIGHTS)
        self.assertEqual(tuple(contributions), scoring.COMPONENTS)
        self.assertAlmostEqual(contributions['number_quality'], 1.2)

    def test_weighted_total(self) -> None:
        expected = 0.3 * 1.0 + 0.6 * 0.8 + 2.0 * 0.6 + 0.4 * 0.5 + 0.5 * 0.4 + 0.1 * 0.3
        self.assertAlmostEqual(
            self.breakdown.weighted_total(scoring.DEFAULT_WEIGHTS), expected
        )

    def test_raising_weight_never_lowers_total(self) -> None:
        base = scoring.ScoreWeights()
        for name in scoring.COMPONENTS:
            higher = base.model_copy(update={name: getattr(base, name) + 0.5})
            self.assertGreaterEqual(
                self.breakdown.weighted_total(higher),
                self.breakdown.weighted_total(base),
            )

    def test_raising_weight_keeps_order(self) -> None:
        """A vertex better in one component stays ahead when that weight grows."""
        better = self.breakdown.model_copy(update={'port_score': 0.9})
        for port_weight in (0.0, 0.5, 1.0, 3.0):
            weights = scoring.ScoreWeights(port=port_weight)
            self.assertGreaterEqual(
                better.weighted_total(weights), self.breakdown.weighted_total(weights)
            )


if __name__ == '__main__':
    unittest.main()
