"""Unit tests for settlement explanations."""

from __future__ import annotations

import unittest

from advisor.app.catan import board_generator, explanations, geometry
from advisor.app.catan.engine import placement
from advisor.app.catan.models import scoring
from advisor.app.catan.models.board import PortType, ResourceType, VertexDirection
from advisor.app.catan.scoring import calculator

SPOT = geometry.vertex_id(0, 0, VertexDirection.N)


class TestExplanations(unittest.TestCase):
    """Tests for generate_explanation in both modes."""

    def setUp(self) -> None:
        board = board_generator.create_empty_board()
        board = board_generator.set_hex('hex_0_0', board, ResourceType.WHEAT, 6)
        board = board_generator.set_hex('hex_0_-1', board, ResourceType.ORE, 8)
        board = board_generator.set_hex('hex_1_-1', board, ResourceType.SHEEP, 5)
        self.board = board
        self.vertex = board.vertices[SPOT]
        self.hexes = board.adjacent_hexes(self.vertex)
        self.breakdown = calculator.score_breakdown(self.vertex, board)

    def _explain(self, mode: str, **kwargs) -> list[str]:
        text = explanations.generate_explanation(
            self.hexes, self.breakdown, mode, **kwargs
        )
        return text.split('\n')

    def test_guide_income_and_variety(self) -> None:
        lines = self._explain('guide')
        self.assertTrue(lines[0].startswith('Adjacent to: '))
        for part in ('Wheat (6)', 'Ore (8)', 'Sheep (5)'):
            self.assertIn(part, lines[0])
        self.assertIn('Excellent income: two or more 6/8 hexes.', lines)
        self.assertIn('Great variety: 3 resources (Wheat, Ore, Sheep).', lines)
        self.assertIn('Self-supplies cities and development cards.', lines)
        self.assertFalse(any(line.startswith('Weaknesses') for line in lines))

    def test_guide_weaknesses(self) -> None:
        hexes = [
            self.board.hexes['hex_0_1'],  # desert
            self.board.hexes['hex_0_0'].model_copy(update={'number': 12}),
        ]
        text = explanations.generate_explanation(
            hexes, scoring.ScoreBreakdown(), scoring.ExplanationMode.GUIDE
        )
        self.assertIn('Low income', text)
        self.assertIn('Single resource: Wheat only.', text)
        self.assertIn('touches the desert', text)
        self.assertIn('only rare numbers', text)
        self.assertIn('only 1 producing hex', text)
        self.assertIn('Boxed in', text)

    def test_guide_port_line(self) -> None:
        vertex = self.vertex.model_copy(update={'port': PortType.ORE})
        lines = self._explain('guide', vertex=vertex)
        self.assertIn('2:1 Ore port paired with Ore production.', lines)
        vertex = self.vertex.model_copy(update={'port': PortType.GENERIC})
        lines = self._explain('guide', vertex=vertex)
        self.assertIn('3:1 port: trade any surplus at better rates.', lines)

    def test_guide_complement_needs_own_settlement(self) -> None:
        lines = self._explain('guide', brd=self.board, player_color='red')
        self.assertFalse(any(line.startswith('Adds') for line in lines))

        far = geometry.vertex_id(-2, 2, VertexDirection.S)
        board = board_generator.set_hex('hex_-2_2', self.board, ResourceType.ORE, 3)
        board = placement.place_settlement(far, board, 'red')
        lines = self._explain('guide', brd=board, player_color='red')
        self.assertIn('Adds Wheat, Sheep to your settlements.', lines)
        self.assertIn('Self-supplies cities and development cards.', lines)

    def test_guide_scarcity(self) -> None:
        board = board_generator.set_hex('hex_-2_2', self.board, ResourceType.WHEAT, 8)
        lines = self._explain('guide', brd=board)
        self.assertIn('Sheep is scarce on this board.', lines)

    def test_scholar_table(self) -> None:
        lines = self._explain('scholar', vertex=self.vertex, brd=self.board)
        self.assertEqual(lines[0], 'Adjacent hexes:')
        self.assertIn('  Wheat 6: 5 pips (13.9%)', lines)
        self.assertIn('Production: 14/36 = 38.9% per roll', lines)
        self.assertIn('Port: none', lines)
        self.assertIn('Board abundance (max 5 pips):', lines)
        self.assertIn('Weights: Balanced', lines)
        total = self.breakdown.weighted_total(scoring.DEFAULT_WEIGHTS)
        self.assertTrue(lines[-1].strip().startswith('Total'))
        self.assertTrue(lines[-1].endswith(f'{total:.3f}'))

    def test_scholar_without_context(self) -> None:
        text = '\n'.join(self._explain('scholar'))
        self.assertNotIn('Port:', text)
        self.assertNotIn('Board abundance', text)
        self.assertNotIn('Complement:', text)

    def test_scholar_custom_weights(self) -> None:
        weights = scoring.ScoreWeights(port=0.9)
        lines = self._explain('scholar', weights=weights)
        self.assertIn('Weights: Custom', lines)
        lines = self._explain(
            'scholar', weights=scoring.SCORE_PRESETS['road_rush'].weights
        )
        self.assertIn('Weights: Road Rush', lines)

    def test_unknown_mode(self) -> None:
        with self.assertRaises(ValueError):
            explanations.generate_explanation(self.hexes, self.breakdown, 'poet')


if __name__ == '__main__':
    unittest.main()
