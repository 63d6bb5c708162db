"""Weighted settlement scoring and ranked recommendations."""

from __future__ import annotations

import common.settings

from .. import explanations
from ..engine import placement
from ..models import board, scoring
from . import components


def score_breakdown(
    vertex: board.Vertex, brd: board.Board, player_color: str = 'red'
) -> scoring.ScoreBreakdown:
    """Compute every raw component for *vertex* without checking legality."""
    hexes = brd.adjacent_hexes(vertex)
    return scoring.ScoreBreakdown(
        probability_score=components.probability_score(hexes, brd, player_color),
        diversity_score=components.diversity_score(hexes, brd, player_color),
        number_quality_score=components.number_quality_score(hexes),
        port_score=components.port_score(vertex, hexes),
        expansion_score=components.expansion_score(vertex.id, brd),
        scarcity_score=components.scarcity_score(hexes, brd),
        complement_score=components.complement_score(hexes, brd, player_color),
    )


def calculate_vertex_score(
    vertex_id: str,
    brd: board.Board,
    weights: scoring.ScoreWeights | None = None,
    mode: scoring.ExplanationMode | str | None = None,
    player_color: str = 'red',
) -> scoring.VertexScore | None:
    """Score one vertex, or return None if a settlement cannot go there.

    Raises:
        ValueError: *mode* is not a known explanation mode.
    """
    if weights is None:
        weights = scoring.DEFAULT_WEIGHTS
    mode = scoring.ExplanationMode(mode or common.settings.EXPLANATION_MODE)

    vertex = brd.vertices.get(vertex_id)
    if vertex is None or not placement.is_valid_placement(vertex_id, brd):
        return None

    breakdown = score_breakdown(vertex, brd, player_color)
    explanation = explanations.generate_explanation(
        brd.adjacent_hexes(vertex),
        breakdown,
        mode,
        vertex=vertex,
        brd=brd,
        player_color=player_color,
        weights=weights,
    )
    return scoring.VertexScore(
        vertex_id=vertex_id,
        total_score=breakdown.weighted_total(weights),
        breakdown=breakdown,
        explanation=explanation,
    )


def get_top_recommendations(
    brd: board.Board,
    count: int | None = None,
    weights: scoring.ScoreWeights | None = None,
    mode: scoring.ExplanationMode | str | None = None,
    player_color: str = 'red',
) -> list[scoring.VertexScore]:
    """Return the *count* best legal vertices, highest total first.

    Ties are broken by vertex ID so the ranking is stable.
    """
    if count is None:
        count = common.settings.RECOMMENDATION_COUNT
    scores: list[scoring.VertexScore] = []
    for vid in brd.vertices:
        score = calculate_vertex_score(vid, brd, weights, mode, player_color)
        if score is not None:
            scores.append(score)
    scores.sort(key=lambda s: (-s.total_score, s.vertex_id))
    return scores[:count]
