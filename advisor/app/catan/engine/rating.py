"""Board quality rating.

Scores a board on three 0-100 axes and reduces the weighted composite to a
letter grade:

* number spread (weight 0.40): -12 per adjacent pair of strong hexes (4+
  pips, i.e. 5/6/8/9).  The generator already forbids 6-8, so this catches the
  residual clustering (5-9, 5-6 and so on).
* resource spread (0.35): -15 per adjacent pair of same-resource hexes,
  desert excluded.
* resource diversity (0.25): mean distinct resources over vertices touching
  two or more producing hexes, mapped 1.0 -> 0 and 2.5 -> 100.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from .. import geometry
from ..models import board, scoring

_STRONG_PIPS = 4
_NUMBER_SPREAD_PENALTY = 12
_RESOURCE_SPREAD_PENALTY = 15

_WEIGHTS = {
    'number_spread': 0.40,
    'resource_spread': 0.35,
    'resource_diversity': 0.25,
}

# Minimum composite score for each grade, best first.
_GRADE_THRESHOLDS: list[tuple[int, scoring.Grade]] = [
    (85, scoring.Grade.S),
    (70, scoring.Grade.A),
    (55, scoring.Grade.B),
    (40, scoring.Grade.C),
    (25, scoring.Grade.D),
]

GRADE_LABELS: dict[scoring.Grade, str] = {
    scoring.Grade.S: 'Exceptional',
    scoring.Grade.A: 'Well Balanced',
    scoring.Grade.B: 'Good',
    scoring.Grade.C: 'Average',
    scoring.Grade.D: 'Uneven',
    scoring.Grade.F: 'Chaotic',
}


def rate_board(brd: board.Board) -> scoring.BoardRating:
    """Return the composite rating of *brd*."""
    breakdown = scoring.BoardRatingBreakdown(
        number_spread=rate_number_spread(brd),
        resource_spread=rate_resource_spread(brd),
        resource_diversity=rate_resource_diversity(brd),
    )
    score = _round_half_up(
        sum(getattr(breakdown, axis) * weight for axis, weight in _WEIGHTS.items())
    )
    grade = score_to_grade(score)
    return scoring.BoardRating(
        score=score, grade=grade, label=GRADE_LABELS[grade], breakdown=breakdown
    )


def score_to_grade(score: int) -> scoring.Grade:
    for threshold, grade in _GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return scoring.Grade.F


def rate_number_spread(brd: board.Board) -> int:
    pairs = _adjacent_pairs(
        brd,
        lambda a, b: a.pips >= _STRONG_PIPS and b.pips >= _STRONG_PIPS,
    )
    return max(0, 100 - pairs * _NUMBER_SPREAD_PENALTY)


def rate_resource_spread(brd: board.Board) -> int:
    pairs = _adjacent_pairs(
        brd,
        lambda a, b: a.resource == b.resource
        and a.resource != board.ResourceType.DESERT,
    )
    return max(0, 100 - pairs * _RESOURCE_SPREAD_PENALTY)


def rate_resource_diversity(brd: board.Board) -> int:
    """Return 50 when no vertex touches two producing hexes."""
    total = 0
    count = 0
    for vertex in brd.vertices.values():
        producing = [
            h for h in brd.adjacent_hexes(vertex)
            if h.resource != board.ResourceType.DESERT
        ]
        if len(producing) < 2:
            continue
        total += len({h.resource for h in producing})
        count += 1

    if count == 0:
        return 50
    avg = total / count
    return max(0, min(100, _round_half_up((avg - 1.0) / 1.5 * 100)))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _adjacent_pairs(
    brd: board.Board, predicate: Callable[[board.HexTile, board.HexTile], bool]
) -> int:
    """Count unordered adjacent hex pairs for which *predicate* holds."""
    count = 0
    for tile in brd.hexes.values():
        for n in tile.coord.neighbors():
            other = brd.hexes.get(geometry.hex_id(n.q, n.r))
            if other is None or other.id <= tile.id:
                continue
            if predicate(tile, other):
                count += 1
    return count


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
