"""Road suggestion scoring.

A road's value is not just the quality of the spots it leads to.  During
setup the other players settle the obvious best vertices first, so each
reachable spot T is discounted by the chance of losing it::

    attractiveness_risk = quality(T) * 0.35
    proximity_risk      = min(opponents_within_2_hops(T) / 2, 1) * 0.45
    risk                = min(attractiveness_risk + proximity_risk, 0.75)
    adjusted(T)         = quality(T) * (1 - risk) + (0.30 if T has a port)

Ports cannot be taken away, so they earn a flat bonus on top.  The road score
is ``sum(adjusted) / 1.65`` (about three good spots) plus 0.15 when any spot
has a port, minus 0.2 for a dead end, clamped to [0, 1].
"""

from __future__ import annotations

import collections

from ..models import board, scoring
from . import components

_QUALITY_SCALE = 0.85
_ATTRACTIVENESS_RISK = 0.35
_PROXIMITY_RISK = 0.45
_MAX_RISK = 0.75
_SPOT_PORT_BONUS = 0.30

_ROAD_NORMALISER = 1.65
_ROAD_PORT_BONUS = 0.15
_DEAD_END_PENALTY = 0.2

_HIGH_RISK_DISCOUNT = 0.45
_MEDIUM_RISK_DISCOUNT = 0.20

_TARGETS_PER_ROAD = 2


def spot_quality(vertex_id: str, brd: board.Board) -> float:
    """Return the raw production quality of a vertex on a 0-0.85 scale."""
    vertex = brd.vertices.get(vertex_id)
    if vertex is None:
        return 0.0
    hexes = brd.adjacent_hexes(vertex)
    if not components.producing(hexes):
        return 0.0
    prob = components.probability_score(hexes)
    return min(prob / components.PREMIUM_PROBABILITY, 1.0) * _QUALITY_SCALE


def nearby_opponents(vertex_id: str, brd: board.Board, player_color: str) -> int:
    """Count opponent settlements one or two edges from *vertex_id*."""
    vertex = brd.vertices[vertex_id]
    found: set[str] = set()
    for adj_id in vertex.adjacent_vertices:
        adj = brd.vertices.get(adj_id)
        if adj is None:
            continue
        for near in [adj, *(brd.vertices.get(v) for v in adj.adjacent_vertices)]:
            if near is None or near.id == vertex_id:
                continue
            if near.has_settlement and near.player_color != player_color:
                found.add(near.id)
    return len(found)


def risk_adjusted_value(vertex_id: str, brd: board.Board, player_color: str) -> float:
    quality = spot_quality(vertex_id, brd)
    if quality == 0:
        return 0.0
    opponents = nearby_opponents(vertex_id, brd, player_color)
    risk = min(
        quality * _ATTRACTIVENESS_RISK + min(opponents / 2, 1.0) * _PROXIMITY_RISK,
        _MAX_RISK,
    )
    return max(0.0, quality * (1 - risk) + _port_bonus(vertex_id, brd))


def contest_risk(discount: float) -> scoring.ContestRisk:
    """Map a mean fractional risk discount to a label."""
    if discount > _HIGH_RISK_DISCOUNT:
        return scoring.ContestRisk.HIGH
    if discount > _MEDIUM_RISK_DISCOUNT:
        return scoring.ContestRisk.MEDIUM
    return scoring.ContestRisk.LOW


def get_road_suggestions_for_settlement(
    vertex_id: str, player_color: str, brd: board.Board
) -> list[scoring.RoadSuggestion]:
    """Score every road out of one settlement, best first.

    Returns an empty list if *vertex_id* holds no settlement.
    """
    settlement = brd.vertices.get(vertex_id)
    if settlement is None or not settlement.has_settlement:
        return []

    suggestions = [
        _score_road(settlement, to_id, player_color, brd)
        for to_id in settlement.adjacent_vertices
        if to_id in brd.vertices
    ]
    suggestions.sort(key=lambda s: (-s.score, s.to_vertex))
    return suggestions


def get_all_road_suggestions(
    brd: board.Board, per_settlement: int = 2
) -> list[scoring.RoadSuggestion]:
    """Return the best *per_settlement* roads for every settlement."""
    result: list[scoring.RoadSuggestion] = []
    for vertex in sorted(brd.settlements(), key=lambda v: v.id):
        if not vertex.player_color:
            continue
        found = get_road_suggestions_for_settlement(vertex.id, vertex.player_color, brd)
        result.extend(found[:per_settlement])
    return result


def group_road_suggestions(
    suggestions: list[scoring.RoadSuggestion],
) -> dict[str, dict[str, list[scoring.RoadSuggestion]]]:
    """Group suggestions by player colour, then by originating settlement."""
    grouped: dict[str, dict[str, list[scoring.RoadSuggestion]]] = (
        collections.defaultdict(lambda: collections.defaultdict(list))
    )
    for suggestion in suggestions:
        grouped[suggestion.player_color][suggestion.from_vertex].append(suggestion)
    return {color: dict(by_vertex) for color, by_vertex in grouped.items()}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _port_bonus(vertex_id: str, brd: board.Board) -> float:
    vertex = brd.vertices.get(vertex_id)
    return _SPOT_PORT_BONUS if vertex is not None and vertex.port else 0.0


def _score_road(
    settlement: board.Vertex, to_id: str, player_color: str, brd: board.Board
) -> scoring.RoadSuggestion:
    endpoint = brd.vertices[to_id]

    # The settlement blocks its own neighbours, so spots begin two edges out.
    spots = [
        vid
        for vid in endpoint.adjacent_vertices
        if vid != settlement.id
        and vid in brd.vertices
        and components.is_future_spot(brd.vertices[vid], brd, ignore=settlement.id)
    ]
    values = {vid: risk_adjusted_value(vid, brd, player_color) for vid in spots}

    discounts = []
    for vid in spots:
        quality = spot_quality(vid, brd)
        ceiling = quality + _port_bonus(vid, brd)
        discounts.append(1 - values[vid] / ceiling if quality > 0 else 0.0)
    mean_discount = sum(discounts) / len(discounts) if discounts else 0.0

    has_port = any(brd.vertices[vid].port for vid in spots)
    score = sum(values.values()) / _ROAD_NORMALISER
    if has_port:
        score += _ROAD_PORT_BONUS
    if not spots:
        score -= _DEAD_END_PENALTY

    settlement_hexes = set(settlement.adjacent_hexes)
    new_resources = [
        tile.resource.value
        for tile in brd.adjacent_hexes(endpoint)
        if tile.id not in settlement_hexes
        and tile.resource != board.ResourceType.DESERT
    ]
    targets = sorted(spots, key=lambda vid: (-values[vid], vid))[:_TARGETS_PER_ROAD]

    return scoring.RoadSuggestion(
        from_vertex=settlement.id,
        to_vertex=to_id,
        player_color=player_color,
        score=max(0.0, min(1.0, score)),
        expansion_spots=len(spots),
        contest_risk=contest_risk(mean_discount),
        has_port_access=has_port,
        new_hex_resources=new_resources,
        target_vertices=targets,
    )
