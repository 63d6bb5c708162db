"""The seven settlement score components.

Each scorer is a pure function over a vertex's adjacent hexes (and, where
needed, the whole board) returning a value roughly in [0, 1].  Number quality
is left unnormalised and can exceed 1 on a three-hex vertex.
"""

from __future__ import annotations

import collections

from ..models import board

# Probability of the best realistic three-hex vertex (6, 8, 5): 14 / 36.
PREMIUM_PROBABILITY = 0.42

_OPPONENT_DILUTION = 0.92
_DILUTION_FLOOR = 0.75

_GENERIC_PORT_SCORE = 0.4
_MATCHING_PORT_BASE = 0.6
_UNMATCHED_PORT_SCORE = 0.2

_EXPANSION_BASELINE = 0.4
_EXPANSION_QUALITY = 0.6
# About six average reachable spots.
_EXPANSION_NORMALISER = 4.2

_NEW_RESOURCE_BONUS = 0.3
_NEW_NUMBER_BONUS = 0.1


def producing(hexes: list[board.HexTile]) -> list[board.HexTile]:
    """Return the hexes that can produce: not desert and numbered."""
    return [
        h
        for h in hexes
        if h.resource != board.ResourceType.DESERT and h.number is not None
    ]


def player_coverage(
    brd: board.Board, player_color: str
) -> tuple[set[board.ResourceType], set[int]]:
    """Return the resources and numbers *player_color*'s settlements touch."""
    resources: set[board.ResourceType] = set()
    numbers: set[int] = set()
    for vertex in brd.settlements(player_color):
        for tile in brd.adjacent_hexes(vertex):
            if tile.resource == board.ResourceType.DESERT:
                continue
            resources.add(tile.resource)
            if tile.number is not None:
                numbers.add(tile.number)
    return resources, numbers


def resource_abundance(brd: board.Board) -> dict[board.ResourceType, int]:
    """Return the board-wide pip total of each producing resource."""
    abundance: dict[board.ResourceType, int] = collections.defaultdict(int)
    for tile in producing(list(brd.hexes.values())):
        abundance[tile.resource] += tile.pips
    return dict(abundance)


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def probability_score(
    hexes: list[board.HexTile],
    brd: board.Board | None = None,
    player_color: str | None = None,
) -> float:
    """Expected resource cards per roll from the adjacent hexes.

    Once the player owns a settlement, each opponent settlement sharing a
    producing hex with this vertex dilutes the value by 8%, down to 75%.
    """
    tiles = producing(hexes)
    score = sum(h.pips for h in tiles) / 36
    if brd is None or player_color is None or not brd.settlements(player_color):
        return score

    hex_ids = {h.id for h in tiles}
    opponents = [
        v
        for v in brd.settlements()
        if v.player_color != player_color
        and hex_ids.intersection(v.adjacent_hexes)
    ]
    return score * max(_DILUTION_FLOOR, _OPPONENT_DILUTION ** len(opponents))


def diversity_score(
    hexes: list[board.HexTile],
    brd: board.Board | None = None,
    player_color: str | None = None,
) -> float:
    """Distinct resources over five, blended with portfolio gaps filled.

    Zero once the player already covers every resource.
    """
    vertex_resources = {
        h.resource for h in hexes if h.resource != board.ResourceType.DESERT
    }
    raw = len(vertex_resources) / len(board.PRODUCING_RESOURCES)
    if brd is None or player_color is None:
        return raw

    covered, _ = player_coverage(brd, player_color)
    if not covered:
        return raw

    uncovered = [r for r in board.PRODUCING_RESOURCES if r not in covered]
    if not uncovered:
        return 0.0
    portfolio = len(vertex_resources.intersection(uncovered)) / len(uncovered)
    return 0.5 * portfolio + 0.5 * raw


def number_quality_score(hexes: list[board.HexTile]) -> float:
    total = 0.0
    for tile in producing(hexes):
        total += board.NUMBER_QUALITY.get(tile.number or 0, 0.0)
    return total


def port_score(vertex: board.Vertex, hexes: list[board.HexTile]) -> float:
    """Value of the vertex's port, if any.

    A 2:1 port is worth most when the vertex itself produces the traded
    resource: 0.6 plus up to 0.4 scaled by that resource's pips here.
    """
    if vertex.port is None:
        return 0.0
    resource = vertex.port.resource
    if resource is None:
        return _GENERIC_PORT_SCORE

    matching = [h for h in producing(hexes) if h.resource == resource]
    if not matching:
        return _UNMATCHED_PORT_SCORE
    production = sum(h.pips for h in matching)
    return _MATCHING_PORT_BASE + min(production / 10, 0.4)


def scarcity_score(hexes: list[board.HexTile], brd: board.Board) -> float:
    abundance = resource_abundance(brd)
    most = max(abundance.values(), default=0)
    if most == 0:
        return 0.0
    distinct = {h.resource for h in producing(hexes)}
    return sum(1 - abundance.get(r, 0) / most for r in distinct) / 3


def expansion_score(vertex_id: str, brd: board.Board) -> float:
    """Future settlement potential two edges away.

    Every reachable spot that would still be legal (ignoring a settlement on
    *vertex_id* itself) and touches a resource scores 0.4 plus up to 0.6 for
    its own production.
    """
    vertex = brd.vertices.get(vertex_id)
    if vertex is None:
        return 0.0

    total = 0.0
    for spot_id in two_edges_away(vertex_id, brd):
        spot = brd.vertices[spot_id]
        if not is_future_spot(spot, brd, ignore=vertex_id):
            continue
        prob = probability_score(brd.adjacent_hexes(spot))
        total += _EXPANSION_BASELINE + _EXPANSION_QUALITY * min(
            prob / PREMIUM_PROBABILITY, 1.0
        )
    return min(total / _EXPANSION_NORMALISER, 1.0)


def complement_score(
    hexes: list[board.HexTile], brd: board.Board, player_color: str
) -> float:
    """Bonus for resources and numbers the player does not have yet.

    Zero until the player owns a settlement.  +0.3 per new resource type and
    +0.1 per producing hex whose number is not covered yet, capped at 1.
    """
    if not brd.settlements(player_color):
        return 0.0
    covered_resources, covered_numbers = player_coverage(brd, player_color)
    tiles = producing(hexes)
    new_resources = {h.resource for h in tiles} - covered_resources
    new_numbers = [h.number for h in tiles if h.number not in covered_numbers]
    score = (
        len(new_resources) * _NEW_RESOURCE_BONUS
        + len(new_numbers) * _NEW_NUMBER_BONUS
    )
    return min(score, 1.0)


# ---------------------------------------------------------------------------
# Topology helpers
# ---------------------------------------------------------------------------


def two_edges_away(vertex_id: str, brd: board.Board) -> list[str]:
    """Return the sorted vertices exactly two edges from *vertex_id*."""
    vertex = brd.vertices[vertex_id]
    near = set(vertex.adjacent_vertices)
    result: set[str] = set()
    for adj_id in vertex.adjacent_vertices:
        adj = brd.vertices.get(adj_id)
        if adj is None:
            continue
        for far_id in adj.adjacent_vertices:
            if far_id == vertex_id or far_id in near:
                continue
            if far_id in brd.vertices:
                result.add(far_id)
    return sorted(result)


def is_future_spot(
    vertex: board.Vertex, brd: board.Board, ignore: str | None = None
) -> bool:
    """Return True if *vertex* could take a settlement later.

    It must be empty, pass the distance rule with *ignore* treated as empty,
    and touch at least one non-desert hex.
    """
    if vertex.has_settlement:
        return False
    for adj_id in vertex.adjacent_vertices:
        if adj_id == ignore:
            continue
        adj = brd.vertices.get(adj_id)
        if adj is not None and adj.has_settlement:
            return False
    return any(
        h.resource != board.ResourceType.DESERT for h in brd.adjacent_hexes(vertex)
    )
