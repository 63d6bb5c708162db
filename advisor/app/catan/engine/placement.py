"""Settlement and road placement rules.

Every function is pure: it takes a :class:`board.Board` snapshot and returns a
new one, sharing every map it did not touch.  Rejected requests never raise;
the ``try_*`` variants report why, and the plain variants return the input
board unchanged so callers can compare by identity.
"""

from __future__ import annotations

import logging

import pydantic

from .. import geometry
from ..models import board

logger = logging.getLogger(__name__)


class PlacementResult(pydantic.BaseModel):
    """Outcome of a placement attempt.

    On rejection ``updated_board`` is the unchanged input board and
    ``reason`` says why.
    """

    success: bool
    updated_board: board.Board
    reason: str | None = None


# ---------------------------------------------------------------------------
# Settlements
# ---------------------------------------------------------------------------


def is_valid_placement(vertex_id: str, brd: board.Board) -> bool:
    """Return True if a settlement may be built on *vertex_id*.

    Applies the distance rule: the vertex must be empty and none of its
    neighbours may hold a settlement.  Resource access is not required.
    """
    return _settlement_rejection(vertex_id, brd) is None


def get_valid_placements(brd: board.Board) -> list[str]:
    """Return the sorted IDs of every vertex that passes the distance rule."""
    return sorted(vid for vid in brd.vertices if is_valid_placement(vid, brd))


def try_place_settlement(
    vertex_id: str, brd: board.Board, player_color: str = 'red'
) -> PlacementResult:
    reason = _settlement_rejection(vertex_id, brd)
    if reason is not None:
        logger.debug('Settlement at %s rejected: %s', vertex_id, reason)
        return PlacementResult(success=False, updated_board=brd, reason=reason)

    vertex = brd.vertices[vertex_id]
    updated = vertex.model_copy(
        update={'has_settlement': True, 'player_color': player_color}
    )
    return PlacementResult(success=True, updated_board=_with_vertex(brd, updated))


def place_settlement(
    vertex_id: str, brd: board.Board, player_color: str = 'red'
) -> board.Board:
    """Place a settlement, or return *brd* unchanged if the rule forbids it."""
    return try_place_settlement(vertex_id, brd, player_color).updated_board


def remove_settlement(vertex_id: str, brd: board.Board) -> board.Board:
    """Remove the settlement on *vertex_id* and the owner's roads built from it.

    Unknown or empty vertices return *brd* unchanged.
    """
    vertex = brd.vertices.get(vertex_id)
    if vertex is None or not vertex.has_settlement:
        return brd

    owner = vertex.player_color
    cleared = vertex.model_copy(update={'has_settlement': False, 'player_color': None})
    result = _with_vertex(brd, cleared)

    edges = {
        eid: edge
        for eid, edge in brd.edges.items()
        if not (edge.touches(vertex_id) and edge.player_color == owner)
    }
    if len(edges) != len(brd.edges):
        result = result.model_copy(update={'edges': edges})
    return result


def clear_settlements(brd: board.Board) -> board.Board:
    """Remove every settlement and road, keeping hexes and ports."""
    if not brd.edges and not brd.settlements():
        return brd
    vertices = dict(brd.vertices)
    for vertex in brd.settlements():
        vertices[vertex.id] = vertex.model_copy(
            update={'has_settlement': False, 'player_color': None}
        )
    return brd.model_copy(update={'vertices': vertices, 'edges': {}})


# ---------------------------------------------------------------------------
# Roads
# ---------------------------------------------------------------------------


def try_place_road(
    from_vertex: str, to_vertex: str, brd: board.Board, player_color: str
) -> PlacementResult:
    """Build a road from one of *player_color*'s settlements to a neighbour."""
    reason = _road_rejection(from_vertex, to_vertex, brd, player_color)
    if reason is not None:
        logger.debug(
            'Road %s -> %s for %s rejected: %s',
            from_vertex,
            to_vertex,
            player_color,
            reason,
        )
        return PlacementResult(success=False, updated_board=brd, reason=reason)

    eid = geometry.edge_id(from_vertex, to_vertex)
    vertex_a, vertex_b = sorted((from_vertex, to_vertex))
    edges = dict(brd.edges)
    edges[eid] = board.Edge(
        id=eid, vertex_a=vertex_a, vertex_b=vertex_b, player_color=player_color
    )
    updated = brd.model_copy(update={'edges': edges})
    return PlacementResult(success=True, updated_board=updated)


def place_road(
    from_vertex: str, to_vertex: str, brd: board.Board, player_color: str
) -> board.Board:
    return try_place_road(from_vertex, to_vertex, brd, player_color).updated_board


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _settlement_rejection(vertex_id: str, brd: board.Board) -> str | None:
    vertex = brd.vertices.get(vertex_id)
    if vertex is None:
        return f'Unknown vertex {vertex_id}'
    if vertex.has_settlement:
        return 'Vertex already has a settlement'
    for adj_id in vertex.adjacent_vertices:
        adj = brd.vertices.get(adj_id)
        if adj is not None and adj.has_settlement:
            return 'Too close to an existing settlement'
    return None


def _road_rejection(
    from_vertex: str, to_vertex: str, brd: board.Board, player_color: str
) -> str | None:
    origin = brd.vertices.get(from_vertex)
    if origin is None:
        return f'Unknown vertex {from_vertex}'
    if to_vertex not in brd.vertices:
        return f'Unknown vertex {to_vertex}'
    if not origin.has_settlement or origin.player_color != player_color:
        return f'No {player_color} settlement at {from_vertex}'
    if to_vertex not in origin.adjacent_vertices:
        return 'Road endpoints are not adjacent'
    if geometry.edge_id(from_vertex, to_vertex) in brd.edges:
        return 'Edge already has a road'
    return None


def _with_vertex(brd: board.Board, vertex: board.Vertex) -> board.Board:
    vertices = dict(brd.vertices)
    vertices[vertex.id] = vertex
    return brd.model_copy(update={'vertices': vertices})
