"""HTTP routes for the Catan placement advisor.

Registers:

* ``GET  /catan/boards/{mode}``          new random, balanced or empty board
* ``POST /catan/settlements``            place a settlement
* ``POST /catan/settlements/remove``     remove a settlement and its roads
* ``POST /catan/settlements/clear``      remove every settlement and road
* ``POST /catan/roads``                  place a road next to own settlement
* ``POST /catan/hexes/cycle``            cycle a hex's resource or number
* ``POST /catan/rating``                 grade the board layout
* ``POST /catan/recommendations``        best settlement spots
* ``POST /catan/road-suggestions``       best roads per settlement
* ``POST /catan/setup-turn``             whose setup turn it is
* ``POST /catan/setup-turn/settlements`` place for the active player
* ``GET  /catan/presets``                named weight presets

The server keeps no state: every request carries the board snapshot and every
mutating route answers with the new one.
"""

from __future__ import annotations

import logging
from typing import Literal

import fastapi
import pydantic

from ..catan import board_generator
from ..catan.engine import placement, rating, turns
from ..catan.models import board, scoring
from ..catan.scoring import calculator, roads

logger = logging.getLogger(__name__)

router = fastapi.APIRouter(prefix='/catan')

BOARD_MODES = ('random', 'balanced', 'empty')


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class BoardRequest(pydantic.BaseModel):
    """Any request that only needs the current board."""

    board: board.Board


class SettlementRequest(BoardRequest):
    vertex_id: str
    player_color: str = 'red'


class VertexRequest(BoardRequest):
    vertex_id: str


class RoadRequest(BoardRequest):
    from_vertex: str
    to_vertex: str
    player_color: str = 'red'


class HexCycleRequest(BoardRequest):
    """Advance one attribute of a hex to its next value."""

    hex_id: str
    attribute: Literal['resource', 'number'] = 'resource'


class RecommendationRequest(BoardRequest):
    count: int | None = pydantic.Field(default=None, ge=1)
    weights: scoring.ScoreWeights | None = None
    mode: scoring.ExplanationMode | None = None
    player_color: str = 'red'


class RoadSuggestionRequest(BoardRequest):
    per_settlement: int = pydantic.Field(default=2, ge=1)


class SetupTurnRequest(BoardRequest):
    player_count: int = turns.MAX_PLAYERS


class SetupPlacementRequest(SetupTurnRequest):
    vertex_id: str


# ---------------------------------------------------------------------------
# Boards
# ---------------------------------------------------------------------------


@router.get('/boards/{mode}', response_model=board.Board)
def new_board(mode: str, seed: int | None = None) -> board.Board:
    """Generate a board.

    Args:
        mode: 'random', 'balanced' or 'empty'.
        seed: Optional seed for reproducible random and balanced boards.
    """
    if mode not in BOARD_MODES:
        raise fastapi.HTTPException(
            status_code=400,
            detail=f"Invalid board mode '{mode}'. "
            "Must be 'random', 'balanced', or 'empty'",
        )
    if mode == 'random':
        brd = board_generator.generate_random_board(seed=seed)
    elif mode == 'balanced':
        brd = board_generator.generate_balanced_board(seed=seed)
    else:
        brd = board_generator.create_empty_board()
    logger.info('Generated %s board (seed=%s)', mode, seed)
    return brd


@router.post('/hexes/cycle', response_model=board.Board)
def cycle_hex(request: HexCycleRequest) -> board.Board:
    """Step a hex's resource or number token during manual board editing."""
    if request.hex_id not in request.board.hexes:
        raise fastapi.HTTPException(
            status_code=404, detail=f'Hex {request.hex_id!r} not found'
        )
    if request.attribute == 'number':
        return board_generator.cycle_hex_number(request.hex_id, request.board)
    return board_generator.cycle_hex_resource(request.hex_id, request.board)


@router.post('/rating', response_model=scoring.BoardRating)
def board_rating(request: BoardRequest) -> scoring.BoardRating:
    return rating.rate_board(request.board)


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------


@router.post('/settlements', response_model=board.Board)
def add_settlement(request: SettlementRequest) -> board.Board:
    """Place a settlement, enforcing the distance rule."""
    _require_vertex(request.vertex_id, request.board)
    result = placement.try_place_settlement(
        request.vertex_id, request.board, request.player_color
    )
    return _placed(result)


@router.post('/settlements/remove', response_model=board.Board)
def remove_settlement(request: VertexRequest) -> board.Board:
    _require_vertex(request.vertex_id, request.board)
    return placement.remove_settlement(request.vertex_id, request.board)


@router.post('/settlements/clear', response_model=board.Board)
def clear_settlements(request: BoardRequest) -> board.Board:
    return placement.clear_settlements(request.board)


@router.post('/roads', response_model=board.Board)
def add_road(request: RoadRequest) -> board.Board:
    """Place a road from one of the player's settlements."""
    _require_vertex(request.from_vertex, request.board)
    _require_vertex(request.to_vertex, request.board)
    result = placement.try_place_road(
        request.from_vertex, request.to_vertex, request.board, request.player_color
    )
    return _placed(result)


# ---------------------------------------------------------------------------
# Advice
# ---------------------------------------------------------------------------


@router.post('/recommendations', response_model=list[scoring.VertexScore])
def recommendations(request: RecommendationRequest) -> list[scoring.VertexScore]:
    """Return the best legal settlement spots for a player, highest first."""
    return calculator.get_top_recommendations(
        request.board,
        count=request.count,
        weights=request.weights,
        mode=request.mode,
        player_color=request.player_color,
    )


@router.post('/road-suggestions')
def road_suggestions(
    request: RoadSuggestionRequest,
) -> dict[str, dict[str, list[scoring.RoadSuggestion]]]:
    """Return road suggestions grouped by colour and settlement."""
    suggestions = roads.get_all_road_suggestions(
        request.board, per_settlement=request.per_settlement
    )
    return roads.group_road_suggestions(suggestions)


@router.get('/presets', response_model=dict[str, scoring.ScorePreset])
def presets() -> dict[str, scoring.ScorePreset]:
    return scoring.SCORE_PRESETS


# ---------------------------------------------------------------------------
# Setup phase
# ---------------------------------------------------------------------------


@router.post('/setup-turn', response_model=turns.SetupTurn)
def setup_turn(request: SetupTurnRequest) -> turns.SetupTurn:
    """Derive the active setup player from the board.

    An out-of-range player count raises ValueError, reported as 400.
    """
    return turns.get_setup_turn(request.board, request.player_count)


@router.post('/setup-turn/settlements', response_model=board.Board)
def add_setup_settlement(request: SetupPlacementRequest) -> board.Board:
    """Place a settlement for whichever player's setup turn it is."""
    _require_vertex(request.vertex_id, request.board)
    result = turns.place_settlement_for_turn(
        request.vertex_id, request.board, request.player_count
    )
    return _placed(result)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_vertex(vertex_id: str, brd: board.Board) -> None:
    if vertex_id not in brd.vertices:
        raise fastapi.HTTPException(
            status_code=404, detail=f'Vertex {vertex_id!r} not found'
        )


def _placed(result: placement.PlacementResult) -> board.Board:
    if not result.success:
        raise fastapi.HTTPException(status_code=409, detail=result.reason)
    return result.updated_board
