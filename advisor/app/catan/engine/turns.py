"""Setup-phase turn order derived from board contents.

Nothing here stores a turn counter.  The snake draft (0, 1, ..., n-1, n-1,
..., 1, 0) is walked slot by slot, and a slot for player P at its k-th
occurrence counts as filled once P has at least k + 1 settlements on the
board.  Placing or removing settlements therefore moves the turn
automatically, and a rejected placement leaves it where it was.
"""

from __future__ import annotations

import collections

import pydantic

from ..models import board
from . import placement

# Player colours by seat index.
PLAYER_COLORS: tuple[str, ...] = ('red', 'blue', 'orange', 'white')

MIN_PLAYERS = 2
MAX_PLAYERS = len(PLAYER_COLORS)


class SetupTurn(pydantic.BaseModel):
    """Snapshot of the setup phase for a given board and player count."""

    turn_index: int
    snake_draft: list[int]
    current_player_index: int
    active_color: str
    is_setup_complete: bool
    settlement_counts: dict[str, int]


def build_snake_draft(player_count: int) -> list[int]:
    """Return the seat order for the two setup rounds."""
    if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
        raise ValueError(
            f'player_count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, '
            f'got {player_count}'
        )
    forward = list(range(player_count))
    return forward + forward[::-1]


def settlement_counts(brd: board.Board) -> dict[str, int]:
    """Return the number of settlements per player colour."""
    counts: collections.Counter[str] = collections.Counter(
        v.player_color for v in brd.settlements() if v.player_color
    )
    return dict(counts)


def compute_turn_index(snake_draft: list[int], brd: board.Board) -> int:
    """Return the first unfilled slot, or ``len(snake_draft)`` when done."""
    counts = settlement_counts(brd)
    seen: dict[int, int] = collections.defaultdict(int)
    for i, seat in enumerate(snake_draft):
        placed = counts.get(PLAYER_COLORS[seat], 0)
        if placed <= seen[seat]:
            return i
        seen[seat] += 1
    return len(snake_draft)


def get_setup_turn(brd: board.Board, player_count: int = MAX_PLAYERS) -> SetupTurn:
    """Derive the active player and progress of the setup phase."""
    snake = build_snake_draft(player_count)
    turn_index = compute_turn_index(snake, brd)
    complete = turn_index >= len(snake)
    # Once setup is over the last seat in the draft stays active.
    current = snake[-1] if complete else snake[turn_index]
    return SetupTurn(
        turn_index=turn_index,
        snake_draft=snake,
        current_player_index=current,
        active_color=PLAYER_COLORS[current],
        is_setup_complete=complete,
        settlement_counts=settlement_counts(brd),
    )


def place_settlement_for_turn(
    vertex_id: str, brd: board.Board, player_count: int = MAX_PLAYERS
) -> placement.PlacementResult:
    """Place a settlement for whichever player's turn it currently is."""
    turn = get_setup_turn(brd, player_count)
    if turn.is_setup_complete:
        return placement.PlacementResult(
            success=False, updated_board=brd, reason='Setup is complete'
        )
    return placement.try_place_settlement(vertex_id, brd, turn.active_color)
