"""Catan board generation.

Builds the 19-hex standard board in three modes (random, balanced and
manual/empty), derives the deduplicated vertex graph from the hex set, and
assigns the nine ports to fixed positions along the coastline.

Number constraints
------------------
Random boards place number tokens one hex at a time.  Each attempt is a
randomised depth-first fill, capped at ``_FILL_STEP_BUDGET`` placements, that
never places a token that would make two adjacent hexes

* share a number,
* carry a 6 and an 8, or
* carry a 2 and a 12.

The loop is capped at ``settings.NUMBER_ASSIGNMENT_ATTEMPTS``.  If every
attempt fails, an unconstrained shuffle is used instead, a warning is logged
and the board is marked with ``numbers_constrained=False``.

Vertex topology
---------------
A vertex is keyed by the sorted triple of hex positions meeting at it (see
:mod:`geometry`), so corners shared by several hexes merge into one entity.
Two vertices are adjacent when they are consecutive corners of some hex.
"""

from __future__ import annotations

import collections
import logging
import math
import random

import common.settings

from . import geometry
from .models.board import (
    AxialCoord,
    Board,
    HexTile,
    Port,
    PortType,
    ResourceType,
    Vertex,
    VertexDirection,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Board constants
# ---------------------------------------------------------------------------

# 19 hex positions in axial coordinates (centre + ring 1 + ring 2).
STANDARD_HEX_POSITIONS: list[tuple[int, int]] = [
    # Centre
    (0, 0),
    # Ring 1 (6 hexes)
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    # Ring 2 (12 hexes)
    (2, 0),
    (2, -1),
    (2, -2),
    (1, -2),
    (0, -2),
    (-1, -1),
    (-2, 0),
    (-2, 1),
    (-2, 2),
    (-1, 2),
    (0, 2),
    (1, 1),
]

# Standard resource distribution (must sum to 19).
_RESOURCE_DISTRIBUTION: list[ResourceType] = (
    [ResourceType.DESERT] * 1
    + [ResourceType.WHEAT] * 4
    + [ResourceType.WOOD] * 4
    + [ResourceType.BRICK] * 3
    + [ResourceType.ORE] * 3
    + [ResourceType.SHEEP] * 4
)

# Standard number-token distribution (18 tokens for 18 non-desert hexes).
STANDARD_NUMBER_DISTRIBUTION: list[int] = [
    2, 3, 3, 4, 4, 5, 5, 6, 6, 8, 8, 9, 9, 10, 10, 11, 11, 12
]  # fmt: skip

# Standard port distribution (4 generic 3:1 + one 2:1 per resource = 9 total).
_PORT_DISTRIBUTION: list[PortType] = [
    PortType.GENERIC,
    PortType.GENERIC,
    PortType.GENERIC,
    PortType.GENERIC,
    PortType.WHEAT,
    PortType.WOOD,
    PortType.BRICK,
    PortType.ORE,
    PortType.SHEEP,
]

# Nine evenly spaced positions around the 30-edge coastline.
PORT_EDGE_INDICES: tuple[int, ...] = (1, 4, 7, 11, 14, 17, 21, 24, 27)

# Fixed layout for balanced mode: (q, r, resource, number).  Satisfies every
# number constraint and has no adjacent same-resource pair.
_BALANCED_LAYOUT: list[tuple[int, int, ResourceType, int | None]] = [
    (0, 0, ResourceType.DESERT, None),
    (1, 0, ResourceType.WOOD, 4),
    (1, -1, ResourceType.SHEEP, 10),
    (0, -1, ResourceType.BRICK, 3),
    (-1, 0, ResourceType.WHEAT, 11),
    (-1, 1, ResourceType.ORE, 9),
    (0, 1, ResourceType.WHEAT, 5),
    (2, 0, ResourceType.SHEEP, 6),
    (2, -1, ResourceType.BRICK, 9),
    (2, -2, ResourceType.WHEAT, 2),
    (1, -2, ResourceType.WOOD, 8),
    (0, -2, ResourceType.SHEEP, 5),
    (-1, -1, ResourceType.ORE, 12),
    (-2, 0, ResourceType.WOOD, 6),
    (-2, 1, ResourceType.SHEEP, 3),
    (-2, 2, ResourceType.WHEAT, 4),
    (-1, 2, ResourceType.WOOD, 8),
    (0, 2, ResourceType.ORE, 11),
    (1, 1, ResourceType.BRICK, 10),
]

# Manual-edit cycles.
RESOURCE_CYCLE: list[ResourceType] = [
    ResourceType.DESERT,
    ResourceType.WHEAT,
    ResourceType.WOOD,
    ResourceType.BRICK,
    ResourceType.ORE,
    ResourceType.SHEEP,
]
NUMBER_CYCLE: list[int | None] = [None, 2, 3, 4, 5, 6, 8, 9, 10, 11, 12]

# Token placements one constrained fill may try before giving up.
_FILL_STEP_BUDGET = 2000

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_random_board(
    seed: int | None = None, rng: random.Random | None = None
) -> Board:
    """Generate a randomised standard board with constrained number tokens.

    Args:
        seed: Optional integer seed for reproducible boards.
        rng: Optional random source; takes precedence over *seed*.

    Returns:
        A fully populated :class:`Board` with vertices and ports.
    """
    rng = rng or random.Random(seed)

    resources = _RESOURCE_DISTRIBUTION.copy()
    rng.shuffle(resources)
    numbers, constrained = assign_numbers(STANDARD_HEX_POSITIONS, resources, rng)

    hexes: dict[str, HexTile] = {}
    for (q, r), resource, number in zip(
        STANDARD_HEX_POSITIONS, resources, numbers, strict=True
    ):
        tile = HexTile(
            id=geometry.hex_id(q, r),
            q=q,
            r=r,
            resource=resource,
            number=number,
            has_robber=resource == ResourceType.DESERT,
        )
        hexes[tile.id] = tile

    return _assemble_board(hexes, rng, numbers_constrained=constrained)


def generate_balanced_board(
    seed: int | None = None, rng: random.Random | None = None
) -> Board:
    """Return the fixed balanced layout; only the ports are shuffled."""
    rng = rng or random.Random(seed)

    hexes: dict[str, HexTile] = {}
    for q, r, resource, number in _BALANCED_LAYOUT:
        tile = HexTile(
            id=geometry.hex_id(q, r),
            q=q,
            r=r,
            resource=resource,
            number=number,
            has_robber=resource == ResourceType.DESERT,
        )
        hexes[tile.id] = tile

    return _assemble_board(hexes, rng)


def create_empty_board() -> Board:
    """Return an all-desert board with no numbers, ports or settlements."""
    hexes: dict[str, HexTile] = {}
    for q, r in STANDARD_HEX_POSITIONS:
        tile = HexTile(id=geometry.hex_id(q, r), q=q, r=r, resource=ResourceType.DESERT)
        hexes[tile.id] = tile
    return Board(hexes=hexes, vertices=generate_unique_vertices(hexes))


def generate_unique_vertices(hexes: dict[str, HexTile]) -> dict[str, Vertex]:
    """Compute the deduplicated vertex graph for a hex set.

    Returns:
        A map of vertex ID to :class:`Vertex`.  Adjacent hex and vertex lists
        are sorted, so the result depends only on the set of hexes.
    """
    anchors: dict[str, tuple[int, int, VertexDirection]] = {}
    v_hexes: dict[str, set[str]] = collections.defaultdict(set)
    v_adj: dict[str, set[str]] = collections.defaultdict(set)

    directions = list(VertexDirection)
    for tile in hexes.values():
        corner_ids = [geometry.vertex_id(tile.q, tile.r, d) for d in directions]
        for direction, vid in zip(directions, corner_ids, strict=True):
            anchors.setdefault(vid, (tile.q, tile.r, direction))
            v_hexes[vid].add(tile.id)
        # Consecutive corners of a hex are joined by one of its edges.
        for i, vid in enumerate(corner_ids):
            nxt = corner_ids[(i + 1) % 6]
            v_adj[vid].add(nxt)
            v_adj[nxt].add(vid)

    vertices: dict[str, Vertex] = {}
    for vid, (q, r, direction) in anchors.items():
        vertices[vid] = Vertex(
            id=vid,
            q=q,
            r=r,
            direction=direction,
            adjacent_hexes=sorted(v_hexes[vid]),
            adjacent_vertices=sorted(v_adj[vid]),
        )
    return vertices


def assign_numbers(
    positions: list[tuple[int, int]],
    resources: list[ResourceType],
    rng: random.Random,
    numbers: list[int] | None = None,
    max_attempts: int | None = None,
) -> tuple[list[int | None], bool]:
    """Assign number tokens to the non-desert positions.

    Args:
        positions: Axial (q, r) positions, aligned with *resources*.
        resources: Resource of each position.
        rng: Random source used for shuffling.
        numbers: Token multiset; defaults to the standard distribution.
        max_attempts: Number of constrained fills to try; defaults to
            ``settings.NUMBER_ASSIGNMENT_ATTEMPTS``.

    Returns:
        ``(numbers, constrained)`` where *numbers* is aligned with *positions*
        (None for desert) and *constrained* is False if the unconstrained
        fallback was used.
    """
    tokens = list(STANDARD_NUMBER_DISTRIBUTION if numbers is None else numbers)
    if max_attempts is None:
        max_attempts = common.settings.NUMBER_ASSIGNMENT_ATTEMPTS

    producing = [i for i, res in enumerate(resources) if res != ResourceType.DESERT]
    if len(producing) != len(tokens):
        raise ValueError(
            f'{len(tokens)} number tokens cannot cover {len(producing)} producing hexes'
        )
    neighbours: list[list[int]] = [[] for _ in positions]
    for a, b in _adjacent_index_pairs(positions):
        neighbours[a].append(b)
        neighbours[b].append(a)

    for attempt in range(1, max_attempts + 1):
        result = _fill_tokens(len(positions), producing, tokens, neighbours, rng)
        if result is not None:
            logger.debug('Number tokens accepted after %d attempt(s)', attempt)
            return result, True

    rng.shuffle(tokens)
    logger.warning(
        'No valid number assignment in %d attempts; using unconstrained layout',
        max_attempts,
    )
    return _spread_tokens(len(positions), producing, tokens), False


def find_number_violations(board: Board) -> list[tuple[str, str]]:
    """Return the adjacent hex-ID pairs that break a number constraint."""
    violations: list[tuple[str, str]] = []
    for tile in board.hexes.values():
        for n in tile.coord.neighbors():
            other = board.hexes.get(geometry.hex_id(n.q, n.r))
            if other is None or other.id <= tile.id:
                continue
            if _violates(tile.number, other.number):
                violations.append((tile.id, other.id))
    return violations


def count_number_violations(board: Board) -> int:
    return len(find_number_violations(board))


def coastline(board: Board) -> list[str]:
    """Return the coastal vertex IDs in perimeter order.

    The walk starts at the coastal vertex with the smallest angle around the
    board centre and proceeds towards increasing angle.
    """
    return _coastal_cycle(board.hexes, board.vertices)


def cycle_hex_resource(hex_id: str, board: Board) -> Board:
    """Advance a hex to the next resource in the manual-edit cycle.

    Cycling onto desert clears the hex's number.  Unknown IDs return *board*.
    """
    tile = board.hexes.get(hex_id)
    if tile is None:
        return board
    idx = RESOURCE_CYCLE.index(tile.resource)
    nxt = RESOURCE_CYCLE[(idx + 1) % len(RESOURCE_CYCLE)]
    number = None if nxt == ResourceType.DESERT else tile.number
    return set_hex(hex_id, board, nxt, number)


def cycle_hex_number(hex_id: str, board: Board) -> Board:
    """Advance a hex to the next number token, skipping 7.

    Desert hexes carry no number, so they (and unknown IDs) return *board*.
    """
    tile = board.hexes.get(hex_id)
    if tile is None or tile.resource == ResourceType.DESERT:
        return board
    idx = NUMBER_CYCLE.index(tile.number) if tile.number in NUMBER_CYCLE else 0
    nxt = NUMBER_CYCLE[(idx + 1) % len(NUMBER_CYCLE)]
    return set_hex(hex_id, board, tile.resource, nxt)


def set_hex(
    hex_id: str, board: Board, resource: ResourceType, number: int | None
) -> Board:
    """Return a board with one hex's resource and number replaced."""
    tile = board.hexes.get(hex_id)
    if tile is None:
        return board
    if resource == ResourceType.DESERT:
        number = None
    elif number is not None and number not in NUMBER_CYCLE:
        raise ValueError(f'Invalid number token {number}')
    hexes = dict(board.hexes)
    hexes[hex_id] = tile.model_copy(update={'resource': resource, 'number': number})
    return board.model_copy(update={'hexes': hexes})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _violates(a: int | None, b: int | None) -> bool:
    """Return True if numbers *a* and *b* may not sit on adjacent hexes."""
    if a is None or b is None:
        return False
    return a == b or {a, b} == {6, 8} or {a, b} == {2, 12}


def _adjacent_index_pairs(positions: list[tuple[int, int]]) -> list[tuple[int, int]]:
    index = {pos: i for i, pos in enumerate(positions)}
    pairs: list[tuple[int, int]] = []
    for i, (q, r) in enumerate(positions):
        for n in AxialCoord(q=q, r=r).neighbors():
            j = index.get((n.q, n.r))
            if j is not None and j > i:
                pairs.append((i, j))
    return pairs


def _fill_tokens(
    size: int,
    producing: list[int],
    tokens: list[int],
    neighbours: list[list[int]],
    rng: random.Random,
) -> list[int | None] | None:
    """Place *tokens* on *producing* hexes without breaking a number rule.

    Hexes with the most neighbours are filled first.  Each hex tries the
    remaining token values in random order and backtracks on a dead end.
    Returns None once ``_FILL_STEP_BUDGET`` placements have been tried or the
    search is exhausted.
    """
    result: list[int | None] = [None] * size
    remaining = collections.Counter(tokens)
    order = sorted(producing, key=lambda i: (-len(neighbours[i]), rng.random()))
    steps = 0

    def fill(k: int) -> bool:
        nonlocal steps
        if k == len(order):
            return True
        idx = order[k]
        values = [value for value, left in remaining.items() if left]
        rng.shuffle(values)
        for value in values:
            if any(_violates(value, result[j]) for j in neighbours[idx]):
                continue
            steps += 1
            if steps > _FILL_STEP_BUDGET:
                return False
            result[idx] = value
            remaining[value] -= 1
            if fill(k + 1):
                return True
            result[idx] = None
            remaining[value] += 1
        return False

    return result if fill(0) else None


def _spread_tokens(
    size: int, producing: list[int], tokens: list[int]
) -> list[int | None]:
    result: list[int | None] = [None] * size
    for idx, token in zip(producing, tokens, strict=True):
        result[idx] = token
    return result


def _assemble_board(
    hexes: dict[str, HexTile], rng: random.Random, numbers_constrained: bool = True
) -> Board:
    """Build vertices for *hexes* and place shuffled ports on the coastline."""
    vertices = generate_unique_vertices(hexes)
    cycle = _coastal_cycle(hexes, vertices)

    port_types = _PORT_DISTRIBUTION.copy()
    rng.shuffle(port_types)

    ports: dict[str, PortType] = {}
    placements: list[Port] = []
    for edge_index, port_type in zip(PORT_EDGE_INDICES, port_types, strict=True):
        if edge_index >= len(cycle):
            continue
        a = cycle[edge_index]
        b = cycle[(edge_index + 1) % len(cycle)]
        ports[a] = port_type
        ports[b] = port_type
        placements.append(Port(port_type=port_type, vertex_ids=(a, b)))

    for vid, port_type in ports.items():
        vertices[vid] = vertices[vid].model_copy(update={'port': port_type})

    return Board(
        hexes=hexes,
        vertices=vertices,
        ports=ports,
        port_placements=placements,
        numbers_constrained=numbers_constrained,
    )


def _coastal_cycle(hexes: dict[str, HexTile], vertices: dict[str, Vertex]) -> list[str]:
    """Walk the coastline: edges whose endpoints share exactly one hex."""
    coastal = {vid for vid, v in vertices.items() if len(v.adjacent_hexes) < 3}
    if not coastal:
        return []

    links: dict[str, list[str]] = collections.defaultdict(list)
    for vid in coastal:
        own = set(vertices[vid].adjacent_hexes)
        for other in vertices[vid].adjacent_vertices:
            if other in coastal and len(own & set(vertices[other].adjacent_hexes)) == 1:
                links[vid].append(other)

    centres = [geometry.hex_to_pixel(t.coord) for t in hexes.values()]
    cx = sum(x for x, _ in centres) / len(centres)
    cy = sum(y for _, y in centres) / len(centres)

    def angle(vid: str) -> float:
        pos = geometry.vertex_to_pixel(vid)
        if pos is None:
            raise ValueError(f'Malformed vertex ID {vid!r}')
        return math.atan2(pos[1] - cy, pos[0] - cx)

    start = min(coastal, key=lambda vid: (angle(vid), vid))
    if not links[start]:
        return [start]
    cycle = [start]
    prev, current = start, min(links[start], key=angle)
    while current != start and len(cycle) < len(coastal):
        cycle.append(current)
        options = [v for v in links[current] if v != prev]
        if not options:
            break
        prev, current = current, options[0]
    return cycle
