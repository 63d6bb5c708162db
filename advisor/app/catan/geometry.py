"""Axial hex-grid geometry for a pointy-top Catan board.

Axial coordinates
-----------------
Each hex is identified by integer axial coordinates (q, r); the implied cube
coordinate is s = -q - r.  See
https://www.redblobgames.com/grids/hexagons/#coordinates-axial.  The six
neighbour offsets, clockwise from the top-right, are::

    NE: (+1, -1)   E: (+1, 0)   SE: (0, +1)
    SW: (-1, +1)   W: (-1, 0)   NW: (0, -1)

Vertex identification
---------------------
Every hex corner is shared by exactly three hex positions (some of which may
lie off the board).  A vertex ID is the canonical, sorted list of those three
axial positions, so the same physical corner reached from any of its hexes
always yields the same ID::

    vertex_id(0, 0, N) == vertex_id(0, -1, SE) == 'vertex_0_-1_0_0_1_-1'

Edge identification
-------------------
An edge ID is the two endpoint vertex IDs, sorted and joined by ``|``.
"""

from __future__ import annotations

import math
import re

from .models.board import AxialCoord, VertexDirection

# Distance from hex centre to corner, in pixels.
HEX_SIZE = 50.0

# For each corner direction, the two other hexes that share that corner.
VERTEX_NEIGHBOR_OFFSETS: dict[VertexDirection, tuple[tuple[int, int], ...]] = {
    VertexDirection.N: ((0, -1), (1, -1)),
    VertexDirection.NE: ((1, -1), (1, 0)),
    VertexDirection.SE: ((1, 0), (0, 1)),
    VertexDirection.S: ((0, 1), (-1, 1)),
    VertexDirection.SW: ((-1, 1), (-1, 0)),
    VertexDirection.NW: ((-1, 0), (0, -1)),
}

# Corner angles in degrees (screen space, y grows downward).
_VERTEX_ANGLES: dict[VertexDirection, float] = {
    VertexDirection.N: -90.0,
    VertexDirection.NE: -30.0,
    VertexDirection.SE: 30.0,
    VertexDirection.S: 90.0,
    VertexDirection.SW: 150.0,
    VertexDirection.NW: -150.0,
}

_HEX_ID_RE = re.compile(r'^hex_(-?\d+)_(-?\d+)$')
_VERTEX_ID_RE = re.compile(r'^vertex((?:_-?\d+){6})$')

# ---------------------------------------------------------------------------
# Hex math
# ---------------------------------------------------------------------------


def neighbors(coord: AxialCoord) -> list[AxialCoord]:
    """Return the six coordinates adjacent to *coord*."""
    return coord.neighbors()


def distance(a: AxialCoord, b: AxialCoord) -> int:
    """Return the number of hex steps between *a* and *b*."""
    return (abs(a.q - b.q) + abs(a.r - b.r) + abs(a.s - b.s)) // 2


def vertex_hexes(q: int, r: int, direction: VertexDirection) -> list[AxialCoord]:
    """Return the three hex positions that meet at a corner of hex (q, r)."""
    coords = [AxialCoord(q=q, r=r)]
    for dq, dr in VERTEX_NEIGHBOR_OFFSETS[direction]:
        coords.append(AxialCoord(q=q + dq, r=r + dr))
    return coords


# ---------------------------------------------------------------------------
# ID encoding
# ---------------------------------------------------------------------------


def hex_id(q: int, r: int) -> str:
    return f'hex_{q}_{r}'


def parse_hex_id(value: str) -> AxialCoord | None:
    """Return the coordinate encoded in a hex ID, or None if malformed."""
    match = _HEX_ID_RE.match(value)
    if match is None:
        return None
    return AxialCoord(q=int(match.group(1)), r=int(match.group(2)))


def vertex_id(q: int, r: int, direction: VertexDirection) -> str:
    """Return the canonical ID of a corner of hex (q, r)."""
    triple = sorted((c.q, c.r) for c in vertex_hexes(q, r, direction))
    return 'vertex' + ''.join(f'_{cq}_{cr}' for cq, cr in triple)


def parse_vertex_id(value: str) -> list[AxialCoord] | None:
    """Return the three hex positions encoded in a vertex ID, or None."""
    match = _VERTEX_ID_RE.match(value)
    if match is None:
        return None
    parts = [int(p) for p in match.group(1).split('_')[1:]]
    return [AxialCoord(q=parts[i], r=parts[i + 1]) for i in range(0, 6, 2)]


def edge_id(vertex_a: str, vertex_b: str) -> str:
    """Return the order-independent ID of the edge between two vertices."""
    first, second = sorted((vertex_a, vertex_b))
    return f'{first}|{second}'


# ---------------------------------------------------------------------------
# Pixel conversion
# ---------------------------------------------------------------------------


def hex_to_pixel(coord: AxialCoord, size: float = HEX_SIZE) -> tuple[float, float]:
    """Return the pixel centre of a hex (pointy-top)."""
    x = size * math.sqrt(3) * (coord.q + coord.r / 2)
    y = size * 1.5 * coord.r
    return x, y


def vertex_pixel_offset(
    direction: VertexDirection, size: float = HEX_SIZE
) -> tuple[float, float]:
    """Return a corner's offset from its hex centre."""
    angle = math.radians(_VERTEX_ANGLES[direction])
    return size * math.cos(angle), size * math.sin(angle)


def vertex_to_pixel(value: str, size: float = HEX_SIZE) -> tuple[float, float] | None:
    """Return the pixel position of a vertex, or None for a malformed ID.

    A corner is the centroid of the three hex centres around it.
    """
    coords = parse_vertex_id(value)
    if coords is None:
        return None
    centres = [hex_to_pixel(c, size) for c in coords]
    return (
        sum(x for x, _ in centres) / 3,
        sum(y for _, y in centres) / 3,
    )
