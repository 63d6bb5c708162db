"""Catan board data models.

Defines the axial hex-grid representation, resource and port types, and the
map-keyed Board snapshot that every advisor operation reads.  Entities are
frozen: mutations build a new Board that shares every unchanged map.
"""

from __future__ import annotations

import enum

import pydantic


class ResourceType(enum.StrEnum):
    """Terrain resource of a hex (desert produces nothing)."""

    WHEAT = 'wheat'
    WOOD = 'wood'
    BRICK = 'brick'
    ORE = 'ore'
    SHEEP = 'sheep'
    DESERT = 'desert'


# The five producing resources, in display order.
PRODUCING_RESOURCES: tuple[ResourceType, ...] = (
    ResourceType.WHEAT,
    ResourceType.WOOD,
    ResourceType.BRICK,
    ResourceType.ORE,
    ResourceType.SHEEP,
)


class PortType(enum.StrEnum):
    """Port types: generic 3:1 or specific resource 2:1."""

    GENERIC = '3:1'
    WHEAT = '2:1:wheat'
    WOOD = '2:1:wood'
    BRICK = '2:1:brick'
    ORE = '2:1:ore'
    SHEEP = '2:1:sheep'

    @property
    def resource(self) -> ResourceType | None:
        """Return the traded resource of a 2:1 port, or None for 3:1."""
        if self is PortType.GENERIC:
            return None
        return ResourceType(self.value.rsplit(':', 1)[1])


class VertexDirection(enum.StrEnum):
    """Corner of a pointy-top hex, clockwise from the top."""

    N = 'N'
    NE = 'NE'
    SE = 'SE'
    S = 'S'
    SW = 'SW'
    NW = 'NW'


# Pip count per number token (ways to roll it out of 36).
PIP_COUNT: dict[int, int] = {
    2: 1,
    3: 2,
    4: 3,
    5: 4,
    6: 5,
    8: 5,
    9: 4,
    10: 3,
    11: 2,
    12: 1,
}

# Relative desirability of each number token (6 and 8 are best).
NUMBER_QUALITY: dict[int, float] = {
    2: 0.0,
    3: 0.2,
    4: 0.5,
    5: 0.8,
    6: 1.0,
    8: 1.0,
    9: 0.8,
    10: 0.5,
    11: 0.2,
    12: 0.0,
}


class AxialCoord(pydantic.BaseModel):
    """Axial coordinates of a hex.  The implied cube s is -q - r."""

    model_config = pydantic.ConfigDict(frozen=True)

    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    def neighbors(self) -> list[AxialCoord]:
        """Return the 6 neighbouring coordinates, clockwise from north-east."""
        directions: list[tuple[int, int]] = [
            (1, -1),
            (1, 0),
            (0, 1),
            (-1, 1),
            (-1, 0),
            (0, -1),
        ]
        return [AxialCoord(q=self.q + dq, r=self.r + dr) for dq, dr in directions]


class HexTile(pydantic.BaseModel):
    """A single terrain hex on the board."""

    model_config = pydantic.ConfigDict(frozen=True)

    id: str  # hex_{q}_{r}
    q: int
    r: int
    resource: ResourceType
    number: int | None = None  # None for desert; 2–12 excluding 7
    has_robber: bool = False

    @property
    def coord(self) -> AxialCoord:
        return AxialCoord(q=self.q, r=self.r)

    @property
    def pips(self) -> int:
        """Pip count of this hex, 0 when it cannot produce."""
        if self.resource == ResourceType.DESERT or self.number is None:
            return 0
        return PIP_COUNT.get(self.number, 0)


class Vertex(pydantic.BaseModel):
    """A unique physical corner where a settlement can be placed.

    Shared by up to three hexes; ``adjacent_vertices`` lists the corners exactly
    one edge away, which drive both the distance rule and road adjacency.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    id: str
    q: int  # anchor hex
    r: int
    direction: VertexDirection  # corner of the anchor hex
    adjacent_hexes: list[str]
    adjacent_vertices: list[str]
    has_settlement: bool = False
    player_color: str | None = None
    port: PortType | None = None


class Edge(pydantic.BaseModel):
    """A road between two adjacent vertices, keyed by the sorted vertex pair."""

    model_config = pydantic.ConfigDict(frozen=True)

    id: str
    vertex_a: str
    vertex_b: str
    has_road: bool = True
    player_color: str | None = None

    def touches(self, vertex_id: str) -> bool:
        return vertex_id in (self.vertex_a, self.vertex_b)


class Port(pydantic.BaseModel):
    """A trading port accessible from exactly two adjacent coastal vertices."""

    model_config = pydantic.ConfigDict(frozen=True)

    port_type: PortType
    vertex_ids: tuple[str, str]


class Board(pydantic.BaseModel):
    """The complete board snapshot: hexes, vertices, roads and ports."""

    model_config = pydantic.ConfigDict(frozen=True)

    hexes: dict[str, HexTile]
    vertices: dict[str, Vertex]
    edges: dict[str, Edge] = pydantic.Field(default_factory=dict)
    ports: dict[str, PortType] = pydantic.Field(default_factory=dict)  # vertex → port
    port_placements: list[Port] = pydantic.Field(default_factory=list)
    # False when number tokens were placed by the unconstrained fallback.
    numbers_constrained: bool = True

    def adjacent_hexes(self, vertex: Vertex) -> list[HexTile]:
        """Return the on-board hexes touching *vertex*, skipping unknown IDs."""
        return [self.hexes[h] for h in vertex.adjacent_hexes if h in self.hexes]

    def settlements(self, player_color: str | None = None) -> list[Vertex]:
        """Return settled vertices, optionally only those of *player_color*."""
        return [
            v
            for v in self.vertices.values()
            if v.has_settlement
            and (player_color is None or v.player_color == player_color)
        ]
