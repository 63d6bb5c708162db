"""Scoring, rating and recommendation models."""

from __future__ import annotations

import enum

import pydantic

# Component names shared by ScoreWeights and ScoreBreakdown, in display order.
COMPONENTS: tuple[str, ...] = (
    'probability',
    'diversity',
    'number_quality',
    'port',
    'expansion',
    'scarcity',
    'complement',
)


class ExplanationMode(enum.StrEnum):
    """Explanation style: plain-language guide or numeric scholar breakdown."""

    GUIDE = 'guide'
    SCHOLAR = 'scholar'


class ContestRisk(enum.StrEnum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


# ---------------------------------------------------------------------------
# Weights and presets
# ---------------------------------------------------------------------------


class ScoreWeights(pydantic.BaseModel):
    """User-adjustable multiplier for each score component."""

    model_config = pydantic.ConfigDict(validate_assignment=True)

    probability: float = pydantic.Field(default=1.0, ge=0)
    diversity: float = pydantic.Field(default=0.8, ge=0)
    number_quality: float = pydantic.Field(default=0.6, ge=0)
    port: float = pydantic.Field(default=0.5, ge=0)
    expansion: float = pydantic.Field(default=0.4, ge=0)
    scarcity: float = pydantic.Field(default=0.3, ge=0)
    complement: float = pydantic.Field(default=0.7, ge=0)


DEFAULT_WEIGHTS = ScoreWeights()


class ScorePreset(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    label: str
    description: str
    weights: ScoreWeights


SCORE_PRESETS: dict[str, ScorePreset] = {
    'balanced': ScorePreset(
        label='Balanced',
        description='All-round strategy',
        weights=ScoreWeights(),
    ),
    'city_builder': ScorePreset(
        label='City Builder',
        description='Ore & wheat for cities',
        weights=ScoreWeights(
            probability=1.0,
            diversity=0.5,
            number_quality=1.0,
            port=0.3,
            expansion=0.2,
            scarcity=0.8,
            complement=0.9,
        ),
    ),
    'road_rush': ScorePreset(
        label='Road Rush',
        description='Wood & brick for roads',
        weights=ScoreWeights(
            probability=0.8,
            diversity=1.0,
            number_quality=0.4,
            port=0.3,
            expansion=1.0,
            scarcity=0.3,
            complement=0.6,
        ),
    ),
    'port_trader': ScorePreset(
        label='Port Trader',
        description='Maximise port access',
        weights=ScoreWeights(
            probability=1.0,
            diversity=0.6,
            number_quality=0.5,
            port=1.2,
            expansion=0.4,
            scarcity=0.4,
            complement=0.5,
        ),
    ),
}


def match_preset(weights: ScoreWeights) -> str | None:
    """Return the key of the preset whose weights equal *weights*, if any."""
    for key, preset in SCORE_PRESETS.items():
        if all(
            abs(getattr(weights, name) - getattr(preset.weights, name)) < 1e-9
            for name in COMPONENTS
        ):
            return key
    return None


# ---------------------------------------------------------------------------
# Vertex scores
# ---------------------------------------------------------------------------


class ScoreBreakdown(pydantic.BaseModel):
    """Raw (unweighted) value of each component for one vertex."""

    model_config = pydantic.ConfigDict(frozen=True)

    probability_score: float = 0.0
    diversity_score: float = 0.0
    number_quality_score: float = 0.0
    port_score: float = 0.0
    expansion_score: float = 0.0
    scarcity_score: float = 0.0
    complement_score: float = 0.0

    def raw(self, component: str) -> float:
        return getattr(self, f'{component}_score')

    def contributions(self, weights: ScoreWeights) -> dict[str, float]:
        """Return raw × weight for every component, in display order."""
        return {name: self.raw(name) * getattr(weights, name) for name in COMPONENTS}

    def weighted_total(self, weights: ScoreWeights) -> float:
        return sum(self.contributions(weights).values())


class VertexScore(pydantic.BaseModel):
    vertex_id: str
    total_score: float
    breakdown: ScoreBreakdown
    explanation: str


class RoadSuggestion(pydantic.BaseModel):
    """A candidate road from a settlement to one of its neighbours."""

    from_vertex: str  # settlement vertex
    to_vertex: str  # road endpoint, one edge away
    player_color: str
    score: float  # 0-1
    expansion_spots: int
    contest_risk: ContestRisk
    has_port_access: bool
    new_hex_resources: list[str]
    target_vertices: list[str]  # best reachable spots, highest value first


# ---------------------------------------------------------------------------
# Board rating
# ---------------------------------------------------------------------------


class Grade(enum.StrEnum):
    S = 'S'
    A = 'A'
    B = 'B'
    C = 'C'
    D = 'D'
    F = 'F'


class BoardRatingBreakdown(pydantic.BaseModel):
    """Per-axis board quality, each 0-100."""

    number_spread: int
    resource_spread: int
    resource_diversity: int


class BoardRating(pydantic.BaseModel):
    score: int  # 0-100 composite
    grade: Grade
    label: str
    breakdown: BoardRatingBreakdown
