"""Human-readable explanations for settlement recommendations.

Two registers are produced from the same score breakdown:

* guide: short plain-language sentences (income, variety, what the spot lets
  you build, ports, scarcity, room to expand, fit with your other
  settlements, weaknesses).
* scholar: the numbers behind the score, ending in a raw x weight table whose
  total matches the vertex's total score.

Sections that need the board or the player's colour are left out when that
context is missing.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import board, scoring
from .scoring import components

RESOURCE_NAMES: dict[board.ResourceType, str] = {
    board.ResourceType.WHEAT: 'Wheat',
    board.ResourceType.WOOD: 'Wood',
    board.ResourceType.BRICK: 'Brick',
    board.ResourceType.ORE: 'Ore',
    board.ResourceType.SHEEP: 'Sheep',
    board.ResourceType.DESERT: 'Desert',
}

COMPONENT_LABELS: dict[str, str] = {
    'probability': 'Probability',
    'diversity': 'Diversity',
    'number_quality': 'Number quality',
    'port': 'Port',
    'expansion': 'Expansion',
    'scarcity': 'Scarcity',
    'complement': 'Complement',
}

# What each build needs, in the order they are mentioned.
BUILD_RECIPES: dict[str, frozenset[board.ResourceType]] = {
    'roads': frozenset({board.ResourceType.WOOD, board.ResourceType.BRICK}),
    'settlements': frozenset(
        {
            board.ResourceType.WOOD,
            board.ResourceType.BRICK,
            board.ResourceType.WHEAT,
            board.ResourceType.SHEEP,
        }
    ),
    'cities': frozenset({board.ResourceType.WHEAT, board.ResourceType.ORE}),
    'development cards': frozenset(
        {board.ResourceType.WHEAT, board.ResourceType.SHEEP, board.ResourceType.ORE}
    ),
}

_RARE_NUMBERS = frozenset({2, 3, 11, 12})
_SCARCE_RATIO = 0.75
_STEADY_INCOME = 0.25
_OPEN_EXPANSION = 0.6
_TIGHT_EXPANSION = 0.2


def generate_explanation(
    hexes: list[board.HexTile],
    breakdown: scoring.ScoreBreakdown,
    mode: scoring.ExplanationMode | str,
    vertex: board.Vertex | None = None,
    brd: board.Board | None = None,
    player_color: str | None = None,
    weights: scoring.ScoreWeights | None = None,
) -> str:
    """Return explanation text for one vertex.

    Raises:
        ValueError: *mode* is not a known explanation mode.
    """
    mode = scoring.ExplanationMode(mode)
    if weights is None:
        weights = scoring.DEFAULT_WEIGHTS
    if mode == scoring.ExplanationMode.GUIDE:
        lines = _guide(hexes, breakdown, vertex, brd, player_color)
    else:
        lines = _scholar(hexes, breakdown, vertex, brd, player_color, weights)
    return '\n'.join(lines)


# ---------------------------------------------------------------------------
# Guide
# ---------------------------------------------------------------------------


def _guide(
    hexes: list[board.HexTile],
    breakdown: scoring.ScoreBreakdown,
    vertex: board.Vertex | None,
    brd: board.Board | None,
    player_color: str | None,
) -> list[str]:
    tiles = components.producing(hexes)
    resources = _distinct_resources(tiles)
    lines: list[str] = []

    if tiles:
        listing = ', '.join(f'{RESOURCE_NAMES[t.resource]} ({t.number})' for t in tiles)
        lines.append(f'Adjacent to: {listing}')

    lines.append(_income_line(tiles, breakdown.probability_score))

    if len(resources) >= 3:
        lines.append(
            f'Great variety: {len(resources)} resources ({_names(resources)}).'
        )
    elif len(resources) == 2:
        lines.append(f'Two resources: {_names(resources)}.')
    elif len(resources) == 1:
        lines.append(f'Single resource: {_names(resources)} only.')

    covered: set[board.ResourceType] = set()
    has_settlements = False
    if brd is not None and player_color is not None:
        covered, _ = components.player_coverage(brd, player_color)
        has_settlements = bool(brd.settlements(player_color))
    builds = [
        name
        for name, needs in BUILD_RECIPES.items()
        if needs <= covered | set(resources)
    ]
    if builds:
        lines.append(f'Self-supplies {_join(builds)}.')

    if vertex is not None and vertex.port is not None:
        lines.append(_port_line(vertex.port, resources))

    if brd is not None:
        scarce = _scarcest(resources, brd)
        if scarce is not None:
            lines.append(f'{RESOURCE_NAMES[scarce]} is scarce on this board.')

    if breakdown.expansion_score >= _OPEN_EXPANSION:
        lines.append('Room to grow: several open spots a road away.')
    elif breakdown.expansion_score <= _TIGHT_EXPANSION:
        lines.append('Boxed in: few open spots a road away.')

    if has_settlements:
        new = [r for r in resources if r not in covered]
        if new:
            lines.append(f'Adds {_names(new)} to your settlements.')
        else:
            lines.append('Adds no new resources to your settlements.')

    weaknesses = _weaknesses(hexes, tiles)
    if weaknesses:
        lines.append(f'Weaknesses: {"; ".join(weaknesses)}.')
    return lines


def _income_line(tiles: list[board.HexTile], probability: float) -> str:
    hot = sum(1 for t in tiles if t.number in (6, 8))
    if hot >= 2:
        return 'Excellent income: two or more 6/8 hexes.'
    if hot == 1:
        return 'Good income: one 6 or 8 hex.'
    if probability >= _STEADY_INCOME:
        return 'Steady income from mid-range numbers.'
    if tiles:
        return 'Low income: the numbers here rarely roll.'
    return 'No production here.'


def _port_line(port: board.PortType, resources: list[board.ResourceType]) -> str:
    resource = port.resource
    if resource is None:
        return '3:1 port: trade any surplus at better rates.'
    name = RESOURCE_NAMES[resource]
    if resource in resources:
        return f'2:1 {name} port paired with {name} production.'
    return f'2:1 {name} port, but no {name} production here.'


def _weaknesses(hexes: list[board.HexTile], tiles: list[board.HexTile]) -> list[str]:
    found: list[str] = []
    if any(h.resource == board.ResourceType.DESERT for h in hexes):
        found.append('touches the desert')
    if tiles and all(t.number in _RARE_NUMBERS for t in tiles):
        found.append('only rare numbers')
    if len(tiles) < 2:
        noun = 'hex' if len(tiles) == 1 else 'hexes'
        found.append(f'only {len(tiles)} producing {noun}')
    if any(t.has_robber for t in tiles):
        found.append('the robber sits on an adjacent hex')
    return found


# ---------------------------------------------------------------------------
# Scholar
# ---------------------------------------------------------------------------


def _scholar(
    hexes: list[board.HexTile],
    breakdown: scoring.ScoreBreakdown,
    vertex: board.Vertex | None,
    brd: board.Board | None,
    player_color: str | None,
    weights: scoring.ScoreWeights,
) -> list[str]:
    tiles = components.producing(hexes)
    lines: list[str] = ['Adjacent hexes:']
    for tile in hexes:
        if tile.resource == board.ResourceType.DESERT:
            lines.append('  Desert: 0 pips')
            continue
        lines.append(
            f'  {RESOURCE_NAMES[tile.resource]} {tile.number or "-"}: '
            f'{tile.pips} pips ({tile.pips / 36:.1%})'
        )

    pips = sum(t.pips for t in tiles)
    lines.append(f'Production: {pips}/36 = {pips / 36:.1%} per roll')

    if vertex is not None:
        lines.append(f'Port: {_port_detail(vertex.port, tiles)}')

    if brd is not None:
        abundance = components.resource_abundance(brd)
        most = max(abundance.values(), default=0)
        resources = _distinct_resources(tiles)
        if resources:
            lines.append(f'Board abundance (max {most} pips):')
            for resource in resources:
                lines.append(
                    f'  {RESOURCE_NAMES[resource]}: {abundance.get(resource, 0)} pips'
                )

    if brd is not None and player_color is not None and brd.settlements(player_color):
        coverage = components.player_coverage(brd, player_color)
        covered_resources, covered_numbers = coverage
        new_resources = {t.resource for t in tiles} - covered_resources
        new_numbers = [t.number for t in tiles if t.number not in covered_numbers]
        lines.append(
            f'Complement: +{len(new_resources)} resources, +{len(new_numbers)} numbers'
        )

    preset = scoring.match_preset(weights)
    label = scoring.SCORE_PRESETS[preset].label if preset else 'Custom'
    lines.append(f'Weights: {label}')
    lines.append(f'  {"Component":<15} {"raw":>6}   {"weight":>6}   {"value":>6}')
    contributions = breakdown.contributions(weights)
    for name, value in contributions.items():
        lines.append(
            f'  {COMPONENT_LABELS[name]:<15} {breakdown.raw(name):>6.3f} x '
            f'{getattr(weights, name):>6.2f} = {value:>6.3f}'
        )
    total = sum(contributions.values())
    lines.append(f'  {"Total":<15} {"":>6}   {"":>6}   {total:>6.3f}')
    return lines


def _port_detail(port: board.PortType | None, tiles: list[board.HexTile]) -> str:
    if port is None:
        return 'none'
    resource = port.resource
    if resource is None:
        return '3:1 generic'
    matching = sum(t.pips for t in tiles if t.resource == resource)
    if matching:
        return f'2:1 {resource.value} (matching, {matching} pips)'
    return f'2:1 {resource.value} (no matching production)'


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _distinct_resources(tiles: list[board.HexTile]) -> list[board.ResourceType]:
    """Return the distinct producing resources in display order."""
    present = {t.resource for t in tiles}
    return [r for r in board.PRODUCING_RESOURCES if r in present]


def _scarcest(
    resources: list[board.ResourceType], brd: board.Board
) -> board.ResourceType | None:
    """Return the rarest of *resources* if it is notably rarer than the most common."""
    abundance = components.resource_abundance(brd)
    most = max(abundance.values(), default=0)
    if not resources or most == 0:
        return None
    rarest = min(resources, key=lambda r: (abundance.get(r, 0), r.value))
    if abundance.get(rarest, 0) <= most * _SCARCE_RATIO:
        return rarest
    return None


def _names(resources: Iterable[board.ResourceType]) -> str:
    return ', '.join(RESOURCE_NAMES[r] for r in resources)


def _join(items: list[str]) -> str:
    if len(items) == 1:
        return items[0]
    return ', '.join(items[:-1]) + ' and ' + items[-1]
