"""
Turn-by-turn draw endpoints.

Walks the draw-sequence tree to a target turn and reports the
distribution of a hand statistic (lands, untapped lands, sources of a
color, ...).
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from manaforge.analysis.draw_tree import DrawTree, statistic_by_turn
from manaforge.analysis.statistics import resolve_statistic
from manaforge.api.schemas import DeckPayload, ProbabilityValue
from manaforge.models.tree import TurnDistribution

router = APIRouter(prefix="/draws", tags=["draws"])


class DrawRequest(BaseModel):
    """Tree walk parameters."""

    deck: DeckPayload
    turns: int = Field(ge=0, description="Tree depth (draw steps from the root)")
    draws_per_turn: int = Field(default=1, ge=1)
    opening_hand_size: int = Field(default=0, ge=0)
    statistic: str = "untapped_lands"
    color: str | None = None


class GameTurnRequest(BaseModel):
    """Statistic at a game turn, counting the opening hand."""

    deck: DeckPayload
    turn: int = Field(ge=1)
    on_play: bool = True
    opening_hand_size: int = Field(default=7, ge=0)
    statistic: str = "untapped_lands"
    color: str | None = None


class StatisticMass(BaseModel):
    """Probability mass of one statistic value."""

    value: int
    probability: ProbabilityValue


class DrawDistributionResponse(BaseModel):
    """Distribution of a statistic at one turn."""

    turn: int
    statistic: str
    leaf_count: int
    expected_value: float
    masses: list[StatisticMass]


def _response(distribution: TurnDistribution, statistic: str) -> DrawDistributionResponse:
    return DrawDistributionResponse(
        turn=distribution.turn,
        statistic=statistic,
        leaf_count=distribution.leaf_count,
        expected_value=float(distribution.expected_value()),
        masses=[
            StatisticMass(value=value, probability=ProbabilityValue.of(probability))
            for value, probability in sorted(distribution.masses.items())
        ],
    )


@router.post("/distribution", response_model=DrawDistributionResponse)
async def draw_distribution(request: DrawRequest) -> DrawDistributionResponse:
    """Distribution of a hand statistic after ``turns`` draw steps."""
    deck = request.deck.to_deck()
    statistic = resolve_statistic(request.statistic, request.color)
    tree = DrawTree(
        deck,
        draws_per_turn=request.draws_per_turn,
        opening_hand_size=request.opening_hand_size,
    )
    return _response(tree.distribution(request.turns, statistic), request.statistic)


@router.post("/turn", response_model=DrawDistributionResponse)
async def game_turn_distribution(request: GameTurnRequest) -> DrawDistributionResponse:
    """Distribution of a hand statistic at a game turn."""
    deck = request.deck.to_deck()
    statistic = resolve_statistic(request.statistic, request.color)
    distribution = statistic_by_turn(
        deck,
        request.turn,
        statistic,
        opening_hand_size=request.opening_hand_size,
        on_play=request.on_play,
    )
    return _response(distribution, request.statistic)
