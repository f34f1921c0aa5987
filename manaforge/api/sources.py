"""
Colored-source requirement endpoints.

Exact answer to "how many sources of a color does this deck need to
cast a spell with N pips on turn T".
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from manaforge.analysis.sources import STANDARD_LAND_COUNTS, minimum_from_table, source_table
from manaforge.api.schemas import ProbabilityValue

router = APIRouter(prefix="/sources", tags=["sources"])


class SourceRequest(BaseModel):
    """Source requirement query."""

    deck_size: int = Field(ge=1)
    needed: int = Field(ge=1, description="Colored pips (1 for C, 2 for CC, ...)")
    turn: int = Field(ge=1)
    land_count: int | None = Field(default=None, ge=0)
    on_play: bool = True
    target_probability: float = Field(default=0.90, gt=0.0, le=1.0)


class SourceRow(BaseModel):
    """Probability for one good-source count."""

    good_sources: int
    probability: ProbabilityValue


class SourceResponse(BaseModel):
    """Minimum sources and the full table behind it."""

    deck_size: int
    land_count: int
    needed: int
    turn: int
    minimum_sources: int | None
    table: list[SourceRow]


@router.post("/minimum", response_model=SourceResponse)
async def minimum_sources(request: SourceRequest) -> SourceResponse:
    """Smallest number of good sources reaching the target probability."""
    table = source_table(
        request.deck_size,
        request.needed,
        request.turn,
        land_count=request.land_count,
        on_play=request.on_play,
    )
    land_count = request.land_count
    if land_count is None:
        land_count = STANDARD_LAND_COUNTS[request.deck_size]
    return SourceResponse(
        deck_size=request.deck_size,
        land_count=land_count,
        needed=request.needed,
        turn=request.turn,
        minimum_sources=minimum_from_table(table, request.target_probability),
        table=[
            SourceRow(good_sources=good, probability=ProbabilityValue.of(probability))
            for good, probability in table.items()
        ],
    )
