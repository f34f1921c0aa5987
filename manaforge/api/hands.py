"""
Opening-hand endpoints.

Count the distinct hands of a deck, or enumerate them with exact
probabilities.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from manaforge.analysis.probability import hand_distribution
from manaforge.analysis.support import count_hands
from manaforge.api.schemas import DeckPayload, ProbabilityValue, vector_labels
from manaforge.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hands", tags=["hands"])


class HandRequest(BaseModel):
    """Deck and draw size."""

    deck: DeckPayload
    hand_size: int = Field(default_factory=lambda: settings.default_hand_size, ge=0)


class HandCountResponse(BaseModel):
    """Number of distinct hands."""

    deck_size: int
    hand_size: int
    distinct_hands: int


class HandOutcome(BaseModel):
    """One Count Vector with its probability."""

    counts: dict[str, int]
    probability: ProbabilityValue


class HandDistributionResponse(BaseModel):
    """Full support of a draw with exact probabilities."""

    deck_size: int
    hand_size: int
    categories: list[str]
    outcomes: list[HandOutcome]


@router.post("/count", response_model=HandCountResponse)
async def count_distinct_hands(request: HandRequest) -> HandCountResponse:
    """Count distinct hands without enumerating them."""
    deck = request.deck.to_deck()
    distinct = count_hands(deck, request.hand_size)
    logger.info("Counted %d distinct %d-card hands", distinct, request.hand_size)
    return HandCountResponse(
        deck_size=deck.size,
        hand_size=request.hand_size,
        distinct_hands=distinct,
    )


@router.post("/distribution", response_model=HandDistributionResponse)
async def distinct_hand_distribution(request: HandRequest) -> HandDistributionResponse:
    """
    Enumerate every distinct hand with its exact probability.

    Fails with a resource error when the support exceeds the configured
    bound; use /hands/count instead.
    """
    deck = request.deck.to_deck()
    distribution = hand_distribution(deck, request.hand_size)
    return HandDistributionResponse(
        deck_size=deck.size,
        hand_size=request.hand_size,
        categories=[category.label for category in deck.categories],
        outcomes=[
            HandOutcome(
                counts=vector_labels(deck, vector),
                probability=ProbabilityValue.of(probability),
            )
            for vector, probability in distribution.items()
        ],
    )
