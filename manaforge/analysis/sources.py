"""
Colored-source requirements, computed exactly.

How many lands producing a color does a deck need to cast a spell
needing ``needed`` pips of that color on turn ``turn``? Each candidate
source count is modeled as a three-category deck (good lands, other
lands, spells) and the probability is the exact mass of hands holding
at least ``needed`` good lands among the cards seen by that turn.

Mulligans are not modeled.
"""

import logging
from fractions import Fraction

from manaforge.analysis.draw_tree import turn_draw_count
from manaforge.analysis.probability import marginal_distribution
from manaforge.analysis.statistics import color_source_count
from manaforge.models.budget import EnumerationBudget
from manaforge.models.category import CardCategory
from manaforge.models.deck import DeckMultiset, build_deck
from manaforge.models.failure import ValidationError

logger = logging.getLogger(__name__)

# Standard deck configurations (deck_size -> land_count)
STANDARD_LAND_COUNTS = {
    40: 17,  # Limited
    60: 24,  # Constructed
    99: 40,  # Duel Commander
}

GOOD_LAND = CardCategory.land("W")
OTHER_LAND = CardCategory.land()


def source_deck(deck_size: int, land_count: int, good_sources: int) -> DeckMultiset:
    """
    Three-category deck with ``good_sources`` of its lands producing the color.

    Raises:
        ValidationError: If good_sources is outside 0..land_count
    """
    if not 0 <= good_sources <= land_count:
        raise ValidationError(
            message="Good sources must be between 0 and the land count",
            detail=f"{good_sources} of {land_count} lands",
        )
    return build_deck({GOOD_LAND: good_sources, OTHER_LAND: land_count - good_sources}, deck_size)


def probability_of_sources(
    deck_size: int,
    land_count: int,
    good_sources: int,
    needed: int,
    turn: int,
    on_play: bool = True,
    opening_hand_size: int = 7,
    budget: EnumerationBudget | None = None,
) -> Fraction:
    """
    Exact probability of holding at least ``needed`` good lands by ``turn``.

    Args:
        deck_size: Total cards in deck
        land_count: Total lands in deck
        good_sources: Lands producing the required color
        needed: Required colored sources (1 for C, 2 for CC, ...)
        turn: Game turn by which the spell is cast
        on_play: True if on the play, False if on the draw
        opening_hand_size: Cards in the opening hand
        budget: Enumeration bounds

    Returns:
        Exact probability as a Fraction
    """
    deck = source_deck(deck_size, land_count, good_sources)
    seen = turn_draw_count(turn, opening_hand_size, on_play)
    masses = marginal_distribution(deck, seen, color_source_count("W"), budget)
    return sum((p for value, p in masses.items() if value >= needed), Fraction(0))  # type: ignore[operator]


def source_table(
    deck_size: int,
    needed: int,
    turn: int,
    land_count: int | None = None,
    on_play: bool = True,
) -> dict[int, Fraction]:
    """
    Probability for every good-source count from 0 to the land count.

    Args:
        deck_size: Total cards in deck
        needed: Required colored sources
        turn: Game turn by which the spell is cast
        land_count: Override default land count for the deck size
        on_play: True if on the play

    Raises:
        ValidationError: For a deck size with no default land count
    """
    if land_count is None:
        if deck_size not in STANDARD_LAND_COUNTS:
            raise ValidationError(
                message=f"Unknown deck size {deck_size}",
                detail=f"Valid sizes: {list(STANDARD_LAND_COUNTS.keys())}",
            )
        land_count = STANDARD_LAND_COUNTS[deck_size]

    return {
        good: probability_of_sources(deck_size, land_count, good, needed, turn, on_play)
        for good in range(land_count + 1)
    }


def find_minimum_sources(
    deck_size: int,
    needed: int,
    turn: int,
    target_probability: float = 0.90,
    land_count: int | None = None,
    on_play: bool = True,
) -> int | None:
    """
    Smallest good-source count reaching ``target_probability``.

    Returns:
        Minimum number of good lands, or None if the target is unreachable
    """
    table = source_table(deck_size, needed, turn, land_count=land_count, on_play=on_play)
    minimum = minimum_from_table(table, target_probability)
    if minimum is not None:
        logger.info(
            "%d-card deck, %d pips by turn %d: %d sources (p=%.4f)",
            deck_size,
            needed,
            turn,
            minimum,
            float(table[minimum]),
        )
    return minimum


def minimum_from_table(table: dict[int, Fraction], target_probability: float) -> int | None:
    """First good-source count in ``table`` whose probability reaches the target."""
    target = Fraction(target_probability).limit_denominator(10**9)

    for good, probability in sorted(table.items()):
        if probability >= target:
            return good

    best = max(table)
    logger.warning(
        "Target %.0f%% not achievable; maximum with %d sources is %.1f%%",
        target_probability * 100,
        best,
        float(table[best]) * 100,
    )
    return None
