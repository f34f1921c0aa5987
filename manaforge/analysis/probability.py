"""
Exact multivariate-hypergeometric probabilities.

For a vector (k_1..k_m) drawn without replacement from a deck with
category counts (N_1..N_m), total N, draw size n = sum(k_i):

    P(vector) = prod_i C(N_i, k_i) / C(N, n)

All arithmetic is on Python integers and Fractions, so results are
exact for any deck size. Floats appear only at the reporting boundary
(to_float_distribution, TurnDistribution.as_floats and the API schemas).
"""

import logging
from collections.abc import Callable, Hashable, Sequence
from fractions import Fraction
from math import comb, prod

from manaforge.analysis.support import check_draw_size, enumerate_hands
from manaforge.models.budget import EnumerationBudget
from manaforge.models.category import CardCategory
from manaforge.models.deck import CountVector, DeckMultiset
from manaforge.models.failure import DomainError

logger = logging.getLogger(__name__)

HandStatistic = Callable[[dict[CardCategory, int]], Hashable]


def favourable_draws(counts: Sequence[int], vector: Sequence[int]) -> int:
    """Number of ways to draw ``vector``: prod_i C(N_i, k_i). Inputs are not validated."""
    return prod(comb(available, k) for k, available in zip(vector, counts, strict=True))


def hand_probability(deck: DeckMultiset, vector: Sequence[int]) -> Fraction:
    """
    Exact probability of drawing exactly ``vector`` from ``deck``.

    The draw size is the vector's sum.

    Raises:
        DomainError: If the vector does not fit the deck
    """
    counts = deck.count_vector
    if len(vector) != len(counts):
        raise DomainError(
            message="Count vector does not match deck categories",
            detail=f"vector has {len(vector)} entries, deck has {len(counts)}",
        )
    for k, available in zip(vector, counts, strict=True):
        if k < 0 or k > available:
            raise DomainError(
                message="Count vector component out of range",
                detail=f"{k} not in 0..{available}",
            )

    return Fraction(favourable_draws(counts, vector), comb(deck.size, sum(vector)))


def hand_probability_for_size(deck: DeckMultiset, vector: Sequence[int], n: int) -> Fraction:
    """
    Like hand_probability, but also checks the vector sums to ``n``.

    Raises:
        DomainError: If sum(vector) != n or the vector does not fit the deck
    """
    if sum(vector) != n:
        raise DomainError(
            message="Count vector does not sum to the draw size",
            detail=f"sum {sum(vector)} != {n}",
        )
    return hand_probability(deck, vector)


def hand_distribution(
    deck: DeckMultiset,
    n: int,
    budget: EnumerationBudget | None = None,
) -> dict[CountVector, Fraction]:
    """
    Full support of an ``n``-card draw with exact probabilities.

    The probabilities sum to exactly 1.

    Raises:
        DomainError: If n is not an integer, is negative, or exceeds the deck size
        ResourceError: If the support exceeds the budget
    """
    check_draw_size(deck, n)
    total = comb(deck.size, n)
    counts = deck.count_vector
    distribution: dict[CountVector, Fraction] = {}
    # enumerated vectors already fit the deck
    for vector in enumerate_hands(deck, n, budget):
        distribution[vector] = Fraction(favourable_draws(counts, vector), total)
    logger.debug("Hand distribution for %d cards: %d outcomes", n, len(distribution))
    return distribution


def marginal_distribution(
    deck: DeckMultiset,
    n: int,
    statistic: HandStatistic,
    budget: EnumerationBudget | None = None,
) -> dict[Hashable, Fraction]:
    """
    Aggregate an ``n``-card hand distribution by a derived statistic.

    Args:
        deck: Deck to draw from
        n: Draw size
        statistic: Function of the hand tally {category: count}
        budget: Enumeration bounds

    Returns:
        Statistic value -> exact probability
    """
    masses: dict[Hashable, Fraction] = {}
    for vector, probability in hand_distribution(deck, n, budget).items():
        value = statistic(deck.tally(vector))
        masses[value] = masses.get(value, Fraction(0)) + probability
    return dict(sorted(masses.items()))  # type: ignore[type-var]


def to_float_distribution(distribution: dict[Hashable, Fraction]) -> dict[Hashable, float]:
    """Convert exact probabilities to floats for reporting."""
    return {key: float(value) for key, value in distribution.items()}
