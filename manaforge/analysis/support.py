"""
Hand-support enumeration.

The support of a draw of ``n`` cards from a deck with category counts
N_1..N_m is the set of Count Vectors (k_1..k_m) with 0 <= k_i <= N_i and
sum(k_i) = n. Both modes below run the same dynamic program over
categories:

    reach[i][s] = union over k in 0..min(N_i, s) of reach[i-1][s-k] + (k,)
    reach[0][0] = {()}

Counting mode stores the size of each cell and stays polynomial in
(m, n). Enumeration mode stores the partial vectors themselves and is
only tractable for a handful of categories; it is guarded by an
EnumerationBudget.
"""

import logging

from manaforge.models.budget import EnumerationBudget
from manaforge.models.deck import CountVector, DeckMultiset
from manaforge.models.failure import DomainError

logger = logging.getLogger(__name__)


def check_draw_size(deck: DeckMultiset, n: int) -> None:
    """
    Validate a draw size against a deck.

    Raises:
        DomainError: If n is not an integer, is negative, or exceeds the deck
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise DomainError(message="Draw size must be an integer", detail=f"got {n!r}")
    if n < 0:
        raise DomainError(message="Draw size cannot be negative", detail=f"got {n}")
    if n > deck.size:
        raise DomainError(
            message="Cannot draw more cards than the deck contains",
            detail=f"draw {n} from {deck.size}",
        )


def count_hands(deck: DeckMultiset, n: int) -> int:
    """
    Count the distinct Count Vectors of an ``n``-card draw.

    O(m * n * max N_i) time, O(n) memory.

    Raises:
        DomainError: If n is negative or exceeds the deck size
    """
    check_draw_size(deck, n)

    ways = [1] + [0] * n
    for available in deck.count_vector:
        ways = [
            sum(ways[s - k] for k in range(min(available, s) + 1))
            for s in range(n + 1)
        ]

    logger.debug("Support of %d-card draw from %d cards: %d vectors", n, deck.size, ways[n])
    return ways[n]


def enumerate_hands(
    deck: DeckMultiset,
    n: int,
    budget: EnumerationBudget | None = None,
) -> list[CountVector]:
    """
    Enumerate every Count Vector of an ``n``-card draw.

    The support size is computed in counting mode first and checked
    against the budget before anything is materialized.

    Args:
        deck: Deck to draw from
        n: Draw size
        budget: Enumeration bounds (defaults from settings)

    Returns:
        Count Vectors in lexicographic order

    Raises:
        DomainError: If n is negative or exceeds the deck size
        ResourceError: If the support exceeds budget.max_support_size
    """
    budget = budget or EnumerationBudget()
    budget.check_support_size(count_hands(deck, n))

    counts = deck.count_vector
    # capacity[i] = cards available in categories i..m-1
    capacity = [0] * (len(counts) + 1)
    for i in range(len(counts) - 1, -1, -1):
        capacity[i] = capacity[i + 1] + counts[i]

    reach: list[list[CountVector]] = [[()]] + [[] for _ in range(n)]
    for i, available in enumerate(counts):
        extended: list[list[CountVector]] = [[] for _ in range(n + 1)]
        for s in range(n + 1):
            # Partial sums the remaining categories cannot complete are dead
            if s + capacity[i + 1] < n:
                continue
            for k in range(min(available, s) + 1):
                extended[s].extend(vector + (k,) for vector in reach[s - k])
        reach = extended

    support = sorted(reach[n])
    logger.debug("Enumerated %d vectors over %d categories", len(support), len(counts))
    return support
