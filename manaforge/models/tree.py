"""
Draw-sequence tree models.

A DrawNode is one path through successive draws: the residual deck after
those draws, the running tally of drawn categories and the exact
probability of the path. Nodes reaching identical states through
different paths stay distinct; mass is aggregated only when a
TurnDistribution is built.
"""

from collections.abc import Hashable
from dataclasses import dataclass, field
from fractions import Fraction

from manaforge.models.deck import CountVector, DeckMultiset


@dataclass(frozen=True)
class DrawNode:
    """
    One node of a draw-sequence tree.

    Attributes:
        turn: Number of draw steps taken from the root
        residual_deck: Deck remaining after the draws on this path
        hand: Running tally of drawn cards, in the root deck's vector order
        probability: Exact probability of this path
    """

    turn: int
    residual_deck: DeckMultiset
    hand: CountVector
    probability: Fraction = Fraction(1)

    @property
    def cards_drawn(self) -> int:
        """Total cards drawn along this path."""
        return sum(self.hand)


@dataclass
class TurnDistribution:
    """
    Probability mass of a derived statistic at a given turn.

    Attributes:
        turn: Tree depth the distribution was taken at
        masses: Statistic value -> exact probability
        leaf_count: Number of tree leaves aggregated (no merging)
    """

    turn: int
    masses: dict[Hashable, Fraction] = field(default_factory=dict)
    leaf_count: int = 0

    def add(self, value: Hashable, probability: Fraction) -> None:
        """Accumulate mass for a statistic value."""
        self.masses[value] = self.masses.get(value, Fraction(0)) + probability

    def total(self) -> Fraction:
        """Total mass (exactly 1 for a complete traversal)."""
        return sum(self.masses.values(), Fraction(0))

    def probability_at_least(self, threshold: int) -> Fraction:
        """P(statistic >= threshold) for numeric statistics."""
        return sum(
            (p for value, p in self.masses.items() if value >= threshold),  # type: ignore[operator]
            Fraction(0),
        )

    def expected_value(self) -> Fraction:
        """Mean of a numeric statistic."""
        return sum(
            (value * p for value, p in self.masses.items()),  # type: ignore[operator]
            Fraction(0),
        )

    def as_floats(self) -> dict[Hashable, float]:
        """Float view for reporting."""
        return {value: float(p) for value, p in sorted(self.masses.items())}  # type: ignore[type-var]
