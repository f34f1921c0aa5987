"""
Derived statistics over a hand tally.

A hand tally maps each drawn category to how many copies were drawn.
Statistics are plain callables so callers can aggregate by anything.
"""

from collections.abc import Callable

from manaforge.models.category import COLORS, CardCategory
from manaforge.models.failure import ValidationError

HandTally = dict[CardCategory, int]


def land_count(hand: HandTally) -> int:
    """Lands in hand."""
    return sum(count for category, count in hand.items() if category.is_land)


def spell_count(hand: HandTally) -> int:
    """Non-land cards in hand."""
    return sum(count for category, count in hand.items() if not category.is_land)


def untapped_land_count(hand: HandTally) -> int:
    """Lands in hand that enter untapped."""
    return sum(
        count
        for category, count in hand.items()
        if category.is_land and not category.enters_tapped
    )


def color_source_count(color: str) -> Callable[[HandTally], int]:
    """Statistic counting lands in hand that produce ``color``."""
    color = _check_color(color)

    def statistic(hand: HandTally) -> int:
        return sum(count for category, count in hand.items() if category.produces(color))

    return statistic


def untapped_color_source_count(color: str) -> Callable[[HandTally], int]:
    """Statistic counting untapped lands in hand that produce ``color``."""
    color = _check_color(color)

    def statistic(hand: HandTally) -> int:
        return sum(
            count
            for category, count in hand.items()
            if category.produces(color) and not category.enters_tapped
        )

    return statistic


STATISTICS: dict[str, Callable[[HandTally], int]] = {
    "lands": land_count,
    "spells": spell_count,
    "untapped_lands": untapped_land_count,
}

COLOR_STATISTICS: dict[str, Callable[[str], Callable[[HandTally], int]]] = {
    "color_sources": color_source_count,
    "untapped_color_sources": untapped_color_source_count,
}


def resolve_statistic(name: str, color: str | None = None) -> Callable[[HandTally], int]:
    """
    Look up a statistic by name.

    Raises:
        ValidationError: For unknown names or a missing color
    """
    if name in STATISTICS:
        return STATISTICS[name]
    if name in COLOR_STATISTICS:
        if color is None:
            raise ValidationError(
                message="Statistic requires a color",
                detail=name,
            )
        return COLOR_STATISTICS[name](color)
    raise ValidationError(
        message="Unknown statistic",
        detail=f"{name!r} not in {sorted([*STATISTICS, *COLOR_STATISTICS])}",
    )


def _check_color(color: str) -> str:
    symbol = color.upper()
    if symbol not in COLORS:
        raise ValidationError(message="Unknown color symbol", detail=repr(color))
    return symbol
