from manaforge.analysis.draw_tree import DrawTree, statistic_by_turn, turn_draw_count
from manaforge.analysis.probability import (
    hand_distribution,
    hand_probability,
    hand_probability_for_size,
    marginal_distribution,
    to_float_distribution,
)
from manaforge.analysis.sources import find_minimum_sources, probability_of_sources, source_table
from manaforge.analysis.support import count_hands, enumerate_hands

__all__ = [
    "DrawTree",
    "count_hands",
    "enumerate_hands",
    "find_minimum_sources",
    "hand_distribution",
    "hand_probability",
    "hand_probability_for_size",
    "marginal_distribution",
    "probability_of_sources",
    "source_table",
    "statistic_by_turn",
    "to_float_distribution",
    "turn_draw_count",
]
