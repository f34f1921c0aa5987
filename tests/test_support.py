"""Tests for hand-support enumeration (counting and enumeration modes)."""

from itertools import product

import pytest

from manaforge.analysis.support import count_hands, enumerate_hands
from manaforge.models.budget import EnumerationBudget
from manaforge.models.category import GENERIC_SPELL, CardCategory
from manaforge.models.deck import DeckMultiset
from manaforge.models.failure import DomainError, FailureKind, ResourceError


def brute_force_support(counts: tuple[int, ...], n: int) -> list[tuple[int, ...]]:
    """All vectors bounded by counts summing to n, by exhaustive product."""
    ranges = [range(c + 1) for c in counts]
    return sorted(v for v in product(*ranges) if sum(v) == n)


class TestEnumerateHands:
    def test_two_color_deck_matches_manual_enumeration(self, azorius_deck: DeckMultiset) -> None:
        """8 W, 8 U, 1 WU, 23 spells, 7-card hands."""
        expected = brute_force_support((8, 8, 1, 23), 7)

        support = enumerate_hands(azorius_deck, 7)

        assert support == expected
        assert count_hands(azorius_deck, 7) == len(expected)

    def test_monocolored_land_counts(self, mono_deck: DeckMultiset) -> None:
        """17 lands + 23 spells: land count 0..7 with complementary spells."""
        support = enumerate_hands(mono_deck, 7)

        assert support == [(k, 7 - k) for k in range(8)]

    def test_zero_draw_is_all_zero_vector(self, azorius_deck: DeckMultiset) -> None:
        assert enumerate_hands(azorius_deck, 0) == [(0, 0, 0, 0)]
        assert count_hands(azorius_deck, 0) == 1

    def test_full_draw_is_deck_vector(self, azorius_deck: DeckMultiset) -> None:
        assert enumerate_hands(azorius_deck, 40) == [(8, 8, 1, 23)]
        assert count_hands(azorius_deck, 40) == 1

    def test_components_bounded_by_deck(self, azorius_deck: DeckMultiset) -> None:
        for vector in enumerate_hands(azorius_deck, 12):
            assert sum(vector) == 12
            assert all(k <= n for k, n in zip(vector, azorius_deck.count_vector, strict=True))

    def test_draw_more_than_deck_raises(self, tiny_deck: DeckMultiset) -> None:
        with pytest.raises(DomainError) as exc_info:
            enumerate_hands(tiny_deck, 5)
        assert exc_info.value.kind == FailureKind.DOMAIN_VIOLATION

    def test_negative_draw_raises(self, tiny_deck: DeckMultiset) -> None:
        with pytest.raises(DomainError):
            count_hands(tiny_deck, -1)

    def test_empty_deck_zero_draw(self) -> None:
        empty = DeckMultiset()
        assert enumerate_hands(empty, 0) == [()]
        assert count_hands(empty, 0) == 1


class TestCountHands:
    @pytest.mark.parametrize("n", [0, 1, 3, 7, 10, 20])
    def test_counting_matches_enumeration(self, azorius_deck: DeckMultiset, n: int) -> None:
        assert count_hands(azorius_deck, n) == len(enumerate_hands(azorius_deck, n))

    def test_monotone_in_supply(self) -> None:
        """Adding copies of one category never shrinks the support."""
        w, u, s = CardCategory.land("W"), CardCategory.land("U"), GENERIC_SPELL
        previous = 0
        for extra in range(6):
            deck = DeckMultiset(counts=((w, 1 + extra), (u, 2), (s, 3)))
            current = count_hands(deck, 5)
            assert current >= previous
            previous = current

    def test_symmetry_under_category_swap(self) -> None:
        """Swapping two categories permutes the support."""
        w, u, s = CardCategory.land("W"), CardCategory.land("U"), GENERIC_SPELL
        deck = DeckMultiset(counts=((w, 3), (u, 5), (s, 4)))
        swapped = DeckMultiset(counts=((u, 5), (w, 3), (s, 4)))

        original = enumerate_hands(deck, 6)
        permuted = enumerate_hands(swapped, 6)

        assert sorted((b, a, c) for a, b, c in original) == permuted


class TestSupportBudget:
    def test_support_over_bound_raises_resource_error(self, mono_deck: DeckMultiset) -> None:
        budget = EnumerationBudget(max_support_size=5)

        with pytest.raises(ResourceError) as exc_info:
            enumerate_hands(mono_deck, 7, budget)

        assert exc_info.value.requested == 8
        assert exc_info.value.limit == 5
        assert exc_info.value.kind == FailureKind.RESOURCE_EXCEEDED

    def test_counting_mode_ignores_budget(self, azorius_deck: DeckMultiset) -> None:
        """Counting stays available when enumeration would be refused."""
        budget = EnumerationBudget(max_support_size=1)
        assert count_hands(azorius_deck, 7) > 1
        with pytest.raises(ResourceError):
            enumerate_hands(azorius_deck, 7, budget)

    def test_support_at_bound_allowed(self, mono_deck: DeckMultiset) -> None:
        budget = EnumerationBudget(max_support_size=8)
        assert len(enumerate_hands(mono_deck, 7, budget)) == 8
