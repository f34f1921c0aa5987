from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from manaforge.models.category import GENERIC_SPELL, CardCategory
from manaforge.models.failure import DomainError, ValidationError

CountVector = tuple[int, ...]


def check_entry(category: object, count: object) -> None:
    """
    Validate one (category, count) entry of a deck.

    Raises:
        ValidationError: If the key is not a CardCategory or the count is
            not a non-negative integer
    """
    if not isinstance(category, CardCategory):
        raise ValidationError(
            message="Deck specification keys must be card categories",
            detail=f"got {type(category).__name__}",
        )
    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        raise ValidationError(
            message="Category counts must be non-negative integers",
            detail=f"{category.label}: {count!r}",
        )


@dataclass(frozen=True)
class DeckMultiset:
    """
    A deck as an immutable multiset of card categories.

    Categories are kept in a fixed, stable order (CardCategory.sort_key)
    and every Count Vector produced for this deck follows that order.
    Operations never mutate a deck; they return a new one.

    Attributes:
        counts: (category, count) pairs in category order
    """

    counts: tuple[tuple[CardCategory, int], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen: set[CardCategory] = set()
        for category, count in self.counts:
            check_entry(category, count)
            if category in seen:
                raise ValidationError(
                    message="Duplicate category in deck",
                    detail=category.label,
                )
            seen.add(category)
        # frozen: normalize to a tuple of pairs through object.__setattr__
        object.__setattr__(self, "counts", tuple((c, k) for c, k in self.counts))

    @property
    def categories(self) -> tuple[CardCategory, ...]:
        """Categories in vector order."""
        return tuple(category for category, _ in self.counts)

    @property
    def count_vector(self) -> CountVector:
        """Per-category counts in vector order."""
        return tuple(count for _, count in self.counts)

    @property
    def size(self) -> int:
        """Total cards in the deck."""
        return sum(count for _, count in self.counts)

    def total_size(self) -> int:
        """Total cards in the deck."""
        return self.size

    def land_count(self) -> int:
        """Cards whose category is a land."""
        return sum(count for category, count in self.counts if category.is_land)

    def spell_count(self) -> int:
        """Cards whose category is not a land."""
        return self.size - self.land_count()

    def source_count(self, color: str) -> int:
        """Lands able to produce ``color``."""
        return sum(count for category, count in self.counts if category.produces(color))

    def untapped_source_count(self, color: str) -> int:
        """Untapped lands able to produce ``color``."""
        return sum(
            count
            for category, count in self.counts
            if category.produces(color) and not category.enters_tapped
        )

    def count_of(self, category: CardCategory) -> int:
        """Copies of ``category`` in the deck (0 if absent)."""
        for existing, count in self.counts:
            if existing == category:
                return count
        return 0

    def as_dict(self) -> dict[CardCategory, int]:
        """Category counts as a plain dict."""
        return dict(self.counts)

    def tally(self, vector: Sequence[int]) -> dict[CardCategory, int]:
        """Map a Count Vector onto this deck's categories, skipping zeros."""
        self._check_length(vector)
        return {category: k for category, k in zip(self.categories, vector, strict=True) if k}

    def draw(self, vector: Sequence[int]) -> "DeckMultiset":
        """
        Remove the cards described by ``vector`` and return the residual deck.

        The residual keeps every category (possibly at zero) so vector
        positions stay aligned across successive draws.

        Raises:
            DomainError: If the vector does not fit this deck
        """
        self._check_length(vector)
        remaining = []
        for (category, available), k in zip(self.counts, vector, strict=True):
            if k < 0:
                raise DomainError(
                    message="Cannot draw a negative number of cards",
                    detail=f"{category.label}: {k}",
                )
            if k > available:
                raise DomainError(
                    message="Cannot draw more cards than the deck contains",
                    detail=f"{category.label}: requested {k}, available {available}",
                )
            remaining.append((category, available - k))
        return DeckMultiset(counts=tuple(remaining))

    def draw_category(self, category: CardCategory, count: int = 1) -> "DeckMultiset":
        """Remove ``count`` copies of a single category."""
        if category not in self.categories:
            raise DomainError(
                message="Category not in deck",
                detail=category.label,
            )
        vector = tuple(count if existing == category else 0 for existing in self.categories)
        return self.draw(vector)

    def _check_length(self, vector: Sequence[int]) -> None:
        if len(vector) != len(self.counts):
            raise DomainError(
                message="Count vector does not match deck categories",
                detail=f"vector has {len(vector)} entries, deck has {len(self.counts)}",
            )

    def __len__(self) -> int:
        return self.size


def build_deck(
    specification: Mapping[CardCategory, int],
    total_size: int,
) -> DeckMultiset:
    """
    Build a DeckMultiset from a category -> count specification.

    Slots not covered by the specification are filled with GENERIC_SPELL
    (merged with an explicit GENERIC_SPELL entry if present). Categories
    with a zero count are dropped.

    Args:
        specification: Category counts
        total_size: Declared deck size

    Returns:
        Immutable DeckMultiset of exactly ``total_size`` cards

    Raises:
        ValidationError: On negative counts, a sum exceeding total_size,
            or a land count exceeding total_size
    """
    if not isinstance(total_size, int) or isinstance(total_size, bool) or total_size < 0:
        raise ValidationError(
            message="Deck size must be a non-negative integer",
            detail=f"got {total_size!r}",
        )

    merged: dict[CardCategory, int] = {}
    for category, count in specification.items():
        check_entry(category, count)
        merged[category] = merged.get(category, 0) + count

    land_count = sum(count for category, count in merged.items() if category.is_land)
    if land_count > total_size:
        raise ValidationError(
            message="Land count exceeds deck size",
            detail=f"{land_count} lands in a {total_size}-card deck",
        )

    specified = sum(merged.values())
    if specified > total_size:
        raise ValidationError(
            message="Specified cards exceed deck size",
            detail=f"{specified} cards specified for a {total_size}-card deck",
        )

    remainder = total_size - specified
    if remainder:
        merged[GENERIC_SPELL] = merged.get(GENERIC_SPELL, 0) + remainder

    ordered = sorted(
        ((category, count) for category, count in merged.items() if count > 0),
        key=lambda item: item[0].sort_key(),
    )
    return DeckMultiset(counts=tuple(ordered))
