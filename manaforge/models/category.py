"""
Card categories.

A category is an equivalence class of cards sharing kind, color set and
tapped-entry behavior. Draw probabilities depend only on the category,
so physically distinct cards of the same category collapse into one
counted bucket of a DeckMultiset.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from manaforge.models.failure import ValidationError

COLOR_ORDER = "WUBRG"
COLORS: frozenset[str] = frozenset(COLOR_ORDER)


class CardKind(str, Enum):
    """Card kinds known to the engine."""

    SPELL = "spell"
    LAND = "land"
    FETCH_LAND = "fetch_land"  # a refinement of LAND


LAND_KINDS = frozenset({CardKind.LAND, CardKind.FETCH_LAND})


def normalize_colors(colors: str | Iterable[str]) -> frozenset[str]:
    """
    Normalize a color specification into a frozenset of WUBRG symbols.

    Accepts a string ("WU", "wu") or any iterable of single symbols.

    Raises:
        ValidationError: If any symbol is outside the WUBRG alphabet
    """
    symbols = frozenset(str(c).upper() for c in colors)
    unknown = symbols - COLORS
    if unknown:
        raise ValidationError(
            message="Unknown color symbol",
            detail=f"{sorted(unknown)} not in {COLOR_ORDER}",
        )
    return symbols


@dataclass(frozen=True)
class CardCategory:
    """
    An immutable card category.

    Equality and hashing are structural over (kind, colors, enters_tapped).

    Attributes:
        kind: spell, land or fetch_land
        colors: Subset of WUBRG (empty for colorless)
        enters_tapped: Whether the card enters the battlefield tapped
    """

    kind: CardKind = CardKind.SPELL
    colors: frozenset[str] = field(default_factory=frozenset)
    enters_tapped: bool = False

    def __post_init__(self) -> None:
        try:
            kind = CardKind(self.kind)
        except ValueError:
            raise ValidationError(
                message="Unknown card kind",
                detail=f"{self.kind!r} is not one of {[k.value for k in CardKind]}",
            ) from None
        if not isinstance(self.enters_tapped, bool):
            raise ValidationError(
                message="enters_tapped must be a boolean",
                detail=f"got {self.enters_tapped!r}",
            )
        # frozen: assign normalized values through object.__setattr__
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "colors", normalize_colors(self.colors))

    @classmethod
    def land(cls, colors: str = "", enters_tapped: bool = False) -> "CardCategory":
        """Build a land category producing the given colors."""
        return cls(kind=CardKind.LAND, colors=frozenset(colors), enters_tapped=enters_tapped)

    @classmethod
    def fetch_land(cls, colors: str = "", enters_tapped: bool = False) -> "CardCategory":
        """Build a fetch-land category able to find the given colors."""
        return cls(
            kind=CardKind.FETCH_LAND, colors=frozenset(colors), enters_tapped=enters_tapped
        )

    @classmethod
    def spell(cls, colors: str = "") -> "CardCategory":
        """Build a spell category."""
        return cls(kind=CardKind.SPELL, colors=frozenset(colors))

    @property
    def is_land(self) -> bool:
        """True for lands and land refinements."""
        return self.kind in LAND_KINDS

    @property
    def color_string(self) -> str:
        """Colors in WUBRG order, e.g. "WU"."""
        return "".join(c for c in COLOR_ORDER if c in self.colors)

    def produces(self, color: str) -> bool:
        """True if this category is a land producing ``color``."""
        return self.is_land and color.upper() in self.colors

    def sort_key(self) -> tuple[int, str, int, tuple[int, ...], bool]:
        """Stable ordering key: lands first, then by colors in WUBRG order, then tapped."""
        kind_rank = 0 if self.is_land else 1
        return (
            kind_rank,
            self.kind.value,
            len(self.colors),
            tuple(COLOR_ORDER.index(c) for c in self.color_string),
            self.enters_tapped,
        )

    @property
    def label(self) -> str:
        """Short label, e.g. "WU land" or "W land (tapped)"."""
        name = self.kind.value.replace("_", "-")
        text = f"{self.color_string} {name}" if self.colors else name
        if self.enters_tapped:
            text += " (tapped)"
        return text

    def __str__(self) -> str:
        return self.label


GENERIC_SPELL = CardCategory.spell()
