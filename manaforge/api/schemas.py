"""
Request payloads shared by the analysis endpoints.

The deck payload is a declarative category -> count specification;
building it goes through build_deck(), so every structural problem
surfaces as a ValidationError.
"""

from fractions import Fraction

from pydantic import BaseModel, Field

from manaforge.models.category import CardCategory
from manaforge.models.deck import CountVector, DeckMultiset, build_deck


class CategoryPayload(BaseModel):
    """One card category with its copy count."""

    kind: str = Field(default="spell", description="spell, land or fetch_land")
    colors: str = Field(default="", description="WUBRG symbols, e.g. 'WU'")
    enters_tapped: bool = False
    count: int = Field(ge=0)

    def to_category(self) -> CardCategory:
        return CardCategory(
            kind=self.kind,  # type: ignore[arg-type]
            colors=frozenset(self.colors),
            enters_tapped=self.enters_tapped,
        )


class DeckPayload(BaseModel):
    """A deck specification; unspecified slots become generic spells."""

    size: int = Field(ge=0, description="Declared deck size")
    categories: list[CategoryPayload] = Field(default_factory=list)

    def to_deck(self) -> DeckMultiset:
        specification: dict[CardCategory, int] = {}
        for entry in self.categories:
            category = entry.to_category()
            specification[category] = specification.get(category, 0) + entry.count
        return build_deck(specification, self.size)


class ProbabilityValue(BaseModel):
    """An exact probability with its float rendering."""

    exact: str
    value: float

    @classmethod
    def of(cls, probability: Fraction) -> "ProbabilityValue":
        return cls(exact=str(probability), value=float(probability))


def vector_labels(deck: DeckMultiset, vector: CountVector) -> dict[str, int]:
    """Label a Count Vector by category for display."""
    return {category.label: k for category, k in zip(deck.categories, vector, strict=True)}
