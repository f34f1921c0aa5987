import dataclasses

import pytest

from manaforge.models.category import (
    GENERIC_SPELL,
    CardCategory,
    CardKind,
    normalize_colors,
)
from manaforge.models.failure import FailureKind, ValidationError


class TestCardCategoryValidation:
    def test_rejects_unknown_color(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            CardCategory.land("WX")
        assert exc_info.value.kind == FailureKind.VALIDATION_FAILED
        assert "X" in (exc_info.value.detail or "")

    def test_rejects_non_bool_tapped(self) -> None:
        with pytest.raises(ValidationError):
            CardCategory(kind=CardKind.LAND, colors=frozenset("W"), enters_tapped="yes")  # type: ignore[arg-type]

    def test_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            CardCategory(kind="creature")  # type: ignore[arg-type]

    def test_lowercase_colors_normalized(self) -> None:
        assert CardCategory.land("wu").colors == frozenset({"W", "U"})

    def test_normalize_colors_accepts_iterables(self) -> None:
        assert normalize_colors(["g", "R"]) == frozenset({"G", "R"})
        assert normalize_colors("") == frozenset()


class TestCardCategoryIdentity:
    def test_structural_equality(self) -> None:
        """Identical kind/colors/tapped collapse into one category."""
        a = CardCategory.land("WU")
        b = CardCategory(kind="land", colors=frozenset("UW"))  # type: ignore[arg-type]
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_tapped_flag_distinguishes(self) -> None:
        assert CardCategory.land("W") != CardCategory.land("W", enters_tapped=True)

    def test_immutable(self) -> None:
        category = CardCategory.land("G")
        with pytest.raises(dataclasses.FrozenInstanceError):
            category.enters_tapped = True  # type: ignore[misc]

    def test_generic_spell(self) -> None:
        assert GENERIC_SPELL == CardCategory.spell()
        assert not GENERIC_SPELL.is_land
        assert GENERIC_SPELL.colors == frozenset()


class TestCardCategoryBehavior:
    def test_fetch_land_is_land(self) -> None:
        fetch = CardCategory.fetch_land("WU")
        assert fetch.is_land
        assert fetch.kind == CardKind.FETCH_LAND
        assert fetch.produces("U")

    def test_spell_does_not_produce(self) -> None:
        assert not CardCategory.spell("W").produces("W")

    def test_labels(self) -> None:
        assert CardCategory.land("UW").label == "WU land"
        assert CardCategory.land("W", enters_tapped=True).label == "W land (tapped)"
        assert CardCategory.fetch_land("G").label == "G fetch-land"
        assert str(GENERIC_SPELL) == "spell"
        assert CardCategory.land().label == "land"

    def test_sort_key_orders_lands_first_in_wubrg(self) -> None:
        categories = [
            GENERIC_SPELL,
            CardCategory.land("WU"),
            CardCategory.land("U"),
            CardCategory.land("W"),
        ]
        ordered = sorted(categories, key=CardCategory.sort_key)
        assert ordered == [
            CardCategory.land("W"),
            CardCategory.land("U"),
            CardCategory.land("WU"),
            GENERIC_SPELL,
        ]
