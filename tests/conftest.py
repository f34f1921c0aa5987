import pytest

from manaforge.models import failure as failure_module
from manaforge.models.category import GENERIC_SPELL, CardCategory
from manaforge.models.deck import DeckMultiset, build_deck


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    Python reuses memory addresses for new objects, so stale ids from
    earlier tests could otherwise collide.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture
def azorius_deck() -> DeckMultiset:
    """8 W lands, 8 U lands, 1 WU land, 23 spells."""
    return build_deck(
        {
            CardCategory.land("W"): 8,
            CardCategory.land("U"): 8,
            CardCategory.land("WU"): 1,
        },
        40,
    )


@pytest.fixture
def mono_deck() -> DeckMultiset:
    """17 R lands, 23 spells."""
    return build_deck({CardCategory.land("R"): 17, GENERIC_SPELL: 23}, 40)


@pytest.fixture
def tiny_deck() -> DeckMultiset:
    """2 lands, 2 spells."""
    return build_deck({CardCategory.land("G"): 2}, 4)
