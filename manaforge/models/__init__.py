from manaforge.models.budget import EnumerationBudget
from manaforge.models.category import COLORS, GENERIC_SPELL, CardCategory, CardKind
from manaforge.models.deck import CountVector, DeckMultiset, build_deck
from manaforge.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    DomainError,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    ResourceError,
    ValidationError,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from manaforge.models.tree import DrawNode, TurnDistribution

__all__ = [
    "ApiResponse",
    "COLORS",
    "CardCategory",
    "CardKind",
    "CountVector",
    "DeckMultiset",
    "DomainError",
    "DrawNode",
    "EnumerationBudget",
    "FailureDetail",
    "FailureKind",
    "GENERIC_SPELL",
    "KnownError",
    "OutcomeType",
    "ResourceError",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "TurnDistribution",
    "ValidationError",
    "build_deck",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
]
