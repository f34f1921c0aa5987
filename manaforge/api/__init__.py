from manaforge.api.draws import router as draws_router
from manaforge.api.hands import router as hands_router
from manaforge.api.health import router as health_router
from manaforge.api.sources import router as sources_router

__all__ = [
    "draws_router",
    "hands_router",
    "health_router",
    "sources_router",
]
