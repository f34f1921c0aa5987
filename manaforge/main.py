import logging
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from manaforge.api import draws_router, hands_router, health_router, sources_router
from manaforge.config import configure_logging, settings
from manaforge.models.failure import KnownError, create_known_failure, create_unknown_failure

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=pkg_version("manaforge"),
    debug=settings.debug,
)

app.include_router(draws_router)
app.include_router(hands_router)
app.include_router(health_router)
app.include_router(sources_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Classify engine errors into the failure envelope."""
    logger.info("%s: %s (%s)", type(exc).__name__, exc.message, exc.detail)
    response = create_known_failure(exc)
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Anything else is an unknown failure; never a raw 500 body."""
    logger.exception("Unhandled error")
    response = create_unknown_failure(exc)
    return JSONResponse(status_code=500, content=response.model_dump(mode="json"))
