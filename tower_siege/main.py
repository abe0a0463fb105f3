import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tower_siege.config import get_settings
from tower_siege.dependencies.matches import close_match_registry, get_match_registry
from tower_siege.routers import matches

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Tower Siege API")
    logger.debug("Debug mode: %s", settings.DEBUG)

    get_match_registry()
    logger.info("Match registry initialized")

    yield

    logger.info("Shutting down Tower Siege API")
    close_match_registry()
    logger.info("Match registry cleanup complete")


app = FastAPI(
    title="Tower Siege API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.debug("CORS configured with origins: %s", settings.CORS_ORIGINS)

app.include_router(matches.router, prefix="/api/v1")
logger.debug("Routers registered: /api/v1/matches, /api/v1/weapons")


@app.get("/")
def root():
    return {"message": "Tower Siege API"}


@app.get("/health")
def health():
    return {"status": "healthy"}
