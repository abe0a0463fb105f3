import logging

from tower_siege.config import get_settings
from tower_siege.services.match.registry import MatchRegistry

logger = logging.getLogger(__name__)

_match_registry: MatchRegistry | None = None


def get_match_registry() -> MatchRegistry:
    """Get the singleton match registry.

    Returns the existing registry if initialized, otherwise creates a new one.
    """
    global _match_registry
    if _match_registry is None:
        settings = get_settings()
        logger.info("Initializing match registry")
        _match_registry = MatchRegistry(
            max_matches=settings.MAX_ACTIVE_MATCHES,
            rng_seed=settings.RNG_SEED,
        )
    return _match_registry


def close_match_registry() -> None:
    """Drop every live match and the registry itself."""
    global _match_registry
    if _match_registry is not None:
        logger.info("Closing match registry")
        _match_registry.clear()
        _match_registry = None
        logger.debug("Match registry closed")
