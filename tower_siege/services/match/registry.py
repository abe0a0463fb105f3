"""In-memory match registry.

Holds every live match with its own lock and random source. The engine does
no locking of its own, so all commands for a match are applied under that
match's lock: one writer at a time per match, matches independent of each
other.
"""

import logging
import random
import threading
import uuid
from dataclasses import dataclass, field

from tower_siege.schemas.game_engine import GameState, MatchSettings, PlayerId
from tower_siege.services.game.commands import start_match
from tower_siege.services.game.engine import (
    GameAction,
    ProcessResult,
    create_rng,
    grant_resources,
    process_action,
)
from tower_siege.services.game.engine.admin import Resource

logger = logging.getLogger(__name__)


@dataclass
class MatchSession:
    """A live match and the resources that serialize access to it."""

    match_id: str
    state: GameState
    rng: random.Random
    lock: threading.Lock = field(default_factory=threading.Lock)


@dataclass
class CreateMatchResult:
    """Result of create_match operation."""

    success: bool
    match_id: str | None = None
    state: GameState | None = None
    error_code: str | None = None
    error_message: str | None = None


class MatchRegistry:
    """Creates, looks up and mutates matches held in memory."""

    def __init__(self, max_matches: int = 100, rng_seed: int | None = None):
        self._max_matches = max_matches
        self._rng_seed = rng_seed
        self._sessions: dict[str, MatchSession] = {}
        self._registry_lock = threading.Lock()
        logger.info("MatchRegistry initialized: max_matches=%d", max_matches)

    def __len__(self) -> int:
        return len(self._sessions)

    def create_match(
        self,
        match_settings: MatchSettings,
        seed: int | None = None,
    ) -> CreateMatchResult:
        """Start a new match and register it.

        Args:
            match_settings: Names and colors for both players.
            seed: Seed for this match's random source. Falls back to the
                registry-wide seed, then to fresh entropy.

        Returns:
            CreateMatchResult with the started match, or error info.
        """
        with self._registry_lock:
            if len(self._sessions) >= self._max_matches:
                logger.warning(
                    "Match creation rejected: REGISTRY_FULL, active=%d",
                    len(self._sessions),
                )
                return CreateMatchResult(
                    success=False,
                    error_code="REGISTRY_FULL",
                    error_message="Too many active matches, try again later",
                )

            try:
                rng = create_rng(seed if seed is not None else self._rng_seed)
                state = start_match(match_settings.player1, match_settings.player2, rng)
            except ValueError as e:
                logger.warning("Match creation rejected: INVALID_SETTINGS, reason=%s", e)
                return CreateMatchResult(
                    success=False,
                    error_code="INVALID_SETTINGS",
                    error_message=str(e),
                )

            match_id = str(uuid.uuid4())
            self._sessions[match_id] = MatchSession(match_id=match_id, state=state, rng=rng)

        logger.info(
            "Match created: match_id=%s, players=%s vs %s",
            match_id,
            match_settings.player1.name,
            match_settings.player2.name,
        )
        return CreateMatchResult(success=True, match_id=match_id, state=state)

    def get_state(self, match_id: str) -> GameState | None:
        session = self._sessions.get(match_id)
        if session is None:
            return None
        with session.lock:
            return session.state

    def apply_action(
        self,
        match_id: str,
        action: GameAction,
        player_id: PlayerId,
    ) -> ProcessResult | None:
        """Apply a player action under the match lock.

        Returns:
            The engine's ProcessResult, or None if the match does not exist.
        """
        session = self._sessions.get(match_id)
        if session is None:
            logger.warning("Action for unknown match: match_id=%s", match_id)
            return None

        with session.lock:
            result = process_action(session.state, action, player_id, session.rng)
            session.state = result.state

        logger.debug(
            "Action applied: match_id=%s, success=%s, code=%s",
            match_id,
            result.success,
            result.error_code,
        )
        return result

    def apply_grant(
        self,
        match_id: str,
        target_player_id: PlayerId,
        resource: Resource,
        amount: int,
    ) -> ProcessResult | None:
        """Apply an admin resource grant under the match lock."""
        session = self._sessions.get(match_id)
        if session is None:
            logger.warning("Grant for unknown match: match_id=%s", match_id)
            return None

        with session.lock:
            result = grant_resources(session.state, target_player_id, resource, amount)
            session.state = result.state
        return result

    def delete_match(self, match_id: str) -> bool:
        with self._registry_lock:
            session = self._sessions.pop(match_id, None)
        if session is None:
            return False
        logger.info("Match deleted: match_id=%s", match_id)
        return True

    def clear(self) -> None:
        with self._registry_lock:
            count = len(self._sessions)
            self._sessions.clear()
        logger.info("MatchRegistry cleared: %d matches dropped", count)
