"""Validation layer for match actions and ProcessResult pattern.

Separates validation from processing logic:
- validate_action() checks turn, phase and targeting preconditions
- ProcessResult replaces exceptions for control flow
"""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

from tower_siege.schemas.game_engine import GamePhase, GameState, PlayerId, TurnEffect

from .actions import GameAction, MoveAction, StartMatchAction
from .board import manhattan_distance
from .events import AnyGameEvent


@dataclass
class ProcessResult:
    """Result of processing a match action.

    Replaces exceptions for control flow, providing explicit success/failure
    with error codes suitable for client localization, and whether the action
    consumed the turn.

    `record` marks rejections whose reason belongs in the match log; silent
    rejections (wrong turn, finished match, non-adjacent move) leave the
    state untouched.
    """

    state: GameState | None = None
    events: list[AnyGameEvent] = field(default_factory=list)
    success: bool = True
    message: str | None = None
    turn_effect: TurnEffect | None = None
    error_code: str | None = None
    error_message: str | None = None
    record: bool = False

    @classmethod
    def ok(
        cls,
        state: GameState,
        events: list[AnyGameEvent] | None = None,
        message: str | None = None,
        turn_effect: TurnEffect = TurnEffect.ADVANCES_TURN,
    ) -> "ProcessResult":
        """Create a successful result with new state and events."""
        return cls(
            state=state,
            events=events or [],
            success=True,
            message=message,
            turn_effect=turn_effect,
        )

    @classmethod
    def failure(cls, code: str, message: str, record: bool = True) -> "ProcessResult":
        """Create a failure result with error details."""
        return cls(
            state=None,
            events=[],
            success=False,
            message=message,
            error_code=code,
            error_message=message,
            record=record,
        )


@dataclass
class ValidationResult:
    """Result of validating an action before processing."""

    is_valid: bool = True
    error_code: str | None = None
    error_message: str | None = None
    record: bool = False

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True)

    @classmethod
    def error(cls, code: str, message: str, record: bool = False) -> "ValidationResult":
        """Create a validation failure with error details."""
        return cls(
            is_valid=False,
            error_code=code,
            error_message=message,
            record=record,
        )


def validate_action(
    state: GameState,
    action: GameAction,
    player_id: PlayerId,
) -> ValidationResult:
    """Validate an action before processing.

    Checks:
    - Match phase allows this action
    - It's the acting player's turn
    - For moves, the target is on the board and exactly one step away

    Rule checks that depend on resources or ownership (gold, limits, levels)
    are done by each handler so the rejection reason can be logged.

    Args:
        state: Current match state.
        action: The action to validate.
        player_id: The player attempting the action.

    Returns:
        ValidationResult indicating success or failure with error details.
    """
    action_type = type(action).__name__
    logger.debug(
        "Validating action: type=%s, player=%s, phase=%s",
        action_type,
        player_id.value,
        state.phase.value,
    )

    if isinstance(action, StartMatchAction):
        if state.phase != GamePhase.NOT_STARTED:
            logger.warning(
                "Validation failed: MATCH_ALREADY_STARTED, current_phase=%s",
                state.phase.value,
            )
            return ValidationResult.error(
                "MATCH_ALREADY_STARTED",
                "Match has already started",
            )
        logger.debug("StartMatchAction validated successfully")
        return ValidationResult.ok()

    # For all other actions, the match must be in progress
    if state.phase == GamePhase.NOT_STARTED:
        logger.warning("Validation failed: MATCH_NOT_STARTED")
        return ValidationResult.error(
            "MATCH_NOT_STARTED",
            "Match has not started yet",
        )

    if state.phase == GamePhase.FINISHED or state.winner_id is not None:
        logger.warning("Validation failed: MATCH_FINISHED")
        return ValidationResult.error(
            "MATCH_FINISHED",
            "Match has already finished",
        )

    if state.active_player_id != player_id:
        logger.warning(
            "Validation failed: NOT_YOUR_TURN, current=%s, attempted=%s",
            state.active_player_id.value,
            player_id.value,
        )
        return ValidationResult.error(
            "NOT_YOUR_TURN",
            "It's not your turn",
        )

    if isinstance(action, MoveAction):
        if not state.board.in_bounds(action.x, action.y):
            logger.warning(
                "Validation failed: OUT_OF_BOUNDS, target=(%d, %d)",
                action.x,
                action.y,
            )
            return ValidationResult.error(
                "OUT_OF_BOUNDS",
                f"({action.x}, {action.y}) is not on the board",
            )

        position = state.players[player_id].position
        distance = manhattan_distance(position, action.x, action.y)
        if distance != 1:
            logger.warning(
                "Validation failed: NOT_ADJACENT, from=(%d, %d), target=(%d, %d), distance=%d",
                position.x,
                position.y,
                action.x,
                action.y,
                distance,
            )
            return ValidationResult.error(
                "NOT_ADJACENT",
                "You can only move one tile up, down, left or right",
            )

    logger.debug("Action validated successfully: type=%s", action_type)
    return ValidationResult.ok()
