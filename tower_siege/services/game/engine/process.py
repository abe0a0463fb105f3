"""Main entry point for match action processing.

This module provides the primary interface for processing match actions:
- process_action(): Validates and processes any match action
- Dispatches to specialized handlers based on action type
- Passes the turn for actions that consume it
- Returns ProcessResult with new state and events
"""

import logging

logger = logging.getLogger(__name__)

from tower_siege.schemas.game_engine import (
    GamePhase,
    GameState,
    PlayerId,
    TileKind,
    TurnEffect,
)

from .actions import (
    BuildAction,
    BuyWeaponAction,
    EndTurnAction,
    GameAction,
    MoveAction,
    StartMatchAction,
    ToggleWeaponAction,
    UpgradeAction,
)
from .armory import process_buy_weapon, process_toggle_weapon
from .combat import process_move
from .construction import process_build
from .events import AnyGameEvent, MatchStarted, MonsterSpawned
from .monsters import seed_monsters
from .rng import RandomSource, create_rng
from .turns import advance_turn, process_end_turn, record_log
from .upgrades import process_upgrade
from .validation import ProcessResult, validate_action


def process_action(
    state: GameState,
    action: GameAction,
    player_id: PlayerId,
    rng: RandomSource | None = None,
) -> ProcessResult:
    """Process a match action and return the result.

    This is the main entry point for all match actions. It:
    1. Validates the action is legal given current state
    2. Dispatches to the appropriate handler on a copy of the state
    3. Passes the turn if the action consumes it
    4. Assigns sequence numbers to events
    5. Returns ProcessResult with new state and events

    The input state is never mutated. Rejected actions return either the
    same state (silent rejections) or a copy with the reason logged.

    Args:
        state: Current match state.
        action: The action to process.
        player_id: The player attempting the action.
        rng: Random source for fights and monster spawns. A fresh unseeded
            one is used if omitted.

    Returns:
        ProcessResult containing:
        - success: Whether the action was accepted
        - state: The resulting match state
        - events: List of events that occurred (with seq numbers)
        - turn_effect: Whether the turn passed
        - error_code/error_message: Error details (if rejected)

    Example:
        >>> result = process_action(state, MoveAction(x=1, y=2), PlayerId.PLAYER_1)
        >>> if result.success:
        ...     state = result.state
        ...     for event in result.events:
        ...         broadcast(event)  # event.seq is set
        ... else:
        ...     show_error(result.error_code, result.error_message)
    """
    action_type = type(action).__name__
    logger.info(
        "Processing action: type=%s, player=%s, phase=%s",
        action_type,
        player_id.value,
        state.phase.value,
    )
    logger.debug("Action details: %s", action)

    if rng is None:
        rng = create_rng()

    # Validate the action
    validation = validate_action(state, action, player_id)
    if not validation.is_valid:
        logger.warning(
            "Action validation failed: code=%s, message=%s, player=%s, action=%s",
            validation.error_code,
            validation.error_message,
            player_id.value,
            action_type,
        )
        return _rejected(
            state,
            ProcessResult.failure(
                validation.error_code or "VALIDATION_ERROR",
                validation.error_message or "Invalid action",
                record=validation.record,
            ),
        )

    # Handlers mutate a private copy
    working = state.model_copy(deep=True)

    logger.debug("Dispatching to handler for action type: %s", action_type)

    if isinstance(action, StartMatchAction):
        result = process_start_match(working, rng)

    elif isinstance(action, MoveAction):
        result = process_move(working, player_id, action.x, action.y, rng)

    elif isinstance(action, BuildAction):
        result = process_build(working, player_id, TileKind(action.kind))

    elif isinstance(action, UpgradeAction):
        result = process_upgrade(working, player_id, action.x, action.y)

    elif isinstance(action, BuyWeaponAction):
        result = process_buy_weapon(working, player_id, action.weapon_id)

    elif isinstance(action, ToggleWeaponAction):
        result = process_toggle_weapon(working, player_id, action.instance_id)

    elif isinstance(action, EndTurnAction):
        result = process_end_turn(working, player_id)

    else:
        logger.error("Unknown action type received: %s", action_type)
        return _rejected(
            state,
            ProcessResult.failure(
                "UNKNOWN_ACTION",
                f"Unknown action type: {action_type}",
                record=False,
            ),
        )

    if not result.success:
        logger.warning(
            "Action processing failed: type=%s, player=%s, error=%s",
            action_type,
            player_id.value,
            result.error_code,
        )
        return _rejected(state, result)

    if result.turn_effect == TurnEffect.ADVANCES_TURN:
        result.events.append(advance_turn(result.state))

    result = assign_event_sequences(result)
    logger.info(
        "Action processed successfully: type=%s, player=%s, turn_effect=%s, events_generated=%d",
        action_type,
        player_id.value,
        result.turn_effect.value,
        len(result.events),
    )
    logger.debug("Generated events: %s", [type(e).__name__ for e in result.events])
    return result


def _rejected(state: GameState, result: ProcessResult) -> ProcessResult:
    """Attach the resulting state to a rejection, logging its reason if required."""
    if result.record:
        state = state.model_copy(deep=True)
        record_log(state, result.error_message)
    result.state = state
    return result


def assign_event_sequences(result: ProcessResult) -> ProcessResult:
    """Assign monotonically increasing sequence numbers to events.

    Updates each event's seq field and increments the state's event_seq counter.
    """
    if result.state is None or not result.events:
        return result

    current_seq = result.state.event_seq
    for event in result.events:
        event.seq = current_seq
        current_seq += 1

    result.state.event_seq = current_seq
    return result


def process_start_match(state: GameState, rng: RandomSource) -> ProcessResult:
    """Transition the match from NOT_STARTED to IN_PROGRESS.

    Seeds the initial monsters; player 1 moves first.

    Args:
        state: Working copy of the match state (must be NOT_STARTED).
        rng: Random source for monster placement and stats.

    Returns:
        ProcessResult with the match IN_PROGRESS. Starting does not pass the turn.
    """
    logger.info("Starting match")
    events: list[AnyGameEvent] = []

    first_player = state.players[PlayerId.PLAYER_1]
    events.append(MatchStarted(first_player_id=first_player.player_id))

    for spawned in seed_monsters(state.board, rng):
        events.append(MonsterSpawned(monster=spawned.monster, position=spawned.position))

    state.phase = GamePhase.IN_PROGRESS
    state.active_player_id = first_player.player_id
    state.turn_number = 1

    message = f"Game started! {first_player.name} goes first."
    record_log(state, message)

    logger.info(
        "Match started: first_player=%s, monsters=%d",
        first_player.player_id.value,
        len(events) - 1,
    )
    return ProcessResult.ok(state, events, message, turn_effect=TurnEffect.FREE)
