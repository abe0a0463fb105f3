"""Resource grants for match administrators.

Grants adjust a player's stats outside of normal play. They ignore whose
turn it is and never pass the turn, but a finished match stays frozen.
"""

import logging
from typing import Literal

logger = logging.getLogger(__name__)

from tower_siege.schemas.game_engine import GamePhase, GameState, PlayerId, TurnEffect

from .events import ResourcesGranted
from .process import assign_event_sequences
from .turns import record_log
from .validation import ProcessResult

Resource = Literal["power", "gold", "coins"]

_STAT_FIELDS: dict[str, str] = {
    "power": "power",
    "gold": "gold",
    "coins": "upgrade_coins",
}


def grant_resources(
    state: GameState,
    target_player_id: PlayerId,
    resource: Resource,
    amount: int,
) -> ProcessResult:
    """Add (or, with a negative amount, remove) power, gold or coins.

    Results are clamped at zero. The input state is never mutated.

    Raises:
        ValueError: If the resource name is unknown.
    """
    stat_field = _STAT_FIELDS.get(resource)
    if stat_field is None:
        raise ValueError(f"Unknown resource: {resource}")

    if state.phase == GamePhase.FINISHED:
        logger.warning("Grant rejected: MATCH_FINISHED")
        return ProcessResult(
            state=state,
            success=False,
            message="Match has already finished",
            error_code="MATCH_FINISHED",
            error_message="Match has already finished",
        )

    new_state = state.model_copy(deep=True)
    player = new_state.players[target_player_id]
    current = getattr(player.stats, stat_field)
    setattr(player.stats, stat_field, max(0, current + amount))

    message = f"Admin: Gave {amount} {resource} to {player.name}."
    record_log(new_state, message)
    logger.info(
        "Resources granted: player=%s, resource=%s, amount=%d, new_value=%d",
        target_player_id.value,
        resource,
        amount,
        getattr(player.stats, stat_field),
    )

    result = ProcessResult.ok(
        new_state,
        [ResourcesGranted(player_id=target_player_id, resource=resource, amount=amount)],
        message,
        turn_effect=TurnEffect.FREE,
    )
    return assign_event_sequences(result)
