"""Turn bookkeeping: match log, end-of-turn income, turn flips and win detection."""

import logging

logger = logging.getLogger(__name__)

from tower_siege.constants import MAX_LOG_ENTRIES
from tower_siege.schemas.game_engine import GamePhase, GameState, PlayerId, opponent_of

from .board import mine_income
from .events import AnyGameEvent, IncomeCollected, MatchEnded, TurnEnded
from .validation import ProcessResult


def record_log(state: GameState, message: str) -> None:
    """Prepend a message to the match log, keeping only the newest entries."""
    state.logs = [message, *state.logs][:MAX_LOG_ENTRIES]


def advance_turn(state: GameState) -> TurnEnded:
    """Hand the turn to the other player."""
    ending_player_id = state.active_player_id
    next_player_id = opponent_of(ending_player_id)

    state.active_player_id = next_player_id
    state.turn_number += 1

    logger.debug(
        "Turn advanced: from=%s, to=%s, turn_number=%d",
        ending_player_id.value,
        next_player_id.value,
        state.turn_number,
    )
    return TurnEnded(
        player_id=ending_player_id,
        next_player_id=next_player_id,
        turn_number=state.turn_number,
    )


def check_winner(state: GameState) -> PlayerId | None:
    """Return the player whose opponent's tower has fallen, if any."""
    for player in state.players.values():
        if player.tower_health <= 0:
            return opponent_of(player.player_id)
    return None


def declare_winner(state: GameState, winner_id: PlayerId) -> MatchEnded:
    """Move the match into its terminal state."""
    state.winner_id = winner_id
    state.phase = GamePhase.FINISHED
    logger.info("Match won: winner=%s, turn_number=%d", winner_id.value, state.turn_number)
    return MatchEnded(winner_id=winner_id, loser_id=opponent_of(winner_id))


def process_end_turn(state: GameState, player_id: PlayerId) -> ProcessResult:
    """Credit the ending player's mine income and pass the turn.

    Income is 5 * 2^(level - 1) gold for every gold mine the player owns.
    """
    player = state.players[player_id]
    income = mine_income(state.board, player_id)
    player.stats.gold += income

    events: list[AnyGameEvent] = []
    if income:
        events.append(IncomeCollected(player_id=player_id, gold=income))
        message = f"{player.name} ended their turn and collected {income} gold."
    else:
        message = f"{player.name} ended their turn."

    logger.info(
        "Turn ended: player=%s, income=%d, gold=%d",
        player_id.value,
        income,
        player.stats.gold,
    )
    record_log(state, message)
    return ProcessResult.ok(state, events, message)
