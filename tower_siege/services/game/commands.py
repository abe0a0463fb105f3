"""Command surface for hosts embedding the engine.

Thin wrappers over process_action that speak in plain arguments and return
`{state, accepted, message}` shaped results.
"""

from dataclasses import dataclass, field

from tower_siege.schemas.game_engine import (
    GameState,
    MatchSettings,
    PlayerAttributes,
    PlayerId,
    TurnEffect,
)

from .engine import (
    AnyGameEvent,
    BuildAction,
    BuyWeaponAction,
    EndTurnAction,
    GameAction,
    MoveAction,
    ProcessResult,
    RandomSource,
    StartMatchAction,
    ToggleWeaponAction,
    UpgradeAction,
    process_action,
)
from .start_game import initialize_match


@dataclass
class CommandResult:
    """Outcome of a command as seen by the caller."""

    state: GameState
    accepted: bool
    message: str | None = None
    turn_effect: TurnEffect | None = None
    error_code: str | None = None
    events: list[AnyGameEvent] = field(default_factory=list)

    @classmethod
    def from_process_result(cls, result: ProcessResult) -> "CommandResult":
        return cls(
            state=result.state,
            accepted=result.success,
            message=result.message,
            turn_effect=result.turn_effect,
            error_code=result.error_code,
            events=result.events,
        )


def _run(
    state: GameState,
    action: GameAction,
    player_id: PlayerId,
    rng: RandomSource | None = None,
) -> CommandResult:
    return CommandResult.from_process_result(process_action(state, action, player_id, rng))


def start_match(
    player1: PlayerAttributes,
    player2: PlayerAttributes,
    rng: RandomSource | None = None,
) -> GameState:
    """Create a match and start it: towers placed, monsters seeded, player 1 to move.

    Raises:
        ValueError: If the player setup is invalid.
    """
    state = initialize_match(MatchSettings(player1=player1, player2=player2))
    result = process_action(state, StartMatchAction(), PlayerId.PLAYER_1, rng)
    return result.state


def move(
    state: GameState,
    player_id: PlayerId,
    x: int,
    y: int,
    rng: RandomSource | None = None,
) -> CommandResult:
    return _run(state, MoveAction(x=x, y=y), player_id, rng)


def build(state: GameState, player_id: PlayerId, kind: str) -> CommandResult:
    return _run(state, BuildAction(kind=kind), player_id)


def upgrade(state: GameState, player_id: PlayerId, x: int, y: int) -> CommandResult:
    return _run(state, UpgradeAction(x=x, y=y), player_id)


def buy_weapon(state: GameState, player_id: PlayerId, weapon_id: str) -> CommandResult:
    return _run(state, BuyWeaponAction(weapon_id=weapon_id), player_id)


def toggle_weapon(state: GameState, player_id: PlayerId, instance_id: str) -> CommandResult:
    return _run(state, ToggleWeaponAction(instance_id=instance_id), player_id)


def end_turn(state: GameState, player_id: PlayerId) -> CommandResult:
    return _run(state, EndTurnAction(), player_id)
