"""Shared fixtures for match engine tests."""

import random

import pytest

from tower_siege.schemas.game_engine import (
    Forge,
    GamePhase,
    GameState,
    GoldMine,
    MatchSettings,
    Monster,
    PlayerAttributes,
    PlayerId,
    Position,
)
from tower_siege.services.game.engine.armory import get_weapon, new_weapon_instance
from tower_siege.services.game.start_game import initialize_match

PLAYER_1_ID = PlayerId.PLAYER_1
PLAYER_2_ID = PlayerId.PLAYER_2

# Tower tiles on the standard 10x5 board
PLAYER_1_TOWER = (0, 2)
PLAYER_2_TOWER = (9, 2)


class ScriptedRandom(random.Random):
    """Random source that replays queued values before falling back to a seeded stream.

    `rolls` feed random() (fight outcomes), `ints` feed randint() (spawn
    coordinates and monster stats), `choices` are indexes used by choice().
    """

    def __init__(
        self,
        rolls: list[float] | None = None,
        ints: list[int] | None = None,
        choices: list[int] | None = None,
    ):
        super().__init__(0)
        self.rolls = list(rolls or [])
        self.ints = list(ints or [])
        self.choices = list(choices or [])

    def random(self) -> float:
        if self.rolls:
            return self.rolls.pop(0)
        return super().random()

    def randint(self, a: int, b: int) -> int:
        if self.ints:
            value = self.ints.pop(0)
            assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
            return value
        return super().randint(a, b)

    def choice(self, seq):
        if self.choices:
            return seq[self.choices.pop(0)]
        return super().choice(seq)


def winning_roll() -> ScriptedRandom:
    """A fight roll the attacker always wins (any win probability > 0)."""
    return ScriptedRandom(rolls=[0.0])


def losing_roll() -> ScriptedRandom:
    """A fight roll the attacker always loses (any win probability < 1)."""
    return ScriptedRandom(rolls=[0.999999])


def create_match_state(
    phase: GamePhase = GamePhase.IN_PROGRESS,
    active_player_id: PlayerId = PLAYER_1_ID,
) -> GameState:
    """A fresh match with no monsters on the board."""
    state = initialize_match(
        MatchSettings(
            player1=PlayerAttributes(name="Alice", color="#3b82f6"),
            player2=PlayerAttributes(name="Bob", color="#ef4444"),
        )
    )
    state.phase = phase
    state.active_player_id = active_player_id
    return state


def place_monster(
    state: GameState,
    x: int,
    y: int,
    monster_type: str = "Orc",
    power: int = 10,
    reward_gold: int = 20,
    reward_coins: int = 1,
    lucky: bool = False,
) -> Monster:
    monster = Monster(
        monster_type=monster_type,
        power=power,
        reward_gold=reward_gold,
        reward_coins=reward_coins,
        lucky=lucky,
    )
    state.board.tile_at(x, y).monster = monster
    return monster


def place_mine(state: GameState, x: int, y: int, owner: PlayerId, level: int = 1) -> None:
    state.board.tile_at(x, y).structure = GoldMine(owner=owner, level=level)


def place_forge(state: GameState, x: int, y: int, owner: PlayerId, level: int = 1) -> None:
    state.board.tile_at(x, y).structure = Forge(owner=owner, level=level)


def set_position(state: GameState, player_id: PlayerId, x: int, y: int) -> None:
    state.players[player_id].position = Position(x=x, y=y)


def give_weapons(state: GameState, player_id: PlayerId, *weapon_ids: str, equip: bool = True):
    """Put catalog weapons straight into a player's inventory."""
    player = state.players[player_id]
    instances = []
    for weapon_id in weapon_ids:
        instance = new_weapon_instance(get_weapon(weapon_id))
        player.inventory.append(instance)
        if equip:
            player.equipped_weapon_ids.append(instance.instance_id)
        instances.append(instance)
    return instances


@pytest.fixture
def new_match() -> GameState:
    """Match in NOT_STARTED phase."""
    return create_match_state(phase=GamePhase.NOT_STARTED)


@pytest.fixture
def match_player1_turn() -> GameState:
    """Match in progress, empty board, player 1 to move."""
    return create_match_state()


@pytest.fixture
def match_player2_turn() -> GameState:
    """Match in progress, empty board, player 2 to move."""
    return create_match_state(active_player_id=PLAYER_2_ID)
