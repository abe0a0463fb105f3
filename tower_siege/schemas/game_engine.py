from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from tower_siege.constants import (
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_EQUIPPED_WEAPONS,
    MAX_LEVEL,
    TOWER_HEALTH_BY_LEVEL,
)


# Player identities (exactly two per match)
class PlayerId(str, Enum):
    PLAYER_1 = "player_1"
    PLAYER_2 = "player_2"


def opponent_of(player_id: PlayerId) -> PlayerId:
    return PlayerId.PLAYER_2 if player_id == PlayerId.PLAYER_1 else PlayerId.PLAYER_1


# Match phases
class GamePhase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class TileKind(str, Enum):
    EMPTY = "empty"
    TOWER = "tower"
    GOLD_MINE = "gold_mine"
    BLACKSMITH = "blacksmith"


# Whether an accepted command hands the turn to the opponent
class TurnEffect(str, Enum):
    ADVANCES_TURN = "advances_turn"
    FREE = "free"


class Position(BaseModel):
    x: int
    y: int


class Stats(BaseModel):
    power: int = Field(..., ge=0)
    gold: int = Field(..., ge=0)
    upgrade_coins: int = Field(..., ge=0)


class Monster(BaseModel):
    model_config = ConfigDict(frozen=True)

    monster_type: str
    power: int = Field(..., ge=1)
    reward_gold: int = Field(..., ge=0)
    reward_coins: int = Field(..., ge=0)
    lucky: bool = False


# Tile structures - one variant per tile kind
class EmptyLot(BaseModel):
    kind: Literal["empty"] = "empty"


class Tower(BaseModel):
    """A player's home tower. Level and health live on the owning Player."""

    kind: Literal["tower"] = "tower"
    owner: PlayerId


class GoldMine(BaseModel):
    kind: Literal["gold_mine"] = "gold_mine"
    owner: PlayerId
    level: int = Field(1, ge=1, le=MAX_LEVEL)


class Forge(BaseModel):
    kind: Literal["blacksmith"] = "blacksmith"
    owner: PlayerId
    level: int = Field(1, ge=1, le=MAX_LEVEL)


Structure = Annotated[
    EmptyLot | Tower | GoldMine | Forge,
    Field(discriminator="kind"),
]


class Tile(BaseModel):
    x: int
    y: int
    structure: Structure = Field(default_factory=EmptyLot)
    monster: Monster | None = None

    @property
    def kind(self) -> TileKind:
        return TileKind(self.structure.kind)

    @property
    def is_empty_lot(self) -> bool:
        return isinstance(self.structure, EmptyLot)


class Board(BaseModel):
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    tiles: list[list[Tile]]  # indexed [y][x]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile ({x}, {y}) is outside the {self.width}x{self.height} board")
        return self.tiles[y][x]

    def iter_tiles(self):
        for row in self.tiles:
            yield from row


# Weapon catalog entry
class WeaponDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    weapon_id: str
    name: str
    power: int = Field(..., ge=0)
    cost: int = Field(..., ge=0)
    tier: int = Field(..., ge=1, le=MAX_LEVEL)
    icon_type: str
    color: str


class OwnedWeapon(WeaponDefinition):
    instance_id: str


# Defined pre-initialization from the setup screen
class PlayerAttributes(BaseModel):
    name: str = Field(..., min_length=1, max_length=32)
    color: str = Field(..., min_length=1)


class MatchSettings(BaseModel):
    player1: PlayerAttributes
    player2: PlayerAttributes


class Player(BaseModel):
    player_id: PlayerId
    name: str
    color: str
    position: Position
    stats: Stats
    tower_health: int = Field(..., ge=0)
    tower_level: int = Field(1, ge=1, le=MAX_LEVEL)
    inventory: list[OwnedWeapon] = []
    equipped_weapon_ids: list[str] = Field(default_factory=list, max_length=MAX_EQUIPPED_WEAPONS)

    @property
    def equipped_weapons(self) -> list[OwnedWeapon]:
        equipped = set(self.equipped_weapon_ids)
        return [w for w in self.inventory if w.instance_id in equipped]

    @computed_field
    @property
    def total_power(self) -> int:
        return self.stats.power + sum(w.power for w in self.equipped_weapons)

    @computed_field
    @property
    def max_tower_health(self) -> int:
        return TOWER_HEALTH_BY_LEVEL[self.tower_level]


class GameState(BaseModel):
    """Complete match state.

    This is the serialization contract of a match: everything a host needs to
    render or persist it, and nothing derived from UI interaction.
    """

    phase: GamePhase
    board: Board
    players: dict[PlayerId, Player]
    active_player_id: PlayerId = PlayerId.PLAYER_1
    winner_id: PlayerId | None = None
    logs: list[str] = []  # Newest first, capped
    turn_number: int = 1
    event_seq: int = 0  # Next sequence number for events (monotonically increasing)
