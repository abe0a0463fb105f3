"""Match event types - emitted during state transitions.

Events describe what happened during an action, so a host can:
- Animate exactly what changed
- Keep an audit trail beyond the capped in-state log
- Catch a reconnecting client up
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from tower_siege.schemas.game_engine import Monster, PlayerId, Position


class GameEvent(BaseModel):
    """Base class for all match events."""

    event_type: str
    seq: int = 0  # Sequence number assigned during processing


class MatchStarted(GameEvent):
    """Match has transitioned from NOT_STARTED to IN_PROGRESS."""

    event_type: Literal["match_started"] = "match_started"
    first_player_id: PlayerId


class MonsterSpawned(GameEvent):
    event_type: Literal["monster_spawned"] = "monster_spawned"
    monster: Monster
    position: Position


class PlayerMoved(GameEvent):
    """A player's token moved to an adjacent tile."""

    event_type: Literal["player_moved"] = "player_moved"
    player_id: PlayerId
    from_position: Position
    to_position: Position


class PlayerRespawned(GameEvent):
    """A player lost a fight and was sent back to their tower."""

    event_type: Literal["player_respawned"] = "player_respawned"
    player_id: PlayerId
    position: Position


class DuelResolved(GameEvent):
    """Two players fought."""

    event_type: Literal["duel_resolved"] = "duel_resolved"
    attacker_id: PlayerId
    defender_id: PlayerId
    attacker_power: int
    defender_power: int
    attacker_won: bool
    on_tower: bool = Field(..., description="True if the defender was guarding their tower")


class TowerDamaged(GameEvent):
    event_type: Literal["tower_damaged"] = "tower_damaged"
    attacker_id: PlayerId
    owner_id: PlayerId
    damage: int
    remaining_health: int


class MonsterDefeated(GameEvent):
    event_type: Literal["monster_defeated"] = "monster_defeated"
    player_id: PlayerId
    monster: Monster
    position: Position
    gold_gained: int
    coins_gained: int
    power_gained: int


class MonsterFightLost(GameEvent):
    event_type: Literal["monster_fight_lost"] = "monster_fight_lost"
    player_id: PlayerId
    monster: Monster
    position: Position
    gold_lost: int


class StructureBuilt(GameEvent):
    event_type: Literal["structure_built"] = "structure_built"
    player_id: PlayerId
    kind: str
    position: Position
    cost: int


class StructureUpgraded(GameEvent):
    event_type: Literal["structure_upgraded"] = "structure_upgraded"
    player_id: PlayerId
    kind: str
    position: Position
    new_level: int
    coin_cost: int


class WeaponPurchased(GameEvent):
    event_type: Literal["weapon_purchased"] = "weapon_purchased"
    player_id: PlayerId
    weapon_id: str
    instance_id: str
    cost: int
    equipped: bool


class WeaponEquipped(GameEvent):
    event_type: Literal["weapon_equipped"] = "weapon_equipped"
    player_id: PlayerId
    instance_id: str


class WeaponUnequipped(GameEvent):
    event_type: Literal["weapon_unequipped"] = "weapon_unequipped"
    player_id: PlayerId
    instance_id: str


class IncomeCollected(GameEvent):
    """Gold mines paid out at the end of a player's turn."""

    event_type: Literal["income_collected"] = "income_collected"
    player_id: PlayerId
    gold: int


class ResourcesGranted(GameEvent):
    """An admin adjusted a player's resources."""

    event_type: Literal["resources_granted"] = "resources_granted"
    player_id: PlayerId
    resource: str
    amount: int


class TurnEnded(GameEvent):
    """The active player changed."""

    event_type: Literal["turn_ended"] = "turn_ended"
    player_id: PlayerId
    next_player_id: PlayerId
    turn_number: int = Field(..., description="Number of the turn that is starting")


class MatchEnded(GameEvent):
    """A tower fell."""

    event_type: Literal["match_ended"] = "match_ended"
    winner_id: PlayerId
    loser_id: PlayerId


# Union of all event types for type checking
AnyGameEvent = Annotated[
    MatchStarted
    | MonsterSpawned
    | PlayerMoved
    | PlayerRespawned
    | DuelResolved
    | TowerDamaged
    | MonsterDefeated
    | MonsterFightLost
    | StructureBuilt
    | StructureUpgraded
    | WeaponPurchased
    | WeaponEquipped
    | WeaponUnequipped
    | IncomeCollected
    | ResourcesGranted
    | TurnEnded
    | MatchEnded,
    Field(discriminator="event_type"),
]
