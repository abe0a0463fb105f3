"""Movement and combat resolution.

A move targets an orthogonally adjacent tile (checked in validation) and
resolves, in priority order, as:
1. An attack on the enemy tower, with a duel if the enemy is guarding it
2. A duel with the enemy player standing on the tile
3. A fight with the monster on the tile
4. A plain step onto the tile

Every fight is a single draw: the attacker wins with probability
attacker_power / (attacker_power + defender_power).
"""

import logging
import math

logger = logging.getLogger(__name__)

from tower_siege.constants import (
    LUCKY_COIN_BONUS,
    LUCKY_GOLD_MULTIPLIER,
    LUCKY_POWER_BONUS,
    MONSTER_DEFEAT_GOLD_PENALTY,
)
from tower_siege.schemas.game_engine import (
    GameState,
    Player,
    PlayerId,
    Position,
    opponent_of,
)

from .board import is_enemy_tower, tower_origin
from .events import (
    AnyGameEvent,
    DuelResolved,
    MonsterDefeated,
    MonsterFightLost,
    PlayerMoved,
    PlayerRespawned,
    TowerDamaged,
)
from .rng import RandomSource
from .turns import declare_winner, record_log
from .validation import ProcessResult


def win_probability(attacker_power: int, defender_power: int) -> float:
    """Chance that the attacker wins a fight.

    Two powerless sides have an even chance.
    """
    total = attacker_power + defender_power
    if total <= 0:
        return 0.5
    return attacker_power / total


def resolve_duel(attacker_power: int, defender_power: int, rng: RandomSource) -> bool:
    """Draw once and return True if the attacker wins."""
    probability = win_probability(attacker_power, defender_power)
    roll = rng.random()
    attacker_won = roll < probability
    logger.debug(
        "Duel resolved: attacker_power=%d, defender_power=%d, p=%.3f, roll=%.3f, attacker_won=%s",
        attacker_power,
        defender_power,
        probability,
        roll,
        attacker_won,
    )
    return attacker_won


def _respawn(state: GameState, player: Player, events: list[AnyGameEvent]) -> None:
    """Teleport a defeated player back to their own tower."""
    origin = tower_origin(player.player_id, state.board.width, state.board.height)
    player.position = origin
    events.append(PlayerRespawned(player_id=player.player_id, position=origin))
    logger.debug(
        "Player respawned: player=%s, position=(%d, %d)",
        player.player_id.value,
        origin.x,
        origin.y,
    )


def _step(player: Player, x: int, y: int, events: list[AnyGameEvent]) -> None:
    from_position = player.position
    player.position = Position(x=x, y=y)
    events.append(
        PlayerMoved(
            player_id=player.player_id,
            from_position=from_position,
            to_position=player.position,
        )
    )


def process_move(
    state: GameState,
    player_id: PlayerId,
    x: int,
    y: int,
    rng: RandomSource,
) -> ProcessResult:
    """Resolve a move of the active player onto tile (x, y).

    Args:
        state: Working copy of the match state (mutated in place).
        player_id: The moving player.
        x: Target column, already validated as adjacent.
        y: Target row, already validated as adjacent.
        rng: Random source for fight outcomes.

    Returns:
        ProcessResult that always consumes the turn.
    """
    attacker = state.players[player_id]
    enemy = state.players[opponent_of(player_id)]
    target = state.board.tile_at(x, y)
    enemy_on_target = enemy.position.x == x and enemy.position.y == y

    logger.info(
        "Processing move: player=%s, from=(%d, %d), to=(%d, %d)",
        player_id.value,
        attacker.position.x,
        attacker.position.y,
        x,
        y,
    )

    if is_enemy_tower(target, player_id):
        return _attack_tower(state, attacker, enemy, enemy_on_target, rng)

    if enemy_on_target:
        return _duel_player(state, attacker, enemy, x, y, rng)

    if target.monster is not None:
        return _fight_monster(state, attacker, x, y, rng)

    events: list[AnyGameEvent] = []
    _step(attacker, x, y, events)
    message = f"{attacker.name} moved to ({x}, {y})."
    record_log(state, message)
    return ProcessResult.ok(state, events, message)


def _attack_tower(
    state: GameState,
    attacker: Player,
    enemy: Player,
    enemy_on_target: bool,
    rng: RandomSource,
) -> ProcessResult:
    """Damage the enemy tower by the attacker's full power.

    A guarding enemy is dueled first, but the duel only decides who is sent
    home. The tower takes full damage either way, and the attacker never
    ends up standing on the enemy tower.
    """
    events: list[AnyGameEvent] = []
    damage = attacker.total_power

    if enemy_on_target:
        enemy_power = enemy.total_power
        attacker_won = resolve_duel(damage, enemy_power, rng)
        events.append(
            DuelResolved(
                attacker_id=attacker.player_id,
                defender_id=enemy.player_id,
                attacker_power=damage,
                defender_power=enemy_power,
                attacker_won=attacker_won,
                on_tower=True,
            )
        )
        if attacker_won:
            _respawn(state, enemy, events)
            duel_note = f" {attacker.name} defeated {enemy.name} on their tower."
        else:
            _respawn(state, attacker, events)
            duel_note = f" {enemy.name} defended their tower and {attacker.name} respawned."
    else:
        duel_note = ""

    enemy.tower_health = max(0, enemy.tower_health - damage)
    events.append(
        TowerDamaged(
            attacker_id=attacker.player_id,
            owner_id=enemy.player_id,
            damage=damage,
            remaining_health=enemy.tower_health,
        )
    )
    logger.info(
        "Tower attacked: attacker=%s, damage=%d, remaining_health=%d, defended=%s",
        attacker.player_id.value,
        damage,
        enemy.tower_health,
        enemy_on_target,
    )

    message = f"{attacker.name} attacked {enemy.name}'s tower for {damage} damage!{duel_note}"
    if enemy.tower_health <= 0:
        events.append(declare_winner(state, attacker.player_id))
        message += f" The tower has fallen. {attacker.name} wins!"

    record_log(state, message)
    return ProcessResult.ok(state, events, message)


def _duel_player(
    state: GameState,
    attacker: Player,
    enemy: Player,
    x: int,
    y: int,
    rng: RandomSource,
) -> ProcessResult:
    events: list[AnyGameEvent] = []
    attacker_power = attacker.total_power
    enemy_power = enemy.total_power
    attacker_won = resolve_duel(attacker_power, enemy_power, rng)
    events.append(
        DuelResolved(
            attacker_id=attacker.player_id,
            defender_id=enemy.player_id,
            attacker_power=attacker_power,
            defender_power=enemy_power,
            attacker_won=attacker_won,
            on_tower=False,
        )
    )

    if attacker_won:
        _step(attacker, x, y, events)
        _respawn(state, enemy, events)
        message = f"Victory! {attacker.name} defeated {enemy.name}, who respawned at their tower."
    else:
        _respawn(state, attacker, events)
        message = f"Defeat! {enemy.name} defeated {attacker.name}, who respawned at their tower."

    logger.info(
        "Player duel: attacker=%s, defender=%s, attacker_won=%s",
        attacker.player_id.value,
        enemy.player_id.value,
        attacker_won,
    )
    record_log(state, message)
    return ProcessResult.ok(state, events, message)


def _fight_monster(
    state: GameState,
    attacker: Player,
    x: int,
    y: int,
    rng: RandomSource,
) -> ProcessResult:
    """Fight the monster on (x, y).

    Winning clears the tile for good and pays its rewards, boosted for lucky
    monsters. Losing sends the attacker home and costs gold.
    """
    events: list[AnyGameEvent] = []
    tile = state.board.tile_at(x, y)
    monster = tile.monster
    position = Position(x=x, y=y)

    if resolve_duel(attacker.total_power, monster.power, rng):
        gold = monster.reward_gold
        coins = monster.reward_coins
        power = 0
        if monster.lucky:
            gold = math.floor(gold * LUCKY_GOLD_MULTIPLIER)
            coins += LUCKY_COIN_BONUS
            power = LUCKY_POWER_BONUS

        tile.monster = None
        _step(attacker, x, y, events)
        attacker.stats.gold += gold
        attacker.stats.upgrade_coins += coins
        attacker.stats.power += power
        events.append(
            MonsterDefeated(
                player_id=attacker.player_id,
                monster=monster,
                position=position,
                gold_gained=gold,
                coins_gained=coins,
                power_gained=power,
            )
        )

        message = f"Victory! Killed {monster.monster_type}. Gained {gold} gold."
        if monster.lucky:
            message += " LUCKY DROP!"
        logger.info(
            "Monster defeated: player=%s, type=%s, gold=%d, coins=%d, power=%d",
            attacker.player_id.value,
            monster.monster_type,
            gold,
            coins,
            power,
        )
    else:
        gold_before = attacker.stats.gold
        attacker.stats.gold = max(0, gold_before - MONSTER_DEFEAT_GOLD_PENALTY)
        _respawn(state, attacker, events)
        events.append(
            MonsterFightLost(
                player_id=attacker.player_id,
                monster=monster,
                position=position,
                gold_lost=gold_before - attacker.stats.gold,
            )
        )

        message = (
            f"Defeat! The {monster.monster_type} was too strong. "
            f"{attacker.name} respawned at their tower."
        )
        logger.info(
            "Monster fight lost: player=%s, type=%s, gold_lost=%d",
            attacker.player_id.value,
            monster.monster_type,
            gold_before - attacker.stats.gold,
        )

    record_log(state, message)
    return ProcessResult.ok(state, events, message)
