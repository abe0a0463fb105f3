"""Level progression for towers, gold mines and forges."""

import logging

logger = logging.getLogger(__name__)

from tower_siege.constants import MAX_LEVEL, TOWER_HEALTH_BY_LEVEL, UPGRADE_COIN_COSTS
from tower_siege.schemas.game_engine import (
    Forge,
    GameState,
    GoldMine,
    PlayerId,
    Position,
)

from .board import is_own_tower
from .events import StructureUpgraded
from .turns import record_log
from .validation import ProcessResult


def max_health(level: int) -> int:
    return TOWER_HEALTH_BY_LEVEL[level]


def upgrade_cost(next_level: int) -> int:
    """Upgrade coins needed to reach `next_level`."""
    return UPGRADE_COIN_COSTS[next_level]


def upgradeable_targets(state: GameState, player_id: PlayerId) -> list[Position]:
    """Tiles the player could pick in upgrade mode: their tower and buildings below max level."""
    player = state.players[player_id]
    targets = []
    for tile in state.board.iter_tiles():
        if is_own_tower(tile, player_id):
            level = player.tower_level
        elif isinstance(tile.structure, GoldMine | Forge) and tile.structure.owner == player_id:
            level = tile.structure.level
        else:
            continue
        if level < MAX_LEVEL:
            targets.append(Position(x=tile.x, y=tile.y))
    return targets


def process_upgrade(state: GameState, player_id: PlayerId, x: int, y: int) -> ProcessResult:
    """Upgrade the player's tower or one of their buildings at (x, y).

    A tower upgrade resets tower health to the new level's maximum.
    """
    player = state.players[player_id]

    if not state.board.in_bounds(x, y):
        return ProcessResult.failure("INVALID_UPGRADE_TARGET", "Cannot upgrade this!")

    tile = state.board.tile_at(x, y)
    structure = tile.structure
    if is_own_tower(tile, player_id):
        current_level = player.tower_level
    elif isinstance(structure, GoldMine | Forge) and structure.owner == player_id:
        current_level = structure.level
    else:
        logger.warning(
            "Upgrade rejected: INVALID_UPGRADE_TARGET, player=%s, target=(%d, %d), kind=%s",
            player_id.value,
            x,
            y,
            structure.kind,
        )
        return ProcessResult.failure("INVALID_UPGRADE_TARGET", "Cannot upgrade this!")

    if current_level >= MAX_LEVEL:
        logger.warning("Upgrade rejected: MAX_LEVEL_REACHED, player=%s", player_id.value)
        return ProcessResult.failure("MAX_LEVEL_REACHED", "Already at max level!")

    next_level = current_level + 1
    coin_cost = upgrade_cost(next_level)
    if player.stats.upgrade_coins < coin_cost:
        logger.warning(
            "Upgrade rejected: INSUFFICIENT_COINS, player=%s, cost=%d, coins=%d",
            player_id.value,
            coin_cost,
            player.stats.upgrade_coins,
        )
        return ProcessResult.failure(
            "INSUFFICIENT_COINS",
            f"Need {coin_cost} upgrade coins!",
        )

    player.stats.upgrade_coins -= coin_cost
    if is_own_tower(tile, player_id):
        player.tower_level = next_level
        player.tower_health = max_health(next_level)
        label = "Tower"
    else:
        structure.level = next_level
        label = "Gold Mine" if isinstance(structure, GoldMine) else "Forge"

    logger.info(
        "Upgraded: player=%s, kind=%s, level=%d, coins_spent=%d",
        player_id.value,
        structure.kind,
        next_level,
        coin_cost,
    )
    message = f"{player.name} upgraded their {label} to level {next_level}!"
    record_log(state, message)
    event = StructureUpgraded(
        player_id=player_id,
        kind=structure.kind,
        position=Position(x=x, y=y),
        new_level=next_level,
        coin_cost=coin_cost,
    )
    return ProcessResult.ok(state, [event], message)
