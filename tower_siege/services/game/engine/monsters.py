"""Monster catalog, random spawning and initial board seeding."""

import logging
from dataclasses import dataclass

from tower_siege.constants import INITIAL_MONSTER_COUNT, MONSTER_SPAWN_ATTEMPTS
from tower_siege.schemas.game_engine import Board, Monster, Position

from .rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonsterType:
    """A monster archetype with inclusive stat ranges."""

    name: str
    power_range: tuple[int, int]
    gold_range: tuple[int, int]
    coin_range: tuple[int, int]
    lucky: bool = False


MONSTER_TYPES: tuple[MonsterType, ...] = (
    MonsterType("Zombie", power_range=(3, 6), gold_range=(5, 10), coin_range=(0, 1)),
    MonsterType("Skeleton", power_range=(5, 8), gold_range=(8, 15), coin_range=(1, 1)),
    MonsterType("Orc", power_range=(8, 12), gold_range=(15, 25), coin_range=(1, 2)),
    # Only the rarest archetype is lucky
    MonsterType(
        "Dragon", power_range=(15, 25), gold_range=(50, 100), coin_range=(2, 5), lucky=True
    ),
)


@dataclass
class SpawnedMonster:
    monster: Monster
    position: Position


def spawn_monster(rng: RandomSource) -> Monster:
    """Roll a random monster: uniform archetype, then uniform stats within its ranges."""
    archetype = rng.choice(MONSTER_TYPES)
    monster = Monster(
        monster_type=archetype.name,
        power=rng.randint(*archetype.power_range),
        reward_gold=rng.randint(*archetype.gold_range),
        reward_coins=rng.randint(*archetype.coin_range),
        lucky=archetype.lucky,
    )
    logger.debug(
        "Spawned monster: type=%s, power=%d, gold=%d, coins=%d, lucky=%s",
        monster.monster_type,
        monster.power,
        monster.reward_gold,
        monster.reward_coins,
        monster.lucky,
    )
    return monster


def seed_monsters(
    board: Board,
    rng: RandomSource,
    count: int = INITIAL_MONSTER_COUNT,
    max_attempts: int = MONSTER_SPAWN_ATTEMPTS,
) -> list[SpawnedMonster]:
    """Place up to `count` monsters on random empty, unoccupied tiles.

    Samples coordinates at most `max_attempts` times. Sampled tiles holding a
    structure or a monster are skipped; running out of attempts just leaves
    the board with fewer monsters. Mutates `board` in place.

    Returns:
        The monsters placed, with their coordinates.
    """
    spawned: list[SpawnedMonster] = []
    attempts = 0

    while len(spawned) < count and attempts < max_attempts:
        attempts += 1
        x = rng.randint(0, board.width - 1)
        y = rng.randint(0, board.height - 1)
        tile = board.tile_at(x, y)

        if not tile.is_empty_lot or tile.monster is not None:
            logger.debug("Spawn attempt %d skipped occupied tile (%d, %d)", attempts, x, y)
            continue

        tile.monster = spawn_monster(rng)
        spawned.append(SpawnedMonster(monster=tile.monster, position=Position(x=x, y=y)))

    if len(spawned) < count:
        logger.info(
            "Monster seeding placed %d/%d monsters after %d attempts",
            len(spawned),
            count,
            attempts,
        )
    return spawned
