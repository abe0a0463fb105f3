"""Fixed game rules shared by the engine and the state models."""

GRID_WIDTH = 10
GRID_HEIGHT = 5

MAX_LEVEL = 4
MAX_EQUIPPED_WEAPONS = 4
MAX_LOG_ENTRIES = 10

INITIAL_POWER = 5
INITIAL_GOLD = 20
INITIAL_UPGRADE_COINS = 2

MINE_COST_STEP = 10  # nth mine costs n * MINE_COST_STEP
MAX_GOLD_MINES = 4
FORGE_COST = 20
MAX_FORGES = 1

MINE_BASE_INCOME = 5  # doubles with every mine level

TOWER_HEALTH_BY_LEVEL: dict[int, int] = {
    1: 100,
    2: 1000,
    3: 2000,
    4: 3500,
}

# Coins needed to reach a level
UPGRADE_COIN_COSTS: dict[int, int] = {
    2: 1,
    3: 2,
    4: 4,
}

MONSTER_DEFEAT_GOLD_PENALTY = 5
LUCKY_GOLD_MULTIPLIER = 1.5
LUCKY_POWER_BONUS = 10
LUCKY_COIN_BONUS = 1

INITIAL_MONSTER_COUNT = 2
MONSTER_SPAWN_ATTEMPTS = 20
