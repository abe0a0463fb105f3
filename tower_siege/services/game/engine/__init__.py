"""Match engine module - pure, synchronous match logic.

This module provides the core match engine with:
- Action types for explicit player commands
- Event types describing each state transition
- ProcessResult pattern for rejections and turn effects
- One module per rule area (combat, construction, upgrades, armory, turns)

Usage:
    from tower_siege.services.game.engine import (
        process_action,
        ProcessResult,
        MoveAction,
        create_rng,
    )

    # Process an action
    result = process_action(state, MoveAction(x=1, y=2), PlayerId.PLAYER_1, rng=create_rng(42))

    if result.success:
        new_state = result.state
        events = result.events
    else:
        # The rejection reason is also in result.state.logs for rule violations
        print(f"Error: {result.error_code} - {result.error_message}")
"""

# Actions - explicit player commands
from .actions import (
    BuildAction,
    BuyWeaponAction,
    EndTurnAction,
    GameAction,
    MoveAction,
    StartMatchAction,
    ToggleWeaponAction,
    UpgradeAction,
    build_action_from_payload,
)

# Admin
from .admin import grant_resources

# Rule areas
from .armory import WEAPON_CATALOG, get_weapon, shop_listing
from .board import create_board, forge_level, mine_income, tower_origin
from .combat import resolve_duel, win_probability
from .construction import BUILD_SEARCH_OFFSETS, build_cost, find_build_site

# Events
from .events import (
    AnyGameEvent,
    DuelResolved,
    GameEvent,
    IncomeCollected,
    MatchEnded,
    MatchStarted,
    MonsterDefeated,
    MonsterFightLost,
    MonsterSpawned,
    PlayerMoved,
    PlayerRespawned,
    ResourcesGranted,
    StructureBuilt,
    StructureUpgraded,
    TowerDamaged,
    TurnEnded,
    WeaponEquipped,
    WeaponPurchased,
    WeaponUnequipped,
)
from .monsters import MONSTER_TYPES, seed_monsters, spawn_monster

# Main processing
from .process import process_action
from .rng import RandomSource, create_rng
from .turns import check_winner
from .upgrades import max_health, upgrade_cost, upgradeable_targets

# Result types
from .validation import ProcessResult, ValidationResult, validate_action

__all__ = [
    # Actions
    "GameAction",
    "StartMatchAction",
    "MoveAction",
    "BuildAction",
    "UpgradeAction",
    "BuyWeaponAction",
    "ToggleWeaponAction",
    "EndTurnAction",
    "build_action_from_payload",
    # Events
    "GameEvent",
    "AnyGameEvent",
    "MatchStarted",
    "MonsterSpawned",
    "PlayerMoved",
    "PlayerRespawned",
    "DuelResolved",
    "TowerDamaged",
    "MonsterDefeated",
    "MonsterFightLost",
    "StructureBuilt",
    "StructureUpgraded",
    "WeaponPurchased",
    "WeaponEquipped",
    "WeaponUnequipped",
    "IncomeCollected",
    "ResourcesGranted",
    "TurnEnded",
    "MatchEnded",
    # Processing
    "process_action",
    "grant_resources",
    "check_winner",
    # Validation
    "ProcessResult",
    "ValidationResult",
    "validate_action",
    # Randomness
    "RandomSource",
    "create_rng",
    # Rules
    "create_board",
    "tower_origin",
    "forge_level",
    "mine_income",
    "MONSTER_TYPES",
    "spawn_monster",
    "seed_monsters",
    "resolve_duel",
    "win_probability",
    "BUILD_SEARCH_OFFSETS",
    "build_cost",
    "find_build_site",
    "max_health",
    "upgrade_cost",
    "upgradeable_targets",
    "WEAPON_CATALOG",
    "get_weapon",
    "shop_listing",
]
