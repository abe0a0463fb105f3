"""Weapon shop and inventory management."""

import logging
import uuid
from dataclasses import dataclass

logger = logging.getLogger(__name__)

from tower_siege.constants import MAX_EQUIPPED_WEAPONS
from tower_siege.schemas.game_engine import (
    GameState,
    OwnedWeapon,
    PlayerId,
    TurnEffect,
    WeaponDefinition,
)

from .board import forge_level
from .events import WeaponEquipped, WeaponPurchased, WeaponUnequipped
from .turns import record_log
from .validation import ProcessResult

WEAPON_CATALOG: tuple[WeaponDefinition, ...] = (
    WeaponDefinition(weapon_id="w1", name="Rusty Dagger", power=2, cost=10, tier=1, icon_type="dagger", color="#94a3b8"),
    WeaponDefinition(weapon_id="w2", name="Short Sword", power=5, cost=25, tier=1, icon_type="sword", color="#cbd5e1"),
    WeaponDefinition(weapon_id="w3", name="Iron Mace", power=10, cost=50, tier=2, icon_type="mace", color="#64748b"),
    WeaponDefinition(weapon_id="w4", name="War Hammer", power=20, cost=100, tier=2, icon_type="hammer", color="#475569"),
    WeaponDefinition(weapon_id="w5", name="Magic Wand", power=40, cost=250, tier=3, icon_type="wand", color="#3b82f6"),
    WeaponDefinition(weapon_id="w6", name="Excalibur Fragment", power=80, cost=600, tier=3, icon_type="sword", color="#f59e0b"),
    WeaponDefinition(weapon_id="w7", name="Dragon Slayer Axe", power=150, cost=1500, tier=4, icon_type="axe", color="#ef4444"),
    WeaponDefinition(weapon_id="w8", name="God Killer Spear", power=500, cost=5000, tier=4, icon_type="spear", color="#a855f7"),
)  # fmt: skip

_CATALOG_BY_ID = {weapon.weapon_id: weapon for weapon in WEAPON_CATALOG}


@dataclass
class ShopEntry:
    """How a catalog weapon looks from one player's shop screen."""

    weapon: WeaponDefinition
    unlocked: bool
    affordable: bool
    owned: bool

    @property
    def purchasable(self) -> bool:
        return self.unlocked and self.affordable and not self.owned


def get_weapon(weapon_id: str) -> WeaponDefinition | None:
    return _CATALOG_BY_ID.get(weapon_id)


def new_weapon_instance(weapon: WeaponDefinition) -> OwnedWeapon:
    """Create an owned copy of a catalog weapon with a unique instance ID."""
    return OwnedWeapon(
        **weapon.model_dump(),
        instance_id=f"{weapon.weapon_id}-{uuid.uuid4().hex[:12]}",
    )


def shop_listing(state: GameState, player_id: PlayerId) -> list[ShopEntry]:
    player = state.players[player_id]
    level = forge_level(state.board, player_id)
    owned_names = {w.name for w in player.inventory}
    return [
        ShopEntry(
            weapon=weapon,
            unlocked=weapon.tier <= level,
            affordable=player.stats.gold >= weapon.cost,
            owned=weapon.name in owned_names,
        )
        for weapon in WEAPON_CATALOG
    ]


def process_buy_weapon(state: GameState, player_id: PlayerId, weapon_id: str) -> ProcessResult:
    """Buy a catalog weapon.

    Requires a forge of at least the weapon's tier, no weapon of the same
    name already owned, and enough gold. The new weapon is equipped right
    away if a slot is free.
    """
    weapon = get_weapon(weapon_id)
    if weapon is None:
        logger.warning("Purchase rejected: UNKNOWN_WEAPON, weapon_id=%s", weapon_id)
        return ProcessResult.failure("UNKNOWN_WEAPON", f"Unknown weapon: {weapon_id}")

    player = state.players[player_id]
    level = forge_level(state.board, player_id)
    if weapon.tier > level:
        logger.warning(
            "Purchase rejected: FORGE_LEVEL_TOO_LOW, player=%s, tier=%d, forge_level=%d",
            player_id.value,
            weapon.tier,
            level,
        )
        return ProcessResult.failure(
            "FORGE_LEVEL_TOO_LOW",
            f"Need level {weapon.tier} Forge!",
        )

    if any(owned.name == weapon.name for owned in player.inventory):
        logger.warning(
            "Purchase rejected: WEAPON_ALREADY_OWNED, player=%s, weapon=%s",
            player_id.value,
            weapon.name,
        )
        return ProcessResult.failure(
            "WEAPON_ALREADY_OWNED",
            f"You already own {weapon.name}!",
        )

    if player.stats.gold < weapon.cost:
        logger.warning(
            "Purchase rejected: INSUFFICIENT_GOLD, player=%s, cost=%d, gold=%d",
            player_id.value,
            weapon.cost,
            player.stats.gold,
        )
        return ProcessResult.failure("INSUFFICIENT_GOLD", "Not enough gold!")

    instance = new_weapon_instance(weapon)
    player.inventory.append(instance)
    equipped = len(player.equipped_weapon_ids) < MAX_EQUIPPED_WEAPONS
    if equipped:
        player.equipped_weapon_ids.append(instance.instance_id)
    player.stats.gold -= weapon.cost

    logger.info(
        "Weapon purchased: player=%s, weapon=%s, instance=%s, equipped=%s",
        player_id.value,
        weapon.name,
        instance.instance_id,
        equipped,
    )
    message = f"{player.name} bought {weapon.name}!"
    record_log(state, message)
    event = WeaponPurchased(
        player_id=player_id,
        weapon_id=weapon.weapon_id,
        instance_id=instance.instance_id,
        cost=weapon.cost,
        equipped=equipped,
    )
    return ProcessResult.ok(state, [event], message)


def process_toggle_weapon(
    state: GameState, player_id: PlayerId, instance_id: str
) -> ProcessResult:
    """Equip or unequip an owned weapon. Never consumes the turn."""
    player = state.players[player_id]
    weapon = next((w for w in player.inventory if w.instance_id == instance_id), None)
    if weapon is None:
        logger.warning(
            "Toggle rejected: UNKNOWN_WEAPON, player=%s, instance=%s",
            player_id.value,
            instance_id,
        )
        return ProcessResult.failure("UNKNOWN_WEAPON", "You don't own that weapon!")

    if instance_id in player.equipped_weapon_ids:
        player.equipped_weapon_ids.remove(instance_id)
        message = f"{player.name} unequipped {weapon.name}."
        event = WeaponUnequipped(player_id=player_id, instance_id=instance_id)
    else:
        if len(player.equipped_weapon_ids) >= MAX_EQUIPPED_WEAPONS:
            logger.warning(
                "Toggle rejected: EQUIP_LIMIT_REACHED, player=%s, instance=%s",
                player_id.value,
                instance_id,
            )
            return ProcessResult.failure(
                "EQUIP_LIMIT_REACHED",
                f"Maximum {MAX_EQUIPPED_WEAPONS} weapons equipped!",
            )
        player.equipped_weapon_ids.append(instance_id)
        message = f"{player.name} equipped {weapon.name}."
        event = WeaponEquipped(player_id=player_id, instance_id=instance_id)

    logger.info(
        "Weapon toggled: player=%s, instance=%s, total_power=%d",
        player_id.value,
        instance_id,
        player.total_power,
    )
    record_log(state, message)
    return ProcessResult.ok(state, [event], message, turn_effect=TurnEffect.FREE)
