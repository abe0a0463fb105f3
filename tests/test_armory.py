"""Tests for the forge shop and weapon loadout.

Critical scenarios tested:
- Buying requires a forge of the weapon's tier and enough gold
- A weapon name can only be owned once
- New weapons auto-equip while a slot is free
- Equip/unequip toggles are free actions capped at 4 equipped
- Equipped weapons add to total power
"""

from tower_siege.schemas.game_engine import GameState, TurnEffect
from tower_siege.services.game.engine import (
    BuyWeaponAction,
    ToggleWeaponAction,
    process_action,
)
from tower_siege.services.game.engine.armory import WEAPON_CATALOG, get_weapon, shop_listing
from tower_siege.services.game.engine.events import (
    WeaponEquipped,
    WeaponPurchased,
    WeaponUnequipped,
)

from .conftest import PLAYER_1_ID, PLAYER_2_ID, give_weapons, place_forge


class TestCatalog:
    def test_catalog_has_eight_weapons_in_tier_order(self):
        assert [w.weapon_id for w in WEAPON_CATALOG] == [f"w{i}" for i in range(1, 9)]
        assert [w.tier for w in WEAPON_CATALOG] == [1, 1, 2, 2, 3, 3, 4, 4]

    def test_get_weapon(self):
        assert get_weapon("w4").name == "War Hammer"
        assert get_weapon("w9") is None


class TestShopListing:
    def test_without_forge_nothing_unlocked(self, match_player1_turn: GameState):
        listing = shop_listing(match_player1_turn, PLAYER_1_ID)

        assert not any(entry.unlocked for entry in listing)
        assert not any(entry.purchasable for entry in listing)

    def test_level_1_forge(self, match_player1_turn: GameState):
        place_forge(match_player1_turn, 0, 1, PLAYER_1_ID)

        listing = {
            entry.weapon.weapon_id: entry
            for entry in shop_listing(match_player1_turn, PLAYER_1_ID)
        }

        assert listing["w1"].purchasable
        # 25 gold needed, 20 held
        assert listing["w2"].unlocked and not listing["w2"].affordable
        assert not listing["w3"].unlocked


class TestBuyWeapon:
    def test_buy_equips_and_consumes_turn(self, match_player1_turn: GameState):
        place_forge(match_player1_turn, 0, 1, PLAYER_1_ID)

        result = process_action(match_player1_turn, BuyWeaponAction(weapon_id="w1"), PLAYER_1_ID)

        assert result.success
        assert result.turn_effect == TurnEffect.ADVANCES_TURN
        alice = result.state.players[PLAYER_1_ID]
        assert alice.stats.gold == 10
        assert len(alice.inventory) == 1
        assert alice.equipped_weapon_ids == [alice.inventory[0].instance_id]
        assert alice.total_power == 7
        assert result.state.active_player_id == PLAYER_2_ID
        assert result.state.logs[0] == "Alice bought Rusty Dagger!"

        purchased = next(e for e in result.events if isinstance(e, WeaponPurchased))
        assert purchased.equipped
        assert purchased.cost == 10

    def test_no_forge(self, match_player1_turn: GameState):
        result = process_action(match_player1_turn, BuyWeaponAction(weapon_id="w1"), PLAYER_1_ID)

        assert result.error_code == "FORGE_LEVEL_TOO_LOW"
        assert result.state.logs[0] == "Need level 1 Forge!"
        assert result.state.active_player_id == PLAYER_1_ID

    def test_forge_tier_too_low(self, match_player1_turn: GameState):
        place_forge(match_player1_turn, 0, 1, PLAYER_1_ID)
        match_player1_turn.players[PLAYER_1_ID].stats.gold = 1000

        result = process_action(match_player1_turn, BuyWeaponAction(weapon_id="w3"), PLAYER_1_ID)

        assert result.error_code == "FORGE_LEVEL_TOO_LOW"
        assert result.state.logs[0] == "Need level 2 Forge!"

    def test_already_owned(self, match_player1_turn: GameState):
        place_forge(match_player1_turn, 0, 1, PLAYER_1_ID)
        give_weapons(match_player1_turn, PLAYER_1_ID, "w1")

        result = process_action(match_player1_turn, BuyWeaponAction(weapon_id="w1"), PLAYER_1_ID)

        assert result.error_code == "WEAPON_ALREADY_OWNED"
        assert result.state.logs[0] == "You already own Rusty Dagger!"

    def test_not_enough_gold(self, match_player1_turn: GameState):
        place_forge(match_player1_turn, 0, 1, PLAYER_1_ID)

        result = process_action(match_player1_turn, BuyWeaponAction(weapon_id="w2"), PLAYER_1_ID)

        assert result.error_code == "INSUFFICIENT_GOLD"
        assert result.state.players[PLAYER_1_ID].stats.gold == 20
        assert result.state.logs[0] == "Not enough gold!"

    def test_unknown_weapon(self, match_player1_turn: GameState):
        result = process_action(match_player1_turn, BuyWeaponAction(weapon_id="w99"), PLAYER_1_ID)

        assert result.error_code == "UNKNOWN_WEAPON"

    def test_no_auto_equip_when_slots_full(self, match_player1_turn: GameState):
        place_forge(match_player1_turn, 0, 1, PLAYER_1_ID, level=4)
        give_weapons(match_player1_turn, PLAYER_1_ID, "w1", "w2", "w3", "w4")
        match_player1_turn.players[PLAYER_1_ID].stats.gold = 300

        result = process_action(match_player1_turn, BuyWeaponAction(weapon_id="w5"), PLAYER_1_ID)

        assert result.success
        alice = result.state.players[PLAYER_1_ID]
        assert len(alice.inventory) == 5
        assert len(alice.equipped_weapon_ids) == 4
        assert alice.inventory[-1].instance_id not in alice.equipped_weapon_ids
        assert alice.stats.gold == 50

        purchased = next(e for e in result.events if isinstance(e, WeaponPurchased))
        assert not purchased.equipped


class TestToggleWeapon:
    def test_unequip_is_free(self, match_player1_turn: GameState):
        (dagger,) = give_weapons(match_player1_turn, PLAYER_1_ID, "w1")

        result = process_action(
            match_player1_turn, ToggleWeaponAction(instance_id=dagger.instance_id), PLAYER_1_ID
        )

        assert result.success
        assert result.turn_effect == TurnEffect.FREE
        alice = result.state.players[PLAYER_1_ID]
        assert alice.equipped_weapon_ids == []
        assert alice.total_power == 5
        assert result.state.active_player_id == PLAYER_1_ID
        assert result.state.turn_number == match_player1_turn.turn_number
        assert result.state.logs[0] == "Alice unequipped Rusty Dagger."
        assert isinstance(result.events[0], WeaponUnequipped)

    def test_equip(self, match_player1_turn: GameState):
        (sword,) = give_weapons(match_player1_turn, PLAYER_1_ID, "w2", equip=False)

        result = process_action(
            match_player1_turn, ToggleWeaponAction(instance_id=sword.instance_id), PLAYER_1_ID
        )

        alice = result.state.players[PLAYER_1_ID]
        assert alice.equipped_weapon_ids == [sword.instance_id]
        assert alice.total_power == 10
        assert isinstance(result.events[0], WeaponEquipped)

    def test_fifth_equip_rejected(self, match_player1_turn: GameState):
        give_weapons(match_player1_turn, PLAYER_1_ID, "w1", "w2", "w3", "w4")
        (wand,) = give_weapons(match_player1_turn, PLAYER_1_ID, "w5", equip=False)

        result = process_action(
            match_player1_turn, ToggleWeaponAction(instance_id=wand.instance_id), PLAYER_1_ID
        )

        assert result.error_code == "EQUIP_LIMIT_REACHED"
        alice = result.state.players[PLAYER_1_ID]
        assert alice.equipped_weapon_ids == match_player1_turn.players[PLAYER_1_ID].equipped_weapon_ids
        assert wand.instance_id not in alice.equipped_weapon_ids
        assert alice.stats.gold == 20
        assert alice.total_power == 5 + 2 + 5 + 10 + 20
        assert result.state.active_player_id == PLAYER_1_ID
        assert result.state.logs[0] == "Maximum 4 weapons equipped!"

    def test_cannot_toggle_other_players_weapon(self, match_player1_turn: GameState):
        (dagger,) = give_weapons(match_player1_turn, PLAYER_2_ID, "w1")

        result = process_action(
            match_player1_turn, ToggleWeaponAction(instance_id=dagger.instance_id), PLAYER_1_ID
        )

        assert result.error_code == "UNKNOWN_WEAPON"
        assert result.state.players[PLAYER_2_ID].equipped_weapon_ids == [dagger.instance_id]
