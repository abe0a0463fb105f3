"""Tests for admin resource grants and the host command surface.

Critical scenarios tested:
- Grants add or remove power, gold and coins, clamped at zero
- Grants ignore whose turn it is and never pass it
- Grants are refused once the match is finished
- Command wrappers report accepted/rejected with the resulting state
"""

import pytest

from tower_siege.schemas.game_engine import GamePhase, GameState, Position, TurnEffect
from tower_siege.services.game import build, end_turn, move, toggle_weapon, upgrade
from tower_siege.services.game.engine import grant_resources
from tower_siege.services.game.engine.events import ResourcesGranted

from .conftest import PLAYER_1_ID, PLAYER_2_ID, give_weapons


class TestGrantResources:
    def test_grant_gold_to_inactive_player(self, match_player1_turn: GameState):
        result = grant_resources(match_player1_turn, PLAYER_2_ID, "gold", 100)

        assert result.success
        assert result.turn_effect == TurnEffect.FREE
        assert result.state.players[PLAYER_2_ID].stats.gold == 120
        assert result.state.active_player_id == PLAYER_1_ID
        assert result.state.logs[0] == "Admin: Gave 100 gold to Bob."
        assert isinstance(result.events[0], ResourcesGranted)
        assert result.events[0].seq == match_player1_turn.event_seq

    def test_grant_power_and_coins(self, match_player1_turn: GameState):
        state = grant_resources(match_player1_turn, PLAYER_1_ID, "power", 10).state
        state = grant_resources(state, PLAYER_1_ID, "coins", 3).state

        alice = state.players[PLAYER_1_ID]
        assert alice.stats.power == 15
        assert alice.total_power == 15
        assert alice.stats.upgrade_coins == 5

    def test_negative_grant_clamps_at_zero(self, match_player1_turn: GameState):
        result = grant_resources(match_player1_turn, PLAYER_1_ID, "gold", -50)

        assert result.state.players[PLAYER_1_ID].stats.gold == 0

    def test_input_state_untouched(self, match_player1_turn: GameState):
        grant_resources(match_player1_turn, PLAYER_1_ID, "gold", 100)

        assert match_player1_turn.players[PLAYER_1_ID].stats.gold == 20

    def test_allowed_before_start(self, new_match: GameState):
        result = grant_resources(new_match, PLAYER_1_ID, "coins", 1)

        assert result.success
        assert result.state.players[PLAYER_1_ID].stats.upgrade_coins == 3

    def test_refused_after_finish(self, match_player1_turn: GameState):
        match_player1_turn.phase = GamePhase.FINISHED
        match_player1_turn.winner_id = PLAYER_1_ID

        result = grant_resources(match_player1_turn, PLAYER_2_ID, "gold", 100)

        assert not result.success
        assert result.error_code == "MATCH_FINISHED"
        assert result.state is match_player1_turn

    def test_unknown_resource(self, match_player1_turn: GameState):
        with pytest.raises(ValueError, match="Unknown resource"):
            grant_resources(match_player1_turn, PLAYER_1_ID, "mana", 1)


class TestCommands:
    def test_move_accepted(self, match_player1_turn: GameState):
        result = move(match_player1_turn, PLAYER_1_ID, 1, 2)

        assert result.accepted
        assert result.message == "Alice moved to (1, 2)."
        assert result.state.players[PLAYER_1_ID].position == Position(x=1, y=2)

    def test_build_rejected(self, match_player1_turn: GameState):
        match_player1_turn.players[PLAYER_1_ID].stats.gold = 0

        result = build(match_player1_turn, PLAYER_1_ID, "gold_mine")

        assert not result.accepted
        assert result.error_code == "INSUFFICIENT_GOLD"
        assert result.message == "Not enough gold! Need 10G."
        assert result.state.active_player_id == PLAYER_1_ID

    def test_upgrade_and_end_turn(self, match_player1_turn: GameState):
        upgraded = upgrade(match_player1_turn, PLAYER_1_ID, 0, 2)
        assert upgraded.accepted

        ended = end_turn(upgraded.state, PLAYER_2_ID)
        assert ended.accepted
        assert ended.state.active_player_id == PLAYER_1_ID

    def test_toggle_weapon_is_free(self, match_player1_turn: GameState):
        (dagger,) = give_weapons(match_player1_turn, PLAYER_1_ID, "w1")

        result = toggle_weapon(match_player1_turn, PLAYER_1_ID, dagger.instance_id)

        assert result.accepted
        assert result.turn_effect == TurnEffect.FREE
        assert result.state.active_player_id == PLAYER_1_ID
