from tower_siege.constants import (
    INITIAL_GOLD,
    INITIAL_POWER,
    INITIAL_UPGRADE_COINS,
    TOWER_HEALTH_BY_LEVEL,
)
from tower_siege.schemas.game_engine import (
    GamePhase,
    GameState,
    MatchSettings,
    Player,
    PlayerAttributes,
    PlayerId,
    Stats,
)
from tower_siege.services.game.engine.board import create_board, tower_origin

WELCOME_MESSAGE = "Welcome to Tower Siege!"


def validate_match_settings(match_settings: MatchSettings) -> None:
    """Validate match settings before initializing a match."""
    player1 = match_settings.player1
    player2 = match_settings.player2
    if not player1.name.strip() or not player2.name.strip():
        raise ValueError("Player names cannot be blank.")
    # Names are stored stripped, so compare them that way
    if player1.name.strip() == player2.name.strip():
        raise ValueError(f"Duplicate player name found: {player1.name.strip()}")
    if player1.color == player2.color:
        raise ValueError(f"Duplicate player color found: {player1.color}")


def _create_player(player_id: PlayerId, attributes: PlayerAttributes) -> Player:
    """Create a fresh player standing on their own tower."""
    return Player(
        player_id=player_id,
        name=attributes.name.strip(),
        color=attributes.color,
        position=tower_origin(player_id),
        stats=Stats(
            power=INITIAL_POWER,
            gold=INITIAL_GOLD,
            upgrade_coins=INITIAL_UPGRADE_COINS,
        ),
        tower_health=TOWER_HEALTH_BY_LEVEL[1],
        tower_level=1,
    )


def initialize_match(match_settings: MatchSettings) -> GameState:
    """
    Validate match settings and return an initialized GameState.

    The board has both towers placed but no monsters yet; they are seeded
    when the match is started.

    Args:
        match_settings: Names and colors for both players.

    Returns:
        A GameState in the NOT_STARTED phase.

    Raises:
        ValueError: If match settings are invalid.
    """
    validate_match_settings(match_settings)

    players = {
        PlayerId.PLAYER_1: _create_player(PlayerId.PLAYER_1, match_settings.player1),
        PlayerId.PLAYER_2: _create_player(PlayerId.PLAYER_2, match_settings.player2),
    }

    return GameState(
        phase=GamePhase.NOT_STARTED,
        board=create_board(),
        players=players,
        active_player_id=PlayerId.PLAYER_1,
        winner_id=None,
        logs=[WELCOME_MESSAGE],
    )
