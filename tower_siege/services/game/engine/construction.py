"""Gold mine and forge construction: costs, limits and placement."""

import logging

logger = logging.getLogger(__name__)

from tower_siege.constants import FORGE_COST, MAX_FORGES, MAX_GOLD_MINES, MINE_COST_STEP
from tower_siege.schemas.game_engine import (
    Board,
    Forge,
    GameState,
    GoldMine,
    PlayerId,
    Position,
    TileKind,
)

from .board import forges_of, gold_mines_of, tower_origin
from .events import StructureBuilt
from .turns import record_log
from .validation import ProcessResult

# Candidate sites around the tower, tried in order: orthogonal neighbours
# (up, down, right, left), then diagonals, then two steps out orthogonally.
BUILD_SEARCH_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, -1), (0, 1), (1, 0), (-1, 0),
    (1, -1), (1, 1), (-1, -1), (-1, 1),
    (0, -2), (0, 2), (2, 0), (-2, 0),
)  # fmt: skip

_DISPLAY_NAMES = {
    TileKind.GOLD_MINE: "Gold Mine",
    TileKind.BLACKSMITH: "Forge",
}


def gold_mine_cost(board: Board, player_id: PlayerId) -> int:
    """The nth mine costs n * 10 gold."""
    return (len(gold_mines_of(board, player_id)) + 1) * MINE_COST_STEP


def build_cost(board: Board, player_id: PlayerId, kind: TileKind) -> int:
    if kind == TileKind.GOLD_MINE:
        return gold_mine_cost(board, player_id)
    if kind == TileKind.BLACKSMITH:
        return FORGE_COST
    raise ValueError(f"{kind.value} cannot be built")


def find_build_site(board: Board, player_id: PlayerId) -> Position | None:
    """First empty, monster-free tile in the fixed search order around the tower.

    Only the twelve candidate offsets are considered; free tiles elsewhere on
    the board do not count.
    """
    origin = tower_origin(player_id, board.width, board.height)
    for dx, dy in BUILD_SEARCH_OFFSETS:
        x, y = origin.x + dx, origin.y + dy
        if not board.in_bounds(x, y):
            continue
        tile = board.tile_at(x, y)
        if tile.is_empty_lot and tile.monster is None:
            return Position(x=x, y=y)
    return None


def process_build(state: GameState, player_id: PlayerId, kind: TileKind) -> ProcessResult:
    """Build a gold mine or forge next to the player's tower.

    Checks, in order: mine limit, gold, forge limit, free site. Any failure
    leaves the board and gold untouched and keeps the turn.
    """
    player = state.players[player_id]
    board = state.board

    if kind == TileKind.GOLD_MINE and len(gold_mines_of(board, player_id)) >= MAX_GOLD_MINES:
        logger.warning("Build rejected: MINE_LIMIT_REACHED, player=%s", player_id.value)
        return ProcessResult.failure(
            "MINE_LIMIT_REACHED",
            f"Maximum {MAX_GOLD_MINES} Gold Mines allowed!",
        )

    cost = build_cost(board, player_id, kind)
    if player.stats.gold < cost:
        logger.warning(
            "Build rejected: INSUFFICIENT_GOLD, player=%s, kind=%s, cost=%d, gold=%d",
            player_id.value,
            kind.value,
            cost,
            player.stats.gold,
        )
        return ProcessResult.failure("INSUFFICIENT_GOLD", f"Not enough gold! Need {cost}G.")

    if kind == TileKind.BLACKSMITH and len(forges_of(board, player_id)) >= MAX_FORGES:
        logger.warning("Build rejected: FORGE_LIMIT_REACHED, player=%s", player_id.value)
        return ProcessResult.failure("FORGE_LIMIT_REACHED", "You already have a Forge!")

    site = find_build_site(board, player_id)
    if site is None:
        logger.warning("Build rejected: NO_BUILD_SITE, player=%s", player_id.value)
        return ProcessResult.failure("NO_BUILD_SITE", "No space left near your tower!")

    tile = board.tile_at(site.x, site.y)
    if kind == TileKind.GOLD_MINE:
        tile.structure = GoldMine(owner=player_id)
    else:
        tile.structure = Forge(owner=player_id)
    player.stats.gold -= cost

    logger.info(
        "Structure built: player=%s, kind=%s, site=(%d, %d), cost=%d",
        player_id.value,
        kind.value,
        site.x,
        site.y,
        cost,
    )
    message = f"{player.name} built a {_DISPLAY_NAMES[kind]} at ({site.x}, {site.y})!"
    record_log(state, message)
    event = StructureBuilt(player_id=player_id, kind=kind.value, position=site, cost=cost)
    return ProcessResult.ok(state, [event], message)
