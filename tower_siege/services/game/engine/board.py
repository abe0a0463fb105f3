"""Board construction and ownership queries."""

from tower_siege.constants import GRID_HEIGHT, GRID_WIDTH, MINE_BASE_INCOME
from tower_siege.schemas.game_engine import (
    Board,
    Forge,
    GoldMine,
    PlayerId,
    Position,
    Tile,
    Tower,
)


def tower_origin(
    player_id: PlayerId, width: int = GRID_WIDTH, height: int = GRID_HEIGHT
) -> Position:
    """Tower tile of a player: left edge for player 1, right edge for player 2."""
    x = 0 if player_id == PlayerId.PLAYER_1 else width - 1
    return Position(x=x, y=height // 2)


def create_board(width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> Board:
    """Create an empty board with both towers pre-placed."""
    towers: dict[tuple[int, int], PlayerId] = {}
    for player_id in PlayerId:
        origin = tower_origin(player_id, width, height)
        towers[(origin.x, origin.y)] = player_id

    tiles: list[list[Tile]] = []
    for y in range(height):
        row = []
        for x in range(width):
            owner = towers.get((x, y))
            if owner is not None:
                row.append(Tile(x=x, y=y, structure=Tower(owner=owner)))
            else:
                row.append(Tile(x=x, y=y))
        tiles.append(row)

    return Board(width=width, height=height, tiles=tiles)


def gold_mines_of(board: Board, player_id: PlayerId) -> list[GoldMine]:
    return [
        tile.structure
        for tile in board.iter_tiles()
        if isinstance(tile.structure, GoldMine) and tile.structure.owner == player_id
    ]


def forges_of(board: Board, player_id: PlayerId) -> list[Forge]:
    return [
        tile.structure
        for tile in board.iter_tiles()
        if isinstance(tile.structure, Forge) and tile.structure.owner == player_id
    ]


def forge_level(board: Board, player_id: PlayerId) -> int:
    """Level of the player's forge, or 0 when they have none."""
    forges = forges_of(board, player_id)
    return max((forge.level for forge in forges), default=0)


def mine_income(board: Board, player_id: PlayerId) -> int:
    """Gold produced per end of turn: 5, 10, 20, 40 per mine by level."""
    return sum(
        MINE_BASE_INCOME * 2 ** (mine.level - 1) for mine in gold_mines_of(board, player_id)
    )


def is_enemy_tower(tile: Tile, player_id: PlayerId) -> bool:
    return isinstance(tile.structure, Tower) and tile.structure.owner != player_id


def is_own_tower(tile: Tile, player_id: PlayerId) -> bool:
    return isinstance(tile.structure, Tower) and tile.structure.owner == player_id


def manhattan_distance(origin: Position, x: int, y: int) -> int:
    return abs(x - origin.x) + abs(y - origin.y)
