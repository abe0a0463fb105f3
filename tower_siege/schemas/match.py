"""Pydantic schemas for match operations."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from tower_siege.schemas.game_engine import (
    GameState,
    PlayerAttributes,
    PlayerId,
    TurnEffect,
    WeaponDefinition,
)


class CreateMatchRequest(BaseModel):
    """Request body for starting a match."""

    player1: PlayerAttributes = Field(..., description="Player 1 (left tower, moves first)")
    player2: PlayerAttributes = Field(..., description="Player 2 (right tower)")
    seed: int | None = Field(
        None,
        description="Seed for this match's random source, for reproducible matches",
    )


class MatchResponse(BaseModel):
    """A match and its full state."""

    match_id: str = Field(..., description="UUID of the match")
    state: GameState


class MatchActionRequest(BaseModel):
    """Request body for a player command.

    `action` holds an 'action_type' and its fields, e.g.
    {"action_type": "move", "x": 1, "y": 2}.
    """

    player_id: PlayerId
    action: dict[str, Any] = Field(..., description="Action payload with 'action_type'")


class MatchActionResponse(BaseModel):
    """Outcome of a command: accepted or not, and the resulting state."""

    state: GameState
    accepted: bool
    message: str | None = None
    turn_effect: TurnEffect | None = None
    error_code: str | None = None
    events: list[dict[str, Any]] = Field(
        default_factory=list, description="Events that occurred (serialized)"
    )


class GrantRequest(BaseModel):
    """Request body for an admin resource grant."""

    player_id: PlayerId
    resource: Literal["power", "gold", "coins"]
    amount: int = Field(..., ge=-100_000, le=100_000)


class WeaponCatalogResponse(BaseModel):
    weapons: list[WeaponDefinition]
