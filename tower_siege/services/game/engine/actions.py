"""Match action types - explicit player commands separated from match state."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class StartMatchAction(BaseModel):
    """Leave setup and begin play."""

    action_type: Literal["start_match"] = "start_match"


class MoveAction(BaseModel):
    """Move onto, or attack, an orthogonally adjacent tile."""

    action_type: Literal["move"] = "move"
    x: int = Field(..., description="Target column")
    y: int = Field(..., description="Target row")


class BuildAction(BaseModel):
    """Build a structure next to the player's tower."""

    action_type: Literal["build"] = "build"
    kind: Literal["gold_mine", "blacksmith"] = Field(
        ..., description="Structure to build: 'gold_mine' or 'blacksmith'"
    )


class UpgradeAction(BaseModel):
    """Raise the level of the player's tower or one of their buildings."""

    action_type: Literal["upgrade"] = "upgrade"
    x: int
    y: int


class BuyWeaponAction(BaseModel):
    """Buy a weapon from the forge shop."""

    action_type: Literal["buy_weapon"] = "buy_weapon"
    weapon_id: str = Field(..., description="Catalog ID of the weapon, e.g. 'w1'")


class ToggleWeaponAction(BaseModel):
    """Equip or unequip an owned weapon. Does not use up the turn."""

    action_type: Literal["toggle_weapon"] = "toggle_weapon"
    instance_id: str = Field(..., description="Instance ID of an owned weapon")


class EndTurnAction(BaseModel):
    """Collect mine income and pass the turn."""

    action_type: Literal["end_turn"] = "end_turn"


# Union type for all match actions
GameAction = Annotated[
    StartMatchAction
    | MoveAction
    | BuildAction
    | UpgradeAction
    | BuyWeaponAction
    | ToggleWeaponAction
    | EndTurnAction,
    Field(discriminator="action_type"),
]

_ACTION_TYPES: dict[str, type[BaseModel]] = {
    "start_match": StartMatchAction,
    "move": MoveAction,
    "build": BuildAction,
    "upgrade": UpgradeAction,
    "buy_weapon": BuyWeaponAction,
    "toggle_weapon": ToggleWeaponAction,
    "end_turn": EndTurnAction,
}


def build_action_from_payload(payload: dict) -> GameAction:
    """Build a typed action from a raw payload dict.

    Args:
        payload: Dict with 'action_type' key and action-specific fields.

    Returns:
        The appropriate GameAction subtype.

    Raises:
        ValueError: If action_type is missing or unknown.
        pydantic.ValidationError: If the action-specific fields are invalid.
    """
    action_type = payload.get("action_type")
    action_cls = _ACTION_TYPES.get(action_type) if isinstance(action_type, str) else None
    if action_cls is None:
        raise ValueError(f"Unknown action type: {action_type}")
    return action_cls.model_validate(payload)
