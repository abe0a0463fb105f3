"""Match service module.

Provides:
- Match initialization (start_game.py)
- Host-facing commands (commands.py)
- Match engine processing (engine/)
"""

from .commands import (
    CommandResult,
    build,
    buy_weapon,
    end_turn,
    move,
    start_match,
    toggle_weapon,
    upgrade,
)

# Re-export from engine for convenience
from .engine import (
    GameAction,
    ProcessResult,
    build_action_from_payload,
    create_rng,
    grant_resources,
    process_action,
)
from .start_game import initialize_match, validate_match_settings

__all__ = [
    # Initialization
    "initialize_match",
    "validate_match_settings",
    # Commands
    "CommandResult",
    "start_match",
    "move",
    "build",
    "upgrade",
    "buy_weapon",
    "toggle_weapon",
    "end_turn",
    # Engine
    "GameAction",
    "ProcessResult",
    "process_action",
    "grant_resources",
    "build_action_from_payload",
    "create_rng",
]
