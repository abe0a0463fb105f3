"""REST endpoints for match management and play."""

import logging
import secrets
from typing import Annotated

from fastapi import APIRouter, Header, HTTPException, status
from pydantic import ValidationError

from tower_siege.config import get_settings
from tower_siege.dependencies.matches import get_match_registry
from tower_siege.schemas.game_engine import MatchSettings
from tower_siege.schemas.match import (
    CreateMatchRequest,
    GrantRequest,
    MatchActionRequest,
    MatchActionResponse,
    MatchResponse,
    WeaponCatalogResponse,
)
from tower_siege.services.game.engine import (
    WEAPON_CATALOG,
    ProcessResult,
    build_action_from_payload,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["matches"])


def _to_action_response(result: ProcessResult) -> MatchActionResponse:
    return MatchActionResponse(
        state=result.state,
        accepted=result.success,
        message=result.message,
        turn_effect=result.turn_effect,
        error_code=result.error_code,
        events=[event.model_dump(mode="json") for event in result.events],
    )


def _match_not_found(match_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Match {match_id} not found",
    )


@router.post("/matches", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
def create_match(request: CreateMatchRequest):
    """Start a new match.

    Builds the board with both towers, seeds the initial monsters and gives
    player 1 the first turn.

    Raises:
        HTTPException 400: If the player setup is invalid (e.g. same name or color).
        HTTPException 503: If the registry holds too many live matches.
    """
    logger.info(
        "POST /matches - players: %s vs %s",
        request.player1.name,
        request.player2.name,
    )

    registry = get_match_registry()
    result = registry.create_match(
        MatchSettings(player1=request.player1, player2=request.player2),
        seed=request.seed,
    )

    if not result.success:
        error_status_map = {
            "INVALID_SETTINGS": status.HTTP_400_BAD_REQUEST,
            "REGISTRY_FULL": status.HTTP_503_SERVICE_UNAVAILABLE,
        }
        http_status = error_status_map.get(
            result.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        logger.warning(
            "Match creation failed: %s - %s",
            result.error_code,
            result.error_message,
        )
        raise HTTPException(
            status_code=http_status,
            detail=result.error_message or "Failed to create match",
        )

    logger.info("Match %s created", result.match_id)
    return MatchResponse(match_id=result.match_id, state=result.state)


@router.get("/matches/{match_id}", response_model=MatchResponse)
def get_match(match_id: str):
    """Get the current state of a match."""
    logger.info("GET /matches/%s", match_id)

    state = get_match_registry().get_state(match_id)
    if state is None:
        logger.warning("Match not found: %s", match_id)
        raise _match_not_found(match_id)
    return MatchResponse(match_id=match_id, state=state)


@router.delete("/matches/{match_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_match(match_id: str):
    """Discard a match."""
    logger.info("DELETE /matches/%s", match_id)

    if not get_match_registry().delete_match(match_id):
        raise _match_not_found(match_id)


@router.post("/matches/{match_id}/actions", response_model=MatchActionResponse)
def submit_action(match_id: str, request: MatchActionRequest):
    """Submit a player command.

    Rule rejections (wrong turn, not enough gold, ...) are not HTTP errors:
    they come back with `accepted: false` and the unchanged state.

    Raises:
        HTTPException 404: If the match does not exist.
        HTTPException 422: If the action payload is malformed.
    """
    logger.info(
        "POST /matches/%s/actions - player: %s, action_type: %s",
        match_id,
        request.player_id.value,
        request.action.get("action_type"),
    )

    try:
        action = build_action_from_payload(request.action)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )

    result = get_match_registry().apply_action(match_id, action, request.player_id)
    if result is None:
        raise _match_not_found(match_id)

    if not result.success:
        logger.info(
            "Action rejected in match %s: %s - %s",
            match_id,
            result.error_code,
            result.error_message,
        )
    return _to_action_response(result)


@router.post("/matches/{match_id}/admin/grants", response_model=MatchActionResponse)
def grant_resources(
    match_id: str,
    request: GrantRequest,
    x_admin_password: Annotated[str | None, Header()] = None,
):
    """Give (or take) power, gold or upgrade coins, bypassing turns.

    Raises:
        HTTPException 404: If admin grants are disabled or the match does not exist.
        HTTPException 403: If the admin password is wrong.
    """
    logger.info(
        "POST /matches/%s/admin/grants - player: %s, resource: %s, amount: %d",
        match_id,
        request.player_id.value,
        request.resource,
        request.amount,
    )

    settings = get_settings()
    if not settings.admin_enabled:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Admin grants are disabled",
        )
    if x_admin_password is None or not secrets.compare_digest(
        x_admin_password.encode(), settings.ADMIN_PASSWORD.encode()
    ):
        logger.warning("Wrong admin password for match %s", match_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Wrong admin password",
        )

    result = get_match_registry().apply_grant(
        match_id, request.player_id, request.resource, request.amount
    )
    if result is None:
        raise _match_not_found(match_id)
    return _to_action_response(result)


@router.get("/weapons", response_model=WeaponCatalogResponse)
def list_weapons():
    """The forge shop catalog."""
    return WeaponCatalogResponse(weapons=list(WEAPON_CATALOG))
