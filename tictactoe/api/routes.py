from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from tictactoe.api.deps import get_registry
from tictactoe.api.models import (
    CreateSessionRequest,
    CreateSessionResponse,
    JoinSessionRequest,
    JoinSessionResponse,
    MoveRequest,
    MoveResponse,
    StateRequest,
    StateResponse,
)
from tictactoe.errors import GameError
from tictactoe.game_store import SessionRegistry

router = APIRouter()
logger = logging.getLogger(__name__)


def _http_error(e: GameError) -> HTTPException:
    logger.info("rejected: %s (%s)", e.__class__.__name__, e)
    return HTTPException(status_code=e.status_code, detail=e.to_dict())


# Handlers are plain `def` so FastAPI runs them on its thread pool; the
# registry and session locks serialize what needs serializing.


@router.get("/healthcheck")
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/create", response_model=CreateSessionResponse)
def create_session_route(
    payload: CreateSessionRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> CreateSessionResponse:
    game_id, symbol = registry.create_session(payload.player_id)
    return CreateSessionResponse(game_id=game_id, symbol=symbol)


@router.post("/join", response_model=JoinSessionResponse)
def join_session_route(
    payload: JoinSessionRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> JoinSessionResponse:
    try:
        session = registry.get_session(payload.game_id)
        symbol = session.join(payload.player_id)
    except GameError as e:
        raise _http_error(e) from e
    return JoinSessionResponse(symbol=symbol)


@router.post("/move", response_model=MoveResponse)
def move_route(
    payload: MoveRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> MoveResponse:
    try:
        session = registry.get_session(payload.game_id)
        result = session.move(payload.player_id, payload.position)
    except GameError as e:
        raise _http_error(e) from e
    return MoveResponse(board=result.board, winner=result.winner, draw=result.draw, phase=result.phase)


@router.post("/state", response_model=StateResponse)
def state_route(
    payload: StateRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> StateResponse:
    try:
        session = registry.get_session(payload.game_id)
    except GameError as e:
        raise _http_error(e) from e
    snap = session.snapshot()
    return StateResponse(
        board=snap.board,
        current_turn=snap.current_turn,
        winner=snap.winner,
        draw=snap.draw,
        phase=snap.phase,
        players=snap.players,
    )
