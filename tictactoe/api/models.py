from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, StrictInt


BOARD_SIZE = 9


class Symbol(StrEnum):
    x = "X"
    o = "O"


class SessionPhase(StrEnum):
    waiting_for_player = "waiting_for_player"
    in_progress = "in_progress"
    finished = "finished"


class _WireModel(BaseModel):
    # Clients speak camelCase (gameID/playerID); python code uses snake_case.
    model_config = ConfigDict(populate_by_name=True)


class CreateSessionRequest(_WireModel):
    player_id: str = Field(..., alias="playerID")


class CreateSessionResponse(_WireModel):
    game_id: str = Field(..., alias="gameID")
    symbol: Symbol


class JoinSessionRequest(_WireModel):
    game_id: str = Field(..., alias="gameID")
    player_id: str = Field(..., alias="playerID")


class JoinSessionResponse(_WireModel):
    symbol: Symbol


class MoveRequest(_WireModel):
    game_id: str = Field(..., alias="gameID")
    player_id: str = Field(..., alias="playerID")
    # Strict: JSON booleans and numeric strings are malformed input, not positions.
    # Range is checked by the session so out-of-range positions surface as InvalidMove.
    position: StrictInt


class MoveResponse(_WireModel):
    board: list[str]
    winner: str = ""
    draw: bool = False
    phase: SessionPhase


class StateRequest(_WireModel):
    game_id: str = Field(..., alias="gameID")


class StateResponse(_WireModel):
    board: list[str]
    current_turn: str = Field(..., alias="currentTurn")
    winner: str = ""
    draw: bool = False
    phase: SessionPhase
    # player_id -> symbol
    players: dict[str, Symbol] = Field(default_factory=dict)
