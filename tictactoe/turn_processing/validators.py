from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tictactoe.api.models import SessionPhase
from tictactoe.board import EMPTY, in_range
from tictactoe.errors import (
    DuplicatePlayerError,
    GameFinishedError,
    InvalidMoveError,
    NotYourTurnError,
    SessionFullError,
    WaitingForOpponentError,
)

if TYPE_CHECKING:
    from tictactoe.session import GameSession

MAX_PLAYERS = 2


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators.

    Plain values only; validators read everything else off the session.
    """

    game_id: str
    player_id: str
    action: str
    position: int | None = None


class TurnValidator(ABC):
    """A small, composable validation unit for an incoming action.

    Validators run while the caller holds the session lock and must not mutate.
    """

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, session: GameSession) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class CapacityValidator(TurnValidator):
    max_players: int = MAX_PLAYERS

    def validate(self, *, ctx: ValidationContext, session: GameSession) -> None:
        if len(session.players) >= self.max_players:
            raise SessionFullError(ctx.game_id)


@dataclass(frozen=True, slots=True)
class DuplicatePlayerValidator(TurnValidator):
    """Joining under the creator's id would overwrite the creator's symbol."""

    def validate(self, *, ctx: ValidationContext, session: GameSession) -> None:
        if ctx.player_id in session.players:
            raise DuplicatePlayerError(ctx.player_id)


@dataclass(frozen=True, slots=True)
class FinishedGameValidator(TurnValidator):
    """Deny moves once a winner is set or the board filled up."""

    def validate(self, *, ctx: ValidationContext, session: GameSession) -> None:
        if session.phase == SessionPhase.finished:
            raise GameFinishedError(ctx.action)


@dataclass(frozen=True, slots=True)
class OpponentPresentValidator(TurnValidator):
    """Deny moves while the creator is still alone in the session."""

    def validate(self, *, ctx: ValidationContext, session: GameSession) -> None:
        if session.phase == SessionPhase.waiting_for_player:
            raise WaitingForOpponentError(ctx.action)


@dataclass(frozen=True, slots=True)
class CurrentTurnValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, session: GameSession) -> None:
        if ctx.player_id != session.current_turn:
            raise NotYourTurnError(ctx.player_id, session.current_turn)


@dataclass(frozen=True, slots=True)
class CellValidator(TurnValidator):
    """The target cell must exist and be empty."""

    def validate(self, *, ctx: ValidationContext, session: GameSession) -> None:
        position = ctx.position
        if position is None or not in_range(position):
            raise InvalidMoveError(-1 if position is None else position, "position must be between 0 and 8")
        if session.board[position] != EMPTY:
            raise InvalidMoveError(position, "cell is already taken")


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[TurnValidator, ...]

    def validate(self, *, ctx: ValidationContext, session: GameSession) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, session=session)


# Order matters: the first failing validator decides the error the caller sees.
DEFAULT_ACTION_PIPELINES: dict[str, ValidatorPipeline] = {
    "join": ValidatorPipeline(
        validators=(
            CapacityValidator(),
            DuplicatePlayerValidator(),
        )
    ),
    "move": ValidatorPipeline(
        validators=(
            FinishedGameValidator(),
            OpponentPresentValidator(),
            CurrentTurnValidator(),
            CellValidator(),
        )
    ),
}


def pipeline_for_action(action: str) -> ValidatorPipeline:
    pipe = DEFAULT_ACTION_PIPELINES.get(action)
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe
