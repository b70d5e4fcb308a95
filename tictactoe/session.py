"""One tic-tac-toe game: board, players, turn arbitration and outcome."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from tictactoe.api.models import SessionPhase, Symbol
from tictactoe.board import EMPTY, empty_board, find_winner, is_full
from tictactoe.fsm import SessionFSM
from tictactoe.turn_processing.validators import ValidationContext, pipeline_for_action

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveResult:
    board: list[str]
    winner: str
    draw: bool
    phase: SessionPhase


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    board: list[str]
    current_turn: str
    winner: str
    draw: bool
    phase: SessionPhase
    players: dict[str, Symbol]


class GameSession:
    """State of a single game, shared between concurrent request threads.

    Every public operation runs under the session's own lock. The attributes
    are read directly only by validators, which run while that lock is held.
    """

    def __init__(self, game_id: str, creator_id: str):
        self.game_id = game_id
        self.board: list[str] = empty_board()
        self.players: dict[str, Symbol] = {creator_id: Symbol.x}
        self.current_turn: str = creator_id
        self.winner: str = EMPTY
        self.draw = False
        self._fsm = SessionFSM()
        self._lock = threading.Lock()

    @property
    def phase(self) -> SessionPhase:
        return self._fsm.phase

    def join(self, player_id: str) -> Symbol:
        ctx = ValidationContext(game_id=self.game_id, player_id=player_id, action="join")
        with self._lock:
            pipeline_for_action(ctx.action).validate(ctx=ctx, session=self)
            self.players[player_id] = Symbol.o
            self._fsm.opponent_joined()
        logger.info("player joined game_id=%s player_id=%s symbol=%s", self.game_id, player_id, Symbol.o)
        return Symbol.o

    def move(self, player_id: str, position: int) -> MoveResult:
        ctx = ValidationContext(game_id=self.game_id, player_id=player_id, action="move", position=position)
        with self._lock:
            pipeline_for_action(ctx.action).validate(ctx=ctx, session=self)

            symbol = self.players[player_id]
            self.board[position] = symbol
            self.current_turn = self._other_player(player_id)

            winner = find_winner(self.board)
            if winner != EMPTY:
                self.winner = winner
                self._fsm.game_over()
            elif is_full(self.board):
                self.draw = True
                self._fsm.game_over()

            result = MoveResult(board=list(self.board), winner=self.winner, draw=self.draw, phase=self.phase)

        logger.info("move game_id=%s player_id=%s position=%d symbol=%s", self.game_id, player_id, position, symbol)
        if result.winner:
            logger.info("game won game_id=%s winner=%s", self.game_id, result.winner)
        elif result.draw:
            logger.info("game drawn game_id=%s", self.game_id)
        return result

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(
                board=list(self.board),
                current_turn=self.current_turn,
                winner=self.winner,
                draw=self.draw,
                phase=self.phase,
                players=dict(self.players),
            )

    def _other_player(self, player_id: str) -> str:
        # With a single player there is nobody to hand the turn to; keep it.
        return next((pid for pid in self.players if pid != player_id), self.current_turn)
