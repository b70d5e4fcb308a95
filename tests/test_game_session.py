from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import pytest

from tictactoe.api.models import SessionPhase, Symbol
from tictactoe.errors import (
    GameError,
    GameFinishedError,
    InvalidMoveError,
    NotYourTurnError,
    SessionFullError,
    WaitingForOpponentError,
)
from tictactoe.session import GameSession, MoveResult
from tictactoe.turn_processing import validators
from tictactoe.turn_processing.validators import TurnValidator, ValidationContext, ValidatorPipeline

# alice (X) / bob (O) alternate; fills the board without completing a line.
DRAW_MOVES = [
    ("alice", 0),
    ("bob", 1),
    ("alice", 2),
    ("bob", 4),
    ("alice", 3),
    ("bob", 5),
    ("alice", 7),
    ("bob", 6),
    ("alice", 8),
]


@pytest.fixture()
def session() -> GameSession:
    gs = GameSession(game_id="game-1", creator_id="alice")
    gs.join("bob")
    return gs


def test_new_session_state() -> None:
    gs = GameSession(game_id="game-1", creator_id="alice")
    snap = gs.snapshot()

    assert snap.board == [""] * 9
    assert snap.current_turn == "alice"
    assert snap.winner == ""
    assert snap.draw is False
    assert snap.phase == SessionPhase.waiting_for_player
    assert snap.players == {"alice": Symbol.x}


def test_join_assigns_o_and_starts_game() -> None:
    gs = GameSession(game_id="game-1", creator_id="alice")
    assert gs.join("bob") == Symbol.o

    snap = gs.snapshot()
    assert snap.players == {"alice": "X", "bob": "O"}
    assert snap.phase == SessionPhase.in_progress
    assert snap.current_turn == "alice"


def test_third_join_is_rejected(session: GameSession) -> None:
    with pytest.raises(SessionFullError):
        session.join("carol")
    assert len(session.snapshot().players) == 2


def test_move_writes_only_requested_cell(session: GameSession) -> None:
    result = session.move("alice", 4)

    assert result.board == ["", "", "", "", "X", "", "", "", ""]
    assert result.winner == ""
    assert result.phase == SessionPhase.in_progress


def test_turn_passes_to_other_player(session: GameSession) -> None:
    session.move("alice", 0)
    assert session.snapshot().current_turn == "bob"
    session.move("bob", 4)
    assert session.snapshot().current_turn == "alice"


def test_wrong_player_leaves_state_unchanged(session: GameSession) -> None:
    before = session.snapshot()
    with pytest.raises(NotYourTurnError):
        session.move("bob", 0)
    assert session.snapshot() == before


def test_occupied_cell_leaves_board_unchanged(session: GameSession) -> None:
    session.move("alice", 0)
    before = session.snapshot()

    with pytest.raises(InvalidMoveError):
        session.move("bob", 0)

    assert session.snapshot() == before


def test_move_before_opponent_joins_is_rejected() -> None:
    gs = GameSession(game_id="game-1", creator_id="alice")
    with pytest.raises(WaitingForOpponentError):
        gs.move("alice", 0)
    assert gs.snapshot().board == [""] * 9


def test_top_row_wins_for_x(session: GameSession) -> None:
    session.move("alice", 0)
    session.move("bob", 4)
    session.move("alice", 1)
    session.move("bob", 8)
    result = session.move("alice", 2)

    assert result.winner == "X"
    assert result.draw is False
    assert result.phase == SessionPhase.finished


def test_moves_after_win_are_rejected(session: GameSession) -> None:
    for player, pos in [("alice", 0), ("bob", 4), ("alice", 1), ("bob", 8), ("alice", 2)]:
        session.move(player, pos)

    with pytest.raises(GameFinishedError):
        session.move("bob", 5)
    assert session.snapshot().winner == "X"


def test_full_board_without_line_is_a_draw(session: GameSession) -> None:
    for player, pos in DRAW_MOVES[:-1]:
        assert session.move(player, pos).draw is False

    player, pos = DRAW_MOVES[-1]
    result = session.move(player, pos)

    assert result.winner == ""
    assert result.draw is True
    assert result.phase == SessionPhase.finished


def test_snapshot_returns_copies(session: GameSession) -> None:
    snap = session.snapshot()
    snap.board[0] = "O"
    snap.players["mallory"] = Symbol.x

    fresh = session.snapshot()
    assert fresh.board[0] == ""
    assert "mallory" not in fresh.players


def test_concurrent_moves_on_same_cell_resolve_serially() -> None:
    for _ in range(50):
        gs = GameSession(game_id="game-1", creator_id="alice")
        gs.join("bob")
        barrier = threading.Barrier(2)

        def attempt(player_id: str, gs: GameSession = gs, barrier: threading.Barrier = barrier) -> GameError | None:
            barrier.wait()
            try:
                gs.move(player_id, 4)
            except GameError as e:
                return e
            return None

        with ThreadPoolExecutor(max_workers=2) as pool:
            alice_f = pool.submit(attempt, "alice")
            bob_f = pool.submit(attempt, "bob")
            alice_err, bob_err = alice_f.result(), bob_f.result()

        # Only alice holds the turn, so she always lands; bob either lost the
        # race on the cell or arrived before her and was out of turn.
        assert alice_err is None
        assert isinstance(bob_err, (InvalidMoveError, NotYourTurnError))
        assert gs.snapshot().board == ["", "", "", "", "X", "", "", "", ""]


def test_concurrent_joins_admit_exactly_one() -> None:
    gs = GameSession(game_id="game-1", creator_id="alice")
    joiners = [f"p{i}" for i in range(8)]
    barrier = threading.Barrier(len(joiners))

    def attempt(player_id: str) -> bool:
        barrier.wait()
        try:
            gs.join(player_id)
        except SessionFullError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=len(joiners)) as pool:
        results = list(pool.map(attempt, joiners))

    assert results.count(True) == 1
    assert len(gs.snapshot().players) == 2


@dataclass(frozen=True)
class _GateValidator(TurnValidator):
    """Parks one player inside the move pipeline, i.e. while the session lock is held."""

    player_id: str
    entered: threading.Event = field(default_factory=threading.Event)
    release: threading.Event = field(default_factory=threading.Event)

    def validate(self, *, ctx: ValidationContext, session: GameSession) -> None:
        if ctx.player_id == self.player_id:
            self.entered.set()
            assert self.release.wait(timeout=5)


def test_racing_move_on_taken_cell_fails_invalid_move(monkeypatch: pytest.MonkeyPatch, session: GameSession) -> None:
    gate = _GateValidator(player_id="alice")
    move_pipeline = validators.pipeline_for_action("move")
    monkeypatch.setitem(
        validators.DEFAULT_ACTION_PIPELINES,
        "move",
        ValidatorPipeline(validators=(gate, *move_pipeline.validators)),
    )

    outcomes: dict[str, MoveResult | GameError] = {}

    def attempt(player_id: str) -> None:
        try:
            outcomes[player_id] = session.move(player_id, 4)
        except GameError as e:
            outcomes[player_id] = e

    alice = threading.Thread(target=attempt, args=("alice",))
    alice.start()
    assert gate.entered.wait(timeout=5)

    # alice holds the session lock mid-move, so bob queues on it.
    bob = threading.Thread(target=attempt, args=("bob",))
    bob.start()
    bob.join(timeout=0.05)
    assert bob.is_alive()

    gate.release.set()
    alice.join(timeout=5)
    bob.join(timeout=5)

    assert isinstance(outcomes["alice"], MoveResult)
    # bob passed the turn check (alice had just moved) and lost on the cell.
    assert isinstance(outcomes["bob"], InvalidMoveError)
    assert outcomes["bob"].position == 4
    snap = session.snapshot()
    assert snap.board == ["", "", "", "", "X", "", "", "", ""]
    assert snap.current_turn == "bob"
