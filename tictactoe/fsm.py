from __future__ import annotations

from statemachine import State, StateMachine

from tictactoe.api.models import SessionPhase


class SessionFSM(StateMachine):
    """Phase machine for one session.

    waiting_for_player -> in_progress -> finished

    Preconditions are checked by the validator pipeline before an event fires,
    so the machine only records which transitions happened.
    """

    waiting_for_player = State(
        SessionPhase.waiting_for_player.value,
        value=SessionPhase.waiting_for_player.value,
        initial=True,
    )
    in_progress = State(SessionPhase.in_progress.value, value=SessionPhase.in_progress.value)
    finished = State(SessionPhase.finished.value, value=SessionPhase.finished.value, final=True)

    opponent_joined = waiting_for_player.to(in_progress)
    game_over = in_progress.to(finished)

    def __init__(self, phase: SessionPhase = SessionPhase.waiting_for_player):
        super().__init__(start_value=phase.value)

    @property
    def phase(self) -> SessionPhase:
        return SessionPhase(str(self.current_state.value))
