"""Structured exceptions raised by the session core."""

from __future__ import annotations

from typing import Any


class GameError(ValueError):
    """Base class for rejected session operations.

    `status_code` is the HTTP status the API layer answers with.
    """

    status_code: int = 400

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {"error": self.__class__.__name__.removesuffix("Error"), "message": str(self)}


class SessionNotFoundError(GameError):
    status_code = 404

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Game not found: {game_id}")


class SessionFullError(GameError):
    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__("Game is full")


class DuplicatePlayerError(GameError):
    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id!r} is already in this game")


class NotYourTurnError(GameError):
    def __init__(self, player_id: str, expected: str | None):
        self.player_id = player_id
        self.expected = expected
        super().__init__("Not your turn")


class InvalidMoveError(GameError):
    def __init__(self, position: int, reason: str):
        self.position = position
        self.reason = reason
        super().__init__(f"Invalid move at position {position}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["position"] = self.position
        return payload


class GameFinishedError(GameError):
    """Raised for moves submitted after the game has a winner or ended in a draw."""

    status_code = 409

    def __init__(self, action: str = "move") -> None:
        self.action = action
        super().__init__(f"Game is finished; action '{action}' not allowed")


class WaitingForOpponentError(GameError):
    """Raised for moves submitted before the second player joined."""

    status_code = 409

    def __init__(self, action: str = "move") -> None:
        self.action = action
        super().__init__(f"Waiting for a second player to join; action '{action}' not allowed")
