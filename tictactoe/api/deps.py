from __future__ import annotations

from fastapi import Request

from tictactoe.game_store import SessionRegistry


def get_registry(request: Request) -> SessionRegistry:
    # Built once in create_app(); tests swap it via app.dependency_overrides.
    return request.app.state.registry
