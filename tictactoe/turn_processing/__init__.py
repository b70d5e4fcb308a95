"""Turn/action processing helpers.

This package centralizes precondition checks so every join and move flows
through the same pipeline before a session mutates anything.
"""
