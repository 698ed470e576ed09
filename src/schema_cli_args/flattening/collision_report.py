"""Flat key collision reporting."""

from __future__ import annotations

from collections.abc import Mapping, Sequence


class FlagCollisionError(Exception):
    """Raised in strict mode when several nesting paths produce the same flat key."""

    def __init__(self, collisions: Mapping[str, Sequence[str]]) -> None:
        self.collisions = {key: tuple(paths) for key, paths in collisions.items()}
        super().__init__(f"CLI flag collisions detected:\n{format_collisions(collisions)}")


def format_collisions(collisions: Mapping[str, Sequence[str]]) -> str:
    """Render one ``  <flat-key>: <path>, <path>`` line per colliding key."""
    return "\n".join(f"  {key}: {', '.join(paths)}" for key, paths in collisions.items())


def check_collisions(collisions: Mapping[str, Sequence[str]]) -> None:
    """Raise :class:`FlagCollisionError` when any collision is present."""
    if collisions:
        raise FlagCollisionError(collisions)
