"""Debounced decisions about entering and leaving the proximity state."""

from __future__ import annotations

from enum import Enum

from .states import State, StateType


class Transition(Enum):
    NONE = 0
    TO_PROXIMITY = 1
    TO_NORMAL = 2


class ProximityTransitionManager:
    """Keeps the last few proximity readings and decides on state changes.

    A change happens only when every reading in the window agrees.
    """

    def __init__(self, buffer_size: int = 3) -> None:
        if buffer_size < 1:
            raise ValueError("buffer size must be at least 1")
        self._buffer = [False] * buffer_size
        self._index = 0

    def update_buffer(self, proximity: bool) -> None:
        self._buffer[self._index] = bool(proximity)
        self._index = (self._index + 1) % len(self._buffer)

    def check_transition(self, last_proximity: bool, current_state: State) -> Transition:
        if all(self._buffer) and not last_proximity:
            if current_state.type in (StateType.NORMAL, StateType.ROLLDOWN):
                return Transition.TO_PROXIMITY
        elif not any(self._buffer) and last_proximity:
            if current_state.type is StateType.PROXIMITYSTATE:
                return Transition.TO_NORMAL
        return Transition.NONE