"""Driver lifecycle states and the rules for moving between them."""

from __future__ import annotations

from enum import Enum
from typing import Callable


class State(str, Enum):
    """Lifecycle state of a driver."""

    #: Not opened yet; nothing is known about the hardware.
    CLOSED = "closed"
    #: Opened; hardware information can be queried.
    OPENED = "opened"
    #: Producing data; readers may pull from the device.
    RUNNING = "running"

    def __str__(self) -> str:
        return self.value


class InvalidStateError(RuntimeError):
    """Raised when a driver is asked to make a transition it cannot make."""


def _check(current: State, target: State) -> None:
    if target is State.OPENED:
        if current is not State.CLOSED:
            raise InvalidStateError("invalid state: driver is already opened")
    elif target is State.RUNNING:
        if current is State.CLOSED:
            raise InvalidStateError("invalid state: driver is closed")
        if current is State.RUNNING:
            raise InvalidStateError("invalid state: driver is already running")
    elif target is not State.CLOSED:
        raise ValueError(f"unknown state: {target!r}")


def transition(current: State, target: State, action: Callable[[], object]) -> State:
    """Move from ``current`` to ``target`` by running ``action``.

    The transition is validated first, then ``action`` is called. Any
    exception from either step propagates and the caller keeps its current
    state; on success the new state is returned.
    """
    _check(State(current), State(target))
    action()
    return State(target)