"""Device driver abstractions and the state-tracking adapter wrapper."""

from __future__ import annotations

import uuid
from contextlib import suppress
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol, runtime_checkable

from mediadevkit.driver.state import State, transition


class DeviceType(str, Enum):
    """Human readable device category, also usable for filtering."""

    CAMERA = "camera"
    MICROPHONE = "microphone"
    SCREEN = "screen"


class Priority(float, Enum):
    """Device selection priority levels."""

    HIGH = 0.1
    NORMAL = 0.0
    LOW = -0.1


@dataclass(frozen=True)
class Info:
    """Descriptive information attached to a registered driver."""

    label: str = ""
    device_type: DeviceType | None = None
    priority: float = Priority.NORMAL


@runtime_checkable
class Adapter(Protocol):
    """What a device backend must provide."""

    def open(self) -> None: ...

    def close(self) -> None: ...

    def properties(self) -> list[Any]: ...


@runtime_checkable
class VideoRecorder(Protocol):
    """Something that can start recording video."""

    def video_record(self, props: Any) -> Any: ...


@runtime_checkable
class AudioRecorder(Protocol):
    """Something that can start recording audio."""

    def audio_record(self, props: Any) -> Any: ...


class Driver:
    """An adapter wrapped with an identity, descriptive info and a state."""

    def __init__(self, adapter: Adapter, info: Info) -> None:
        self._adapter = adapter
        self._info = info
        self._id = str(uuid.uuid4())
        self._state = State.CLOSED

    @property
    def id(self) -> str:
        return self._id

    @property
    def info(self) -> Info:
        return self._info

    @property
    def status(self) -> State:
        return self._state

    def open(self) -> None:
        """Open the underlying adapter; fails if already opened."""
        self._state = transition(self._state, State.OPENED, self._adapter.open)

    def close(self) -> None:
        """Close the underlying adapter."""
        self._state = transition(self._state, State.CLOSED, self._adapter.close)

    def properties(self) -> list[Any]:
        """Supported media properties, tagged with this driver's id.

        A closed driver knows nothing about its hardware and returns an
        empty list.
        """
        if self._state is State.CLOSED:
            return []
        props = list(self._adapter.properties())
        for media in props:
            media.device_id = self._id
        return props

    def _record(self, start: Callable[[Any], Any], props: Any) -> Any:
        result = None

        def action() -> None:
            nonlocal result
            result = start(props)

        try:
            self._state = transition(self._state, State.RUNNING, action)
        except Exception:
            with suppress(Exception):
                self.close()
            raise
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, info={self._info!r}, status={self._state.value!r})"


class VideoDriver(Driver):
    """A driver whose adapter records video."""

    def video_record(self, props: Any) -> Any:
        """Start recording; on any failure the driver is closed and the error re-raised."""
        return self._record(self._adapter.video_record, props)


class AudioDriver(Driver):
    """A driver whose adapter records audio."""

    def audio_record(self, props: Any) -> Any:
        """Start recording; on any failure the driver is closed and the error re-raised."""
        return self._record(self._adapter.audio_record, props)


def wrap_adapter(adapter: Adapter, info: Info) -> Driver:
    """Wrap an adapter into a video or audio driver with a fresh id."""
    if isinstance(adapter, VideoRecorder):
        return VideoDriver(adapter, info)
    if isinstance(adapter, AudioRecorder):
        return AudioDriver(adapter, info)
    raise TypeError("adapter has to be either VideoRecorder/AudioRecorder")