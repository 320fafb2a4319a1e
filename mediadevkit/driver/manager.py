"""Registry of drivers and predicates for querying it."""

from __future__ import annotations

from typing import Callable

from mediadevkit.driver.driver import (
    Adapter,
    AudioRecorder,
    DeviceType,
    Driver,
    Info,
    VideoRecorder,
    wrap_adapter,
)

FilterFn = Callable[[Driver], bool]


def filter_video_recorder() -> FilterFn:
    """Match drivers that record video."""
    return lambda d: isinstance(d, VideoRecorder)


def filter_audio_recorder() -> FilterFn:
    """Match drivers that record audio."""
    return lambda d: isinstance(d, AudioRecorder)


def filter_id(device_id: str) -> FilterFn:
    """Match the driver with the given id."""
    return lambda d: d.id == device_id


def filter_device_type(device_type: DeviceType) -> FilterFn:
    """Match drivers of the given device type."""
    return lambda d: d.info.device_type == device_type


def filter_and(*args: FilterFn) -> FilterFn:
    """Match drivers accepted by every given filter."""
    return lambda d: all(f(d) for f in args)


def filter_not(predicate: FilterFn) -> FilterFn:
    """Match drivers the given filter rejects."""
    return lambda d: not predicate(d)


class Manager:
    """Holds registered drivers keyed by id."""

    def __init__(self) -> None:
        self._drivers: dict[str, Driver] = {}

    def register(self, adapter: Adapter, info: Info) -> Driver:
        """Wrap ``adapter`` and make it discoverable; returns the new driver."""
        driver = wrap_adapter(adapter, info)
        self._drivers[driver.id] = driver
        return driver

    def query(self, predicate: FilterFn) -> list[Driver]:
        """Return every registered driver accepted by ``predicate``."""
        return [d for d in self._drivers.values() if predicate(d)]


_manager = Manager()


def get_manager() -> Manager:
    """Return the process-wide manager."""
    return _manager