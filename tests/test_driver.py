from dataclasses import dataclass

import pytest

from mediadevkit.driver.driver import (
    AudioDriver,
    DeviceType,
    Info,
    Priority,
    VideoDriver,
    wrap_adapter,
)
from mediadevkit.driver.state import InvalidStateError, State


class RecordError(Exception):
    pass


@dataclass
class Media:
    device_id: str = ""


class AdapterMock:
    def __init__(self):
        self.closed_count = 0

    def open(self):
        return None

    def close(self):
        self.closed_count += 1

    def properties(self):
        return [Media()]


class VideoAdapterMock(AdapterMock):
    def video_record(self, props):
        return "video-reader"


class VideoAdapterBrokenMock(AdapterMock):
    def video_record(self, props):
        raise RecordError("failed to start recording")


class AudioAdapterMock(AdapterMock):
    def audio_record(self, props):
        return "audio-reader"


class AudioAdapterBrokenMock(AdapterMock):
    def audio_record(self, props):
        raise RecordError("failed to start recording")


def test_video_wrapper_state():
    d = wrap_adapter(VideoAdapterMock(), Info())
    assert isinstance(d, VideoDriver)
    assert d.properties() == []

    with pytest.raises(InvalidStateError):
        d.video_record(Media())
    assert d.status is State.CLOSED

    d.open()
    assert d.status is State.OPENED
    assert d.video_record(Media()) == "video-reader"
    assert d.status is State.RUNNING


def test_video_wrapper_with_broken_recorder_state():
    adapter = VideoAdapterBrokenMock()
    d = wrap_adapter(adapter, Info())
    d.open()
    with pytest.raises(RecordError, match="failed to start recording"):
        d.video_record(Media())
    assert d.status is State.CLOSED
    assert adapter.closed_count == 1


def test_audio_wrapper_state():
    d = wrap_adapter(AudioAdapterMock(), Info())
    assert isinstance(d, AudioDriver)
    assert d.properties() == []

    with pytest.raises(InvalidStateError):
        d.audio_record(Media())

    d.open()
    assert d.audio_record(Media()) == "audio-reader"
    assert d.status is State.RUNNING


def test_audio_wrapper_with_broken_recorder_state():
    d = wrap_adapter(AudioAdapterBrokenMock(), Info())
    d.open()
    with pytest.raises(RecordError):
        d.audio_record(Media())
    assert d.status is State.CLOSED


def test_properties_tagged_with_id_when_open():
    d = wrap_adapter(VideoAdapterMock(), Info())
    d.open()
    props = d.properties()
    assert len(props) == 1
    assert props[0].device_id == d.id


def test_open_twice_fails():
    d = wrap_adapter(VideoAdapterMock(), Info())
    d.open()
    with pytest.raises(InvalidStateError, match="already opened"):
        d.open()
    assert d.status is State.OPENED


def test_record_twice_fails_and_closes():
    d = wrap_adapter(VideoAdapterMock(), Info())
    d.open()
    d.video_record(Media())
    with pytest.raises(InvalidStateError, match="already running"):
        d.video_record(Media())
    assert d.status is State.CLOSED


def test_ids_are_unique():
    a = wrap_adapter(VideoAdapterMock(), Info())
    b = wrap_adapter(VideoAdapterMock(), Info())
    assert a.id != b.id
    assert len(a.id) == 36


def test_info_kept():
    info = Info(label="cam", device_type=DeviceType.CAMERA, priority=Priority.HIGH)
    d = wrap_adapter(VideoAdapterMock(), info)
    assert d.info == info
    assert d.info.priority == pytest.approx(0.1)


def test_non_recorder_adapter_rejected():
    with pytest.raises(TypeError):
        wrap_adapter(AdapterMock(), Info())


def test_video_preferred_over_audio():
    class Both(VideoAdapterMock):
        def audio_record(self, props):
            return "audio-reader"

    d = wrap_adapter(Both(), Info())
    assert isinstance(d, VideoDriver)
    d.open()
    assert d.video_record(Media()) == "video-reader"
    assert d.status is State.RUNNING