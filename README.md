# mediadevkit

Building blocks for capturing video and audio from media devices:

- **Drivers** (`mediadevkit.driver`): wrap a device adapter in a driver that
  tracks its state (closed, opened, running), register it with the shared
  manager, and query registered drivers with composable filters.
- **Frame decoders** (`mediadevkit.frame`): turn raw camera frames into
  images. Decoders exist for I420, NV21, NV12, YUY2 (also named YUYV), UYVY,
  MJPEG and Z16 depth frames.
- **VNC client** (`mediadevkit.vnc`): an RFB client with raw, zlib and cursor
  encodings, supporting no authentication and VNC password authentication.

## Installation

```
pip install mediadevkit
```

## Drivers

An adapter is any object with `open()`, `close()` and `properties()`, plus
either `video_record(props)` or `audio_record(props)`. `wrap_adapter` (and
`Manager.register`, which calls it) turns it into a `VideoDriver` or an
`AudioDriver` with a fresh random id; an adapter with neither recording
method raises `TypeError`.

```python
from mediadevkit.driver.driver import DeviceType, Info, Priority
from mediadevkit.driver.manager import (
    filter_and, filter_device_type, filter_video_recorder, get_manager,
)

manager = get_manager()
manager.register(
    my_camera_adapter,
    Info(label="front", device_type=DeviceType.CAMERA, priority=Priority.HIGH),
)

cameras = manager.query(
    filter_and(filter_video_recorder(), filter_device_type(DeviceType.CAMERA))
)
camera = cameras[0]
camera.open()
reader = camera.video_record(camera.properties()[0])
```

Other filters are `filter_audio_recorder()`, `filter_id(device_id)` and
`filter_not(predicate)`; any callable taking a driver and returning a bool
works as a filter.

A driver moves through `State.CLOSED`, `State.OPENED` and `State.RUNNING`
(see `mediadevkit.driver.state`). Opening a driver that is not closed, or
recording on one that is closed or already running, raises
`InvalidStateError`. If starting a recording fails for any reason, the
driver is closed and the error re-raised. `properties()` returns an empty
list while the driver is closed; otherwise it returns the adapter's
properties with each one's `device_id` set to the driver's id.

## Decoding frames

```python
from mediadevkit.frame.decode import Format, new_decoder

decoder = new_decoder(Format.YUY2)
image = decoder.decode(raw_bytes, 640, 480)
```

The YUV decoders return a `YCbCrImage` with `y`, `cb` and `cr` planes, their
strides and the `SubsampleRatio` (4:2:0 for I420, NV21 and NV12; 4:2:2 for
YUY2 and UYVY). Z16 frames decode to a `Gray16Image`, whose `at(x, y)` gives
the 16-bit depth value. MJPEG frames decode to a Pillow image.

A YUV frame shorter than its layout needs, or a Z16 frame of any length
other than `2 * width * height`, raises `FrameLengthError`. Asking
`new_decoder` for a format without a decoder (such as `Format.RGBA` or
`Format.I444`) raises `ValueError`.

## VNC

```python
import queue
import socket

from mediadevkit.vnc.auth import PasswordAuth
from mediadevkit.vnc.client import ClientConfig, client
from mediadevkit.vnc.encoding import CursorEncoding, RawEncoding, ZlibEncoding

messages = queue.Queue()
password = "password"
sock = socket.create_connection(("localhost", 5900))
conn = client(sock, ClientConfig(auth=[PasswordAuth(password=password)],
                                 server_message_queue=messages))
conn.set_encodings([ZlibEncoding(), RawEncoding(), CursorEncoding()])
conn.framebuffer_update_request(False, 0, 0, conn.frame_buffer_width, conn.frame_buffer_height)
update = messages.get()
```

`client` performs the handshake (protocol 3.3, or 3.8 with security type
negotiation) and raises `ProtocolError` if the server refuses it, closing the
socket. It then reads server messages on a background thread and puts each
parsed message on `server_message_queue`, if one is given; the thread closes
the connection when the stream ends or a message cannot be parsed. The
messages are `FramebufferUpdateMessage`, `SetColorMapEntriesMessage` (which
also updates `conn.color_map`), `BellMessage` and `ServerCutTextMessage`.

Client-to-server messages are `key_event`, `pointer_event` (with
`ButtonMask` flags), `cut_text` (Latin-1 only), `set_encodings`,
`set_pixel_format` and `framebuffer_update_request`. Decoded rectangles hold
pixels in `raw_pixel` as packed 32-bit values with red in the low byte and
alpha 0xFF in the high byte.

## What is not included

The package provides no device backends: there is no camera, microphone or
screen capture adapter, and no driver that feeds VNC framebuffer updates into
video frames. Adapters for real hardware have to be supplied by the user and
registered with the manager. There is no command-line program.

## Running the tests

```
pip install -e .[test]
pytest
```