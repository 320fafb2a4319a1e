"""Messages a VNC server sends to its client."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from mediadevkit.vnc.encoding import RawEncoding
from mediadevkit.vnc.primitives import Color, Rectangle, read_exact

_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_RECT_HEADER = struct.Struct(">HHHHi")
_COLOR = struct.Struct(">HHH")


class ServerMessage(ABC):
    """A message sent from the server to the client.

    ``read`` is called after the message type byte has been consumed and
    returns a new message holding the parsed contents.
    """

    #: The message type byte used on the wire.
    type: ClassVar[int]

    @abstractmethod
    def read(self, conn: Any, stream: Any) -> ServerMessage:
        """Read the body of this message from ``stream``."""


@dataclass
class FramebufferUpdateMessage(ServerMessage):
    """A sequence of rectangles of pixel data for the client's framebuffer."""

    type: ClassVar[int] = 0

    rectangles: list[Rectangle] = field(default_factory=list)

    def read(self, conn: Any, stream: Any) -> FramebufferUpdateMessage:
        """Read every rectangle, decoding each with the encoding it names.

        The encodings known are those set on ``conn`` plus raw encoding,
        which is always supported. An unknown encoding raises ValueError.
        """
        read_exact(stream, 1)
        (count,) = _U16.unpack(read_exact(stream, _U16.size))

        encodings = {enc.type: enc for enc in conn.encodings}
        encodings[RawEncoding.type] = RawEncoding()

        rectangles: list[Rectangle] = []
        for _ in range(count):
            x, y, width, height, enc_type = _RECT_HEADER.unpack(
                read_exact(stream, _RECT_HEADER.size)
            )
            encoding = encodings.get(enc_type)
            if encoding is None:
                raise ValueError(f"unsupported encoding type: {enc_type}")
            rect = Rectangle(x=x, y=y, width=width, height=height)
            rect.enc = encoding.read(conn, rect, stream)
            rectangles.append(rect)
        return FramebufferUpdateMessage(rectangles)


@dataclass
class SetColorMapEntriesMessage(ServerMessage):
    """New color map values; reading it also updates the connection's map."""

    type: ClassVar[int] = 1

    first_color: int = 0
    colors: list[Color] = field(default_factory=list)

    def read(self, conn: Any, stream: Any) -> SetColorMapEntriesMessage:
        """Read the entries and store them in ``conn.color_map``."""
        read_exact(stream, 1)
        (first_color,) = _U16.unpack(read_exact(stream, _U16.size))
        (count,) = _U16.unpack(read_exact(stream, _U16.size))

        colors: list[Color] = []
        for offset in range(count):
            color = Color(*_COLOR.unpack(read_exact(stream, _COLOR.size)))
            index = (first_color + offset) & 0xFFFF
            if index >= len(conn.color_map):
                raise ValueError(f"color map index out of range: {index}")
            conn.color_map[index] = color
            colors.append(color)
        return SetColorMapEntriesMessage(first_color=first_color, colors=colors)


@dataclass
class BellMessage(ServerMessage):
    """The client should sound an audible bell."""

    type: ClassVar[int] = 2

    def read(self, conn: Any, stream: Any) -> BellMessage:
        """A bell has no body; nothing is read."""
        return BellMessage()


@dataclass
class ServerCutTextMessage(ServerMessage):
    """The server has new text in its cut buffer."""

    type: ClassVar[int] = 3

    text: str = ""

    def read(self, conn: Any, stream: Any) -> ServerCutTextMessage:
        """Read the Latin-1 text that follows the padding and length."""
        read_exact(stream, 3)
        (length,) = _U32.unpack(read_exact(stream, _U32.size))
        text = read_exact(stream, length).decode("latin-1")
        return ServerCutTextMessage(text=text)