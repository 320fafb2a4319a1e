"""A VNC (RFB protocol) client connection."""

from __future__ import annotations

import re
import socket
import struct
import threading
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any, Sequence

from mediadevkit.vnc.auth import ClientAuth, ClientAuthNone
from mediadevkit.vnc.encoding import Encoding
from mediadevkit.vnc.pixel_format import PixelFormat, read_pixel_format, write_pixel_format
from mediadevkit.vnc.primitives import ButtonMask, Color, read_exact
from mediadevkit.vnc.server_messages import (
    BellMessage,
    FramebufferUpdateMessage,
    ServerCutTextMessage,
    ServerMessage,
    SetColorMapEntriesMessage,
)

_PROTOCOL_VERSION_LEN = 12
_VERSION_RE = re.compile(rb"RFB (\d+)\.(\d+)\n")
_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")


class ProtocolError(Exception):
    """Raised when the server violates or refuses the RFB handshake."""


@dataclass
class ClientConfig:
    """Settings for a client connection; do not change after connecting.

    ``auth`` lists acceptable schemes in order of preference (None means
    no authentication). Messages read from the server are put on
    ``server_message_queue`` if one is given, otherwise discarded.
    ``server_messages`` adds message types beyond the standard ones.
    """

    auth: Sequence[ClientAuth] | None = None
    exclusive: bool = False
    server_message_queue: Any = None
    server_messages: Sequence[ServerMessage] = field(default_factory=tuple)


def _pack(fmt: str, *values: Any) -> bytes:
    try:
        return struct.pack(fmt, *values)
    except struct.error as exc:
        raise ValueError(f"value out of range: {exc}") from None


def parse_protocol_version(data: bytes) -> tuple[int, int]:
    """Parse a ProtocolVersion message into ``(major, minor)``."""
    if len(data) < _PROTOCOL_VERSION_LEN:
        raise ProtocolError(
            f"ProtocolVersion message too short ({len(data)} < {_PROTOCOL_VERSION_LEN})"
        )
    match = _VERSION_RE.match(bytes(data))
    if match is None:
        raise ProtocolError("error parsing ProtocolVersion.")
    return int(match.group(1)), int(match.group(2))


class ClientConn:
    """A connection to a VNC server over a connected socket."""

    def __init__(self, sock: socket.socket, config: ClientConfig) -> None:
        self._sock = sock
        self._config = config
        #: Color map used when the pixel format is not true color.
        self.color_map: list[Color] = [Color()] * 256
        #: Encodings the client accepts; change with ``set_encodings``.
        self.encodings: list[Encoding] = []
        self.frame_buffer_width = 0
        self.frame_buffer_height = 0
        self.desktop_name = ""
        self.pixel_format = PixelFormat()

    def close(self) -> None:
        """Close the underlying socket."""
        with suppress(OSError):
            self._sock.shutdown(socket.SHUT_RDWR)
        with suppress(OSError):
            self._sock.close()

    def cut_text(self, text: str) -> None:
        """Send new cut-buffer text; it must contain only Latin-1 characters."""
        for char in text:
            if ord(char) > 0xFF:
                raise ValueError(f"Character '{ord(char)}' is not valid Latin-1")
        self._sock.sendall(_pack(">BxxxI", 6, len(text)) + text.encode("latin-1"))

    def framebuffer_update_request(
        self, incremental: bool, x: int, y: int, width: int, height: int
    ) -> None:
        """Ask the server for a framebuffer update of the given area."""
        self._sock.sendall(_pack(">BBHHHH", 3, int(bool(incremental)), x, y, width, height))

    def key_event(self, keysym: int, down: bool) -> None:
        """Send a key press (``down``) or release for an X keysym."""
        self._sock.sendall(_pack(">BBxxI", 4, int(bool(down)), keysym))

    def pointer_event(self, mask: ButtonMask | int, x: int, y: int) -> None:
        """Send the pointer position and the set of pressed buttons."""
        self._sock.sendall(_pack(">BBHH", 5, int(mask), x, y))

    def set_encodings(self, encodings: Sequence[Encoding]) -> None:
        """Tell the server which encodings the client accepts."""
        encodings = list(encodings)
        data = _pack(">BBH", 2, 0, len(encodings))
        data += b"".join(_pack(">i", enc.type) for enc in encodings)
        self._sock.sendall(data)
        self.encodings = encodings

    def set_pixel_format(self, fmt: PixelFormat) -> None:
        """Ask the server to send pixels in ``fmt``; resets the color map."""
        self._sock.sendall(b"\x00\x00\x00\x00" + write_pixel_format(fmt))
        self.color_map = [Color()] * 256

    def _read_error_reason(self) -> str:
        try:
            (length,) = _U32.unpack(read_exact(self._sock, _U32.size))
            return read_exact(self._sock, length).decode("utf-8", errors="replace")
        except (OSError, EOFError):
            return "<error>"

    def _handshake(self) -> None:
        major, minor = parse_protocol_version(read_exact(self._sock, _PROTOCOL_VERSION_LEN))
        if major < 3:
            raise ProtocolError(f"unsupported major version, less than 3: {major}")
        if minor < 3:
            raise ProtocolError(f"unsupported minor version, less than 3: {minor}")

        if minor < 8:
            self._sock.sendall(b"RFB 003.003\n")
            (count,) = _U32.unpack(read_exact(self._sock, _U32.size))
            if count == 0:
                raise ProtocolError(f"no security types: {self._read_error_reason()}")
        else:
            self._sock.sendall(b"RFB 003.008\n")
            self._security_handshake()

        shared = 0 if self._config.exclusive else 1
        self._sock.sendall(_U8.pack(shared))

        self.frame_buffer_width, self.frame_buffer_height = struct.unpack(
            ">HH", read_exact(self._sock, 4)
        )
        self.pixel_format = read_pixel_format(self._sock)
        (name_length,) = _U32.unpack(read_exact(self._sock, _U32.size))
        self.desktop_name = read_exact(self._sock, name_length).decode(
            "utf-8", errors="replace"
        )

    def _security_handshake(self) -> None:
        (count,) = _U8.unpack(read_exact(self._sock, _U8.size))
        if count == 0:
            raise ProtocolError(f"no security types: {self._read_error_reason()}")
        offered = list(read_exact(self._sock, count))

        candidates = self._config.auth
        if candidates is None:
            candidates = [ClientAuthNone()]
        auth = next((a for a in candidates if a.security_type in offered), None)
        if auth is None:
            raise ProtocolError(
                f"no suitable auth schemes found. server supported: {offered!r}"
            )

        self._sock.sendall(_U8.pack(auth.security_type))
        auth.handshake(self._sock)

        (result,) = _U32.unpack(read_exact(self._sock, _U32.size))
        if result == 1:
            raise ProtocolError(f"security handshake failed: {self._read_error_reason()}")

    def _main_loop(self) -> None:
        handlers: dict[int, ServerMessage] = {
            msg.type: msg
            for msg in (
                FramebufferUpdateMessage(),
                SetColorMapEntriesMessage(),
                BellMessage(),
                ServerCutTextMessage(),
            )
        }
        for msg in self._config.server_messages or ():
            handlers[msg.type] = msg

        try:
            while True:
                try:
                    (message_type,) = _U8.unpack(read_exact(self._sock, _U8.size))
                    handler = handlers.get(message_type)
                    if handler is None:
                        break
                    parsed = handler.read(self, self._sock)
                except Exception:
                    break
                queue = self._config.server_message_queue
                if queue is not None:
                    queue.put(parsed)
        finally:
            self.close()


def client(sock: socket.socket, config: ClientConfig | None = None) -> ClientConn:
    """Perform the RFB handshake on ``sock`` and start reading server messages.

    On a failed handshake the socket is closed and the error re-raised.
    Server messages are read on a background thread.
    """
    conn = ClientConn(sock, config if config is not None else ClientConfig())
    try:
        conn._handshake()
    except BaseException:
        conn.close()
        raise
    threading.Thread(target=conn._main_loop, name="vnc-client", daemon=True).start()
    return conn