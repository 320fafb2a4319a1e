"""Client-side authentication schemes for the RFB security handshake."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from Crypto.Cipher import DES

from mediadevkit.vnc.primitives import read_exact

_CHALLENGE_SIZE = 16


def _send(conn: Any, data: bytes) -> None:
    sendall = getattr(conn, "sendall", None)
    if sendall is not None:
        sendall(data)
    else:
        conn.write(data)


def reverse_bits(value: int) -> int:
    """Reverse the order of the 8 bits in ``value``."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"not a byte: {value}")
    return int(f"{value:08b}"[::-1], 2)


class ClientAuth(ABC):
    """A way of authenticating with a VNC server."""

    #: The byte the server uses to identify this scheme.
    security_type: ClassVar[int]

    @abstractmethod
    def handshake(self, conn: Any) -> None:
        """Run this scheme's part of the security handshake on ``conn``."""


class ClientAuthNone(ClientAuth):
    """The "None" security type: no authentication exchange."""

    security_type: ClassVar[int] = 1

    def handshake(self, conn: Any) -> None:
        """Nothing is exchanged."""
        return None


@dataclass
class PasswordAuth(ClientAuth):
    """VNC authentication: DES challenge-response with a password."""

    security_type: ClassVar[int] = 2

    password: str = field(repr=False)

    def handshake(self, conn: Any) -> None:
        """Read the server challenge and answer with its encryption."""
        challenge = read_exact(conn, _CHALLENGE_SIZE)
        _send(conn, self.encrypt(challenge))

    def encrypt(self, challenge: bytes) -> bytes:
        """Encrypt the 16-byte challenge with the bit-reversed password key."""
        if len(challenge) < _CHALLENGE_SIZE:
            raise ValueError(
                f"challenge too short: {len(challenge)} < {_CHALLENGE_SIZE}"
            )
        key_source = self.password.encode("utf-8")[:8]
        key = bytes(reverse_bits(b) for b in key_source).ljust(8, b"\x00")
        cipher = DES.new(key, DES.MODE_ECB)
        return cipher.encrypt(bytes(challenge[:_CHALLENGE_SIZE]))