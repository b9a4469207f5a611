"""Wire format of the DeoVR remote-control protocol: length-prefixed JSON packets."""

from __future__ import annotations

import json
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, BinaryIO

_HEADER = struct.Struct("<I")


class PlayerState(IntEnum):
    """Playback state reported by the player."""

    PLAYING = 0
    PAUSED = 1
    FINISHED = 2


def _json_number(value: float) -> float | int:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


@dataclass
class DeoPacket:
    """One status or command packet; zero-valued fields are left off the wire."""

    path: str = ""
    duration: float = 0.0
    current_time: float = 0.0
    playback_speed: float = 0.0
    player_state: int = PlayerState.PLAYING

    def to_json(self) -> str:
        """Compact JSON body, omitting empty fields."""
        fields = (
            ("path", self.path),
            ("duration", self.duration),
            ("currentTime", self.current_time),
            ("playbackSpeed", self.playback_speed),
            ("playerState", int(self.player_state)),
        )
        body = {
            key: _json_number(value) if isinstance(value, float) else value
            for key, value in fields
            if value
        }
        return json.dumps(body, separators=(",", ":"))


def encode_packet(packet: DeoPacket) -> bytes:
    """Packet body preceded by its length as a little-endian 32-bit integer."""
    body = packet.to_json().encode("utf-8")
    return _HEADER.pack(len(body)) + body


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def decode_packet(data: bytes) -> DeoPacket:
    """Parse a packet body; fields that are missing or malformed keep their defaults."""
    try:
        parsed = json.loads(data)
    except (ValueError, UnicodeDecodeError):
        return DeoPacket()
    if not isinstance(parsed, dict):
        return DeoPacket()
    path = parsed.get("path", "")
    state = parsed.get("playerState", 0)
    if isinstance(state, bool) or not isinstance(state, int):
        state = 0
    return DeoPacket(
        path=path if isinstance(path, str) else "",
        duration=_number(parsed, "duration"),
        current_time=_number(parsed, "currentTime"),
        playback_speed=_number(parsed, "playbackSpeed"),
        player_state=state,
    )


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            raise EOFError(f"expected {size} bytes, got {size - remaining}")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_packet(stream: BinaryIO) -> DeoPacket | None:
    """Read one packet from ``stream``; return None for an empty (ping) packet."""
    (length,) = _HEADER.unpack(_read_exact(stream, _HEADER.size))
    if length == 0:
        return None
    return decode_packet(_read_exact(stream, length))