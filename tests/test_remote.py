import io
import json

import pytest

from vrshelf.remote import (
    DeoPacket,
    PlayerState,
    decode_packet,
    encode_packet,
    read_packet,
)


def test_empty_packet_wire_bytes():
    data = encode_packet(DeoPacket())
    assert data[4:] == b"{}"
    assert int.from_bytes(data[:4], "little") == len(data) - 4


def test_to_json_omits_zero_fields():
    packet = DeoPacket(path="/f/1", current_time=12.5)
    assert set(json.loads(packet.to_json())) == {"path", "currentTime"}


def test_to_json_integral_float_is_compact():
    assert DeoPacket(path="x", duration=10.0).to_json() == '{"path":"x","duration":10}'


def test_round_trip():
    packet = DeoPacket(
        path="http://host/api/dms/file/3",
        duration=600.0,
        current_time=42.25,
        playback_speed=1.5,
        player_state=PlayerState.PAUSED,
    )
    assert decode_packet(encode_packet(packet)[4:]) == packet


def test_decode_player_state():
    packet = decode_packet(b'{"path":"a","playerState":1}')
    assert packet.player_state == PlayerState.PAUSED
    assert packet.path == "a"


def test_decode_malformed_gives_defaults():
    assert decode_packet(b"not json") == DeoPacket()
    assert decode_packet(b"[1,2]") == DeoPacket()


def test_read_packet_from_stream():
    packet = DeoPacket(path="p", duration=5.0)
    stream = io.BytesIO(encode_packet(packet) + encode_packet(DeoPacket(path="q")))
    assert read_packet(stream) == packet
    assert read_packet(stream).path == "q"


def test_read_packet_zero_length_is_none():
    assert read_packet(io.BytesIO(b"\x00\x00\x00\x00")) is None


def test_read_packet_truncated_raises():
    data = encode_packet(DeoPacket(path="long path"))
    with pytest.raises(EOFError):
        read_packet(io.BytesIO(data[:-3]))
    with pytest.raises(EOFError):
        read_packet(io.BytesIO(b"\x01"))