# Mirror tests for src/slp_core/protocols/framing.py
import pytest

from slp_core.exceptions import MalformedVarint, ProtocolError
from slp_core.protocols.framing import encode_packet, read_packet, write_packet
from slp_core.streams import run_blocking
from slp_core.varint import encode_varint


def test_encode_empty_packet():
    # 长度 1 (仅包 ID) + 包 ID 0
    assert encode_packet(0) == b"\x01\x00"


def test_encode_packet_layout():
    pkt = encode_packet(0x7F, b"abc")
    assert pkt == b"\x04" + b"\x7f" + b"abc"


def test_encode_packet_multibyte_id():
    pkt = encode_packet(300, b"x")
    assert pkt == b"\x03" + b"\xac\x02" + b"x"


@pytest.mark.parametrize(
    "packet_id, payload",
    [
        (0, b""),
        (0, b"\x00" * 3),
        (1, b"payload"),
        (300, b"\xff" * 200),
        (-1, b"negative id"),
    ],
)
def test_packet_round_trip(packet_id, payload, fake_stream):
    stream = fake_stream()
    run_blocking(write_packet(packet_id, payload), stream)

    reader = fake_stream(bytes(stream.written))
    assert run_blocking(read_packet(), reader) == (packet_id, payload)
    assert not reader.incoming


def test_read_packet_leaves_following_data(fake_stream):
    stream = fake_stream(encode_packet(0, b"ab") + encode_packet(1))
    assert run_blocking(read_packet(), stream) == (0, b"ab")
    assert run_blocking(read_packet(), stream) == (1, b"")


@pytest.mark.parametrize(
    "data, description",
    [
        (b"\x00", "长度为 0，容纳不下包 ID"),
        (b"\x01\x80", "长度 1，包 ID VarInt 未结束"),
        (b"\x05\x00ab", "声明 5 字节，只有 3 字节"),
        (encode_varint(-5) + b"\x00", "长度为负"),
    ],
)
def test_read_packet_protocol_errors(data, description, fake_stream):
    with pytest.raises(ProtocolError):
        run_blocking(read_packet(), fake_stream(data))


def test_read_packet_malformed_length(fake_stream):
    with pytest.raises(MalformedVarint):
        run_blocking(read_packet(), fake_stream(b"\xff" * 6))
