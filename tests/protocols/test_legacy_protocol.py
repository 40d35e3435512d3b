# Mirror tests for src/slp_core/protocols/legacy.py
import pytest

from slp_core.exceptions import InvalidResponse, ProtocolError
from slp_core.models import Chat
from slp_core.protocols import constants, legacy
from slp_core.streams import run_async, run_blocking

SAMPLE_STATUS = "§1\x009\x001.4\x00A Minecraft Server\x005\x0020"


def test_legacy_request_bytes():
    """固定请求必须与协议规定的 35 字节完全一致。"""
    expected = bytes.fromhex(
        "fe01fa"
        "000b"
        "004d0043007c00500069006e00670048006f00730074"  # MC|PingHost
        "07"
        "4a"
        "0000"
        "00000000"
    )
    assert len(constants.LEGACY_REQUEST) == 35
    assert constants.LEGACY_REQUEST == expected


def test_parse_legacy_status():
    response = legacy.parse_legacy_status(SAMPLE_STATUS)

    assert response.protocol == 9
    assert response.version == "1.4"
    assert response.description == Chat(text="A Minecraft Server")
    assert response.online_players == 5
    assert response.max_players == 20
    # 新版独有字段全部缺省
    assert response.favicon is None
    assert response.sample is None
    assert response.mod_info is None
    assert response.forge_data is None
    assert response.enforces_secure_chat is None
    assert response.previews_chat is None


@pytest.mark.parametrize(
    "text, description",
    [
        ("§1\x009\x001.4\x00motd\x005", "字段少于 6 个"),
        ("§1\x009\x001.4\x00motd\x005\x0020\x00extra", "字段多于 6 个"),
        ("§2\x009\x001.4\x00motd\x005\x0020", "魔数不匹配"),
        ("A Minecraft Server§5§20", "Beta 格式"),
        ("§1\x00x\x001.4\x00motd\x005\x0020", "协议号非数字"),
        ("§1\x009\x001.4\x00motd\x00-5\x0020", "在线人数为负"),
        ("§1\x009\x001.4\x00motd\x005\x00 20", "带空白的数字"),
        ("§1\x0099999999999\x001.4\x00motd\x005\x0020", "协议号超出 32 位"),
        ("", "空字符串"),
    ],
)
def test_parse_legacy_status_invalid(text, description):
    with pytest.raises(InvalidResponse):
        legacy.parse_legacy_status(text)


def test_decode_legacy_reply(legacy_reply):
    assert legacy.decode_legacy_reply(legacy_reply(SAMPLE_STATUS)) == SAMPLE_STATUS


def test_decode_legacy_reply_ignores_odd_trailing_byte(legacy_reply):
    data = legacy_reply("§1") + b"\x00"
    assert legacy.decode_legacy_reply(data) == "§1"


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\xff\x00\x01",  # 不足 4 字节
        b"\xfe\x00\x01\x00\xa7",  # 首字节不是 0xFF
    ],
)
def test_decode_legacy_reply_protocol_errors(data):
    with pytest.raises(ProtocolError):
        legacy.decode_legacy_reply(data)


def test_decode_legacy_reply_bad_utf16():
    # 孤立的高位代理项
    with pytest.raises(InvalidResponse):
        legacy.decode_legacy_reply(b"\xff\x00\x01\xd8\x00")


def test_exchange_success(fake_stream, legacy_reply):
    reply = legacy_reply(SAMPLE_STATUS)
    stream = fake_stream(reply)
    proto = legacy.LegacyProtocol("localhost", 25565)

    response = run_blocking(proto.exchange(), stream)

    assert bytes(stream.written) == constants.LEGACY_REQUEST
    assert stream.flush_count == 1
    assert response.version == "1.4"
    assert response.raw == reply


@pytest.mark.asyncio
async def test_exchange_async(fake_async_stream, legacy_reply):
    stream = fake_async_stream(legacy_reply(SAMPLE_STATUS))
    proto = legacy.LegacyProtocol("localhost", 25565)

    response = await run_async(proto.exchange(), stream)

    assert response.max_players == 20


def test_exchange_empty_reply(fake_stream):
    proto = legacy.LegacyProtocol("localhost", 25565)
    with pytest.raises(ProtocolError):
        run_blocking(proto.exchange(), fake_stream(b""))
