# src/slp_core/protocols/framing.py
"""
新版协议数据包封装 (Packet Framer)

数据包结构: VarInt(长度) | VarInt(包 ID) | 载荷
其中长度 = 包 ID 的 VarInt 字节数 + 载荷字节数。
"""

import logging

from ..exceptions import ProtocolError
from ..streams import Read, Write
from ..varint import decode_varint, encode_varint, read_varint

logger = logging.getLogger(__name__)


def encode_packet(packet_id: int, payload: bytes = b"") -> bytes:
    """构建一个完整的数据包 (不含 I/O)。

    Args:
        packet_id: 包 ID。
        payload: 包载荷，可以为空。

    Returns:
        bytes: 长度前缀 + 包 ID + 载荷。
    """
    body = encode_varint(packet_id) + payload
    return encode_varint(len(body)) + body


def write_packet(packet_id: int, payload: bytes = b""):
    """[Operation] 将数据包写入流。"""
    packet = encode_packet(packet_id, payload)
    logger.debug("write_packet: id=%d, len=%d", packet_id, len(packet))
    yield Write(packet)


def read_packet():
    """[Operation] 从流中读取一个数据包。

    Returns:
        tuple[int, bytes]: (包 ID, 载荷)。

    Raises:
        ProtocolError: 声明长度为负、小于包 ID 本身，或流在声明长度前关闭。
        MalformedVarint: 长度或包 ID 的 VarInt 超过 5 字节。
    """
    length, _ = yield from read_varint()
    if length < 0:
        raise ProtocolError(f"数据包长度为负: {length}")

    body = yield Read(length)
    if len(body) < length:
        raise ProtocolError(f"数据包被截断: 声明 {length} 字节, 实际 {len(body)} 字节")

    # 长度为 0 或不足以容纳包 ID 时 decode_varint 会抛出 ProtocolError
    packet_id, id_len = decode_varint(body)
    logger.debug("read_packet: id=%d, len=%d", packet_id, length)
    return packet_id, body[id_len:]
