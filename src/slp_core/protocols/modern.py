# src/slp_core/protocols/modern.py
"""
新版 SLP 协议 (Minecraft 1.7+)

交互流程:
1. Handshake (0x00): 协议版本 -1 | 主机名 | 端口 | 下一状态 1 (Status)
2. Status Request (0x00): 空载荷
3. Status Response (0x00): VarInt(JSON 长度) | UTF-8 JSON
"""

import struct

from ..exceptions import ProtocolError
from ..models import Response
from ..streams import Flush, Operation
from ..varint import decode_varint, encode_varint
from ..wire import decode_status
from .base import BaseProtocol
from .constants import (
    HANDSHAKE_PROTOCOL_VERSION,
    NEXT_STATE_STATUS,
    PacketId,
    SlpProtocol,
)
from .framing import encode_packet, read_packet, write_packet


def build_handshake_payload(hostname: str, port: int) -> bytes:
    """构建 Handshake 包的载荷。

    主机名与端口即使被官方服务端忽略也要如实填写，
    部分第三方服务端 (如代理) 依赖它们做虚拟主机路由。

    Args:
        hostname: 服务器主机名。
        port: 服务器端口 (0 - 65535)。

    Returns:
        bytes: VarInt(-1) | VarInt(len) + 主机名 | uint16-BE 端口 | VarInt(1)
    """
    host_bytes = hostname.encode("utf-8")
    return (
        encode_varint(HANDSHAKE_PROTOCOL_VERSION)
        + encode_varint(len(host_bytes))
        + host_bytes
        + struct.pack(">H", port)
        + encode_varint(NEXT_STATE_STATUS)
    )


def build_status_request(hostname: str, port: int) -> bytes:
    """构建完整的请求字节流 (Handshake 包 + Status Request 包)。"""
    return encode_packet(
        PacketId.HANDSHAKE, build_handshake_payload(hostname, port)
    ) + encode_packet(PacketId.STATUS_REQUEST)


def extract_status_json(payload: bytes) -> bytes:
    """从 Status Response 载荷中取出 JSON 字节。

    Args:
        payload: 去掉包 ID 后的载荷。

    Returns:
        bytes: 恰好为声明长度的 JSON 字节。

    Raises:
        ProtocolError: 长度为负或载荷不足。
        MalformedVarint: 长度 VarInt 超长。
    """
    json_len, offset = decode_varint(payload)
    if json_len < 0:
        raise ProtocolError(f"JSON 长度为负: {json_len}")

    data = payload[offset : offset + json_len]
    if len(data) < json_len:
        raise ProtocolError(f"JSON 被截断: 声明 {json_len} 字节, 实际 {len(data)} 字节")
    return data


class ModernProtocol(BaseProtocol):
    """新版 (JSON) SLP 协议策略。"""

    protocol = SlpProtocol.MODERN

    def exchange(self) -> Operation[Response]:
        """发送 Handshake + Status Request，读取并解码一个 Status Response。

        Raises:
            ProtocolError: 响应包 ID 非 0x00 或帧结构错误。
            InvalidResponse: JSON 无法解析或 Favicon 非法。
        """
        self.logger.debug(f"发送 Handshake: {self.hostname}:{self.port}")
        yield from write_packet(
            PacketId.HANDSHAKE, build_handshake_payload(self.hostname, self.port)
        )
        yield from write_packet(PacketId.STATUS_REQUEST)
        yield Flush()

        packet_id, payload = yield from read_packet()
        if packet_id != PacketId.STATUS_RESPONSE:
            raise ProtocolError(f"状态响应包 ID 不匹配: {packet_id}")

        data = extract_status_json(payload)
        self.logger.debug(f"收到状态 JSON: {len(data)} 字节")
        return decode_status(data)
