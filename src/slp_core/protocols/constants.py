# src/slp_core/protocols/constants.py
"""
SLP 协议族常量表 (Constants)

仅定义协议的结构性常量（包 ID、固定报文、魔数）。
"""

from enum import Enum


class SlpProtocol(Enum):
    """可用的 SLP 协议。"""

    def __str__(self) -> str:
        return self.value

    MODERN = "modern"
    """JSON SLP (Minecraft 1.7+)，带 VarInt 长度前缀的数据包。"""

    LEGACY = "legacy"
    """旧版 SLP (Minecraft 1.4 - 1.6)，UTF-16BE 纯文本响应。"""


# =========================================================================
# 新版协议 (Modern, 1.7+)
# =========================================================================
class PacketId:
    """Handshaking / Status 阶段的包 ID"""

    HANDSHAKE = 0x00  # 握手 (Client -> Server)
    STATUS_REQUEST = 0x00  # 状态请求 (Client -> Server)
    STATUS_RESPONSE = 0x00  # 状态响应 (Server -> Client)


# -1 表示“未知版本，由状态查询决定”
HANDSHAKE_PROTOCOL_VERSION = -1
# 握手后的下一状态: 1 = Status
NEXT_STATE_STATUS = 1

DEFAULT_PORT = 25565

# =========================================================================
# 旧版协议 (Legacy, 1.4 - 1.6)
# =========================================================================
LEGACY_PING_ID = 0xFE
LEGACY_PING_PAYLOAD = 0x01
LEGACY_PLUGIN_MESSAGE_ID = 0xFA
LEGACY_CHANNEL = "MC|PingHost"
# 剩余数据长度: 7 + 主机名长度 (此处主机名为空)
LEGACY_REST_LENGTH = 7
LEGACY_PROTOCOL_VERSION = 0x4A

LEGACY_REQUEST = (
    bytes([LEGACY_PING_ID, LEGACY_PING_PAYLOAD, LEGACY_PLUGIN_MESSAGE_ID])
    + len(LEGACY_CHANNEL).to_bytes(2, "big")
    + LEGACY_CHANNEL.encode("utf-16-be")
    + bytes([LEGACY_REST_LENGTH, LEGACY_PROTOCOL_VERSION])
    + b"\x00\x00"  # 主机名长度: 0
    + b"\x00\x00\x00\x00"  # 端口: 0
)

LEGACY_KICK_ID = 0xFF
# 0xFF + 2 字节长度，之后为 UTF-16BE 文本
LEGACY_HEADER_LEN = 3
LEGACY_MIN_REPLY_LEN = 4
LEGACY_MAGIC = "§1"
LEGACY_FIELD_SEPARATOR = "\x00"
LEGACY_FIELD_COUNT = 6
