# src/slp_core/protocols/legacy.py
"""
旧版 SLP 协议 (Minecraft 1.4 - 1.6)

请求为固定的 35 字节报文；服务器以 0xFF (Kick) 包回复后关闭连接：
0xFF | uint16-BE 长度 | UTF-16BE 文本
文本以 NUL 分隔: §1 \\0 协议号 \\0 版本 \\0 MOTD \\0 在线人数 \\0 最大人数
"""

import logging
import re

from ..exceptions import InvalidResponse, ProtocolError
from ..models import Chat, Response
from ..streams import Flush, Operation, ReadToEnd, Write
from ..varint import INT32_MAX, INT32_MIN
from .base import BaseProtocol
from .constants import (
    LEGACY_FIELD_COUNT,
    LEGACY_FIELD_SEPARATOR,
    LEGACY_HEADER_LEN,
    LEGACY_KICK_ID,
    LEGACY_MAGIC,
    LEGACY_MIN_REPLY_LEN,
    LEGACY_REQUEST,
    SlpProtocol,
)

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_COUNT_MAX = (1 << 63) - 1


def decode_legacy_reply(data: bytes) -> str:
    """校验 Kick 包头并解码 UTF-16BE 文本。

    末尾多出的单个字节 (不足一个 UTF-16 码元) 会被忽略。

    Raises:
        ProtocolError: 数据不足 4 字节或首字节不是 0xFF。
        InvalidResponse: UTF-16BE 解码失败 (如孤立代理项)。
    """
    if len(data) < LEGACY_MIN_REPLY_LEN or data[0] != LEGACY_KICK_ID:
        head = data[:1].hex() or "<empty>"
        raise ProtocolError(f"旧版响应无效: len={len(data)}, head={head}")

    body = data[LEGACY_HEADER_LEN:]
    if len(body) % 2:
        logger.debug("旧版响应末尾多出 1 字节，已忽略")
        body = body[:-1]
    try:
        return body.decode("utf-16-be")
    except UnicodeDecodeError as e:
        raise InvalidResponse(f"旧版响应 UTF-16BE 解码失败: {e}") from e


def _parse_int(value: str, name: str, minimum: int, maximum: int) -> int:
    if not _INT_PATTERN.fullmatch(value):
        raise InvalidResponse(f"旧版响应字段 {name} 不是整数: {value!r}")
    number = int(value)
    if not minimum <= number <= maximum:
        raise InvalidResponse(f"旧版响应字段 {name} 超出范围: {number}")
    return number


def parse_legacy_status(text: str, raw: bytes = b"") -> Response:
    """将 NUL 分隔的旧版状态文本解析为 Response。

    Args:
        text: 已解码的响应文本。
        raw: 原始响应字节，保存在 Response.raw。

    Returns:
        Response: description 仅含 MOTD 文本，新版独有字段均为 None。

    Raises:
        InvalidResponse: 字段数量不是 6、魔数不是 "§1" 或数字字段无法解析。
    """
    fields = text.split(LEGACY_FIELD_SEPARATOR)
    if len(fields) != LEGACY_FIELD_COUNT:
        raise InvalidResponse(
            f"旧版响应字段数量错误: 期望 {LEGACY_FIELD_COUNT}, 实际 {len(fields)}"
        )

    magic, protocol, version, motd, online, maximum = fields
    if magic != LEGACY_MAGIC:
        raise InvalidResponse(f"旧版响应魔数不匹配: {magic!r}")

    return Response(
        version=version,
        protocol=_parse_int(protocol, "protocol", INT32_MIN, INT32_MAX),
        max_players=_parse_int(maximum, "max_players", 0, _COUNT_MAX),
        online_players=_parse_int(online, "online_players", 0, _COUNT_MAX),
        description=Chat(text=motd),
        raw=bytes(raw),
    )


class LegacyProtocol(BaseProtocol):
    """旧版 (UTF-16BE) SLP 协议策略。

    固定请求中主机名与端口为空，因此 hostname/port 仅用于日志。
    """

    protocol = SlpProtocol.LEGACY

    def exchange(self) -> Operation[Response]:
        """发送固定请求，读到连接关闭为止，解码并解析响应。"""
        self.logger.debug(f"发送旧版 Ping 请求 ({len(LEGACY_REQUEST)} 字节)")
        yield Write(LEGACY_REQUEST)
        yield Flush()

        data = yield ReadToEnd()
        self.logger.debug(f"收到旧版响应: {len(data)} 字节")
        text = decode_legacy_reply(data)
        return parse_legacy_status(text, data)
