# File: src/slp_core/varint.py
"""
SLP 核心库 - VarInt 编解码

Minecraft 新版协议使用的变长整数：每字节低 7 位为数据，最高位为续位标志，
小端序排列。数值按 32 位有符号整数解释，负数固定占用 5 字节。
"""

from .exceptions import MalformedVarint, ProtocolError
from .streams import ReadExact

SEGMENT_BITS = 0x7F
CONTINUE_BIT = 0x80
VARINT_MAX_BYTES = 5

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
UINT32_MASK = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    """将累加结果截断为 32 位并按补码解释为有符号整数。"""
    value &= UINT32_MASK
    if value > INT32_MAX:
        value -= 1 << 32
    return value


def encode_varint(value: int) -> bytes:
    """将 32 位有符号整数编码为 VarInt。

    算法逻辑:
    1. 先按补码截断为 32 位无符号数 (负数因此总是 5 字节)。
    2. 每次取低 7 位，若剩余值非零则置续位标志 0x80。
    3. 剩余值为零时结束。

    Args:
        value: 取值范围 [-2^31, 2^31 - 1] 的整数。

    Returns:
        bytes: 1~5 字节的编码结果。

    Raises:
        ValueError: 数值超出 32 位有符号整数范围。
    """
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(f"VarInt 超出 32 位范围: {value}")

    remaining = value & UINT32_MASK
    out = bytearray()
    while True:
        byte = remaining & SEGMENT_BITS
        remaining >>= 7
        if remaining:
            out.append(byte | CONTINUE_BIT)
        else:
            out.append(byte)
            return bytes(out)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """从内存缓冲区解码一个 VarInt。

    Args:
        data: 包含 VarInt 的字节串。
        offset: 起始偏移量。

    Returns:
        tuple[int, int]: (数值, 消耗的字节数)。

    Raises:
        MalformedVarint: 连续 5 字节都带续位标志。
        ProtocolError: 缓冲区在 VarInt 结束前耗尽。
    """
    result = 0
    for position in range(VARINT_MAX_BYTES):
        index = offset + position
        if index >= len(data):
            raise ProtocolError("VarInt 数据不完整")
        byte = data[index]
        result |= (byte & SEGMENT_BITS) << (7 * position)
        if not byte & CONTINUE_BIT:
            return _to_int32(result), position + 1
    raise MalformedVarint(f"VarInt 超过 {VARINT_MAX_BYTES} 字节")


def read_varint():
    """[Operation] 从流中逐字节读取一个 VarInt。

    这是一个生成器操作，需交由 run_blocking / run_async 驱动。

    Returns:
        tuple[int, int]: (数值, 消耗的字节数)。

    Raises:
        MalformedVarint: 连续 5 字节都带续位标志。
        TransportError: 流在读取过程中关闭 (由流适配器抛出)。
    """
    result = 0
    for position in range(VARINT_MAX_BYTES):
        chunk = yield ReadExact(1)
        byte = chunk[0]
        result |= (byte & SEGMENT_BITS) << (7 * position)
        if not byte & CONTINUE_BIT:
            return _to_int32(result), position + 1
    raise MalformedVarint(f"VarInt 超过 {VARINT_MAX_BYTES} 字节")
