# src/slp_core/protocols/__init__.py
"""
SLP 协议层 (Protocol Layer)

本包负责协议数据包的构建 (Build) 与解析 (Parse)，以及两种协议的交换流程。

- 不包含任何 socket 操作：I/O 以请求对象的形式 yield 给执行器。
- 不包含协商策略：新旧协议之间的回退由 core 层负责。
"""

from . import constants
from .base import BaseProtocol
from .constants import SlpProtocol
from .framing import encode_packet, read_packet, write_packet
from .legacy import LegacyProtocol, decode_legacy_reply, parse_legacy_status
from .modern import (
    ModernProtocol,
    build_handshake_payload,
    build_status_request,
    extract_status_json,
)

# 公共 API
__all__ = [
    "constants",
    "SlpProtocol",
    "BaseProtocol",
    "ModernProtocol",
    "LegacyProtocol",
    "encode_packet",
    "write_packet",
    "read_packet",
    "build_handshake_payload",
    "build_status_request",
    "extract_status_json",
    "decode_legacy_reply",
    "parse_legacy_status",
]
