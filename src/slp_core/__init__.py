# src/slp_core/__init__.py
"""
SLP-Core v0.1.0
Minecraft Server List Ping 客户端协议核心库，兼容新版 (1.7+) 与旧版 (1.4 - 1.6) 协议。
"""

# 暴露核心配置
from .config import (
    PingConfig,
    create_config_from_dict,
    load_config_from_env,
    load_config_from_toml,
    parse_address,
)

# 暴露协商入口
from .core import async_ping, async_ping_server, ping, ping_server

# 暴露异常体系 (方便上层 try-except)
from .exceptions import (
    ConfigError,
    InvalidResponse,
    MalformedVarint,
    ProtocolError,
    SlpError,
    TransportError,
)
from .models import (
    Chat,
    ForgeChannel,
    ForgeData,
    ForgeMod,
    ModInfo,
    ModInfoItem,
    Player,
    Response,
)
from .protocols.constants import SlpProtocol

__version__ = "0.1.0"

__all__ = [
    "ping",
    "async_ping",
    "ping_server",
    "async_ping_server",
    "PingConfig",
    "SlpProtocol",
    "create_config_from_dict",
    "load_config_from_env",
    "load_config_from_toml",
    "parse_address",
    "Response",
    "Chat",
    "Player",
    "ModInfo",
    "ModInfoItem",
    "ForgeData",
    "ForgeChannel",
    "ForgeMod",
    "SlpError",
    "ConfigError",
    "TransportError",
    "MalformedVarint",
    "ProtocolError",
    "InvalidResponse",
]
