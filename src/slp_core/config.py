"""
SLP 核心库 - 配置模块

负责配置的加载、解析与强类型转换。
支持从 TOML 文件、环境变量或字典中加载配置。
"""

import logging
import math
import os
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .exceptions import ConfigError
from .protocols.constants import DEFAULT_PORT, SlpProtocol

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
DEFAULT_PROTOCOLS = (SlpProtocol.MODERN, SlpProtocol.LEGACY)

_ADDRESS_PATTERN = re.compile(r"(?:\[(.+?)\]|([^:]+?))(?::(\d+))?")


@dataclass(frozen=True)
class PingConfig:
    """Ping 的强类型配置对象。

    所有字段均为只读 (frozen=True)。

    Attributes:
        host: 目标服务器主机名或 IP，同时写入握手包。
        port: 目标端口 (默认 25565)。
        timeout: 单次连接与每次读写的超时秒数。
        protocols: 按顺序尝试的协议列表，默认先新版后旧版。
    """

    host: str
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    protocols: tuple[SlpProtocol, ...] = DEFAULT_PROTOCOLS

    def __repr__(self) -> str:
        names = ",".join(str(p) for p in self.protocols)
        return (
            f"<{self.__class__.__name__} "
            f"server={self.host}:{self.port}, "
            f"timeout={self.timeout}s, "
            f"protocols={names}>"
        )


def parse_address(address: str, default_port: int = DEFAULT_PORT) -> tuple[str, int]:
    """解析 "host"、"host:port" 或 "[IPv6]:port" 形式的地址。

    Args:
        address: 地址字符串。
        default_port: 未指定端口时使用的端口。

    Returns:
        tuple[str, int]: (主机, 端口)。

    Raises:
        ConfigError: 地址格式无法识别。
    """
    match = _ADDRESS_PATTERN.fullmatch(address.strip())
    if not match:
        raise ConfigError(f"地址格式无效: {address}")

    host = match[1] or match[2]
    port = int(match[3]) if match[3] else default_port
    return host, port


def _parse_protocols(value: Any) -> tuple[SlpProtocol, ...]:
    """接受 "modern,legacy" 形式的字符串或字符串列表。"""
    items = value.split(",") if isinstance(value, str) else list(value)
    protocols = []
    for item in items:
        if isinstance(item, SlpProtocol):
            protocols.append(item)
            continue
        name = str(item).strip().lower()
        if not name:
            continue
        try:
            protocols.append(SlpProtocol(name))
        except ValueError:
            raise ConfigError(f"未知的协议: {item}") from None

    if not protocols:
        raise ConfigError("协议列表为空")
    return tuple(protocols)


def create_config_from_dict(raw_data: dict[str, Any]) -> PingConfig:
    """通用工厂：将字典转换为强类型配置对象。

    负责字段的清洗、默认值注入和类型转换。
    host 可带端口 ("mc.example.com:25566")，显式的 port 字段优先。

    Args:
        raw_data: 原始配置字典 (来自 TOML 或 Env)。

    Returns:
        PingConfig: 验证并转换后的配置对象。

    Raises:
        ConfigError: 当必要字段缺失或格式错误时抛出。
    """
    if "host" not in raw_data or not str(raw_data["host"]).strip():
        raise ConfigError("配置缺失: 缺少必要字段 'host'")

    host, port = parse_address(str(raw_data["host"]))

    if "port" in raw_data:
        try:
            port = int(raw_data["port"])
        except (TypeError, ValueError):
            raise ConfigError(f"端口格式无效: {raw_data['port']}") from None
    if not 0 <= port <= 0xFFFF:
        raise ConfigError(f"端口超出范围: {port}")

    try:
        timeout = float(raw_data.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError):
        raise ConfigError(f"超时格式无效: {raw_data['timeout']}") from None
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"超时必须为有限正数: {timeout}")

    protocols = DEFAULT_PROTOCOLS
    if "protocols" in raw_data:
        protocols = _parse_protocols(raw_data["protocols"])

    return PingConfig(host=host, port=port, timeout=timeout, protocols=protocols)


def load_config_from_toml(file_path: Path, profile: str = "default") -> PingConfig:
    """从 TOML 文件加载配置。

    支持多层级查找策略:
    1. [profile.xxx]: 优先查找指定的 profile 块。
    2. [slp]: 单服务器配置块。
    3. Root: 兼容根目录直接配置。

    Args:
        file_path: TOML 文件路径。
        profile: 配置预设名。默认为 "default"。

    Returns:
        PingConfig: 配置对象。

    Raises:
        ConfigError: 文件读取失败或 Profile 不存在。
    """
    if not file_path.exists():
        raise ConfigError(f"配置文件未找到: {file_path}")

    try:
        with open(file_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"读取 TOML 失败: {e}") from e

    if "profile" in data:
        if profile not in data["profile"]:
            raise ConfigError(f"未找到预设: [profile.{profile}]")
        raw_config = data["profile"][profile]
    elif "slp" in data:
        if profile != "default":
            logger.warning(f"配置仅包含 [slp] 节，忽略 profile='{profile}'。")
        raw_config = data["slp"]
    else:
        raw_config = data

    return create_config_from_dict(raw_config)


def load_config_from_env() -> PingConfig:
    """从环境变量加载配置。

    读取 SLP_HOST、SLP_PORT、SLP_TIMEOUT、SLP_PROTOCOLS。

    Returns:
        PingConfig: 配置对象。

    Raises:
        ConfigError: 未检测到任何相关环境变量。
    """
    env_map = {
        "host": "HOST",
        "port": "PORT",
        "timeout": "TIMEOUT",
        "protocols": "PROTOCOLS",
    }

    raw_data = {}
    for cfg_key, env_suffix in env_map.items():
        val = os.environ.get(f"SLP_{env_suffix}")
        if val is not None:
            raw_data[cfg_key] = val

    if not raw_data:
        raise ConfigError("未检测到 SLP_ 前缀的环境变量")

    return create_config_from_dict(raw_data)
