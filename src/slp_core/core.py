# File: src/slp_core/core.py
"""
SLP 协商引擎 (Negotiation)

职责：
1. 按顺序构建协议尝试列表 (默认 [新版, 旧版])。
2. 为每次尝试向连接器索取一个新的流，执行后关闭。
3. 协议级失败 (MalformedVarint / ProtocolError / InvalidResponse) 时尝试下一个协议；
   传输级失败 (TransportError) 立即冒泡。

每个协议只尝试一次，不做重试。全部失败时抛出最后一个协议的异常。
"""

import logging
from collections.abc import Awaitable, Callable, Sequence

from .config import DEFAULT_PROTOCOLS, PingConfig
from .exceptions import InvalidResponse, MalformedVarint, ProtocolError
from .models import Response
from .network import async_tcp_connector, tcp_connector
from .protocols import BaseProtocol, LegacyProtocol, ModernProtocol, SlpProtocol
from .streams import AsyncStream, BlockingStream, run_async, run_blocking

logger = logging.getLogger(__name__)

# 连接器：每次调用返回一个新的、已连接的流
Connector = Callable[[], BlockingStream]
AsyncConnector = Callable[[], Awaitable[AsyncStream]]

# 触发回退的协议级异常
FALLBACK_ERRORS = (MalformedVarint, ProtocolError, InvalidResponse)

PROTOCOL_CLASSES: dict[SlpProtocol, type[BaseProtocol]] = {
    SlpProtocol.MODERN: ModernProtocol,
    SlpProtocol.LEGACY: LegacyProtocol,
}


def build_attempts(
    hostname: str,
    port: int,
    protocols: Sequence[SlpProtocol] = DEFAULT_PROTOCOLS,
) -> list[BaseProtocol]:
    """构建有序的协议尝试列表。

    Args:
        hostname: 写入协议字段的主机名。
        port: 写入协议字段的端口。
        protocols: 尝试顺序。

    Returns:
        list[BaseProtocol]: 协议策略实例列表。
    """
    if not protocols:
        raise ValueError("协议列表为空")
    return [PROTOCOL_CLASSES[p](hostname, port) for p in protocols]


def ping(
    connect: Connector,
    hostname: str,
    port: int,
    protocols: Sequence[SlpProtocol] = DEFAULT_PROTOCOLS,
) -> Response:
    """[Blocking] 查询服务器状态，新版协议失败时回退旧版协议。

    Args:
        connect: 连接器，每次协议尝试都会调用一次以获得新的流。
        hostname: 写入协议字段的主机名 (不用于解析)。
        port: 写入协议字段的端口 (不用于连接)。
        protocols: 尝试顺序，默认 [新版, 旧版]。

    Returns:
        Response: 第一个成功的协议返回的结果。

    Raises:
        TransportError: 流读写失败 (不触发回退)。
        MalformedVarint / ProtocolError / InvalidResponse: 最后一个协议的失败原因。
    """
    last_error: Exception | None = None
    for attempt in build_attempts(hostname, port, protocols):
        logger.info(f"尝试 {attempt.protocol} 协议: {hostname}:{port}")
        stream = connect()
        try:
            response = run_blocking(attempt.exchange(), stream)
        except FALLBACK_ERRORS as e:
            logger.warning(f"{attempt.protocol} 协议失败: {e}")
            last_error = e
            continue
        finally:
            stream.close()
        logger.info(f"{attempt.protocol} 协议成功: {response.version}")
        return response

    assert last_error is not None
    raise last_error


async def async_ping(
    connect: AsyncConnector,
    hostname: str,
    port: int,
    protocols: Sequence[SlpProtocol] = DEFAULT_PROTOCOLS,
) -> Response:
    """[Async] 查询服务器状态，语义与 ping 相同。

    每次读写都是挂起点；任务被取消时当前流会被关闭。
    """
    last_error: Exception | None = None
    for attempt in build_attempts(hostname, port, protocols):
        logger.info(f"尝试 {attempt.protocol} 协议: {hostname}:{port}")
        stream = await connect()
        try:
            response = await run_async(attempt.exchange(), stream)
        except FALLBACK_ERRORS as e:
            logger.warning(f"{attempt.protocol} 协议失败: {e}")
            last_error = e
            continue
        finally:
            await stream.close()
        logger.info(f"{attempt.protocol} 协议成功: {response.version}")
        return response

    assert last_error is not None
    raise last_error


def ping_server(config: PingConfig) -> Response:
    """[Blocking] 按配置建立 TCP 连接并查询服务器状态。"""
    return ping(
        tcp_connector(config.host, config.port, config.timeout),
        config.host,
        config.port,
        config.protocols,
    )


async def async_ping_server(config: PingConfig) -> Response:
    """[Async] 按配置建立 asyncio TCP 连接并查询服务器状态。"""
    return await async_ping(
        async_tcp_connector(config.host, config.port, config.timeout),
        config.host,
        config.port,
        config.protocols,
    )
