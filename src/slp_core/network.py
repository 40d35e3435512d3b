# src/slp_core/network.py
"""
SLP 核心库 - 网络模块 (Network)

封装 TCP 连接的建立与字节收发，向协议层提供统一的流接口。
- SocketStream: 阻塞式 socket 适配器。
- AsyncioStream: asyncio StreamReader/StreamWriter 适配器。

所有底层异常 (OSError、超时、连接提前关闭) 都被转换为 TransportError。
超时由此层负责，协议层不感知。
"""

import asyncio
import logging
import socket
from collections.abc import Awaitable, Callable
from functools import partial

from .exceptions import TransportError

logger = logging.getLogger(__name__)

RECV_CHUNK_SIZE = 4096


class SocketStream:
    """阻塞式 TCP 流。"""

    def __init__(self, sock: socket.socket) -> None:
        self.sock = sock

    def _recv(self, size: int) -> bytes:
        try:
            return self.sock.recv(size)
        except socket.timeout:
            raise TransportError(f"接收超时 ({self.sock.gettimeout()}s)") from None
        except OSError as e:
            raise TransportError(f"接收错误: {e}") from e

    def read_exact(self, size: int) -> bytes:
        data = self.read(size)
        if len(data) < size:
            raise TransportError(f"连接已关闭: 期望 {size} 字节, 实际 {len(data)} 字节")
        return data

    def read(self, size: int) -> bytes:
        buffer = bytearray()
        while len(buffer) < size:
            chunk = self._recv(min(size - len(buffer), RECV_CHUNK_SIZE))
            if not chunk:
                break
            buffer.extend(chunk)
        return bytes(buffer)

    def read_to_end(self) -> bytes:
        buffer = bytearray()
        while chunk := self._recv(RECV_CHUNK_SIZE):
            buffer.extend(chunk)
        return bytes(buffer)

    def write(self, data: bytes) -> None:
        try:
            self.sock.sendall(data)
        except socket.timeout:
            raise TransportError(f"发送超时 ({self.sock.gettimeout()}s)") from None
        except OSError as e:
            raise TransportError(f"发送失败: {e}") from e

    def flush(self) -> None:
        # sendall 已同步写出
        pass

    def close(self) -> None:
        self.sock.close()
        logger.debug("TCP Socket 已关闭")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class AsyncioStream:
    """asyncio TCP 流。

    timeout 作用于每一次读写操作，而不是整个 Ping 过程。
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        timeout: float | None = None,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.timeout = timeout

    async def _io(self, awaitable: Awaitable, action: str):
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError:
            raise TransportError(f"{action}超时 ({self.timeout}s)") from None
        except asyncio.IncompleteReadError as e:
            raise TransportError(
                f"连接已关闭: 期望 {e.expected} 字节, 实际 {len(e.partial)} 字节"
            ) from e
        except OSError as e:
            raise TransportError(f"{action}错误: {e}") from e

    async def read_exact(self, size: int) -> bytes:
        return await self._io(self.reader.readexactly(size), "接收")

    async def read(self, size: int) -> bytes:
        buffer = bytearray()
        while len(buffer) < size:
            chunk = await self._io(self.reader.read(size - len(buffer)), "接收")
            if not chunk:
                break
            buffer.extend(chunk)
        return bytes(buffer)

    async def read_to_end(self) -> bytes:
        return await self._io(self.reader.read(), "接收")

    async def write(self, data: bytes) -> None:
        try:
            self.writer.write(data)
        except OSError as e:
            raise TransportError(f"发送失败: {e}") from e

    async def flush(self) -> None:
        await self._io(self.writer.drain(), "发送")

    async def close(self) -> None:
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except OSError as e:
            logger.debug(f"关闭连接时对端已断开: {e}")
        logger.debug("asyncio Transport 已关闭")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def open_connection(host: str, port: int, timeout: float | None = None) -> SocketStream:
    """建立阻塞式 TCP 连接。

    Raises:
        TransportError: 连接失败、超时或 DNS 解析失败。
    """
    try:
        sock = socket.create_connection((host, port), timeout=timeout)
    except OSError as e:
        raise TransportError(f"连接失败 {host}:{port}: {e}") from e
    logger.debug(f"TCP 连接已建立: {host}:{port}")
    return SocketStream(sock)


async def open_async_connection(
    host: str, port: int, timeout: float | None = None
) -> AsyncioStream:
    """建立 asyncio TCP 连接。

    Raises:
        TransportError: 连接失败、超时或 DNS 解析失败。
    """
    try:
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port), timeout=timeout
        )
    except asyncio.TimeoutError:
        raise TransportError(f"连接超时 {host}:{port} ({timeout}s)") from None
    except OSError as e:
        raise TransportError(f"连接失败 {host}:{port}: {e}") from e
    logger.debug(f"asyncio 连接已建立: {host}:{port}")
    return AsyncioStream(reader, writer, timeout)


def tcp_connector(
    host: str, port: int, timeout: float | None = None
) -> Callable[[], SocketStream]:
    """返回一个每次调用都建立新连接的阻塞连接器。"""
    return partial(open_connection, host, port, timeout)


def async_tcp_connector(
    host: str, port: int, timeout: float | None = None
) -> Callable[[], Awaitable[AsyncioStream]]:
    """返回一个每次调用都建立新连接的 asyncio 连接器。"""
    return partial(open_async_connection, host, port, timeout)
