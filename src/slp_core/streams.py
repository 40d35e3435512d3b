# File: src/slp_core/streams.py
"""
SLP 核心库 - 流抽象与执行器 (Streams)

协议驱动被写成生成器形式的“操作”(Operation)：它只 yield I/O 请求对象
(读 N 字节 / 读到流结束 / 写入 / 刷新)，由执行器在具体的流上完成请求后
把结果 send 回生成器。

- run_blocking: 在阻塞流上执行，调用线程在每次 I/O 时挂起。
- run_async: 在 asyncio 流上执行，每次 I/O 都是一个 await 挂起点。

这样同一份协议逻辑无需为两种执行模式各写一遍。
"""

from collections.abc import Generator
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ReadExact:
    """读取恰好 size 字节；流提前关闭时由适配器抛出 TransportError。"""

    size: int


@dataclass(frozen=True)
class Read:
    """读取至多 size 字节，流关闭时返回已读到的部分 (可能更短)。"""

    size: int


@dataclass(frozen=True)
class ReadToEnd:
    """持续读取直到对端关闭连接。"""


@dataclass(frozen=True)
class Write:
    """写入全部数据。"""

    data: bytes


@dataclass(frozen=True)
class Flush:
    """刷新写缓冲区。"""


IORequest = Union[ReadExact, Read, ReadToEnd, Write, Flush]

# 生成器操作: yield IORequest, 接收 bytes | None, 最终 return T
Operation = Generator[IORequest, Any, T]


class BlockingStream(Protocol):
    """阻塞式双向字节流接口。"""

    def read_exact(self, size: int) -> bytes: ...

    def read(self, size: int) -> bytes: ...

    def read_to_end(self) -> bytes: ...

    def write(self, data: bytes) -> None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


class AsyncStream(Protocol):
    """协作式 (asyncio) 双向字节流接口。"""

    async def read_exact(self, size: int) -> bytes: ...

    async def read(self, size: int) -> bytes: ...

    async def read_to_end(self) -> bytes: ...

    async def write(self, data: bytes) -> None: ...

    async def flush(self) -> None: ...

    async def close(self) -> None: ...


def _perform_blocking(request: IORequest, stream: BlockingStream) -> bytes | None:
    if isinstance(request, ReadExact):
        return stream.read_exact(request.size)
    if isinstance(request, Read):
        return stream.read(request.size)
    if isinstance(request, ReadToEnd):
        return stream.read_to_end()
    if isinstance(request, Write):
        stream.write(request.data)
        return None
    if isinstance(request, Flush):
        stream.flush()
        return None
    raise TypeError(f"未知的 I/O 请求: {request!r}")


async def _perform_async(request: IORequest, stream: AsyncStream) -> bytes | None:
    if isinstance(request, ReadExact):
        return await stream.read_exact(request.size)
    if isinstance(request, Read):
        return await stream.read(request.size)
    if isinstance(request, ReadToEnd):
        return await stream.read_to_end()
    if isinstance(request, Write):
        await stream.write(request.data)
        return None
    if isinstance(request, Flush):
        await stream.flush()
        return None
    raise TypeError(f"未知的 I/O 请求: {request!r}")


def run_blocking(operation: Operation[T], stream: BlockingStream) -> T:
    """在阻塞流上驱动一个生成器操作直至完成。

    Args:
        operation: 协议操作 (生成器)。
        stream: 已连接的阻塞流。

    Returns:
        操作的返回值。

    Raises:
        SlpError: 操作或流抛出的任何库内异常原样冒泡。
    """
    result: bytes | None = None
    try:
        while True:
            try:
                request = operation.send(result)
            except StopIteration as stop:
                return stop.value
            result = _perform_blocking(request, stream)
    finally:
        operation.close()


async def run_async(operation: Operation[T], stream: AsyncStream) -> T:
    """在 asyncio 流上驱动一个生成器操作直至完成。

    每个 I/O 请求都是一个挂起点；任务被取消时正在进行的读写随之放弃，
    流的关闭由调用方负责。
    """
    result: bytes | None = None
    try:
        while True:
            try:
                request = operation.send(result)
            except StopIteration as stop:
                return stop.value
            result = await _perform_async(request, stream)
    finally:
        operation.close()
