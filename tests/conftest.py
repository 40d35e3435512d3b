# tests/conftest.py
import sys
from pathlib import Path

import pytest

# 确保 src 目录在 sys.path 中
src_path = Path(__file__).resolve().parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from slp_core.exceptions import TransportError
from slp_core.protocols.framing import encode_packet
from slp_core.varint import encode_varint


class FakeStream:
    """内存中的阻塞流：预置接收数据，记录写入数据。"""

    def __init__(self, incoming: bytes = b""):
        self.incoming = bytearray(incoming)
        self.written = bytearray()
        self.flush_count = 0
        self.closed = False

    def read(self, size: int) -> bytes:
        data = bytes(self.incoming[:size])
        del self.incoming[:size]
        return data

    def read_exact(self, size: int) -> bytes:
        data = self.read(size)
        if len(data) < size:
            raise TransportError(f"连接已关闭: 期望 {size} 字节, 实际 {len(data)} 字节")
        return data

    def read_to_end(self) -> bytes:
        data = bytes(self.incoming)
        self.incoming.clear()
        return data

    def write(self, data: bytes) -> None:
        self.written.extend(data)

    def flush(self) -> None:
        self.flush_count += 1

    def close(self) -> None:
        self.closed = True


class FakeAsyncStream:
    """FakeStream 的 asyncio 版本。"""

    def __init__(self, incoming: bytes = b""):
        self.inner = FakeStream(incoming)

    @property
    def written(self) -> bytearray:
        return self.inner.written

    @property
    def closed(self) -> bool:
        return self.inner.closed

    async def read(self, size: int) -> bytes:
        return self.inner.read(size)

    async def read_exact(self, size: int) -> bytes:
        return self.inner.read_exact(size)

    async def read_to_end(self) -> bytes:
        return self.inner.read_to_end()

    async def write(self, data: bytes) -> None:
        self.inner.write(data)

    async def flush(self) -> None:
        self.inner.flush()

    async def close(self) -> None:
        self.inner.close()


@pytest.fixture
def fake_stream():
    """[Fixture] 返回 FakeStream 工厂。"""
    return FakeStream


@pytest.fixture
def fake_async_stream():
    """[Fixture] 返回 FakeAsyncStream 工厂。"""
    return FakeAsyncStream


@pytest.fixture
def status_json() -> bytes:
    """一个典型的 1.20 原版服务器状态 JSON。"""
    return (
        b'{"version":{"name":"1.20.4","protocol":765},'
        b'"players":{"max":20,"online":2,"sample":['
        b'{"name":"Alice","id":"4566e69f-c907-48ee-8d71-d7ba5aa00d20"},'
        b'{"name":"Bob","id":"9c2b5a4c-4a5e-4b1f-8d38-2a8f1f6c7e01"}]},'
        b'"description":{"text":"A ","extra":[{"text":"Minecraft","bold":true,'
        b'"color":"gold"}," Server"]},'
        b'"favicon":"data:image/png;base64,iVBORw0KGgo=",'
        b'"enforcesSecureChat":true,"previewsChat":false}'
    )


@pytest.fixture
def status_reply():
    """[Fixture] 构造新版状态响应包: 包 ID | VarInt(JSON 长度) | JSON。"""

    def _build(data: bytes, packet_id: int = 0) -> bytes:
        return encode_packet(packet_id, encode_varint(len(data)) + data)

    return _build


@pytest.fixture
def legacy_reply():
    """[Fixture] 构造旧版 Kick 响应: 0xFF | uint16-BE 长度 | UTF-16BE 文本。"""

    def _build(text: str) -> bytes:
        body = text.encode("utf-16-be")
        return b"\xff" + (len(body) // 2).to_bytes(2, "big") + body

    return _build
