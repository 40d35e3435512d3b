"""
SLP 协议基类 (Base Protocol)

定义所有 SLP 协议策略必须实现的抽象接口。
"""

import abc
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import Response
    from ..streams import Operation
    from .constants import SlpProtocol


class BaseProtocol(abc.ABC):
    """协议策略抽象基类。

    每个具体的协议版本（新版 JSON、旧版 UTF-16）都必须继承此类，
    并以生成器操作的形式实现一次完整的状态查询交换。
    策略对象本身不持有流，也不关心执行模式 (阻塞 / asyncio)。
    """

    protocol: "SlpProtocol"

    def __init__(self, hostname: str, port: int) -> None:
        """初始化协议基类。

        Args:
            hostname: 写入协议字段的主机名 (不用于解析)。
            port: 写入协议字段的端口 (不用于连接)。
        """
        self.hostname = hostname
        self.port = port
        self.logger = logging.getLogger(self.__class__.__name__)

    @abc.abstractmethod
    def exchange(self) -> "Operation[Response]":
        """[Abstract] 构建一次“发送请求 - 读取响应 - 解码”的操作。

        Returns:
            Operation[Response]: 交由 run_blocking / run_async 驱动的生成器。

        Raises:
            MalformedVarint: VarInt 超长。
            ProtocolError: 帧结构错误。
            InvalidResponse: 载荷语义错误。
            TransportError: 流读写失败。
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.hostname}:{self.port}>"
