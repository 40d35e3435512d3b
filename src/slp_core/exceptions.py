# File: src/slp_core/exceptions.py
"""
SLP 核心库 - 异常体系 (Exceptions)

定义库内统一使用的异常类，以便上层应用（如 CLI/Bot）能进行精细的错误处理。
协议协商层依据异常类型决定是否回退到旧版协议。
"""


class SlpError(Exception):
    """SLP 核心库的所有内部异常的基类。

    上层应用可以通过捕获此异常来处理所有由 slp-core 抛出的已知错误。
    """

    pass


class ConfigError(SlpError):
    """配置加载或校验失败。

    触发场景:
    1. 缺少必要字段 (如 host)。
    2. 字段格式错误 (如端口越界、超时非正数、未知协议名)。
    3. 找不到配置文件或环境变量。
    """

    pass


class TransportError(SlpError):
    """传输层面的错误 (I/O 级别)。

    触发场景:
    1. 连接被重置或拒绝。
    2. 发送 (write) 或 接收 (read) 失败、超时。
    3. 等待固定长度数据时连接被对端关闭。

    注意: 连接已失效时换用旧版协议也会以同样方式失败，因此协商层不会回退。
    """

    pass


class MalformedVarint(SlpError):
    """VarInt 超过 5 字节仍未结束。

    32 位整数最多需要 5 字节编码，第 5 字节仍带续位标志说明数据已损坏或恶意构造。
    """

    pass


class ProtocolError(SlpError):
    """协议交互错误 (帧结构级别)。

    触发场景:
    1. 响应包 ID 非预期 (状态响应必须为 0x00)。
    2. 声明长度为负或小于其自身包含的包 ID。
    3. 数据包在声明长度之前被截断。
    4. 旧版响应过短或首字节不是 0xFF。
    """

    pass


class InvalidResponse(SlpError):
    """响应内容无法解析 (语义级别)。

    帧结构正确，但载荷无法被解释:
    1. JSON 语法错误或字段类型不符。
    2. UTF-16BE 解码失败。
    3. Favicon 缺少 data URI 前缀或 Base64 非法。
    4. 旧版响应字段缺失、魔数不符或数字无法解析。
    """

    pass
