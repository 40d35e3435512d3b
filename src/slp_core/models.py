# File: src/slp_core/models.py
"""
SLP 核心库 - 响应模型 (Response Model)

面向调用方的强类型、不可变数据结构。
所有序列字段均为 tuple，Response 独占其全部嵌套数据。
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Chat:
    """聊天组件 (服务器描述 / MOTD 使用的格式)。

    递归结构：子组件 (extra) 原则上继承父组件的样式，但可以自行覆盖。
    样式继承属于渲染问题，本库只保证树结构与字段值原样保留。

    Attributes:
        text: 本节点的文本。
        bold: 粗体。
        italic: 斜体。
        underlined: 下划线。
        strikethrough: 删除线。
        obfuscated: 混淆 (随机字符闪烁)。
        color: 颜色名或 #RRGGBB，None 表示默认颜色。
        extra: 跟随在本节点文本之后的子组件。
    """

    text: str = ""
    bold: bool = False
    italic: bool = False
    underlined: bool = False
    strikethrough: bool = False
    obfuscated: bool = False
    color: str | None = None
    extra: tuple["Chat", ...] = ()

    def plain_text(self) -> str:
        """按深度优先顺序拼接整棵树的文本。

        每个节点的文本会去掉换行并把连续空白压缩为一个空格，
        适合在日志或终端里单行显示。
        """
        text = " ".join(self.text.replace("\n", "").split())
        return text + "".join(child.plain_text() for child in self.extra)

    def __str__(self) -> str:
        return self.plain_text()


@dataclass(frozen=True)
class Player:
    """在线玩家样本。id 为 UUID 字符串，本层不做解析。"""

    name: str
    id: str


@dataclass(frozen=True)
class ModInfoItem:
    mod_id: str
    version: str


@dataclass(frozen=True)
class ModInfo:
    """FML 协议 (1.7 - 1.12) 的 modinfo 对象。

    Attributes:
        mod_type: modinfo.type，安装 Forge 时通常为 "FML"。
        mod_list: 服务器安装的模组列表。
    """

    mod_type: str
    mod_list: tuple[ModInfoItem, ...] = ()


@dataclass(frozen=True)
class ForgeChannel:
    """模组使用的插件频道。

    上游对 version / required 的确切语义没有文档，原样保留，不做额外校验。
    """

    res: str
    version: str
    required: bool


@dataclass(frozen=True)
class ForgeMod:
    mod_id: str
    mod_marker: str


@dataclass(frozen=True)
class ForgeData:
    """FML2 协议 (1.13+) 的 forgeData 对象。"""

    channels: tuple[ForgeChannel, ...] = ()
    mods: tuple[ForgeMod, ...] = ()
    fml_network_version: int = 0


@dataclass(frozen=True)
class Response:
    """一次 Ping 的结果。

    无论服务器使用新版还是旧版协议，都会被归一化为此结构。
    旧版协议没有的字段 (sample, favicon, mod_info, forge_data, 安全聊天标志) 为 None。

    Attributes:
        version: 服务器版本名。
        protocol: 协议版本号 (32 位有符号)。
        max_players: 最大玩家数。
        online_players: 当前在线玩家数。
        description: 服务器描述 (MOTD)。
        sample: 在线玩家样本，即使有玩家在线也可能为 None。
        favicon: PNG 图标字节；b"" 与 None (无图标) 含义不同。
        mod_info: FML 模组信息。
        forge_data: FML2 模组信息。
        enforces_secure_chat: 服务器是否要求聊天签名。
        previews_chat: 服务器是否启用聊天预览。
        raw: 服务器返回的原始载荷字节，供需要未建模字段的调用方使用。
    """

    version: str
    protocol: int
    max_players: int
    online_players: int
    description: Chat = field(default_factory=Chat)
    sample: tuple[Player, ...] | None = None
    favicon: bytes | None = None
    mod_info: ModInfo | None = None
    forge_data: ForgeData | None = None
    enforces_secure_chat: bool | None = None
    previews_chat: bool | None = None
    raw: bytes = field(default=b"", repr=False)
