# File: src/slp_core/wire.py
"""
SLP 核心库 - 原始响应结构与归一化 (Wire Shape & Normalizer)

服务器返回的 JSON 类型宽松：description 可能是字符串也可能是聊天对象，
favicon 是 data URI 字符串，数值字段可能超出需要的宽度。
本模块用 pydantic 模型吸收这些差异，然后一次性转换为 models.Response。
原始模型只在本模块内部使用，转换后即丢弃。
"""

import base64
import binascii
import logging
from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, ValidationError

from .exceptions import InvalidResponse
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
from .varint import INT32_MAX, INT32_MIN

logger = logging.getLogger(__name__)

FAVICON_PREFIX = "data:image/png;base64,"

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


class _WireModel(BaseModel):
    # 严格模式: "47" 不会被当作整数，"yes" 不会被当作布尔值
    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", frozen=True, strict=True
    )


class RawChat(_WireModel):
    text: str = ""
    bold: bool = False
    italic: bool = False
    underlined: bool = False
    strikethrough: bool = False
    obfuscated: bool = False
    color: str | None = None
    # 部分服务器在 extra 中直接放字符串
    extra: list[Union[str, "RawChat"]] = Field(default_factory=list)


RawChat.model_rebuild()


class RawVersion(_WireModel):
    name: str
    protocol: Int32


class RawPlayer(_WireModel):
    name: str
    id: str


class RawPlayers(_WireModel):
    max: NonNegativeInt
    online: NonNegativeInt
    sample: list[RawPlayer] | None = None


class RawModInfoItem(_WireModel):
    mod_id: str = Field(alias="modid")
    version: str


class RawModInfo(_WireModel):
    mod_type: str = Field(alias="type")
    mod_list: list[RawModInfoItem] = Field(alias="modList")


class RawForgeChannel(_WireModel):
    res: str
    version: str
    required: bool


class RawForgeMod(_WireModel):
    mod_id: str = Field(alias="modId")
    mod_marker: str = Field(alias="modmarker")


class RawForgeData(_WireModel):
    channels: list[RawForgeChannel]
    mods: list[RawForgeMod]
    fml_network_version: Int32 = Field(alias="fmlNetworkVersion")


class RawStatus(_WireModel):
    """状态响应 JSON 的原始结构。只有 version 与 players 为必需字段。"""

    version: RawVersion
    players: RawPlayers
    description: Union[str, RawChat] = ""
    favicon: str | None = None
    enforces_secure_chat: bool | None = Field(default=None, alias="enforcesSecureChat")
    previews_chat: bool | None = Field(default=None, alias="previewsChat")
    mod_info: RawModInfo | None = Field(default=None, alias="modinfo")
    forge_data: RawForgeData | None = Field(default=None, alias="forgeData")


def parse_status_json(data: bytes) -> RawStatus:
    """将状态响应的 JSON 字节解析为原始结构。

    Raises:
        InvalidResponse: JSON 语法错误、编码错误或字段不符合结构。
    """
    try:
        return RawStatus.model_validate_json(data)
    except ValidationError as e:
        logger.debug("状态 JSON 校验失败: %s", e)
        raise InvalidResponse(f"状态 JSON 无法解析: {e.error_count()} 处错误") from e


def to_chat(value: Union[str, RawChat]) -> Chat:
    """将 description (或 extra 中的元素) 转换为 Chat 树。

    裸字符串被包装为默认样式、无子节点的 Chat；聊天对象按原结构递归转换。
    """
    if isinstance(value, str):
        return Chat(text=value)
    return Chat(
        text=value.text,
        bold=value.bold,
        italic=value.italic,
        underlined=value.underlined,
        strikethrough=value.strikethrough,
        obfuscated=value.obfuscated,
        color=value.color,
        extra=tuple(to_chat(child) for child in value.extra),
    )


def decode_favicon(value: str | None) -> bytes | None:
    """解码 data URI 形式的服务器图标。

    Args:
        value: 形如 "data:image/png;base64,...." 的字符串，或 None。

    Returns:
        bytes | None: PNG 字节；字段缺失时返回 None，空数据返回 b""。

    Raises:
        InvalidResponse: 缺少前缀或 Base64 非法。
    """
    if value is None:
        return None
    if not value.startswith(FAVICON_PREFIX):
        raise InvalidResponse("Favicon 缺少 data:image/png;base64, 前缀")
    try:
        return base64.b64decode(value[len(FAVICON_PREFIX) :], validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidResponse(f"Favicon Base64 解码失败: {e}") from e


def to_response(raw: RawStatus, raw_bytes: bytes) -> Response:
    """将原始结构归一化为 Response。

    Args:
        raw: parse_status_json 的结果。
        raw_bytes: 服务器返回的原始 JSON 字节，原样保存在 Response.raw。

    Raises:
        InvalidResponse: Favicon 无法解码。
    """
    sample = None
    if raw.players.sample is not None:
        sample = tuple(Player(name=p.name, id=p.id) for p in raw.players.sample)

    mod_info = None
    if raw.mod_info is not None:
        mod_info = ModInfo(
            mod_type=raw.mod_info.mod_type,
            mod_list=tuple(
                ModInfoItem(mod_id=item.mod_id, version=item.version)
                for item in raw.mod_info.mod_list
            ),
        )

    forge_data = None
    if raw.forge_data is not None:
        forge_data = ForgeData(
            channels=tuple(
                ForgeChannel(res=c.res, version=c.version, required=c.required)
                for c in raw.forge_data.channels
            ),
            mods=tuple(
                ForgeMod(mod_id=m.mod_id, mod_marker=m.mod_marker)
                for m in raw.forge_data.mods
            ),
            fml_network_version=raw.forge_data.fml_network_version,
        )

    return Response(
        version=raw.version.name,
        protocol=raw.version.protocol,
        max_players=raw.players.max,
        online_players=raw.players.online,
        description=to_chat(raw.description),
        sample=sample,
        favicon=decode_favicon(raw.favicon),
        mod_info=mod_info,
        forge_data=forge_data,
        enforces_secure_chat=raw.enforces_secure_chat,
        previews_chat=raw.previews_chat,
        raw=bytes(raw_bytes),
    )


def decode_status(data: bytes) -> Response:
    """解析并归一化一个新版状态响应载荷。"""
    return to_response(parse_status_json(data), data)
