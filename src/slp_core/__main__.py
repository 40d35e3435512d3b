# src/slp_core/__main__.py
"""
命令行入口: python -m slp_core [host[:port]]

未给出地址时从环境变量 (SLP_HOST 等) 读取，当前目录下的 .env 会被自动加载。
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from . import __version__
from .config import (
    PingConfig,
    create_config_from_dict,
    load_config_from_env,
    load_config_from_toml,
)
from .core import ping_server
from .exceptions import ConfigError, SlpError
from .models import Response

logger = logging.getLogger("SlpCLI")


def load_cli_config(args: argparse.Namespace) -> PingConfig:
    """按 命令行参数 > TOML 文件 > 环境变量 的优先级加载配置。"""
    if args.address:
        raw: dict = {"host": args.address}
        if args.timeout is not None:
            raw["timeout"] = args.timeout
        if args.protocols:
            raw["protocols"] = args.protocols
        return create_config_from_dict(raw)

    if args.config:
        return load_config_from_toml(Path(args.config), args.profile)

    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
        logger.debug(f"已加载配置文件: {env_path}")
    return load_config_from_env()


def format_response(response: Response) -> str:
    lines = [
        f"版本: {response.version} (协议 {response.protocol})",
        f"玩家: {response.online_players}/{response.max_players}",
        f"描述: {response.description}",
    ]
    if response.sample:
        lines.append("在线: " + ", ".join(p.name for p in response.sample))
    if response.favicon is not None:
        lines.append(f"图标: {len(response.favicon)} 字节")
    if response.mod_info is not None:
        lines.append(
            f"模组: {response.mod_info.mod_type} ({len(response.mod_info.mod_list)} 个)"
        )
    if response.forge_data is not None:
        lines.append(
            f"Forge: FML{response.forge_data.fml_network_version} "
            f"({len(response.forge_data.mods)} 个模组)"
        )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="slp_core", description=f"Minecraft Server List Ping (v{__version__})"
    )
    parser.add_argument("address", nargs="?", help="服务器地址 host[:port]")
    parser.add_argument("-t", "--timeout", type=float, help="超时秒数")
    parser.add_argument("-p", "--protocols", help="尝试顺序, 如 modern,legacy")
    parser.add_argument("-c", "--config", help="TOML 配置文件路径")
    parser.add_argument("--profile", default="default", help="TOML 配置预设名")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_cli_config(args)
    except ConfigError as e:
        logger.error(f"配置错误: {e}")
        return 2

    logger.info(f"配置加载完成: {config!r}")
    try:
        response = ping_server(config)
    except SlpError as e:
        logger.error(f"查询失败 ({type(e).__name__}): {e}")
        return 1

    print(format_response(response))
    return 0


if __name__ == "__main__":
    sys.exit(main())
