# example.py
"""
这是一个 slp-core API 的最小示例。

它演示了如何将 slp-core 作为一个库导入到你自己的项目中，
分别用阻塞方式和 asyncio 方式查询同一台服务器。

运行此示例：
1. 确保已安装依赖： pip install -e .
2. 从项目根目录运行： python example.py mc.example.com:25565
"""

import asyncio
import logging
import sys

from slp_core import (
    SlpError,
    async_ping_server,
    create_config_from_dict,
    ping_server,
)

# 日志配置开始
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("SlpExample")
# 日志配置结束


async def main_async(address: str) -> None:
    config = create_config_from_dict({"host": address, "timeout": 3})
    response = await async_ping_server(config)
    logger.info(f"[async] {response.description} ({response.version})")


def main() -> None:
    address = sys.argv[1] if len(sys.argv) > 1 else "localhost"
    config = create_config_from_dict({"host": address})

    try:
        response = ping_server(config)
        logger.info(
            f"[sync] {response.online_players}/{response.max_players} 在线, "
            f"版本 {response.version}"
        )
        asyncio.run(main_async(address))
    except SlpError as e:
        logger.error(f"查询失败: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
