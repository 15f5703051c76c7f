#!/usr/bin/env python3
"""
DX Dice Bot - Python版
專為 Double Cross 設計的 Discord 擲骰機器人
"""

import asyncio
import os
import sys
from dotenv import load_dotenv

# 加載環境變量
load_dotenv()

# 確保路徑正確
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bot import DXDiceBot
from utils.logger import get_logger


async def run(bot: DXDiceBot):
    """運行機器人，結束時確保關閉連線"""
    try:
        await bot.start()
    finally:
        await bot.close()


def main():
    """主函數"""
    logger = get_logger()

    logger.info("正在啟動 DX Dice Bot...")

    # 創建並啟動機器人（機器人會自己查找環境變量）
    try:
        bot = DXDiceBot()
    except ValueError as e:
        logger.error(f"錯誤：{e}")
        sys.exit(1)

    try:
        asyncio.run(run(bot))
    except KeyboardInterrupt:
        logger.info("收到中斷信號，正在關閉機器人...")
    except Exception as e:
        logger.error(f"機器人運行時出現錯誤: {e}", exc_info=True)
        sys.exit(1)

    logger.info("機器人已關閉")


if __name__ == "__main__":
    main()
