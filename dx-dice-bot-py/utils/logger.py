import logging
from logging.handlers import RotatingFileHandler
from typing import Optional, Union


class BotLogger:
    """自定義日誌系統"""

    def __init__(self, log_file: str = "bot.log", level: Union[int, str] = logging.INFO):
        self.logger = logging.getLogger('DXDiceBot')
        self.logger.setLevel(level)

        # 避免重複添加處理器
        if not self.logger.handlers:
            # 設置文件處理器（帶輪換）
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=1024*1024,  # 1MB
                backupCount=5,
                encoding='utf-8',
                delay=True
            )

            # 設置控制台處理器
            console_handler = logging.StreamHandler()

            # 設置格式
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            file_handler.setFormatter(formatter)
            console_handler.setFormatter(formatter)

            # 添加處理器
            self.logger.addHandler(file_handler)
            self.logger.addHandler(console_handler)

    def info(self, message: str):
        """記錄信息級別日誌"""
        self.logger.info(message)

    def warning(self, message: str):
        """記錄警告級別日誌"""
        self.logger.warning(message)

    def error(self, message: str, exc_info: bool = False):
        """記錄錯誤級別日誌"""
        self.logger.error(message, exc_info=exc_info)

    def debug(self, message: str):
        """記錄調試級別日誌"""
        self.logger.debug(message)


# 全局日誌實例，首次取用時才建立
_logger: Optional[BotLogger] = None


def setup_logger(log_file: str = "bot.log", level: Union[int, str] = logging.INFO) -> BotLogger:
    """
    以指定設定建立全局日誌實例

    所有 BotLogger 共用同一個 DXDiceBot logger，先前取得的實例之後也會寫入新的處理器。
    """
    global _logger
    # 移除舊的處理器，讓新的日誌文件設定生效
    base_logger = logging.getLogger('DXDiceBot')
    for handler in list(base_logger.handlers):
        base_logger.removeHandler(handler)
        handler.close()
    _logger = BotLogger(log_file=log_file, level=level)
    return _logger


def get_logger() -> BotLogger:
    """獲取日誌實例"""
    global _logger
    if _logger is None:
        _logger = BotLogger()
    return _logger
