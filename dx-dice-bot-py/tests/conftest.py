"""Pytest configuration and fixtures for DX dice bot tests."""

import sys
from pathlib import Path

# 將源碼目錄加入路徑
SOURCE_DIR = Path(__file__).parent.parent
if str(SOURCE_DIR) not in sys.path:
    sys.path.insert(0, str(SOURCE_DIR))

import pytest
from typing import Iterable, List
from unittest.mock import AsyncMock, MagicMock

from utils.config import ConfigManager
from utils.logger import setup_logger


class ScriptedDieSource:
    """依序回傳預先指定出目的亂數來源"""
    def __init__(self, values: Iterable[int]):
        self.values: List[int] = list(values)
        self.calls = 0

    def next_die(self) -> int:
        if self.calls >= len(self.values):
            pytest.fail(f"scripted source exhausted after {self.calls} dice")
        value = self.values[self.calls]
        self.calls += 1
        return value


class ConstantDieSource:
    """永遠回傳同一個出目"""
    def __init__(self, value: int):
        self.value = value
        self.calls = 0

    def next_die(self) -> int:
        self.calls += 1
        return self.value


@pytest.fixture(autouse=True)
def temp_logger(tmp_path):
    """Send log output to a temporary file."""
    return setup_logger(log_file=str(tmp_path / "test.log"), level="DEBUG")


@pytest.fixture
def scripted_source():
    """Factory for scripted random sources."""
    return ScriptedDieSource


@pytest.fixture
def constant_source():
    """Factory for constant random sources."""
    return ConstantDieSource


@pytest.fixture
def config_manager(tmp_path) -> ConfigManager:
    """ConfigManager backed by a temporary config.json."""
    return ConfigManager(config_path=str(tmp_path / "config.json"))


@pytest.fixture
def mock_ctx():
    """Mock command context without a guild."""
    ctx = MagicMock()
    ctx.guild = None
    ctx.author.display_name = "tester"
    ctx.message.content = "!dx 8DX+5"
    ctx.send = AsyncMock()
    return ctx


@pytest.fixture
def clean_env(monkeypatch):
    """Unset bot environment variables and restore them afterwards."""
    for name in ("DISCORD_TOKEN", "GUILD_ID", "BOT_ENV"):
        # 先設定再刪除，確保 load_dotenv 寫入的值在測試後會被還原
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
