import json
import os
from typing import Dict, List, Optional
from dataclasses import dataclass, asdict, field


DEFAULT_PREFIXES = ["!", "！"]  # 半形與全形驚嘆號


@dataclass
class GlobalConfig:
    """全局配置"""
    command_prefixes: List[str] = field(default_factory=lambda: list(DEFAULT_PREFIXES))
    log_file: str = "bot.log"
    log_level: str = "INFO"

    def __post_init__(self):
        if not self.command_prefixes:
            self.command_prefixes = list(DEFAULT_PREFIXES)


@dataclass
class GuildConfig:
    """公會配置"""
    # DX 规则配置
    dx_max_dice_count: int = 100
    dx_max_rounds: int = 100


class ConfigManager:
    """配置管理器"""
    def __init__(self, config_path: str = "config.json"):
        self.config_path = config_path
        self.global_config = GlobalConfig()
        self.guild_configs: Dict[int, GuildConfig] = {}
        self.load_config()

    def load_config(self):
        """加載配置"""
        if os.path.exists(self.config_path):
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            # 加載全局配置
            global_data = data.get('global', {})
            self.global_config = GlobalConfig(
                command_prefixes=global_data.get('command_prefixes', list(DEFAULT_PREFIXES)),
                log_file=global_data.get('log_file', 'bot.log'),
                log_level=global_data.get('log_level', 'INFO')
            )

            # 加載公會配置
            guild_data = data.get('guilds', {})
            for guild_id, cfg in guild_data.items():
                self.guild_configs[int(guild_id)] = GuildConfig(
                    dx_max_dice_count=cfg.get('dx_max_dice_count', 100),
                    dx_max_rounds=cfg.get('dx_max_rounds', 100)
                )
        else:
            # 如果配置文件不存在，創建默認配置
            self.save_config()

    def save_config(self):
        """保存配置"""
        data = {
            'global': asdict(self.global_config),
            'guilds': {str(guild_id): asdict(config)
                      for guild_id, config in self.guild_configs.items()}
        }

        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def get_guild_config(self, guild_id: Optional[int]) -> GuildConfig:
        """獲取公會配置（私訊等無公會情況使用默認值）"""
        if guild_id is None:
            return GuildConfig()
        return self.guild_configs.get(guild_id, GuildConfig())


def get_environment() -> str:
    """執行環境（development / production）"""
    return os.getenv("BOT_ENV", "development").lower()


def is_development() -> bool:
    return get_environment() == "development"


def is_production() -> bool:
    return get_environment() == "production"


def get_dev_guild_id() -> Optional[int]:
    """開發用公會 ID，設定後斜線指令只同步到該公會"""
    guild_id = os.getenv("GUILD_ID")
    if not guild_id:
        return None
    if not guild_id.strip().isdigit():
        raise ValueError(f"GUILD_ID 必須是數字: {guild_id}")
    return int(guild_id)
