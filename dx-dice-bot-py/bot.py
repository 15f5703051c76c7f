import discord
from discord.ext import commands
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from utils.config import ConfigManager, get_dev_guild_id, get_environment
from utils.logger import setup_logger


class DXDiceBot:
    """Double Cross 擲骰機器人類"""
    def __init__(self, root_dir: Optional[Path] = None):
        root_dir = root_dir or self.find_project_root()

        # 遍歷查找環境變量文件
        env_file = self.find_env_file(root_dir)
        if env_file:
            load_dotenv(dotenv_path=env_file)

        # 查找配置文件並設置日誌
        self.config_manager = ConfigManager(config_path=self.find_config_file(root_dir))
        global_config = self.config_manager.global_config
        self.logger = setup_logger(
            log_file=str(root_dir / global_config.log_file),
            level=global_config.log_level.upper()
        )

        if env_file:
            self.logger.info(f"找到環境變量文件: {env_file}")
        else:
            self.logger.warning(f"在 {root_dir} 及其子目錄中未找到環境變量文件")

        # 從環境變量獲取token
        token = os.getenv("DISCORD_TOKEN")
        if not token:
            self.logger.error("未找到 DISCORD_TOKEN 環境變量")
            self.logger.error("請在項目根目錄創建 .env 文件，並添加 DISCORD_TOKEN=your_token_here")
            raise ValueError("未找到 DISCORD_TOKEN 環境變量")

        self.token = token
        self.dev_guild_id = get_dev_guild_id()

        # 設置機器人
        intents = discord.Intents.default()
        intents.message_content = True  # 需要讀取 !dx 訊息內容

        self.bot = commands.Bot(
            command_prefix=global_config.command_prefixes,
            case_insensitive=True,
            intents=intents,
            description="Double Cross 專用擲骰機器人"
        )

        self.setup_events()

    def find_project_root(self) -> Path:
        """查找項目根目錄"""
        current_path = Path(__file__).resolve()

        # 搜索包含 .git 目錄的父目錄，這是更可靠的項目根目錄標誌
        for parent in current_path.parents:
            if (parent / '.git').exists():
                return parent

        # 如果沒找到 .git 目錄，改找 pyproject.toml
        for parent in current_path.parents:
            if (parent / 'pyproject.toml').exists():
                return parent

        # 如果還是沒找到，返回源碼目錄的父目錄
        return current_path.parent.parent

    def find_env_file(self, root_dir: Path) -> Optional[Path]:
        """遍歷查找環境變量文件"""
        for env_file in sorted(root_dir.rglob('.env')):
            if env_file.is_file() and '.venv' not in env_file.parts:
                return env_file

        return None

    def find_config_file(self, root_dir: Path) -> str:
        """查找配置文件（不存在時會在此路徑創建）"""
        return str(root_dir / "config.json")

    def setup_events(self):
        """設置事件處理器"""
        @self.bot.event
        async def on_ready():
            self.logger.info(f'{self.bot.user} 已經上線! (環境: {get_environment()})')
            self.logger.info(f'已連接到 {len(self.bot.guilds)} 個服務器')

            # 同步應用命令
            try:
                if self.dev_guild_id:
                    # 開發環境：只同步到指定公會
                    guild = discord.Object(id=self.dev_guild_id)
                    self.bot.tree.copy_global_to(guild=guild)
                    await self.bot.tree.sync(guild=guild)
                    self.logger.info(f"應用命令已同步到公會 {self.dev_guild_id}")
                else:
                    await self.bot.tree.sync()
                    self.logger.info("應用命令已全局同步")
            except discord.HTTPException as e:
                self.logger.error(f"同步應用命令時出錯: {e}")

        @self.bot.event
        async def on_guild_join(guild):
            """當機器人加入服務器時的處理"""
            self.logger.info(f'加入了服務器: {guild.name} (ID: {guild.id})')

    async def add_cogs(self):
        """添加Cog模塊"""
        from cogs.dice_cog import DiceCog
        from cogs.help_cog import HelpCog

        await self.bot.add_cog(DiceCog(self.bot, self.config_manager))
        await self.bot.add_cog(HelpCog(self.bot))

    async def start(self):
        """啟動機器人"""
        await self.add_cogs()
        await self.bot.start(self.token)

    async def close(self):
        """關閉機器人"""
        if not self.bot.is_closed():
            await self.bot.close()
