import discord
from discord.ext import commands

from models.types import ParseError
from utils.dx_parser import parse_dx_expr
from utils.dx_engine import RandomDieSource, resolve
from utils.formatter import USAGE_EXAMPLE, format_dx_result, format_error_message
from utils.logger import get_logger


RESULT_COLOR = 0x00ff00
ERROR_COLOR = 0xff0000


class DiceCog(commands.Cog, name="Dice"):
    """骰子相關指令"""
    def __init__(self, bot, config_manager):
        self.bot = bot
        self.config_manager = config_manager
        self.logger = get_logger()

    @commands.hybrid_command(name="dx", description="Double Cross 擲骰")
    async def dx_command(self, ctx, *, expression: str):
        """DX 骰子指令 - 擲骰子"""
        # 獲取公會配置
        guild_id = ctx.guild.id if ctx.guild else None
        rules = self.config_manager.get_guild_config(guild_id)

        parsed = parse_dx_expr(expression, rules)
        request = parsed.to_request() if isinstance(parsed, ParseError) else parsed

        # 每次擲骰使用獨立的亂數來源
        outcome = resolve(request, RandomDieSource(), max_rounds=rules.dx_max_rounds)

        embed = discord.Embed(
            title="🎲 Double Cross 判定結果",
            description=format_dx_result(outcome),
            color=RESULT_COLOR if outcome.valid else ERROR_COLOR
        )
        embed.set_footer(text=f"玩家: {ctx.author.display_name}")

        await ctx.send(embed=embed)

    async def cog_command_error(self, ctx, error):
        """指令處理失敗時回覆錯誤訊息"""
        content = ctx.message.content if ctx.message else ""
        self.logger.error(f"處理指令 {content!r} 時出錯: {error}")

        if isinstance(error, commands.MissingRequiredArgument):
            description = format_error_message(
                "缺少骰子表達式。",
                f"例: `{USAGE_EXAMPLE}`"
            )
        else:
            description = format_error_message(
                "處理擲骰指令時發生錯誤。",
                f"請確認指令格式。例: `{USAGE_EXAMPLE}`"
            )

        embed = discord.Embed(
            title="❌ 錯誤",
            description=description,
            color=ERROR_COLOR
        )
        await ctx.send(embed=embed)

