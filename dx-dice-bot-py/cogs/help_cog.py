import discord
from discord.ext import commands

from utils.formatter import BOT_NAME, format_help_message, format_info_message


class HelpCog(commands.Cog, name="Help"):
    """說明相關指令"""
    def __init__(self, bot):
        self.bot = bot

    @commands.hybrid_command(name="dxhelp", description="顯示 Double Cross 擲骰說明")
    async def help_command(self, ctx):
        """顯示幫助信息"""
        embed = discord.Embed(
            title=f"📖 {BOT_NAME} 說明",
            description=format_help_message(),
            color=0x3498db
        )
        await ctx.send(embed=embed, ephemeral=True)

    @commands.hybrid_command(name="dxinfo", description="顯示機器人資訊")
    async def info_command(self, ctx):
        """顯示機器人資訊"""
        embed = discord.Embed(
            title=f"🤖 {BOT_NAME} 資訊",
            description=format_info_message(),
            color=0x9b59b6
        )
        await ctx.send(embed=embed, ephemeral=True)
