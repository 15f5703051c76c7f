"""
Tests for the Discord command layer.
"""

import pytest
from unittest.mock import MagicMock

from discord.ext import commands

from bot import DXDiceBot
from cogs.dice_cog import ERROR_COLOR, RESULT_COLOR, DiceCog
from cogs.help_cog import HelpCog
from utils.config import GuildConfig


def sent_embed(ctx):
    ctx.send.assert_awaited_once()
    return ctx.send.await_args.kwargs["embed"]


class TestDiceCog:

    @pytest.mark.asyncio
    async def test_valid_roll(self, config_manager, mock_ctx):
        cog = DiceCog(MagicMock(), config_manager)

        await cog.dx_command.callback(cog, mock_ctx, expression="8DX+5")

        embed = sent_embed(mock_ctx)
        assert embed.color.value == RESULT_COLOR
        assert "8DX+5" in embed.description
        assert "**【最終值】**" in embed.description
        assert embed.footer.text == "玩家: tester"

    @pytest.mark.asyncio
    async def test_malformed_roll(self, config_manager, mock_ctx):
        cog = DiceCog(MagicMock(), config_manager)

        await cog.dx_command.callback(cog, mock_ctx, expression="eight dice")

        embed = sent_embed(mock_ctx)
        assert embed.color.value == ERROR_COLOR
        assert "指令格式不正確" in embed.description
        assert "!dx 8DX+5" in embed.description

    @pytest.mark.asyncio
    async def test_guild_dice_cap(self, config_manager, mock_ctx):
        config_manager.guild_configs[77] = GuildConfig(dx_max_dice_count=5)
        mock_ctx.guild = MagicMock(id=77)
        cog = DiceCog(MagicMock(), config_manager)

        await cog.dx_command.callback(cog, mock_ctx, expression="6DX")

        embed = sent_embed(mock_ctx)
        assert embed.color.value == ERROR_COLOR
        assert "最多 5" in embed.description

    @pytest.mark.asyncio
    async def test_command_error_reply(self, config_manager, mock_ctx):
        cog = DiceCog(MagicMock(), config_manager)
        error = commands.CommandError("boom")

        await cog.cog_command_error(mock_ctx, error)

        embed = sent_embed(mock_ctx)
        assert embed.color.value == ERROR_COLOR
        assert "/dxhelp" in embed.description


class TestHelpCog:

    @pytest.mark.asyncio
    async def test_help(self, mock_ctx):
        cog = HelpCog(MagicMock())

        await cog.help_command.callback(cog, mock_ctx)

        embed = sent_embed(mock_ctx)
        assert "8DX+5" in embed.description
        assert mock_ctx.send.await_args.kwargs["ephemeral"] is True

    @pytest.mark.asyncio
    async def test_info(self, mock_ctx):
        cog = HelpCog(MagicMock())

        await cog.info_command.callback(cog, mock_ctx)

        embed = sent_embed(mock_ctx)
        assert "Double Cross" in embed.description


class TestDXDiceBot:

    def test_missing_token(self, tmp_path, clean_env):
        with pytest.raises(ValueError, match="DISCORD_TOKEN"):
            DXDiceBot(root_dir=tmp_path)

    @pytest.mark.asyncio
    async def test_setup(self, tmp_path, clean_env):
        clean_env.setenv("DISCORD_TOKEN", "token")

        dx_bot = DXDiceBot(root_dir=tmp_path)
        await dx_bot.add_cogs()

        assert (tmp_path / "config.json").exists()
        assert dx_bot.dev_guild_id is None
        assert dx_bot.bot.get_command("dx") is not None
        assert dx_bot.bot.get_command("DX") is not None
        assert dx_bot.bot.get_command("dxhelp") is not None
        assert dx_bot.bot.get_command("dxinfo") is not None

    def test_env_file_loaded(self, tmp_path, clean_env):
        (tmp_path / ".env").write_text("DISCORD_TOKEN=from-env-file\nGUILD_ID=42\n", encoding="utf-8")

        dx_bot = DXDiceBot(root_dir=tmp_path)

        assert dx_bot.token == "from-env-file"
        assert dx_bot.dev_guild_id == 42
