from typing import Optional
from models.types import DEFAULT_CRITICAL, RollOutcome


BOT_NAME = "DX Dice Bot"
BOT_VERSION = "1.0.0"
USAGE_EXAMPLE = "!dx 8DX+5"


def format_modifier(modifier: int) -> str:
    """格式化修正值，0 時為空字串"""
    if modifier == 0:
        return ""
    return f" {modifier:+d}"


def format_dx_result(outcome: RollOutcome) -> str:
    """格式化 DX 擲骰結果"""
    if not outcome.valid:
        return f"❌ **錯誤**\n\n{outcome.error_message}\n\n使用範例: `{USAGE_EXAMPLE}`"

    lines = [
        f"**【指令】** {outcome.source_text}",
        f"**【骰子】** {outcome.trace}{format_modifier(outcome.modifier_applied)} = {outcome.total}",
        f"**【最終值】** {outcome.total}",
    ]

    if outcome.explosion_count > 0:
        lines.append(f"**【爆骰】** {outcome.explosion_count} 次 (+{outcome.critical_bonus})")

    if outcome.capped:
        lines.append(f"⚠️ 已達到輪數上限 ({len(outcome.rounds)} 輪)，爆骰中止")

    return "\n".join(lines)


def format_help_message() -> str:
    """格式化說明訊息"""
    return (
        "**【基本指令】**\n"
        "`!dx [個數]DX[臨界值][修正值][@臨界值]`\n\n"

        "**【範例】**\n"
        "`!dx 8DX+5` - 8 顆骰子，修正值 +5\n"
        "`!dx 7DX8+3` - 7 顆骰子，臨界值 8，修正值 +3\n"
        "`!dx 10DX+0@7` - 10 顆骰子，臨界值 7，無修正值\n\n"

        "**【說明】**\n"
        "• 個數: 要擲的十面骰數量\n"
        f"• 臨界值: 出目達到此值即爆骰並重擲（省略時為 {DEFAULT_CRITICAL}，@ 形式優先）\n"
        "• 修正值: 加到最終結果的數值\n"
        "• 全形 `！dx` 與斜線指令 `/dx` 也可使用\n\n"

        "**【其他指令】**\n"
        "`/dxhelp` - 顯示此說明\n"
        "`/dxinfo` - 顯示機器人資訊"
    )


def format_info_message() -> str:
    """格式化機器人資訊"""
    return (
        f"**【機器人名稱】** {BOT_NAME}\n"
        f"**【版本】** {BOT_VERSION}\n"
        "**【對應系統】** Double Cross 2nd, 3rd\n\n"

        "**【功能】**\n"
        "• Double Cross 專用擲骰判定\n"
        "• 臨界值指定（行內或 @ 形式）\n"
        "• 修正值自動計算\n\n"

        "**【開發】**\n"
        "Python + discord.py"
    )


def format_error_message(error: str, suggestion: Optional[str] = None) -> str:
    """格式化錯誤訊息"""
    message = error

    if suggestion:
        message += f"\n\n**【建議】**\n{suggestion}"

    message += "\n\n**【說明】** `/dxhelp`"
    return message
