import re
from typing import Optional, Union
from models.types import (
    DEFAULT_CRITICAL,
    DIE_SIDES,
    MIN_CRITICAL,
    ParseError,
    ParseErrorKind,
    RollRequest,
)
from utils.config import GuildConfig


# 個數DX[臨界值][修正值][@臨界值]，如: 8DX+5, 7DX8+3, 7DX+3@8
DX_PATTERN = re.compile(r"^(\d+)DX(\d+)?([+-]\d+)?(?:@(\d+))?$", re.IGNORECASE | re.ASCII)

USAGE_EXAMPLE = "例: 8DX+5 或 7DX8+3"

# 與 CPython 預設的整數字串位數上限相同
MAX_DIGITS = 4300


def to_int(digits: str) -> Optional[int]:
    """轉換數字字串，位數超過 MAX_DIGITS 時回傳 None"""
    if len(digits.lstrip("+-")) > MAX_DIGITS:
        return None
    try:
        return int(digits)
    except ValueError:
        return None


def parse_dx_expr(expr: str, rules: Optional[GuildConfig] = None) -> Union[RollRequest, ParseError]:
    """
    解析 DX 骰子表達式，比如 "8DX+5"、"7DX8+3" 或 "7DX+3@8"

    失敗時回傳 ParseError 而不拋出例外。
    同時出現 @ 形式與行內形式時以 @ 形式為準，都沒有時臨界值為 10。
    傳入 rules 時會檢查骰子數量上限。
    """
    if not isinstance(expr, str):
        return ParseError(
            kind=ParseErrorKind.MALFORMED_SYNTAX,
            raw_text="" if expr is None else str(expr),
            message=f"指令格式不正確。{USAGE_EXAMPLE}"
        )

    match = DX_PATTERN.fullmatch(expr.strip())

    if not match:
        return ParseError(
            kind=ParseErrorKind.MALFORMED_SYNTAX,
            raw_text=expr,
            message=f"指令格式不正確。{USAGE_EXAMPLE}"
        )

    pool_size = to_int(match.group(1))

    if pool_size is None:
        return ParseError(
            kind=ParseErrorKind.POOL_SIZE_OUT_OF_RANGE,
            raw_text=expr,
            message="骰子數量過多"
        )

    if pool_size == 0:
        return ParseError(
            kind=ParseErrorKind.POOL_SIZE_OUT_OF_RANGE,
            raw_text=expr,
            message="骰子數量必須至少為1"
        )

    if rules is not None and pool_size > rules.dx_max_dice_count:
        return ParseError(
            kind=ParseErrorKind.POOL_SIZE_OUT_OF_RANGE,
            raw_text=expr,
            message=f"骰子數量過多 (最多 {rules.dx_max_dice_count})"
        )

    inline_critical = match.group(2)
    modifier_match = match.group(3)
    at_critical = match.group(4)

    # 臨界值的決定（@形式優先）
    if at_critical is not None:
        critical = to_int(at_critical)
    elif inline_critical is not None:
        critical = to_int(inline_critical)
    else:
        critical = DEFAULT_CRITICAL

    if critical is None or not MIN_CRITICAL <= critical <= DIE_SIDES:
        return ParseError(
            kind=ParseErrorKind.CRITICAL_OUT_OF_RANGE,
            raw_text=expr,
            message=f"臨界值必須介於 {MIN_CRITICAL} 到 {DIE_SIDES} 之間"
        )

    modifier = to_int(modifier_match) if modifier_match else 0

    if modifier is None:
        return ParseError(
            kind=ParseErrorKind.MODIFIER_OUT_OF_RANGE,
            raw_text=expr,
            message="修正值位數過多"
        )

    return RollRequest(
        pool_size=pool_size,
        critical_threshold=critical,
        modifier=modifier,
        source_text=expr
    )


def format_dx_expr(request: RollRequest) -> str:
    """格式化 DX 表達式"""
    expr = f"{request.pool_size}DX"

    if request.critical_threshold != DEFAULT_CRITICAL:
        expr += str(request.critical_threshold)

    if request.modifier != 0:
        expr += f"{request.modifier:+d}"

    return expr
