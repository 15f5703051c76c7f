from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


DIE_SIDES = 10
DEFAULT_CRITICAL = 10
MIN_CRITICAL = 2
CRITICAL_BONUS = 10  # 每次爆骰固定加值

DEFAULT_ROLL_ERROR = "發生錯誤"


@dataclass(frozen=True)
class RollRequest:
    """DX 擲骰請求（解析結果）"""
    pool_size: int
    critical_threshold: int = DEFAULT_CRITICAL
    modifier: int = 0
    source_text: str = ""
    is_valid: bool = True
    error_message: Optional[str] = None

    @classmethod
    def invalid(cls, source_text: str, message: Optional[str] = None) -> "RollRequest":
        """建立無效的請求（數值全為零）"""
        return cls(
            pool_size=0,
            critical_threshold=0,
            modifier=0,
            source_text=source_text,
            is_valid=False,
            error_message=message or DEFAULT_ROLL_ERROR
        )


@dataclass(frozen=True)
class RollOutcome:
    """DX 擲骰結果"""
    source_text: str
    rounds: Tuple[Tuple[int, ...], ...] = ()
    all_values: Tuple[int, ...] = ()
    explosion_count: int = 0
    total: int = 0
    modifier_applied: int = 0
    critical_threshold: int = 0
    valid: bool = True
    error_message: Optional[str] = None
    capped: bool = False  # 達到輪數上限而中止

    @classmethod
    def invalid(cls, source_text: str, message: Optional[str] = None) -> "RollOutcome":
        """建立無效的結果"""
        return cls(
            source_text=source_text,
            valid=False,
            error_message=message or DEFAULT_ROLL_ERROR
        )

    @property
    def peak(self) -> int:
        """最後一輪的最大出目"""
        if not self.rounds:
            return 0
        return max(self.rounds[-1])

    @property
    def critical_bonus(self) -> int:
        return self.explosion_count * CRITICAL_BONUS

    @property
    def trace(self) -> str:
        """
        每輪出目以括號表示並以箭頭連接，如 "[9,1,3]→[10,7]"
        """
        return "→".join(
            "[" + ",".join(map(str, r)) + "]" for r in self.rounds
        )


class ParseErrorKind(Enum):
    """解析錯誤類型"""
    MALFORMED_SYNTAX = "malformed_syntax"
    POOL_SIZE_OUT_OF_RANGE = "pool_size_out_of_range"
    CRITICAL_OUT_OF_RANGE = "critical_out_of_range"
    MODIFIER_OUT_OF_RANGE = "modifier_out_of_range"


@dataclass(frozen=True)
class ParseError:
    """解析錯誤（作為回傳值，不會被拋出）"""
    kind: ParseErrorKind
    raw_text: str
    message: str = DEFAULT_ROLL_ERROR

    def to_request(self) -> RollRequest:
        """轉換為無效請求，讓呼叫端可以統一交給引擎處理"""
        return RollRequest.invalid(self.raw_text, self.message)
