import random
from typing import List, Optional, Protocol, Tuple

from models.types import CRITICAL_BONUS, DIE_SIDES, RollOutcome, RollRequest
from utils.logger import get_logger


DEFAULT_MAX_ROUNDS = 100
ROLL_FAILED_MESSAGE = "擲骰處理時發生錯誤"


class RandomSource(Protocol):
    """骰子亂數來源，每次呼叫回傳 1~10 的整數"""
    def next_die(self) -> int:
        ...


class RandomDieSource:
    """以 random.Random 擲十面骰"""
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def next_die(self) -> int:
        return self.rng.randint(1, DIE_SIDES)


def roll_pool(source: RandomSource, count: int) -> Tuple[int, ...]:
    """擲一輪骰子，出目超出範圍時拋出 ValueError"""
    values = []
    for _ in range(count):
        value = source.next_die()
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= DIE_SIDES:
            raise ValueError(f"亂數來源回傳了無效的出目: {value!r}")
        values.append(value)
    return tuple(values)


def resolve(request: RollRequest, source: RandomSource,
            max_rounds: Optional[int] = DEFAULT_MAX_ROUNDS) -> RollOutcome:
    """
    執行 DX 擲骰（無限上方擲骰）

    每輪達到臨界值的骰子數量即為下一輪要重擲的數量，直到某一輪沒有骰子達到臨界值。
    總值 = 最後一輪的最大出目 + 爆骰次數 * 10 + 修正值

    max_rounds 為輪數上限（None 表示不設限），達到上限時結果仍有效但標記 capped。
    """
    if not request.is_valid:
        return RollOutcome.invalid(request.source_text, request.error_message)

    if request.pool_size <= 0:
        return RollOutcome.invalid(request.source_text, "骰子數量必須至少為1")

    logger = get_logger()
    threshold = request.critical_threshold

    current_dice = request.pool_size
    explosions = 0
    rounds: List[Tuple[int, ...]] = []
    capped = False

    try:
        while current_dice > 0:
            latest = roll_pool(source, current_dice)
            rounds.append(latest)

            hits = sum(1 for v in latest if v >= threshold)
            if hits == 0:
                break

            if max_rounds is not None and len(rounds) >= max_rounds:
                capped = True
                logger.warning(
                    f"擲骰 {request.source_text!r} 達到輪數上限 {max_rounds}，中止爆骰"
                )
                break

            # 爆骰：下一輪只重擲達到臨界值的骰子
            explosions += 1
            current_dice = hits
    except Exception as e:
        # 亂數來源的任何錯誤都轉為無效結果
        logger.error(f"擲骰失敗 {request.source_text!r}: {e}", exc_info=True)
        return RollOutcome.invalid(request.source_text, ROLL_FAILED_MESSAGE)

    peak = max(rounds[-1])
    total = peak + explosions * CRITICAL_BONUS + request.modifier

    logger.debug(
        f"擲骰 {request.source_text!r}: {len(rounds)} 輪, 爆骰 {explosions} 次, 總值 {total}"
    )

    return RollOutcome(
        source_text=request.source_text,
        rounds=tuple(rounds),
        all_values=tuple(v for r in rounds for v in r),
        explosion_count=explosions,
        total=total,
        modifier_applied=request.modifier,
        critical_threshold=threshold,
        valid=True,
        capped=capped
    )
