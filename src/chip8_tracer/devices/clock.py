# src/chip8_tracer/devices/clock.py
"""
Device Layer (タイマー)

ディレイタイマーとサウンドタイマーを64Hzで減算するクロックです。
"""
import time
from typing import Callable, Optional

TIMER_FREQUENCY_HZ = 64.0
TICK_PERIOD = 1.0 / TIMER_FREQUENCY_HZ


def _check_timer_value(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"Timer value {value} is not an 8-bit value.")
    return value

# @intent:responsibility 経過時間に基づいて2つのカウントダウンタイマーとVBlankフラグを更新します。
class Clock:
    """
    ディレイ・サウンドの2本のタイマーを保持するクロック。
    時刻の取得元は差し替え可能で、テストでは疑似時刻を注入します。
    """
    def __init__(self, time_source: Optional[Callable[[], float]] = None):
        self._time_source = time_source or time.monotonic
        self._delay_timer = 0
        self._sound_timer = 0
        self.vblank = False
        self.last_tick = self._time_source()

    @property
    def delay_timer(self) -> int:
        return self._delay_timer

    @delay_timer.setter
    def delay_timer(self, value: int) -> None:
        self._delay_timer = _check_timer_value(value)

    @property
    def sound_timer(self) -> int:
        return self._sound_timer

    @sound_timer.setter
    def sound_timer(self, value: int) -> None:
        self._sound_timer = _check_timer_value(value)

    # @intent:responsibility 1/64秒以上経過していればタイマーを1減算し、VBlankを立てます。
    # @intent:rationale last_tickは「現在時刻」ではなく1周期分だけ進め、誤差の蓄積を防ぎます。
    def update(self) -> None:
        elapsed = self._time_source() - self.last_tick
        if elapsed >= TICK_PERIOD:
            self._delay_timer = max(self._delay_timer - 1, 0)
            self._sound_timer = max(self._sound_timer - 1, 0)
            self.vblank = True
            self.last_tick += TICK_PERIOD
        else:
            self.vblank = False
