# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_tracer.common.errors import BoundsViolationError, StackOverflowError, StackUnderflowError
from chip8_tracer.core.state import CpuState

REGISTER_COUNT = 16
STACK_DEPTH = 16
START_PC = 0x200
FLAG_REGISTER = 0xF

# @intent:responsibility CHIP-8 CPUのレジスタ（V0-VF, I, PC, SP）、コールスタック、設定フラグを保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    VFは汎用レジスタであると同時に、キャリー・ボロー・衝突フラグとして上書きされます。
    """
    pc: int = START_PC
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    shift_quirk_enabled: bool = False # 8xy6/8xyE で Vy を Vx にコピーしてからシフトする
    vblank_wait: bool = False # Dxyn をVBlankまで待たせる
    awaiting_vblank: bool = False # Dxyn がVBlankを待っている途中

    # @intent:accessor レジスタ番号を検証してから読み書きします。
    def get_v(self, index: int) -> int:
        if not 0 <= index < REGISTER_COUNT:
            raise BoundsViolationError(f"Register V{index} out of range V0-VF.")
        return self.v[index]

    def set_v(self, index: int, value: int) -> None:
        if not 0 <= index < REGISTER_COUNT:
            raise BoundsViolationError(f"Register V{index} out of range V0-VF.")
        self.v[index] = value & 0xFF

    # @intent:responsibility 戻りアドレスをコールスタックに積みます。
    # @intent:post-condition 16段を超える呼び出しはStackOverflowErrorとなります（容量は拡張しません）。
    def push(self, address: int) -> None:
        if self.sp >= STACK_DEPTH:
            raise StackOverflowError(f"Call stack overflow at PC {self.pc:#06x} (depth {STACK_DEPTH}).")
        self.stack[self.sp] = address
        self.sp += 1

    def pop(self) -> int:
        if self.sp <= 0:
            raise StackUnderflowError(f"Return with empty call stack at PC {self.pc:#06x}.")
        self.sp -= 1
        return self.stack[self.sp]
