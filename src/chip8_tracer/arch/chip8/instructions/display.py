# src/chip8_tracer/arch/chip8/instructions/display.py
"""
画面命令（クリア、スプライト描画）の実装。
"""
from chip8_tracer.core.snapshot import ExecutionResult, Operation
from chip8_tracer.transport.bus import CpuBus
from chip8_tracer.devices.graphics import HEIGHT, WIDTH
from chip8_tracer.arch.chip8.state import Chip8CpuState, FLAG_REGISTER
from .base import field_n, field_x, field_y

# --- 00E0 ---
def execute_cls(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    bus.clear_screen()
    return ExecutionResult.advance("Clear the screen")

# @intent:responsibility VBlank待ちの開始以降にVBlankが発生したかを判定します。
# @intent:rationale 実時間でスピンせず、1サイクルにつきクロックを1回だけ進めて協調的に待ちます。
#                  待機中のサイクルでは、マシンのステップ冒頭で発生したVBlankも待ち開始後のものとして扱います。
def _vblank_observed(state: Chip8CpuState, bus: CpuBus) -> bool:
    if state.awaiting_vblank and bus.vblank:
        return True
    bus.tick_clock()
    return bus.vblank

# --- Dxyn ---
# @intent:responsibility I から n バイトのスプライトを (Vx, Vy) にXOR描画し、衝突の有無をVFに格納します。
# @intent:pre-condition vblank_wait が有効な場合、VBlankを観測するまでPCを進めずに描画を保留します。
def execute_drw(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    if state.vblank_wait and not _vblank_observed(state, bus):
        state.awaiting_vblank = True
        return ExecutionResult.stall("Waiting for vblank")
    state.awaiting_vblank = False

    n = field_n(op.opcode)
    x = state.v[field_x(op.opcode)] % WIDTH
    y = state.v[field_y(op.opcode)] % HEIGHT
    display = f"Draw {n} byte sprite from addr {state.i:#06x} at point ({x}, {y})"

    collision = False
    for row in range(n):
        data = bus.read(state.i + row)
        collision = bus.draw_byte(x, y + row, data) or collision

    state.v[FLAG_REGISTER] = 1 if collision else 0
    return ExecutionResult.advance(display)
