# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

8xy1/8xy2/8xy3 はVFを0にクリアし、8xy4/8xy5/8xy6/8xy7/8xyE は結果を書き込んだ後に
VFへキャリー（ボローなし）やシフトアウトしたビットを書き込みます。
"""
import random

from chip8_tracer.core.snapshot import ExecutionResult, Operation
from chip8_tracer.transport.bus import CpuBus
from chip8_tracer.arch.chip8.state import Chip8CpuState, FLAG_REGISTER
from .base import field_nn, field_x, field_y, reg_name

# --- 6xnn ---
# @intent:responsibility Vx に即値 nn を設定します。
def execute_ld_vx_nn(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, nn = field_x(op.opcode), field_nn(op.opcode)
    state.set_v(x, nn)
    return ExecutionResult.advance(f"Set {reg_name(x)} to {nn}")

# --- 7xnn ---
# @intent:responsibility Vx に即値 nn を加算します。キャリーは捨て、VFは変更しません。
def execute_add_vx_nn(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, nn = field_x(op.opcode), field_nn(op.opcode)
    state.set_v(x, state.v[x] + nn)
    return ExecutionResult.advance(f"Add {nn} to {reg_name(x)}")

# --- 8xy0 ---
def execute_ld_vx_vy(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    state.set_v(x, state.v[y])
    return ExecutionResult.advance(f"Set {reg_name(x)} to {reg_name(y)} ({state.v[y]})")

# --- 8xy1 / 8xy2 / 8xy3 ---
# @intent:utility_function ビット演算の共通処理。結果をVxに格納し、VFを0にします。
def _bitwise(state: Chip8CpuState, op: Operation, name: str, result: int) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    display = (f"Set {reg_name(x)} to {reg_name(x)} {name} {reg_name(y)} "
               f"({state.v[x]:02X} {name} {state.v[y]:02X})")
    state.set_v(x, result)
    state.v[FLAG_REGISTER] = 0
    return ExecutionResult.advance(display)

def execute_or(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    return _bitwise(state, op, "OR", state.v[x] | state.v[y])

def execute_and(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    return _bitwise(state, op, "AND", state.v[x] & state.v[y])

def execute_xor(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    return _bitwise(state, op, "XOR", state.v[x] ^ state.v[y])

# --- 8xy4 ---
# @intent:responsibility Vx = Vx + Vy。8bitを超えた場合VF=1、それ以外はVF=0。
def execute_add_vx_vy(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    total = state.v[x] + state.v[y]
    carry = 1 if total > 0xFF else 0
    display = f"Set {reg_name(x)} to ({state.v[x]} + {state.v[y]}), VF = {carry}"
    state.set_v(x, total)
    state.v[FLAG_REGISTER] = carry
    return ExecutionResult.advance(display)

# --- 8xy5 ---
# @intent:responsibility Vx = Vx - Vy。ボローが発生しなければVF=1。
def execute_sub_vx_vy(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    not_borrow = 1 if state.v[x] >= state.v[y] else 0
    display = f"Set {reg_name(x)} to ({state.v[x]} - {state.v[y]}), VF = {not_borrow}"
    state.set_v(x, state.v[x] - state.v[y])
    state.v[FLAG_REGISTER] = not_borrow
    return ExecutionResult.advance(display)

# --- 8xy7 ---
# @intent:responsibility Vx = Vy - Vx。ボローが発生しなければVF=1。
def execute_subn_vx_vy(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    not_borrow = 1 if state.v[y] >= state.v[x] else 0
    display = f"Set {reg_name(x)} to ({state.v[y]} - {state.v[x]}), VF = {not_borrow}"
    state.set_v(x, state.v[y] - state.v[x])
    state.v[FLAG_REGISTER] = not_borrow
    return ExecutionResult.advance(display)

# --- 8xy6 ---
# @intent:responsibility Vxを1bit右シフトし、押し出されたbitをVFに格納します。
# @intent:rationale shift_quirk_enabled の場合のみ、先に Vy を Vx にコピーします。
def execute_shr(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    if state.shift_quirk_enabled:
        state.set_v(x, state.v[y])
    shifted_out = state.v[x] & 0x01
    state.set_v(x, state.v[x] >> 1)
    state.v[FLAG_REGISTER] = shifted_out
    return ExecutionResult.advance(f"{reg_name(x)} shifted one right, VF = {shifted_out}")

# --- 8xyE ---
def execute_shl(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    if state.shift_quirk_enabled:
        state.set_v(x, state.v[y])
    shifted_out = (state.v[x] & 0x80) >> 7
    state.set_v(x, state.v[x] << 1)
    state.v[FLAG_REGISTER] = shifted_out
    return ExecutionResult.advance(f"{reg_name(x)} shifted one left, VF = {shifted_out}")

# --- Cxnn ---
# @intent:responsibility 一様乱数の1バイトと nn の論理積を Vx に格納します。
def execute_rnd(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, nn = field_x(op.opcode), field_nn(op.opcode)
    value = random.randint(0, 0xFF)
    state.set_v(x, value & nn)
    return ExecutionResult.advance(f"Set {reg_name(x)} to {value} [rand] AND {nn:#04x}")
