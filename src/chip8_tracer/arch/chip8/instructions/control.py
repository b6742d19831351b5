# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ、キー入力）の実装。
"""
import logging

from chip8_tracer.core.snapshot import ExecutionResult, Operation
from chip8_tracer.transport.bus import CpuBus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import field_nn, field_nnn, field_x, field_y, reg_name

logger = logging.getLogger(__name__)

# --- 00EE ---
# @intent:responsibility コールスタックから戻りアドレスをポップしてジャンプします。
def execute_ret(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    address = state.pop()
    return ExecutionResult.jump(address, f"Return to addr {address:#06x}")

# --- 1nnn ---
def execute_jp(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    nnn = field_nnn(op.opcode)
    return ExecutionResult.jump(nnn, f"Jump to addr {nnn:#06x}")

# --- 2nnn ---
# @intent:responsibility 次の命令のアドレス (PC+2) をプッシュしてから nnn へジャンプします。
def execute_call(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    nnn = field_nnn(op.opcode)
    state.push(state.pc + 2)
    return ExecutionResult.jump(nnn, f"Call subroutine at {nnn:#06x}")

# --- Bnnn ---
def execute_jp_v0(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    nnn = field_nnn(op.opcode)
    return ExecutionResult.jump(nnn + state.v[0], f"Jump to {nnn:#06x} + {state.v[0]:#04x}")

# --- 3xnn ---
def execute_se_vx_nn(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, nn = field_x(op.opcode), field_nn(op.opcode)
    return ExecutionResult.skip_if(
        state.v[x] == nn, f"If {reg_name(x)} ({state.v[x]}) == {nn}, skip next instr")

# --- 4xnn ---
def execute_sne_vx_nn(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, nn = field_x(op.opcode), field_nn(op.opcode)
    return ExecutionResult.skip_if(
        state.v[x] != nn, f"If {reg_name(x)} ({state.v[x]}) != {nn}, skip next instr")

# --- 5xy0 ---
def execute_se_vx_vy(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    return ExecutionResult.skip_if(
        state.v[x] == state.v[y],
        f"If {reg_name(x)} ({state.v[x]}) == {reg_name(y)} ({state.v[y]}), skip next instr")

# --- 9xy0 ---
def execute_sne_vx_vy(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x, y = field_x(op.opcode), field_y(op.opcode)
    return ExecutionResult.skip_if(
        state.v[x] != state.v[y],
        f"If {reg_name(x)} ({state.v[x]}) != {reg_name(y)} ({state.v[y]}), skip next instr")

# --- Ex9E ---
# @intent:responsibility Vx のキーが押されていれば次の命令をスキップします。
def execute_skp(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    key = state.v[field_x(op.opcode)]
    pressed = bus.is_key_pressed(key)
    return ExecutionResult.skip_if(pressed, f"Skip next instr if key {key:X} pressed ({pressed})")

# --- ExA1 ---
def execute_sknp(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    key = state.v[field_x(op.opcode)]
    not_pressed = not bus.is_key_pressed(key)
    return ExecutionResult.skip_if(
        not_pressed, f"Skip next instr if key {key:X} not pressed ({not_pressed})")

# --- Fx0A ---
# @intent:responsibility キー入力待ち状態に入ります。CPUは入力が解決されるまで停止します。
def execute_ld_vx_k(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x = field_x(op.opcode)
    bus.request_key_press(x)
    return ExecutionResult.advance(f"Store next key press in {reg_name(x)}")

# --- Invalid ---
# @intent:responsibility 未定義の命令をログに記録し、NOPとして扱います。
def execute_invalid(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    logger.warning("Invalid instruction %s at %#06x", op.opcode_hex, state.pc)
    return ExecutionResult.advance("Invalid Instruction")
