# src/chip8_tracer/arch/chip8/instructions/load.py
"""
ロード・ストア命令（Iレジスタ、タイマー、BCD、レジスタ退避/復帰）の実装。
"""
from chip8_tracer.core.snapshot import ExecutionResult, Operation
from chip8_tracer.transport.bus import CpuBus
from chip8_tracer.transport.memory import FONT_GLYPH_SIZE
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import field_nnn, field_x, reg_name

# --- Annn ---
def execute_ld_i(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    nnn = field_nnn(op.opcode)
    state.i = nnn
    return ExecutionResult.advance(f"Set I register to {nnn:#06x}")

# --- Fx07 ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x = field_x(op.opcode)
    delay = bus.get_delay_timer()
    state.set_v(x, delay)
    return ExecutionResult.advance(f"Set {reg_name(x)} to delay timer {delay}")

# --- Fx15 ---
def execute_ld_dt_vx(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x = field_x(op.opcode)
    bus.set_delay_timer(state.v[x])
    return ExecutionResult.advance(f"Set delay timer to {reg_name(x)} ({state.v[x]})")

# --- Fx18 ---
def execute_ld_st_vx(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x = field_x(op.opcode)
    bus.set_sound_timer(state.v[x])
    return ExecutionResult.advance(f"Set sound timer to {reg_name(x)} ({state.v[x]})")

# --- Fx1E ---
def execute_add_i_vx(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x = field_x(op.opcode)
    state.i = (state.i + state.v[x]) & 0xFFFF
    return ExecutionResult.advance(f"Set I to I + {reg_name(x)}")

# --- Fx29 ---
# @intent:responsibility Vx の値に対応するフォントグリフのアドレスを I に設定します。
def execute_ld_f_vx(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x = field_x(op.opcode)
    state.i = FONT_GLYPH_SIZE * state.v[x]
    return ExecutionResult.advance(f"Set I to addr of sprite digit {state.v[x]}")

# --- Fx33 ---
# @intent:responsibility Vx の10進表現（百の位、十の位、一の位）を I から3バイトに書き込みます。
def execute_ld_b_vx(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    value = state.v[field_x(op.opcode)]
    bus.write(state.i, (value // 100) % 10)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)
    return ExecutionResult.advance(f"Store BCD of {value} starting at I")

# --- Fx55 ---
# @intent:responsibility V0..Vx を I から順にメモリへ書き込みます。
# @intent:post-condition I は1バイトごとに加算され、最終的に I + x + 1 になります。
def execute_ld_mem_vx(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x = field_x(op.opcode)
    for index in range(x + 1):
        bus.write(state.i, state.v[index])
        state.i += 1
    return ExecutionResult.advance(f"Store V0 to {reg_name(x)} starting at I")

# --- Fx65 ---
def execute_ld_vx_mem(state: Chip8CpuState, bus: CpuBus, op: Operation) -> ExecutionResult:
    x = field_x(op.opcode)
    for index in range(x + 1):
        state.set_v(index, bus.read(state.i))
        state.i += 1
    return ExecutionResult.advance(f"Read memory at I into V0 to {reg_name(x)}")
