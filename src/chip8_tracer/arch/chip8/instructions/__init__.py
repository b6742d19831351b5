# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_tracer.core.snapshot import ExecutionResult, Operation
from chip8_tracer.transport.bus import CpuBus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import InstructionKind
from .maps import DECODE_MAP, EXECUTE_MAP, FORMAT_MAP

# @intent:responsibility 16bitオペコードを命令種別付きのOperationにデコードします。
# @intent:post-condition 結果はオペコードのみで決まり、CPUやバスの状態に依存しません。
def decode_opcode(opcode: int) -> Operation:
    """
    上位ニブル（必要に応じて下位ニブル・下位バイト）から命令種別を判定し、
    Operationオブジェクトを返します。該当しない場合はINVALIDになります。
    """
    kind = DECODE_MAP[(opcode & 0xF000) >> 12](opcode)
    mnemonic, operands = FORMAT_MAP[kind]
    return Operation(opcode=opcode, mnemonic=mnemonic, operands=operands(opcode), kind=kind)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: CpuBus) -> ExecutionResult:
    executor = EXECUTE_MAP[operation.kind]
    return executor(state, bus, operation)
