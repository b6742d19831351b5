# src/chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のニーモニックに変換します。
Instruction Layerのデコードロジックを再利用し、読み出しはpeekで行うため
バスアクセスログを汚しません。
"""
from typing import List

from chip8_tracer.common.types import DisassemblyRow
from chip8_tracer.transport.bus import CpuBus
from chip8_tracer.transport.memory import MEMORY_SIZE
from chip8_tracer.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: CpuBus, start_addr: int, length: int) -> List[DisassemblyRow]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    end_addr = min(start_addr + length, MEMORY_SIZE - 1)

    for address in range(start_addr, end_addr, 2):
        high = bus.peek(address)
        low = bus.peek(address + 1)
        operation = decode_opcode((high << 8) | low)
        result.append((address, f"{high:02X} {low:02X}", operation.text()))

    return result
