# tests/arch/chip8/test_chip8_disassembler.py
"""
chip8_tracer.arch.chip8.disassemblerモジュールの単体テスト。
"""
from chip8_tracer.arch.chip8.disassembler import disassemble
from chip8_tracer.transport.memory import MEMORY_SIZE

# @intent:test_suite 逆アセンブル結果の行形式と、バスアクセスログに影響しないことを検証します。

def test_disassemble_rows(program):
    machine = program(0x6A05, 0xA000, 0xD0A5, 0x1200)
    rows = disassemble(machine.bus, 0x200, 8)
    assert rows == [
        (0x200, "6A 05", "LD VA, #$05"),
        (0x202, "A0 00", "LD I, $000"),
        (0x204, "D0 A5", "DRW V0, VA, 5"),
        (0x206, "12 00", "JP $200"),
    ]
    assert machine.bus.get_and_clear_activity_log() == []


def test_disassemble_stops_at_memory_end(machine):
    rows = machine.cpu.disassemble(machine.bus, MEMORY_SIZE - 4, 16)
    assert [row[0] for row in rows] == [MEMORY_SIZE - 4, MEMORY_SIZE - 2]
    assert rows[-1][2] == "UNKNOWN $0000"
