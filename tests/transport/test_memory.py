# tests/transport/test_memory.py
"""
chip8_tracer.transport.memoryモジュールの単体テスト。
"""
import pytest

from chip8_tracer.common.errors import BoundsViolationError
from chip8_tracer.transport.memory import FONT, MEMORY_SIZE, ROM_SIZE, ROM_START, Memory

# @intent:test_suite メインメモリの初期化、ROMロード、境界チェックを検証します。

class TestMemory:
    # @intent:test_case_init 生成直後はフォントのみが書き込まれていることを検証します。
    def test_initial_contents(self):
        memory = Memory()
        assert memory.dump(0, len(FONT)) == FONT
        assert len(FONT) == 80
        assert memory.dump(len(FONT), MEMORY_SIZE - len(FONT)) == bytes(MEMORY_SIZE - len(FONT))

    # @intent:test_case_rw 境界内の読み書きを検証します。
    def test_read_write(self):
        memory = Memory()
        memory.write(0x300, 0xAB)
        memory.write(MEMORY_SIZE - 1, 0x01)
        assert memory.read(0x300) == 0xAB
        assert memory.read(MEMORY_SIZE - 1) == 0x01

    # @intent:test_case_oob 範囲外アクセスはBoundsViolationError（IndexError互換）になることを検証します。
    def test_out_of_bounds(self):
        memory = Memory()
        with pytest.raises(BoundsViolationError):
            memory.read(MEMORY_SIZE)
        with pytest.raises(IndexError):
            memory.write(-1, 0x00)

    # @intent:test_case_data 8bitを超える値の書き込みはValueErrorになることを検証します。
    def test_write_invalid_data(self):
        memory = Memory()
        with pytest.raises(ValueError, match="not an 8-bit value"):
            memory.write(0x200, 0x100)
        with pytest.raises(ValueError):
            memory.write(0x200, -1)

    # @intent:test_case_rom ROMはゼロ埋めされて3584バイトちょうどになることを検証します。
    def test_load_rom_round_trip(self):
        memory = Memory()
        rom = bytes([0x6A, 0x05, 0xA0, 0x00, 0xD0, 0xA5])
        memory.load_rom(rom)
        assert memory.dump(ROM_START, ROM_SIZE) == rom + bytes(ROM_SIZE - len(rom))

    def test_load_rom_truncates(self):
        memory = Memory()
        rom = bytes(i & 0xFF for i in range(ROM_SIZE + 100))
        memory.load_rom(rom)
        assert memory.dump(ROM_START, ROM_SIZE) == rom[:ROM_SIZE]

    # @intent:test_case_rom 予約領域 (0x050-0x1FF) はROMロードで変更されないことを検証します。
    def test_load_rom_keeps_reserved_region(self):
        memory = Memory()
        memory.write(0x100, 0x5A)
        memory.write(0x300, 0x77)
        memory.load_rom(b"\x12")
        assert memory.read(0x100) == 0x5A
        assert memory.read(0x300) == 0x00
        assert memory.dump(0, len(FONT)) == FONT

    def test_dump_rejects_invalid_range(self):
        memory = Memory()
        with pytest.raises(ValueError):
            memory.dump(0, -1)
        with pytest.raises(BoundsViolationError):
            memory.dump(MEMORY_SIZE - 1, 2)
        assert memory.dump(0x200, 0) == b""
