# tests/loader/test_loader.py
"""
chip8_tracer.loader.loaderモジュールの単体テスト。
"""
import logging

import pytest

from chip8_tracer.loader.loader import RomLoader
from chip8_tracer.transport.memory import ROM_SIZE

# @intent:test_suite ROMファイルの読み込みとエラー処理を検証します。

class TestRomLoader:
    @pytest.fixture
    def loader(self):
        return RomLoader()

    def test_load_rom_file(self, loader, tmp_path):
        rom_file = tmp_path / "test.ch8"
        rom_file.write_bytes(bytes([0x6A, 0x05, 0xA0, 0x00]))
        assert loader.load_rom_file(str(rom_file)) == bytes([0x6A, 0x05, 0xA0, 0x00])
        assert loader.load_rom_file(rom_file) == bytes([0x6A, 0x05, 0xA0, 0x00])

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(FileNotFoundError):
            loader.load_rom_file(tmp_path / "missing.ch8")

    def test_empty_file(self, loader, tmp_path):
        rom_file = tmp_path / "empty.ch8"
        rom_file.write_bytes(b"")
        with pytest.raises(ValueError, match="empty"):
            loader.load_rom_file(rom_file)

    # @intent:test_case_oversize 大きすぎるROMは警告付きでそのまま返されることを検証します（切り詰めはメモリ側で行う）。
    def test_oversized_file_warns(self, loader, tmp_path, caplog):
        rom_file = tmp_path / "big.ch8"
        rom_file.write_bytes(bytes(ROM_SIZE + 1))
        with caplog.at_level(logging.WARNING):
            data = loader.load_rom_file(rom_file)
        assert len(data) == ROM_SIZE + 1
        assert "big.ch8" in caplog.text
