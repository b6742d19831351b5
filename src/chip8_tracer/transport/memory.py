# src/chip8_tracer/transport/memory.py
"""
Transport Layer (メモリ)

このモジュールは、CHIP-8の4KBフラットアドレス空間を提供します。
先頭80バイトには組み込みフォント、0x200以降にはROMイメージが配置されます。
"""
import logging

from chip8_tracer.common.errors import BoundsViolationError

logger = logging.getLogger(__name__)

MEMORY_SIZE = 4096
ROM_START = 0x200
ROM_SIZE = MEMORY_SIZE - ROM_START
FONT_GLYPH_SIZE = 5

# @intent:constant 16文字 (0-F) x 5バイトの組み込みフォント。プロセス全体で不変です。
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# @intent:responsibility フォント領域とROM領域を持つ4KBのメインメモリを提供します。
class Memory:
    """
    CHIP-8のメインメモリ。

    - 0x000-0x04F: 組み込みフォント
    - 0x050-0x1FF: 予約領域（コアロジックは使用しないが読み書き可能）
    - 0x200-0xFFF: ROM領域
    """
    # @intent:responsibility メモリを確保し、フォントを書き込みます。
    def __init__(self):
        self._memory = bytearray(MEMORY_SIZE)
        self._memory[0:len(FONT)] = FONT

    def _check_address(self, address: int) -> None:
        if not 0 <= address < MEMORY_SIZE:
            raise BoundsViolationError(f"Address {address:#06x} out of bounds for memory of size {MEMORY_SIZE}.")

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    def read(self, address: int) -> int:
        self._check_address(address)
        return self._memory[address]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    def write(self, address: int, data: int) -> None:
        self._check_address(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:responsibility ROMイメージを0x200以降にロードします。
    # @intent:post-condition ROM領域は常にちょうど3584バイトで上書きされ、0x050-0x1FFは変更されません。
    def load_rom(self, data: bytes) -> None:
        """
        ROMデータをROM領域にコピーします。
        3584バイトに満たない場合は0で埋め、超える場合は切り詰めます。
        """
        image = bytes(data)
        if len(image) > ROM_SIZE:
            logger.warning("ROM image is %d bytes; truncating to %d bytes.", len(image), ROM_SIZE)
            image = image[:ROM_SIZE]
        self._memory[ROM_START:MEMORY_SIZE] = image.ljust(ROM_SIZE, b"\x00")

    # @intent:responsibility 指定範囲のメモリ内容をコピーして返します（UI・テスト用）。
    def dump(self, start: int, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"Length {length} must not be negative.")
        self._check_address(start)
        if length:
            self._check_address(start + length - 1)
        return bytes(self._memory[start:start + length])
