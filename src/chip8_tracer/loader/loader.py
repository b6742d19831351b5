# chip8_tracer/loader/loader.py
"""
ROMローダーモジュール。
CHIP-8のROMイメージ（ヘッダを持たない生バイナリ）をディスクから読み込みます。
"""
import logging
from pathlib import Path
from typing import Union

from chip8_tracer.transport.memory import ROM_SIZE

logger = logging.getLogger(__name__)

class RomLoader:
    """
    ROMファイルを読み込み、仮想マシンへ渡すためのバイト列を返すローダー。
    """
    def load_rom_file(self, file_path: Union[str, Path]) -> bytes:
        path = Path(file_path)
        data = path.read_bytes()

        if not data:
            raise ValueError(f"ROM file is empty: {path}")

        if len(data) > ROM_SIZE:
            logger.warning("ROM %s is %d bytes; only the first %d bytes will be loaded.",
                           path.name, len(data), ROM_SIZE)
        logger.info("Read ROM %s (%d bytes).", path.name, len(data))
        return data
