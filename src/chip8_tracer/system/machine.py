# src/chip8_tracer/system/machine.py
"""
System Layer (仮想マシン)

CPUとバスを所有し、ホスト（UI・テスト・デバッガ）に対して
ステップ実行、ROMロード、キー入力、リセットの操作を提供します。
"""
import logging
from typing import Callable, List, Optional

from chip8_tracer.common.types import Rgb
from chip8_tracer.core.snapshot import Snapshot, TraceEntry
from chip8_tracer.devices.clock import Clock
from chip8_tracer.devices.graphics import HEIGHT, WIDTH
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

logger = logging.getLogger(__name__)

# @intent:responsibility CPUとバスの組を所有し、1ステップごとにバスへの排他的なアクセスをCPUへ渡します。
class Chip8Machine:
    """
    CHIP-8仮想マシンのオーケストレータ。
    """
    width = WIDTH
    height = HEIGHT

    def __init__(self, time_source: Optional[Callable[[], float]] = None):
        self._time_source = time_source
        self._bus = self._create_bus()
        self._cpu = Chip8Cpu()

    def _create_bus(self) -> Bus:
        return Bus(clock=Clock(self._time_source))

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def bus(self) -> Bus:
        return self._bus

    # @intent:responsibility クロックを1回進め、CPUに1命令を実行させます。
    # @intent:return 命令を実行した場合はそのSnapshot、実行しなかった場合はNone。
    def step(self) -> Optional[Snapshot]:
        self._bus.tick_clock()
        return self._cpu.cycle(self._bus)

    def load_rom(self, data: bytes) -> None:
        self._bus.memory.load_rom(data)
        logger.info("Loaded ROM image (%d bytes).", len(data))

    def update_key_state(self, key_code: int, pressed: bool) -> None:
        self._bus.input.update(key_code, pressed)

    # @intent:responsibility バスとCPUを初期化し直します。
    # @intent:post-condition フレームバッファ（ピクセルとパレット）と、CPUの2つの設定フラグは引き継がれます。
    def reset(self) -> None:
        graphics = self._bus.graphics
        shift_quirk_enabled = self._cpu.shift_quirk_enabled
        vblank_wait = self._cpu.vblank_wait

        self._bus = self._create_bus()
        self._bus.graphics = graphics

        self._cpu.reset()
        self._cpu.shift_quirk_enabled = shift_quirk_enabled
        self._cpu.vblank_wait = vblank_wait
        logger.info("Machine reset.")

    def reset_and_load(self, data: bytes) -> None:
        self.reset()
        self.load_rom(data)

    # --- Collaborator views ---

    # @intent:responsibility 描画担当向けに、フレームバッファをフラットなRGBバイト列で返します。
    def framebuffer_rgb(self) -> bytes:
        return self._bus.graphics.as_rgb()

    @property
    def delay_timer(self) -> int:
        return self._bus.clock.delay_timer

    @property
    def sound_timer(self) -> int:
        return self._bus.clock.sound_timer

    @property
    def instructions(self) -> List[TraceEntry]:
        return self._cpu.get_trace()

    # --- Configuration ---

    @property
    def shift_quirk_enabled(self) -> bool:
        return self._cpu.shift_quirk_enabled

    @shift_quirk_enabled.setter
    def shift_quirk_enabled(self, value: bool) -> None:
        self._cpu.shift_quirk_enabled = value

    @property
    def vblank_wait(self) -> bool:
        return self._cpu.vblank_wait

    @vblank_wait.setter
    def vblank_wait(self, value: bool) -> None:
        self._cpu.vblank_wait = value

    def set_foreground_color(self, color: Rgb) -> None:
        self._bus.graphics.set_foreground_color(color)

    def set_background_color(self, color: Rgb) -> None:
        self._bus.graphics.set_background_color(color)
