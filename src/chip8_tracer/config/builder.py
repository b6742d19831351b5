from typing import Callable, Optional

from chip8_tracer.system.machine import Chip8Machine
from .models import SystemConfig

# @intent:responsibility システム構成（Config）に基づいて仮想マシンを生成し、設定を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig,
                     time_source: Optional[Callable[[], float]] = None) -> Chip8Machine:
        machine = Chip8Machine(time_source=time_source)
        self.apply_config(machine, config)
        return machine

    # @intent:responsibility Configで定義されたクイーク設定とパレットを既存のマシンに適用します。
    def apply_config(self, machine: Chip8Machine, config: SystemConfig) -> None:
        machine.shift_quirk_enabled = config.quirks.shift_quirk
        machine.vblank_wait = config.quirks.vblank_wait
        machine.set_foreground_color(config.display.foreground)
        machine.set_background_color(config.display.background)
