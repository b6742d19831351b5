from dataclasses import dataclass, field
from typing import Dict

from chip8_tracer.common.types import Rgb
from chip8_tracer.devices.graphics import DEFAULT_BACKGROUND, DEFAULT_FOREGROUND

# @intent:constant COSMAC VIPの4x4キーパッドを、キーボード左側の 1234/QWER/ASDF/ZXCV に割り当てます。
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class QuirkConfig:
    shift_quirk: bool = False
    vblank_wait: bool = False

@dataclass
class DisplayConfig:
    foreground: Rgb = DEFAULT_FOREGROUND
    background: Rgb = DEFAULT_BACKGROUND
    scale: int = 10

@dataclass
class TimingConfig:
    instructions_per_frame: int = 10
    frame_interval_ms: int = 16

@dataclass
class SystemConfig:
    quirks: QuirkConfig = field(default_factory=QuirkConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
