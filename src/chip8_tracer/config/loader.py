import yaml
from typing import Any, Dict

from chip8_tracer.common.types import Rgb
from .models import DEFAULT_KEYMAP, DisplayConfig, QuirkConfig, SystemConfig, TimingConfig

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.parse_config(data or {})

    def parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        quirks_data = data.get("quirks") or {}
        quirks = QuirkConfig(
            shift_quirk=bool(quirks_data.get("shift_quirk", False)),
            vblank_wait=bool(quirks_data.get("vblank_wait", False))
        )

        # Parse Display
        display_data = data.get("display") or {}
        defaults = DisplayConfig()
        display = DisplayConfig(
            foreground=self._parse_color(display_data.get("foreground", defaults.foreground)),
            background=self._parse_color(display_data.get("background", defaults.background)),
            scale=self._parse_positive(display_data.get("scale", defaults.scale), "display.scale")
        )

        # Parse Timing
        timing_data = data.get("timing") or {}
        timing = TimingConfig(
            instructions_per_frame=self._parse_positive(
                timing_data.get("instructions_per_frame", TimingConfig.instructions_per_frame),
                "timing.instructions_per_frame"),
            frame_interval_ms=self._parse_positive(
                timing_data.get("frame_interval_ms", TimingConfig.frame_interval_ms),
                "timing.frame_interval_ms")
        )

        # Parse Keymap (host key name -> keypad code)
        keymap = dict(DEFAULT_KEYMAP)
        keymap_data = data.get("keymap")
        if keymap_data is not None:
            keymap = {}
            for key_name, code in keymap_data.items():
                key_code = self._parse_int(code)
                if not 0 <= key_code <= 0xF:
                    raise ValueError(f"Keypad code for '{key_name}' out of range 0-F: {code}")
                keymap[str(key_name).upper()] = key_code

        return SystemConfig(quirks=quirks, display=display, timing=timing, keymap=keymap)

    def _parse_color(self, value: Any) -> Rgb:
        if isinstance(value, str):
            return Rgb.from_hex(value)
        if isinstance(value, (list, tuple)) and len(value) == 3:
            color = Rgb(*(self._parse_int(component) for component in value))
            if all(0 <= component <= 0xFF for component in color):
                return color
        raise ValueError(f"Invalid color format: {value}")

    def _parse_positive(self, value: Any, name: str) -> int:
        result = self._parse_int(value)
        if result <= 0:
            raise ValueError(f"{name} must be a positive integer: {value}")
        return result

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
