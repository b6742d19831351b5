# tests/ui/test_views.py
"""
chip8_tracer.ui の各ビューとメインウィンドウのロジックを検証するテスト。
"""
import os
import sys
import tempfile
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QColor, QKeyEvent
from PySide6.QtCore import QEvent, Qt

from chip8_tracer.config.models import SystemConfig
from chip8_tracer.core.snapshot import TraceEntry
from chip8_tracer.debugger.debugger import BreakpointCondition, BreakpointConditionType
from chip8_tracer.devices.graphics import HEIGHT, WIDTH
from chip8_tracer.system.machine import Chip8Machine
from chip8_tracer.ui.code_view import CodeView
from chip8_tracer.ui.display_view import DisplayView
from chip8_tracer.ui.main_window import MainWindow, BUZZER_ON_STYLE
from chip8_tracer.ui.register_view import RegisterView
from chip8_tracer.ui.trace_view import TraceView


def rom(*opcodes: int) -> bytes:
    return b"".join(opcode.to_bytes(2, "big") for opcode in opcodes)


class QtTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()


class TestDisplayView(QtTestCase):
    def test_update_frame(self):
        view = DisplayView(scale=4)
        frame = bytearray(WIDTH * HEIGHT * 3)
        frame[0:3] = bytes([255, 0, 0])
        view.update_frame(bytes(frame))

        image = view.image()
        self.assertEqual((image.width(), image.height()), (WIDTH, HEIGHT))
        self.assertEqual(image.pixelColor(0, 0), QColor(255, 0, 0))
        self.assertEqual(image.pixelColor(1, 0), QColor(0, 0, 0))

    def test_rejects_wrong_frame_size(self):
        view = DisplayView()
        with self.assertRaises(ValueError):
            view.update_frame(b"\x00" * 10)

    def test_scale(self):
        view = DisplayView(scale=3)
        self.assertEqual(view.minimumWidth(), WIDTH * 3)
        view.set_scale(5)
        self.assertEqual(view.scale, 5)
        self.assertEqual(view.minimumHeight(), HEIGHT * 5)


class TestTraceView(QtTestCase):
    def test_update_trace(self):
        view = TraceView()
        view.update_trace([
            TraceEntry(0x202, 0xA000, "Set I register to 0x0000"),
            TraceEntry(0x200, 0x6A05, "Set VA to 5"),
        ])
        self.assertEqual(view.table.rowCount(), 2)
        self.assertEqual(view.table.item(0, 0).text(), "0202")
        self.assertEqual(view.table.item(1, 1).text(), "6A05")
        self.assertEqual(view.table.item(1, 2).text(), "Set VA to 5")


class TestCodeView(QtTestCase):
    def setUp(self):
        self.machine = Chip8Machine(time_source=lambda: 0.0)
        self.machine.load_rom(rom(0x6A05, 0xA000, 0xD0A5))

    def test_refresh_and_highlight(self):
        view = CodeView()
        view.refresh(self.machine)
        self.assertEqual(view.table.item(0, 0).text(), "0200")
        self.assertEqual(view.table.item(0, 2).text(), "LD VA, #$05")

        view.highlight_pc(self.machine)
        self.assertEqual(view.current_address(), 0x200)
        self.machine.step()
        view.highlight_pc(self.machine)
        self.assertEqual(view.current_address(), 0x202)

    def test_double_click_requests_breakpoint(self):
        view = CodeView()
        view.refresh(self.machine)
        toggled = []
        view.breakpoint_toggled.connect(toggled.append)
        view.table.cellDoubleClicked.emit(2, 0)
        self.assertEqual(toggled, [0x204])


class TestRegisterView(QtTestCase):
    def test_values_follow_machine(self):
        machine = Chip8Machine(time_source=lambda: 0.0)
        machine.load_rom(rom(0x6A05, 0x2300))
        view = RegisterView()
        view.set_machine(machine)
        self.assertEqual(view.get_value_text("PC"), "0x0200")

        machine.step()
        machine.step()
        view.update_registers()
        self.assertEqual(view.get_value_text("VA"), "0x05")
        self.assertEqual(view.get_value_text("PC"), "0x0300")
        self.assertEqual(view.get_value_text("SP"), "0x01")
        self.assertEqual(view.get_value_text("S0"), "0x204")
        self.assertEqual(view.get_value_text("DT"), "0x00")


class TestMainWindow(QtTestCase):
    def setUp(self):
        self.window = MainWindow(config=SystemConfig())

    def tearDown(self):
        self.window.close()

    def _load(self, tmp_name: str, data: bytes):
        directory = tempfile.mkdtemp()
        path = os.path.join(directory, tmp_name)
        with open(path, "wb") as f:
            f.write(data)
        self.window.load_rom(path)

    def test_initial_state(self):
        self.assertFalse(self.window.run_action.isEnabled())
        self.assertFalse(self.window.stop_action.isEnabled())
        self.assertTrue(self.window.load_rom_action.isEnabled())

    def test_load_and_step(self):
        self._load("scenario.ch8", rom(0x6A05, 0xA000, 0xD0A5))
        self.assertTrue(self.window.run_action.isEnabled())

        for _ in range(3):
            self.window._step_debugger()
        self.assertEqual(self.window.machine.cpu.get_state().pc, 0x206)
        self.assertEqual(self.window.trace_view.table.rowCount(), 3)
        self.assertEqual(self.window.display_view.image().pixelColor(0, 5), QColor(255, 255, 255))

    def test_run_frame_stops_at_breakpoint(self):
        self._load("loop.ch8", rom(0x7001, 0x1200))
        self.window.debugger.add_breakpoint(
            BreakpointCondition(BreakpointConditionType.REGISTER_VALUE, register_name="V0", value=3))
        self.window._run_debugger()
        self.assertTrue(self.window.is_running())

        self.window._run_frame()
        self.assertFalse(self.window.is_running())
        self.assertEqual(self.window.machine.cpu.get_state().v[0], 3)
        self.assertTrue(self.window.run_action.isEnabled())

    def test_buzzer_follows_sound_timer(self):
        self._load("beep.ch8", rom(0x6010, 0xF018))
        self.window._step_debugger()
        self.window._step_debugger()
        self.assertEqual(self.window.buzzer_label.styleSheet(), BUZZER_ON_STYLE)

    # @intent:test_case_keymap キーボードのキーがキーマップに従ってキーパッドへ伝わることを検証します。
    def test_key_events_use_keymap(self):
        press = QKeyEvent(QEvent.KeyPress, Qt.Key_Q, Qt.NoModifier, "q")
        self.window.keyPressEvent(press)
        self.assertTrue(self.window.machine.bus.is_key_pressed(0x4))

        release = QKeyEvent(QEvent.KeyRelease, Qt.Key_Q, Qt.NoModifier, "q")
        self.window.keyReleaseEvent(release)
        self.assertFalse(self.window.machine.bus.is_key_pressed(0x4))

    def test_reset_reloads_rom(self):
        self._load("reset.ch8", rom(0x6A05))
        self.window._step_debugger()
        self.window._reset_machine()
        state = self.window.machine.cpu.get_state()
        self.assertEqual(state.pc, 0x200)
        self.assertEqual(state.v[0xA], 0)
        self.assertEqual(self.window.machine.bus.peek(0x200), 0x6A)

    def test_apply_config(self):
        config = SystemConfig()
        config.quirks.shift_quirk = True
        config.timing.frame_interval_ms = 33
        self.window.apply_config(config)
        self.assertTrue(self.window.machine.shift_quirk_enabled)
        self.assertEqual(self.window.run_timer.interval(), 33)


if __name__ == '__main__':
    unittest.main()
