# tests/transport/test_bus.py
"""
chip8_tracer.transport.busモジュールの単体テスト。
"""
import pytest

from chip8_tracer.common.errors import BoundsViolationError
from chip8_tracer.devices.clock import Clock, TICK_PERIOD
from chip8_tracer.devices.graphics import GraphicsBuffer
from chip8_tracer.transport.bus import Bus, BusAccess, BusAccessType

# @intent:test_suite バスのデバイス委譲とアクティビティログを検証します。

class FakeTime:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestBusActivityLog:
    # @intent:test_case_log 読み書きがログに記録され、取得時にクリアされることを検証します。
    def test_read_write_are_logged(self):
        bus = Bus()
        bus.write(0x300, 0x12)
        bus.write(0x300, 0x34)
        assert bus.read(0x300) == 0x34

        log = bus.get_and_clear_activity_log()
        assert log == [
            BusAccess(0x300, 0x12, BusAccessType.WRITE, 0x00),
            BusAccess(0x300, 0x34, BusAccessType.WRITE, 0x12),
            BusAccess(0x300, 0x34, BusAccessType.READ),
        ]
        assert bus.get_and_clear_activity_log() == []

    # @intent:test_case_peek peekはログを残さないことを検証します。
    def test_peek_is_not_logged(self):
        bus = Bus()
        bus.memory.write(0x200, 0xAA)
        assert bus.peek(0x200) == 0xAA
        assert bus.get_and_clear_activity_log() == []

    # @intent:test_case_abnormal 範囲外アクセスは例外となり、ログには残らないことを検証します。
    def test_out_of_bounds_access(self):
        bus = Bus()
        with pytest.raises(BoundsViolationError):
            bus.read(0x1000)
        with pytest.raises(BoundsViolationError):
            bus.write(0x1000, 0x00)
        assert bus.get_and_clear_activity_log() == []


class TestBusDevices:
    def test_graphics_delegation(self):
        graphics = GraphicsBuffer()
        bus = Bus(graphics=graphics)
        assert bus.draw_byte(0, 0, 0x80) is False
        assert graphics.is_pixel_on(0, 0)
        assert bus.draw_byte(0, 0, 0x80) is True
        bus.draw_byte(1, 1, 0xFF)
        bus.clear_screen()
        assert not graphics.is_pixel_on(1, 1)

    def test_clock_delegation(self):
        fake_time = FakeTime()
        bus = Bus(clock=Clock(fake_time))
        bus.set_delay_timer(3)
        bus.set_sound_timer(2)
        assert bus.get_delay_timer() == 3

        fake_time.now = TICK_PERIOD
        bus.tick_clock()
        assert bus.vblank is True
        assert bus.get_delay_timer() == 2
        assert bus.clock.sound_timer == 1

    def test_input_delegation(self):
        bus = Bus()
        assert bus.waiting_for_key is False
        bus.request_key_press(0x4)
        assert bus.waiting_for_key is True

        bus.input.update(0xA, True)
        assert bus.is_key_pressed(0xA)
        assert bus.waiting_for_key is False
        response = bus.take_key_response()
        assert (response.key_code, response.register) == (0xA, 0x4)
        assert bus.take_key_response() is None
