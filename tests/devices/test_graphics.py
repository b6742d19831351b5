# tests/devices/test_graphics.py
"""
chip8_tracer.devices.graphicsモジュールの単体テスト。
"""
import pytest

from chip8_tracer.common.errors import BoundsViolationError
from chip8_tracer.common.types import Rgb
from chip8_tracer.devices.graphics import (
    DEFAULT_BACKGROUND, DEFAULT_FOREGROUND, GraphicsBuffer, HEIGHT, PIXEL_COUNT, WIDTH
)

# @intent:test_suite スプライトのXOR描画、衝突判定、クリッピング、パレット変更を検証します。

RED = Rgb(255, 0, 0)
BLUE = Rgb(0, 0, 255)


def row_bits(graphics: GraphicsBuffer, x: int, y: int, count: int = 8) -> str:
    return "".join("1" if graphics.is_pixel_on(x + i, y) else "0" for i in range(count))


class TestDrawByte:
    # @intent:test_case_draw 空の画面への描画は衝突せず、MSBから左詰めで描かれることを検証します。
    def test_draw_on_blank_screen(self):
        graphics = GraphicsBuffer()
        assert graphics.draw_byte(10, 5, 0b10110001) is False
        assert row_bits(graphics, 10, 5) == "10110001"
        assert not graphics.is_pixel_on(9, 5)
        assert not graphics.is_pixel_on(18, 5)

    # @intent:test_case_collision 同じパターンを2回描くと消え、衝突がTrueになることを検証します。
    def test_xor_erases_and_reports_collision(self):
        graphics = GraphicsBuffer()
        graphics.draw_byte(0, 0, 0xF0)
        assert graphics.draw_byte(0, 0, 0xF0) is True
        assert row_bits(graphics, 0, 0) == "00000000"

    # @intent:test_case_collision 衝突はONのピクセルをOFFにしたときのみ発生することを検証します。
    def test_collision_law(self):
        graphics = GraphicsBuffer()
        graphics.draw_byte(0, 0, 0xF0)
        assert graphics.draw_byte(0, 0, 0x0F) is False
        assert row_bits(graphics, 0, 0) == "11111111"
        assert graphics.draw_byte(0, 0, 0x18) is True
        assert row_bits(graphics, 0, 0) == "11100111"
        assert graphics.draw_byte(0, 0, 0x00) is False

    # @intent:test_case_clip 右端ではみ出したビットは折り返さずに捨てられることを検証します。
    def test_right_edge_is_clipped(self):
        graphics = GraphicsBuffer()
        assert graphics.draw_byte(WIDTH - 4, 0, 0xFF) is False
        assert row_bits(graphics, WIDTH - 4, 0, 4) == "1111"
        assert row_bits(graphics, 0, 0) == "00000000"
        assert row_bits(graphics, 0, 1) == "00000000"

    # @intent:test_case_clip 下端を超えた行は描画されないことを検証します。
    def test_rows_below_screen_are_ignored(self):
        graphics = GraphicsBuffer()
        assert graphics.draw_byte(0, HEIGHT, 0xFF) is False
        assert graphics.as_rgb() == bytes(DEFAULT_BACKGROUND) * PIXEL_COUNT


class TestPalette:
    # @intent:test_case_palette 前景色の変更で既存のONピクセルも新しい色になることを検証します。
    def test_foreground_remap(self):
        graphics = GraphicsBuffer()
        graphics.draw_byte(0, 0, 0x80)
        graphics.set_foreground_color(RED)

        assert graphics.foreground == RED
        assert graphics.is_pixel_on(0, 0)
        rgb = graphics.as_rgb()
        assert rgb[0:3] == bytes(RED)
        assert rgb[3:6] == bytes(DEFAULT_BACKGROUND)

    def test_background_remap(self):
        graphics = GraphicsBuffer()
        graphics.draw_byte(0, 0, 0x80)
        graphics.set_background_color(BLUE)

        rgb = graphics.as_rgb()
        assert rgb[0:3] == bytes(DEFAULT_FOREGROUND)
        assert rgb[3:6] == bytes(BLUE)
        graphics.clear()
        assert graphics.as_rgb() == bytes(BLUE) * PIXEL_COUNT

    # @intent:test_case_palette 新しい色で描いたピクセルも衝突判定に使われることを検証します。
    def test_draw_after_remap(self):
        graphics = GraphicsBuffer(foreground=RED, background=BLUE)
        graphics.draw_byte(0, 0, 0xC0)
        graphics.set_foreground_color(DEFAULT_FOREGROUND)
        assert graphics.draw_byte(0, 0, 0x40) is True
        assert row_bits(graphics, 0, 0, 2) == "10"

    def test_invalid_color(self):
        graphics = GraphicsBuffer()
        with pytest.raises(ValueError):
            graphics.set_foreground_color(Rgb(256, 0, 0))
        with pytest.raises(ValueError):
            GraphicsBuffer(background=Rgb(0, -1, 0))


class TestFrameExport:
    def test_as_rgb_layout(self):
        graphics = GraphicsBuffer()
        graphics.draw_byte(1, 2, 0x80)
        rgb = graphics.as_rgb()
        assert len(rgb) == WIDTH * HEIGHT * 3
        offset = (2 * WIDTH + 1) * 3
        assert rgb[offset:offset + 3] == bytes(DEFAULT_FOREGROUND)
        assert rgb.count(255) == 3

    def test_is_pixel_on_out_of_bounds(self):
        graphics = GraphicsBuffer()
        with pytest.raises(BoundsViolationError):
            graphics.is_pixel_on(WIDTH, 0)
        with pytest.raises(BoundsViolationError):
            graphics.is_pixel_on(0, -1)
