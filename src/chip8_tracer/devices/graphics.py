# src/chip8_tracer/devices/graphics.py
"""
Device Layer (フレームバッファ)

64x32のモノクロ画面をRGBセルの配列として保持します。
各セルは常に「現在の前景色」か「現在の背景色」のどちらかと一致し、
ピクセルのON/OFFは前景色との一致で判定します。
"""
from typing import List

from chip8_tracer.common.errors import BoundsViolationError
from chip8_tracer.common.types import Rgb

WIDTH = 64
HEIGHT = 32
PIXEL_COUNT = WIDTH * HEIGHT
SPRITE_WIDTH = 8

DEFAULT_FOREGROUND = Rgb(255, 255, 255)
DEFAULT_BACKGROUND = Rgb(0, 0, 0)


def _validate_color(color: Rgb) -> Rgb:
    color = Rgb(*color)
    for component in color:
        if not 0 <= component <= 0xFF:
            raise ValueError(f"Color component {component} is not an 8-bit value.")
    return color

# @intent:responsibility スプライト描画（XOR・衝突判定）、画面クリア、パレット変更を提供します。
class GraphicsBuffer:
    """
    CHIP-8のフレームバッファ。
    """
    width = WIDTH
    height = HEIGHT

    def __init__(self, foreground: Rgb = DEFAULT_FOREGROUND, background: Rgb = DEFAULT_BACKGROUND):
        self._foreground = _validate_color(foreground)
        self._background = _validate_color(background)
        self._vram: List[Rgb] = [self._background] * PIXEL_COUNT

    @property
    def foreground(self) -> Rgb:
        return self._foreground

    @property
    def background(self) -> Rgb:
        return self._background

    # @intent:responsibility 1行分（最大8ピクセル）をXOR描画し、衝突の有無を返します。
    # @intent:post-condition 右端ははみ出し分が切り捨てられ、下端以降の行は何もせずFalseを返します。
    def draw_byte(self, x: int, y: int, data: int) -> bool:
        """
        (x, y) から右方向へ data の各ビットをMSBから順にXORします。
        ONのピクセルをOFFにしたビットが1つでもあればTrueを返します。
        """
        if y >= HEIGHT:
            return False

        visible = min(WIDTH - x, SPRITE_WIDTH)
        collision = False
        row_offset = WIDTH * y

        for bit in range(visible):
            pos = row_offset + x + bit
            new_active = (data & (0x80 >> bit)) != 0
            old_active = self._vram[pos] == self._foreground
            if new_active and old_active:
                collision = True
            self._vram[pos] = self._foreground if new_active != old_active else self._background

        return collision

    # @intent:responsibility 前景色を変更し、旧前景色のセルを新しい色に置き換えます。
    def set_foreground_color(self, color: Rgb) -> None:
        old_color = self._foreground
        self._foreground = _validate_color(color)
        self._remap(old_color, self._foreground)

    # @intent:responsibility 背景色を変更し、旧背景色のセルを新しい色に置き換えます。
    def set_background_color(self, color: Rgb) -> None:
        old_color = self._background
        self._background = _validate_color(color)
        self._remap(old_color, self._background)

    def _remap(self, old_color: Rgb, new_color: Rgb) -> None:
        self._vram = [new_color if cell == old_color else cell for cell in self._vram]

    # @intent:responsibility 全てのセルを現在の背景色にします。
    def clear(self) -> None:
        self._vram = [self._background] * PIXEL_COUNT

    # @intent:responsibility 指定座標のピクセルがONかどうかを返します。
    def is_pixel_on(self, x: int, y: int) -> bool:
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            raise BoundsViolationError(f"Pixel ({x}, {y}) out of bounds for {WIDTH}x{HEIGHT} display.")
        return self._vram[WIDTH * y + x] == self._foreground

    # @intent:responsibility 描画用に、行優先のフラットなRGBバイト列 (width*height*3) を返します。
    def as_rgb(self) -> bytes:
        data = bytearray(PIXEL_COUNT * 3)
        for i, pixel in enumerate(self._vram):
            offset = i * 3
            data[offset:offset + 3] = bytes(pixel)
        return bytes(data)
