"""
フレームバッファを描画するウィジェット。

Chip8Machine.framebuffer_rgb() が返すフラットなRGBバイト列をQImageに変換し、
指定倍率で拡大して描画します。
"""
from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtGui import QImage, QPainter, QColor
from PySide6.QtCore import Qt, QRect

from chip8_tracer.devices.graphics import HEIGHT, WIDTH

# @intent:responsibility 64x32のフレームバッファを、アスペクト比を保って拡大表示します。
class DisplayView(QWidget):
    def __init__(self, scale: int = 10, parent=None):
        super().__init__(parent)
        self._scale = scale
        self._image = QImage(WIDTH, HEIGHT, QImage.Format_RGB888)
        self._image.fill(QColor(0, 0, 0))
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumSize(WIDTH * scale, HEIGHT * scale)
        self.setFocusPolicy(Qt.NoFocus)

    @property
    def scale(self) -> int:
        return self._scale

    def set_scale(self, scale: int) -> None:
        self._scale = scale
        self.setMinimumSize(WIDTH * scale, HEIGHT * scale)
        self.update()

    # @intent:responsibility RGBバイト列から表示用イメージを作り直し、再描画を要求します。
    # @intent:pre-condition frameの長さは WIDTH * HEIGHT * 3 であること。
    def update_frame(self, frame: bytes) -> None:
        expected = WIDTH * HEIGHT * 3
        if len(frame) != expected:
            raise ValueError(f"Frame must be {expected} bytes, got {len(frame)}")
        # QImageは元のバッファを参照するため、copy()で所有権を持たせる
        self._image = QImage(frame, WIDTH, HEIGHT, WIDTH * 3, QImage.Format_RGB888).copy()
        self.update()

    def image(self) -> QImage:
        return self._image

    def _target_rect(self) -> QRect:
        factor = max(1, min(self.width() // WIDTH, self.height() // HEIGHT))
        width, height = WIDTH * factor, HEIGHT * factor
        return QRect((self.width() - width) // 2, (self.height() - height) // 2, width, height)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#101010"))
        # 拡大時にピクセルがぼやけないよう、スムージングは使わない
        painter.setRenderHint(QPainter.SmoothPixmapTransform, False)
        painter.drawImage(self._target_rect(), self._image)
        painter.end()
