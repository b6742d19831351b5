"""
UIフォント管理モジュール。
"""
from PySide6.QtGui import QFont, QFontDatabase

PREFERRED_MONOSPACE_FONTS = ["Consolas", "Menlo", "Monaco", "DejaVu Sans Mono", "Courier New"]

# @intent:responsibility 現在のシステムで利用可能な等幅フォントファミリー名を返します。
def get_monospace_font_family() -> str:
    available_families = QFontDatabase.families()
    for family in PREFERRED_MONOSPACE_FONTS:
        if family in available_families:
            return family
    return QFontDatabase.systemFont(QFontDatabase.FixedFont).family()

def get_monospace_font(size: int = 10) -> QFont:
    return QFont(get_monospace_font_family(), size)
