# src/chip8_tracer/ui/register_view.py
"""
CPUのレジスタ、タイマー、コールスタックを表示するウィジェット。
AbstractCpuのレイアウト情報を利用して動的にUIを構築します。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QFormLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtCore import Qt

from chip8_tracer.system.machine import Chip8Machine
from chip8_tracer.arch.chip8.state import STACK_DEPTH
from chip8_tracer.ui.fonts import get_monospace_font_family

GROUP_BOX_STYLE = """
    QGroupBox {
        font-weight: bold;
        border: 1px solid #222;
        border-radius: 4px;
        margin-top: 20px;
        color: #EEE;
        background-color: #121212;
    }
    QGroupBox::title {
        subcontrol-origin: margin;
        subcontrol-position: top left;
        padding: 0 5px;
        left: 10px;
        color: #00AAAA;
    }
"""

# @intent:responsibility 仮想マシンのレジスタ値を表示するUIウィジェットを提供します。
class RegisterView(QWidget):
    """
    Chip8Machineから取得したレイアウト情報に基づいてフィールドを生成し、
    レジスタ・タイマー・スタックの値を表示します。
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = get_monospace_font_family()
        self._value_labels: Dict[str, QLabel] = {}
        self._value_widths: Dict[str, int] = {}
        self._machine: Optional[Chip8Machine] = None

    # @intent:responsibility 表示対象のマシンを設定し、UIレイアウトを構築します。
    def set_machine(self, machine: Chip8Machine) -> None:
        self._machine = machine
        self._setup_ui()
        self.update_registers()

    def _create_value_label(self, name: str, hex_width: int) -> QLabel:
        label = QLabel(f"0x{'0' * hex_width}")
        label.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
        label.setAlignment(Qt.AlignRight)
        self._value_labels[name] = label
        self._value_widths[name] = hex_width
        return label

    def _create_group(self, title: str) -> QGroupBox:
        group_box = QGroupBox(title)
        group_box.setStyleSheet(GROUP_BOX_STYLE)
        return group_box

    def _setup_ui(self):
        while self.layout.count():
            item = self.layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._value_labels.clear()
        self._value_widths.clear()

        for group in self._machine.cpu.get_register_layout():
            group_box = self._create_group(group.group_name)
            group_layout = QFormLayout(group_box)
            group_layout.setLabelAlignment(Qt.AlignLeft)
            group_layout.setContentsMargins(10, 15, 10, 10)
            group_layout.setSpacing(5)

            for reg in group.registers:
                label_name = QLabel(f"{reg.name}:")
                label_name.setStyleSheet("font-weight: bold; color: #BBBBBB;")
                group_layout.addRow(label_name, self._create_value_label(reg.name, (reg.width + 3) // 4))

            self.layout.addWidget(group_box)

        timer_box = self._create_group("Timers")
        timer_layout = QFormLayout(timer_box)
        timer_layout.setContentsMargins(10, 15, 10, 10)
        timer_layout.addRow(QLabel("DT:"), self._create_value_label("DT", 2))
        timer_layout.addRow(QLabel("ST:"), self._create_value_label("ST", 2))
        self.layout.addWidget(timer_box)

        # コールスタックは4列のグリッドで表示
        stack_box = self._create_group("Stack")
        stack_layout = QGridLayout(stack_box)
        stack_layout.setContentsMargins(10, 15, 10, 10)
        for index in range(STACK_DEPTH):
            stack_layout.addWidget(self._create_value_label(f"S{index:X}", 3), index // 4, index % 4)
        self.layout.addWidget(stack_box)

        self.layout.addStretch()

    # @intent:responsibility 現在のマシン状態を取得し、表示値を更新します。
    def update_registers(self):
        if not self._machine:
            return

        values = dict(self._machine.cpu.get_register_map())
        values["DT"] = self._machine.delay_timer
        values["ST"] = self._machine.sound_timer

        state = self._machine.cpu.get_state()
        for index, address in enumerate(state.stack):
            values[f"S{index:X}"] = address

        for name, value in values.items():
            if name in self._value_labels:
                width = self._value_widths[name]
                self._value_labels[name].setText(f"0x{value:0{width}X}")

        # 使用中のスタックスロットだけを強調
        for index in range(STACK_DEPTH):
            color = "#FFD700" if index < state.sp else "#555555"
            self._value_labels[f"S{index:X}"].setStyleSheet(
                f"font-family: '{self._font_family}', monospace; color: {color};")

    def get_value_text(self, name: str) -> str:
        return self._value_labels[name].text()
