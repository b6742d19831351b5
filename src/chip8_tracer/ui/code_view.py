"""
逆アセンブルコードを表示するウィジェット。
"""
from typing import Iterable, List

from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView
from PySide6.QtGui import QColor
from PySide6.QtCore import Signal, Slot

from chip8_tracer.common.types import DisassemblyRow
from chip8_tracer.system.machine import Chip8Machine
from chip8_tracer.transport.memory import MEMORY_SIZE, ROM_START
from chip8_tracer.ui.fonts import get_monospace_font

COLOR_HIGHLIGHT = QColor("#404000")
COLOR_BREAKPOINT = QColor("#5A1010")
COLOR_NORMAL = QColor("#101010")

# @intent:responsibility 逆アセンブルされたコードを表形式で表示し、現在のPCとブレークポイントをハイライトします。
class CodeView(QWidget):
    """
    ROM領域の逆アセンブル結果を表示するウィジェット。
    行をダブルクリックするとそのアドレスのブレークポイントを切り替える要求を発行します。
    """
    breakpoint_toggled = Signal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Address", "Bytes", "Mnemonic"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.Stretch)
        self.table.setFont(get_monospace_font(10))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setShowGrid(False)
        self.table.setStyleSheet("background-color: #101010; color: #BBBBBB; gridline-color: #303030;")
        self.table.cellDoubleClicked.connect(self._on_cell_double_clicked)

        self.layout.addWidget(self.table)

        self.disassembled_data: List[DisassemblyRow] = []
        self._row_by_address = {}
        self._breakpoints = set()
        self._current_row = -1

    # @intent:responsibility ROM領域を逆アセンブルしてテーブルを再構築します。
    def refresh(self, machine: Chip8Machine) -> None:
        """
        ROMのロード後など、メモリ内容が変わった時に呼び出してください。
        PCが奇数アドレスに飛んだ場合もその位置から再逆アセンブルします。
        """
        pc = machine.cpu.get_state().pc
        start_addr = ROM_START if pc >= ROM_START and (pc - ROM_START) % 2 == 0 else pc
        self.disassembled_data = machine.cpu.disassemble(machine.bus, start_addr, MEMORY_SIZE - start_addr)
        self._row_by_address = {addr: row for row, (addr, _, _) in enumerate(self.disassembled_data)}
        self._current_row = -1

        self.table.setRowCount(len(self.disassembled_data))
        for row, (addr, hex_dump, mnemonic) in enumerate(self.disassembled_data):
            self.table.setItem(row, 0, QTableWidgetItem(f"{addr:04X}"))
            self.table.setItem(row, 1, QTableWidgetItem(hex_dump))
            self.table.setItem(row, 2, QTableWidgetItem(mnemonic))
            self._paint_row(row)

    # @intent:responsibility 現在のPCの行をハイライトし、見える位置までスクロールします。
    def highlight_pc(self, machine: Chip8Machine) -> None:
        pc = machine.cpu.get_state().pc
        if pc < MEMORY_SIZE and pc not in self._row_by_address:
            self.refresh(machine)

        previous_row = self._current_row
        self._current_row = self._row_by_address.get(pc, -1)
        if previous_row != -1:
            self._paint_row(previous_row)
        if self._current_row != -1:
            self._paint_row(self._current_row)
            look_ahead = min(self._current_row + 5, self.table.rowCount() - 1)
            self.table.scrollToItem(self.table.item(look_ahead, 0), QTableWidget.EnsureVisible)
            self.table.scrollToItem(self.table.item(self._current_row, 0), QTableWidget.EnsureVisible)

    def set_breakpoints(self, addresses: Iterable[int]) -> None:
        self._breakpoints = set(addresses)
        for row in range(self.table.rowCount()):
            self._paint_row(row)

    def current_address(self) -> int:
        if self._current_row == -1:
            return -1
        return self.disassembled_data[self._current_row][0]

    def _paint_row(self, row: int) -> None:
        address = self.disassembled_data[row][0]
        if row == self._current_row:
            color = COLOR_HIGHLIGHT
        elif address in self._breakpoints:
            color = COLOR_BREAKPOINT
        else:
            color = COLOR_NORMAL
        for column in range(3):
            item = self.table.item(row, column)
            if item is not None:
                item.setBackground(color)

    @Slot(int, int)
    def _on_cell_double_clicked(self, row: int, _column: int) -> None:
        self.breakpoint_toggled.emit(self.disassembled_data[row][0])
