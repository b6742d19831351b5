"""
直近に実行した命令の履歴（トレース）を新しい順に表示するウィジェット。
"""
from typing import List

from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView

from chip8_tracer.core.snapshot import TraceEntry
from chip8_tracer.ui.fonts import get_monospace_font

class TraceView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Address", "Opcode", "Description"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.Stretch)
        self.table.setFont(get_monospace_font(10))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setShowGrid(False)
        self.table.setStyleSheet("background-color: #101010; color: #BBBBBB;")
        layout.addWidget(self.table)

    # @intent:responsibility トレースの内容でテーブルを置き換えます。先頭行が最新の命令です。
    def update_trace(self, entries: List[TraceEntry]) -> None:
        self.table.setRowCount(len(entries))
        for row, entry in enumerate(entries):
            self.table.setItem(row, 0, QTableWidgetItem(f"{entry.address:04X}"))
            self.table.setItem(row, 1, QTableWidgetItem(f"{entry.opcode:04X}"))
            self.table.setItem(row, 2, QTableWidgetItem(entry.display))
