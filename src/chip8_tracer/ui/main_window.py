# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
仮想マシンとデバッガを保持し、画面・レジスタ・コード・トレースの各ビューと
キーボード入力、実行制御（Run/Stop/Step/Reset）を結び付けます。
"""
import logging
from pathlib import Path
from typing import Optional

import yaml

from PySide6.QtWidgets import (
    QMainWindow, QApplication, QDockWidget, QTabWidget, QToolBar, QLabel, QFileDialog, QMessageBox
)
from PySide6.QtGui import QPalette, QColor, QAction, QCloseEvent, QKeyEvent, QKeySequence
from PySide6.QtCore import Qt, QTimer, Slot

from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.debugger.debugger import Debugger, BreakpointCondition, BreakpointConditionType
from chip8_tracer.loader.loader import RomLoader
from .code_view import CodeView
from .display_view import DisplayView
from .fonts import get_monospace_font_family
from .register_view import RegisterView
from .trace_view import TraceView

logger = logging.getLogger(__name__)

BUZZER_ON_STYLE = "background-color: #AA2222; color: #FFFFFF; padding: 2px 8px; font-weight: bold;"
BUZZER_OFF_STYLE = "background-color: #1E1E1E; color: #555555; padding: 2px 8px;"

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    実行はGUIスレッド上のQTimerで駆動し、1ティックごとに
    instructions_per_frame 命令分だけデバッガ経由でステップします。
    """
    def __init__(self, config: Optional[SystemConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("CHIP-8 Tracer")
        self.setGeometry(100, 100, 1200, 700)
        self.setDockNestingEnabled(True)

        self.config = config or SystemConfig()
        self._rom_data: Optional[bytes] = None
        self._rom_name = ""

        self._setup_backend()
        self._set_dark_theme()
        self._create_toolbar()
        self._create_central_display()
        self._create_navigation_pane()
        self._create_status_inspector()
        self._create_menus()

        self.run_timer = QTimer(self)
        self.run_timer.setInterval(self.config.timing.frame_interval_ms)
        self.run_timer.timeout.connect(self._run_frame)

        self._refresh_views(full=True)
        self._update_ui_state(False)

    # @intent:responsibility 設定から仮想マシンを生成し、デバッガを接続します。
    def _setup_backend(self):
        self.machine = SystemBuilder().build_system(self.config)
        self.debugger = Debugger(self.machine)

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._open_rom_file)
        file_menu.addAction(self.load_rom_action)

        self.load_config_action = QAction("Load System Config...", self)
        self.load_config_action.triggered.connect(self._open_system_config)
        file_menu.addAction(self.load_config_action)

    # @intent:responsibility 実行制御用のツールバーとブザー表示を作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        toolbar.setFocusPolicy(Qt.NoFocus)
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self._run_debugger)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self._stop_debugger)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step_debugger)
        toolbar.addAction(self.step_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self._reset_machine)
        toolbar.addAction(self.reset_action)

        toolbar.addSeparator()
        self.buzzer_label = QLabel("BUZZER")
        self.buzzer_label.setStyleSheet(BUZZER_OFF_STYLE)
        toolbar.addWidget(self.buzzer_label)

        self.status_label = QLabel("No ROM loaded")
        self.status_label.setStyleSheet("padding: 0 10px; color: #AAAAAA;")
        toolbar.addWidget(self.status_label)

    def _create_central_display(self):
        self.display_view = DisplayView(scale=self.config.display.scale)
        self.setCentralWidget(self.display_view)

    # @intent:responsibility 左側のナビゲーションペイン（逆アセンブル・トレース）を作成します。
    def _create_navigation_pane(self):
        nav_dock = QDockWidget("Navigation", self)
        nav_dock.setAllowedAreas(Qt.LeftDockWidgetArea)
        tab_widget = QTabWidget()
        self.code_view = CodeView()
        self.code_view.breakpoint_toggled.connect(self._toggle_pc_breakpoint)
        tab_widget.addTab(self.code_view, "Code")
        self.trace_view = TraceView()
        tab_widget.addTab(self.trace_view, "Trace")
        nav_dock.setWidget(tab_widget)
        self.addDockWidget(Qt.LeftDockWidgetArea, nav_dock)

    # @intent:responsibility 右側のステータスインスペクタを作成します。
    def _create_status_inspector(self):
        status_dock = QDockWidget("Status Inspector", self)
        status_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        self.register_view.set_machine(self.machine)
        status_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, status_dock)

    def is_running(self) -> bool:
        return self.run_timer.isActive()

    # @intent:responsibility 実行状態に応じてUIコンポーネントの有効/無効を切り替えます。
    def _update_ui_state(self, is_running: bool):
        has_rom = self._rom_data is not None
        self.load_rom_action.setEnabled(not is_running)
        self.load_config_action.setEnabled(not is_running)
        self.run_action.setEnabled(has_rom and not is_running)
        self.step_action.setEnabled(has_rom and not is_running)
        self.reset_action.setEnabled(has_rom)
        self.stop_action.setEnabled(is_running)

    # --- ROM / Config ---

    # @intent:responsibility ROMファイルを読み込み、仮想マシンをリセットしてロードします。
    def load_rom(self, file_name: str) -> None:
        data = RomLoader().load_rom_file(file_name)
        self._rom_data = data
        self._rom_name = Path(file_name).name
        self.machine.reset_and_load(data)
        self.debugger.clear_history()
        self.status_label.setText(f"Loaded {self._rom_name}")
        self._refresh_views(full=True)
        self._update_ui_state(self.is_running())

    # @intent:responsibility 設定を現在のマシンへ適用し、実行間隔とキーマップを更新します。
    def apply_config(self, config: SystemConfig) -> None:
        self.config = config
        SystemBuilder().apply_config(self.machine, config)
        self.run_timer.setInterval(config.timing.frame_interval_ms)
        self.display_view.set_scale(config.display.scale)
        self._refresh_views(full=False)

    @Slot()
    def _open_rom_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8 *.rom);;All Files (*)")
        if file_name:
            try:
                self.load_rom(file_name)
            except (OSError, ValueError) as e:
                logger.error("Failed to load ROM %s: %s", file_name, e)
                QMessageBox.critical(self, "Error", f"Failed to load ROM file: {e}")

    @Slot()
    def _open_system_config(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open System Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if file_name:
            try:
                self.apply_config(ConfigLoader().load_from_file(file_name))
                self.status_label.setText(f"Config: {Path(file_name).name}")
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.error("Failed to load config %s: %s", file_name, e)
                QMessageBox.critical(self, "Error", f"Failed to load system config: {e}")

    # --- Execution control ---

    # @intent:responsibility 連続実行を開始します。
    @Slot()
    def _run_debugger(self):
        self.status_label.setText("Running...")
        self.run_timer.start()
        self._update_ui_state(True)

    @Slot()
    def _stop_debugger(self):
        self.run_timer.stop()
        self.debugger.stop()
        self.status_label.setText("Stopped")
        self._update_ui_state(False)
        self._refresh_views(full=False)

    @Slot()
    def _step_debugger(self):
        try:
            self.debugger.step_instruction()
        except Exception as e:
            self._report_execution_error(e)
        self._refresh_views(full=False)

    @Slot()
    def _reset_machine(self):
        if self._rom_data is None:
            return
        self.machine.reset_and_load(self._rom_data)
        self.debugger.clear_history()
        self.status_label.setText(f"Reset {self._rom_name}")
        self._refresh_views(full=True)

    # @intent:responsibility タイマーの1ティック分（1フレーム分）の命令を実行します。
    @Slot()
    def _run_frame(self):
        try:
            hit = self.debugger.run(self.config.timing.instructions_per_frame)
        except Exception as e:
            self._report_execution_error(e)
            return

        if hit:
            self.run_timer.stop()
            self.status_label.setText(f"Breakpoint at {self.machine.cpu.get_state().pc:04X}")
            self._update_ui_state(False)
            self._refresh_views(full=False)
        else:
            self._refresh_screen()

    def _report_execution_error(self, error: Exception) -> None:
        self.run_timer.stop()
        self._update_ui_state(False)
        logger.exception("Execution stopped at PC %#06x", self.machine.cpu.get_state().pc)
        self.status_label.setText("Error")
        QMessageBox.critical(self, "Execution Error", f"{type(error).__name__}: {error}")

    @Slot(int)
    def _toggle_pc_breakpoint(self, address: int):
        condition = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=address)
        if condition in self.debugger.get_breakpoints():
            self.debugger.remove_breakpoint(condition)
        else:
            self.debugger.add_breakpoint(condition)
        self._sync_breakpoints()

    def _sync_breakpoints(self):
        self.code_view.set_breakpoints(
            bp.value for bp in self.debugger.get_breakpoints()
            if bp.condition_type == BreakpointConditionType.PC_MATCH
        )

    # --- View refresh ---

    # @intent:responsibility 実行中に毎フレーム更新が必要な表示（画面とブザー）だけを更新します。
    def _refresh_screen(self):
        self.display_view.update_frame(self.machine.framebuffer_rgb())
        buzzing = self.machine.sound_timer > 0
        self.buzzer_label.setStyleSheet(BUZZER_ON_STYLE if buzzing else BUZZER_OFF_STYLE)

    def _refresh_views(self, full: bool):
        self._refresh_screen()
        self.register_view.update_registers()
        self.trace_view.update_trace(self.machine.instructions)
        if full:
            self.code_view.refresh(self.machine)
            self._sync_breakpoints()
        self.code_view.highlight_pc(self.machine)

    # --- Keyboard ---

    def _key_code_for(self, event: QKeyEvent) -> Optional[int]:
        name = QKeySequence(int(event.key())).toString().upper()
        return self.config.keymap.get(name)

    def keyPressEvent(self, event: QKeyEvent):
        key_code = self._key_code_for(event)
        if key_code is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        self.machine.update_key_state(key_code, True)

    def keyReleaseEvent(self, event: QKeyEvent):
        key_code = self._key_code_for(event)
        if key_code is None or event.isAutoRepeat():
            super().keyReleaseEvent(event)
            return
        self.machine.update_key_state(key_code, False)

    # @intent:responsibility アプリケーションにダークテーマのスタイルシートを適用します。
    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        dark_palette.setColor(QPalette.HighlightedText, QColor(0, 0, 0))
        QApplication.setPalette(dark_palette)

        font_family = get_monospace_font_family()
        self.setStyleSheet(f"""
            QWidget {{ font-family: '{font_family}', monospace; font-size: 10pt; }}
            QMainWindow, QToolBar {{ background-color: #1D1D1D; border: none; }}
            QDockWidget::title {{ text-align: left; background: #101010; padding: 4px; font-weight: bold; }}
            QTabWidget::pane {{ border-top: 2px solid #2A82DA; }}
            QTabBar::tab {{ background: #1E1E1E; padding: 8px 12px; min-width: 80px; }}
            QTabBar::tab:selected {{ background: #101010; border: 1px solid #2A82DA; border-bottom-color: #101010; }}
        """)

    def closeEvent(self, event: QCloseEvent):
        self.run_timer.stop()
        self.debugger.stop()
        event.accept()
