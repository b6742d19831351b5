# chip8_tracer/debugger/debugger.py
"""
デバッガモジュール。

仮想マシンの実行を制御し、ユーザーが指定した条件（ブレークポイント）で
実行を中断させる責務を負います。
"""
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional

from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.system.machine import Chip8Machine
from chip8_tracer.transport.bus import BusAccessType

logger = logging.getLogger(__name__)

HISTORY_LENGTH = 1000

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUEで使用 ("V0"-"VF", "I", "PC", "SP")
    enabled: bool = True

# @intent:responsibility 仮想マシンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    仮想マシンのステップ実行を制御し、ブレークポイントの管理を行うクラス。
    """
    def __init__(self, machine: Chip8Machine):
        self._machine = machine
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._last_snapshot: Optional[Snapshot] = None
        self._history: Deque[Snapshot] = deque(maxlen=HISTORY_LENGTH)

    @property
    def machine(self) -> Chip8Machine:
        return self._machine

    @property
    def is_running(self) -> bool:
        return self._running

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        """
        実行履歴を古い順に返します。
        """
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
        self._last_snapshot = None

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def _is_pc_breakpoint(self, pc: int) -> bool:
        return any(
            bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc
            for bp in self._breakpoints
        )

    # @intent:responsibility Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
    def _check_other_breakpoints(self, snapshot: Snapshot) -> bool:
        registers = self._machine.cpu.get_register_map()

        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.READ and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.WRITE and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name and registers.get(bp.register_name.upper()) == bp.value:
                    return True
        return False

    # @intent:responsibility 仮想マシンを1ステップ進めます。
    # @intent:return 命令を実行した場合はSnapshot、入力待ちなどで実行しなかった場合はNone。
    def step_instruction(self) -> Optional[Snapshot]:
        snapshot = self._machine.step()
        if snapshot is not None:
            self._last_snapshot = snapshot
            self._history.append(snapshot)
        return snapshot

    # @intent:responsibility 最大max_steps回だけステップを繰り返し、ブレークポイントで停止します。
    # @intent:return ブレークポイントで停止した場合はTrue。
    def run(self, max_steps: int) -> bool:
        """
        ブレークポイントは各命令の実行後に評価されるため、
        ブレークポイント上のPCから呼び出した場合はそのまま先へ進みます。
        """
        self._running = True

        for _ in range(max_steps):
            if not self._running:
                return False

            snapshot = self.step_instruction()
            if snapshot is None:
                continue

            if self._check_other_breakpoints(snapshot):
                self._running = False
                logger.info("Breakpoint hit after %s at %#06x",
                            snapshot.operation.mnemonic, snapshot.trace.address)
                return True

            if self._is_pc_breakpoint(snapshot.state.pc):
                self._running = False
                logger.info("Breakpoint hit at PC: %#06x", snapshot.state.pc)
                return True

        self._running = False
        return False

    def stop(self) -> None:
        self._running = False
