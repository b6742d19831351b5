# chip8_tracer/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, List, Optional

from chip8_tracer.common.types import DisassemblyRow, RegisterLayoutInfo
from chip8_tracer.core.snapshot import ExecutionResult, Operation, PcUpdate, Snapshot, TraceEntry
from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import CpuBus

TRACE_BUFFER_LENGTH = 100

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    バスは保持せず、cycle()の呼び出しごとに排他的に受け取ります。
    """
    def __init__(self):
        self._state: CpuState = self._create_initial_state()
        self._trace: Deque[TraceEntry] = deque(maxlen=TRACE_BUFFER_LENGTH)
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:rationale 各CPUアーキテクチャで初期状態が異なるため、抽象メソッドとして定義します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。トレースも破棄します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._trace.clear()

    def get_state(self) -> CpuState:
        return self._state

    # @intent:responsibility 直近に実行した命令の履歴を新しい順に返します。
    def get_trace(self) -> List[TraceEntry]:
        return list(self._trace)

    @abstractmethod
    def _fetch(self, bus: CpuBus) -> int:
        """
        現在のPCから次の命令（オペコード）をフェッチして返します。PCは変更しません。
        """
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        """
        オペコードをOperationに変換します。同じオペコードには常に同じ結果を返します。
        """
        pass

    @abstractmethod
    def _execute(self, operation: Operation, bus: CpuBus) -> ExecutionResult:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （停止判定→フェッチ→デコード→実行→トレース記録→PC更新→Snapshot生成）を定義します。
    def cycle(self, bus: CpuBus) -> Optional[Snapshot]:
        """
        最大1命令分だけ状態を変更します。
        命令を実行しなかった場合（入力待ち、停止、VBlank待ち）はNoneを返します。
        """
        # 1. 前処理: 前サイクルまでの残存ログを破棄
        bus.get_and_clear_activity_log()

        # 2. 停止判定 (Hook)
        if self._handle_halt(bus):
            return None

        initial_pc = self._state.pc

        # 3. フェッチ・デコード・実行
        opcode = self._fetch(bus)
        operation = self._decode(opcode)
        result = self._execute(operation, bus)

        if result.pc_update is PcUpdate.STALL:
            return None

        # 4. トレース記録とPC更新
        entry = TraceEntry(address=initial_pc, opcode=opcode, display=result.display)
        self._trace.appendleft(entry)
        self._update_pc(result)

        # 5. Snapshot生成
        return Snapshot(
            state=self._state.clone(),
            operation=operation,
            trace=entry,
            bus_activity=bus.get_and_clear_activity_log()
        )

    # @intent:responsibility 命令を実行できない状態かどうかを判定します。
    # @intent:return 今サイクルを何もせず終えるべきならTrue。
    def _handle_halt(self, bus: CpuBus) -> bool:
        """
        デフォルトは常に実行可能（False）。オーバーライドして停止条件を実装する。
        """
        return False

    # @intent:responsibility 命令ハンドラが返した指示に従ってPCを更新します。
    def _update_pc(self, result: ExecutionResult) -> None:
        if result.pc_update is PcUpdate.ADVANCE:
            self._state.pc += 2
        elif result.pc_update is PcUpdate.SKIP_NEXT:
            self._state.pc += 4
        elif result.pc_update is PcUpdate.JUMP:
            self._state.pc = result.target

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        pass

    @abstractmethod
    def disassemble(self, bus: CpuBus, start_addr: int, length: int) -> List[DisassemblyRow]:
        """
        指定されたメモリ範囲を逆アセンブルし、(address, hex_bytes, mnemonic) のタプルリストを返す。
        """
        pass
