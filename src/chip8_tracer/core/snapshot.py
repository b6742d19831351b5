# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令の実行結果を記録する不変のデータ構造と、
命令ハンドラがCPUに返すPC更新指示を定義します。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコード結果（オペコード、種別、ニーモニック、オペランド）を保持するデータクラス。
    """
    opcode: int # 例: 0x6A05
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["VA", "0x05"]
    kind: Optional[Enum] = None # アーキテクチャ固有の命令種別
    length: int = 2 # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    # @intent:responsibility 逆アセンブル表示用の文字列を返します。
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 命令実行後のプログラムカウンタの更新方法を定義します。
class PcUpdate(Enum):
    ADVANCE = "ADVANCE"       # 次の命令へ (+2)
    SKIP_NEXT = "SKIP_NEXT"   # 次の命令をスキップ (+4)
    JUMP = "JUMP"             # 絶対アドレスへ
    STALL = "STALL"           # PCを据え置き、同じ命令を次サイクルで再実行

# @intent:responsibility 命令ハンドラの実行結果（PC更新指示と表示用の説明）を保持します。
@dataclass(frozen=True)
class ExecutionResult:
    pc_update: PcUpdate
    display: str
    target: Optional[int] = None # JUMP時の飛び先

    @classmethod
    def advance(cls, display: str) -> "ExecutionResult":
        return cls(PcUpdate.ADVANCE, display)

    @classmethod
    def skip_if(cls, condition: bool, display: str) -> "ExecutionResult":
        return cls(PcUpdate.SKIP_NEXT if condition else PcUpdate.ADVANCE, display)

    @classmethod
    def jump(cls, target: int, display: str) -> "ExecutionResult":
        return cls(PcUpdate.JUMP, display, target)

    @classmethod
    def stall(cls, display: str) -> "ExecutionResult":
        return cls(PcUpdate.STALL, display)

# @intent:responsibility 実行履歴（トレースリング）の1エントリを記録します。
@dataclass(frozen=True)
class TraceEntry:
    address: int
    opcode: int
    display: str

# @intent:responsibility 1命令実行直後のCPU状態とバスアクティビティを不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUの状態と直前の命令の記録。
    UIへの情報提供と、デバッグ時の状態記録に用います。
    """
    state: CpuState
    operation: Operation
    trace: TraceEntry
    bus_activity: List[BusAccess] = field(default_factory=list)
