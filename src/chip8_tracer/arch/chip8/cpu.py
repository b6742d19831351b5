# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import logging
from typing import Dict, List

from chip8_tracer.common.types import DisassemblyRow, RegisterInfo, RegisterLayoutInfo
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import ExecutionResult, Operation
from chip8_tracer.transport.bus import CpuBus
from chip8_tracer.transport.memory import MEMORY_SIZE
from chip8_tracer.arch.chip8.state import Chip8CpuState, REGISTER_COUNT
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.arch.chip8 import disassembler

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。
    """
    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility 設定フラグへのアクセサ。リセット後も外部から再設定できるようにします。
    @property
    def shift_quirk_enabled(self) -> bool:
        return self._state.shift_quirk_enabled

    @shift_quirk_enabled.setter
    def shift_quirk_enabled(self, value: bool) -> None:
        self._state.shift_quirk_enabled = bool(value)

    @property
    def vblank_wait(self) -> bool:
        return self._state.vblank_wait

    @vblank_wait.setter
    def vblank_wait(self, value: bool) -> None:
        self._state.vblank_wait = bool(value)
        if not self._state.vblank_wait:
            self._state.awaiting_vblank = False

    # @intent:responsibility キー入力待ち・キー応答の反映・PC範囲外の停止を処理します。
    # @intent:flow 入力待ち中は何もしない -> 応答があればレジスタへ書き込む -> PCが4096以上なら停止
    def _handle_halt(self, bus: CpuBus) -> bool:
        if bus.waiting_for_key:
            return True

        response = bus.take_key_response()
        if response is not None:
            self._state.set_v(response.register, response.key_code)

        if self._state.pc >= MEMORY_SIZE:
            # PCが範囲外に出た場合は何もしない（エラーではない）
            return True
        return False

    # @intent:responsibility PCから2バイトをビッグエンディアンで読み出します。
    def _fetch(self, bus: CpuBus) -> int:
        pc = self._state.pc
        return (bus.read(pc) << 8) | bus.read(pc + 1)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation, bus: CpuBus) -> ExecutionResult:
        result = execute_instruction(operation, self._state, bus)
        logger.debug("%#06x %s: %s", self._state.pc, operation.opcode_hex, result.display)
        return result

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": s.v[index] for index in range(REGISTER_COUNT)}
        registers.update({"I": s.i, "PC": s.pc, "SP": s.sp})
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ])
        ]

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, bus: CpuBus, start_addr: int, length: int) -> List[DisassemblyRow]:
        return disassembler.disassemble(bus, start_addr, length)
