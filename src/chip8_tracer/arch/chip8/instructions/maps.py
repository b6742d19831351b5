# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。
"""
from typing import Callable, Dict, List, Tuple

from . import alu
from . import control
from . import display
from . import load
from .base import InstructionKind as K
from .base import field_n, field_nn, field_nnn, field_x, field_y, reg_name

# @intent:map 上位ニブルだけでは決まらないグループの下位ビットから命令種別へのマッピング。
GROUP_0 = {0xE0: K.CLS, 0xEE: K.RET} # 下位バイトで照合
GROUP_8 = {
    0x0: K.LD_VX_VY, 0x1: K.OR, 0x2: K.AND, 0x3: K.XOR, 0x4: K.ADD_VX_VY,
    0x5: K.SUB_VX_VY, 0x6: K.SHR, 0x7: K.SUBN_VX_VY, 0xE: K.SHL,
} # 下位ニブルで照合
GROUP_E = {0x9E: K.SKP, 0xA1: K.SKNP} # 下位バイトで照合
GROUP_F = {
    0x07: K.LD_VX_DT, 0x0A: K.LD_VX_K, 0x15: K.LD_DT_VX, 0x18: K.LD_ST_VX, 0x1E: K.ADD_I_VX,
    0x29: K.LD_F_VX, 0x33: K.LD_B_VX, 0x55: K.LD_MEM_VX, 0x65: K.LD_VX_MEM,
} # 下位バイトで照合


def _fixed(kind: K) -> Callable[[int], K]:
    return lambda opcode: kind

# @intent:map 上位ニブルから命令種別の判定関数へのマッピングテーブル。
DECODE_MAP: Dict[int, Callable[[int], K]] = {
    0x0: lambda opcode: GROUP_0.get(field_nn(opcode), K.INVALID),
    0x1: _fixed(K.JP),
    0x2: _fixed(K.CALL),
    0x3: _fixed(K.SE_VX_NN),
    0x4: _fixed(K.SNE_VX_NN),
    0x5: _fixed(K.SE_VX_VY),  # 下位ニブルは無視
    0x6: _fixed(K.LD_VX_NN),
    0x7: _fixed(K.ADD_VX_NN),
    0x8: lambda opcode: GROUP_8.get(field_n(opcode), K.INVALID),
    0x9: _fixed(K.SNE_VX_VY), # 下位ニブルは無視
    0xA: _fixed(K.LD_I),
    0xB: _fixed(K.JP_V0),
    0xC: _fixed(K.RND),
    0xD: _fixed(K.DRW),
    0xE: lambda opcode: GROUP_E.get(field_nn(opcode), K.INVALID),
    0xF: lambda opcode: GROUP_F.get(field_nn(opcode), K.INVALID),
}


def _vx(opcode: int) -> str:
    return reg_name(field_x(opcode))

def _vy(opcode: int) -> str:
    return reg_name(field_y(opcode))

def _addr(opcode: int) -> str:
    return f"${field_nnn(opcode):03X}"

def _byte(opcode: int) -> str:
    return f"#${field_nn(opcode):02X}"

# @intent:map 命令種別から (ニーモニック, オペランド生成関数) へのマッピングテーブル。
FORMAT_MAP: Dict[K, Tuple[str, Callable[[int], List[str]]]] = {
    K.CLS: ("CLS", lambda o: []),
    K.RET: ("RET", lambda o: []),
    K.JP: ("JP", lambda o: [_addr(o)]),
    K.CALL: ("CALL", lambda o: [_addr(o)]),
    K.SE_VX_NN: ("SE", lambda o: [_vx(o), _byte(o)]),
    K.SNE_VX_NN: ("SNE", lambda o: [_vx(o), _byte(o)]),
    K.SE_VX_VY: ("SE", lambda o: [_vx(o), _vy(o)]),
    K.LD_VX_NN: ("LD", lambda o: [_vx(o), _byte(o)]),
    K.ADD_VX_NN: ("ADD", lambda o: [_vx(o), _byte(o)]),
    K.LD_VX_VY: ("LD", lambda o: [_vx(o), _vy(o)]),
    K.OR: ("OR", lambda o: [_vx(o), _vy(o)]),
    K.AND: ("AND", lambda o: [_vx(o), _vy(o)]),
    K.XOR: ("XOR", lambda o: [_vx(o), _vy(o)]),
    K.ADD_VX_VY: ("ADD", lambda o: [_vx(o), _vy(o)]),
    K.SUB_VX_VY: ("SUB", lambda o: [_vx(o), _vy(o)]),
    K.SHR: ("SHR", lambda o: [_vx(o), _vy(o)]),
    K.SUBN_VX_VY: ("SUBN", lambda o: [_vx(o), _vy(o)]),
    K.SHL: ("SHL", lambda o: [_vx(o), _vy(o)]),
    K.SNE_VX_VY: ("SNE", lambda o: [_vx(o), _vy(o)]),
    K.LD_I: ("LD", lambda o: ["I", _addr(o)]),
    K.JP_V0: ("JP", lambda o: ["V0", _addr(o)]),
    K.RND: ("RND", lambda o: [_vx(o), _byte(o)]),
    K.DRW: ("DRW", lambda o: [_vx(o), _vy(o), f"{field_n(o)}"]),
    K.SKP: ("SKP", lambda o: [_vx(o)]),
    K.SKNP: ("SKNP", lambda o: [_vx(o)]),
    K.LD_VX_DT: ("LD", lambda o: [_vx(o), "DT"]),
    K.LD_VX_K: ("LD", lambda o: [_vx(o), "K"]),
    K.LD_DT_VX: ("LD", lambda o: ["DT", _vx(o)]),
    K.LD_ST_VX: ("LD", lambda o: ["ST", _vx(o)]),
    K.ADD_I_VX: ("ADD", lambda o: ["I", _vx(o)]),
    K.LD_F_VX: ("LD", lambda o: ["F", _vx(o)]),
    K.LD_B_VX: ("LD", lambda o: ["B", _vx(o)]),
    K.LD_MEM_VX: ("LD", lambda o: ["[I]", _vx(o)]),
    K.LD_VX_MEM: ("LD", lambda o: [_vx(o), "[I]"]),
    K.INVALID: ("UNKNOWN", lambda o: [f"${o:04X}"]),
}

# @intent:map 命令種別から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Display
    K.CLS: display.execute_cls,
    K.DRW: display.execute_drw,

    # Control
    K.RET: control.execute_ret,
    K.JP: control.execute_jp,
    K.CALL: control.execute_call,
    K.SE_VX_NN: control.execute_se_vx_nn,
    K.SNE_VX_NN: control.execute_sne_vx_nn,
    K.SE_VX_VY: control.execute_se_vx_vy,
    K.SNE_VX_VY: control.execute_sne_vx_vy,
    K.JP_V0: control.execute_jp_v0,
    K.SKP: control.execute_skp,
    K.SKNP: control.execute_sknp,
    K.LD_VX_K: control.execute_ld_vx_k,
    K.INVALID: control.execute_invalid,

    # ALU
    K.LD_VX_NN: alu.execute_ld_vx_nn,
    K.ADD_VX_NN: alu.execute_add_vx_nn,
    K.LD_VX_VY: alu.execute_ld_vx_vy,
    K.OR: alu.execute_or,
    K.AND: alu.execute_and,
    K.XOR: alu.execute_xor,
    K.ADD_VX_VY: alu.execute_add_vx_vy,
    K.SUB_VX_VY: alu.execute_sub_vx_vy,
    K.SHR: alu.execute_shr,
    K.SUBN_VX_VY: alu.execute_subn_vx_vy,
    K.SHL: alu.execute_shl,
    K.RND: alu.execute_rnd,

    # Load/Store
    K.LD_I: load.execute_ld_i,
    K.LD_VX_DT: load.execute_ld_vx_dt,
    K.LD_DT_VX: load.execute_ld_dt_vx,
    K.LD_ST_VX: load.execute_ld_st_vx,
    K.ADD_I_VX: load.execute_add_i_vx,
    K.LD_F_VX: load.execute_ld_f_vx,
    K.LD_B_VX: load.execute_ld_b_vx,
    K.LD_MEM_VX: load.execute_ld_mem_vx,
    K.LD_VX_MEM: load.execute_ld_vx_mem,
}
