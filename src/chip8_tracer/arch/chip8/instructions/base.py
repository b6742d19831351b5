# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通定義とユーティリティ。
"""
from enum import Enum

# @intent:responsibility デコード結果として取りうる全ての命令種別を列挙します。
# @intent:rationale 未定義のエンコーディングもINVALIDという明示的な種別として表現します。
class InstructionKind(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP = "1nnn"
    CALL = "2nnn"
    SE_VX_NN = "3xnn"
    SNE_VX_NN = "4xnn"
    SE_VX_VY = "5xy0"
    LD_VX_NN = "6xnn"
    ADD_VX_NN = "7xnn"
    LD_VX_VY = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD_VX_VY = "8xy4"
    SUB_VX_VY = "8xy5"
    SHR = "8xy6"
    SUBN_VX_VY = "8xy7"
    SHL = "8xyE"
    SNE_VX_VY = "9xy0"
    LD_I = "Annn"
    JP_V0 = "Bnnn"
    RND = "Cxnn"
    DRW = "Dxyn"
    SKP = "Ex9E"
    SKNP = "ExA1"
    LD_VX_DT = "Fx07"
    LD_VX_K = "Fx0A"
    LD_DT_VX = "Fx15"
    LD_ST_VX = "Fx18"
    ADD_I_VX = "Fx1E"
    LD_F_VX = "Fx29"
    LD_B_VX = "Fx33"
    LD_MEM_VX = "Fx55"
    LD_VX_MEM = "Fx65"
    INVALID = "????"

# @intent:utility_function オペコードから各フィールドを取り出します。
def field_x(opcode: int) -> int:
    return (opcode & 0x0F00) >> 8

def field_y(opcode: int) -> int:
    return (opcode & 0x00F0) >> 4

def field_n(opcode: int) -> int:
    return opcode & 0x000F

def field_nn(opcode: int) -> int:
    return opcode & 0x00FF

def field_nnn(opcode: int) -> int:
    return opcode & 0x0FFF

# @intent:utility_function 表示用のレジスタ名 ("V0"-"VF") を返します。
def reg_name(index: int) -> str:
    return f"V{index:X}"
