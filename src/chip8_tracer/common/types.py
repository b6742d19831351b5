"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from typing import List, NamedTuple, Tuple

# @intent:data_structure 逆アセンブル結果の1行 (address, hex_bytes, mnemonic)。
DisassemblyRow = Tuple[int, str, str]

# @intent:data_structure 単一のレジスタの表示定義。UIが動的にフィールドを生成するために使用される。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

# @intent:data_structure レジスタグループの表示定義。関連するレジスタ（例: "General", "Pointers"）をまとめる。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]

# @intent:data_structure 1ピクセル分の色。フレームバッファとパレット設定で共有します。
class Rgb(NamedTuple):
    red: int
    green: int
    blue: int

    # @intent:responsibility "#RRGGBB" 形式の文字列からRgbを生成します。
    @classmethod
    def from_hex(cls, text: str) -> "Rgb":
        value = text.strip().lstrip("#")
        if len(value) != 6:
            raise ValueError(f"Invalid color format: {text}")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
