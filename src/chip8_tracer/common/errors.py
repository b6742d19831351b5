# src/chip8_tracer/common/errors.py
"""
共通の例外定義。

コア層（メモリ、入力、CPU）が送出するエラーをここに集約します。
不正なオペコードは例外ではなく、ログ出力の上でNOPとして扱われます。
"""


# @intent:responsibility CHIP-8コアが送出する全ての例外の基底クラスです。
class Chip8Error(Exception):
    pass


# @intent:responsibility アドレス・キー番号・レジスタ番号・座標の範囲外アクセスを表します。
# @intent:rationale IndexErrorを継承し、既存の範囲外アクセス処理（except IndexError）とも互換にします。
class BoundsViolationError(Chip8Error, IndexError):
    pass


# @intent:responsibility 17段目のサブルーチン呼び出し（スタック溢れ）を表します。
class StackOverflowError(Chip8Error):
    pass


# @intent:responsibility 呼び出し元のないRET（スタック枯渇）を表します。
class StackUnderflowError(Chip8Error):
    pass
