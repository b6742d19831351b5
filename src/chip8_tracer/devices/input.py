# src/chip8_tracer/devices/input.py
"""
Device Layer (キーパッド)

16キーの押下状態と、Fx0A命令による「キー入力待ち」プロトコルを管理します。
待ち状態はフラグとして保持され、スレッドをブロックすることはありません。
"""
import logging
from typing import List, NamedTuple, Optional

from chip8_tracer.common.errors import BoundsViolationError

logger = logging.getLogger(__name__)

KEY_COUNT = 16

# @intent:data_structure キー入力待ちの解決結果。CPUが1度だけ消費します。
class KeyResponse(NamedTuple):
    key_code: int
    register: int


def _check_index(value: int, kind: str) -> None:
    if not 0 <= value < KEY_COUNT:
        raise BoundsViolationError(f"{kind} {value} out of range 0-{KEY_COUNT - 1}.")

# @intent:responsibility キー状態の保持とキー入力待ちの要求・解決を行います。
class Input:
    def __init__(self):
        self._state: List[bool] = [False] * KEY_COUNT
        self.waiting = False
        self.request_register = 0
        self.response: Optional[KeyResponse] = None

    # @intent:responsibility キーの押下状態を更新し、待ち状態であれば押下で解決します。
    # @intent:post-condition 状態が変化しないイベントと、離上（pressed=False）は待ちを解決しません。
    def update(self, key_code: int, pressed: bool) -> None:
        _check_index(key_code, "Key")
        if self._state[key_code] == pressed:
            return

        self._state[key_code] = pressed

        if pressed and self.waiting:
            self.waiting = False
            self.response = KeyResponse(key_code=key_code, register=self.request_register)
            logger.debug("Key %X resolved wait for V%X.", key_code, self.request_register)

    # @intent:responsibility 指定レジスタへのキー入力待ち状態に入ります。
    def request_key_press(self, register: int) -> None:
        _check_index(register, "Register")
        self.waiting = True
        self.request_register = register

    def is_key_pressed(self, key_code: int) -> bool:
        _check_index(key_code, "Key")
        return self._state[key_code]

    # @intent:responsibility 解決済みのキー応答を取り出し、クリアします。
    def take_response(self) -> Optional[KeyResponse]:
        response = self.response
        self.response = None
        return response
