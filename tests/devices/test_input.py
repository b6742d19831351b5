# tests/devices/test_input.py
"""
chip8_tracer.devices.inputモジュールの単体テスト。
"""
import pytest

from chip8_tracer.common.errors import BoundsViolationError
from chip8_tracer.devices.input import Input, KEY_COUNT, KeyResponse

# @intent:test_suite キー状態の保持とキー入力待ちプロトコルを検証します。

class TestInput:
    def test_initial_state(self):
        keypad = Input()
        assert not any(keypad.is_key_pressed(key) for key in range(KEY_COUNT))
        assert keypad.waiting is False
        assert keypad.take_response() is None

    def test_press_and_release(self):
        keypad = Input()
        keypad.update(0xF, True)
        assert keypad.is_key_pressed(0xF)
        keypad.update(0xF, False)
        assert not keypad.is_key_pressed(0xF)

    # @intent:test_case_wait 待ち中の押下で応答が生成され、1度だけ取り出せることを検証します。
    def test_press_resolves_wait(self):
        keypad = Input()
        keypad.request_key_press(3)
        assert keypad.waiting is True

        keypad.update(5, True)
        assert keypad.waiting is False
        assert keypad.take_response() == KeyResponse(key_code=5, register=3)
        assert keypad.take_response() is None

    # @intent:test_case_wait 離上イベントは待ちを解決しないことを検証します。
    def test_release_never_resolves_wait(self):
        keypad = Input()
        keypad.update(5, True)
        keypad.request_key_press(0)

        keypad.update(5, False)
        assert keypad.waiting is True
        assert keypad.response is None

        keypad.update(5, True)
        assert keypad.take_response() == KeyResponse(5, 0)

    # @intent:test_case_wait 既に押されているキーの再押下（状態変化なし）は待ちを解決しないことを検証します。
    def test_unchanged_press_does_not_resolve(self):
        keypad = Input()
        keypad.update(2, True)
        keypad.request_key_press(7)

        keypad.update(2, True)
        assert keypad.waiting is True
        assert keypad.response is None

    # @intent:test_case_wait 待ちでないときの押下は応答を生成しないことを検証します。
    def test_press_without_wait(self):
        keypad = Input()
        keypad.update(1, True)
        assert keypad.take_response() is None

    def test_invalid_indices(self):
        keypad = Input()
        with pytest.raises(BoundsViolationError):
            keypad.update(KEY_COUNT, True)
        with pytest.raises(BoundsViolationError):
            keypad.is_key_pressed(-1)
        with pytest.raises(BoundsViolationError):
            keypad.request_key_press(16)
