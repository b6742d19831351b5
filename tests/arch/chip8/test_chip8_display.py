# tests/arch/chip8/test_chip8_display.py
"""
CHIP-8画面命令 (00E0, Dxyn) とVBlank待ちの単体テスト。
"""
from chip8_tracer.devices.clock import TICK_PERIOD
from chip8_tracer.transport.memory import FONT

# @intent:test_suite スプライト描画の結果、VFの衝突フラグ、VBlank待ちによる保留を検証します。

def glyph_rows(graphics, x, y, rows):
    return [
        int("".join("1" if graphics.is_pixel_on(x + bit, y + row) else "0" for bit in range(8)), 2)
        for row in range(rows)
    ]


# @intent:test_case_scenario 6A05 / A000 / D0A5 でフォント"0"が(V0, VA)に描かれることを検証します。
def test_draw_font_zero(program):
    machine = program(0x6A05, 0xA000, 0xD0A5)
    machine.step()
    state = machine.cpu.get_state()
    assert state.v[0xA] == 5
    assert state.pc == 0x202

    machine.step()
    assert state.i == 0

    snapshot = machine.step()
    assert state.v[0xF] == 0
    assert glyph_rows(machine.bus.graphics, 0, 5, 5) == list(FONT[0:5])
    assert snapshot.trace.display == "Draw 5 byte sprite from addr 0x0000 at point (0, 5)"


def test_redraw_sets_collision_and_erases(program):
    machine = program(0xA000, 0xD005, 0xD005)
    for _ in range(3):
        machine.step()
    assert machine.cpu.get_state().v[0xF] == 1
    assert glyph_rows(machine.bus.graphics, 0, 0, 5) == [0] * 5


# @intent:test_case_wrap 開始座標は画面サイズで折り返されることを検証します。
def test_start_position_wraps(program):
    machine = program(0x6046, 0x6122, 0xA000, 0xD011)
    for _ in range(4):
        machine.step()
    assert glyph_rows(machine.bus.graphics, 6, 2, 1) == [FONT[0]]


def test_cls(program):
    machine = program(0xA000, 0xD005, 0x00E0)
    for _ in range(3):
        machine.step()
    assert glyph_rows(machine.bus.graphics, 0, 0, 5) == [0] * 5


# @intent:test_case_vblank VBlank待ち有効時、VBlankが来るまで描画とPC更新が保留されることを検証します。
def test_vblank_wait_stalls_until_tick(program, fake_time):
    machine = program(0xA000, 0xD005)
    machine.vblank_wait = True
    machine.step()

    assert machine.step() is None
    assert machine.step() is None
    state = machine.cpu.get_state()
    assert state.pc == 0x202
    assert state.awaiting_vblank is True
    assert len(machine.instructions) == 1
    assert glyph_rows(machine.bus.graphics, 0, 0, 1) == [0]

    fake_time.now = TICK_PERIOD
    snapshot = machine.step()
    assert snapshot is not None
    assert state.pc == 0x204
    assert state.awaiting_vblank is False
    assert glyph_rows(machine.bus.graphics, 0, 0, 1) == [FONT[0]]


def test_vblank_wait_disabled_draws_immediately(program):
    machine = program(0xA000, 0xD005)
    machine.step()
    assert machine.step() is not None
    assert machine.cpu.get_state().awaiting_vblank is False


# @intent:test_case_vblank 保留中にVBlank待ちを無効化すると待ち状態が解除され、再有効化後の描画は新たにVBlankを待つことを検証します。
def test_vblank_wait_toggle_resets_pending_wait(program, fake_time):
    machine = program(0xA000, 0xD005, 0xD005)
    machine.vblank_wait = True
    machine.step()
    assert machine.step() is None
    state = machine.cpu.get_state()
    assert state.awaiting_vblank is True

    machine.vblank_wait = False
    assert state.awaiting_vblank is False
    assert machine.step() is not None
    assert state.pc == 0x204

    machine.vblank_wait = True
    fake_time.now = TICK_PERIOD
    assert machine.step() is None
    assert state.pc == 0x204
    assert state.awaiting_vblank is True
