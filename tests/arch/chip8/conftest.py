# tests/arch/chip8/conftest.py
import pytest

from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.devices.clock import Clock
from chip8_tracer.system.machine import Chip8Machine
from chip8_tracer.transport.bus import Bus


class FakeTime:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def rom(*opcodes: int) -> bytes:
    return b"".join(opcode.to_bytes(2, "big") for opcode in opcodes)


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def machine(fake_time):
    return Chip8Machine(time_source=fake_time)


@pytest.fixture
def cpu_env(fake_time):
    """
    命令ハンドラを直接呼び出すための (state, bus, run) の組。
    """
    state = Chip8CpuState()
    bus = Bus(clock=Clock(fake_time))

    def run(opcode: int):
        return execute_instruction(decode_opcode(opcode), state, bus)

    return state, bus, run


@pytest.fixture
def program(machine):
    """
    オペコード列をROMとしてマシンにロードする関数を返します。
    """
    def load(*opcodes: int) -> Chip8Machine:
        machine.load_rom(rom(*opcodes))
        return machine

    return load
