# src/chip8_tracer/transport/bus.py
"""
Transport Layer (共通バス)

このモジュールは、メモリ・フレームバッファ・クロック・キーパッドの4つのデバイスを束ね、
CPUが必要とする操作だけをCpuBusインターフェースとして公開します。
CPUはステップごとにバスを受け取り、保持しません。
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from chip8_tracer.devices.clock import Clock
from chip8_tracer.devices.graphics import GraphicsBuffer
from chip8_tracer.devices.input import Input, KeyResponse
from chip8_tracer.transport.memory import Memory

# @intent:responsibility バスアクセスを記録するためのタイプを定義します。
class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のバスアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class BusAccess:
    """
    バス上で行われた単一のメモリアクセスを記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: BusAccessType
    previous_data: Optional[int] = None # WRITE時の書き込み前の値

# @intent:responsibility CPUから見えるバスの操作を定義します。
# @intent:rationale CPUを生のデバイスではなくこのインターフェースに依存させ、
#                  テストでは任意の実装に差し替えられるようにします。
class CpuBus(ABC):
    """
    CPUが1サイクルの間に利用できる操作の集合。
    """
    # --- Memory ---
    @abstractmethod
    def read(self, address: int) -> int:
        pass

    @abstractmethod
    def write(self, address: int, data: int) -> None:
        pass

    # @intent:rationale 逆アセンブラなど、実行に影響しない読み出し用。ログに残りません。
    @abstractmethod
    def peek(self, address: int) -> int:
        pass

    # --- Graphics ---
    @abstractmethod
    def draw_byte(self, x: int, y: int, data: int) -> bool:
        pass

    @abstractmethod
    def clear_screen(self) -> None:
        pass

    # --- Clock ---
    @abstractmethod
    def tick_clock(self) -> None:
        pass

    @property
    @abstractmethod
    def vblank(self) -> bool:
        pass

    @abstractmethod
    def get_delay_timer(self) -> int:
        pass

    @abstractmethod
    def set_delay_timer(self, value: int) -> None:
        pass

    @abstractmethod
    def set_sound_timer(self, value: int) -> None:
        pass

    # --- Input ---
    @property
    @abstractmethod
    def waiting_for_key(self) -> bool:
        pass

    @abstractmethod
    def take_key_response(self) -> Optional[KeyResponse]:
        pass

    @abstractmethod
    def request_key_press(self, register: int) -> None:
        pass

    @abstractmethod
    def is_key_pressed(self, key_code: int) -> bool:
        pass

    # @intent:responsibility 記録されたバスアクティビティログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        """
        アクセスを記録しない実装では常に空リストを返します。
        """
        return []

# @intent:responsibility 4つのデバイスを所有し、CpuBusの操作を各デバイスへ委譲します。
# @intent:rationale メモリアクセスを全て記録し、Snapshotに含めることでシステムの観測可能性を高めます。
class Bus(CpuBus):
    """
    CHIP-8のハードウェア状態を束ねる共通バス。
    """
    def __init__(self, memory: Optional[Memory] = None, graphics: Optional[GraphicsBuffer] = None,
                 clock: Optional[Clock] = None, input_device: Optional[Input] = None):
        self.memory = memory or Memory()
        self.graphics = graphics or GraphicsBuffer()
        self.clock = clock or Clock()
        self.input = input_device or Input()
        self._bus_activity_log: List[BusAccess] = [] # バスアクセスログ

    def get_and_clear_activity_log(self) -> List[BusAccess]:
        log = self._bus_activity_log
        self._bus_activity_log = []
        return log

    def read(self, address: int) -> int:
        data = self.memory.read(address)
        self._bus_activity_log.append(BusAccess(address, data, BusAccessType.READ))
        return data

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        UIや逆アセンブラなどのインスペクタ用。
        """
        return self.memory.read(address)

    def write(self, address: int, data: int) -> None:
        previous = self.memory.read(address)
        self.memory.write(address, data)
        self._bus_activity_log.append(BusAccess(address, data, BusAccessType.WRITE, previous))

    def draw_byte(self, x: int, y: int, data: int) -> bool:
        return self.graphics.draw_byte(x, y, data)

    def clear_screen(self) -> None:
        self.graphics.clear()

    def tick_clock(self) -> None:
        self.clock.update()

    @property
    def vblank(self) -> bool:
        return self.clock.vblank

    def get_delay_timer(self) -> int:
        return self.clock.delay_timer

    def set_delay_timer(self, value: int) -> None:
        self.clock.delay_timer = value

    def set_sound_timer(self, value: int) -> None:
        self.clock.sound_timer = value

    @property
    def waiting_for_key(self) -> bool:
        return self.input.waiting

    def take_key_response(self) -> Optional[KeyResponse]:
        return self.input.take_response()

    def request_key_press(self, register: int) -> None:
        self.input.request_key_press(register)

    def is_key_pressed(self, key_code: int) -> bool:
        return self.input.is_key_pressed(key_code)
