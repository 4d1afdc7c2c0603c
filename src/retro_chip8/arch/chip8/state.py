# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
import random
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.state import CpuState
from retro_chip8.arch.chip8.constants import (
    PROGRAM_START, NUM_REGISTERS, STACK_DEPTH, NUM_KEYS, SCREEN_SIZE, FLAG_REGISTER,
)

# @intent:responsibility CHIP-8の全レジスタ（V0-VF, I, PC, SP）、スタック、画面、キーパッド、タイマーを保持します。
# @intent:rationale メモリ本体はBus上のRAMが保持し、ここには含めません。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUの状態を保持するデータクラス。
    displayは64x32の行優先配列、keysは16個のキー押下状態です。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)
    i: int = 0x0000     # Index Register
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0
    display: List[bool] = field(default_factory=lambda: [False] * SCREEN_SIZE)
    keys: List[bool] = field(default_factory=lambda: [False] * NUM_KEYS)
    # CXNN用の乱数源。シードを与えれば実行が再現可能になります。
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    # @intent:accessor キャリー/ボロー/衝突フラグとして使われるVFレジスタへのアクセサ。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF
