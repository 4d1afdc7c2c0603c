# retro_chip8/config/models.py
"""
システム構成のデータモデル。
"""
from dataclasses import dataclass
from typing import Optional

from retro_chip8.arch.chip8.constants import (
    MEMORY_SIZE, PROGRAM_START, STACK_DEPTH, DEFAULT_CPU_HZ, TIMER_HZ,
)

@dataclass
class SystemConfig:
    memory_size: int = MEMORY_SIZE
    program_start: int = PROGRAM_START
    stack_depth: int = STACK_DEPTH
    cpu_hz: int = DEFAULT_CPU_HZ  # 命令クロック（ホストが駆動する目安）
    timer_hz: int = TIMER_HZ
    rng_seed: Optional[int] = None  # Noneなら実行ごとに異なる乱数列

    # @intent:responsibility 60Hzの1フレームあたりに実行する命令数を返します。
    @property
    def instructions_per_frame(self) -> int:
        return max(1, self.cpu_hz // self.timer_hz)
