# retro_chip8/config/builder.py
"""
設定からBus、RAM、CPUを組み立てるビルダー。
"""
import logging
from typing import Optional, Tuple

from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from .models import SystemConfig

logger = logging.getLogger(__name__)

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、CPUを生成・接続します。
class SystemBuilder:
    def build_system(self, config: Optional[SystemConfig] = None) -> Tuple[Chip8Cpu, Bus]:
        """
        メモリを0番地からマップしたバスと、フォントをロード済みのCPUを生成して返します。
        """
        if config is None:
            config = SystemConfig()

        bus = Bus()
        bus.register_device(0x0000, config.memory_size - 1, RAM(config.memory_size))

        cpu = Chip8Cpu(
            bus,
            rng_seed=config.rng_seed,
            stack_depth=config.stack_depth,
            memory_size=config.memory_size,
            program_start=config.program_start,
            instructions_per_frame=config.instructions_per_frame,
        )
        logger.info(
            "Built CHIP-8 system: %d bytes RAM, program at %#05x, %d instructions/frame",
            config.memory_size, config.program_start, config.instructions_per_frame,
        )
        return cpu, bus
