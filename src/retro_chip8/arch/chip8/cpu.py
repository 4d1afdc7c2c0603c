# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

ホストはこのクラスを通じてプログラムのロード、命令クロック(step)、
タイマークロック(tick_timers)、キー入力、画面の読み出しを行います。
"""
import logging
import random
from typing import Dict, List, Optional

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.errors import DecodeError
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.loader.loader import ProgramLoader, ProgramImage
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import (
    MEMORY_SIZE, PROGRAM_START, STACK_DEPTH, DEFAULT_CPU_HZ, TIMER_HZ, FONT_START, FONTSET,
)
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction
from retro_chip8.arch.chip8.instructions.base import read_word
from retro_chip8.arch.chip8.timer import tick_timers

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。
    メモリはBus上のRAMに置かれ、構築時とリセット時にフォントがロードされます。
    """
    # @intent:pre-condition busには0x000からmemory_size-1までのRAMが登録されている必要があります。
    def __init__(self, bus: Bus, rng_seed: Optional[int] = None, stack_depth: int = STACK_DEPTH,
                 memory_size: int = MEMORY_SIZE, program_start: int = PROGRAM_START,
                 instructions_per_frame: int = DEFAULT_CPU_HZ // TIMER_HZ):
        # _create_initial_stateが参照するため、super().__init__より先に設定する
        self._rng_seed = rng_seed
        self._stack_depth = stack_depth
        self._program_start = program_start
        self.instructions_per_frame = max(1, instructions_per_frame)
        super().__init__(bus)
        self._loader = ProgramLoader(bus, memory_size=memory_size, program_start=program_start)
        self._loader.load_block(FONT_START, FONTSET)

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState(
            pc=self._program_start,
            stack=[0] * self._stack_depth,
            rng=random.Random(self._rng_seed),
        )

    # @intent:responsibility レジスタ、画面、キー、タイマーに加えてメモリも初期化し、フォントを再ロードします。
    # @intent:post-condition ロード済みのプログラムは破棄されます。
    def reset(self) -> None:
        super().reset()
        self._bus.reset_devices()
        self._loader.load_block(FONT_START, FONTSET)
        logger.debug("CHIP-8 machine reset")

    # @intent:responsibility プログラムイメージを0x200からロードします。
    def load_program(self, data: ProgramImage) -> int:
        return self._loader.load_program(data)

    # @intent:responsibility PCの位置からビッグエンディアンの命令ワードを読み出します。
    def _fetch(self) -> int:
        return read_word(self._bus, self._state.pc)

    # @intent:responsibility 命令ワードをデコードします。失敗時はフェッチ元アドレスを付けて再送出します。
    def _decode(self, opcode: int) -> Operation:
        try:
            return decode_opcode(opcode)
        except DecodeError:
            logger.debug("Decode failure: %04X at %#05x", opcode, self._state.pc)
            raise DecodeError(opcode, self._state.pc) from None

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus)

    # @intent:responsibility 60Hzタイマーを1段進めます。サウンド停止のエッジでTrueを返します。
    def tick_timers(self) -> bool:
        return tick_timers(self._state)

    # @intent:responsibility 1フレーム分（instructions_per_frame命令 + タイマー1回）を実行します。
    def run_frame(self) -> bool:
        """
        ホストが60Hzのループ1本で両クロックを駆動するための補助メソッド。
        戻り値はtick_timersと同じサウンド停止エッジです。
        """
        for _ in range(self.instructions_per_frame):
            self.step()
        return self.tick_timers()

    @property
    def sound_active(self) -> bool:
        return self._state.sound_timer > 0

    # @intent:responsibility 画面を行優先の平坦なリスト（64*32要素）として返します。
    def get_display(self) -> List[bool]:
        return list(self._state.display)

    # @intent:responsibility キーの押下状態を設定します。範囲外のインデックスは無視します。
    def set_key(self, index: int, pressed: bool) -> None:
        if not 0 <= index < len(self._state.keys):
            return
        self._state.keys[index] = bool(pressed)

    # @intent:responsibility ホスト表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{idx:X}": value for idx, value in enumerate(s.v)}
        registers.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return registers
