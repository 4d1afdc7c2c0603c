# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from .decoder import Instruction, classify
from .maps import DECODE_MAP, EXECUTE_MAP

# @intent:responsibility CHIP-8の命令ワードをデコードします。
# @intent:post-condition 未知の命令ワードに対してはDecodeErrorを送出します。
def decode_opcode(word: int) -> Operation:
    """
    命令ワードを分類し、対応するデコード関数でOperationオブジェクトを組み立てます。
    """
    return DECODE_MAP[classify(word)](word & 0xFFFF)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus) -> None:
    """
    デコードされたCHIP-8命令を実行し、CPUの状態を変更します。
    """
    EXECUTE_MAP[operation.kind](state, bus, operation)
