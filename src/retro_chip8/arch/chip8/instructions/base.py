# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from retro_chip8.core.errors import StackOverflowError, StackUnderflowError
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import INSTRUCTION_LENGTH

# @intent:utility_function バスから16ビットワードをビッグエンディアン形式で読み込みます。
def read_word(bus: Bus, addr: int) -> int:
    """Big-endian 16-bit read."""
    return (bus.read(addr) << 8) | bus.read((addr + 1) & 0xFFFF)

# @intent:utility_function 書き込み前に[start, start+length)の全アドレスがマップ済みであることを確認します。
# @intent:post-condition 範囲外があればMemoryAccessErrorを送出し、メモリには何も書き込まれていません。
def require_mapped(bus: Bus, start: int, length: int) -> None:
    for offset in range(length):
        bus.peek(start + offset)

# @intent:utility_function 命令ワードの各フィールドを取り出します。
def nibble_x(word: int) -> int:
    return (word >> 8) & 0xF

def nibble_y(word: int) -> int:
    return (word >> 4) & 0xF

def nibble_n(word: int) -> int:
    return word & 0xF

def byte_nn(word: int) -> int:
    return word & 0xFF

def addr_nnn(word: int) -> int:
    return word & 0x0FFF

# @intent:utility_function Operationを組み立てる際の共通部分をまとめます。
def make_operation(word: int, kind, mnemonic: str, operands, values) -> Operation:
    return Operation(f"{word:04X}", mnemonic, list(operands), list(values), 1, INSTRUCTION_LENGTH, kind)

# @intent:utility_function 次の命令を1つ読み飛ばします（PCは既に次命令を指しています）。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + INSTRUCTION_LENGTH) & 0xFFFF

# @intent:utility_function スタックにアドレスを積みます。
# @intent:pre-condition スタックに空きがない場合はStackOverflowErrorを送出します。
def push(state: Chip8CpuState, value: int) -> None:
    if state.sp >= len(state.stack):
        raise StackOverflowError(f"Stack overflow at depth {state.sp} (PC={state.pc:#05x})")
    state.stack[state.sp] = value & 0xFFFF
    state.sp += 1

# @intent:utility_function スタックからアドレスを取り出します。
# @intent:pre-condition スタックが空の場合はStackUnderflowErrorを送出します。
def pop(state: Chip8CpuState) -> int:
    if state.sp <= 0:
        raise StackUnderflowError(f"Return with empty stack (PC={state.pc:#05x})")
    state.sp -= 1
    return state.stack[state.sp]
