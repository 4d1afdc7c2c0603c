# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

汎用レジスタの演算は全て8ビットで折り返します。VFに結果フラグを書く命令では、
演算結果をVxに格納した後でVFを書き込みます（Vx自身がVFの場合はフラグが残ります）。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .decoder import Instruction
from .base import make_operation, nibble_x, nibble_y, byte_nn

# @intent:utility_function Vx, Vy 形式のオペランドを持つ命令のデコードを共通化します。
def _decode_xy(word: int, kind: Instruction, mnemonic: str) -> Operation:
    x, y = nibble_x(word), nibble_y(word)
    return make_operation(word, kind, mnemonic, [f"V{x:X}", f"V{y:X}"], [x, y])

# @intent:utility_function 8ビット演算結果をVxに格納し、VFにフラグを書き込みます。
def _store_with_flag(state: Chip8CpuState, x: int, result: int, flag: bool) -> None:
    state.v[x] = result & 0xFF
    state.vf = 1 if flag else 0

# --- ADD Vx, byte (7XNN) ---
def decode_add_vx_nn(word: int) -> Operation:
    x, nn = nibble_x(word), byte_nn(word)
    return make_operation(word, Instruction.ADD_VX_NN, "ADD", [f"V{x:X}", f"#${nn:02X}"], [x, nn])

# @intent:responsibility VxにNNを加算します。桁あふれは折り返し、VFは変更しません。
def execute_add_vx_nn(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, nn = op.operand_values
    state.v[x] = (state.v[x] + nn) & 0xFF

# --- OR / AND / XOR (8XY1, 8XY2, 8XY3) ---
def decode_or(word: int) -> Operation:
    return _decode_xy(word, Instruction.OR_VX_VY, "OR")

def execute_or(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] |= state.v[y]

def decode_and(word: int) -> Operation:
    return _decode_xy(word, Instruction.AND_VX_VY, "AND")

def execute_and(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] &= state.v[y]

def decode_xor(word: int) -> Operation:
    return _decode_xy(word, Instruction.XOR_VX_VY, "XOR")

def execute_xor(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] ^= state.v[y]

# --- ADD Vx, Vy (8XY4) ---
def decode_add_vx_vy(word: int) -> Operation:
    return _decode_xy(word, Instruction.ADD_VX_VY, "ADD")

# @intent:responsibility Vx + Vy をVxに格納し、8ビットを超えた場合VF=1とします。
def execute_add_vx_vy(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    res = state.v[x] + state.v[y]
    _store_with_flag(state, x, res, res > 0xFF)

# --- SUB Vx, Vy (8XY5) ---
def decode_sub(word: int) -> Operation:
    return _decode_xy(word, Instruction.SUB_VX_VY, "SUB")

# @intent:responsibility Vx - Vy をVxに格納します。ボローが発生しなければ（Vx >= Vy）VF=1です。
def execute_sub(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    v1, v2 = state.v[x], state.v[y]
    _store_with_flag(state, x, v1 - v2, v1 >= v2)

# --- SUBN Vx, Vy (8XY7) ---
def decode_subn(word: int) -> Operation:
    return _decode_xy(word, Instruction.SUBN_VX_VY, "SUBN")

# @intent:responsibility Vy - Vx をVxに格納します。フラグの規則はSUBと同じです。
def execute_subn(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    v1, v2 = state.v[x], state.v[y]
    _store_with_flag(state, x, v2 - v1, v2 >= v1)

# --- SHR Vx (8XY6) ---
def decode_shr(word: int) -> Operation:
    x, y = nibble_x(word), nibble_y(word)
    return make_operation(word, Instruction.SHR_VX, "SHR", [f"V{x:X}"], [x, y])

# @intent:responsibility Vxを1ビット右シフトし、押し出された最下位ビットをVFに格納します。
# @intent:rationale Vyは参照しません（VyからVxへのコピーは行いません）。
def execute_shr(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = op.operand_values[0]
    v1 = state.v[x]
    _store_with_flag(state, x, v1 >> 1, (v1 & 0x01) != 0)

# --- SHL Vx (8XYE) ---
def decode_shl(word: int) -> Operation:
    x, y = nibble_x(word), nibble_y(word)
    return make_operation(word, Instruction.SHL_VX, "SHL", [f"V{x:X}"], [x, y])

# @intent:responsibility Vxを1ビット左シフトし、押し出された最上位ビットをVFに格納します。
def execute_shl(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = op.operand_values[0]
    v1 = state.v[x]
    _store_with_flag(state, x, v1 << 1, (v1 & 0x80) != 0)

# --- RND Vx, byte (CXNN) ---
def decode_rnd(word: int) -> Operation:
    x, nn = nibble_x(word), byte_nn(word)
    return make_operation(word, Instruction.RND_VX_NN, "RND", [f"V{x:X}", f"#${nn:02X}"], [x, nn])

# @intent:responsibility 一様乱数バイトとNNの論理積をVxに格納します。
def execute_rnd(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, nn = op.operand_values
    state.v[x] = state.rng.randrange(0x100) & nn

# --- ADD I, Vx (FX1E) ---
def decode_add_i_vx(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.ADD_I_VX, "ADD", ["I", f"V{x:X}"], [x])

# @intent:responsibility IにVxを加算します（16ビットで折り返し、VFは変更しません）。
def execute_add_i_vx(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i = (state.i + state.v[op.operand_values[0]]) & 0xFFFF
