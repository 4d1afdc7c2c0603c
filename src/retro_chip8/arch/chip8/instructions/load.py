# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ転送、タイマー、メモリブロック転送、BCD）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import FONT_START, GLYPH_HEIGHT
from .decoder import Instruction
from .base import make_operation, nibble_x, nibble_y, byte_nn, addr_nnn, require_mapped

# --- LD Vx, byte (6XNN) ---
def decode_ld_vx_nn(word: int) -> Operation:
    x, nn = nibble_x(word), byte_nn(word)
    return make_operation(word, Instruction.LD_VX_NN, "LD", [f"V{x:X}", f"#${nn:02X}"], [x, nn])

def execute_ld_vx_nn(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, nn = op.operand_values
    state.v[x] = nn

# --- LD Vx, Vy (8XY0) ---
def decode_ld_vx_vy(word: int) -> Operation:
    x, y = nibble_x(word), nibble_y(word)
    return make_operation(word, Instruction.LD_VX_VY, "LD", [f"V{x:X}", f"V{y:X}"], [x, y])

def execute_ld_vx_vy(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] = state.v[y]

# --- LD I, addr (ANNN) ---
def decode_ld_i(word: int) -> Operation:
    addr = addr_nnn(word)
    return make_operation(word, Instruction.LD_I_ADDR, "LD", ["I", f"${addr:03X}"], [addr])

def execute_ld_i(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i = op.operand_values[0]

# --- LD Vx, DT (FX07) ---
def decode_ld_vx_dt(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.LD_VX_DT, "LD", [f"V{x:X}", "DT"], [x])

def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[op.operand_values[0]] = state.delay_timer

# --- LD DT, Vx (FX15) ---
def decode_ld_dt_vx(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.LD_DT_VX, "LD", ["DT", f"V{x:X}"], [x])

def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.delay_timer = state.v[op.operand_values[0]]

# --- LD ST, Vx (FX18) ---
def decode_ld_st_vx(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.LD_ST_VX, "LD", ["ST", f"V{x:X}"], [x])

def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.sound_timer = state.v[op.operand_values[0]]

# --- LD F, Vx (FX29) ---
def decode_ld_f_vx(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.LD_F_VX, "LD", ["F", f"V{x:X}"], [x])

# @intent:responsibility Vxの下位ニブルに対応するグリフのアドレスをIに設定します。
def execute_ld_f_vx(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    digit = state.v[op.operand_values[0]] & 0xF
    state.i = FONT_START + digit * GLYPH_HEIGHT

# --- LD B, Vx (FX33) ---
def decode_ld_b_vx(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.LD_B_VX, "LD", ["B", f"V{x:X}"], [x])

# @intent:responsibility Vxの10進表現（百の位、十の位、一の位）をI, I+1, I+2に格納します。
def execute_ld_b_vx(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    value = state.v[op.operand_values[0]]
    require_mapped(bus, state.i, 3)
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (FX55) ---
def decode_ld_mem_vx(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.LD_MEM_VX, "LD", ["[I]", f"V{x:X}"], [x])

# @intent:responsibility V0..Vxをメモリ[I]から順に格納します。Iは変更しません。
def execute_ld_mem_vx(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    require_mapped(bus, state.i, op.operand_values[0] + 1)
    for idx in range(op.operand_values[0] + 1):
        bus.write(state.i + idx, state.v[idx])

# --- LD Vx, [I] (FX65) ---
def decode_ld_vx_mem(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.LD_VX_MEM, "LD", [f"V{x:X}", "[I]"], [x])

def execute_ld_vx_mem(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    values = [bus.read(state.i + idx) for idx in range(op.operand_values[0] + 1)]
    state.v[:len(values)] = values
