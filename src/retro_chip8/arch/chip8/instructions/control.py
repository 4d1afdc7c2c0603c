# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ、キー入力待ち）の実装。

実行時点でstate.pcは既に次の命令を指しています（CPU.stepで更新済み）。
ジャンプ系命令はPCを直接上書きし、その値がそのまま次のフェッチアドレスになります。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import INSTRUCTION_LENGTH
from .decoder import Instruction
from .base import (
    make_operation, nibble_x, nibble_y, byte_nn, addr_nnn, skip_next, push, pop,
)

# --- NOP (0000) ---
def decode_nop(word: int) -> Operation:
    return make_operation(word, Instruction.NOP, "NOP", [], [])

def execute_nop(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    # Intentional: NOP (No Operation)
    pass

# --- RET (00EE) ---
# @intent:responsibility RET命令をデコードします。
def decode_ret(word: int) -> Operation:
    return make_operation(word, Instruction.RET, "RET", [], [])

# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。
def execute_ret(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = pop(state)

# --- JP addr (1NNN) ---
def decode_jp(word: int) -> Operation:
    addr = addr_nnn(word)
    return make_operation(word, Instruction.JP_ADDR, "JP", [f"${addr:03X}"], [addr])

def execute_jp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = op.operand_values[0]

# --- CALL addr (2NNN) ---
def decode_call(word: int) -> Operation:
    addr = addr_nnn(word)
    return make_operation(word, Instruction.CALL_ADDR, "CALL", [f"${addr:03X}"], [addr])

# @intent:responsibility 戻りアドレス（次の命令）をスタックに積んでからジャンプします。
def execute_call(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    # state.pc is already pointing to the NEXT instruction
    push(state, state.pc)
    state.pc = op.operand_values[0]

# --- SE Vx, byte (3XNN) ---
def decode_se_vx_nn(word: int) -> Operation:
    x, nn = nibble_x(word), byte_nn(word)
    return make_operation(word, Instruction.SE_VX_NN, "SE", [f"V{x:X}", f"#${nn:02X}"], [x, nn])

# @intent:responsibility VxとNNが等しければ次の命令をスキップします。
def execute_se_vx_nn(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, nn = op.operand_values
    if state.v[x] == nn:
        skip_next(state)

# --- SNE Vx, byte (4XNN) ---
def decode_sne_vx_nn(word: int) -> Operation:
    x, nn = nibble_x(word), byte_nn(word)
    return make_operation(word, Instruction.SNE_VX_NN, "SNE", [f"V{x:X}", f"#${nn:02X}"], [x, nn])

def execute_sne_vx_nn(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, nn = op.operand_values
    if state.v[x] != nn:
        skip_next(state)

# --- SE Vx, Vy (5XY0) ---
def decode_se_vx_vy(word: int) -> Operation:
    x, y = nibble_x(word), nibble_y(word)
    return make_operation(word, Instruction.SE_VX_VY, "SE", [f"V{x:X}", f"V{y:X}"], [x, y])

def execute_se_vx_vy(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    if state.v[x] == state.v[y]:
        skip_next(state)

# --- SNE Vx, Vy (9XY0) ---
def decode_sne_vx_vy(word: int) -> Operation:
    x, y = nibble_x(word), nibble_y(word)
    return make_operation(word, Instruction.SNE_VX_VY, "SNE", [f"V{x:X}", f"V{y:X}"], [x, y])

def execute_sne_vx_vy(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    if state.v[x] != state.v[y]:
        skip_next(state)

# --- JP V0, addr (BNNN) ---
def decode_jp_v0(word: int) -> Operation:
    addr = addr_nnn(word)
    return make_operation(word, Instruction.JP_V0_ADDR, "JP", ["V0", f"${addr:03X}"], [addr])

# @intent:responsibility NNN + V0 へジャンプします（16ビットで折り返し）。
def execute_jp_v0(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = (op.operand_values[0] + state.v[0]) & 0xFFFF

# @intent:utility_function キー番号の押下状態を返します。存在しない番号（16以上）は押されていない扱いです。
def _key_pressed(state: Chip8CpuState, key: int) -> bool:
    return key < len(state.keys) and state.keys[key]

# --- SKP Vx (EX9E) ---
def decode_skp(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.SKP_VX, "SKP", [f"V{x:X}"], [x])

# @intent:responsibility Vxの値が示すキーが押されていれば次の命令をスキップします。
def execute_skp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    if _key_pressed(state, state.v[op.operand_values[0]]):
        skip_next(state)

# --- SKNP Vx (EXA1) ---
def decode_sknp(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.SKNP_VX, "SKNP", [f"V{x:X}"], [x])

def execute_sknp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    if not _key_pressed(state, state.v[op.operand_values[0]]):
        skip_next(state)

# --- LD Vx, K (FX0A) ---
def decode_ld_vx_k(word: int) -> Operation:
    x = nibble_x(word)
    return make_operation(word, Instruction.LD_VX_K, "LD", [f"V{x:X}", "K"], [x])

# @intent:responsibility キー入力を待ちます。押されているキーがなければPCを戻して同じ命令を再実行させます。
# @intent:rationale 複数のキーが押されている場合は、最も小さい番号のキーをVxに格納します。
def execute_ld_vx_k(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    for key, pressed in enumerate(state.keys):
        if pressed:
            state.v[op.operand_values[0]] = key
            return
    state.pc = (state.pc - INSTRUCTION_LENGTH) & 0xFFFF
