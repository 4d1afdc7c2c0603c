# src/retro_chip8/arch/chip8/instructions/display.py
"""
画面命令（クリア、スプライト描画）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from .decoder import Instruction
from .base import make_operation, nibble_x, nibble_y, nibble_n

# --- CLS (00E0) ---
def decode_cls(word: int) -> Operation:
    return make_operation(word, Instruction.CLS, "CLS", [], [])

def execute_cls(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    for idx in range(len(state.display)):
        state.display[idx] = False

# --- DRW Vx, Vy, nibble (DXYN) ---
# @intent:responsibility DRW命令をデコードします。スプライトの行数は第4ニブルです。
def decode_drw(word: int) -> Operation:
    x, y, n = nibble_x(word), nibble_y(word), nibble_n(word)
    return make_operation(word, Instruction.DRW_VX_VY_N, "DRW", [f"V{x:X}", f"V{y:X}", f"{n}"], [x, y, n])

# @intent:responsibility メモリ[I]からN行のスプライトを読み、(Vx, Vy)を起点に画面へXOR描画します。
# @intent:post-condition 1つでも点灯していたピクセルが消えた場合VF=1、そうでなければVF=0です。
def execute_drw(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y, rows = op.operand_values
    origin_x = state.v[x]
    origin_y = state.v[y]
    collision = False

    # 読み出しに失敗した場合は画面に触れない
    sprite = [bus.read(state.i + row) for row in range(rows)]

    for row, pixels in enumerate(sprite):
        py = (origin_y + row) % SCREEN_HEIGHT
        for column in range(8):
            if pixels & (0x80 >> column):
                px = (origin_x + column) % SCREEN_WIDTH
                idx = px + SCREEN_WIDTH * py
                if state.display[idx]:
                    collision = True
                state.display[idx] = not state.display[idx]

    state.vf = 1 if collision else 0
