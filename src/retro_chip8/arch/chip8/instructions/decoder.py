# src/retro_chip8/arch/chip8/instructions/decoder.py
"""
命令ワードの分類（ニブルパターンマッチ）。

16ビットの命令ワードを35種類の命令のいずれかに分類します。
分類は純粋関数であり、バスやCPU状態には一切触れません。
"""
from enum import Enum
from typing import List, Tuple

from retro_chip8.core.errors import DecodeError

# @intent:responsibility CHIP-8の35命令を表すタグ。値はニブルパターン表記です。
class Instruction(Enum):
    NOP = "0000"
    CLS = "00E0"
    RET = "00EE"
    JP_ADDR = "1NNN"
    CALL_ADDR = "2NNN"
    SE_VX_NN = "3XNN"
    SNE_VX_NN = "4XNN"
    SE_VX_VY = "5XY0"
    LD_VX_NN = "6XNN"
    ADD_VX_NN = "7XNN"
    LD_VX_VY = "8XY0"
    OR_VX_VY = "8XY1"
    AND_VX_VY = "8XY2"
    XOR_VX_VY = "8XY3"
    ADD_VX_VY = "8XY4"
    SUB_VX_VY = "8XY5"
    SHR_VX = "8XY6"
    SUBN_VX_VY = "8XY7"
    SHL_VX = "8XYE"
    SNE_VX_VY = "9XY0"
    LD_I_ADDR = "ANNN"
    JP_V0_ADDR = "BNNN"
    RND_VX_NN = "CXNN"
    DRW_VX_VY_N = "DXYN"
    SKP_VX = "EX9E"
    SKNP_VX = "EXA1"
    LD_VX_DT = "FX07"
    LD_VX_K = "FX0A"
    LD_DT_VX = "FX15"
    LD_ST_VX = "FX18"
    ADD_I_VX = "FX1E"
    LD_F_VX = "FX29"
    LD_B_VX = "FX33"
    LD_MEM_VX = "FX55"
    LD_VX_MEM = "FX65"

# @intent:utility_function パターン表記（例: "8XY4"）から (マスク, 一致値) を求めます。
# @intent:rationale 16進数字の桁は固定ニブル、X/Y/N は任意のニブルとして扱います。
def _pattern_to_mask(pattern: str) -> Tuple[int, int]:
    mask = 0
    match = 0
    for ch in pattern:
        mask <<= 4
        match <<= 4
        if ch in "0123456789ABCDEF":
            mask |= 0xF
            match |= int(ch, 16)
    return mask, match

# @intent:map (マスク, 一致値, 命令) の表。第1ニブルごとに引けるよう事前に振り分けておきます。
_FAMILIES: List[List[Tuple[int, int, Instruction]]] = [[] for _ in range(16)]
for _instruction in Instruction:
    _mask, _match = _pattern_to_mask(_instruction.value)
    _FAMILIES[_match >> 12].append((_mask, _match, _instruction))

# @intent:responsibility 命令ワードを命令種別に分類します。
# @intent:post-condition どのパターンにも一致しない場合はDecodeErrorを送出します。
def classify(word: int) -> Instruction:
    """
    第1ニブルで命令ファミリを選び、残りのニブルで命令を確定します。
    """
    word &= 0xFFFF
    for mask, match, instruction in _FAMILIES[word >> 12]:
        if word & mask == match:
            return instruction
    raise DecodeError(word)
