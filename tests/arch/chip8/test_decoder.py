# tests/arch/chip8/test_decoder.py
"""
retro_chip8.arch.chip8.instructions.decoderモジュールの単体テスト。
"""
import pytest
from retro_chip8.core.errors import DecodeError
from retro_chip8.arch.chip8.instructions import decode_opcode
from retro_chip8.arch.chip8.instructions.decoder import Instruction, classify
from retro_chip8.arch.chip8.instructions.maps import DECODE_MAP, EXECUTE_MAP

# @intent:test_suite ニブルパターンによる命令分類が35命令を一意に判別することを検証します。

@pytest.mark.parametrize("word, expected", [
    (0x0000, Instruction.NOP),
    (0x00E0, Instruction.CLS),
    (0x00EE, Instruction.RET),
    (0x1234, Instruction.JP_ADDR),
    (0x2FFF, Instruction.CALL_ADDR),
    (0x3A42, Instruction.SE_VX_NN),
    (0x4A42, Instruction.SNE_VX_NN),
    (0x5AB0, Instruction.SE_VX_VY),
    (0x6A42, Instruction.LD_VX_NN),
    (0x7A42, Instruction.ADD_VX_NN),
    (0x8AB0, Instruction.LD_VX_VY),
    (0x8AB1, Instruction.OR_VX_VY),
    (0x8AB2, Instruction.AND_VX_VY),
    (0x8AB3, Instruction.XOR_VX_VY),
    (0x8AB4, Instruction.ADD_VX_VY),
    (0x8AB5, Instruction.SUB_VX_VY),
    (0x8AB6, Instruction.SHR_VX),
    (0x8AB7, Instruction.SUBN_VX_VY),
    (0x8ABE, Instruction.SHL_VX),
    (0x9AB0, Instruction.SNE_VX_VY),
    (0xA123, Instruction.LD_I_ADDR),
    (0xB123, Instruction.JP_V0_ADDR),
    (0xCA0F, Instruction.RND_VX_NN),
    (0xDAB5, Instruction.DRW_VX_VY_N),
    (0xEA9E, Instruction.SKP_VX),
    (0xEAA1, Instruction.SKNP_VX),
    (0xFA07, Instruction.LD_VX_DT),
    (0xFA0A, Instruction.LD_VX_K),
    (0xFA15, Instruction.LD_DT_VX),
    (0xFA18, Instruction.LD_ST_VX),
    (0xFA1E, Instruction.ADD_I_VX),
    (0xFA29, Instruction.LD_F_VX),
    (0xFA33, Instruction.LD_B_VX),
    (0xFA55, Instruction.LD_MEM_VX),
    (0xFA65, Instruction.LD_VX_MEM),
])
def test_classify(word, expected):
    assert classify(word) == expected

@pytest.mark.parametrize("word", [
    0x0123, 0x00E1, 0x00FF, 0x5AB1, 0x800F, 0x8AB8, 0x9AB1, 0xEA9F, 0xE000, 0xFA00, 0xFA56, 0xFFFF,
])
def test_classify_unknown_word(word):
    with pytest.raises(DecodeError, match=f"Unknown opcode {word:04X}"):
        classify(word)

# @intent:test_case_tables 全命令がデコード表と実行表の両方に登録されていることを検証します。
def test_every_instruction_is_mapped():
    assert len(Instruction) == 35
    assert set(DECODE_MAP) == set(Instruction)
    assert set(EXECUTE_MAP) == set(Instruction)

class TestDecodeOpcode:
    def test_operands_of_register_pair(self):
        op = decode_opcode(0x8124)
        assert op.opcode_hex == "8124"
        assert op.mnemonic == "ADD"
        assert op.operands == ["V1", "V2"]
        assert op.operand_values == [1, 2]
        assert op.kind == Instruction.ADD_VX_VY
        assert op.length == 2

    def test_operands_of_address(self):
        op = decode_opcode(0x1ABC)
        assert op.mnemonic == "JP"
        assert op.operands == ["$ABC"]
        assert op.operand_values == [0xABC]

    def test_operands_of_draw(self):
        op = decode_opcode(0xD3C7)
        assert op.mnemonic == "DRW"
        assert op.operands == ["V3", "VC", "7"]
        assert op.operand_values == [3, 0xC, 7]

    def test_decode_is_pure(self):
        assert decode_opcode(0x6A42) == decode_opcode(0x6A42)

    def test_decode_error_carries_word(self):
        with pytest.raises(DecodeError) as excinfo:
            decode_opcode(0x5121)
        assert excinfo.value.word == 0x5121
        assert excinfo.value.address is None
