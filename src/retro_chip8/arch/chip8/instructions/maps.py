# src/retro_chip8/arch/chip8/instructions/maps.py
"""
命令種別と命令実装のマッピング定義。
"""
from .decoder import Instruction
from . import load
from . import alu
from . import control
from . import display

# @intent:map 命令種別からデコード関数へのマッピングテーブル。
DECODE_MAP = {
    # Control
    Instruction.NOP: control.decode_nop,
    Instruction.RET: control.decode_ret,
    Instruction.JP_ADDR: control.decode_jp,
    Instruction.CALL_ADDR: control.decode_call,
    Instruction.SE_VX_NN: control.decode_se_vx_nn,
    Instruction.SNE_VX_NN: control.decode_sne_vx_nn,
    Instruction.SE_VX_VY: control.decode_se_vx_vy,
    Instruction.SNE_VX_VY: control.decode_sne_vx_vy,
    Instruction.JP_V0_ADDR: control.decode_jp_v0,
    Instruction.SKP_VX: control.decode_skp,
    Instruction.SKNP_VX: control.decode_sknp,
    Instruction.LD_VX_K: control.decode_ld_vx_k,

    # Load/Store
    Instruction.LD_VX_NN: load.decode_ld_vx_nn,
    Instruction.LD_VX_VY: load.decode_ld_vx_vy,
    Instruction.LD_I_ADDR: load.decode_ld_i,
    Instruction.LD_VX_DT: load.decode_ld_vx_dt,
    Instruction.LD_DT_VX: load.decode_ld_dt_vx,
    Instruction.LD_ST_VX: load.decode_ld_st_vx,
    Instruction.LD_F_VX: load.decode_ld_f_vx,
    Instruction.LD_B_VX: load.decode_ld_b_vx,
    Instruction.LD_MEM_VX: load.decode_ld_mem_vx,
    Instruction.LD_VX_MEM: load.decode_ld_vx_mem,

    # ALU
    Instruction.ADD_VX_NN: alu.decode_add_vx_nn,
    Instruction.OR_VX_VY: alu.decode_or,
    Instruction.AND_VX_VY: alu.decode_and,
    Instruction.XOR_VX_VY: alu.decode_xor,
    Instruction.ADD_VX_VY: alu.decode_add_vx_vy,
    Instruction.SUB_VX_VY: alu.decode_sub,
    Instruction.SHR_VX: alu.decode_shr,
    Instruction.SUBN_VX_VY: alu.decode_subn,
    Instruction.SHL_VX: alu.decode_shl,
    Instruction.RND_VX_NN: alu.decode_rnd,
    Instruction.ADD_I_VX: alu.decode_add_i_vx,

    # Display
    Instruction.CLS: display.decode_cls,
    Instruction.DRW_VX_VY_N: display.decode_drw,
}

# @intent:map 命令種別から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    Instruction.NOP: control.execute_nop,
    Instruction.RET: control.execute_ret,
    Instruction.JP_ADDR: control.execute_jp,
    Instruction.CALL_ADDR: control.execute_call,
    Instruction.SE_VX_NN: control.execute_se_vx_nn,
    Instruction.SNE_VX_NN: control.execute_sne_vx_nn,
    Instruction.SE_VX_VY: control.execute_se_vx_vy,
    Instruction.SNE_VX_VY: control.execute_sne_vx_vy,
    Instruction.JP_V0_ADDR: control.execute_jp_v0,
    Instruction.SKP_VX: control.execute_skp,
    Instruction.SKNP_VX: control.execute_sknp,
    Instruction.LD_VX_K: control.execute_ld_vx_k,

    # Load/Store
    Instruction.LD_VX_NN: load.execute_ld_vx_nn,
    Instruction.LD_VX_VY: load.execute_ld_vx_vy,
    Instruction.LD_I_ADDR: load.execute_ld_i,
    Instruction.LD_VX_DT: load.execute_ld_vx_dt,
    Instruction.LD_DT_VX: load.execute_ld_dt_vx,
    Instruction.LD_ST_VX: load.execute_ld_st_vx,
    Instruction.LD_F_VX: load.execute_ld_f_vx,
    Instruction.LD_B_VX: load.execute_ld_b_vx,
    Instruction.LD_MEM_VX: load.execute_ld_mem_vx,
    Instruction.LD_VX_MEM: load.execute_ld_vx_mem,

    # ALU
    Instruction.ADD_VX_NN: alu.execute_add_vx_nn,
    Instruction.OR_VX_VY: alu.execute_or,
    Instruction.AND_VX_VY: alu.execute_and,
    Instruction.XOR_VX_VY: alu.execute_xor,
    Instruction.ADD_VX_VY: alu.execute_add_vx_vy,
    Instruction.SUB_VX_VY: alu.execute_sub,
    Instruction.SHR_VX: alu.execute_shr,
    Instruction.SUBN_VX_VY: alu.execute_subn,
    Instruction.SHL_VX: alu.execute_shl,
    Instruction.RND_VX_NN: alu.execute_rnd,
    Instruction.ADD_I_VX: alu.execute_add_i_vx,

    # Display
    Instruction.CLS: display.execute_cls,
    Instruction.DRW_VX_VY_N: display.execute_drw,
}
