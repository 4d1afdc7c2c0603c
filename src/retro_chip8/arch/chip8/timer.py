# src/retro_chip8/arch/chip8/timer.py
"""
CHIP-8のディレイタイマー/サウンドタイマー。

命令クロックとは独立した60Hzのクロックで駆動されます。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState

# @intent:responsibility 両タイマーを0を下限として1ずつ減らします。
# @intent:post-condition サウンドタイマーがこの呼び出しで1から0になった場合のみTrueを返します（ホストが音を止める合図）。
def tick_timers(state: Chip8CpuState) -> bool:
    if state.delay_timer > 0:
        state.delay_timer -= 1

    sound_stopped = False
    if state.sound_timer > 0:
        sound_stopped = state.sound_timer == 1
        state.sound_timer -= 1
    return sound_stopped
