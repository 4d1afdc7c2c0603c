# tests/config/test_config.py
"""
retro_chip8.configパッケージの単体テスト。
"""
import logging
import pytest

from retro_chip8.core.errors import ConfigError
from retro_chip8.config.models import SystemConfig
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.constants import FONTSET

# @intent:test_suite YAML設定の読み込み、検証、およびシステム構築を検証します。

class TestSystemConfig:
    def test_defaults(self):
        config = SystemConfig()
        assert config.memory_size == 4096
        assert config.program_start == 0x200
        assert config.stack_depth == 16
        assert config.rng_seed is None
        assert config.instructions_per_frame == 8 # 500 // 60

    def test_instructions_per_frame_never_zero(self):
        config = SystemConfig(cpu_hz=30, timer_hz=60)
        assert config.instructions_per_frame == 1

class TestConfigLoader:
    @pytest.fixture
    def loader(self):
        return ConfigLoader()

    def test_load_from_string(self, loader):
        config = loader.load_from_string(
            """
            memory_size: 0x1000
            program_start: "0x200"
            stack_depth: 12
            cpu_hz: "700"
            rng_seed: 42
            """
        )
        assert config.memory_size == 0x1000
        assert config.program_start == 0x200
        assert config.stack_depth == 12
        assert config.cpu_hz == 700
        assert config.timer_hz == 60
        assert config.rng_seed == 42

    def test_load_from_file(self, loader, tmp_path):
        path = tmp_path / "chip8.yaml"
        path.write_text("program_start: 0x300\n")
        config = loader.load_from_file(str(path))
        assert config.program_start == 0x300
        assert config.memory_size == 4096

    def test_empty_document_gives_defaults(self, loader):
        assert loader.load_from_string("") == SystemConfig()

    def test_unknown_key_warns(self, loader, caplog):
        with caplog.at_level(logging.WARNING, logger="retro_chip8.config.loader"):
            config = loader.load_from_string("font_colour: green\nstack_depth: 16\n")
        assert config.stack_depth == 16
        assert "font_colour" in caplog.text

    # @intent:test_case_layout フォントが入らないメモリや、フォントと重なるプログラム開始位置を拒否することを検証します。
    @pytest.mark.parametrize("text", [
        "memory_size: 0x40\nprogram_start: 0x20\n",
        "memory_size: 0x4F\n",
        "program_start: 0x20\n",
        "program_start: 0x4F\n",
    ])
    def test_layout_overlapping_font(self, loader, text):
        with pytest.raises(ConfigError):
            loader.load_from_string(text)

    def test_program_start_right_after_font(self, loader):
        config = loader.load_from_string("memory_size: 0x100\nprogram_start: 0x50\n")
        cpu, bus = SystemBuilder().build_system(config)
        assert cpu.get_state().pc == 0x50
        assert bytes(bus.peek(a) for a in range(len(FONTSET))) == FONTSET
        assert cpu.load_program(bytes(0xB0)) == 0xB0

    @pytest.mark.parametrize("text", [
        "memory_size: abc",
        "stack_depth: true",
        "program_start: 0x2000",
        "memory_size: 0",
        "stack_depth: -1",
        "timer_hz: 0",
        "- 1\n- 2",
        "memory_size: [1, 2",
    ])
    def test_invalid_config(self, loader, text):
        with pytest.raises(ConfigError):
            loader.load_from_string(text)

class TestSystemBuilder:
    def test_build_default_system(self):
        cpu, bus = SystemBuilder().build_system()
        assert isinstance(cpu, Chip8Cpu)
        assert cpu.get_state().pc == 0x200
        assert bytes(bus.peek(a) for a in range(len(FONTSET))) == FONTSET
        assert bus.peek(0x0FFF) == 0

    def test_build_from_config(self):
        config = SystemConfig(stack_depth=4, cpu_hz=600, rng_seed=7)
        cpu, _ = SystemBuilder().build_system(config)
        assert len(cpu.get_state().stack) == 4
        assert cpu.instructions_per_frame == 10

    def test_seeded_systems_agree(self):
        program = bytes([0xC0, 0xFF, 0xC1, 0xFF])
        results = []
        for _ in range(2):
            cpu, _ = SystemBuilder().build_system(SystemConfig(rng_seed=99))
            cpu.load_program(program)
            cpu.step()
            cpu.step()
            results.append(cpu.get_state().v[:2])
        assert results[0] == results[1]
