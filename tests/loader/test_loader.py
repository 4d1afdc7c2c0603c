# tests/loader/test_loader.py
"""
retro_chip8.loader.loaderモジュールの単体テスト。
"""
import pytest

from retro_chip8.core.errors import Chip8Error, ProgramTooLargeError
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.loader.loader import ProgramLoader

# @intent:test_suite プログラムイメージと常駐データのロード機能を検証します。

class TestProgramLoader:
    """
    ProgramLoaderの単体テスト。
    """
    @pytest.fixture
    def setup_loader(self):
        bus = Bus()
        ram = RAM(0x1000)
        bus.register_device(0x0000, 0x0FFF, ram)
        loader = ProgramLoader(bus, memory_size=0x1000, program_start=0x200)
        return loader, bus, ram

    def test_capacity(self, setup_loader):
        loader, _, _ = setup_loader
        assert loader.capacity == 3584

    def test_load_program_at_program_start(self, setup_loader):
        loader, _, ram = setup_loader
        written = loader.load_program(bytes([0x60, 0x05, 0x12, 0x00]))
        assert written == 4
        assert [ram.read(0x200 + k) for k in range(4)] == [0x60, 0x05, 0x12, 0x00]
        assert ram.read(0x1FF) == 0
        assert ram.read(0x204) == 0

    def test_load_accepts_bytearray_and_memoryview(self, setup_loader):
        loader, _, ram = setup_loader
        loader.load_program(bytearray([0xAA]))
        assert ram.read(0x200) == 0xAA
        loader.load_program(memoryview(b"\xBB\xCC"))
        assert ram.read(0x201) == 0xCC

    def test_load_empty_program(self, setup_loader):
        loader, _, ram = setup_loader
        assert loader.load_program(b"") == 0
        assert ram.read(0x200) == 0

    # @intent:test_case_boundary 容量ちょうどのイメージはロードでき、1バイト超過すると何も書き込まれないことを検証します。
    def test_load_program_exactly_capacity(self, setup_loader):
        loader, _, ram = setup_loader
        loader.load_program(bytes([0x11]) * 3584)
        assert ram.read(0x0FFF) == 0x11

    def test_load_program_too_large_writes_nothing(self, setup_loader):
        loader, bus, ram = setup_loader
        with pytest.raises(ProgramTooLargeError, match="Program of 3585 bytes does not fit in 3584 bytes"):
            loader.load_program(bytes([0x22]) * 3585)
        assert all(ram.read(a) == 0 for a in range(0x200, 0x1000))
        assert bus.get_and_clear_activity_log() == []

    def test_program_too_large_error_hierarchy(self, setup_loader):
        loader, _, _ = setup_loader
        with pytest.raises(Chip8Error):
            loader.load_program(bytes(4000))
        with pytest.raises(ValueError):
            loader.load_program(bytes(4000))

    # @intent:test_case_activity_log ロード時の書き込みが命令実行のアクティビティとして残らないことを検証します。
    def test_load_block_clears_activity_log(self, setup_loader):
        loader, bus, ram = setup_loader
        loader.load_block(0x0000, b"\xF0\x90")
        assert ram.read(0x0000) == 0xF0
        assert ram.read(0x0001) == 0x90
        assert bus.get_and_clear_activity_log() == []
