# retro_chip8/loader/loader.py
"""
プログラムローダーモジュール。
プログラムイメージ（生のバイト列）や組み込みデータをメモリの所定の位置に書き込みます。
ROMファイルの読み込みはホスト側の責務であり、ここではバイト列のみを扱います。
"""
import logging
from typing import Union

from retro_chip8.core.errors import ProgramTooLargeError
from retro_chip8.transport.bus import Bus

logger = logging.getLogger(__name__)

ProgramImage = Union[bytes, bytearray, memoryview]

class ProgramLoader:
    """
    バイト列をバスへ書き込むローダー。
    プログラムはprogram_startからmemory_sizeの手前までの領域に格納されます。
    """
    def __init__(self, bus: Bus, memory_size: int, program_start: int):
        self._bus = bus
        self._memory_size = memory_size
        self._program_start = program_start

    # @intent:responsibility プログラム領域に格納できる最大バイト数を返します。
    @property
    def capacity(self) -> int:
        return self._memory_size - self._program_start

    # @intent:responsibility 任意のバイト列を指定アドレスから書き込みます（フォントなどの常駐データ用）。
    def load_block(self, address: int, data: ProgramImage) -> None:
        for offset, byte_data in enumerate(bytes(data)):
            self._bus.write(address + offset, byte_data)
        # ロード時の書き込みは命令実行のアクティビティではないため破棄する
        self._bus.get_and_clear_activity_log()

    # @intent:responsibility プログラムイメージをそのままプログラム開始アドレスから書き込みます。
    # @intent:pre-condition イメージ長はcapacity以下である必要があります。超える場合は何も書き込まずに例外を送出します。
    def load_program(self, data: ProgramImage) -> int:
        """
        プログラムイメージをロードし、書き込んだバイト数を返します。
        """
        data = bytes(data)
        if len(data) > self.capacity:
            raise ProgramTooLargeError(
                f"Program of {len(data)} bytes does not fit in {self.capacity} bytes "
                f"starting at {self._program_start:#05x}."
            )

        self.load_block(self._program_start, data)
        logger.debug("Loaded %d bytes at %#05x", len(data), self._program_start)
        return len(data)
