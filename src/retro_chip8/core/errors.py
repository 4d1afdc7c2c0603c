# retro_chip8/core/errors.py
"""
Core Layer (例外定義)

エミュレータ全体で送出される例外の階層を定義します。
ホストは`Chip8Error`を捕捉するだけで、ROM破損やスタック異常などの致命的エラーを
まとめて扱うことができます。
"""
from typing import Optional


# @intent:responsibility 全ての例外の基底クラスです。
class Chip8Error(Exception):
    """
    retro_chip8が送出する例外の基底クラス。
    """
    pass


# @intent:responsibility どのパターンにも一致しない命令ワードを表します。
class DecodeError(Chip8Error):
    """
    命令ワードがどの命令にもデコードできなかったことを示します。
    """
    def __init__(self, word: int, address: Optional[int] = None):
        self.word = word
        self.address = address
        if address is None:
            message = f"Unknown opcode {word:04X}"
        else:
            message = f"Unknown opcode {word:04X} at {address:#05x}"
        super().__init__(message)


# @intent:responsibility マップ外アドレスへのアクセスを表します。
# @intent:rationale 既存の呼び出し側がIndexErrorで捕捉できるよう、IndexErrorも継承します。
class MemoryAccessError(Chip8Error, IndexError):
    pass


class StackError(Chip8Error):
    """
    コールスタックの異常（オーバーフロー/アンダーフロー）。
    """
    pass


class StackOverflowError(StackError):
    pass


class StackUnderflowError(StackError):
    pass


# @intent:responsibility プログラム領域に収まらないイメージのロードを表します。
class ProgramTooLargeError(Chip8Error, ValueError):
    pass


# @intent:responsibility 設定ファイルの書式・値の誤りを表します。
class ConfigError(Chip8Error, ValueError):
    pass
