# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令の実行結果（デコードされた命令、CPU状態、バスアクセス）を
記録する不変のデータ構造を定義します。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccessType, BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "8124"
    mnemonic: str # 例: "ADD"
    operands: List[str] = field(default_factory=list) # 例: ["V1", "V2"]
    operand_values: List[int] = field(default_factory=list) # デコード済みのオペランド値
    cycle_count: int = 0 # 命令実行に必要なサイクル数
    length: int = 1 # 命令のバイト長
    kind: Optional[Enum] = None # アーキテクチャ固有の命令種別（実行テーブルのキー）

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計サイクル数、表示用の命令文字列）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "DRW V0, V1, 5"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1命令実行後のCPU状態と、その命令で発生したバスアクセスを記録したデータ構造。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)

    # @intent:rationale stateは生きたCPU状態への参照です。後から比較する場合、呼び出し側でコピーを取ります。

    # @intent:responsibility このステップで書き込まれたアドレスの一覧を返します。
    def written_addresses(self) -> List[int]:
        return [a.address for a in self.bus_activity if a.access_type == BusAccessType.WRITE]
