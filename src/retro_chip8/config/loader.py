# retro_chip8/config/loader.py
"""
YAML設定の読み込みと検証。
"""
import logging
from dataclasses import fields
from typing import Dict, Any, Optional

import yaml

from retro_chip8.core.errors import ConfigError
from retro_chip8.arch.chip8.constants import FONT_START, FONTSET
from .models import SystemConfig

# フォント領域の直後のアドレス。メモリとプログラム開始位置はこれ以上である必要があります。
FONT_END = FONT_START + len(FONTSET)

logger = logging.getLogger(__name__)

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            text = f.read()
        return self.load_from_string(text)

    def load_from_string(self, text: str) -> SystemConfig:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping.")
        return self._parse_config(data)

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        known = {f.name for f in fields(SystemConfig)}
        for key in data:
            if key not in known:
                logger.warning("Ignoring unknown configuration key '%s'", key)

        defaults = SystemConfig()
        config = SystemConfig(
            memory_size=self._parse_int(data.get("memory_size", defaults.memory_size)),
            program_start=self._parse_int(data.get("program_start", defaults.program_start)),
            stack_depth=self._parse_int(data.get("stack_depth", defaults.stack_depth)),
            cpu_hz=self._parse_int(data.get("cpu_hz", defaults.cpu_hz)),
            timer_hz=self._parse_int(data.get("timer_hz", defaults.timer_hz)),
            rng_seed=self._parse_optional_int(data.get("rng_seed")),
        )
        self._validate(config)
        return config

    # @intent:responsibility フォントを格納でき、プログラムがフォントを上書きしないメモリ配置であることを検証します。
    def _validate(self, config: SystemConfig) -> None:
        if config.memory_size < FONT_END:
            raise ConfigError(f"memory_size {config.memory_size:#x} cannot hold the font (needs {FONT_END:#x})")
        if not FONT_END <= config.program_start < config.memory_size:
            raise ConfigError(
                f"program_start {config.program_start:#x} must be in {FONT_END:#x}..{config.memory_size - 1:#x}"
            )
        if config.stack_depth <= 0:
            raise ConfigError(f"stack_depth must be positive: {config.stack_depth}")
        if config.cpu_hz <= 0 or config.timer_hz <= 0:
            raise ConfigError("cpu_hz and timer_hz must be positive")

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._parse_int(value)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer format: {value}")
