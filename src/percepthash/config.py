from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import json
import yaml

from .errors import ConfigError

SUPPORTED_WAVELET_MODES = ("haar",)


def check_hash_size(hash_size: int) -> int:
    if isinstance(hash_size, bool) or not isinstance(hash_size, int):
        raise ConfigError(f"hash_size must be an integer, got {hash_size!r}")
    if hash_size < 2:
        raise ConfigError(f"hash_size must be at least 2, got {hash_size}")
    return hash_size


def check_positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ConfigError(f"{name} must be >= 1, got {value}")
    return value


def check_window(window: int) -> int:
    check_positive("window", window)
    if window < 2:
        raise ConfigError(f"window must be at least 2 pixels, got {window}")
    return window


def check_power_of_two(name: str, value: int) -> int:
    check_positive(name, value)
    if value & (value - 1):
        raise ConfigError(f"{name} must be a power of two, got {value}")
    return value


def check_wavelet_mode(mode: str) -> str:
    if mode not in SUPPORTED_WAVELET_MODES:
        raise ConfigError(
            f"Unsupported wavelet mode: {mode!r} (supported: {', '.join(SUPPORTED_WAVELET_MODES)})"
        )
    return mode


@dataclass
class HashConfig:
    # Shared
    hash_size: int = 8

    # pHash
    highfreq_factor: int = 4

    # wHash
    wavelet_mode: str = "haar"
    wavelet_scale: int = 4  # power of two

    # dHash
    dhash_horizontal: bool = True

    # Crop-resistant
    grid_size: int = 2
    segments: int = 4
    segment_window: int = 16
    segment_work_width: int = 512

    # Comparison
    max_hamming: int = 10

    extra: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def presets_dir() -> Path:
        return Path(__file__).parent / "presets"

    @classmethod
    def load_preset(cls, name: str) -> "HashConfig":
        p = cls.presets_dir() / f"{name}.yaml"
        if not p.exists():
            raise ConfigError(f"Preset not found: {name} ({p})")
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ConfigError("Preset YAML must be a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HashConfig":
        # Allow unknown keys in extra
        known = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        base = {k: v for k, v in d.items() if k in known and k != "extra"}
        extra = {k: v for k, v in d.items() if k not in known}
        cfg = cls(**base)  # type: ignore[arg-type]
        cfg.extra.update(d.get("extra") or {})
        cfg.extra.update(extra)
        return cfg

    def to_dict(self) -> Dict[str, Any]:
        d = {k: getattr(self, k) for k in self.__dataclass_fields__.keys()}  # type: ignore[attr-defined]
        d["extra"] = dict(self.extra)
        return d

    def save_json(self, path: Path) -> None:
        path = Path(path)
        path.write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")

    def validate(self) -> "HashConfig":
        """Raise ConfigError on the first invalid field; returns self."""
        check_hash_size(self.hash_size)
        check_positive("highfreq_factor", self.highfreq_factor)
        check_wavelet_mode(self.wavelet_mode)
        check_power_of_two("wavelet_scale", self.wavelet_scale)
        if not isinstance(self.dhash_horizontal, bool):
            raise ConfigError(f"dhash_horizontal must be a bool, got {self.dhash_horizontal!r}")
        check_positive("grid_size", self.grid_size)
        check_positive("segments", self.segments)
        check_window(self.segment_window)
        check_positive("segment_work_width", self.segment_work_width)
        if isinstance(self.max_hamming, bool) or not isinstance(self.max_hamming, int) or self.max_hamming < 0:
            raise ConfigError(f"max_hamming must be a non-negative integer, got {self.max_hamming!r}")
        return self
