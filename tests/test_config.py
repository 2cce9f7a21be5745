import json
from pathlib import Path

import pytest

from percepthash import ConfigError, HashConfig
from percepthash.config import check_hash_size


def test_default_preset_matches_dataclass_defaults():
    cfg = HashConfig.load_preset("default")
    assert cfg.to_dict() == HashConfig().to_dict()


@pytest.mark.parametrize("name, size", [("default", 8), ("fine", 16), ("coarse", 4)])
def test_presets_load_and_validate(name, size):
    cfg = HashConfig.load_preset(name).validate()
    assert cfg.hash_size == size


def test_missing_preset():
    with pytest.raises(ConfigError):
        HashConfig.load_preset("nope")


def test_from_dict_keeps_unknown_keys_in_extra():
    cfg = HashConfig.from_dict({"hash_size": 12, "note": "thumbs"})
    assert cfg.hash_size == 12
    assert cfg.extra == {"note": "thumbs"}


def test_save_json(tmp_path: Path):
    cfg = HashConfig(hash_size=16, max_hamming=20)
    p = tmp_path / "config.json"
    cfg.save_json(p)
    data = json.loads(p.read_text(encoding="utf-8"))
    assert data["hash_size"] == 16
    assert HashConfig.from_dict(data) == cfg


@pytest.mark.parametrize(
    "overrides",
    [
        {"hash_size": 1},
        {"hash_size": 0},
        {"hash_size": 8.0},
        {"hash_size": True},
        {"highfreq_factor": 0},
        {"wavelet_mode": "db4"},
        {"wavelet_scale": 3},
        {"grid_size": 0},
        {"segments": -1},
        {"segment_window": 1},
        {"max_hamming": -1},
        {"dhash_horizontal": "yes"},
    ],
)
def test_validate_rejects(overrides):
    with pytest.raises(ConfigError):
        HashConfig(**overrides).validate()


def test_check_hash_size_is_not_clamped():
    assert check_hash_size(2) == 2
    with pytest.raises(ConfigError, match="at least 2"):
        check_hash_size(1)
    # Configuration errors are also ValueErrors
    with pytest.raises(ValueError):
        check_hash_size(-3)
