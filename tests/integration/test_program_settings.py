# [TESTER] v1

from __future__ import annotations

from pathlib import Path

import pytest

from launchpool.core.errors import InvalidConfig
from launchpool.core.fees import SWAP_FEE_BPS
from launchpool.integration.config import ProgramSettings, apply_env_overrides, load_config_file, load_settings


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "launchpad.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults() -> None:
    s = load_settings(env={})
    assert s == ProgramSettings()
    assert s.swap_fee_bps == SWAP_FEE_BPS
    assert s.allocation_percents.creator == 30


def test_yaml_overrides(tmp_path: Path) -> None:
    path = _write(tmp_path, "swap_fee_bps: 10\ncreator_percent: 20\nsale_percent: 60\nliquidity_percent: 20\n")
    s = load_settings(path, env={})
    assert s.swap_fee_bps == 10
    assert (s.creator_percent, s.sale_percent, s.liquidity_percent) == (20, 60, 20)


def test_empty_yaml_is_defaults(tmp_path: Path) -> None:
    assert load_config_file(_write(tmp_path, "")) == {}


def test_unknown_key_rejected(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfig):
        load_config_file(_write(tmp_path, "swap_fee: 10\n"))


def test_non_mapping_rejected(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfig):
        load_config_file(_write(tmp_path, "- 1\n- 2\n"))


def test_invalid_split_wrapped(tmp_path: Path) -> None:
    path = _write(tmp_path, "creator_percent: 50\n")
    with pytest.raises(InvalidConfig):
        load_settings(path, env={})


def test_env_overrides_beat_file(tmp_path: Path) -> None:
    path = _write(tmp_path, "swap_fee_bps: 10\n")
    s = load_settings(path, env={"LAUNCHPAD_SWAP_FEE_BPS": "25"})
    assert s.swap_fee_bps == 25


def test_env_values_are_clamped() -> None:
    s = apply_env_overrides(ProgramSettings(), {"LAUNCHPAD_SWAP_FEE_BPS": "999999"})
    assert s.swap_fee_bps == 10_000


def test_env_garbage_keeps_current_value() -> None:
    s = apply_env_overrides(ProgramSettings(), {"LAUNCHPAD_TREASURY_SHARE_BPS": "lots"})
    assert s.treasury_share_bps == ProgramSettings().treasury_share_bps


def test_env_producing_invalid_settings() -> None:
    with pytest.raises(InvalidConfig):
        apply_env_overrides(ProgramSettings(), {"LAUNCHPAD_CREATOR_PERCENT": "90"})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"swap_fee_bps": 10_001},
        {"total_supply": 0},
        {"sqrt_price": 1, "min_sqrt_price": 2},
        {"default_target": True},
    ],
)
def test_settings_validation(kwargs: dict) -> None:
    with pytest.raises((TypeError, ValueError)):
        ProgramSettings(**kwargs)
