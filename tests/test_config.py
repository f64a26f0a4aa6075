# tests/test_config.py
from __future__ import annotations

import dataclasses

import pytest

from textpager.config import ReaderConfig


def test_defaults():
    config = ReaderConfig()
    assert config.whole_file_threshold == 5_000_000
    assert config.sample_size == 256 * 1024
    assert config.target_page_bytes == 128 * 1024
    assert config.quality_threshold == 0.90
    assert config.cache_capacity == 10
    assert config.prefetch_radius == 2


def test_overrides():
    config = ReaderConfig(target_page_bytes=16, prefetch_radius=0)
    assert config.target_page_bytes == 16
    assert config.prefetch_radius == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"whole_file_threshold": 0},
        {"sample_size": -1},
        {"target_page_bytes": True},
        {"target_page_bytes": 1.5},
        {"quality_threshold": 1.5},
        {"quality_threshold": -0.1},
        {"cache_capacity": 0},
        {"prefetch_radius": -1},
    ],
)
def test_invalid_values_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError, match=next(iter(kwargs))):
        ReaderConfig(**kwargs)


def test_config_is_frozen():
    config = ReaderConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.sample_size = 1
