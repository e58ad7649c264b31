# -*- coding: utf-8 -*-
"""
Tests for cipher family configuration.
"""
from __future__ import annotations

import pytest

from securecbc.config import (
    BLOCK_SIZE,
    IV_SIZE,
    TEXT_ENCODING,
    CipherFamily,
    FamilyConfig,
)


class TestCipherFamily:
    """Tests for CipherFamily enum."""

    def test_family_values(self) -> None:
        assert CipherFamily.BLOWFISH.value == "blowfish"
        assert CipherFamily.TRIPLE_DES.value == "triple_des"

    def test_family_count(self) -> None:
        assert len(CipherFamily) == 2

    def test_family_from_string(self) -> None:
        assert CipherFamily("triple_des") is CipherFamily.TRIPLE_DES


class TestFamilyConfig:
    """Tests for FamilyConfig lookup and validation."""

    def test_blowfish_params(self) -> None:
        cfg = FamilyConfig.from_family(CipherFamily.BLOWFISH)
        assert cfg.min_key_size == 4
        assert cfg.max_key_size == 56
        assert cfg.default_key_size == 16
        assert cfg.block_size == BLOCK_SIZE
        assert not cfg.fixed_key_size
        assert cfg.describe_key_size() == "4..56"

    def test_triple_des_params(self) -> None:
        cfg = FamilyConfig.from_family(CipherFamily.TRIPLE_DES)
        assert cfg.default_key_size == 24
        assert cfg.fixed_key_size
        assert cfg.describe_key_size() == "24"
        assert cfg.accepts_key_size(24)
        assert not cfg.accepts_key_size(16)

    def test_from_family_accepts_value_string(self) -> None:
        assert FamilyConfig.from_family("blowfish") is FamilyConfig.from_family(  # type: ignore[arg-type]
            CipherFamily.BLOWFISH
        )

    def test_config_is_frozen(self) -> None:
        cfg = FamilyConfig.from_family(CipherFamily.BLOWFISH)
        with pytest.raises(Exception):  # FrozenInstanceError
            cfg.default_key_size = 8  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_key_size": 0, "max_key_size": 8, "default_key_size": 8},
            {"min_key_size": 16, "max_key_size": 8, "default_key_size": 8},
            {"min_key_size": 4, "max_key_size": 8, "default_key_size": 16},
            {"min_key_size": 4, "max_key_size": 8, "default_key_size": 8, "block_size": 16},
        ],
    )
    def test_invalid_params_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            FamilyConfig(algorithm_name="X", **kwargs)


def test_shared_constants() -> None:
    assert IV_SIZE == BLOCK_SIZE == 8
    assert TEXT_ENCODING == "utf-8"
