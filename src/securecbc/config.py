# -*- coding: utf-8 -*-
"""
RU: Параметры поддерживаемых семейств шифров (Blowfish, TripleDES) и общие константы.
EN: Parameters of the supported cipher families (Blowfish, TripleDES) and shared constants.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

# Both families use 64-bit blocks, so IV and block size coincide.
BLOCK_SIZE: Final[int] = 8
IV_SIZE: Final[int] = BLOCK_SIZE

TEXT_ENCODING: Final[str] = "utf-8"
DEFAULT_CHUNK_SIZE: Final[int] = 64 * 1024
MIN_MAC_KEY_SIZE: Final[int] = 16


class CipherFamily(str, Enum):
    """Supported block cipher families."""

    # Family A: variable key length (32..448 bits)
    BLOWFISH = "blowfish"

    # Family B: triple-length 192-bit key (DESede)
    TRIPLE_DES = "triple_des"


@dataclass(frozen=True)
class FamilyConfig:
    """
    Static parameters of one cipher family.

    Attributes:
        algorithm_name: Human-readable name used in logs and errors.
        min_key_size: Smallest accepted key, in bytes.
        max_key_size: Largest accepted key, in bytes.
        default_key_size: Size of generated keys, in bytes.
        block_size: Cipher block size in bytes.

    Examples:
        >>> cfg = FamilyConfig.from_family(CipherFamily.TRIPLE_DES)
        >>> cfg.default_key_size
        24

        >>> FamilyConfig.from_family(CipherFamily.BLOWFISH).accepts_key_size(3)
        False
    """

    algorithm_name: str
    min_key_size: int
    max_key_size: int
    default_key_size: int
    block_size: int = BLOCK_SIZE

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.min_key_size < 1 or self.min_key_size > self.max_key_size:
            raise ValueError("min_key_size must be in 1..max_key_size")
        if not self.accepts_key_size(self.default_key_size):
            raise ValueError("default_key_size must lie within the accepted range")
        if self.block_size != BLOCK_SIZE:
            raise ValueError("only 64-bit block ciphers are supported")

    @property
    def fixed_key_size(self) -> bool:
        return self.min_key_size == self.max_key_size

    def accepts_key_size(self, size: int) -> bool:
        return self.min_key_size <= size <= self.max_key_size

    def describe_key_size(self) -> str:
        """Short text for error messages, e.g. ``"24"`` or ``"4..56"``."""
        if self.fixed_key_size:
            return str(self.min_key_size)
        return f"{self.min_key_size}..{self.max_key_size}"

    @staticmethod
    def from_family(family: CipherFamily) -> "FamilyConfig":
        """
        Look up the configuration of a cipher family.

        Args:
            family: Cipher family selector.

        Returns:
            FamilyConfig instance.
        """
        return _FAMILY_PARAMS[CipherFamily(family)]


_FAMILY_PARAMS: Final[dict[CipherFamily, FamilyConfig]] = {
    # Blowfish: 128-bit generated keys, any 4..56 byte key accepted
    CipherFamily.BLOWFISH: FamilyConfig(
        algorithm_name="Blowfish-CBC",
        min_key_size=4,
        max_key_size=56,
        default_key_size=16,
    ),
    # DESede: three independent 64-bit DES keys (parity bits included)
    CipherFamily.TRIPLE_DES: FamilyConfig(
        algorithm_name="3DES-EDE3-CBC",
        min_key_size=24,
        max_key_size=24,
        default_key_size=24,
    ),
}


__all__ = [
    "BLOCK_SIZE",
    "IV_SIZE",
    "TEXT_ENCODING",
    "DEFAULT_CHUNK_SIZE",
    "MIN_MAC_KEY_SIZE",
    "CipherFamily",
    "FamilyConfig",
]
