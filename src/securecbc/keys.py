# -*- coding: utf-8 -*-
"""
RU: Генерация ключей Blowfish/TripleDES и обёртка внешних байтов ключа.

EN: Key management for the two supported cipher families.

- generate_key(family) draws a uniformly random key of the family's default
  size (Blowfish: 16 bytes, TripleDES: 24 bytes) from the shared secure
  random source.
- key_from_bytes(data, family) wraps caller-supplied bytes. Length is
  validated, strength is not: weak or degenerate keys (e.g. all zero) are
  accepted. A wrong length raises InvalidKeyLengthError and is never
  truncated or padded.

Key storage, rotation, distribution and zeroization are out of scope; a
CipherKey lives as long as the caller keeps a reference to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final, Union

from cryptography.hazmat.decrepit.ciphers.algorithms import Blowfish, TripleDES
from cryptography.hazmat.primitives.ciphers import BlockCipherAlgorithm

from securecbc.config import CipherFamily, FamilyConfig
from securecbc.exceptions import InvalidKeyError
from securecbc.random_source import generate_random_bytes
from securecbc.utils import ensure_bytes, validate_key_length

_LOGGER: Final = logging.getLogger(__name__)

KeyMaterial = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class CipherKey:
    """
    Immutable symmetric key bound to one cipher family.

    Attributes:
        material: raw key bytes (never shown in repr).
        family: cipher family the key belongs to.

    Raises:
        InvalidKeyLengthError: if ``material`` has the wrong size for ``family``.

    Example:
        >>> key = CipherKey(bytes(24), CipherFamily.TRIPLE_DES)
        >>> key.size
        24
    """

    material: bytes = field(repr=False)
    family: CipherFamily

    def __post_init__(self) -> None:
        object.__setattr__(self, "material", ensure_bytes(self.material, "key"))
        object.__setattr__(self, "family", CipherFamily(self.family))
        validate_key_length(self.material, self.config)

    @property
    def config(self) -> FamilyConfig:
        return FamilyConfig.from_family(self.family)

    @property
    def size(self) -> int:
        return len(self.material)

    def algorithm(self) -> BlockCipherAlgorithm:
        """Build the ``cryptography`` block cipher object for this key."""
        if self.family is CipherFamily.BLOWFISH:
            return Blowfish(self.material)
        return TripleDES(self.material)

    def __bytes__(self) -> bytes:
        return self.material


def generate_key(family: CipherFamily) -> CipherKey:
    """
    Generate a fresh random key for ``family``.

    Args:
        family: cipher family selector.

    Returns:
        CipherKey of the family's default size.

    Raises:
        EntropySourceError: if the secure random source fails (fatal).
    """
    config = FamilyConfig.from_family(family)
    key = CipherKey(generate_random_bytes(config.default_key_size), family)
    _LOGGER.debug("Generated %d-byte %s key", key.size, config.algorithm_name)
    return key


def key_from_bytes(data: KeyMaterial, family: CipherFamily) -> CipherKey:
    """
    Wrap externally supplied key bytes.

    Args:
        data: raw key bytes.
        family: cipher family the key is meant for.

    Returns:
        CipherKey wrapping a copy of ``data``.

    Raises:
        InvalidKeyLengthError: if the length does not fit ``family``.
        InvalidInputError: if ``data`` is not bytes-like.
    """
    return CipherKey(ensure_bytes(data, "key"), family)


def coerce_key(key: Union[CipherKey, KeyMaterial], family: CipherFamily) -> CipherKey:
    """
    Accept either a CipherKey or raw key bytes for ``family``.

    Raises:
        InvalidKeyError: if a CipherKey of another family is given.
        InvalidKeyLengthError: if raw bytes have the wrong length.
    """
    family = CipherFamily(family)
    if isinstance(key, CipherKey):
        if key.family is not family:
            raise InvalidKeyError(
                f"Key belongs to {key.config.algorithm_name}, "
                f"expected {FamilyConfig.from_family(family).algorithm_name}",
                algorithm=FamilyConfig.from_family(family).algorithm_name,
            )
        return key
    return key_from_bytes(key, family)


__all__ = [
    "CipherKey",
    "generate_key",
    "key_from_bytes",
    "coerce_key",
]
