# -*- coding: utf-8 -*-
from __future__ import annotations

import dataclasses
import os

import pytest

from securecbc.authenticated import TAG_LEN, SealedMessage, open_sealed, seal
from securecbc.config import CipherFamily
from securecbc.exceptions import IntegrityError, InvalidKeyLengthError
from securecbc.keys import CipherKey, generate_key, key_from_bytes


@pytest.fixture(params=[CipherFamily.BLOWFISH, CipherFamily.TRIPLE_DES], ids=lambda f: f.value)
def key(request: pytest.FixtureRequest) -> CipherKey:
    return generate_key(request.param)


@pytest.fixture
def mac_key() -> bytes:
    return os.urandom(32)


def test_roundtrip(key: CipherKey, mac_key: bytes) -> None:
    message = seal(b"authenticated payload", key, mac_key)
    assert len(message.tag) == TAG_LEN
    assert len(message.iv) == 8
    assert open_sealed(message, key, mac_key) == b"authenticated payload"


def test_fresh_iv_per_seal(key: CipherKey, mac_key: bytes) -> None:
    ivs = {seal(b"same", key, mac_key).iv for _ in range(100)}
    assert len(ivs) == 100


def test_tampered_ciphertext_detected(key: CipherKey, mac_key: bytes) -> None:
    message = seal(b"do not touch", key, mac_key)
    ct = bytearray(message.ciphertext)
    ct[0] ^= 0x01
    with pytest.raises(IntegrityError):
        open_sealed(dataclasses.replace(message, ciphertext=bytes(ct)), key, mac_key)


def test_wrong_iv_detected(key: CipherKey, mac_key: bytes) -> None:
    message = seal(b"payload", key, mac_key)
    with pytest.raises(IntegrityError):
        open_sealed(dataclasses.replace(message, iv=bytes(8)), key, mac_key)


def test_wrong_mac_key_detected(key: CipherKey, mac_key: bytes) -> None:
    message = seal(b"payload", key, mac_key)
    with pytest.raises(IntegrityError):
        open_sealed(message, key, os.urandom(32))


def test_truncated_tag_detected(key: CipherKey, mac_key: bytes) -> None:
    message = seal(b"payload", key, mac_key)
    with pytest.raises(IntegrityError):
        open_sealed(dataclasses.replace(message, tag=message.tag[:16]), key, mac_key)


def test_family_is_bound_into_tag(mac_key: bytes) -> None:
    material = b"\x07" * 24
    blowfish = key_from_bytes(material, CipherFamily.BLOWFISH)
    triple_des = key_from_bytes(material, CipherFamily.TRIPLE_DES)
    message = seal(b"payload", blowfish, mac_key)
    with pytest.raises(IntegrityError):
        open_sealed(message, triple_des, mac_key)


def test_short_mac_key_rejected(key: CipherKey) -> None:
    with pytest.raises(InvalidKeyLengthError):
        seal(b"payload", key, b"short")
    with pytest.raises(InvalidKeyLengthError):
        open_sealed(SealedMessage(b"", bytes(8), bytes(TAG_LEN)), key, b"short")


@pytest.mark.parametrize("size", [0, 16, TAG_LEN - 1, TAG_LEN + 1])
def test_tag_length_checked_before_verify(key: CipherKey, mac_key: bytes, size: int) -> None:
    message = seal(b"payload", key, mac_key)
    tag = (message.tag * 2)[:size]
    with pytest.raises(IntegrityError, match=f"Tag must be {TAG_LEN} bytes") as ei:
        open_sealed(dataclasses.replace(message, tag=tag), key, mac_key)
    assert ei.value.context == {"expected_tag_size": TAG_LEN, "actual_tag_size": size}
