# -*- coding: utf-8 -*-
from __future__ import annotations

import io

import pytest

from securecbc import utils as U
from securecbc.config import CipherFamily, FamilyConfig
from securecbc.exceptions import (
    InvalidInputError,
    InvalidIVLengthError,
    InvalidKeyLengthError,
)


def test_b64_roundtrip_and_ascii() -> None:
    data = bytes(range(256))
    text = U.b64_encode(data)
    assert isinstance(text, str) and "\n" not in text
    assert U.b64_decode(text) == data


def test_b64_decode_rejects_garbage() -> None:
    with pytest.raises(InvalidInputError):
        U.b64_decode("not base64!!")
    with pytest.raises(InvalidInputError):
        U.b64_decode("ключ")
    with pytest.raises(InvalidInputError, match="iv must be base64 text"):
        U.b64_decode(b"AAAA", "iv")  # type: ignore[arg-type]


@pytest.mark.parametrize("chunk_size", [1, 7, 8, 1024])
def test_read_whole_stream(chunk_size: int) -> None:
    data = bytes(range(200)) * 5
    assert U.read_whole_stream(io.BytesIO(data), chunk_size) == data


def test_read_whole_stream_empty_and_bad_chunk() -> None:
    assert U.read_whole_stream(io.BytesIO(b"")) == b""
    with pytest.raises(ValueError):
        U.read_whole_stream(io.BytesIO(b"x"), 0)


def test_validate_key_length() -> None:
    tdes = FamilyConfig.from_family(CipherFamily.TRIPLE_DES)
    U.validate_key_length(b"k" * 24, tdes)
    with pytest.raises(InvalidKeyLengthError):
        U.validate_key_length(b"k" * 16, tdes)

    bf = FamilyConfig.from_family(CipherFamily.BLOWFISH)
    for ok in (4, 16, 56):
        U.validate_key_length(b"k" * ok, bf)
    for bad in (0, 3, 57):
        with pytest.raises(InvalidKeyLengthError):
            U.validate_key_length(b"k" * bad, bf)


def test_validate_iv_length() -> None:
    U.validate_iv_length(b"\x00" * 8, "Blowfish-CBC")
    with pytest.raises(InvalidIVLengthError) as ei:
        U.validate_iv_length(b"\x00" * 16, "Blowfish-CBC")
    assert ei.value.actual_size == 16
    assert ei.value.expected_size == 8


def test_ensure_bytes() -> None:
    assert U.ensure_bytes(bytearray(b"ab")) == b"ab"
    assert U.ensure_bytes(memoryview(b"cd")) == b"cd"
    with pytest.raises(InvalidInputError):
        U.ensure_bytes("text", "plaintext")
