# -*- coding: utf-8 -*-
from __future__ import annotations

import io
from typing import Callable, Tuple

import pytest

from securecbc import helpers as H
from securecbc.config import CipherFamily
from securecbc.exceptions import InvalidInputError, InvalidKeyError, InvalidKeyLengthError
from securecbc.keys import generate_key
from securecbc.symmetric import EncryptionResult, TextEncryptionResult
from securecbc.utils import b64_decode, read_whole_stream

Api = Tuple[Callable, Callable, Callable]

BLOWFISH_API: Api = (H.make_blowfish_key, H.blowfish_encrypt, H.blowfish_decrypt)
TRIPLE_DES_API: Api = (H.make_triple_des_key, H.triple_des_encrypt, H.triple_des_decrypt)


@pytest.mark.parametrize("api", [BLOWFISH_API, TRIPLE_DES_API], ids=["blowfish", "3des"])
def test_hello_world_with_raw_key(api: Api) -> None:
    make_key, encrypt, decrypt = api
    key = make_key()
    assert isinstance(key, bytes)

    encrypted, iv = encrypt("hello world", key)
    encrypted2, iv2 = encrypt("hello world", key)

    assert encrypted != "hello world"
    assert encrypted2 != "hello world"
    # same plaintext must not give the same ciphertext
    assert encrypted != encrypted2
    assert iv != iv2
    # wrong IV must not decrypt
    assert decrypt(b64_decode(encrypted), key, bytes(8)) != b"hello world"
    assert decrypt(b64_decode(encrypted2), key, bytes(8)) != b"hello world"
    assert decrypt(encrypted, key, iv2) != "hello world"
    assert decrypt(encrypted2, key, iv) != "hello world"
    # matching IV decrypts
    assert decrypt(encrypted, key, iv) == "hello world"
    assert decrypt(encrypted2, key, iv2) == "hello world"


def test_key_sizes() -> None:
    assert len(H.make_blowfish_key()) == 16
    assert len(H.make_triple_des_key()) == 24
    assert H.blowfish_key_from_bytes(b"\x00" * 8).family is CipherFamily.BLOWFISH
    assert H.triple_des_key_from_bytes(b"\x00" * 24).family is CipherFamily.TRIPLE_DES
    with pytest.raises(InvalidKeyLengthError):
        H.triple_des_key_from_bytes(b"\x00" * 16)


def test_type_dispatch() -> None:
    key = H.make_triple_des_key()
    assert isinstance(H.triple_des_encrypt("text", key), TextEncryptionResult)
    result = H.triple_des_encrypt(b"bytes", key)
    assert isinstance(result, EncryptionResult)
    assert H.triple_des_decrypt(result.ciphertext, key, result.iv) == b"bytes"


def test_accepts_cipher_key_objects() -> None:
    key = generate_key(CipherFamily.BLOWFISH)
    ct, iv = H.blowfish_encrypt(b"obj", key)
    assert H.blowfish_decrypt(ct, key.material, iv) == b"obj"


def test_rejects_key_of_other_family() -> None:
    with pytest.raises(InvalidKeyError):
        H.blowfish_encrypt(b"x", generate_key(CipherFamily.TRIPLE_DES))


def test_rejects_mixed_text_and_bytes() -> None:
    key = H.make_blowfish_key()
    ct, iv = H.blowfish_encrypt("hello", key)
    with pytest.raises(InvalidInputError):
        H.blowfish_decrypt(ct, key, b64_decode(iv))
    with pytest.raises(InvalidInputError):
        H.blowfish_decrypt(b64_decode(ct), key, iv)


@pytest.mark.parametrize(
    "encrypt_stream, decrypt_stream, make_key",
    [
        (H.blowfish_encrypt_stream, H.blowfish_decrypt_stream, H.make_blowfish_key),
        (H.triple_des_encrypt_stream, H.triple_des_decrypt_stream, H.make_triple_des_key),
    ],
    ids=["blowfish", "3des"],
)
def test_stream_helpers(
    encrypt_stream: Callable, decrypt_stream: Callable, make_key: Callable
) -> None:
    key = make_key()
    data = b"streamed " * 1000
    stream, iv = encrypt_stream(io.BytesIO(data), key)
    ciphertext = read_whole_stream(stream)
    assert read_whole_stream(decrypt_stream(io.BytesIO(ciphertext), key, iv)) == data
