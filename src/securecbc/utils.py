# -*- coding: utf-8 -*-
"""
RU: Вспомогательные функции: кодеки Base64, чтение потока целиком,
проверки длины ключей и IV.
"""
from __future__ import annotations

import base64
import binascii
import logging
from typing import BinaryIO, Final, Union

from securecbc.config import DEFAULT_CHUNK_SIZE, IV_SIZE, FamilyConfig
from securecbc.exceptions import (
    InvalidInputError,
    InvalidIVLengthError,
    InvalidKeyLengthError,
)

_LOGGER: Final = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


def b64_encode(data: bytes) -> str:
    """
    Encode bytes to base64 ASCII string.

    Args:
        data: bytes to encode.

    Returns:
        Base64 string (no newlines).
    """
    return base64.b64encode(bytes(data)).decode("ascii")


def b64_decode(text: str, name: str = "data") -> bytes:
    """
    Decode base64 ASCII string to bytes.

    Args:
        text: base64 string.
        name: value name for error messages.

    Returns:
        Decoded bytes.

    Raises:
        InvalidInputError: on non-string input or invalid base64.
    """
    if not isinstance(text, str):
        raise InvalidInputError(
            f"{name} must be base64 text, got {type(text).__name__}"
        )
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise InvalidInputError(f"{name} is not valid base64") from exc


def read_whole_stream(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """
    Drain a readable binary stream into a single buffer.

    Args:
        stream: object with a ``read(size)`` method returning bytes.
        chunk_size: read size per call.

    Returns:
        Everything the stream produced until EOF.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    parts = []
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        parts.append(bytes(chunk))
    data = b"".join(parts)
    _LOGGER.debug("Drained %d bytes from stream", len(data))
    return data


def validate_key_length(key: BytesLike, config: FamilyConfig) -> None:
    """
    Validate key length for a cipher family.

    Raises:
        InvalidKeyLengthError: if length is outside the family's accepted range.
    """
    if not config.accepts_key_size(len(key)):
        raise InvalidKeyLengthError(
            config.algorithm_name, config.describe_key_size(), len(key)
        )


def validate_iv_length(iv: BytesLike, algorithm: str) -> None:
    """
    Validate IV length (block size of both families).

    Raises:
        InvalidIVLengthError: if the IV is not exactly 8 bytes.
    """
    if len(iv) != IV_SIZE:
        raise InvalidIVLengthError(
            f"{algorithm} requires a {IV_SIZE}-byte IV",
            algorithm=algorithm,
            expected_size=IV_SIZE,
            actual_size=len(iv),
        )


def ensure_bytes(data: object, name: str = "data") -> bytes:
    """
    Coerce a bytes-like value to ``bytes``.

    Raises:
        InvalidInputError: if ``data`` is not bytes-like.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidInputError(f"{name} must be bytes, got {type(data).__name__}")
    return bytes(data)


__all__ = [
    "b64_encode",
    "b64_decode",
    "read_whole_stream",
    "validate_key_length",
    "validate_iv_length",
    "ensure_bytes",
]
