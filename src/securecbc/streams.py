# -*- coding: utf-8 -*-
"""
RU: Потоковое шифрование/расшифрование CBC без буферизации всего входа.

EN: Streaming CBC encryption and decryption.

encrypt_stream/decrypt_stream wrap a readable binary source in a CipherStream.
Nothing is read from the source until the CipherStream is read; each read
pulls the next chunk from the source, runs it through the padding and CBC
contexts and hands out the result. The IV for encryption is drawn before any
output exists and returned next to the stream.

CipherStream is single-pass: once drained it keeps returning b"" and cannot
be rewound. A padding or length failure at the end is raised again on every
later read. Closing a CipherStream closes its source. A stalled source stalls
the reader; there is no timeout.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO, Final, Iterator, Optional, Union

from cryptography.hazmat.primitives.ciphers import CipherContext

from securecbc.config import BLOCK_SIZE, DEFAULT_CHUNK_SIZE
from securecbc.exceptions import InvalidInputError, PaddingOrLengthError
from securecbc.keys import CipherKey
from securecbc.random_source import generate_iv
from securecbc.symmetric import (
    new_decryptor,
    new_encryptor,
    new_padder,
    new_unpadder,
)
from securecbc.utils import BytesLike, ensure_bytes

_LOGGER: Final = logging.getLogger(__name__)


class CipherStream(io.RawIOBase):
    """
    Readable stream that transforms ``source`` lazily through a cipher.

    Args:
        source: readable binary stream providing the input.
        transform: CBC encryptor or decryptor context.
        encrypting: True to pad before encrypting, False to unpad after decrypting.
        algorithm: algorithm name for logs and errors.
        chunk_size: number of bytes requested from ``source`` per pull.
    """

    def __init__(
        self,
        source: BinaryIO,
        transform: CipherContext,
        *,
        encrypting: bool,
        algorithm: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        super().__init__()
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._source = source
        self._transform = transform
        self._encrypting = encrypting
        self._padding = new_padder() if encrypting else new_unpadder()
        self._algorithm = algorithm
        self._chunk_size = chunk_size
        self._pending = bytearray()
        self._eof = False
        self._error: Optional[PaddingOrLengthError] = None
        self._consumed = 0

    def readable(self) -> bool:
        return True

    def close(self) -> None:
        """Close this stream and the source it reads from."""
        if self.closed:
            return
        source = getattr(self, "_source", None)
        try:
            if source is not None:
                source.close()
        finally:
            super().close()

    def readinto(self, buffer: Union[bytearray, memoryview]) -> int:
        if self._error is not None:
            raise self._error
        view = memoryview(buffer).cast("B")
        while not self._pending and not self._eof:
            self._pull()
        n = min(len(view), len(self._pending))
        view[:n] = self._pending[:n]
        del self._pending[:n]
        return n

    def _pull(self) -> None:
        chunk = self._source.read(self._chunk_size)
        if chunk:
            self._consumed += len(chunk)
            if self._encrypting:
                self._pending += self._transform.update(self._padding.update(chunk))
            else:
                self._pending += self._padding.update(self._transform.update(chunk))
            return

        self._eof = True
        if self._encrypting:
            self._pending += self._transform.update(self._padding.finalize())
            self._pending += self._transform.finalize()
        else:
            try:
                self._pending += self._finish_decryption()
            except PaddingOrLengthError as exc:
                self._error = exc
                raise
        _LOGGER.debug(
            "%s stream finished after %d input bytes", self._algorithm, self._consumed
        )

    def _finish_decryption(self) -> bytes:
        try:
            tail = self._transform.finalize()
        except ValueError as exc:
            _LOGGER.warning(
                "%s stream ciphertext length is not block aligned", self._algorithm
            )
            raise PaddingOrLengthError(
                f"Ciphertext length must be a multiple of {BLOCK_SIZE} bytes",
                algorithm=self._algorithm,
                context={"ciphertext_size": self._consumed},
            ) from exc
        try:
            return self._padding.update(tail) + self._padding.finalize()
        except ValueError as exc:
            _LOGGER.warning("%s stream padding check failed", self._algorithm)
            raise PaddingOrLengthError(
                "Invalid padding after decryption", algorithm=self._algorithm
            ) from exc


@dataclass(frozen=True)
class StreamEncryptionResult:
    """
    Lazily encrypted stream together with its IV.

    The IV exists before the first byte of ciphertext is read.
    """

    stream: CipherStream
    iv: bytes

    def __iter__(self) -> Iterator[Union[CipherStream, bytes]]:
        return iter((self.stream, self.iv))


def _check_source(source: object) -> None:
    if not callable(getattr(source, "read", None)):
        raise InvalidInputError(
            f"source must be a readable binary stream, got {type(source).__name__}"
        )


def encrypt_stream(
    source: BinaryIO,
    key: CipherKey,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> StreamEncryptionResult:
    """
    Encrypt a readable stream lazily under a fresh IV.

    Args:
        source: readable binary stream with the plaintext.
        key: Blowfish or TripleDES key.
        chunk_size: bytes pulled from ``source`` per read.

    Returns:
        StreamEncryptionResult(stream, iv).
    """
    _check_source(source)
    iv = generate_iv()
    stream = CipherStream(
        source,
        new_encryptor(key, iv),
        encrypting=True,
        algorithm=key.config.algorithm_name,
        chunk_size=chunk_size,
    )
    return StreamEncryptionResult(stream=stream, iv=iv)


def decrypt_stream(
    source: BinaryIO,
    key: CipherKey,
    iv: BytesLike,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> CipherStream:
    """
    Decrypt a readable stream lazily.

    Raises:
        InvalidIVLengthError: immediately, if ``iv`` is not 8 bytes.
        PaddingOrLengthError: while reading the end of the stream, on
            misaligned ciphertext or invalid padding.
    """
    _check_source(source)
    return CipherStream(
        source,
        new_decryptor(key, ensure_bytes(iv, "iv")),
        encrypting=False,
        algorithm=key.config.algorithm_name,
        chunk_size=chunk_size,
    )


__all__ = [
    "CipherStream",
    "StreamEncryptionResult",
    "encrypt_stream",
    "decrypt_stream",
]
